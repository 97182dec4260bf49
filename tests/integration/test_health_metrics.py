"""Integration tests for /health, /healthz and /metrics endpoints."""

from typing import Any
from unittest.mock import MagicMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from portal.api.routes.health import check_upstream
from portal.config import Settings
from portal.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Test /health and /healthz endpoints."""

    def test_health_always_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @patch("portal.api.routes.health.check_upstream")
    def test_healthz_returns_200_when_upstream_ok(
        self, mock_check_upstream: MagicMock, client: TestClient
    ) -> None:
        """Test /healthz returns 200 when the pricing API answers."""
        mock_check_upstream.return_value = (True, "ok")

        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"]["upstream_api"] == "ok"

    @patch("portal.api.routes.health.check_upstream")
    def test_healthz_returns_503_when_upstream_fails(
        self, mock_check_upstream: MagicMock, client: TestClient
    ) -> None:
        """Test /healthz returns 503 when the pricing API is unreachable."""
        mock_check_upstream.return_value = (False, "error: ConnectTimeout")

        response = client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["upstream_api"] == "error: ConnectTimeout"


def _mock_upstream(status_code: int) -> Any:
    """Patch the upstream check's AsyncClient onto a mock transport answering ``status_code``."""
    real_client = httpx.AsyncClient
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code))

    def factory(**kwargs: Any) -> httpx.AsyncClient:
        return real_client(transport=transport, **kwargs)

    return patch("portal.api.routes.health.httpx.AsyncClient", factory)


class TestUpstreamCheck:
    """Test the upstream check itself against a mock transport."""

    @pytest.mark.asyncio
    async def test_disabled_check_is_ok(self) -> None:
        settings = Settings(enable_upstream_healthcheck=False)

        assert await check_upstream(settings) == (True, "disabled")

    @pytest.mark.asyncio
    async def test_client_errors_count_as_reachable(self, settings: Settings) -> None:
        """Test a 4xx still proves the API is up."""
        with _mock_upstream(401):
            assert await check_upstream(settings) == (True, "ok")

    @pytest.mark.asyncio
    async def test_server_error_is_degraded(self, settings: Settings) -> None:
        with _mock_upstream(502):
            assert await check_upstream(settings) == (False, "error: status 502")


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_returns_prometheus_format(self, client: TestClient) -> None:
        """Test /metrics returns Prometheus text format."""
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]

    def test_metrics_includes_upstream_and_booking_metrics(self, client: TestClient) -> None:
        """Test /metrics includes the API call and booking counters."""
        from portal.utils.metrics import PrometheusApiMetrics

        metrics = PrometheusApiMetrics()
        metrics.record_latency("quotes.compare", "success", 120)
        metrics.inc_error("quotes.compare", "500")
        metrics.inc_booking("success", "card")

        response = client.get("/metrics")

        assert response.status_code == 200
        text = response.text
        assert "upstream_latency_ms" in text
        assert "upstream_errors_total" in text
        assert "booking_submissions_total" in text


class TestRootEndpoint:
    """Test root endpoint."""

    def test_root_returns_site_info(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "The Dorset Transfer Company"
        assert data["site"] == "https://dorsettransfercompany.co.uk"
