"""Integration tests for the legacy host redirect."""

import pytest
from fastapi.testclient import TestClient

from portal.main import app
from portal.middleware.redirect import canonical_url

LEGACY = "dorsettransfercompany.flowency.build"
CANONICAL = "dorsettransfercompany.opstack.uk"


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_legacy_host_redirects_permanently(client: TestClient) -> None:
    """Test path and query survive the redirect."""
    response = client.get(
        "/quote/Q-9?token=share-tok", headers={"host": LEGACY}, follow_redirects=False
    )

    assert response.status_code == 301
    assert response.headers["location"] == f"https://{CANONICAL}/quote/Q-9?token=share-tok"


def test_legacy_subdomain_and_port_redirect(client: TestClient) -> None:
    response = client.get("/", headers={"host": f"www.{LEGACY}:443"}, follow_redirects=False)

    assert response.status_code == 301
    assert response.headers["location"] == f"https://{CANONICAL}/"


def test_canonical_host_passes_through(client: TestClient) -> None:
    response = client.get("/health", headers={"host": CANONICAL})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_canonical_url() -> None:
    assert canonical_url(CANONICAL, "", "") == f"https://{CANONICAL}/"
    assert canonical_url(CANONICAL, "/manage", "id=DTC-1") == f"https://{CANONICAL}/manage?id=DTC-1"
