"""Base HTTP client for the remote pricing/booking API.

All business logic lives behind this boundary. The client assumes JSON
bodies and an ``error`` field on failure; it never retries.
"""

import time
from types import TracebackType
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from portal.config import Settings, get_settings
from portal.utils.logging import RequestTrace, StructuredApiLogger
from portal.utils.metrics import PrometheusApiMetrics

M = TypeVar("M", bound=BaseModel)

GENERIC_ERROR = "Request failed"


class ApiError(Exception):
    """Remote API call failed (network error or non-success response)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def extract_error_message(response: httpx.Response, fallback: str) -> str:
    """Pull the user-facing message out of an error response.

    Accepts ``{"error": "..."}``, ``{"error": {"message": "..."}}`` and
    ``{"message": "..."}``; anything else yields the fallback.
    """
    try:
        data = response.json()
    except ValueError:
        return fallback

    if not isinstance(data, dict):
        return fallback

    error = data.get("error")
    if isinstance(error, str) and error.strip():
        return error
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return message

    message = data.get("message")
    if isinstance(message, str) and message.strip():
        return message

    return fallback


def parse_response(model: type[M], data: Any, fallback_error: str) -> M:
    """Validate a response body; a malformed payload is rejected whole."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ApiError(fallback_error) from e


class PortalApiClient:
    """Thin wrapper over ``httpx.Client`` with tenant headers, auth, logging and metrics."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.Client | None = None,
        auth_token: str | None = None,
    ) -> None:
        """Initialize client.

        Args:
            settings: Settings (defaults to cached environment settings)
            http_client: Optional httpx client (for testing with mock transports)
            auth_token: Corporate session token, sent as a bearer token
        """
        self.settings = settings or get_settings()
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self.settings.api_timeout_seconds)
        self._auth_token = auth_token
        self._log = StructuredApiLogger()
        self._metrics = PrometheusApiMetrics()

    @property
    def base_url(self) -> str:
        return self.settings.api_base_url.rstrip("/")

    @property
    def auth_token(self) -> str | None:
        return self._auth_token

    def set_auth_token(self, token: str | None) -> None:
        self._auth_token = token

    def clear_auth_token(self) -> None:
        self._auth_token = None

    def _headers(self, authenticated: bool) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-Tenant-Id": self.settings.tenant_id,
        }
        if authenticated and self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        name: str,
        fallback_error: str = GENERIC_ERROR,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        authenticated: bool = False,
    ) -> dict[str, Any]:
        """Perform one API call and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Endpoint path (appended to the base URL)
            name: Stable endpoint name for logs and metric labels
            fallback_error: Message used when the server provides none
            json: Optional JSON body
            params: Optional query parameters
            authenticated: Attach the corporate session token

        Returns:
            Decoded JSON object (empty dict for empty bodies)

        Raises:
            ApiError: On network failure or non-success status
        """
        trace = RequestTrace(method=method, endpoint=name, tenant_id=self.settings.tenant_id)
        start = time.perf_counter()

        try:
            response = self._http.request(
                method,
                f"{self.base_url}{path}",
                json=json,
                params=params,
                headers=self._headers(authenticated),
            )
        except httpx.HTTPError as e:
            latency_ms = (time.perf_counter() - start) * 1000
            self._log.log_call(trace, "network_error", latency_ms, error_reason=type(e).__name__)
            self._metrics.record_latency(name, "network_error", latency_ms)
            self._metrics.inc_error(name, type(e).__name__)
            raise ApiError(fallback_error) from e

        latency_ms = (time.perf_counter() - start) * 1000

        if response.is_error:
            message = extract_error_message(response, fallback_error)
            self._log.log_call(
                trace, "http_error", latency_ms, status_code=response.status_code, error_reason=message
            )
            self._metrics.record_latency(name, "http_error", latency_ms)
            self._metrics.inc_error(name, str(response.status_code))
            raise ApiError(message, status_code=response.status_code)

        self._log.log_call(trace, "success", latency_ms, status_code=response.status_code)
        self._metrics.record_latency(name, "success", latency_ms)

        if not response.content:
            return {}

        try:
            data = response.json()
        except ValueError as e:
            self._metrics.inc_error(name, "invalid_json")
            raise ApiError(fallback_error, status_code=response.status_code) from e

        if not isinstance(data, dict):
            self._metrics.inc_error(name, "invalid_json")
            raise ApiError(fallback_error, status_code=response.status_code)

        result: dict[str, Any] = data
        return result

    def put_external(self, url: str, content: bytes, content_type: str, *, name: str) -> None:
        """PUT raw bytes to an absolute (pre-signed) URL without API headers."""
        start = time.perf_counter()
        try:
            response = self._http.put(url, content=content, headers={"Content-Type": content_type})
        except httpx.HTTPError as e:
            self._metrics.inc_error(name, type(e).__name__)
            raise ApiError("Upload failed") from e

        self._metrics.record_latency(
            name, "http_error" if response.is_error else "success", (time.perf_counter() - start) * 1000
        )
        if response.is_error:
            self._metrics.inc_error(name, str(response.status_code))
            raise ApiError("Upload failed", status_code=response.status_code)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "PortalApiClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
