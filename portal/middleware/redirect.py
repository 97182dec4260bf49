"""Legacy host redirect."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp


def canonical_url(canonical_host: str, path: str, query: str) -> str:
    """Absolute https URL on the canonical host, path and query preserved."""
    url = f"https://{canonical_host}{path or '/'}"
    return f"{url}?{query}" if query else url


class LegacyHostRedirectMiddleware(BaseHTTPMiddleware):
    """301 any request whose Host contains the legacy domain to the canonical domain."""

    def __init__(self, app: ASGIApp, legacy_host: str, canonical_host: str) -> None:
        super().__init__(app)
        self.legacy_host = legacy_host.lower()
        self.canonical_host = canonical_host

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        host = request.headers.get("host", "").lower()
        if self.legacy_host and self.legacy_host in host:
            target = canonical_url(self.canonical_host, request.url.path, request.url.query)
            return RedirectResponse(target, status_code=301)
        return await call_next(request)
