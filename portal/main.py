"""Edge application: legacy host redirect, health and metrics."""

from fastapi import FastAPI

from portal.api.routes.health import router as health_router
from portal.api.routes.metrics import router as metrics_router
from portal.config import get_settings
from portal.middleware.redirect import LegacyHostRedirectMiddleware
from portal.utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title=f"{settings.site_name} Edge", version="0.1.0")

app.add_middleware(
    LegacyHostRedirectMiddleware,
    legacy_host=settings.legacy_host,
    canonical_host=settings.canonical_host,
)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": settings.site_name, "site": settings.site_url}
