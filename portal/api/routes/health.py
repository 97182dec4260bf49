"""Health check endpoints.

- /health: process is up
- /healthz: upstream pricing API reachability, 503 when degraded
"""

import json
from typing import Any

import httpx
from fastapi import APIRouter, Response

from portal.client import endpoints
from portal.config import Settings, get_settings

router = APIRouter()


async def check_upstream(settings: Settings) -> tuple[bool, str]:
    """Check the remote API answers at all.

    Any non-5xx status counts as reachable.

    Returns:
        (is_ok, status_message)
    """
    if not settings.enable_upstream_healthcheck:
        return (True, "disabled")

    url = f"{settings.api_base_url.rstrip('/')}{endpoints.VEHICLE_TYPES}"
    try:
        async with httpx.AsyncClient(timeout=settings.api_timeout_seconds) as client:
            response = await client.get(url, headers={"X-Tenant-Id": settings.tenant_id})
    except httpx.HTTPError as e:
        return (False, f"error: {type(e).__name__}")

    if response.status_code >= 500:
        return (False, f"error: status {response.status_code}")
    return (True, "ok")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple liveness check.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | Response:
    """Readiness check against the remote pricing/booking API.

    Returns:
        200 with component status if the upstream is reachable
        503 otherwise
    """
    settings = get_settings()
    upstream_ok, upstream_status = await check_upstream(settings)

    response_body = {
        "status": "ok" if upstream_ok else "degraded",
        "components": {"upstream_api": upstream_status},
    }

    if not upstream_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
