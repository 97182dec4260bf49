"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Expose registered metrics.

    - upstream_latency_ms{endpoint, outcome}
    - upstream_errors_total{endpoint, reason}
    - booking_submissions_total{outcome, payment_method}
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
