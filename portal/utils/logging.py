"""Structured logging for remote API calls."""

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestTrace:
    """Identifies one outbound API call."""

    method: str
    endpoint: str
    tenant_id: str


class StructuredApiLogger:
    """Structured logger for remote API calls."""

    def log_call(
        self,
        trace: RequestTrace,
        outcome: str,
        latency_ms: float,
        status_code: int | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log an API call with structured data."""
        log_data: dict[str, Any] = {
            "method": trace.method,
            "endpoint": trace.endpoint,
            "tenant_id": trace.tenant_id,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if status_code is not None:
            log_data["status_code"] = status_code
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"API call: {trace.method} {trace.endpoint} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the edge app and UI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
