"""
Health check endpoints for the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse, Response

from field_service.api.dependencies import HealthCheckerDep
from field_service.config.logging import get_logger
from field_service.config.settings import settings
from field_service.infrastructure.monitoring.metrics import (
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check for Kubernetes."""
    return {"status": "alive", "timestamp": _now()}


@router.get("/ready")
async def readiness_check(health_checker: HealthCheckerDep):
    """Readiness check: database and Redis must both answer."""
    result = await health_checker.check_readiness()

    if not result["ready"]:
        logger.warning("Service not ready", components=result["components"])
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "components": result["components"],
                "timestamp": _now(),
            },
        )

    return {"status": "ready", "components": result["components"], "timestamp": _now()}


@router.get("/metrics")
async def prometheus_metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.ENABLE_METRICS:
        raise HTTPException(status_code=404, detail="Metrics are disabled")
    return Response(content=get_metrics(), media_type=get_metrics_content_type())
