"""
Liveness, readiness and metrics endpoints
"""

from typing import Any, Dict

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from fitness_bridge.health.checks import HealthChecker


def create_health_router(
    health_checker: HealthChecker,
    service_name: str = "fitness-bridge",
    include_metrics: bool = True,
) -> APIRouter:
    """
    Build the health router around the bridge's checker

    Args:
        health_checker: Checker holding the bridge's readiness checks
        service_name: Reported by the liveness probe
        include_metrics: Whether to expose Prometheus metrics at /metrics

    Returns:
        APIRouter with /healthz, /readyz and optionally /metrics
    """
    router = APIRouter(tags=["health"])

    @router.get("/healthz")
    async def liveness() -> Dict[str, str]:
        return {"status": "ok", "service": service_name}

    @router.get("/readyz")
    async def readiness() -> Any:
        """503 while any critical check is failing."""
        report = await health_checker.check_health()
        if report["ready"]:
            return report
        return JSONResponse(content=report, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    if include_metrics:

        @router.get("/metrics")
        async def metrics() -> Response:
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return router
