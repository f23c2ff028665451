"""Health check endpoints."""

import structlog
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from riju_sessions.api.middleware import limiter
from riju_sessions.k8s.client import get_k8s_client

logger = structlog.get_logger()
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    kubernetes: str


@router.get("/health", response_model=HealthResponse)
@limiter.exempt
async def health_check() -> HealthResponse:
    """Health check endpoint: the cluster API must answer."""
    try:
        k8s_client = await get_k8s_client()
        ns_list = await k8s_client.list_namespaces()
        k8s_status = f"healthy ({len(ns_list)} namespaces)"
    except Exception as e:
        logger.warning("health_check_k8s_unreachable", error=str(e))
        raise HTTPException(status_code=503, detail=f"Kubernetes unhealthy: {e}")

    return HealthResponse(status="healthy", kubernetes=k8s_status)


@router.get("/ready")
@limiter.exempt
async def readiness_check() -> dict:
    """Readiness check endpoint."""
    return {"ready": True}
