"""Health check."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tokenrisk.api.dependencies import API_VERSION, get_container
from tokenrisk.services.container import ServiceContainer

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    redis_ok: bool
    cache_enabled: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(container: ServiceContainer = Depends(get_container)) -> HealthResponse:
    """Check Redis connectivity. Analysis still works when it is down."""
    redis_ok = await container.cache.ping()
    return HealthResponse(
        status="ok" if redis_ok else "degraded",
        version=API_VERSION,
        redis_ok=redis_ok,
        cache_enabled=container.cache.enabled,
    )
