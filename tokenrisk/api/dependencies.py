"""FastAPI dependency injection: service container, settings, rate limiter."""

from __future__ import annotations

from fastapi import HTTPException, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from config.settings import Settings, settings
from tokenrisk.services.container import ServiceContainer

API_VERSION = "0.1.0"

# Rate limiter (shared instance)
limiter = Limiter(key_func=get_remote_address)


def get_container(request: Request) -> ServiceContainer:
    """Return the service container opened by the app lifespan."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Services not initialised",
        )
    return container


def get_settings() -> Settings:
    return settings
