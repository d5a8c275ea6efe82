"""Token lists and categories built from cached symbol analyses."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from config.settings import Settings
from tokenrisk.api.dependencies import get_container, get_settings
from tokenrisk.services.container import ServiceContainer

router = APIRouter(prefix="/api", tags=["token-lists"])


@router.get("/token-lists")
async def token_lists(
    min_risk: int | None = Query(None, alias="minRisk", ge=0, le=100),
    container: ServiceContainer = Depends(get_container),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Cached symbols split into trusted / risk / undefined by gap-hunter risk."""
    threshold = min_risk if min_risk is not None else settings.token_list_min_risk
    return await container.categorizer.token_lists(threshold)


@router.get("/token-lists/stats")
async def token_list_stats(
    container: ServiceContainer = Depends(get_container),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    return await container.categorizer.token_stats(settings.token_list_min_risk)


@router.get("/categories")
async def categories(container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    return await container.cache.get_categories()
