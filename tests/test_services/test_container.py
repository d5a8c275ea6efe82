"""Tests for cached symbol analysis through the service container."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from config.settings import Settings
from tokenrisk.models.analysis import SymbolAnalysis
from tokenrisk.services.container import ServiceContainer


def _container(cached=None) -> ServiceContainer:
    container = ServiceContainer(Settings(redis_url=""))
    container.cache = MagicMock()
    container.cache.get = AsyncMock(return_value=cached)
    container.cache.set = AsyncMock()
    container.multichain = MagicMock()
    container.multichain.analyze_by_symbol = AsyncMock(
        return_value=SymbolAnalysis(symbol="PEPE", chains_found=1)
    )
    return container


@pytest.mark.asyncio
async def test_cache_hit_skips_analysis():
    container = _container(cached={"symbol": "PEPE", "riskPercentage": 10})

    assert await container.analyze_symbol("PEPE") == {"symbol": "PEPE", "riskPercentage": 10}
    container.multichain.analyze_by_symbol.assert_not_awaited()


@pytest.mark.asyncio
async def test_cache_miss_analyses_and_stores():
    container = _container()

    data = await container.analyze_symbol("PEPE")

    assert data["symbol"] == "PEPE"
    assert data["chainsFound"] == 1
    container.cache.set.assert_awaited_once()
    assert container.cache.set.await_args.args[0] == "PEPE"


@pytest.mark.asyncio
async def test_open_without_redis_and_close():
    container = await ServiceContainer(Settings(redis_url="", cmc_api_key="")).open()

    assert container.redis is None
    assert container.cache.enabled is False
    await container.close()
