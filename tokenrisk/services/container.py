"""Service graph shared by the HTTP API and the batch refresh script.

Built once at startup with ``open()`` and torn down with ``close()``; the
API keeps the instance on ``app.state`` and hands it to routes through a
dependency.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from redis.asyncio import Redis

from tokenrisk.providers.cmc.client import CoinMarketCapClient
from tokenrisk.providers.coingecko.client import CoinGeckoClient
from tokenrisk.providers.explorer.client import ExplorerClient
from tokenrisk.providers.gateio.client import GateioClient
from tokenrisk.providers.solana.client import SolanaClient
from tokenrisk.services.cache import AnalysisCache
from tokenrisk.services.categorizer import Categorizer
from tokenrisk.services.multichain_analyzer import MultiChainAnalyzer
from tokenrisk.services.native_tokens import NativeTokenAnalyzer
from tokenrisk.services.token_analyzer import TokenAnalyzer

if TYPE_CHECKING:
    from config.settings import Settings


class ServiceContainer:
    """Holds the provider clients and the services built on top of them."""

    coingecko: CoinGeckoClient
    cmc: CoinMarketCapClient
    gateio: GateioClient
    explorer: ExplorerClient
    solana: SolanaClient
    redis: Redis | None
    cache: AnalysisCache
    categorizer: Categorizer
    token_analyzer: TokenAnalyzer
    native: NativeTokenAnalyzer
    multichain: MultiChainAnalyzer

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._opened = False

    async def open(self) -> ServiceContainer:
        s = self._settings
        self.coingecko = CoinGeckoClient(s.coingecko_api_key, max_rps=s.coingecko_max_rps)
        self.cmc = CoinMarketCapClient(s.cmc_api_key, max_rps=s.cmc_max_rps)
        self.gateio = GateioClient(max_rps=s.gateio_max_rps)
        self.explorer = ExplorerClient(
            s.etherscan_api_key,
            max_rps=s.explorer_max_rps,
            holder_limit=s.explorer_holder_limit,
        )
        self.solana = SolanaClient(s.solana_rpc_url, max_rps=s.solana_max_rps)

        self.redis = Redis.from_url(s.redis_url, decode_responses=True) if s.redis_url else None
        self.cache = AnalysisCache(
            self.redis, enabled=s.cache_enabled, ttl_hours=s.cache_ttl_hours
        )
        self.categorizer = Categorizer(self.cache, scam_threshold=s.category_scam_threshold)

        self.token_analyzer = TokenAnalyzer(self.coingecko, self.cmc, self.explorer, self.solana)
        self.native = NativeTokenAnalyzer(self.coingecko, self.cmc, self.gateio)
        self.multichain = MultiChainAnalyzer(
            self.token_analyzer, self.native, self.coingecko, self.gateio
        )

        if not s.cmc_api_key:
            logger.info("[SERVICES] CMC_API_KEY not set, CoinMarketCap disabled")
        if not s.etherscan_api_key:
            logger.info("[SERVICES] ETHERSCAN_API_KEY not set, EVM holder data disabled")

        self._opened = True
        return self

    async def close(self) -> None:
        if not self._opened:
            return
        for client in (self.coingecko, self.cmc, self.gateio, self.explorer, self.solana):
            await client.close()
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
        self._opened = False
        logger.info("[SERVICES] Closed")

    async def analyze_symbol(self, symbol: str) -> dict:
        """Cached symbol analysis: the reduced record on a hit, full result otherwise."""
        cached = await self.cache.get(symbol)
        if cached is not None:
            return cached
        result = await self.multichain.analyze_by_symbol(symbol)
        await self.cache.set(symbol, result)
        return result.to_json_dict()
