"""Redis-backed cache of symbol analyses and the categories document.

Only a reduced record is stored per symbol: the fields token lists and
categorisation need, not the full per-chain detail. Redis failures are
logged and behave like a cache miss so analysis keeps working without it.
"""

import json
from typing import Any

from loguru import logger
from redis.asyncio import Redis

from tokenrisk.models.analysis import SymbolAnalysis

KEY_PREFIX = "tokenrisk:analysis:"
KEY_INDEX = "tokenrisk:symbols"
KEY_CATEGORIES = "tokenrisk:categories"

EMPTY_CATEGORIES: dict[str, list[str]] = {"scam": [], "canBuy": []}


def reduce_analysis(result: SymbolAnalysis) -> dict[str, Any]:
    gap = result.gap_hunter_bot_risk
    concentration = result.holder_concentration
    ai = gap.ai_risk_score if gap else None
    return {
        "success": result.success,
        "symbol": result.symbol,
        "isNativeToken": result.is_native_token,
        "chainsFound": result.chains_found,
        "globalSpamScore": result.global_spam_score,
        "riskPercentage": gap.risk_percentage if gap else None,
        "shouldSkip": gap.should_skip if gap else None,
        "AIriskScore": ai.score if ai else None,
        "holderConcentration": (
            {
                "top1Percentage": concentration.top1_percentage,
                "top1Address": concentration.top1_address,
                "top1Label": concentration.top1_label,
                "top1IsExchange": concentration.top1_is_exchange,
                "top1IsBlackhole": concentration.top1_is_blackhole,
                "top10Percentage": concentration.top10_percentage,
            }
            if concentration
            else None
        ),
    }


def _decode(raw: str, what: str) -> dict[str, Any] | None:
    """Parse a stored JSON object; corrupt values read as a miss."""
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"[CACHE] Corrupt value for {what}: {e}")
        return None
    return value if isinstance(value, dict) else None


class AnalysisCache:
    def __init__(self, redis: Redis | None, *, enabled: bool = True, ttl_hours: int = 4) -> None:
        self._redis = redis
        self._enabled = enabled and redis is not None
        self._ttl_sec = ttl_hours * 3600

    @property
    def enabled(self) -> bool:
        return self._enabled

    @staticmethod
    def key(symbol: str) -> str:
        return f"{KEY_PREFIX}{symbol.strip().upper()}"

    async def ping(self) -> bool:
        if self._redis is None:
            return False
        try:
            return bool(await self._redis.ping())
        except Exception as e:
            logger.debug(f"[CACHE] Redis ping failed: {e}")
            return False

    async def get(self, symbol: str) -> dict[str, Any] | None:
        if not self._enabled:
            return None
        try:
            raw = await self._redis.get(self.key(symbol))
        except Exception as e:
            logger.warning(f"[CACHE] Read failed for {symbol}: {e}")
            return None
        if raw is None:
            return None
        record = _decode(raw, symbol)
        if record is not None:
            logger.debug(f"[CACHE] Hit for {symbol.upper()}")
        return record

    async def set(self, symbol: str, result: SymbolAnalysis) -> dict[str, Any]:
        """Store the reduced record and return it."""
        record = reduce_analysis(result)
        if not self._enabled:
            return record
        symbol = symbol.strip().upper()
        try:
            pipe = self._redis.pipeline()
            pipe.set(self.key(symbol), json.dumps(record), ex=self._ttl_sec)
            pipe.sadd(KEY_INDEX, symbol)
            await pipe.execute()
        except Exception as e:
            logger.warning(f"[CACHE] Write failed for {symbol}: {e}")
        return record

    async def all_records(self) -> dict[str, dict[str, Any]]:
        """Every unexpired cached record keyed by symbol."""
        if self._redis is None:
            return {}
        try:
            symbols = sorted(await self._redis.smembers(KEY_INDEX))
            if not symbols:
                return {}
            values = await self._redis.mget([self.key(s) for s in symbols])
        except Exception as e:
            logger.warning(f"[CACHE] Listing failed: {e}")
            return {}

        records: dict[str, dict[str, Any]] = {}
        expired: list[str] = []
        for symbol, raw in zip(symbols, values):
            record = _decode(raw, symbol) if raw is not None else None
            if record is None:
                expired.append(symbol)
            else:
                records[symbol] = record

        if expired:
            try:
                await self._redis.srem(KEY_INDEX, *expired)
            except Exception as e:
                logger.debug(f"[CACHE] Index cleanup failed: {e}")
        return records

    async def save_categories(self, categories: dict[str, list[str]]) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.set(KEY_CATEGORIES, json.dumps(categories))
        except Exception as e:
            logger.warning(f"[CACHE] Saving categories failed: {e}")

    async def get_categories(self) -> dict[str, list[str]]:
        if self._redis is None:
            return dict(EMPTY_CATEGORIES)
        try:
            raw = await self._redis.get(KEY_CATEGORIES)
        except Exception as e:
            logger.warning(f"[CACHE] Reading categories failed: {e}")
            return dict(EMPTY_CATEGORIES)
        categories = _decode(raw, "categories") if raw else None
        return categories if categories is not None else dict(EMPTY_CATEGORIES)
