"""Gate.io public spot API: listings, per-chain deployments and tickers."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from tokenrisk.models.token import MarketData
from tokenrisk.providers.gateio.models import GateCurrencyChain
from tokenrisk.providers.networks import normalize_network
from tokenrisk.providers.rate_limiter import RateLimiter

BASE_URL = "https://api.gateio.ws/api/v4"
MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]
EXCHANGE_NAME = "Gate.io"


class GateioClient:
    """Async HTTP client for the Gate.io v4 spot API (no auth)."""

    def __init__(self, max_rps: float = 2.0) -> None:
        self._rate_limiter = RateLimiter(max_rps, "Gate.io")
        self._client = httpx.AsyncClient(
            base_url=BASE_URL, timeout=15.0, headers={"Accept": "application/json"}
        )
        self._listed_bases: set[str] | None = None

    async def close(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: dict | None = None) -> Any | None:
        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.get(path, params=params)

                if resp.status_code == 429:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[GATEIO] Rate limited, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue

                if resp.status_code != 200:
                    logger.debug(f"[GATEIO] HTTP {resp.status_code} for {path}")
                    return None

                return resp.json()

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[GATEIO] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    logger.warning(f"[GATEIO] Failed after retries for {path}: {e}")
                    return None

        return None

    async def is_listed(self, symbol: str) -> bool:
        """Whether any tradable spot pair has ``symbol`` as its base currency.

        The pair list is fetched once per client and reused.
        """
        if self._listed_bases is None:
            pairs = await self._get_json("/spot/currency_pairs")
            if pairs is None:
                return False
            self._listed_bases = {
                p["base"].upper()
                for p in pairs
                if isinstance(p, dict) and p.get("base") and p.get("trade_status") != "untradable"
            }
        return symbol.upper() in self._listed_bases

    async def get_currency_chains(self, symbol: str) -> list[GateCurrencyChain]:
        data = await self._get_json("/spot/currency_chains", params={"currency": symbol.upper()})
        if not isinstance(data, list):
            return []
        return [c for c in (_parse_chain(raw) for raw in data) if c is not None]

    async def get_ticker(self, symbol: str) -> MarketData | None:
        """USDT-pair ticker as market data. Gate.io has no market cap."""
        data = await self._get_json(
            "/spot/tickers", params={"currency_pair": f"{symbol.upper()}_USDT"}
        )
        if not data or not isinstance(data, list):
            return None
        return _parse_ticker(data[0], symbol)


def _to_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _parse_chain(raw: Any) -> GateCurrencyChain | None:
    if not isinstance(raw, dict) or not raw.get("chain"):
        return None
    return GateCurrencyChain(
        chain=raw["chain"],
        contract_address=raw.get("contract_address") or "",
        network=normalize_network(raw["chain"]),
        is_disabled=bool(raw.get("is_disabled")),
    )


def _parse_ticker(raw: dict, symbol: str) -> MarketData:
    return MarketData(
        source="gateio",
        symbol=symbol.upper(),
        current_price=_to_float(raw.get("last")),
        price_change_24h=_to_float(raw.get("change_percentage")),
        volume_24h_usd=_to_float(raw.get("quote_volume")),
        exchanges=[EXCHANGE_NAME],
    )
