"""CoinMarketCap pro API client. Every call is a no-op without an API key."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from tokenrisk.models.token import MarketData
from tokenrisk.providers.rate_limiter import RateLimiter

BASE_URL = "https://pro-api.coinmarketcap.com"
MAX_RETRIES = 2
RETRY_DELAYS = [2.0, 5.0]


class CoinMarketCapClient:
    """Async HTTP client for CoinMarketCap quotes (pro API, key required)."""

    def __init__(self, api_key: str = "", max_rps: float = 0.5) -> None:
        self._api_key = api_key
        self._rate_limiter = RateLimiter(max_rps, "CoinMarketCap")
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=15.0,
            headers={"Accept": "application/json", "X-CMC_PRO_API_KEY": api_key},
        )

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def close(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: dict) -> Any | None:
        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.get(path, params=params)

                if resp.status_code == 429:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[CMC] Rate limited, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue

                if resp.status_code != 200:
                    logger.debug(f"[CMC] HTTP {resp.status_code} for {path}")
                    return None

                return resp.json()

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[CMC] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    logger.warning(f"[CMC] Failed after retries for {path}: {e}")
                    return None

        return None

    async def get_token_info(self, contract_address: str, network: str) -> MarketData | None:
        """Quote for a contract token, resolved through /info?address=."""
        if not self.enabled:
            return None

        info = await self._get_json("/v2/cryptocurrency/info", {"address": contract_address})
        entries = list(((info or {}).get("data") or {}).values())
        if not entries:
            logger.debug(f"[CMC] No listing for {contract_address[:12]} on {network}")
            return None

        coin_id = entries[0].get("id")
        if coin_id is None:
            return None
        quotes = await self._get_json("/v2/cryptocurrency/quotes/latest", {"id": coin_id})
        quote = ((quotes or {}).get("data") or {}).get(str(coin_id))
        return _parse_quote(quote) if quote else None

    async def get_quote_by_symbol(self, symbol: str) -> MarketData | None:
        if not self.enabled:
            return None

        data = await self._get_json(
            "/v2/cryptocurrency/quotes/latest", {"symbol": symbol.upper()}
        )
        quotes = ((data or {}).get("data") or {}).get(symbol.upper()) or []
        # v2 returns a list per symbol; the highest-ranked listing comes first
        if isinstance(quotes, dict):
            quotes = [quotes]
        if not quotes:
            return None
        return _parse_quote(quotes[0])


def _parse_quote(quote: dict) -> MarketData:
    usd = (quote.get("quote") or {}).get("USD") or {}
    return MarketData(
        source="cmc",
        name=quote.get("name"),
        symbol=quote.get("symbol"),
        market_cap_usd=usd.get("market_cap"),
        volume_24h_usd=usd.get("volume_24h"),
        price_change_24h=usd.get("percent_change_24h"),
        current_price=usd.get("price"),
        total_supply=quote.get("total_supply"),
        verified=bool(quote.get("is_active")) and quote.get("cmc_rank") is not None,
    )
