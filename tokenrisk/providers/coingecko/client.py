"""CoinGecko API client: contract market data, symbol search and coin platforms."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from tokenrisk.models.token import ContractRef, MarketData
from tokenrisk.providers.coingecko.models import CoinGeckoCoin
from tokenrisk.providers.networks import explorer_token_url, get_network, normalize_network
from tokenrisk.providers.rate_limiter import RateLimiter

BASE_URL = "https://api.coingecko.com/api/v3"
MAX_RETRIES = 2
RETRY_DELAYS = [2.0, 5.0]
MAX_EXCHANGES = 20

# Symbols whose search results are ambiguous enough to pin the coin id directly
KNOWN_COIN_IDS = {
    "USDT": "tether",
    "USDC": "usd-coin",
    "DAI": "dai",
    "WETH": "weth",
    "WBTC": "wrapped-bitcoin",
    "LINK": "chainlink",
    "UNI": "uniswap",
    "CAKE": "pancakeswap-token",
    "BUSD": "binance-usd",
    "SHIB": "shiba-inu",
    "DVI": "dvision-network",
}

_COIN_DETAIL_PARAMS = {
    "localization": "false",
    "community_data": "true",
    "developer_data": "false",
    "sparkline": "false",
}


class CoinGeckoClient:
    """Async HTTP client for the CoinGecko v3 API (free tier, optional demo key)."""

    def __init__(self, api_key: str = "", max_rps: float = 0.5) -> None:
        headers = {"Accept": "application/json"}
        if api_key:
            headers["x-cg-demo-api-key"] = api_key
        self._rate_limiter = RateLimiter(max_rps, "CoinGecko")
        self._client = httpx.AsyncClient(base_url=BASE_URL, timeout=15.0, headers=headers)

    async def close(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: dict | None = None) -> Any | None:
        """GET with retry on 429/timeout. None on any other failure."""
        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.get(path, params=params)

                if resp.status_code == 429:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[COINGECKO] Rate limited, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue

                if resp.status_code != 200:
                    logger.debug(f"[COINGECKO] HTTP {resp.status_code} for {path}")
                    return None

                return resp.json()

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[COINGECKO] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    logger.warning(f"[COINGECKO] Failed after retries for {path}: {e}")
                    return None

        return None

    async def get_token_info(self, contract_address: str, network: str) -> MarketData | None:
        """Market data for a contract token on one chain."""
        net = get_network(network)
        platform = net.coingecko_platform if net else "ethereum"
        data = await self._get_json(
            f"/coins/{platform}/contract/{contract_address}",
            params={**_COIN_DETAIL_PARAMS, "tickers": "true"},
        )
        if not data:
            return None
        return _parse_market_data(data)

    async def get_coin_market_data(self, coin_id: str) -> MarketData | None:
        """Market data for a coin id (used for native assets)."""
        data = await self._get_json(
            f"/coins/{coin_id}", params={**_COIN_DETAIL_PARAMS, "tickers": "true"}
        )
        if not data:
            return None
        return _parse_market_data(data)

    async def search_coin_id(self, symbol: str) -> str | None:
        """Resolve a ticker symbol to a CoinGecko coin id.

        Pinned ids first, then the largest-cap market match, then /search
        (exact symbol match, else the first result).
        """
        symbol = symbol.upper()
        if symbol in KNOWN_COIN_IDS:
            return KNOWN_COIN_IDS[symbol]

        markets = await self._get_json(
            "/coins/markets",
            params={"vs_currency": "usd", "symbols": symbol.lower(), "order": "market_cap_desc"},
        )
        coins = [_parse_coin(c) for c in markets or [] if isinstance(c, dict)]
        matching = [c for c in coins if c and c.symbol.upper() == symbol]
        if matching:
            best = max(matching, key=lambda c: c.market_cap or 0)
            logger.debug(f"[COINGECKO] {symbol} found in markets: {best.id}")
            return best.id

        found = await self._get_json("/search", params={"query": symbol})
        hits = [_parse_coin(c) for c in (found or {}).get("coins", [])]
        hits = [c for c in hits if c]
        if not hits:
            logger.debug(f"[COINGECKO] No search results for {symbol}")
            return None

        exact = next((c for c in hits if c.symbol.upper() == symbol), None)
        return (exact or hits[0]).id

    async def get_platforms(self, coin_id: str) -> list[ContractRef]:
        """Contract deployments of a coin on every supported network."""
        data = await self._get_json(
            f"/coins/{coin_id}",
            params={
                "localization": "false",
                "tickers": "false",
                "market_data": "false",
                "community_data": "false",
                "developer_data": "false",
            },
        )
        if not data:
            return []
        return parse_platforms(data.get("platforms") or {})

    async def search_contracts(self, symbol: str) -> list[ContractRef]:
        coin_id = await self.search_coin_id(symbol)
        if not coin_id:
            return []
        contracts = await self.get_platforms(coin_id)
        logger.debug(f"[COINGECKO] {len(contracts)} contract(s) for {symbol} ({coin_id})")
        return contracts


def parse_platforms(platforms: dict[str, str | None]) -> list[ContractRef]:
    """Map CoinGecko platform ids onto supported networks, one entry per network."""
    contracts: list[ContractRef] = []
    seen: set[str] = set()
    for platform, address in platforms.items():
        if not address or not platform:
            continue
        network = normalize_network(platform)
        if network is None:
            logger.debug(f"[COINGECKO] Unknown platform: {platform}")
            continue
        if network in seen:
            continue
        seen.add(network)
        contracts.append(
            ContractRef(
                network=network,
                address=address,
                explorer=explorer_token_url(network, address),
            )
        )
    return contracts


def _parse_coin(raw: dict) -> CoinGeckoCoin | None:
    if not raw.get("id") or not raw.get("symbol"):
        return None
    return CoinGeckoCoin(
        id=raw["id"],
        symbol=raw["symbol"],
        name=raw.get("name", ""),
        market_cap_rank=raw.get("market_cap_rank"),
        market_cap=raw.get("market_cap"),
    )


def _extract_exchanges(tickers: list[dict]) -> list[str]:
    names: list[str] = []
    for ticker in tickers:
        name = (ticker.get("market") or {}).get("name")
        if name and name not in names:
            names.append(name)
    return names[:MAX_EXCHANGES]


def _parse_market_data(data: dict) -> MarketData:
    market = data.get("market_data") or {}
    community = data.get("community_data") or {}
    symbol = data.get("symbol")
    return MarketData(
        source="coingecko",
        name=data.get("name"),
        symbol=symbol.upper() if symbol else None,
        market_cap_usd=(market.get("market_cap") or {}).get("usd"),
        volume_24h_usd=(market.get("total_volume") or {}).get("usd"),
        price_change_24h=market.get("price_change_percentage_24h"),
        current_price=(market.get("current_price") or {}).get("usd"),
        total_supply=market.get("total_supply"),
        # CoinGecko has no verification flag; an active community is the proxy
        verified=(community.get("twitter_followers") or 0) > 1000,
        exchanges=_extract_exchanges(data.get("tickers") or []),
    )
