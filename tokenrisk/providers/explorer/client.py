"""Etherscan v2 multichain client: top holders, supply and source verification.

A single API key serves every EVM chain; the chain is picked per request with
``chainid``. Networks without a chain id are not supported here.
"""

import asyncio
from typing import Any

import httpx
from loguru import logger

from tokenrisk.models.token import HolderData, HolderEntry
from tokenrisk.providers.labels import is_exchange_label, label_for
from tokenrisk.providers.networks import get_network, holders_page_url
from tokenrisk.providers.rate_limiter import RateLimiter
from tokenrisk.scoring.ownership import is_blackhole_address

BASE_URL = "https://api.etherscan.io/v2/api"
MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]


class ExplorerClient:
    """Async HTTP client for Etherscan-family explorer APIs."""

    def __init__(self, api_key: str = "", max_rps: float = 4.0, holder_limit: int = 25) -> None:
        self._api_key = api_key
        self._holder_limit = holder_limit
        self._rate_limiter = RateLimiter(max_rps, "Etherscan")
        self._client = httpx.AsyncClient(timeout=15.0)

    async def close(self) -> None:
        await self._client.aclose()

    @staticmethod
    def supports(network: str) -> bool:
        net = get_network(network)
        return net is not None and net.chain_id is not None

    async def _call(self, chain_id: int, params: dict[str, Any]) -> Any | None:
        """One explorer API call. Returns ``result`` or None on NOTOK/HTTP failure."""
        query = {"chainid": chain_id, **params, "apikey": self._api_key}

        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.get(BASE_URL, params=query)

                if resp.status_code == 429:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[EXPLORER] Rate limited, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue

                if resp.status_code != 200:
                    logger.debug(f"[EXPLORER] HTTP {resp.status_code} for {params['action']}")
                    return None

                data = resp.json()
                if str(data.get("status")) != "1":
                    logger.debug(
                        f"[EXPLORER] {params['action']} NOTOK: {str(data.get('result'))[:80]}"
                    )
                    return None
                return data.get("result")

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[EXPLORER] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    logger.warning(f"[EXPLORER] {params['action']} failed after retries: {e}")
                    return None

        return None

    async def get_token_holders(self, contract_address: str, network: str) -> HolderData | None:
        net = get_network(network)
        if net is None or net.chain_id is None:
            logger.debug(f"[EXPLORER] No holder API for network {network}")
            return None
        if not self._api_key:
            logger.debug("[EXPLORER] No API key configured, skipping holder lookup")
            return None

        holders_raw, supply_raw, source_raw = await asyncio.gather(
            self._call(
                net.chain_id,
                {
                    "module": "token",
                    "action": "tokenholderlist",
                    "contractaddress": contract_address,
                    "page": 1,
                    "offset": self._holder_limit,
                },
            ),
            self._call(
                net.chain_id,
                {"module": "stats", "action": "tokensupply", "contractaddress": contract_address},
            ),
            self._call(
                net.chain_id,
                {"module": "contract", "action": "getsourcecode", "address": contract_address},
            ),
        )

        if holders_raw is None and supply_raw is None and source_raw is None:
            return None

        total_supply = _to_float(supply_raw)
        source = source_raw[0] if isinstance(source_raw, list) and source_raw else {}

        return HolderData(
            source="explorer",
            holders=parse_holder_list(holders_raw or [], total_supply),
            name=source.get("ContractName") or None,
            total_supply=total_supply,
            verified=bool(source.get("SourceCode")) if source else None,
            holders_source_url=holders_page_url(net.key, contract_address),
        )


def _to_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_holder_list(rows: list[dict], total_supply: float | None) -> list[HolderEntry]:
    """Explorer rows to ranked entries; percentages need the raw total supply."""
    entries: list[HolderEntry] = []
    for row in rows:
        address = row.get("TokenHolderAddress")
        if not address:
            continue
        balance = _to_float(row.get("TokenHolderQuantity"))
        pct = balance / total_supply * 100 if balance is not None and total_supply else 0.0
        label = label_for(address)
        entries.append(
            HolderEntry(
                rank=len(entries) + 1,
                address=address,
                balance=balance,
                balance_percentage=pct,
                label=label,
                is_exchange=is_exchange_label(label),
                is_blackhole=is_blackhole_address(address),
            )
        )
    # The API does not guarantee order; rank 1 must be the largest holder
    entries.sort(key=lambda h: h.balance or 0, reverse=True)
    return [h.model_copy(update={"rank": i + 1}) for i, h in enumerate(entries)]
