"""Solana JSON-RPC client for SPL token holder concentration."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from tokenrisk.models.token import HolderData, HolderEntry
from tokenrisk.providers.networks import holders_page_url
from tokenrisk.providers.rate_limiter import RateLimiter
from tokenrisk.scoring.ownership import is_blackhole_address

MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]


class SolanaClient:
    """Async JSON-RPC client; any Solana RPC endpoint works."""

    def __init__(self, rpc_url: str, max_rps: float = 4.0) -> None:
        self._rpc_url = rpc_url
        self._rate_limiter = RateLimiter(max_rps, "Solana")
        self._client = httpx.AsyncClient(timeout=15.0)

    async def close(self) -> None:
        await self._client.aclose()

    async def _rpc(self, method: str, params: list[Any]) -> Any | None:
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.post(self._rpc_url, json=payload)

                if resp.status_code == 429:
                    await asyncio.sleep(RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)])
                    continue
                if resp.status_code != 200:
                    logger.debug(f"[SOLANA] {method} HTTP {resp.status_code}")
                    return None

                data = resp.json()
                if "error" in data:
                    logger.debug(f"[SOLANA] {method} RPC error: {data['error']}")
                    return None

                return data.get("result")

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    await asyncio.sleep(RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)])
                else:
                    logger.warning(f"[SOLANA] {method} failed: {e}")
                    return None

        return None

    async def get_token_holders(self, mint: str) -> HolderData | None:
        """Largest token accounts (max 20) with percentages of the UI supply."""
        largest, supply = await asyncio.gather(
            self._rpc("getTokenLargestAccounts", [mint]),
            self._rpc("getTokenSupply", [mint]),
        )
        if largest is None and supply is None:
            return None

        supply_value = (supply or {}).get("value") or {}
        total_supply = _ui_amount(supply_value)
        accounts = (largest or {}).get("value") or []

        return HolderData(
            source="solana-rpc",
            holders=parse_largest_accounts(accounts, total_supply),
            total_supply=total_supply,
            holders_source_url=holders_page_url("solana", mint),
        )


def _ui_amount(value: dict) -> float | None:
    """uiAmount, falling back to amount / 10**decimals."""
    if value.get("uiAmount") is not None:
        return float(value["uiAmount"])
    try:
        return int(value["amount"]) / 10 ** int(value.get("decimals", 0))
    except (KeyError, TypeError, ValueError):
        return None


def parse_largest_accounts(accounts: list[dict], total_supply: float | None) -> list[HolderEntry]:
    entries: list[HolderEntry] = []
    for account in accounts:
        address = account.get("address")
        if not address:
            continue
        balance = _ui_amount(account)
        pct = balance / total_supply * 100 if balance is not None and total_supply else 0.0
        entries.append(
            HolderEntry(
                rank=len(entries) + 1,
                address=address,
                balance=balance,
                balance_percentage=pct,
                is_blackhole=is_blackhole_address(address),
            )
        )
    return entries
