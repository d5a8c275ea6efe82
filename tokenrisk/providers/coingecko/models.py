"""Data models for CoinGecko API responses."""

from dataclasses import dataclass


@dataclass
class CoinGeckoCoin:
    """One hit from /search or /coins/markets."""

    id: str
    symbol: str
    name: str = ""
    market_cap_rank: int | None = None
    market_cap: float | None = None
