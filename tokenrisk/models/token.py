"""Token-level records produced by data providers and the signal normalizer.

Providers return these already validated, so the scoring core never sees a
partially-shaped object: percentages are finite and bounded, market figures
are either a positive float or None.
"""

import math

from pydantic import Field, field_validator

from tokenrisk.models.base import CamelModel, clamp


def _positive_or_none(value: float | None) -> float | None:
    """Missing, zero, negative or non-finite market figures become None."""
    if value is None:
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(num) or num <= 0:
        return None
    return num


def _percentage(value: float | None) -> float:
    if value is None:
        return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(num):
        return 0.0
    return clamp(num)


class HolderEntry(CamelModel):
    """One row of a holder list. Rank 1 is the largest holder."""

    rank: int
    address: str
    balance_percentage: float = 0.0
    balance: float | None = None  # raw (decimal-adjusted) balance, when known
    label: str | None = None
    is_exchange: bool = False
    is_blackhole: bool = False
    is_contract: bool = False

    @field_validator("balance_percentage", mode="before")
    @classmethod
    def clamp_percentage(cls, value: float | None) -> float:
        return _percentage(value)


class ContractRef(CamelModel):
    """A token deployment on one chain."""

    network: str
    address: str
    explorer: str = ""


class MarketData(CamelModel):
    """Normalized market-data provider output (CoinGecko, CMC, Gate.io)."""

    source: str
    name: str | None = None
    symbol: str | None = None
    market_cap_usd: float | None = None
    volume_24h_usd: float | None = Field(None, alias="volume24hUsd")
    price_change_24h: float | None = Field(None, alias="priceChange24h")
    current_price: float | None = None
    total_supply: float | None = None
    verified: bool = False
    exchanges: list[str] = []

    @field_validator(
        "market_cap_usd", "volume_24h_usd", "current_price", "total_supply", mode="before"
    )
    @classmethod
    def positive_or_none(cls, value: float | None) -> float | None:
        return _positive_or_none(value)


class HolderData(CamelModel):
    """Normalized holder-data provider output (explorer API, Solana RPC)."""

    source: str
    holders: list[HolderEntry] = []
    name: str | None = None
    symbol: str | None = None
    total_supply: float | None = None
    verified: bool | None = None
    liquidity_usd: float | None = None
    holders_source_url: str | None = None

    @field_validator("total_supply", "liquidity_usd", mode="before")
    @classmethod
    def positive_or_none(cls, value: float | None) -> float | None:
        return _positive_or_none(value)


class TokenData(CamelModel):
    """All sources merged for one contract on one chain."""

    name: str = "Unknown"
    symbol: str = "UNKNOWN"
    exchanges: list[str] = []
    holders: list[HolderEntry] = []
    total_supply: float | None = None
    market_cap_usd: float | None = None
    volume_24h_usd: float | None = Field(None, alias="volume24hUsd")
    volume_to_market_cap_ratio: float | None = None
    price_change_24h: float | None = Field(None, alias="priceChange24h")
    current_price: float | None = None
    liquidity_usd: float | None = None
    verified: bool = False


class TokenSignals(CamelModel):
    """Canonical input to every scoring engine."""

    top_owner_percentage: float = 0.0
    top10_percentage: float = 0.0
    is_top_owner_exchange: bool = False
    is_top_owner_blackhole: bool = False
    verified: bool = False
    market_cap_usd: float | None = None
    volume_24h_usd: float | None = Field(None, alias="volume24hUsd")
    volume_to_market_cap_ratio: float | None = None
    exchange_count: int = Field(0, ge=0)
    is_native_token: bool = False
    holder_count: int = 0
    liquidity_usd: float | None = None

    @field_validator("top_owner_percentage", "top10_percentage", mode="before")
    @classmethod
    def clamp_percentage(cls, value: float | None) -> float:
        return _percentage(value)

    @field_validator("market_cap_usd", "volume_24h_usd", "liquidity_usd", mode="before")
    @classmethod
    def positive_or_none(cls, value: float | None) -> float | None:
        return _positive_or_none(value)

    @field_validator("volume_to_market_cap_ratio", mode="before")
    @classmethod
    def ratio_or_none(cls, value: float | None) -> float | None:
        if value is None:
            return None
        num = float(value)
        if not math.isfinite(num) or num < 0:
            return None
        return num
