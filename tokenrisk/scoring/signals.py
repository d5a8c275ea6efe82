"""Signal normalizer: merge multi-source token data into TokenSignals.

Precedence is per field: CoinMarketCap, then CoinGecko, then the explorer /
holder provider. Missing values stay None; they are never coerced to zero.
"""

from collections.abc import Iterable
from typing import TypeVar

from tokenrisk.models.risk import OwnershipAnalysis
from tokenrisk.models.token import HolderData, MarketData, TokenData, TokenSignals

T = TypeVar("T")


def _first(*values: T | None) -> T | None:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def volume_to_market_cap_ratio(
    volume_24h: float | None, market_cap: float | None
) -> float | None:
    """24h volume / market cap, undefined when either side is missing or zero."""
    if not volume_24h or not market_cap:
        return None
    return volume_24h / market_cap


def merge_exchanges(*sources: Iterable[str] | None) -> list[str]:
    """Ordered, case-insensitive de-duplicated union of exchange names."""
    seen: set[str] = set()
    merged: list[str] = []
    for exchanges in sources:
        for name in exchanges or []:
            key = name.strip().lower()
            if key and key not in seen:
                seen.add(key)
                merged.append(name.strip())
    return merged


def merge_market_data(*sources: MarketData | None) -> MarketData | None:
    """Fold several market-data snapshots into one, earlier sources winning."""
    present = [s for s in sources if s is not None]
    if not present:
        return None
    return MarketData(
        source="+".join(s.source for s in present),
        name=_first(*(s.name for s in present)),
        symbol=_first(*(s.symbol for s in present)),
        market_cap_usd=_first(*(s.market_cap_usd for s in present)),
        volume_24h_usd=_first(*(s.volume_24h_usd for s in present)),
        price_change_24h=_first(*(s.price_change_24h for s in present)),
        current_price=_first(*(s.current_price for s in present)),
        total_supply=_first(*(s.total_supply for s in present)),
        verified=any(s.verified for s in present),
        exchanges=merge_exchanges(*(s.exchanges for s in present)),
    )


def merge_token_data(
    cmc: MarketData | None,
    coingecko: MarketData | None,
    holders: HolderData | None,
) -> TokenData:
    market = merge_market_data(cmc, coingecko)
    market_cap = market.market_cap_usd if market else None
    volume = market.volume_24h_usd if market else None

    verified = bool(holders and holders.verified) or bool(market and market.verified)

    return TokenData(
        name=_first(market.name if market else None, holders.name if holders else None)
        or "Unknown",
        symbol=(
            _first(market.symbol if market else None, holders.symbol if holders else None)
            or "UNKNOWN"
        ).upper(),
        exchanges=market.exchanges if market else [],
        holders=holders.holders if holders else [],
        total_supply=_first(
            holders.total_supply if holders else None,
            market.total_supply if market else None,
        ),
        market_cap_usd=market_cap,
        volume_24h_usd=volume,
        volume_to_market_cap_ratio=volume_to_market_cap_ratio(volume, market_cap),
        price_change_24h=market.price_change_24h if market else None,
        current_price=market.current_price if market else None,
        liquidity_usd=holders.liquidity_usd if holders else None,
        verified=verified,
    )


def build_token_signals(
    token: TokenData,
    ownership: OwnershipAnalysis,
    *,
    is_native: bool = False,
) -> TokenSignals:
    return TokenSignals(
        top_owner_percentage=ownership.top_owner_percentage,
        top10_percentage=ownership.top10_percentage,
        is_top_owner_exchange=ownership.is_exchange,
        is_top_owner_blackhole=ownership.is_blackhole,
        verified=token.verified,
        market_cap_usd=token.market_cap_usd,
        volume_24h_usd=token.volume_24h_usd,
        volume_to_market_cap_ratio=token.volume_to_market_cap_ratio,
        exchange_count=len(token.exchanges),
        is_native_token=is_native,
        holder_count=ownership.holder_count,
        liquidity_usd=token.liquidity_usd,
    )
