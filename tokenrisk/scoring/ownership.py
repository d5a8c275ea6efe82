"""Ownership analyzer: top-1 / top-10 holder concentration from a holder list.

Burn addresses are excluded from every concentration metric: supply sent to a
blackhole is out of circulation and cannot be dumped. The excluded share is
reported separately so callers can still display it.
"""

from loguru import logger

from tokenrisk.models.base import clamp
from tokenrisk.models.risk import OwnershipAnalysis
from tokenrisk.models.token import HolderEntry

BLACKHOLE_ADDRESSES = frozenset(
    a.lower()
    for a in (
        "0x0000000000000000000000000000000000000000",
        "0x000000000000000000000000000000000000dead",
        "0xdead000000000000000042069420694206942069",
        "11111111111111111111111111111111",
        "1nc1nerator11111111111111111111111111111111",
        "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
    )
)

TOP_N = 10


def is_blackhole_address(address: str | None) -> bool:
    if not address:
        return False
    return address.lower() in BLACKHOLE_ADDRESSES


def concentration_level(top10_percentage: float) -> str:
    """Human label for top-10 concentration."""
    if top10_percentage > 95:
        return "EXTREME"
    if top10_percentage > 85:
        return "VERY_HIGH"
    if top10_percentage > 70:
        return "HIGH"
    if top10_percentage > 50:
        return "MODERATE"
    return "NORMAL"


def analyze_ownership(
    holders: list[HolderEntry],
    total_supply: float | None = None,
    *,
    data_source: str = "holders",
    token_address: str | None = None,
) -> OwnershipAnalysis:
    """Derive concentration metrics from an ordered holder list.

    Percentages are taken as supplied by the provider unless ``total_supply``
    is given, in which case entries carrying a raw ``balance`` are recomputed
    as ``balance / total_supply * 100``. Entries at ``token_address``
    (the contract holding its own supply) are dropped before ranking. Never
    raises; an empty list yields an all-zero result with ``data_source="none"``.
    """
    if not holders:
        return OwnershipAnalysis(data_source="none")

    entries = sorted(holders, key=lambda h: h.rank)
    if token_address:
        own = token_address.lower()
        entries = [h for h in entries if h.address.lower() != own]
    if total_supply:
        entries = [_recompute(h, total_supply) for h in entries]

    kept: list[HolderEntry] = []
    burned: list[HolderEntry] = []
    for entry in entries:
        if entry.is_blackhole or is_blackhole_address(entry.address):
            burned.append(entry.model_copy(update={"is_blackhole": True}))
        else:
            kept.append(entry)

    top10 = kept[:TOP_N]
    top10_pct = round(clamp(sum(h.balance_percentage for h in top10)), 4)
    burned_pct = round(clamp(sum(h.balance_percentage for h in burned)), 4)

    top = kept[0] if kept else None
    top_pct = top.balance_percentage if top else 0.0

    if burned:
        logger.debug(
            f"[OWNERSHIP] Excluded {len(burned)} blackhole(s) holding {burned_pct:.2f}%"
        )

    return OwnershipAnalysis(
        top_owner_percentage=top_pct,
        top_owner_address=top.address if top else None,
        top_owner_label=top.label if top else None,
        is_exchange=top.is_exchange if top else False,
        is_blackhole=False,
        concentrated=top_pct > 50,
        top10_percentage=top10_pct,
        top10_holders=top10,
        holder_count=len(entries),
        blackhole_count=len(burned),
        blackhole_percentage=burned_pct,
        data_source=data_source,
    )


def _recompute(entry: HolderEntry, total_supply: float) -> HolderEntry:
    if entry.balance is None:
        return entry
    pct = clamp(entry.balance / total_supply * 100)
    return entry.model_copy(update={"balance_percentage": round(pct, 4)})
