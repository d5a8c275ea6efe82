"""Shared test fixtures."""

import pytest

from tokenrisk.models.token import TokenSignals


@pytest.fixture
def rug_signals() -> TokenSignals:
    """Concentrated, unverified microcap with no listings and no volume."""
    return TokenSignals(
        top_owner_percentage=50,
        top10_percentage=96,
        verified=False,
        market_cap_usd=5000,
        volume_to_market_cap_ratio=0,
        exchange_count=0,
        holder_count=25,
    )


@pytest.fixture
def blue_chip_signals() -> TokenSignals:
    """Well-distributed, verified large cap listed on many exchanges."""
    return TokenSignals(
        top_owner_percentage=3,
        top10_percentage=10,
        verified=True,
        market_cap_usd=50_000_000,
        volume_24h_usd=25_000_000,
        volume_to_market_cap_ratio=0.5,
        exchange_count=15,
        holder_count=25,
    )
