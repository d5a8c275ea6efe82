"""Tests for categories, token lists and list statistics."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tokenrisk.services.categorizer import (
    Categorizer,
    build_token_lists,
    build_token_stats,
    categorize,
    risk_bucket,
)

RECORDS = {
    "BTC": {"success": True, "isNativeToken": True, "riskPercentage": 5, "AIriskScore": 0},
    "PEPE": {"success": True, "riskPercentage": 30, "AIriskScore": 29.9},
    "RUG": {"success": True, "riskPercentage": 88, "AIriskScore": 95},
    "EDGE": {"success": True, "riskPercentage": 50, "AIriskScore": 30},
    "NOPE": {"success": False, "riskPercentage": None, "AIriskScore": None},
}


def test_risk_bucket():
    assert risk_bucket(0) == "0-10"
    assert risk_bucket(10) == "10-25"
    assert risk_bucket(49.9) == "25-50"
    assert risk_bucket(75) == "75-100"
    assert risk_bucket(100) == "75-100"


def test_categorize_threshold_is_inclusive():
    categories = categorize(RECORDS, 30)
    assert categories == {"scam": ["RUG", "EDGE"], "canBuy": ["BTC", "PEPE"]}


def test_token_lists():
    lists = build_token_lists(RECORDS, 50)
    assert lists["trusted"] == ["BTC", "PEPE"]
    assert lists["risk"] == ["RUG", "EDGE"]
    assert lists["undefined"] == ["NOPE"]
    assert lists["stats"] == {"total": 5, "trusted": 2, "risk": 2, "undefined": 1}


def test_token_stats():
    stats = build_token_stats(RECORDS, 50)["stats"]
    assert stats["total"] == 5
    assert stats["undefined"] == 1
    assert stats["risk"] == 2
    assert stats["nativeTokens"] == 1
    assert stats["contractTokens"] == 3
    assert stats["riskDistribution"] == {
        "0-10": 1,
        "10-25": 0,
        "25-50": 1,
        "50-75": 1,
        "75-100": 1,
    }


def test_empty_cache():
    assert build_token_lists({}, 50)["stats"]["total"] == 0
    assert categorize({}, 30) == {"scam": [], "canBuy": []}


@pytest.mark.asyncio
async def test_categorize_symbols_saves_result():
    cache = MagicMock()
    cache.all_records = AsyncMock(return_value=RECORDS)
    cache.save_categories = AsyncMock()

    categories = await Categorizer(cache, scam_threshold=50).categorize_symbols()

    assert categories == {"scam": ["RUG"], "canBuy": ["BTC", "PEPE", "EDGE"]}
    cache.save_categories.assert_awaited_once_with(categories)
