"""Tests for the scam probability assessment."""

from tokenrisk.models.risk import Confidence, ScamVerdict
from tokenrisk.models.token import TokenSignals
from tokenrisk.scoring.scam import assess_scam_probability


def test_no_holder_data_is_a_red_flag():
    result = assess_scam_probability(TokenSignals())
    # 10 (no holders) + 15 (unverified) + 15 (no mcap) + 15 (no listings)
    assert result.scam_score == 55
    assert result.verdict == ScamVerdict.HIGH_RISK
    assert result.confidence == Confidence.HIGH
    assert result.red_flags[0] == "No holder data available (transparency concern)"
    assert result.green_flags == []


def test_rug_profile_is_likely_scam(rug_signals):
    result = assess_scam_probability(rug_signals)
    # 25 (top10) + 15 (unverified) + 15 (mcap) + 15 (no listings); top1 is exactly 50
    assert result.scam_score == 70
    assert result.verdict == ScamVerdict.LIKELY_SCAM
    assert result.confidence == Confidence.HIGH
    assert "Top 10 holders control 96.00% (Rug-pull risk)" in result.red_flags
    assert result.summary.startswith("LIKELY SCAM - Scam Score: 70/100.")


def test_blue_chip_is_likely_safe(blue_chip_signals):
    result = assess_scam_probability(blue_chip_signals)
    assert result.scam_score == 0
    assert result.verdict == ScamVerdict.LIKELY_SAFE
    assert result.confidence == Confidence.HIGH
    assert result.red_flags == []
    assert "Listed on 15 exchanges" in result.green_flags
    assert "Contract verified on explorer" in result.green_flags


def test_single_wallet_flag_skipped_for_exchange():
    signals = TokenSignals(
        top_owner_percentage=60,
        top10_percentage=65,
        is_top_owner_exchange=True,
        verified=True,
        market_cap_usd=2_000_000,
        exchange_count=4,
        holder_count=10,
    )
    result = assess_scam_probability(signals)
    assert not any("Single wallet" in f for f in result.red_flags)
    assert "Top holder is an exchange" in result.green_flags
    assert result.scam_score == 0  # -15 clamped


def test_wash_trading_flag():
    signals = TokenSignals(
        top10_percentage=40,
        top_owner_percentage=10,
        verified=True,
        market_cap_usd=2_000_000,
        volume_to_market_cap_ratio=2.5,
        exchange_count=3,
        holder_count=10,
    )
    result = assess_scam_probability(signals)
    assert result.scam_score == 20
    assert result.verdict == ScamVerdict.LOW_RISK
    assert result.confidence == Confidence.MEDIUM
    assert "Abnormal volume/mcap ratio (250.0%) - Potential wash trading" in result.red_flags


def test_likely_safe_with_few_green_flags_is_medium_confidence():
    signals = TokenSignals(
        top_owner_percentage=25,
        top10_percentage=0,
        verified=True,
        market_cap_usd=500_000,
        exchange_count=2,
        holder_count=1,
    )
    result = assess_scam_probability(signals)
    assert result.verdict == ScamVerdict.LIKELY_SAFE
    assert len(result.green_flags) == 1
    assert result.confidence == Confidence.MEDIUM
