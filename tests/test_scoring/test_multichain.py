"""Tests for multi-chain aggregation."""

from tokenrisk.models.analysis import (
    ChainResult,
    HolderConcentration,
    MarketSnapshot,
    TokenAnalysis,
    TokenInfo,
)
from tokenrisk.models.risk import (
    AIRiskResult,
    AIVerdict,
    Confidence,
    GapHunterRisk,
    OwnershipAnalysis,
    RiskLevel,
    ScamAssessment,
    ScamVerdict,
)
from tokenrisk.scoring.multichain import (
    NO_DATA_REASON,
    aggregate_gap_hunter_risk,
    calculate_global_score,
    determine_overall_risk,
    multichain_summary,
    round_half_up,
    worst_holder_concentration,
)


def _chain(
    network: str,
    *,
    risk_pct: float = 10,
    hard_skip: bool = False,
    reasons: list[str] | None = None,
    spam_score: float = 10,
    risk_level: RiskLevel = RiskLevel.MINIMAL,
    is_spam: bool = False,
    top10: float = 20,
    ai_score: float = 5,
) -> ChainResult:
    gap = GapHunterRisk(
        risk_percentage=risk_pct,
        should_skip=risk_pct >= 60 or hard_skip,
        hard_skip=hard_skip,
        hard_skip_reasons=reasons or (["Top 10 holders ≥70%"] if hard_skip else []),
        ai_risk_score=AIRiskResult(
            score=ai_score,
            verdict=AIVerdict.LOW_RISK,
            recommendation="",
            trading_advice="",
            confidence=Confidence.LOW,
        ),
    )
    analysis = TokenAnalysis(
        gap_hunter_bot_risk=gap,
        is_spam=is_spam,
        spam_score=spam_score,
        risk_level=risk_level,
        scam_assessment=ScamAssessment(
            scam_score=0, verdict=ScamVerdict.LIKELY_SAFE, confidence=Confidence.MEDIUM
        ),
        token=TokenInfo(name="Test", symbol="TST", network=network, verified=True),
        holder_concentration=HolderConcentration(top10_percentage=top10),
        market_data=MarketSnapshot(),
        ownership_analysis=OwnershipAnalysis(),
    )
    return ChainResult(network=network, contract_address=f"0x{network}", analysis=analysis)


def _failed(network: str) -> ChainResult:
    return ChainResult(network=network, contract_address=f"0x{network}", error="boom")


def test_worst_case_risk_and_hard_skip():
    results = [
        _chain("bsc", risk_pct=30, ai_score=10, top10=40),
        _chain("eth", risk_pct=70, hard_skip=True, ai_score=80, top10=90),
    ]
    risk = aggregate_gap_hunter_risk(results)
    assert risk.risk_percentage == 70
    assert risk.hard_skip is True
    assert risk.should_skip is True
    assert risk.hard_skip_reasons == ["Top 10 holders ≥70%"]
    assert risk.ai_risk_score.score == 80
    assert worst_holder_concentration(results).top10_percentage == 90


def test_hard_skip_on_low_risk_chain_still_propagates():
    results = [
        _chain("bsc", risk_pct=20, hard_skip=True, reasons=["Risk level is HIGH"]),
        _chain("eth", risk_pct=35),
    ]
    risk = aggregate_gap_hunter_risk(results)
    assert risk.risk_percentage == 35
    assert risk.hard_skip is True
    assert risk.should_skip is True
    assert risk.hard_skip_reasons == ["Risk level is HIGH"]
    assert risk.recommendation == "HARD SKIP - Do not trade"


def test_reasons_are_deduplicated_in_order():
    results = [
        _chain("bsc", hard_skip=True, reasons=["A", "B"]),
        _chain("eth", hard_skip=True, reasons=["B", "C"]),
    ]
    assert aggregate_gap_hunter_risk(results).hard_skip_reasons == ["A", "B", "C"]


def test_no_valid_chain_is_fail_safe():
    for results in ([], [_failed("eth"), _failed("bsc")]):
        risk = aggregate_gap_hunter_risk(results)
        assert risk.risk_percentage == 100
        assert risk.hard_skip is True
        assert risk.should_skip is True
        assert risk.hard_skip_reasons == [NO_DATA_REASON]
        assert worst_holder_concentration(results) is None


def test_failed_chains_are_ignored():
    results = [_failed("polygon"), _chain("eth", risk_pct=42)]
    assert aggregate_gap_hunter_risk(results).risk_percentage == 42


def test_global_score_blends_max_and_mean():
    results = [_chain("eth", spam_score=80), _chain("bsc", spam_score=20)]
    score = calculate_global_score(results)
    assert score == {"score": 68, "averageScore": 50, "maxScore": 80, "minScore": 20}


def test_global_score_includes_clean_chains():
    results = [_chain("eth", spam_score=60), _chain("bsc", spam_score=0)]
    assert calculate_global_score(results)["score"] == 48


def test_global_score_rounds_halves_up():
    results = [
        _chain("eth", spam_score=15),
        _chain("bsc", spam_score=0),
        _chain("base", spam_score=0),
        _chain("arbitrum", spam_score=0),
    ]
    # 15*0.6 + 3.75*0.4 = 10.5
    score = calculate_global_score(results)
    assert score["score"] == 11
    assert score["averageScore"] == 4
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_global_score_without_data():
    assert calculate_global_score([_failed("eth")])["score"] == 0


def test_overall_risk():
    assert determine_overall_risk([_failed("eth")], 0) == "UNKNOWN"
    assert determine_overall_risk([_chain("eth", risk_level=RiskLevel.CRITICAL)], 10) == "CRITICAL"
    assert determine_overall_risk([_chain("eth")], 85) == "CRITICAL"
    assert determine_overall_risk([_chain("eth", risk_level=RiskLevel.HIGH)], 10) == "HIGH"
    two = [_chain("eth", risk_level=RiskLevel.HIGH), _chain("bsc")]
    assert determine_overall_risk(two, 45) == "MEDIUM"
    assert determine_overall_risk(two, 65) == "HIGH"
    assert determine_overall_risk([_chain("eth")], 25) == "LOW"
    assert determine_overall_risk([_chain("eth")], 5) == "MINIMAL"


def test_summary_texts():
    assert multichain_summary([]).startswith("Unable to analyze")
    clean = [_chain("eth"), _chain("bsc")]
    assert multichain_summary(clean).startswith("Token appears legitimate across all 2")
    spam = [_chain("eth", is_spam=True)]
    assert multichain_summary(spam).startswith("WARNING")
    mixed = [_chain("eth", is_spam=True), _chain("bsc")]
    assert multichain_summary(mixed).startswith("Mixed risk profile: 1 of 2")
