"""Tests for the heuristic AI risk engine."""

from tokenrisk.models.risk import AIVerdict, Confidence
from tokenrisk.models.token import TokenSignals
from tokenrisk.scoring.ai_risk import analyze_contract_token, analyze_native_token
from tokenrisk.scoring.scam import assess_scam_probability


class TestContractToken:
    def test_rug_profile_is_extreme_danger(self, rug_signals) -> None:
        result = analyze_contract_token(rug_signals)
        assert result.score == 100
        assert result.verdict == AIVerdict.EXTREME_DANGER
        assert result.recommendation.startswith("EXTREME DANGER")
        assert result.factor_count == 6
        assert result.confidence == Confidence.VERY_HIGH
        assert len(result.critical_issues) == 6
        assert "HIGH RUG PULL RISK detected" in result.critical_issues
        assert result.positive_factors == []

    def test_high_scam_score_adds_factor(self, rug_signals) -> None:
        scam = assess_scam_probability(rug_signals)
        assert scam.scam_score >= 70
        result = analyze_contract_token(rug_signals, scam)
        assert result.factor_count == 7
        assert any(f.factor == "High scam assessment score" for f in result.detailed_factors)

    def test_blue_chip_is_minimal(self, blue_chip_signals) -> None:
        result = analyze_contract_token(blue_chip_signals)
        assert result.score == 0
        assert result.verdict == AIVerdict.MINIMAL_RISK
        assert result.critical_issues == []
        assert result.warnings == []
        assert len(result.positive_factors) == 5
        assert result.confidence == Confidence.VERY_HIGH

    def test_moderate_profile(self) -> None:
        signals = TokenSignals(
            top10_percentage=60,
            top_owner_percentage=35,
            verified=True,
            market_cap_usd=200_000,
            volume_to_market_cap_ratio=0.03,
            exchange_count=3,
        )
        result = analyze_contract_token(signals)
        # 12 (top10 >=50) + 15 (single holder >30) + 0 (verified) + 8 (microcap)
        assert result.score == 35
        assert result.verdict == AIVerdict.LOW_MODERATE_RISK
        assert result.factor_count == 4
        assert result.confidence == Confidence.HIGH
        assert len(result.warnings) == 2
        assert result.positive_factors == ["Contract verified on blockchain explorer"]

    def test_rug_pull_flag_from_holder_concentration(self) -> None:
        signals = TokenSignals(
            top10_percentage=40, verified=True, market_cap_usd=2_000_000, exchange_count=3
        )
        plain = analyze_contract_token(signals)
        flagged = analyze_contract_token(signals, rug_pull_risk=True)
        assert flagged.score == plain.score + 15

    def test_exchange_top_holder_is_positive(self) -> None:
        signals = TokenSignals(
            top10_percentage=45,
            top_owner_percentage=40,
            is_top_owner_exchange=True,
            verified=True,
            market_cap_usd=2_000_000,
            volume_to_market_cap_ratio=0.2,
            exchange_count=6,
        )
        result = analyze_contract_token(signals)
        assert "Top holder is a known exchange (40.00%)" in result.positive_factors
        assert not any("Large single holder" in w for w in result.warnings)
        assert result.score == 0

    def test_output_is_camel_case(self, rug_signals) -> None:
        data = analyze_contract_token(rug_signals).to_json_dict()
        assert {"criticalIssues", "positiveFactors", "tradingAdvice", "factorCount"} <= set(data)


class TestNativeToken:
    def test_major_native_short_circuits(self) -> None:
        result = analyze_native_token(TokenSignals(is_native_token=True), "btc")
        assert result.score == 0
        assert result.verdict == AIVerdict.MINIMAL_RISK
        assert result.confidence == Confidence.ABSOLUTE
        assert result.factor_count == 1

    def test_illiquid_native_has_warnings_not_critical_issues(self) -> None:
        signals = TokenSignals(
            market_cap_usd=30_000, volume_to_market_cap_ratio=0.001, is_native_token=True
        )
        result = analyze_native_token(signals, "KDA")
        assert result.score == 100
        assert result.verdict == AIVerdict.VERY_HIGH_RISK
        assert result.critical_issues == []
        assert len(result.warnings) == 3
        assert result.confidence == Confidence.HIGH

    def test_liquid_native_is_minimal(self) -> None:
        signals = TokenSignals(
            market_cap_usd=2_000_000_000,
            volume_to_market_cap_ratio=0.2,
            exchange_count=20,
            is_native_token=True,
        )
        result = analyze_native_token(signals, "ATOM")
        assert result.score == 0
        assert result.verdict == AIVerdict.MINIMAL_RISK
        assert len(result.positive_factors) == 3
