"""Fold per-chain analyses into one symbol-level verdict.

Failed chains (``analysis is None``) are simply absent from every aggregate.
Gap-hunter risk uses a worst-case policy: the global figure is the maximum
across chains, never an average.
"""

import math

from loguru import logger

from tokenrisk.models.analysis import ChainResult, HolderConcentration
from tokenrisk.models.risk import GapHunterRisk, RiskLevel
from tokenrisk.scoring.gap_hunter import SKIP_THRESHOLD, recommendation_for

NO_DATA_REASON = "No valid analysis data available"
SPAM_GLOBAL_THRESHOLD = 60


def round_half_up(value: float) -> int:
    """Halves round away from zero for non-negative scores (10.5 -> 11)."""
    return math.floor(value + 0.5)


def _valid(results: list[ChainResult]) -> list[ChainResult]:
    return [r for r in results if r.analysis is not None]


def calculate_global_score(results: list[ChainResult]) -> dict[str, float]:
    """Global spam score = round(0.6 * max + 0.4 * mean) over valid chains.

    Chains scoring exactly 0 are included; a clean chain pulls the mean down.
    """
    scores = [r.analysis.spam_score for r in _valid(results)]
    if not scores:
        return {"score": 0, "averageScore": 0, "maxScore": 0, "minScore": 0}

    max_score = max(scores)
    average = sum(scores) / len(scores)
    return {
        "score": round_half_up(max_score * 0.6 + average * 0.4),
        "averageScore": round_half_up(average),
        "maxScore": max_score,
        "minScore": min(scores),
    }


def determine_overall_risk(results: list[ChainResult], global_score: float) -> str:
    valid = _valid(results)
    if not valid:
        return "UNKNOWN"

    critical = sum(1 for r in valid if r.analysis.risk_level == RiskLevel.CRITICAL)
    high = sum(1 for r in valid if r.analysis.risk_level == RiskLevel.HIGH)

    if critical > 0 or global_score >= 80:
        return RiskLevel.CRITICAL.value
    if high > len(valid) / 2 or global_score >= 60:
        return RiskLevel.HIGH.value
    if global_score >= 40:
        return RiskLevel.MEDIUM.value
    if global_score >= 20:
        return RiskLevel.LOW.value
    return RiskLevel.MINIMAL.value


def _worst_chain(valid: list[ChainResult]) -> ChainResult:
    return max(valid, key=lambda r: r.analysis.gap_hunter_bot_risk.risk_percentage)


def aggregate_gap_hunter_risk(results: list[ChainResult]) -> GapHunterRisk:
    """Worst-case gap-hunter risk across chains.

    With no valid chain the result is the fail-safe maximum: 100%, hard skip.
    """
    valid = _valid(results)
    if not valid:
        logger.debug("[MULTICHAIN] no valid chains, returning fail-safe risk")
        return GapHunterRisk(
            risk_percentage=100.0,
            should_skip=True,
            hard_skip=True,
            hard_skip_reasons=[NO_DATA_REASON],
            recommendation=recommendation_for(100.0, True, True),
        )

    risks = [r.analysis.gap_hunter_bot_risk for r in valid]
    worst = _worst_chain(valid).analysis.gap_hunter_bot_risk

    reasons: list[str] = []
    for risk in risks:
        for reason in risk.hard_skip_reasons:
            if reason not in reasons:
                reasons.append(reason)

    risk_pct = worst.risk_percentage
    hard_skip = any(r.hard_skip for r in risks)
    should_skip = risk_pct >= SKIP_THRESHOLD or hard_skip

    return GapHunterRisk(
        risk_percentage=risk_pct,
        should_skip=should_skip,
        hard_skip=hard_skip,
        hard_skip_reasons=reasons,
        components=dict(worst.components),
        recommendation=recommendation_for(risk_pct, should_skip, hard_skip),
        ai_risk_score=worst.ai_risk_score,
    )


def worst_holder_concentration(results: list[ChainResult]) -> HolderConcentration | None:
    """Holder concentration of the chain with the highest gap-hunter risk."""
    valid = _valid(results)
    if not valid:
        return None
    return _worst_chain(valid).analysis.holder_concentration


def multichain_summary(results: list[ChainResult]) -> str:
    valid = _valid(results)
    total = len(valid)
    if total == 0:
        return "Unable to analyze token - no valid data retrieved."

    spam_chains = sum(1 for r in valid if r.analysis.is_spam)
    if spam_chains == 0:
        return (
            f"Token appears legitimate across all {total} chain(s) analyzed "
            "with low risk indicators."
        )
    if spam_chains == total:
        return (
            f"WARNING: Token shows spam characteristics on ALL {total} chain(s) "
            "- high risk of scam."
        )
    return (
        f"Mixed risk profile: {spam_chains} of {total} chain(s) show spam indicators "
        "- proceed with caution."
    )

