"""Scam probability: second additive score with red/green flags and a verdict."""

from loguru import logger

from tokenrisk.models.base import clamp
from tokenrisk.models.risk import Confidence, ScamAssessment, ScamVerdict
from tokenrisk.models.token import TokenSignals


def assess_scam_probability(signals: TokenSignals) -> ScamAssessment:
    red_flags: list[str] = []
    green_flags: list[str] = []
    score = 0

    top1 = signals.top_owner_percentage
    top10 = signals.top10_percentage
    mcap = signals.market_cap_usd
    ratio = signals.volume_to_market_cap_ratio
    has_holders = signals.holder_count > 0

    # Holder data: absence is a transparency concern, not a positive
    if not has_holders:
        score += 10
        red_flags.append("No holder data available (transparency concern)")
    else:
        if top10 > 70:
            score += 25
            red_flags.append(f"Top 10 holders control {top10:.2f}% (Rug-pull risk)")
        elif top10 > 0:
            green_flags.append(f"Top 10 holders control {top10:.2f}%")

        if top1 > 50 and not signals.is_top_owner_exchange:
            score += 20
            red_flags.append(f"Single wallet holds {top1:.2f}% (Not an exchange)")
        elif top1 < 20:
            green_flags.append(f"Largest wallet holds only {top1:.2f}%")

        if signals.is_top_owner_exchange:
            score -= 15
            green_flags.append("Top holder is an exchange")

    if not signals.verified:
        score += 15
        red_flags.append("Contract not verified (Harder to audit)")
    else:
        green_flags.append("Contract verified on explorer")

    if mcap is None or mcap < 50_000:
        score += 15
        red_flags.append(f"Very low market cap ({mcap or 0:,.0f}) - Easy to manipulate")
    elif mcap > 1_000_000:
        green_flags.append(f"Decent market cap ({mcap:,.0f})")

    if ratio is not None:
        if ratio > 2.0:
            score += 20
            red_flags.append(
                f"Abnormal volume/mcap ratio ({ratio * 100:.1f}%) - Potential wash trading"
            )
        elif ratio < 0.001 and (mcap or 0) > 10_000:
            score += 10
            red_flags.append("Extremely low trading volume - Potential dead token")
        elif 0.01 <= ratio <= 0.5:
            green_flags.append(f"Healthy volume/mcap ratio ({ratio * 100:.1f}%)")

    if signals.exchange_count == 0:
        score += 15
        red_flags.append("No exchange listings found")
    elif signals.exchange_count >= 3:
        green_flags.append(f"Listed on {signals.exchange_count} exchanges")

    final = clamp(score)
    verdict, confidence = _verdict(final, len(green_flags))
    logger.debug(
        f"[SCAM] score={final:.0f} verdict={verdict.value} "
        f"red={len(red_flags)} green={len(green_flags)}"
    )
    return ScamAssessment(
        scam_score=final,
        verdict=verdict,
        confidence=confidence,
        red_flags=red_flags,
        green_flags=green_flags,
        summary=scam_summary(verdict, final, len(red_flags), len(green_flags)),
    )


def _verdict(score: float, green_count: int) -> tuple[ScamVerdict, Confidence]:
    if score >= 80:
        return ScamVerdict.LIKELY_SCAM, Confidence.VERY_HIGH
    if score >= 65:
        return ScamVerdict.LIKELY_SCAM, Confidence.HIGH
    if score >= 50:
        return ScamVerdict.HIGH_RISK, Confidence.HIGH
    if score >= 35:
        return ScamVerdict.MODERATE_RISK, Confidence.HIGH
    if score >= 20:
        return ScamVerdict.LOW_RISK, Confidence.MEDIUM
    return ScamVerdict.LIKELY_SAFE, Confidence.HIGH if green_count >= 3 else Confidence.MEDIUM


def scam_summary(verdict: ScamVerdict, score: float, red_count: int, green_count: int) -> str:
    shown = f"{score:.0f}/100"
    if verdict is ScamVerdict.LIKELY_SCAM:
        return (
            f"LIKELY SCAM - Scam Score: {shown}. {red_count} critical red flags detected. "
            "DO NOT INVEST - Exercise extreme caution."
        )
    if verdict is ScamVerdict.HIGH_RISK:
        return (
            f"HIGH RISK - Scam Score: {shown}. {red_count} major concerns identified. "
            "NOT RECOMMENDED for investment."
        )
    if verdict is ScamVerdict.MODERATE_RISK:
        return (
            f"MODERATE RISK - Scam Score: {shown}. {red_count} concerns present. "
            "Proceed with extreme caution and DYOR."
        )
    if verdict is ScamVerdict.LOW_RISK:
        return (
            f"LOW RISK - Scam Score: {shown}. "
            "Token shows acceptable indicators but still do your research."
        )
    return (
        f"LIKELY SAFE - Scam Score: {shown}. {green_count} positive indicators found. "
        "Appears legitimate."
    )
