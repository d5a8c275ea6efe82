"""Spam score: additive rule-based 0-100 score.

Each bucket contributes at most one tier (the highest that matches). Reasons
are emitted in bucket order so the output reads top-down like the rule table.
"""

from loguru import logger

from tokenrisk.models.base import clamp
from tokenrisk.models.risk import RiskLevel, ScamPattern, SpamResult
from tokenrisk.models.token import TokenSignals


def risk_level_for_score(score: float) -> RiskLevel:
    if score >= 80:
        return RiskLevel.CRITICAL
    if score >= 60:
        return RiskLevel.HIGH
    if score >= 40:
        return RiskLevel.MEDIUM
    if score >= 20:
        return RiskLevel.LOW
    return RiskLevel.MINIMAL


def calculate_spam_score(signals: TokenSignals) -> SpamResult:
    """Score ownership, listing, verification and market signals.

    Score breakdown:
    - Top owner concentration: 0-40 pts
    - Top 10 concentration: 0-25 pts
    - Exchange listings: 0-25 pts
    - Unverified contract: 0-10 pts
    - Market cap: 0-15 pts
    - Volume/mcap ratio: 0-15 pts
    - Exchange is the top holder: -10 to -20 pts
    """
    score = 0
    reasons: list[str] = []

    top1 = signals.top_owner_percentage
    top10 = signals.top10_percentage
    mcap = signals.market_cap_usd
    ratio = signals.volume_to_market_cap_ratio

    # --- Top owner concentration (0-40) ---
    if top1 > 80:
        score += 40
        reasons.append("Extreme ownership concentration (>80%)")
    elif top1 > 60:
        score += 30
        reasons.append("High ownership concentration (>60%)")
    elif top1 > 40:
        score += 20
        reasons.append("Moderate ownership concentration (>40%)")
    elif top1 > 25:
        score += 10
        reasons.append("Notable ownership concentration (>25%)")

    # --- Top 10 concentration (0-25) ---
    if top10 > 95:
        score += 25
        reasons.append("Top 10 holders control >95% of supply")
    elif top10 > 90:
        score += 20
        reasons.append("Top 10 holders control >90% of supply")
    elif top10 > 80:
        score += 15
        reasons.append("Top 10 holders control >80% of supply")
    elif top10 > 70:
        score += 10
        reasons.append("Top 10 holders control >70% of supply")
    elif top10 > 60:
        score += 5
        reasons.append("Top 10 holders control >60% of supply")

    # --- Exchange listings (0-25) ---
    exchanges = signals.exchange_count
    if exchanges == 0:
        score += 25
        reasons.append("No exchange listings found")
    elif exchanges == 1:
        score += 15
        reasons.append("Listed on only one exchange")
    elif exchanges < 5:
        score += 5
        reasons.append("Limited exchange presence")

    # --- Verification (0-10) ---
    if not signals.verified:
        score += 10
        reasons.append("Token not verified")

    # --- Market cap (0-15) --- missing mcap scores as the lowest tier
    if mcap is None or mcap < 10_000:
        score += 15
        reasons.append("Very low or no market cap (<$10k)")
    elif mcap < 50_000:
        score += 12
        reasons.append("Very low market cap (<$50k)")
    elif mcap < 100_000:
        score += 8
        reasons.append("Low market cap (<$100k)")
    elif mcap < 500_000:
        score += 5
        reasons.append("Small market cap (<$500k)")

    # --- Volume / market cap (0-15) ---
    if ratio is not None:
        if ratio > 2.0:
            score += 15
            reasons.append("Abnormal volume/market cap ratio (>200%)")
        elif ratio < 0.001 and (mcap or 0) > 10_000:
            score += 10
            reasons.append("Extremely low trading volume (<0.1% of market cap)")
        elif ratio < 0.01 and (mcap or 0) > 50_000:
            score += 5
            reasons.append("Very low trading volume (<1% of market cap)")

    # --- Exchange is the top holder (reduces score) ---
    if signals.is_top_owner_exchange:
        if top1 > 50:
            score -= 15
        elif top1 > 30:
            score -= 20
        else:
            score -= 10
        reasons.append("Top owner is a known exchange (reduces risk)")

    final = clamp(score)
    risk = risk_level_for_score(final)
    logger.debug(f"[SPAM] score={final:.0f} risk={risk.value} rules={len(reasons)}")
    return SpamResult(score=final, reasons=reasons, risk=risk)


def detect_scam_pattern(signals: TokenSignals) -> ScamPattern:
    """Match well-known scam shapes; first match wins."""
    top1 = signals.top_owner_percentage

    if top1 > 90 and not signals.liquidity_usd:
        return ScamPattern(pattern="honeypot", confidence="high")

    if top1 > 70 and not signals.verified and signals.exchange_count == 0:
        return ScamPattern(pattern="rug_pull", confidence="high")

    if top1 > 50 and signals.market_cap_usd and signals.market_cap_usd < 50_000:
        return ScamPattern(pattern="pump_dump", confidence="medium")

    return ScamPattern()
