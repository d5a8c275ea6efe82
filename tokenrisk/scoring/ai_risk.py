"""Heuristic AI risk engine: a finer-grained factor scorer with trading advice."""

from loguru import logger

from tokenrisk.models.base import clamp
from tokenrisk.models.risk import AIRiskResult, AIVerdict, Confidence, RiskFactor, ScamAssessment
from tokenrisk.models.token import TokenSignals

MAJOR_NATIVE_SYMBOLS = frozenset(
    {"BTC", "ETH", "BNB", "MATIC", "AVAX", "FTM", "SOL", "ADA", "DOT", "LINK"}
)

_CONTRACT_VERDICTS: list[tuple[float, AIVerdict, str, str]] = [
    (
        85,
        AIVerdict.EXTREME_DANGER,
        "EXTREME DANGER - DO NOT TRADE UNDER ANY CIRCUMSTANCES",
        "This token shows multiple critical red flags indicating an extremely high "
        "probability of being a scam or rug pull. Avoid completely.",
    ),
    (
        70,
        AIVerdict.VERY_HIGH_RISK,
        "VERY HIGH RISK - Strongly NOT recommended",
        "Multiple severe risk factors detected. This token is highly likely to result "
        "in loss of funds. Do not trade.",
    ),
    (
        55,
        AIVerdict.HIGH_RISK,
        "HIGH RISK - Not recommended for trading",
        "Significant risk factors present. Only trade with money you can afford to lose "
        "completely. High chance of rug pull or abandonment.",
    ),
    (
        40,
        AIVerdict.MODERATE_RISK,
        "MODERATE RISK - Proceed with extreme caution",
        "Several concerning factors identified. If trading, use very small position "
        "sizes and set tight stop losses. Monitor closely.",
    ),
    (
        25,
        AIVerdict.LOW_MODERATE_RISK,
        "LOW-MODERATE RISK - Acceptable but monitor closely",
        "Some minor concerns but overall acceptable risk profile. Use reasonable "
        "position sizing and proper risk management.",
    ),
    (
        15,
        AIVerdict.LOW_RISK,
        "LOW RISK - Generally safe for trading",
        "Token shows mostly positive indicators with minimal red flags. Standard "
        "trading precautions apply.",
    ),
    (
        0,
        AIVerdict.MINIMAL_RISK,
        "MINIMAL RISK - Good safety profile",
        "Token demonstrates strong fundamentals and safety indicators. Suitable for "
        "normal trading with standard risk management.",
    ),
]

_NATIVE_VERDICTS: list[tuple[float, AIVerdict, str, str]] = [
    (
        75,
        AIVerdict.VERY_HIGH_RISK,
        "VERY HIGH RISK - Not recommended",
        "This native token shows very poor liquidity and market indicators. High risk "
        "of failed trades and significant slippage.",
    ),
    (
        55,
        AIVerdict.HIGH_RISK,
        "HIGH RISK - Proceed with extreme caution",
        "Low liquidity detected. Only trade with very small amounts and expect high slippage.",
    ),
    (
        35,
        AIVerdict.MODERATE_RISK,
        "MODERATE RISK - Acceptable but risky",
        "Moderate liquidity concerns. Use limit orders and monitor for sudden changes.",
    ),
    (
        20,
        AIVerdict.LOW_RISK,
        "LOW RISK - Decent for trading",
        "Acceptable liquidity for trading. Standard precautions apply.",
    ),
    (
        0,
        AIVerdict.MINIMAL_RISK,
        "MINIMAL RISK - Good liquidity",
        "Good liquidity and market depth. Suitable for normal trading.",
    ),
]


def _pick_verdict(
    score: float, table: list[tuple[float, AIVerdict, str, str]]
) -> tuple[AIVerdict, str, str]:
    for threshold, verdict, recommendation, advice in table:
        if score >= threshold:
            return verdict, recommendation, advice
    _, verdict, recommendation, advice = table[-1]
    return verdict, recommendation, advice


def _factor_confidence(count: int) -> Confidence:
    if count >= 5:
        return Confidence.VERY_HIGH
    if count >= 4:
        return Confidence.HIGH
    if count >= 3:
        return Confidence.MEDIUM
    return Confidence.LOW


class _Tally:
    """Accumulates score, factors and the three message lists."""

    def __init__(self) -> None:
        self.score = 0.0
        self.factors: list[RiskFactor] = []
        self.critical: list[str] = []
        self.warnings: list[str] = []
        self.positives: list[str] = []

    def add(
        self,
        factor: str,
        impact: float,
        severity: str,
        value: float | str | None = None,
        *,
        message: str | None = None,
    ) -> None:
        self.score += impact
        self.factors.append(
            RiskFactor(factor=factor, impact=impact, severity=severity, value=value)
        )
        if message is None:
            return
        if severity == "CRITICAL":
            self.critical.append(message)
        elif severity == "POSITIVE":
            self.positives.append(message)
        else:
            self.warnings.append(message)


def analyze_contract_token(
    signals: TokenSignals,
    scam: ScamAssessment | None = None,
    *,
    rug_pull_risk: bool = False,
) -> AIRiskResult:
    t = _Tally()

    top10 = signals.top10_percentage
    top1 = signals.top_owner_percentage
    mcap = signals.market_cap_usd or 0.0
    vol_pct = (signals.volume_to_market_cap_ratio or 0.0) * 100
    verified = signals.verified
    is_exchange = signals.is_top_owner_exchange
    exchanges = signals.exchange_count

    # Holder concentration
    if top10 >= 95:
        t.add("Extreme concentration (>=95%)", 40, "CRITICAL", top10,
              message=f"Extreme holder concentration: Top 10 holders control {top10:.2f}%")
    elif top10 >= 85:
        t.add("Very high concentration (>=85%)", 30, "CRITICAL", top10,
              message=f"Very high concentration: Top 10 holders control {top10:.2f}%")
    elif top10 >= 70:
        t.add("High concentration (>=70%)", 22, "HIGH", top10,
              message=f"High concentration: Top 10 holders control {top10:.2f}%")
    elif top10 >= 50:
        t.add("Moderate concentration (>=50%)", 12, "MEDIUM", top10,
              message=f"Moderate concentration: Top 10 holders control {top10:.2f}%")
    elif top10 < 30:
        t.add("Good distribution (<30%)", -10, "POSITIVE", top10,
              message=f"Good distribution: Top 10 holders control only {top10:.2f}%")

    if top1 >= 50 and not is_exchange:
        t.add("Single wallet >50% (non-exchange)", 25, "CRITICAL", top1,
              message=f"Single wallet dominance: {top1:.2f}% (Not an exchange)")
    elif top1 >= 30 and not is_exchange:
        t.add("Large single holder >30%", 15, "HIGH", top1,
              message=f"Large single holder: {top1:.2f}% (Not an exchange)")

    # Verification, weighted by how concentrated the supply is
    if not verified:
        if top10 >= 70:
            t.add("Unverified + high concentration", 28, "CRITICAL",
                  message="Unverified contract + high concentration = Extreme rug pull risk")
        elif top10 >= 50:
            t.add("Unverified + moderate concentration", 18, "HIGH",
                  message="Unverified contract with moderate concentration")
        else:
            t.add("Contract not verified", 10, "MEDIUM",
                  message="Contract not verified on explorer")
    else:
        t.add("Contract verified", 0, "POSITIVE",
              message="Contract verified on blockchain explorer")

    # Market cap
    if mcap < 5_000:
        t.add("Extremely low mcap (<$5k)", 35, "CRITICAL", mcap,
              message=f"Extremely low market cap: ${mcap:,.0f} - Easy to manipulate")
    elif mcap < 25_000:
        t.add("Very low mcap (<$25k)", 28, "CRITICAL", mcap,
              message=f"Very low market cap: ${mcap:,.0f}")
    elif mcap < 50_000:
        t.add("Low mcap (<$50k)", 20, "HIGH", mcap, message=f"Low market cap: ${mcap:,.0f}")
    elif mcap < 100_000:
        t.add("Small mcap (<$100k)", 14, "MEDIUM", mcap, message=f"Small market cap: ${mcap:,.0f}")
    elif mcap < 500_000:
        t.add("Microcap (<$500k)", 8, "LOW", mcap)
    elif mcap > 10_000_000:
        t.add("Large mcap (>$10M)", -12, "POSITIVE", mcap,
              message=f"Substantial market cap: ${mcap:,.0f}")
    elif mcap > 1_000_000:
        t.add("Good mcap (>$1M)", -5, "POSITIVE", mcap,
              message=f"Decent market cap: ${mcap:,.0f}")

    # Volume as a share of market cap
    if vol_pct > 500:
        t.add("Abnormal volume (>500%)", 25, "CRITICAL", vol_pct,
              message=f"Suspicious volume: {vol_pct:.1f}% of mcap - Possible wash trading")
    elif vol_pct > 200:
        t.add("Very high volume (>200%)", 15, "HIGH", vol_pct,
              message=f"Very high volume: {vol_pct:.1f}% of mcap")
    elif vol_pct < 0.1 and mcap > 50_000:
        t.add("Extremely low volume (<0.1%)", 18, "HIGH", vol_pct,
              message=f"Extremely low volume: {vol_pct:.2f}% - Dead token risk")
    elif vol_pct < 0.5 and mcap > 100_000:
        t.add("Very low volume (<0.5%)", 12, "MEDIUM", vol_pct,
              message=f"Very low trading volume: {vol_pct:.2f}%")
    elif vol_pct < 2 and mcap > 500_000:
        t.add("Low volume (<2%)", 6, "LOW", vol_pct)
    elif 10 <= vol_pct <= 100:
        t.add("Healthy volume (10-100%)", -8, "POSITIVE", vol_pct,
              message=f"Healthy volume: {vol_pct:.1f}% of market cap")
    elif 5 <= vol_pct < 10:
        t.add("Good volume (5-10%)", -5, "POSITIVE", vol_pct,
              message=f"Good volume: {vol_pct:.1f}% of market cap")

    # Exchange presence
    if exchanges == 0:
        t.add("No exchange listings", 20, "CRITICAL", 0, message="No exchange listings found")
    elif exchanges == 1:
        t.add("Single exchange listing", 12, "HIGH", 1, message="Only listed on 1 exchange")
    elif exchanges == 2:
        t.add("Limited listings (2)", 6, "MEDIUM", 2)
    elif exchanges >= 10:
        t.add("Many exchanges (>=10)", -12, "POSITIVE", exchanges,
              message=f"Listed on {exchanges} exchanges")
    elif exchanges >= 5:
        t.add("Good listings (>=5)", -8, "POSITIVE", exchanges,
              message=f"Listed on {exchanges} exchanges")

    if is_exchange and top1 > 20:
        t.add("Top holder is exchange", -15, "POSITIVE",
              message=f"Top holder is a known exchange ({top1:.2f}%)")

    if rug_pull_risk or (top10 >= 70 and not verified):
        t.add("Rug pull risk indicators", 15, "CRITICAL", message="HIGH RUG PULL RISK detected")

    if scam is not None and scam.scam_score >= 70:
        t.add("High scam assessment score", 12, "CRITICAL", scam.scam_score,
              message=f"High scam score: {scam.scam_score:.0f}/100")

    score = round(clamp(t.score), 2)
    verdict, recommendation, advice = _pick_verdict(score, _CONTRACT_VERDICTS)
    count = len(t.factors)

    logger.debug(
        f"[AI] score={score} verdict={verdict.value} critical={len(t.critical)} "
        f"warnings={len(t.warnings)} positives={len(t.positives)}"
    )
    return AIRiskResult(
        score=score,
        verdict=verdict,
        recommendation=recommendation,
        trading_advice=advice,
        confidence=_factor_confidence(count),
        critical_issues=t.critical,
        warnings=t.warnings,
        positive_factors=t.positives,
        detailed_factors=t.factors,
        factor_count=count,
        analysis=(
            f"AI analyzed {count} risk factors across holder concentration, market "
            f"metrics, and exchange presence. {verdict.value.replace('_', ' ')} detected "
            f"with {len(t.critical)} critical issues, {len(t.warnings)} warnings, and "
            f"{len(t.positives)} positive factors."
        ),
    )


def _major_native_result(symbol: str) -> AIRiskResult:
    return AIRiskResult(
        score=0,
        verdict=AIVerdict.MINIMAL_RISK,
        recommendation="EXCELLENT - Major established cryptocurrency",
        trading_advice=(
            "This is a well-established, major cryptocurrency with excellent liquidity "
            "and minimal risk for trading."
        ),
        confidence=Confidence.ABSOLUTE,
        positive_factors=[
            "Major established blockchain cryptocurrency",
            "Proven track record and security",
            "Maximum liquidity and market depth",
        ],
        detailed_factors=[
            RiskFactor(factor="Major cryptocurrency", impact=0, severity="EXCELLENT", value=symbol)
        ],
        factor_count=1,
        analysis=(
            f"{symbol} is a major, well-established blockchain cryptocurrency "
            "with minimal trading risk."
        ),
    )


def analyze_native_token(signals: TokenSignals, symbol: str) -> AIRiskResult:
    """Liquidity-only variant; majors short-circuit to a fixed minimal result."""
    symbol = symbol.upper()
    if symbol in MAJOR_NATIVE_SYMBOLS:
        return _major_native_result(symbol)

    t = _Tally()
    mcap = signals.market_cap_usd or 0.0
    vol_pct = (signals.volume_to_market_cap_ratio or 0.0) * 100
    exchanges = signals.exchange_count

    if mcap < 50_000:
        t.add("Very low mcap (<$50k)", 45, "HIGH", mcap,
              message=f"Very low market cap: ${mcap:,.0f}")
    elif mcap < 500_000:
        t.add("Low mcap (<$500k)", 30, "MEDIUM", mcap, message=f"Low market cap: ${mcap:,.0f}")
    elif mcap < 5_000_000:
        t.add("Small mcap (<$5M)", 18, "LOW", mcap)
    elif mcap > 100_000_000:
        t.add("Large mcap (>$100M)", -15, "POSITIVE", mcap,
              message=f"Large market cap: ${mcap:,.0f}")
    elif mcap > 10_000_000:
        t.add("Good mcap (>$10M)", -10, "POSITIVE", mcap,
              message=f"Decent market cap: ${mcap:,.0f}")

    if vol_pct < 0.2:
        t.add("Extremely low volume (<0.2%)", 35, "HIGH", vol_pct,
              message=f"Extremely low volume: {vol_pct:.2f}%")
    elif vol_pct < 1:
        t.add("Very low volume (<1%)", 22, "MEDIUM", vol_pct,
              message=f"Very low volume: {vol_pct:.2f}%")
    elif vol_pct < 3:
        t.add("Low volume (<3%)", 12, "LOW", vol_pct)
    elif 5 <= vol_pct <= 100:
        t.add("Healthy volume (5-100%)", -12, "POSITIVE", vol_pct,
              message=f"Healthy volume: {vol_pct:.1f}%")
    elif vol_pct > 150:
        t.add("Very high volume (>150%)", 18, "MEDIUM", vol_pct,
              message=f"Unusually high volume: {vol_pct:.1f}%")

    # Native warnings never count as critical issues
    if exchanges == 0:
        t.add("No exchange listings", 40, "HIGH", 0, message="No exchange listings found")
    elif exchanges == 1:
        t.add("Single exchange", 25, "HIGH", 1, message="Only 1 exchange listing")
    elif exchanges >= 15:
        t.add("Many exchanges (>=15)", -15, "POSITIVE", exchanges,
              message=f"Listed on {exchanges} exchanges")
    elif exchanges >= 8:
        t.add("Good listings (>=8)", -10, "POSITIVE", exchanges,
              message=f"Listed on {exchanges} exchanges")

    score = round(clamp(t.score), 2)
    verdict, recommendation, advice = _pick_verdict(score, _NATIVE_VERDICTS)
    count = len(t.factors)

    logger.debug(f"[AI] native {symbol} score={score} verdict={verdict.value}")
    return AIRiskResult(
        score=score,
        verdict=verdict,
        recommendation=recommendation,
        trading_advice=advice,
        confidence=Confidence.HIGH if count >= 3 else Confidence.MEDIUM,
        warnings=t.warnings,
        positive_factors=t.positives,
        detailed_factors=t.factors,
        factor_count=count,
        analysis=(
            f"AI analyzed {count} liquidity and market factors for this native token. "
            f"{verdict.value.replace('_', ' ')} detected."
        ),
    )
