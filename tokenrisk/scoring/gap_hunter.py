"""Gap-hunter risk: weighted composite deciding whether the gap bot may trade.

riskPercentage = 0.35*H + 0.20*U + 0.20*M + 0.15*V + 0.10*P

H  holder concentration (top 10 %)
U  unverified contract
M  microcap
V  volume/mcap anomaly (triangular penalty around 175%)
P  platform spam proxy (spam risk level)

Hard-skip rules are evaluated independently of the weighted score; every rule
that fires contributes its own reason.
"""

from loguru import logger

from tokenrisk.models.base import clamp
from tokenrisk.models.risk import GapHunterComponent, GapHunterRisk, RiskLevel
from tokenrisk.models.token import TokenSignals

SKIP_THRESHOLD = 60.0
CAUTION_THRESHOLD = 40.0

HEALTHY_VOLUME_LOW_PCT = 50.0
HEALTHY_VOLUME_HIGH_PCT = 300.0
VOLUME_CENTER_PCT = 175.0

WEIGHTS = {"H": 0.35, "U": 0.20, "M": 0.20, "V": 0.15, "P": 0.10}
NATIVE_WEIGHTS = {"M": 0.50, "V": 0.50}

RISK_LEVEL_PROXY = {
    RiskLevel.MINIMAL: 0.0,
    RiskLevel.LOW: 25.0,
    RiskLevel.MEDIUM: 50.0,
    RiskLevel.HIGH: 75.0,
    RiskLevel.CRITICAL: 100.0,
}

NATIVE_NOTE = (
    "Native blockchain tokens have different risk profiles than smart contract "
    "tokens. This assessment focuses on liquidity and trading viability."
)


def holder_component(top10_percentage: float) -> float:
    if top10_percentage >= 90:
        return 100.0
    if top10_percentage >= 70:
        return 80.0
    if top10_percentage >= 50:
        return 50.0
    if top10_percentage >= 40:
        return 30.0
    return 0.0


def microcap_component(market_cap: float | None) -> float:
    mcap = market_cap or 0.0
    if mcap < 50_000:
        return 100.0
    if mcap < 100_000:
        return 80.0
    if mcap < 500_000:
        return 60.0
    if mcap < 1_000_000:
        return 40.0
    if mcap < 10_000_000:
        return 20.0
    return 0.0


def volume_anomaly_penalty(ratio: float | None) -> float:
    """0 inside the healthy 50-300% band, else linear distance from 175%.

    A missing ratio is scored as 0% volume, i.e. the maximum penalty.
    """
    pct = (ratio or 0.0) * 100
    if HEALTHY_VOLUME_LOW_PCT <= pct <= HEALTHY_VOLUME_HIGH_PCT:
        return 0.0
    return clamp(abs(pct - VOLUME_CENTER_PCT) / VOLUME_CENTER_PCT * 100)


def platform_component(risk_level: RiskLevel | str | None, spam_score: float) -> float:
    """Spam risk level as a numeric proxy; unknown levels fall back to the raw score."""
    try:
        level = RiskLevel(risk_level) if risk_level is not None else None
    except ValueError:
        level = None
    if level is None:
        return clamp(spam_score)
    return RISK_LEVEL_PROXY[level]


def recommendation_for(risk_percentage: float, should_skip: bool, hard_skip: bool) -> str:
    if hard_skip:
        return "HARD SKIP - Do not trade"
    if should_skip:
        return "SKIP - High risk for gap bot"
    if risk_percentage >= CAUTION_THRESHOLD:
        return "CAUTION - Risky trade"
    return "ACCEPTABLE for gap bot"


def calculate_gap_hunter_risk(
    signals: TokenSignals,
    spam_score: float,
    risk_level: RiskLevel | str | None,
) -> GapHunterRisk:
    top10 = signals.top10_percentage
    verified = signals.verified

    components = {
        "H": holder_component(top10),
        "U": 0.0 if verified else 100.0,
        "M": microcap_component(signals.market_cap_usd),
        "V": volume_anomaly_penalty(signals.volume_to_market_cap_ratio),
        "P": platform_component(risk_level, spam_score),
    }
    risk_pct = round(sum(WEIGHTS[k] * v for k, v in components.items()), 2)

    hard_skip_reasons: list[str] = []
    if top10 >= 70:
        hard_skip_reasons.append("Top 10 holders ≥70%")
    level_value = risk_level.value if isinstance(risk_level, RiskLevel) else risk_level
    if level_value in (RiskLevel.HIGH.value, RiskLevel.CRITICAL.value):
        hard_skip_reasons.append(f"Risk level is {level_value}")
    if not verified and top10 >= 55:
        hard_skip_reasons.append("Unverified contract AND Top 10 ≥55%")

    hard_skip = bool(hard_skip_reasons)
    should_skip = risk_pct >= SKIP_THRESHOLD or hard_skip

    logger.debug(
        f"[GAP] risk={risk_pct:.2f}% H={components['H']:.0f} U={components['U']:.0f} "
        f"M={components['M']:.0f} V={components['V']:.1f} P={components['P']:.0f} "
        f"hard_skip={hard_skip}"
    )

    descriptions = {
        "H": "Holder concentration",
        "U": "Unverified contract",
        "M": "Microcap risk",
        "V": "Volume/MarketCap anomaly",
        "P": "Platform spam flags",
    }
    return GapHunterRisk(
        risk_percentage=risk_pct,
        should_skip=should_skip,
        hard_skip=hard_skip,
        hard_skip_reasons=hard_skip_reasons,
        components={
            k: GapHunterComponent(
                value=round(v, 2),
                weight=f"{WEIGHTS[k] * 100:.0f}%",
                description=descriptions[k],
            )
            for k, v in components.items()
        },
        recommendation=recommendation_for(risk_pct, should_skip, hard_skip),
    )


def calculate_native_gap_hunter_risk(signals: TokenSignals) -> GapHunterRisk:
    """Market-only variant for chain-native assets.

    Holder, verification and spam inputs do not exist for a native asset, so
    no hard-skip rule can fire; the soft skip still applies at 60%.
    """
    mcap = signals.market_cap_usd
    m = microcap_component(mcap)
    v = volume_anomaly_penalty(signals.volume_to_market_cap_ratio)
    risk_pct = round(NATIVE_WEIGHTS["M"] * m + NATIVE_WEIGHTS["V"] * v, 2)
    should_skip = risk_pct >= SKIP_THRESHOLD

    if mcap and mcap > 1_000_000_000:
        recommendation = "EXCELLENT - Major cryptocurrency with high liquidity"
    elif mcap and mcap > 100_000_000:
        recommendation = "GOOD - Established cryptocurrency"
    elif should_skip:
        recommendation = "CAUTION - Lower liquidity native token"
    else:
        recommendation = "ACCEPTABLE - Moderate liquidity"

    logger.debug(f"[GAP] native risk={risk_pct:.2f}% M={m:.0f} V={v:.1f}")
    return GapHunterRisk(
        risk_percentage=risk_pct,
        should_skip=should_skip,
        hard_skip=False,
        hard_skip_reasons=[],
        components={
            "M": GapHunterComponent(value=round(m, 2), weight="50%", description="Market cap risk"),
            "V": GapHunterComponent(
                value=round(v, 2), weight="50%", description="Volume/MarketCap ratio"
            ),
        },
        recommendation=recommendation,
        note=NATIVE_NOTE,
    )
