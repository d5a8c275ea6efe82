"""Descriptive market labels shown alongside the numeric scores."""


def assess_liquidity_risk(market_cap: float | None) -> str:
    if not market_cap:
        return "UNKNOWN"
    if market_cap < 10_000:
        return "CRITICAL"
    if market_cap < 50_000:
        return "VERY_HIGH"
    if market_cap < 100_000:
        return "HIGH"
    if market_cap < 500_000:
        return "MODERATE"
    if market_cap < 1_000_000:
        return "LOW"
    return "MINIMAL"


def assess_native_liquidity(market_cap: float | None) -> str:
    """Native assets live on a different scale, so the ladder is inverted."""
    if not market_cap:
        return "UNKNOWN"
    if market_cap > 10_000_000_000:
        return "EXCELLENT"
    if market_cap > 1_000_000_000:
        return "VERY_GOOD"
    if market_cap > 100_000_000:
        return "GOOD"
    if market_cap > 10_000_000:
        return "MODERATE"
    if market_cap > 1_000_000:
        return "LOW"
    return "MINIMAL"


def detect_volume_anomaly(
    ratio: float | None,
    market_cap: float | None,
    *,
    native: bool = False,
) -> bool:
    """Wash trading (>200% of mcap per day) or a dead market (<0.1%)."""
    if not ratio:
        return False
    if ratio > 2:
        return True
    if ratio < 0.001 and (native or (market_cap or 0) > 10_000):
        return True
    return False


def assess_volume_liquidity(ratio: float | None) -> dict[str, str]:
    """Tradability band for the gap bot, keyed on volume as % of market cap."""
    if not ratio:
        return {"status": "UNKNOWN", "description": "No volume data available"}

    pct = ratio * 100
    if pct > 500:
        status, description = "SUSPICIOUS", "Possible wash trading - abnormally high volume"
    elif 50 <= pct <= 300:
        status, description = "GOOD", "Good tradable liquidity"
    elif 20 <= pct < 50:
        status, description = "CAUTION", "Ok but exercise caution"
    elif 15 <= pct < 20:
        status, description = "LOW_LIQUIDITY", "Low liquidity"
    elif 10 <= pct < 15:
        status, description = "TOO_DEAD", "Too dead/illiquid"
    else:
        status, description = "AUTO_SKIP", "Auto-skip - extremely illiquid"

    return {"status": status, "description": description, "percentage": f"{pct:.2f}"}


def format_usd(value: float | None) -> str | None:
    if value is None:
        return None
    return f"{value:,.2f}"
