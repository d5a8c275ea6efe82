"""Group cached symbol analyses into buy/scam categories and token lists."""

from typing import Any

from loguru import logger

from tokenrisk.services.cache import AnalysisCache

RISK_BUCKETS: list[tuple[str, float]] = [
    ("0-10", 10),
    ("10-25", 25),
    ("25-50", 50),
    ("50-75", 75),
    ("75-100", float("inf")),
]


def risk_bucket(risk: float) -> str:
    for name, upper in RISK_BUCKETS:
        if risk < upper:
            return name
    return RISK_BUCKETS[-1][0]


def categorize(records: dict[str, dict[str, Any]], scam_threshold: float) -> dict[str, list[str]]:
    """Symbols with an AI risk score at or above the threshold are ``scam``.

    Records without an AI score belong to neither list.
    """
    categories: dict[str, list[str]] = {"scam": [], "canBuy": []}
    for symbol, record in records.items():
        score = record.get("AIriskScore")
        if score is None:
            continue
        if score >= scam_threshold:
            categories["scam"].append(symbol)
        else:
            categories["canBuy"].append(symbol)
    return categories


def build_token_lists(records: dict[str, dict[str, Any]], min_risk: float) -> dict[str, Any]:
    trusted: list[str] = []
    risk: list[str] = []
    undefined: list[str] = []

    for symbol, record in records.items():
        pct = record.get("riskPercentage")
        if not record.get("success") or pct is None:
            undefined.append(symbol)
        elif pct >= min_risk:
            risk.append(symbol)
        else:
            trusted.append(symbol)

    return {
        "success": True,
        "stats": {
            "total": len(records),
            "trusted": len(trusted),
            "risk": len(risk),
            "undefined": len(undefined),
        },
        "trusted": trusted,
        "risk": risk,
        "undefined": undefined,
    }


def build_token_stats(records: dict[str, dict[str, Any]], min_risk: float) -> dict[str, Any]:
    stats: dict[str, Any] = {
        "total": 0,
        "trusted": 0,
        "risk": 0,
        "undefined": 0,
        "riskDistribution": {name: 0 for name, _ in RISK_BUCKETS},
        "nativeTokens": 0,
        "contractTokens": 0,
    }

    for record in records.values():
        stats["total"] += 1
        pct = record.get("riskPercentage")
        if pct is None:
            stats["undefined"] += 1
            continue

        stats["risk" if pct >= min_risk else "trusted"] += 1
        stats["riskDistribution"][risk_bucket(pct)] += 1
        stats["nativeTokens" if record.get("isNativeToken") else "contractTokens"] += 1

    return {"success": True, "stats": stats}


class Categorizer:
    def __init__(self, cache: AnalysisCache, scam_threshold: float = 30) -> None:
        self._cache = cache
        self._scam_threshold = scam_threshold

    async def categorize_symbols(self) -> dict[str, list[str]]:
        records = await self._cache.all_records()
        categories = categorize(records, self._scam_threshold)
        await self._cache.save_categories(categories)
        logger.info(
            f"[CATEGORIZER] {len(categories['scam'])} scam, "
            f"{len(categories['canBuy'])} can buy out of {len(records)} cached"
        )
        return categories

    async def token_lists(self, min_risk: float) -> dict[str, Any]:
        return build_token_lists(await self._cache.all_records(), min_risk)

    async def token_stats(self, min_risk: float) -> dict[str, Any]:
        return build_token_stats(await self._cache.all_records(), min_risk)
