"""Result records produced by the scoring engines."""

from enum import Enum

from pydantic import Field

from tokenrisk.models.base import CamelModel
from tokenrisk.models.token import HolderEntry


class RiskLevel(str, Enum):
    MINIMAL = "MINIMAL"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Confidence(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"
    ABSOLUTE = "ABSOLUTE"


class ScamVerdict(str, Enum):
    LIKELY_SCAM = "LIKELY_SCAM"
    HIGH_RISK = "HIGH_RISK"
    MODERATE_RISK = "MODERATE_RISK"
    LOW_RISK = "LOW_RISK"
    LIKELY_SAFE = "LIKELY_SAFE"


class AIVerdict(str, Enum):
    EXTREME_DANGER = "EXTREME_DANGER"
    VERY_HIGH_RISK = "VERY_HIGH_RISK"
    HIGH_RISK = "HIGH_RISK"
    MODERATE_RISK = "MODERATE_RISK"
    LOW_MODERATE_RISK = "LOW_MODERATE_RISK"
    LOW_RISK = "LOW_RISK"
    MINIMAL_RISK = "MINIMAL_RISK"


class OwnershipAnalysis(CamelModel):
    """Top-holder concentration derived from a holder list.

    Percentages exclude blackhole (burn) addresses; the excluded share is
    reported separately in ``blackhole_percentage``.
    """

    top_owner_percentage: float = 0.0
    top_owner_address: str | None = None
    top_owner_label: str | None = None
    is_exchange: bool = False
    is_blackhole: bool = False
    concentrated: bool = False
    top10_percentage: float = 0.0
    top10_holders: list[HolderEntry] = []
    holder_count: int = 0
    blackhole_count: int = 0
    blackhole_percentage: float = 0.0
    data_source: str = "none"


class SpamResult(CamelModel):
    score: float
    reasons: list[str] = []
    risk: RiskLevel


class ScamPattern(CamelModel):
    pattern: str = "none"
    confidence: str = "low"


class ScamAssessment(CamelModel):
    scam_score: float
    verdict: ScamVerdict
    confidence: Confidence
    red_flags: list[str] = []
    green_flags: list[str] = []
    summary: str = ""


class RiskFactor(CamelModel):
    factor: str
    impact: float
    severity: str
    value: float | str | None = None


class AIRiskResult(CamelModel):
    score: float
    verdict: AIVerdict
    recommendation: str
    trading_advice: str
    confidence: Confidence
    critical_issues: list[str] = []
    warnings: list[str] = []
    positive_factors: list[str] = []
    detailed_factors: list[RiskFactor] = []
    factor_count: int = 0
    analysis: str = ""


class GapHunterComponent(CamelModel):
    value: float
    weight: str
    description: str


class GapHunterRisk(CamelModel):
    """Weighted trade-or-skip risk for the gap-hunter bot.

    ``should_skip`` is true whenever ``risk_percentage >= 60`` or a hard-skip
    rule fired; ``hard_skip_reasons`` is never empty when ``hard_skip`` is set.
    """

    risk_percentage: float
    should_skip: bool
    hard_skip: bool = False
    hard_skip_reasons: list[str] = []
    components: dict[str, GapHunterComponent] = {}
    recommendation: str = ""
    note: str | None = None
    ai_risk_score: AIRiskResult | None = Field(None, alias="AIriskScore")
