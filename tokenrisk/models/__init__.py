from tokenrisk.models.analysis import (
    ChainResult,
    ChainsReport,
    DataSources,
    ExplorerLink,
    HolderConcentration,
    MarketSnapshot,
    SymbolAnalysis,
    TokenAnalysis,
    TokenInfo,
    WrappedVersion,
)
from tokenrisk.models.risk import (
    AIRiskResult,
    AIVerdict,
    Confidence,
    GapHunterComponent,
    GapHunterRisk,
    OwnershipAnalysis,
    RiskFactor,
    RiskLevel,
    ScamAssessment,
    ScamPattern,
    ScamVerdict,
    SpamResult,
)
from tokenrisk.models.token import (
    ContractRef,
    HolderData,
    HolderEntry,
    MarketData,
    TokenData,
    TokenSignals,
)

__all__ = [
    "AIRiskResult",
    "AIVerdict",
    "ChainResult",
    "ChainsReport",
    "Confidence",
    "ContractRef",
    "DataSources",
    "ExplorerLink",
    "GapHunterComponent",
    "GapHunterRisk",
    "HolderConcentration",
    "HolderData",
    "HolderEntry",
    "MarketData",
    "MarketSnapshot",
    "OwnershipAnalysis",
    "RiskFactor",
    "RiskLevel",
    "ScamAssessment",
    "ScamPattern",
    "ScamVerdict",
    "SpamResult",
    "SymbolAnalysis",
    "TokenAnalysis",
    "TokenData",
    "TokenInfo",
    "TokenSignals",
    "WrappedVersion",
]
