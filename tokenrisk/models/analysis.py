"""Response records assembled by the analysis services."""

from pydantic import Field

from tokenrisk.models.base import CamelModel
from tokenrisk.models.risk import (
    GapHunterRisk,
    OwnershipAnalysis,
    RiskLevel,
    ScamAssessment,
    ScamPattern,
)
from tokenrisk.models.token import HolderEntry


class TokenInfo(CamelModel):
    name: str
    symbol: str
    contract_address: str | None = None
    network: str
    verified: bool
    type: str | None = None
    description: str | None = None


class HolderConcentration(CamelModel):
    top1_percentage: float = 0.0
    top1_address: str | None = None
    top1_label: str | None = None
    top1_is_exchange: bool = False
    top1_is_blackhole: bool = False
    top10_percentage: float = 0.0
    rug_pull_risk: bool = False
    concentration_level: str = "NORMAL"
    top10_holders: list[HolderEntry] = []
    blackhole_percentage: float = 0.0


class MarketSnapshot(CamelModel):
    market_cap: str | None = None
    market_cap_raw: float | None = None
    volume_24h: str | None = Field(None, alias="volume24h")
    volume_24h_raw: float | None = Field(None, alias="volume24hRaw")
    volume_to_market_cap_ratio: float | None = None
    volume_to_market_cap_percentage: str | None = None
    price_change_24h: str | None = Field(None, alias="priceChange24h")
    current_price: str | None = None
    liquidity_risk: str = "UNKNOWN"
    volume_anomaly_detected: bool = False
    volume_liquidity: dict[str, str] = {}


class DataSources(CamelModel):
    coin_market_cap: bool = False
    coin_gecko: bool = False
    gate_io: bool = False
    blockchain: bool = False


class TokenAnalysis(CamelModel):
    """Single-chain analysis of one contract token."""

    gap_hunter_bot_risk: GapHunterRisk
    is_spam: bool
    spam_score: float
    risk_level: RiskLevel
    reasons: list[str] = []
    scam_assessment: ScamAssessment
    scam_pattern: ScamPattern = ScamPattern()
    token: TokenInfo
    holder_concentration: HolderConcentration
    market_data: MarketSnapshot
    exchanges: list[str] = []
    ownership_analysis: OwnershipAnalysis
    holders_source_url: str | None = None
    data_sources: DataSources = DataSources()


class ExplorerLink(CamelModel):
    network: str
    url: str


class ChainResult(CamelModel):
    network: str
    contract_address: str
    explorer: str = ""
    analysis: TokenAnalysis | None = None
    error: str | None = None


class WrappedVersion(CamelModel):
    network: str
    contract_address: str
    is_native: bool = False


class SymbolAnalysis(CamelModel):
    """Symbol-level result: either multi-chain contract analysis or native token.

    ``gap_hunter_bot_risk`` and ``holder_concentration`` always describe the
    worst chain so cached summaries can be read without the per-chain detail.
    """

    success: bool = True
    symbol: str
    is_native_token: bool = False
    chains_found: int = 0
    global_spam_score: float | None = None
    overall_risk: str | None = None
    is_spam_globally: bool = False
    gap_hunter_bot_risk: GapHunterRisk | None = None
    holder_concentration: HolderConcentration | None = None
    market_data: MarketSnapshot | None = None
    token_info: TokenInfo | None = None
    ownership_analysis: dict | None = None
    all_explorers: list[ExplorerLink] = []
    chains: list[ChainResult] = []
    wrapped_versions: list[WrappedVersion] = []
    exchanges: list[str] = []
    data_sources: DataSources | None = None
    holders_source_url: str | None = None
    summary: str = ""
    error: str | None = None
    suggestion: str | None = None


class ChainsReport(CamelModel):
    """Aggregate over an explicit list of (address, network) pairs."""

    success: bool = True
    chains_analyzed: int
    global_spam_score: float
    overall_risk: str
    is_spam_globally: bool
    gap_hunter_bot_risk: GapHunterRisk
    chains: list[ChainResult] = []
    summary: str = ""
