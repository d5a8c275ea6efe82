"""Single-chain contract token analysis: fetch, merge, score, assemble."""

import asyncio
import re
from typing import Any

from loguru import logger

from tokenrisk.models.analysis import (
    DataSources,
    HolderConcentration,
    MarketSnapshot,
    TokenAnalysis,
    TokenInfo,
)
from tokenrisk.models.risk import OwnershipAnalysis
from tokenrisk.models.token import HolderData, MarketData
from tokenrisk.providers.cmc.client import CoinMarketCapClient
from tokenrisk.providers.coingecko.client import CoinGeckoClient
from tokenrisk.providers.explorer.client import ExplorerClient
from tokenrisk.providers.networks import NETWORKS, get_network
from tokenrisk.providers.solana.client import SolanaClient
from tokenrisk.scoring.ai_risk import analyze_contract_token
from tokenrisk.scoring.gap_hunter import calculate_gap_hunter_risk
from tokenrisk.scoring.market import (
    assess_liquidity_risk,
    assess_native_liquidity,
    assess_volume_liquidity,
    detect_volume_anomaly,
    format_usd,
)
from tokenrisk.scoring.ownership import analyze_ownership, concentration_level
from tokenrisk.scoring.scam import assess_scam_probability
from tokenrisk.scoring.signals import build_token_signals, merge_token_data
from tokenrisk.scoring.spam import calculate_spam_score, detect_scam_pattern
from tokenrisk.services.errors import AnalysisError

SPAM_THRESHOLD = 60
RUG_PULL_TOP10 = 70

_EVM_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")
_SOLANA_ADDRESS = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")

CHECK_TOKEN_EXAMPLE = {
    "contractAddress": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
    "network": "eth",
}


def build_market_snapshot(
    market_cap: float | None,
    volume_24h: float | None,
    ratio: float | None,
    price_change_24h: float | None,
    current_price: float | None,
    *,
    native: bool = False,
) -> MarketSnapshot:
    return MarketSnapshot(
        market_cap=format_usd(market_cap),
        market_cap_raw=market_cap,
        volume_24h=format_usd(volume_24h),
        volume_24h_raw=volume_24h,
        volume_to_market_cap_ratio=ratio,
        volume_to_market_cap_percentage=f"{ratio * 100:.2f}%" if ratio else None,
        price_change_24h=f"{price_change_24h:.2f}%" if price_change_24h is not None else None,
        current_price=str(current_price) if current_price is not None else None,
        liquidity_risk=(
            assess_native_liquidity(market_cap) if native else assess_liquidity_risk(market_cap)
        ),
        volume_anomaly_detected=detect_volume_anomaly(ratio, market_cap, native=native),
        volume_liquidity=assess_volume_liquidity(ratio),
    )


def build_holder_concentration(ownership: OwnershipAnalysis) -> HolderConcentration:
    return HolderConcentration(
        top1_percentage=ownership.top_owner_percentage,
        top1_address=ownership.top_owner_address,
        top1_label=ownership.top_owner_label,
        top1_is_exchange=ownership.is_exchange,
        top1_is_blackhole=ownership.is_blackhole,
        top10_percentage=ownership.top10_percentage,
        rug_pull_risk=ownership.top10_percentage > RUG_PULL_TOP10,
        concentration_level=concentration_level(ownership.top10_percentage),
        top10_holders=ownership.top10_holders,
        blackhole_percentage=ownership.blackhole_percentage,
    )


def settled(result: Any, source: str) -> Any:
    """Unwrap a gather(return_exceptions=True) slot; failures become None."""
    if isinstance(result, BaseException):
        logger.warning(f"[ANALYZER] {source} failed: {type(result).__name__}: {result}")
        return None
    return result


class TokenAnalyzer:
    """Runs every scoring engine over one contract on one chain."""

    def __init__(
        self,
        coingecko: CoinGeckoClient,
        cmc: CoinMarketCapClient,
        explorer: ExplorerClient,
        solana: SolanaClient,
    ) -> None:
        self._coingecko = coingecko
        self._cmc = cmc
        self._explorer = explorer
        self._solana = solana

    @staticmethod
    def validate(contract_address: str | None, network: str | None) -> tuple[str, str]:
        """Return ``(address, network_key)`` or raise AnalysisError."""
        address = (contract_address or "").strip()
        if not address or not network:
            raise AnalysisError(
                "Contract address and network are required", example=CHECK_TOKEN_EXAMPLE
            )
        net = get_network(network)
        if net is None:
            raise AnalysisError(
                f"Unsupported network: {network}. Supported: {', '.join(NETWORKS)}",
                example=CHECK_TOKEN_EXAMPLE,
            )
        pattern = _SOLANA_ADDRESS if net.key == "solana" else _EVM_ADDRESS
        if not pattern.match(address):
            raise AnalysisError(
                f"Invalid contract address for {net.name}: {address}",
                example=CHECK_TOKEN_EXAMPLE,
            )
        return address, net.key

    async def _fetch_holders(self, address: str, network: str) -> HolderData | None:
        if network == "solana":
            return await self._solana.get_token_holders(address)
        if self._explorer.supports(network):
            return await self._explorer.get_token_holders(address, network)
        return None

    async def analyze_token(self, contract_address: str, network: str) -> TokenAnalysis:
        address, network = self.validate(contract_address, network)

        results = await asyncio.gather(
            self._cmc.get_token_info(address, network),
            self._coingecko.get_token_info(address, network),
            self._fetch_holders(address, network),
            return_exceptions=True,
        )
        cmc: MarketData | None = settled(results[0], "CoinMarketCap")
        coingecko: MarketData | None = settled(results[1], "CoinGecko")
        holders: HolderData | None = settled(results[2], "holders")

        token = merge_token_data(cmc, coingecko, holders)
        ownership = analyze_ownership(
            token.holders,
            holders.total_supply if holders else None,
            data_source=holders.source if holders else "none",
            token_address=address,
        )
        signals = build_token_signals(token, ownership)

        spam = calculate_spam_score(signals)
        scam = assess_scam_probability(signals)
        concentration = build_holder_concentration(ownership)
        ai = analyze_contract_token(signals, scam, rug_pull_risk=concentration.rug_pull_risk)
        gap = calculate_gap_hunter_risk(signals, spam.score, spam.risk)
        gap = gap.model_copy(update={"ai_risk_score": ai})

        logger.info(
            f"[ANALYZER] {network}:{address[:12]} spam={spam.score:.0f} ({spam.risk.value}) "
            f"gap={gap.risk_percentage:.2f}% hard_skip={gap.hard_skip} ai={ai.score:.0f}"
        )

        return TokenAnalysis(
            gap_hunter_bot_risk=gap,
            is_spam=spam.score >= SPAM_THRESHOLD,
            spam_score=spam.score,
            risk_level=spam.risk,
            reasons=spam.reasons,
            scam_assessment=scam,
            scam_pattern=detect_scam_pattern(signals),
            token=TokenInfo(
                name=token.name,
                symbol=token.symbol,
                contract_address=address,
                network=network,
                verified=token.verified,
            ),
            holder_concentration=concentration,
            market_data=build_market_snapshot(
                token.market_cap_usd,
                token.volume_24h_usd,
                token.volume_to_market_cap_ratio,
                token.price_change_24h,
                token.current_price,
            ),
            exchanges=token.exchanges,
            ownership_analysis=ownership,
            holders_source_url=holders.holders_source_url if holders else None,
            data_sources=DataSources(
                coin_market_cap=cmc is not None,
                coin_gecko=coingecko is not None,
                blockchain=holders is not None,
            ),
        )
