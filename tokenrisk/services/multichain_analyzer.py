"""Symbol-level analysis across every chain a token is deployed on."""

import asyncio
import re

from loguru import logger

from tokenrisk.models.analysis import (
    ChainResult,
    ChainsReport,
    DataSources,
    ExplorerLink,
    SymbolAnalysis,
)
from tokenrisk.models.token import ContractRef
from tokenrisk.providers.coingecko.client import CoinGeckoClient
from tokenrisk.providers.gateio.client import GateioClient
from tokenrisk.scoring.multichain import (
    SPAM_GLOBAL_THRESHOLD,
    aggregate_gap_hunter_risk,
    calculate_global_score,
    determine_overall_risk,
    multichain_summary,
    worst_holder_concentration,
)
from tokenrisk.services.native_tokens import NativeTokenAnalyzer, is_native_symbol
from tokenrisk.services.token_analyzer import TokenAnalyzer

_QUOTE_SUFFIX = re.compile(r"(USDT|USD|BTC|ETH)$")


def strip_quote_suffix(symbol: str) -> str:
    """``PEPEUSDT`` -> ``PEPE``; symbols that are only a quote stay as-is."""
    stripped = _QUOTE_SUFFIX.sub("", symbol)
    return stripped or symbol


def not_found(symbol: str) -> SymbolAnalysis:
    return SymbolAnalysis(
        success=False,
        symbol=symbol,
        error=f"No contract addresses found for symbol: {symbol}",
        suggestion="Try using the contract address directly",
    )


class MultiChainAnalyzer:
    def __init__(
        self,
        token_analyzer: TokenAnalyzer,
        native: NativeTokenAnalyzer,
        coingecko: CoinGeckoClient,
        gateio: GateioClient,
    ) -> None:
        self._token_analyzer = token_analyzer
        self._native = native
        self._coingecko = coingecko
        self._gateio = gateio

    async def find_contracts(self, symbol: str) -> list[ContractRef]:
        """CoinGecko deployments for ``symbol``; retried once without a quote suffix."""
        contracts = await self._search(symbol)
        if contracts:
            return contracts

        alt = strip_quote_suffix(symbol)
        if alt != symbol:
            logger.debug(f"[MULTICHAIN] {symbol} not found, retrying as {alt}")
            return await self._search(alt)
        return []

    async def _listed_on_gateio(self, symbol: str) -> bool:
        try:
            return await self._gateio.is_listed(symbol)
        except Exception as e:
            logger.debug(f"[MULTICHAIN] Gate.io listing check failed for {symbol}: {e}")
            return False

    async def _search(self, symbol: str) -> list[ContractRef]:
        try:
            contracts = await self._coingecko.search_contracts(symbol)
        except Exception as e:
            logger.warning(f"[MULTICHAIN] Contract search failed for {symbol}: {e}")
            return []

        if not contracts:
            logger.info(f"[MULTICHAIN] No contracts found for {symbol}")
        return contracts

    async def _analyze_chains(self, contracts: list[ContractRef]) -> list[ChainResult]:
        analyses = await asyncio.gather(
            *(self._token_analyzer.analyze_token(c.address, c.network) for c in contracts),
            return_exceptions=True,
        )

        results: list[ChainResult] = []
        for contract, analysis in zip(contracts, analyses):
            if isinstance(analysis, BaseException):
                logger.warning(
                    f"[MULTICHAIN] {contract.network}:{contract.address[:12]} failed: {analysis}"
                )
                results.append(
                    ChainResult(
                        network=contract.network,
                        contract_address=contract.address,
                        explorer=contract.explorer,
                        error=str(analysis) or type(analysis).__name__,
                    )
                )
            else:
                results.append(
                    ChainResult(
                        network=contract.network,
                        contract_address=contract.address,
                        explorer=contract.explorer,
                        analysis=analysis,
                    )
                )
        return results

    async def analyze_by_symbol(self, symbol: str) -> SymbolAnalysis:
        symbol = symbol.strip().upper()

        if is_native_symbol(symbol):
            native = await self._native.analyze(symbol)
            if native is not None:
                return native

        contracts = await self.find_contracts(symbol)
        if not contracts:
            return not_found(symbol)

        results, gateio_listed = await asyncio.gather(
            self._analyze_chains(contracts), self._listed_on_gateio(symbol)
        )
        valid = [r.analysis for r in results if r.analysis is not None]

        global_score = calculate_global_score(results)
        score = global_score["score"]
        gap = aggregate_gap_hunter_risk(results)

        exchanges: list[str] = []
        for analysis in valid:
            for name in analysis.exchanges:
                if name not in exchanges:
                    exchanges.append(name)
        if gateio_listed and "gate.io" not in {e.lower() for e in exchanges}:
            exchanges.append("Gate.io")

        logger.info(
            f"[MULTICHAIN] {symbol}: {len(valid)}/{len(results)} chains ok, "
            f"global={score} gap={gap.risk_percentage:.2f}% hard_skip={gap.hard_skip}"
        )

        return SymbolAnalysis(
            symbol=symbol,
            chains_found=len(contracts),
            global_spam_score=score,
            overall_risk=determine_overall_risk(results, score),
            is_spam_globally=score >= SPAM_GLOBAL_THRESHOLD,
            gap_hunter_bot_risk=gap,
            holder_concentration=worst_holder_concentration(results),
            all_explorers=[ExplorerLink(network=c.network, url=c.explorer) for c in contracts],
            chains=results,
            exchanges=exchanges,
            data_sources=DataSources(
                coin_market_cap=any(a.data_sources.coin_market_cap for a in valid),
                coin_gecko=any(a.data_sources.coin_gecko for a in valid),
                gate_io=gateio_listed,
                blockchain=any(a.data_sources.blockchain for a in valid),
            ),
            summary=multichain_summary(results),
        )

    async def analyze_multiple_chains(self, contracts: list[ContractRef]) -> ChainsReport:
        results = await self._analyze_chains(contracts)
        score = calculate_global_score(results)["score"]
        return ChainsReport(
            chains_analyzed=len(contracts),
            global_spam_score=score,
            overall_risk=determine_overall_risk(results, score),
            is_spam_globally=score >= SPAM_GLOBAL_THRESHOLD,
            gap_hunter_bot_risk=aggregate_gap_hunter_risk(results),
            chains=results,
            summary=multichain_summary(results),
        )
