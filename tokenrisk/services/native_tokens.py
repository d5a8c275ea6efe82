"""Native layer-1 assets (BTC, ETH, SOL ...): liquidity-only analysis.

Native assets have no contract, no holder list and no verification step, so
only market signals feed the scoring: the market-only gap-hunter variant and
the native AI path.
"""

import asyncio
from dataclasses import dataclass

from loguru import logger

from tokenrisk.models.analysis import (
    DataSources,
    ExplorerLink,
    HolderConcentration,
    SymbolAnalysis,
    TokenInfo,
    WrappedVersion,
)
from tokenrisk.models.risk import OwnershipAnalysis
from tokenrisk.models.token import MarketData, TokenSignals
from tokenrisk.providers.cmc.client import CoinMarketCapClient
from tokenrisk.providers.coingecko.client import CoinGeckoClient
from tokenrisk.providers.gateio.client import GateioClient
from tokenrisk.providers.networks import get_network
from tokenrisk.scoring.ai_risk import analyze_native_token
from tokenrisk.scoring.gap_hunter import calculate_native_gap_hunter_risk
from tokenrisk.scoring.signals import merge_market_data, volume_to_market_cap_ratio
from tokenrisk.services.token_analyzer import build_market_snapshot, settled

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
DECENTRALIZED = "DECENTRALIZED"


@dataclass(frozen=True)
class NativeAsset:
    symbol: str
    name: str
    network: str
    coingecko_id: str
    explorer: str


NATIVE_ASSETS: dict[str, NativeAsset] = {
    a.symbol: a
    for a in (
        NativeAsset("BTC", "Bitcoin", "bitcoin", "bitcoin", "https://mempool.space"),
        NativeAsset("ETH", "Ethereum", "eth", "ethereum", "https://etherscan.io"),
        NativeAsset("BNB", "BNB", "bsc", "binancecoin", "https://bscscan.com"),
        NativeAsset("MATIC", "Polygon", "polygon", "matic-network", "https://polygonscan.com"),
        NativeAsset("AVAX", "Avalanche", "avalanche", "avalanche-2", "https://snowtrace.io"),
        NativeAsset("FTM", "Fantom", "fantom", "fantom", "https://ftmscan.com"),
        NativeAsset("ARB", "Arbitrum", "arbitrum", "arbitrum", "https://arbiscan.io"),
        NativeAsset(
            "OP", "Optimism", "optimism", "optimism", "https://optimistic.etherscan.io"
        ),
        NativeAsset("SOL", "Solana", "solana", "solana", "https://solscan.io"),
        NativeAsset("ADA", "Cardano", "cardano", "cardano", "https://cardanoscan.io"),
        NativeAsset("DOT", "Polkadot", "polkadot", "polkadot", "https://polkadot.subscan.io"),
        NativeAsset("KDA", "Kadena", "kadena", "kadena", "https://explorer.chainweb.com"),
        NativeAsset("TRX", "TRON", "tron", "tron", "https://tronscan.org"),
        NativeAsset("XRP", "Ripple", "ripple", "ripple", "https://xrpscan.com"),
        NativeAsset("LTC", "Litecoin", "litecoin", "litecoin", "https://blockchair.com/litecoin"),
        NativeAsset(
            "BCH",
            "Bitcoin Cash",
            "bitcoin-cash",
            "bitcoin-cash",
            "https://blockchair.com/bitcoin-cash",
        ),
        NativeAsset("XLM", "Stellar", "stellar", "stellar", "https://stellarchain.io"),
        NativeAsset("ATOM", "Cosmos", "cosmos", "cosmos", "https://www.mintscan.io/cosmos"),
        NativeAsset("ALGO", "Algorand", "algorand", "algorand", "https://allo.info"),
    )
}


def is_native_symbol(symbol: str) -> bool:
    return symbol.upper() in NATIVE_ASSETS


class NativeTokenAnalyzer:
    def __init__(
        self,
        coingecko: CoinGeckoClient,
        cmc: CoinMarketCapClient,
        gateio: GateioClient,
    ) -> None:
        self._coingecko = coingecko
        self._cmc = cmc
        self._gateio = gateio

    async def _wrapped_versions(self, symbol: str) -> list[WrappedVersion]:
        chains = await self._gateio.get_currency_chains(symbol)
        versions: list[WrappedVersion] = []
        for chain in chains:
            if chain.is_native or chain.contract_address == ZERO_ADDRESS:
                continue
            versions.append(
                WrappedVersion(
                    network=chain.network or chain.chain.lower(),
                    contract_address=chain.contract_address,
                )
            )
        return versions

    async def analyze(self, symbol: str) -> SymbolAnalysis | None:
        """None when ``symbol`` is not a registered native asset."""
        symbol = symbol.upper()
        asset = NATIVE_ASSETS.get(symbol)
        if asset is None:
            return None

        results = await asyncio.gather(
            self._coingecko.get_coin_market_data(asset.coingecko_id),
            self._cmc.get_quote_by_symbol(symbol),
            self._gateio.get_ticker(symbol),
            self._wrapped_versions(symbol),
            return_exceptions=True,
        )
        coingecko: MarketData | None = settled(results[0], "CoinGecko")
        cmc: MarketData | None = settled(results[1], "CoinMarketCap")
        gateio: MarketData | None = settled(results[2], "Gate.io")
        wrapped: list[WrappedVersion] = settled(results[3], "Gate.io chains") or []

        # CoinGecko first: its tickers carry the full exchange list
        market = merge_market_data(coingecko, cmc, gateio) or MarketData(source="none")
        ratio = volume_to_market_cap_ratio(market.volume_24h_usd, market.market_cap_usd)

        signals = TokenSignals(
            verified=True,
            market_cap_usd=market.market_cap_usd,
            volume_24h_usd=market.volume_24h_usd,
            volume_to_market_cap_ratio=ratio,
            exchange_count=len(market.exchanges),
            is_native_token=True,
        )
        gap = calculate_native_gap_hunter_risk(signals)
        ai = analyze_native_token(signals, symbol)
        gap = gap.model_copy(update={"ai_risk_score": ai})

        logger.info(
            f"[NATIVE] {symbol} mcap={market.market_cap_usd} gap={gap.risk_percentage:.2f}% "
            f"ai={ai.score:.0f} wrapped={len(wrapped)}"
        )

        explorers = [ExplorerLink(network=asset.network, url=asset.explorer)]
        for version in wrapped:
            net = get_network(version.network)
            explorers.append(
                ExplorerLink(network=version.network, url=net.explorer if net else "")
            )

        return SymbolAnalysis(
            symbol=symbol,
            is_native_token=True,
            chains_found=len(wrapped) + 1,
            gap_hunter_bot_risk=gap,
            token_info=TokenInfo(
                name=asset.name,
                symbol=symbol,
                network=asset.network,
                verified=True,
                type="Native Blockchain Token",
                description=(
                    f"{asset.name} is the native cryptocurrency of the "
                    f"{asset.network} blockchain."
                ),
            ),
            market_data=build_market_snapshot(
                market.market_cap_usd,
                market.volume_24h_usd,
                ratio,
                market.price_change_24h,
                market.current_price,
                native=True,
            ),
            ownership_analysis={
                "note": (
                    "Native blockchain tokens do not have traditional holder concentration "
                    "metrics as they are distributed through mining/staking/validation "
                    "mechanisms"
                ),
                "isDecentralized": True,
                "concentrationLevel": DECENTRALIZED,
                **OwnershipAnalysis(data_source="native").to_json_dict(),
            },
            holder_concentration=HolderConcentration(concentration_level=DECENTRALIZED),
            holders_source_url=asset.explorer,
            all_explorers=explorers,
            wrapped_versions=wrapped,
            exchanges=market.exchanges,
            data_sources=DataSources(
                coin_gecko=coingecko is not None,
                coin_market_cap=cmc is not None,
                gate_io=gateio is not None,
            ),
            summary=(
                f"{asset.name} ({symbol}) is the native Layer 1 cryptocurrency of the "
                f"{asset.network} blockchain with {len(market.exchanges)} exchange listings."
            ),
        )
