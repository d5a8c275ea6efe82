"""Tests for single-chain token analysis."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tokenrisk.models.token import HolderData, HolderEntry, MarketData
from tokenrisk.services.errors import AnalysisError
from tokenrisk.services.token_analyzer import TokenAnalyzer, settled

TOKEN = "0x1111111111111111111111111111111111111111"
MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"


def _analyzer(cmc=None, coingecko=None, holders=None, solana=None) -> TokenAnalyzer:
    cmc_client = MagicMock()
    cmc_client.get_token_info = AsyncMock(return_value=cmc)
    cg_client = MagicMock()
    cg_client.get_token_info = AsyncMock(return_value=coingecko)
    explorer = MagicMock()
    explorer.supports = MagicMock(return_value=True)
    explorer.get_token_holders = AsyncMock(return_value=holders)
    sol = MagicMock()
    sol.get_token_holders = AsyncMock(return_value=solana)
    return TokenAnalyzer(cg_client, cmc_client, explorer, sol)


def _holders(*pcts: float, verified: bool = True) -> HolderData:
    return HolderData(
        source="explorer",
        verified=verified,
        holders=[
            HolderEntry(rank=i + 1, address=f"0x{i + 1:040x}", balance_percentage=p)
            for i, p in enumerate(pcts)
        ],
        holders_source_url=f"https://etherscan.io/token/{TOKEN}#balances",
    )


class TestValidate:
    def test_missing_fields(self) -> None:
        with pytest.raises(AnalysisError) as exc:
            TokenAnalyzer.validate("", "bsc")
        assert exc.value.message == "Contract address and network are required"
        assert exc.value.example == {
            "contractAddress": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
            "network": "eth",
        }

    def test_unknown_network(self) -> None:
        with pytest.raises(AnalysisError, match="Unsupported network"):
            TokenAnalyzer.validate(TOKEN, "dogechain")

    def test_bad_evm_address(self) -> None:
        with pytest.raises(AnalysisError, match="Invalid contract address"):
            TokenAnalyzer.validate("0x123", "eth")

    def test_network_alias_is_normalized(self) -> None:
        assert TokenAnalyzer.validate(f" {TOKEN} ", "ethereum") == (TOKEN, "eth")

    def test_solana_mint(self) -> None:
        assert TokenAnalyzer.validate(MINT, "sol") == (MINT, "solana")
        with pytest.raises(AnalysisError):
            TokenAnalyzer.validate(TOKEN, "solana")


def test_settled_turns_exceptions_into_none():
    assert settled(RuntimeError("x"), "test") is None
    assert settled(5, "test") == 5


class TestAnalyzeToken:
    @pytest.mark.asyncio
    async def test_healthy_token(self) -> None:
        analyzer = _analyzer(
            cmc=MarketData(
                source="cmc",
                name="Good",
                symbol="GOOD",
                market_cap_usd=50_000_000,
                volume_24h_usd=25_000_000,
                verified=True,
            ),
            coingecko=MarketData(
                source="coingecko",
                exchanges=[f"Exchange {i}" for i in range(12)],
            ),
            holders=_holders(3, 2, 1, 1, 1),
        )

        result = await analyzer.analyze_token(TOKEN, "eth")

        assert result.token.symbol == "GOOD"
        assert result.token.contract_address == TOKEN
        assert result.is_spam is False
        assert result.spam_score == 0
        assert result.gap_hunter_bot_risk.hard_skip is False
        assert result.gap_hunter_bot_risk.should_skip is False
        assert result.gap_hunter_bot_risk.ai_risk_score is not None
        assert result.holder_concentration.top10_percentage == 8
        assert result.holder_concentration.rug_pull_risk is False
        assert result.market_data.market_cap == "50,000,000.00"
        assert result.market_data.volume_to_market_cap_percentage == "50.00%"
        assert len(result.exchanges) == 12
        assert result.data_sources.coin_market_cap is True
        assert result.data_sources.blockchain is True
        assert result.holders_source_url.endswith("#balances")

    @pytest.mark.asyncio
    async def test_rug_token(self) -> None:
        analyzer = _analyzer(holders=_holders(75, 10, 5, 5, 2, verified=False))

        result = await analyzer.analyze_token(TOKEN, "bsc")

        assert result.is_spam is True
        assert result.holder_concentration.rug_pull_risk is True
        assert result.holder_concentration.concentration_level == "EXTREME"
        gap = result.gap_hunter_bot_risk
        assert gap.hard_skip is True
        assert "Top 10 holders ≥70%" in gap.hard_skip_reasons
        assert gap.ai_risk_score.verdict.value == "EXTREME_DANGER"
        assert result.scam_pattern.pattern == "rug_pull"

    @pytest.mark.asyncio
    async def test_contract_self_holding_is_not_an_owner(self) -> None:
        token = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
        holders = HolderData(
            source="explorer",
            verified=True,
            holders=[
                HolderEntry(rank=1, address=token.lower(), balance=600),
                HolderEntry(rank=2, address="0x" + "2" * 40, balance=100),
            ],
            total_supply=1000,
        )
        analyzer = _analyzer(holders=holders)

        result = await analyzer.analyze_token(token, "eth")

        concentration = result.holder_concentration
        assert concentration.top1_address == "0x" + "2" * 40
        assert concentration.top1_percentage == 10
        assert concentration.top10_percentage == 10
        assert result.gap_hunter_bot_risk.hard_skip is False
        assert result.ownership_analysis.holder_count == 1

    @pytest.mark.asyncio
    async def test_provider_failure_is_tolerated(self) -> None:
        analyzer = _analyzer(holders=_holders(5))
        analyzer._cmc.get_token_info = AsyncMock(side_effect=RuntimeError("cmc down"))

        result = await analyzer.analyze_token(TOKEN, "eth")

        assert result.data_sources.coin_market_cap is False
        assert result.data_sources.blockchain is True

    @pytest.mark.asyncio
    async def test_no_data_at_all(self) -> None:
        analyzer = _analyzer()

        result = await analyzer.analyze_token(TOKEN, "eth")

        assert result.ownership_analysis.data_source == "none"
        assert result.holder_concentration.top10_percentage == 0
        assert "No holder data available (transparency concern)" in (
            result.scam_assessment.red_flags
        )
        assert result.token.name == "Unknown"

    @pytest.mark.asyncio
    async def test_solana_uses_rpc_holders(self) -> None:
        analyzer = _analyzer(
            solana=HolderData(
                source="solana-rpc",
                holders=[HolderEntry(rank=1, address="Acc1", balance_percentage=12)],
            )
        )

        result = await analyzer.analyze_token(MINT, "solana")

        analyzer._solana.get_token_holders.assert_awaited_once_with(MINT)
        analyzer._explorer.get_token_holders.assert_not_awaited()
        assert result.ownership_analysis.data_source == "solana-rpc"
        assert result.holder_concentration.top1_percentage == 12

    @pytest.mark.asyncio
    async def test_invalid_input_raises(self) -> None:
        with pytest.raises(AnalysisError):
            await _analyzer().analyze_token("not-an-address", "eth")

    @pytest.mark.asyncio
    async def test_json_shape(self) -> None:
        result = await _analyzer(holders=_holders(10)).analyze_token(TOKEN, "eth")
        data = result.to_json_dict()
        assert {
            "gapHunterBotRisk",
            "isSpam",
            "spamScore",
            "riskLevel",
            "reasons",
            "scamAssessment",
            "token",
            "holderConcentration",
            "marketData",
            "exchanges",
            "ownershipAnalysis",
            "holdersSourceUrl",
            "dataSources",
        } <= set(data)
        assert "AIriskScore" in data["gapHunterBotRisk"]
        assert "volume24h" in data["marketData"]
