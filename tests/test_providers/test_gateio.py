"""Tests for the Gate.io client."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tokenrisk.providers.gateio.client import GateioClient, _parse_chain, _parse_ticker


def _resp(payload, status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    return resp


class TestParsers:
    def test_parse_chain(self) -> None:
        chain = _parse_chain({"chain": "BSC", "contract_address": "0xabc", "is_disabled": 0})
        assert chain is not None
        assert chain.network == "bsc"
        assert chain.is_native is False
        assert chain.is_disabled is False

    def test_parse_native_chain(self) -> None:
        chain = _parse_chain({"chain": "BTC", "contract_address": ""})
        assert chain is not None
        assert chain.is_native is True
        assert chain.network is None

    def test_parse_chain_rejects_garbage(self) -> None:
        assert _parse_chain({"contract_address": "0xabc"}) is None
        assert _parse_chain("BSC") is None

    def test_parse_ticker(self) -> None:
        data = _parse_ticker(
            {"last": "0.5", "change_percentage": "-3.2", "quote_volume": "1250000.5"}, "foo"
        )
        assert data.symbol == "FOO"
        assert data.current_price == 0.5
        assert data.price_change_24h == -3.2
        assert data.volume_24h_usd == 1250000.5
        assert data.market_cap_usd is None
        assert data.exchanges == ["Gate.io"]


class TestGateioClient:
    @pytest.mark.asyncio
    async def test_is_listed_caches_pair_list(self) -> None:
        client = GateioClient(max_rps=100.0)
        client._client = AsyncMock()
        client._client.get = AsyncMock(
            return_value=_resp(
                [
                    {"id": "PEPE_USDT", "base": "PEPE", "trade_status": "tradable"},
                    {"id": "DEAD_USDT", "base": "DEAD", "trade_status": "untradable"},
                ]
            )
        )

        assert await client.is_listed("pepe") is True
        assert await client.is_listed("DEAD") is False
        assert await client.is_listed("NOPE") is False
        assert client._client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_is_listed_on_api_failure(self) -> None:
        client = GateioClient(max_rps=100.0)
        client._client = AsyncMock()
        client._client.get = AsyncMock(return_value=_resp({}, status=503))

        assert await client.is_listed("PEPE") is False

    @pytest.mark.asyncio
    async def test_currency_chains(self) -> None:
        client = GateioClient(max_rps=100.0)
        client._client = AsyncMock()
        client._client.get = AsyncMock(
            return_value=_resp(
                [
                    {"chain": "ETH", "contract_address": "0xeth"},
                    {"chain": "SOL", "contract_address": "Mint111"},
                    {"name_en": "broken"},
                ]
            )
        )

        chains = await client.get_currency_chains("usdt")
        assert [(c.network, c.contract_address) for c in chains] == [
            ("eth", "0xeth"),
            ("solana", "Mint111"),
        ]
        assert client._client.get.call_args.kwargs["params"] == {"currency": "USDT"}

    @pytest.mark.asyncio
    async def test_ticker_not_listed(self) -> None:
        client = GateioClient(max_rps=100.0)
        client._client = AsyncMock()
        client._client.get = AsyncMock(return_value=_resp({"label": "INVALID_CURRENCY"}, 400))

        assert await client.get_ticker("NOPE") is None
