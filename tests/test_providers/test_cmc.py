"""Tests for the CoinMarketCap client."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tokenrisk.providers.cmc.client import CoinMarketCapClient, _parse_quote


def _resp(payload, status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    return resp


QUOTE = {
    "id": 24478,
    "name": "Pepe",
    "symbol": "PEPE",
    "is_active": 1,
    "cmc_rank": 30,
    "total_supply": 420_690_000_000_000,
    "quote": {
        "USD": {
            "price": 0.0000071,
            "volume_24h": 600_000_000,
            "market_cap": 3_000_000_000,
            "percent_change_24h": 1.5,
        }
    },
}


def test_parse_quote():
    data = _parse_quote(QUOTE)
    assert data.source == "cmc"
    assert data.market_cap_usd == 3_000_000_000
    assert data.volume_24h_usd == 600_000_000
    assert data.price_change_24h == 1.5
    assert data.verified is True


def test_unranked_quote_is_not_verified():
    assert _parse_quote({**QUOTE, "cmc_rank": None}).verified is False


class TestCoinMarketCapClient:
    @pytest.mark.asyncio
    async def test_disabled_without_key(self) -> None:
        client = CoinMarketCapClient(api_key="", max_rps=100.0)
        client._client = AsyncMock()
        client._client.get = AsyncMock()

        assert client.enabled is False
        assert await client.get_token_info("0xabc", "eth") is None
        assert await client.get_quote_by_symbol("PEPE") is None
        client._client.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_token_info_resolves_id_then_quote(self) -> None:
        client = CoinMarketCapClient(api_key="key", max_rps=100.0)
        client._client = AsyncMock()
        client._client.get = AsyncMock(
            side_effect=[
                _resp({"data": {"24478": {"id": 24478, "name": "Pepe"}}}),
                _resp({"data": {"24478": QUOTE}}),
            ]
        )

        data = await client.get_token_info("0x6982508145454ce325ddbe47a25d4ec3d2311933", "eth")

        assert data is not None
        assert data.name == "Pepe"
        second = client._client.get.call_args_list[1]
        assert second.kwargs["params"] == {"id": 24478}

    @pytest.mark.asyncio
    async def test_token_info_unknown_contract(self) -> None:
        client = CoinMarketCapClient(api_key="key", max_rps=100.0)
        client._client = AsyncMock()
        client._client.get = AsyncMock(return_value=_resp({"data": {}}))

        assert await client.get_token_info("0xabc", "eth") is None
        assert client._client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_quote_by_symbol_takes_first_listing(self) -> None:
        client = CoinMarketCapClient(api_key="key", max_rps=100.0)
        client._client = AsyncMock()
        client._client.get = AsyncMock(
            return_value=_resp({"data": {"PEPE": [QUOTE, {**QUOTE, "name": "Pepe Clone"}]}})
        )

        data = await client.get_quote_by_symbol("pepe")
        assert data is not None
        assert data.name == "Pepe"

    @pytest.mark.asyncio
    async def test_server_error_returns_none(self) -> None:
        client = CoinMarketCapClient(api_key="key", max_rps=100.0)
        client._client = AsyncMock()
        client._client.get = AsyncMock(return_value=_resp({}, status=500))

        assert await client.get_quote_by_symbol("PEPE") is None
