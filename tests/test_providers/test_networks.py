"""Tests for network tables and holder labels."""

from tokenrisk.providers.labels import is_exchange_label, label_for
from tokenrisk.providers.networks import (
    explorer_token_url,
    get_network,
    holders_page_url,
    normalize_network,
)


def test_normalize_network_aliases():
    assert normalize_network("ETH") == "eth"
    assert normalize_network("ethereum") == "eth"
    assert normalize_network("binance-smart-chain") == "bsc"
    assert normalize_network("BEP20") == "bsc"
    assert normalize_network("polygon-pos") == "polygon"
    assert normalize_network("optimistic-ethereum") == "optimism"
    assert normalize_network("Arbitrum_One") == "arbitrum"
    assert normalize_network("SOL") == "solana"
    assert normalize_network("tron") is None
    assert normalize_network("") is None
    assert normalize_network(None) is None


def test_get_network_chain_ids():
    assert get_network("eth").chain_id == 1
    assert get_network("bsc").chain_id == 56
    assert get_network("base").chain_id == 8453
    assert get_network("solana").chain_id is None
    assert get_network("nope") is None


def test_explorer_urls():
    assert explorer_token_url("polygon", "0xabc") == "https://polygonscan.com/token/0xabc"
    assert explorer_token_url("nope", "0xabc") == ""
    assert holders_page_url("eth", "0xabc") == "https://etherscan.io/token/0xabc#balances"
    assert holders_page_url("solana", "Mint") == "https://solscan.io/token/Mint#holders"


def test_labels():
    assert label_for("0x28C6C06298D514DB089934071355E5743BF21D60") == "Binance 14"
    assert label_for("0xdeadbeef") is None
    assert label_for(None) is None
    assert is_exchange_label("Binance 14")
    assert is_exchange_label("Gate.io 1")
    assert not is_exchange_label("Uniswap V2: PEPE")
    assert not is_exchange_label(None)
