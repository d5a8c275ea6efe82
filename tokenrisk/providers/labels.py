"""Holder address labels and exchange classification."""

EXCHANGE_KEYWORDS = (
    "binance",
    "coinbase",
    "kraken",
    "okx",
    "okex",
    "bybit",
    "kucoin",
    "gate.io",
    "huobi",
    "htx",
    "bitfinex",
    "crypto.com",
    "mexc",
    "bitget",
    "upbit",
)

# Well-known exchange hot/cold wallets (EVM, lowercased)
KNOWN_LABELS: dict[str, str] = {
    "0x28c6c06298d514db089934071355e5743bf21d60": "Binance 14",
    "0x21a31ee1afc51d94c2efccaa2092ad1028285549": "Binance 15",
    "0xbe0eb53f46cd790cd13851d5eff43d12404d33e8": "Binance 7",
    "0xf977814e90da44bfa03b6295a0616a897441acec": "Binance 8",
    "0x5a52e96bacdabb82fd05763e25335261b270efcb": "Binance 28",
    "0x71660c4005ba85c37ccec55d0c4493e66fe775d3": "Coinbase 1",
    "0x503828976d22510aad0201ac7ec88293211d23da": "Coinbase 2",
    "0xa9d1e08c7793af67e9d92fe308d5697fb81d3e43": "Coinbase 10",
    "0x2910543af39aba0cd09dbb2d50200b3e800a63d2": "Kraken 1",
    "0x6cc5f688a315f3dc28a7781717a9a798a59fda7b": "OKX",
    "0x742d35cc6634c0532925a3b844bc454e4438f44e": "Bitfinex 5",
    "0x0d0707963952f2fba59dd06f2b425ace40b492fe": "Gate.io 1",
    "0xf89d7b9c864f589bbf53a82105107622b35eaa40": "Bybit",
}


def label_for(address: str | None) -> str | None:
    if not address:
        return None
    return KNOWN_LABELS.get(address.lower())


def is_exchange_label(label: str | None) -> bool:
    if not label:
        return False
    lowered = label.lower()
    return any(k in lowered for k in EXCHANGE_KEYWORDS)
