"""Supported networks and the identifiers each provider uses for them."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Network:
    key: str
    name: str
    coingecko_platform: str
    explorer: str
    chain_id: int | None = None  # Etherscan v2 chainid; None = no holder API
    gateio_chain: str = ""


NETWORKS: dict[str, Network] = {
    n.key: n
    for n in (
        Network("eth", "Ethereum", "ethereum", "https://etherscan.io", 1, "ETH"),
        Network("bsc", "BNB Smart Chain", "binance-smart-chain", "https://bscscan.com", 56, "BSC"),
        Network("polygon", "Polygon", "polygon-pos", "https://polygonscan.com", 137, "MATIC"),
        Network("arbitrum", "Arbitrum One", "arbitrum-one", "https://arbiscan.io", 42161, "ARBEVM"),
        Network("avalanche", "Avalanche C-Chain", "avalanche", "https://snowtrace.io", 43114, "AVAX_C"),
        Network(
            "optimism",
            "Optimism",
            "optimistic-ethereum",
            "https://optimistic.etherscan.io",
            10,
            "OPETH",
        ),
        Network("base", "Base", "base", "https://basescan.org", 8453, "BASEEVM"),
        Network("fantom", "Fantom", "fantom", "https://ftmscan.com", 250, "FTM"),
        Network("monad", "Monad", "monad", "https://explorer.monad.xyz"),
        Network("solana", "Solana", "solana", "https://solscan.io", None, "SOL"),
    )
}

_ALIASES = {
    "ethereum": "eth",
    "erc20": "eth",
    "binance-smart-chain": "bsc",
    "binancecoin": "bsc",
    "bnb": "bsc",
    "bep20": "bsc",
    "polygon-pos": "polygon",
    "matic-network": "polygon",
    "matic": "polygon",
    "arbitrum-one": "arbitrum",
    "arbevm": "arbitrum",
    "avalanche-2": "avalanche",
    "avax": "avalanche",
    "avax_c": "avalanche",
    "optimistic-ethereum": "optimism",
    "op": "optimism",
    "opeth": "optimism",
    "baseevm": "base",
    "ftm": "fantom",
    "sol": "solana",
}


def _squash(value: str) -> str:
    return value.lower().replace("-", "").replace("_", "").replace(" ", "")


_SQUASHED = {_squash(k): v for k, v in _ALIASES.items()} | {_squash(k): k for k in NETWORKS}


def normalize_network(value: str | None) -> str | None:
    """Map any provider's chain/platform identifier onto a network key."""
    if not value:
        return None
    key = value.strip().lower()
    if key in NETWORKS:
        return key
    if key in _ALIASES:
        return _ALIASES[key]
    return _SQUASHED.get(_squash(key))


def get_network(value: str | None) -> Network | None:
    key = normalize_network(value)
    return NETWORKS.get(key) if key else None


def explorer_token_url(network: str, address: str) -> str:
    net = get_network(network)
    if net is None:
        return ""
    return f"{net.explorer}/token/{address}"


def holders_page_url(network: str, address: str) -> str:
    net = get_network(network)
    if net is None:
        return ""
    if net.key == "solana":
        return f"{net.explorer}/token/{address}#holders"
    return f"{net.explorer}/token/{address}#balances"
