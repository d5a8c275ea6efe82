from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Redis (analysis cache + categories)
    redis_url: str = "redis://localhost:6379/0"
    cache_enabled: bool = True
    cache_ttl_hours: int = 4

    # CoinGecko (free tier works without a key, ~30 req/min)
    coingecko_api_key: str = ""
    coingecko_max_rps: float = 0.5

    # CoinMarketCap pro API (skipped entirely when key is empty)
    cmc_api_key: str = ""
    cmc_max_rps: float = 0.5

    # Gate.io public spot API
    gateio_max_rps: float = 2.0

    # Etherscan v2 multichain API (one key for every EVM explorer)
    etherscan_api_key: str = ""
    explorer_max_rps: float = 4.0
    explorer_holder_limit: int = 25

    # Solana RPC
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    solana_max_rps: float = 4.0

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = 3005
    api_debug: bool = False

    # Token lists / categories
    token_list_min_risk: int = 50
    category_scam_threshold: int = 30

    # Batch refresh (scripts/refresh_symbols.py)
    symbols_to_analyze: str = "BTC,ETH,USDT,BNB,SOL,XRP,DOGE,ADA,AVAX,MATIC"
    symbol_refresh_delay_sec: float = 2.0

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    @property
    def symbol_list(self) -> list[str]:
        return [s.strip().upper() for s in self.symbols_to_analyze.split(",") if s.strip()]


settings = Settings()
