"""Data models for Gate.io spot API responses."""

from dataclasses import dataclass


@dataclass
class GateCurrencyChain:
    """One chain a Gate.io currency can be deposited/withdrawn on."""

    chain: str
    contract_address: str = ""
    network: str | None = None  # normalized network key, None if unsupported
    is_disabled: bool = False

    @property
    def is_native(self) -> bool:
        return not self.contract_address
