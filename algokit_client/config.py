"""
Configuration management for the Algorand client.

Loads settings from the environment (ALGOKIT_* variables) and an optional
.env file via pydantic-settings. The network preset supplies the algod
endpoint unless ALGOKIT_ALGOD_ADDRESS overrides it.
"""
import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from algokit_client.domain.constants import (
    DEFAULT_CONFIRMATION_ROUNDS,
    DEFAULT_VALIDITY_WINDOW,
    MIN_TXN_FEE,
)
from algokit_client.domain.enums import Network

logger = logging.getLogger(__name__)

# Public algod endpoints per network (AlgoNode for testnet/mainnet,
# the AlgoKit sandbox defaults for localnet)
NETWORK_PRESETS = {
    Network.LOCALNET: ("http://localhost:4001", "a" * 64),
    Network.TESTNET: ("https://testnet-api.algonode.cloud", ""),
    Network.MAINNET: ("https://mainnet-api.algonode.cloud", ""),
}


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # ── Node ────────────────────────────────────────────────────────
    network: Network = Network.TESTNET
    algod_address: Optional[str] = None
    algod_token: Optional[str] = None

    # ── Transactions ────────────────────────────────────────────────
    validity_window: int = Field(default=DEFAULT_VALIDITY_WINDOW, gt=0)
    confirmation_rounds: int = Field(default=DEFAULT_CONFIRMATION_ROUNDS, gt=0)
    min_fee: int = Field(default=MIN_TXN_FEE, ge=0)  # fee floor, microAlgos

    # ── Execution ───────────────────────────────────────────────────
    # Process-wide: read from the global settings when the shared pool is first created
    executor_workers: int = Field(default=4, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="ALGOKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def for_network(cls, network: Network | str, **overrides) -> "Settings":
        """Settings for one of the predefined networks."""
        return cls(network=Network(network), **overrides)

    @property
    def resolved_algod_address(self) -> str:
        """Explicit algod_address, or the network preset."""
        if self.algod_address:
            return self.algod_address
        return NETWORK_PRESETS[self.network][0]

    @property
    def resolved_algod_token(self) -> str:
        if self.algod_token is not None:
            return self.algod_token
        return NETWORK_PRESETS[self.network][1]

    def log_summary(self):
        """Log the effective node settings; warn about risky combinations."""
        logger.info(
            f"Algorand client configured for {self.network.value} at {self.resolved_algod_address}"
        )
        if self.network == Network.MAINNET and self.algod_address and "localhost" in self.algod_address:
            logger.warning("Network is mainnet but algod_address points at localhost")


# Global settings instance
settings = Settings()
