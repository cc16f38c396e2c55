"""
MDP SDK configuration
Network constants for Base settlement and client settings loaded from the environment
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict

from mdp_sdk.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class NetworkConfig:
    """Network configuration for chain IDs, token and RPC endpoints"""

    BASE_MAINNET = "eip155:8453"
    BASE_SEPOLIA = "eip155:84532"

    # Used when a requirement's network suffix cannot be parsed
    DEFAULT_CHAIN_ID = 8453

    # Canonical USDC on Base mainnet
    USDC_ADDRESS = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
    USDC_DECIMALS = 6

    # USDC EIP-712 domain (chainId and verifyingContract are set at sign time)
    USDC_EIP712_NAME = "USD Coin"
    USDC_EIP712_VERSION = "2"

    # Public RPC URLs keyed by chain ID
    RPC_URLS: Dict[int, str] = {
        8453: "https://mainnet.base.org",
        84532: "https://sepolia.base.org",
    }

    @classmethod
    def get_rpc_url(cls, chain_id: int) -> str | None:
        """Get RPC URL for a chain.

        Args:
            chain_id: EVM chain ID (e.g., 8453)

        Returns:
            RPC URL string, or None if not configured
        """
        return cls.RPC_URLS.get(chain_id)

    @classmethod
    def get_chain_id(cls, network: str | None) -> int:
        """Get chain ID from a network identifier.

        The chain ID is the suffix of a CAIP-2 identifier ("eip155:8453" -> 8453).
        Falls back to DEFAULT_CHAIN_ID when the suffix is missing or not numeric.

        Args:
            network: Network identifier

        Returns:
            Chain ID as integer
        """
        _, _, suffix = (network or "").partition(":")
        try:
            return int(suffix)
        except ValueError:
            logger.warning(
                "Could not parse chain ID from network %r, defaulting to %d",
                network,
                cls.DEFAULT_CHAIN_ID,
            )
            return cls.DEFAULT_CHAIN_ID


@dataclass
class SDKConfig:
    """Client settings for the marketplace API"""

    base_url: str
    token: str | None = None
    timeout: float = 30.0
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "SDKConfig":
        """Load settings from MDP_API_URL, MDP_TOKEN and MDP_TIMEOUT.

        Args:
            env_file: Optional .env file loaded before reading the environment

        Raises:
            ConfigurationError: If MDP_API_URL is not set or MDP_TIMEOUT is not a number
        """
        if env_file:
            from dotenv import load_dotenv

            load_dotenv(env_file)

        base_url = os.getenv("MDP_API_URL")
        if not base_url:
            raise ConfigurationError("MDP_API_URL is not set")

        timeout_raw = os.getenv("MDP_TIMEOUT", "30")
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ConfigurationError(f"Invalid MDP_TIMEOUT: {timeout_raw}")

        return cls(base_url=base_url, token=os.getenv("MDP_TOKEN") or None, timeout=timeout)
