"""
mdp_sdk - Agent SDK for the MDP marketplace

Wallet sign-in, payment endpoints and autonomous escrow funding with
EIP-3009 USDC authorizations on Base.
"""

__version__ = "0.1.0"

from mdp_sdk.client import MDPClient, create_local_sdk, create_sdk
from mdp_sdk.config import NetworkConfig, SDKConfig
from mdp_sdk.exceptions import (
    MDPError,
    APIError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RequestTimeoutError,
    NetworkError,
    PaymentError,
    InvalidRequirementError,
    UnsupportedSignerError,
    MissingWalletMetadataError,
    SettlementFailedError,
    ConfirmationError,
    SignatureError,
    SignatureCreationError,
    TransactionError,
    ConfigurationError,
)
from mdp_sdk.signers import (
    PaymentSigner,
    TransactionCapability,
    PrivateKeySigner,
    ExternalWalletSigner,
    ManagedWalletSigner,
    ManagedWalletClient,
)
from mdp_sdk.types import (
    FundJobOptions,
    FundJobResult,
    PaymentIntentResponse,
    PaymentRequirement,
    SettlementMode,
)
from mdp_sdk.utils import format_usdc, parse_usdc

__all__ = [
    "__version__",
    # Client
    "MDPClient",
    "create_sdk",
    "create_local_sdk",
    "NetworkConfig",
    "SDKConfig",
    # Exceptions
    "MDPError",
    "APIError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RequestTimeoutError",
    "NetworkError",
    "PaymentError",
    "InvalidRequirementError",
    "UnsupportedSignerError",
    "MissingWalletMetadataError",
    "SettlementFailedError",
    "ConfirmationError",
    "SignatureError",
    "SignatureCreationError",
    "TransactionError",
    "ConfigurationError",
    # Signers
    "PaymentSigner",
    "TransactionCapability",
    "PrivateKeySigner",
    "ExternalWalletSigner",
    "ManagedWalletSigner",
    "ManagedWalletClient",
    # Types
    "FundJobOptions",
    "FundJobResult",
    "PaymentIntentResponse",
    "PaymentRequirement",
    "SettlementMode",
    # Amounts
    "format_usdc",
    "parse_usdc",
]
