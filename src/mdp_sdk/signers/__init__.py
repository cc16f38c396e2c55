"""
Payment Signers
"""

from mdp_sdk.signers.base import PaymentSigner, TransactionCapability
from mdp_sdk.signers.evm_signer import PrivateKeySigner, Web3TransactionSender
from mdp_sdk.signers.external_signer import CallbackTransactionSender, ExternalWalletSigner
from mdp_sdk.signers.managed_signer import (
    ManagedTransactionSender,
    ManagedWalletClient,
    ManagedWalletSigner,
)

__all__ = [
    "PaymentSigner",
    "TransactionCapability",
    "PrivateKeySigner",
    "Web3TransactionSender",
    "ExternalWalletSigner",
    "CallbackTransactionSender",
    "ManagedWalletSigner",
    "ManagedWalletClient",
    "ManagedTransactionSender",
]
