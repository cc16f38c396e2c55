"""
Payment signer base interface
"""

from abc import ABC, abstractmethod
from typing import Any


class TransactionCapability(ABC):
    """
    Ability to submit a raw transaction from the signer's wallet.

    Required for contract-mode escrow funding only.
    """

    @abstractmethod
    async def send_transaction(
        self,
        to: str,
        data: str,
        chain_id: int,
        value: int = 0,
    ) -> str:
        """
        Submit a transaction.

        Args:
            to: Target contract address
            data: 0x-prefixed calldata
            chain_id: EVM chain ID
            value: Native value in wei

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        pass


class PaymentSigner(ABC):
    """
    Abstract base class for payment signers.

    Variants: PrivateKeySigner, ExternalWalletSigner, ManagedWalletSigner.
    """

    #: Transaction submission, or None when the wallet can only sign
    transactions: TransactionCapability | None = None

    @property
    def can_sign_typed_data(self) -> bool:
        """Whether sign_typed_data is backed by a real implementation"""
        return True

    @abstractmethod
    def get_address(self) -> str:
        """Get the signer's wallet address"""
        pass

    @abstractmethod
    async def sign_message(self, message: str) -> str:
        """
        Sign a plain-text message (EIP-191), used for sign-in.

        Args:
            message: Message text

        Returns:
            Signature string (0x-prefixed hex)
        """
        pass

    @abstractmethod
    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, Any],
        primary_type: str,
        message: dict[str, Any],
    ) -> str:
        """
        Sign typed data (EIP-712).

        Args:
            domain: EIP-712 domain
            types: Type definitions (without EIP712Domain)
            primary_type: Name of the signed struct
            message: Message to sign

        Returns:
            Signature string (0x-prefixed hex)
        """
        pass
