"""
ManagedWalletSigner - signer backed by a custodial wallet service
"""

import logging
from typing import Any, Protocol

from mdp_sdk.exceptions import SignatureCreationError, TransactionError
from mdp_sdk.signers.base import PaymentSigner, TransactionCapability
from mdp_sdk.signers.utils import build_typed_data, to_json_typed_data

logger = logging.getLogger(__name__)


class ManagedWalletClient(Protocol):
    """Wallet service client; the service holds keys and signs on request by address"""

    async def sign_message(self, address: str, message: str) -> str:
        ...

    async def sign_typed_data(self, address: str, typed_data: dict[str, Any]) -> str:
        ...

    async def send_transaction(self, address: str, transaction: dict[str, Any]) -> str:
        ...


class ManagedTransactionSender(TransactionCapability):
    """Submits transactions through the wallet service"""

    def __init__(self, client: ManagedWalletClient, address: str) -> None:
        self._client = client
        self._address = address

    async def send_transaction(
        self,
        to: str,
        data: str,
        chain_id: int,
        value: int = 0,
    ) -> str:
        transaction = {"to": to, "data": data, "value": hex(value), "chainId": chain_id}
        try:
            return await self._client.send_transaction(self._address, transaction)
        except Exception as e:
            raise TransactionError(f"Managed wallet failed to send transaction: {e}") from e


class ManagedWalletSigner(PaymentSigner):
    """Signer for a server-side wallet; supports typed data and transactions"""

    def __init__(self, address: str, client: ManagedWalletClient) -> None:
        self._address = address
        self._client = client
        self.transactions = ManagedTransactionSender(client, address)

    def get_address(self) -> str:
        return self._address

    async def sign_message(self, message: str) -> str:
        try:
            return await self._client.sign_message(self._address, message)
        except Exception as e:
            raise SignatureCreationError(f"Managed wallet failed to sign message: {e}") from e

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, Any],
        primary_type: str,
        message: dict[str, Any],
    ) -> str:
        typed_data = to_json_typed_data(build_typed_data(domain, types, primary_type, message))
        try:
            return await self._client.sign_typed_data(self._address, typed_data)
        except Exception as e:
            raise SignatureCreationError(f"Managed wallet failed to sign typed data: {e}") from e
