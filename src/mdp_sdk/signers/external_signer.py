"""
ExternalWalletSigner - signer whose keys live outside the SDK
"""

import logging
from typing import Any, Awaitable, Callable

from mdp_sdk.exceptions import UnsupportedSignerError
from mdp_sdk.signers.base import PaymentSigner, TransactionCapability
from mdp_sdk.signers.utils import to_json_typed_data

logger = logging.getLogger(__name__)

SignMessageFn = Callable[[str], Awaitable[str]]
# Receives {"domain", "types", "primaryType", "message"}
SignTypedDataFn = Callable[[dict[str, Any]], Awaitable[str]]
# Receives {"to", "data", "value", "chainId"}
SendTransactionFn = Callable[[dict[str, Any]], Awaitable[str]]


class CallbackTransactionSender(TransactionCapability):
    """Forwards transactions to a wallet callback"""

    def __init__(self, send_transaction_fn: SendTransactionFn) -> None:
        self._send_transaction_fn = send_transaction_fn

    async def send_transaction(
        self,
        to: str,
        data: str,
        chain_id: int,
        value: int = 0,
    ) -> str:
        return await self._send_transaction_fn(
            {"to": to, "data": data, "value": value, "chainId": chain_id}
        )


class ExternalWalletSigner(PaymentSigner):
    """
    Signer backed by callbacks into an external wallet.

    sign_message_fn is enough for sign-in. Supply sign_typed_data_fn to fund
    jobs through the facilitator, and send_transaction_fn as well for
    contract-mode escrow.
    """

    def __init__(
        self,
        address: str,
        sign_message_fn: SignMessageFn,
        sign_typed_data_fn: SignTypedDataFn | None = None,
        send_transaction_fn: SendTransactionFn | None = None,
    ) -> None:
        self._address = address
        self._sign_message_fn = sign_message_fn
        self._sign_typed_data_fn = sign_typed_data_fn
        if send_transaction_fn is not None:
            self.transactions = CallbackTransactionSender(send_transaction_fn)

    @property
    def can_sign_typed_data(self) -> bool:
        return self._sign_typed_data_fn is not None

    def get_address(self) -> str:
        return self._address

    async def sign_message(self, message: str) -> str:
        return await self._sign_message_fn(message)

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, Any],
        primary_type: str,
        message: dict[str, Any],
    ) -> str:
        if self._sign_typed_data_fn is None:
            raise UnsupportedSignerError("sign_typed_data_fn not provided to ExternalWalletSigner")
        typed_data = to_json_typed_data(
            {"domain": domain, "types": types, "primaryType": primary_type, "message": message}
        )
        return await self._sign_typed_data_fn(typed_data)
