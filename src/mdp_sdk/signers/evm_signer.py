"""
PrivateKeySigner - local private key signer using eth-account and web3.py
"""

import logging
from typing import Any

from mdp_sdk.encoding import bytes_to_hex
from mdp_sdk.exceptions import ConfigurationError, SignatureCreationError, TransactionError
from mdp_sdk.signers.base import PaymentSigner, TransactionCapability
from mdp_sdk.signers.utils import build_typed_data, resolve_rpc_url

logger = logging.getLogger(__name__)


class Web3TransactionSender(TransactionCapability):
    """Signs transactions locally and broadcasts them through a JSON-RPC node"""

    def __init__(self, private_key: str, address: str, rpc_url: str | None = None) -> None:
        self._private_key = private_key
        self._address = address
        self._rpc_url = rpc_url
        self._async_web3_clients: dict[int, Any] = {}

    def _ensure_async_web3_client(self, chain_id: int) -> Any:
        """Lazy initialize async web3 client for the given chain."""
        if chain_id not in self._async_web3_clients:
            from web3 import AsyncHTTPProvider, AsyncWeb3

            provider_uri = resolve_rpc_url(chain_id, self._rpc_url)
            if provider_uri is None:
                raise ConfigurationError(f"No RPC URL configured for chain {chain_id}")
            self._async_web3_clients[chain_id] = AsyncWeb3(AsyncHTTPProvider(provider_uri))

        return self._async_web3_clients[chain_id]

    async def send_transaction(
        self,
        to: str,
        data: str,
        chain_id: int,
        value: int = 0,
    ) -> str:
        w3 = self._ensure_async_web3_client(chain_id)

        try:
            tx: dict[str, Any] = {
                "from": self._address,
                "to": w3.to_checksum_address(to),
                "data": data,
                "value": value,
                "chainId": chain_id,
                "nonce": await w3.eth.get_transaction_count(self._address, "pending"),
            }
            tx["gas"] = await w3.eth.estimate_gas(tx)
            tx["gasPrice"] = await w3.eth.gas_price

            signed_tx = w3.eth.account.sign_transaction(tx, private_key=self._private_key)
            tx_hash = await w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except Exception as e:
            logger.error(
                "Transaction submission failed: %s",
                e,
                exc_info=True,
                extra={"to": to, "chain_id": chain_id},
            )
            raise TransactionError(f"Failed to send transaction to {to}: {e}") from e

        tx_hash_hex = w3.to_hex(tx_hash)
        logger.info("Transaction submitted", extra={"tx_hash": tx_hash_hex, "chain_id": chain_id})
        return tx_hash_hex


class PrivateKeySigner(PaymentSigner):
    """Signer holding a raw private key, for automated agents"""

    def __init__(self, private_key: str, rpc_url: str | None = None) -> None:
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key
        self._private_key = private_key
        self._address = self._derive_address(private_key)
        self.transactions = Web3TransactionSender(private_key, self._address, rpc_url)
        logger.debug("PrivateKeySigner initialized", extra={"address": self._address})

    @classmethod
    def from_private_key(cls, private_key: str, rpc_url: str | None = None) -> "PrivateKeySigner":
        """Create signer from private key."""
        return cls(private_key, rpc_url)

    @staticmethod
    def _derive_address(private_key: str) -> str:
        """Derive EVM address from private key"""
        from eth_account import Account

        return Account.from_key(private_key).address

    def get_address(self) -> str:
        return self._address

    async def sign_message(self, message: str) -> str:
        """Sign a text message using ECDSA (EIP-191)"""
        try:
            from eth_account import Account
            from eth_account.messages import encode_defunct

            signable = encode_defunct(text=message)
            signed = Account.sign_message(signable, private_key=self._private_key)
            return bytes_to_hex(bytes(signed.signature))
        except Exception as e:
            raise SignatureCreationError(f"Failed to sign message: {e}")

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, Any],
        primary_type: str,
        message: dict[str, Any],
    ) -> str:
        """Sign EIP-712 typed data."""
        try:
            from eth_account import Account
            from eth_account.messages import encode_typed_data

            full_data = build_typed_data(domain, types, primary_type, message)
            encoded = encode_typed_data(full_message=full_data)
            signed = Account.sign_message(encoded, private_key=self._private_key)
            return bytes_to_hex(bytes(signed.signature))
        except Exception as e:
            raise SignatureCreationError(f"Failed to sign typed data: {e}")
