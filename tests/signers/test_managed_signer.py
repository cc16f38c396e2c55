"""
Tests for ManagedWalletSigner.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from mdp_sdk.abi import TRANSFER_AUTH_EIP712_TYPES, TRANSFER_AUTH_PRIMARY_TYPE
from mdp_sdk.exceptions import SignatureCreationError, TransactionError
from mdp_sdk.signers import ManagedTransactionSender, ManagedWalletSigner

WALLET = "0x" + "aa" * 20


@pytest.fixture
def wallet_client():
    client = MagicMock()
    client.sign_message = AsyncMock(return_value="0xmsg")
    client.sign_typed_data = AsyncMock(return_value="0xtyped")
    client.send_transaction = AsyncMock(return_value="0xtx")
    return client


class TestManagedWalletSigner:
    def test_capabilities(self, wallet_client):
        signer = ManagedWalletSigner(WALLET, wallet_client)

        assert signer.get_address() == WALLET
        assert signer.can_sign_typed_data is True
        assert isinstance(signer.transactions, ManagedTransactionSender)

    @pytest.mark.anyio
    async def test_sign_message_by_address(self, wallet_client):
        signer = ManagedWalletSigner(WALLET, wallet_client)

        assert await signer.sign_message("hello") == "0xmsg"
        wallet_client.sign_message.assert_awaited_once_with(WALLET, "hello")

    @pytest.mark.anyio
    async def test_typed_data_is_json_safe(self, wallet_client):
        signer = ManagedWalletSigner(WALLET, wallet_client)
        domain = {"name": "USD Coin", "version": "2", "chainId": 8453, "verifyingContract": WALLET}

        await signer.sign_typed_data(
            domain=domain,
            types=TRANSFER_AUTH_EIP712_TYPES,
            primary_type=TRANSFER_AUTH_PRIMARY_TYPE,
            message={"nonce": b"\x01" * 32, "value": 5},
        )

        address, typed_data = wallet_client.sign_typed_data.call_args.args
        assert address == WALLET
        assert typed_data["primaryType"] == TRANSFER_AUTH_PRIMARY_TYPE
        assert typed_data["message"]["nonce"] == "0x" + "01" * 32
        assert [f["name"] for f in typed_data["types"]["EIP712Domain"]] == [
            "name",
            "version",
            "chainId",
            "verifyingContract",
        ]

    @pytest.mark.anyio
    async def test_signing_failure_wrapped(self, wallet_client):
        wallet_client.sign_typed_data = AsyncMock(side_effect=RuntimeError("wallet locked"))
        signer = ManagedWalletSigner(WALLET, wallet_client)

        with pytest.raises(SignatureCreationError, match="wallet locked"):
            await signer.sign_typed_data(domain={}, types={}, primary_type="T", message={})

    @pytest.mark.anyio
    async def test_send_transaction(self, wallet_client):
        signer = ManagedWalletSigner(WALLET, wallet_client)

        tx_hash = await signer.transactions.send_transaction(
            to="0x" + "dd" * 20, data="0xabcd", chain_id=8453
        )

        assert tx_hash == "0xtx"
        wallet_client.send_transaction.assert_awaited_once_with(
            WALLET,
            {"to": "0x" + "dd" * 20, "data": "0xabcd", "value": "0x0", "chainId": 8453},
        )

    @pytest.mark.anyio
    async def test_send_failure_wrapped(self, wallet_client):
        wallet_client.send_transaction = AsyncMock(side_effect=RuntimeError("insufficient gas"))
        signer = ManagedWalletSigner(WALLET, wallet_client)

        with pytest.raises(TransactionError):
            await signer.transactions.send_transaction(to=WALLET, data="0x", chain_id=8453)
