"""
Tests for MDPClient construction and factories.
"""

import json
from unittest.mock import AsyncMock

import httpx
import pytest
from eth_account import Account

from mdp_sdk import MDPClient, SDKConfig, create_local_sdk, create_sdk
from mdp_sdk.api import AuthAPI, EscrowAPI, PaymentsAPI
from mdp_sdk.exceptions import AuthenticationError, ConfigurationError
from mdp_sdk.signers import ExternalWalletSigner


def _marketplace(seen):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        path = request.url.path
        if path == "/api/auth/nonce":
            return httpx.Response(200, json={"nonce": "n", "message": "Sign in: n"})
        if path == "/api/auth/verify":
            wallet = json.loads(request.content)["wallet"]
            return httpx.Response(
                200,
                json={"success": True, "token": "jwt-1", "user": {"id": "u1", "wallet": wallet}},
            )
        if path == "/api/escrow/job-1":
            return httpx.Response(200, json={"jobId": "job-1"})
        return httpx.Response(401, json={"error": "Authentication required"})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestMDPClient:
    def test_api_groups(self):
        client = MDPClient(SDKConfig(base_url="https://api.mdp.test"))

        assert isinstance(client.auth, AuthAPI)
        assert isinstance(client.payments, PaymentsAPI)
        assert isinstance(client.escrow, EscrowAPI)
        assert client.is_authenticated() is False

    @pytest.mark.anyio
    async def test_token_shared_across_groups(self):
        seen = []
        signer = ExternalWalletSigner("0x" + "aa" * 20, AsyncMock(return_value="0xsig"))

        client = await MDPClient.create_authenticated(
            SDKConfig(base_url="https://api.mdp.test"), signer, http_client=_marketplace(seen)
        )
        async with client:
            await client.escrow.get("job-1")

        assert client.get_token() == "jwt-1"
        assert seen[-1].url.path == "/api/escrow/job-1"
        assert seen[-1].headers["authorization"] == "Bearer jwt-1"

    @pytest.mark.anyio
    async def test_create_with_private_key(self, mock_evm_private_key):
        seen = []

        client = await MDPClient.create_with_private_key(
            SDKConfig(base_url="https://api.mdp.test"),
            mock_evm_private_key,
            http_client=_marketplace(seen),
        )

        address = Account.from_key(mock_evm_private_key).address
        assert seen[0].url.params["wallet"] == address
        assert client.is_authenticated()
        await client.close()

    @pytest.mark.anyio
    async def test_create_authenticated_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "Authentication required"})

        signer = ExternalWalletSigner("0x" + "aa" * 20, AsyncMock(return_value="0xsig"))

        with pytest.raises(AuthenticationError):
            await MDPClient.create_authenticated(
                SDKConfig(base_url="https://api.mdp.test"),
                signer,
                http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
            )

    def test_create_with_token(self):
        client = MDPClient.create_with_token(SDKConfig(base_url="https://api.mdp.test", token="jwt"))
        assert client.is_authenticated()
        assert client.get_token() == "jwt"

    def test_create_with_token_requires_token(self):
        with pytest.raises(ConfigurationError):
            MDPClient.create_with_token(SDKConfig(base_url="https://api.mdp.test"))


class TestFactories:
    def test_create_sdk(self):
        client = create_sdk("https://api.mdp.test", token="jwt", timeout=5.0)
        assert client.config.base_url == "https://api.mdp.test"
        assert client.config.timeout == 5.0
        assert client.get_token() == "jwt"

    def test_create_local_sdk(self):
        assert create_local_sdk().config.base_url == "http://localhost:3201"
        assert create_local_sdk(4000).config.base_url == "http://localhost:4000"
