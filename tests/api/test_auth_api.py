"""
Tests for AuthAPI sign-in flow.
"""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from mdp_sdk.api import AuthAPI
from mdp_sdk.exceptions import AuthenticationError
from mdp_sdk.http import HttpTransport
from mdp_sdk.signers import ExternalWalletSigner

WALLET = "0x" + "aa" * 20
USER = {"id": "user-1", "wallet": WALLET}


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/api/auth/nonce":
        wallet = request.url.params["wallet"]
        return httpx.Response(200, json={"nonce": "n-1", "message": f"Sign in {wallet}: n-1"})
    if path == "/api/auth/verify":
        body = json.loads(request.content)
        if body["signature"] != "0xgood":
            return httpx.Response(401, json={"error": "Invalid signature"})
        return httpx.Response(200, json={"success": True, "token": "jwt-1", "user": USER})
    if path == "/api/auth/me":
        if request.headers.get("authorization") != "Bearer jwt-1":
            return httpx.Response(401, json={"error": "Not authenticated"})
        return httpx.Response(200, json={"user": USER})
    if path == "/api/auth/logout":
        return httpx.Response(200, json={"success": True})
    return httpx.Response(404, json={"error": "no route"})


@pytest.fixture
def http():
    client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
    return HttpTransport("https://api.mdp.test", http_client=client)


class TestAuthAPI:
    @pytest.mark.anyio
    async def test_authenticate_signs_nonce_message(self, http):
        sign_message = AsyncMock(return_value="0xgood")
        auth = AuthAPI(http)

        response = await auth.authenticate(ExternalWalletSigner(WALLET, sign_message))

        sign_message.assert_awaited_once_with(f"Sign in {WALLET}: n-1")
        assert response.token == "jwt-1"
        assert response.user.id == "user-1"
        assert auth.is_authenticated()
        assert auth.get_token() == "jwt-1"

    @pytest.mark.anyio
    async def test_failed_verify_keeps_session_empty(self, http):
        auth = AuthAPI(http)

        with pytest.raises(AuthenticationError, match="Invalid signature"):
            await auth.verify(WALLET, "0xbad")

        assert not auth.is_authenticated()

    @pytest.mark.anyio
    async def test_me_requires_token(self, http):
        auth = AuthAPI(http)

        with pytest.raises(AuthenticationError):
            await auth.me()

        auth.set_token("jwt-1")
        user = await auth.me()
        assert user.wallet == WALLET

    @pytest.mark.anyio
    async def test_logout_clears_token(self, http):
        auth = AuthAPI(http)
        auth.set_token("jwt-1")

        await auth.logout()

        assert not auth.is_authenticated()
        assert auth.get_token() is None
