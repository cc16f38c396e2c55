"""
AuthAPI - wallet sign-in and session token handling
"""

import logging

from mdp_sdk.http import HttpTransport
from mdp_sdk.signers.base import PaymentSigner
from mdp_sdk.types import AuthNonceResponse, AuthVerifyResponse, MeResponse, User

logger = logging.getLogger(__name__)


class AuthAPI:
    """
    Sign-in flow: nonce -> sign message -> verify.

    A successful verify stores the bearer token on the shared transport, so
    every API group uses it afterwards.
    """

    def __init__(self, http: HttpTransport) -> None:
        self._http = http

    async def get_nonce(self, wallet: str) -> AuthNonceResponse:
        """Sign-in challenge for a wallet"""
        data = await self._http.get("/api/auth/nonce", params={"wallet": wallet})
        return AuthNonceResponse(**data)

    async def verify(self, wallet: str, signature: str) -> AuthVerifyResponse:
        """
        Verify the signed challenge and store the returned token.

        Args:
            wallet: Wallet address
            signature: Signature of the nonce message

        Returns:
            AuthVerifyResponse with token and user
        """
        data = await self._http.post(
            "/api/auth/verify",
            {"wallet": wallet, "signature": signature},
        )
        response = AuthVerifyResponse(**data)
        if response.token:
            self._http.set_token(response.token)
        return response

    async def authenticate(self, signer: PaymentSigner) -> AuthVerifyResponse:
        """Complete sign-in with a wallet signer"""
        wallet = signer.get_address()
        nonce = await self.get_nonce(wallet)
        signature = await signer.sign_message(nonce.message)
        response = await self.verify(wallet, signature)
        logger.info(f"Authenticated wallet {wallet} as user {response.user.id}")
        return response

    async def me(self) -> User:
        """
        Currently authenticated user.

        Raises:
            AuthenticationError: If not authenticated
        """
        data = await self._http.get("/api/auth/me")
        return MeResponse(**data).user

    async def logout(self) -> None:
        await self._http.post("/api/auth/logout")
        self._http.set_token(None)

    def is_authenticated(self) -> bool:
        return bool(self._http.get_token())

    def set_token(self, token: str) -> None:
        """Restore a session from a saved token"""
        self._http.set_token(token)

    def get_token(self) -> str | None:
        return self._http.get_token()
