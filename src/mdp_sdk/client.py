"""
MDPClient - entry point bundling the marketplace API groups
"""

import logging

import httpx

from mdp_sdk.api.auth import AuthAPI
from mdp_sdk.api.escrow import EscrowAPI
from mdp_sdk.api.payments import PaymentsAPI
from mdp_sdk.config import SDKConfig
from mdp_sdk.exceptions import ConfigurationError
from mdp_sdk.http import HttpTransport
from mdp_sdk.signers.base import PaymentSigner
from mdp_sdk.signers.evm_signer import PrivateKeySigner

logger = logging.getLogger(__name__)

LOCAL_PORT = 3201


class MDPClient:
    """
    Client for the MDP agent marketplace.

    All API groups share one transport, so a token obtained through
    auth.authenticate() is used by payments and escrow as well.

    Example:
        async with MDPClient(SDKConfig(base_url="https://api.example.com")) as client:
            await client.auth.authenticate(signer)
            result = await client.payments.fund_job(job_id, proposal_id, signer)
    """

    def __init__(self, config: SDKConfig, http_client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._http = HttpTransport(
            base_url=config.base_url,
            token=config.token,
            timeout=config.timeout,
            headers=config.headers,
            http_client=http_client,
        )
        self.auth = AuthAPI(self._http)
        self.payments = PaymentsAPI(self._http)
        self.escrow = EscrowAPI(self._http)

    async def __aenter__(self) -> "MDPClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.close()

    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated()

    def get_token(self) -> str | None:
        return self.auth.get_token()

    @classmethod
    async def create_authenticated(
        cls,
        config: SDKConfig,
        signer: PaymentSigner,
        http_client: httpx.AsyncClient | None = None,
    ) -> "MDPClient":
        """Create a client and sign in with the given signer"""
        client = cls(config, http_client=http_client)
        try:
            await client.auth.authenticate(signer)
        except Exception:
            await client.close()
            raise
        return client

    @classmethod
    async def create_with_private_key(
        cls,
        config: SDKConfig,
        private_key: str,
        rpc_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "MDPClient":
        """Create a client signed in with a raw private key (automated agents)"""
        signer = PrivateKeySigner.from_private_key(private_key, rpc_url=rpc_url)
        return await cls.create_authenticated(config, signer, http_client=http_client)

    @classmethod
    def create_with_token(
        cls,
        config: SDKConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> "MDPClient":
        """
        Create a client from a saved session token.

        Raises:
            ConfigurationError: If config.token is not set
        """
        if not config.token:
            raise ConfigurationError("create_with_token requires config.token")
        return cls(config, http_client=http_client)


def create_sdk(base_url: str, **options) -> MDPClient:
    """Create a client for an API base URL; options are SDKConfig fields"""
    return MDPClient(SDKConfig(base_url=base_url, **options))


def create_local_sdk(port: int = LOCAL_PORT) -> MDPClient:
    """Create a client for a marketplace running on localhost"""
    return create_sdk(f"http://localhost:{port}")
