"""
Types and helpers for ERC-3009 transfer authorizations.
"""

import secrets
import time
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from mdp_sdk.types import PaymentRequirement

SCHEME_EXACT = "exact"
X402_VERSION = 1

# Authorizations expire 5 minutes after they are signed
AUTHORIZATION_VALIDITY_SECONDS = 300
VALID_AFTER = 0


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


class TransferAuthorization(BaseModel):
    """TransferWithAuthorization parameters (wire form)"""

    from_address: str = Field(alias="from")
    to: str
    value: str
    valid_after: str = Field(alias="validAfter")
    valid_before: str = Field(alias="validBefore")
    nonce: str  # 32-byte hex string (0x...)

    class Config:
        populate_by_name = True
        frozen = True


class PaymentPayloadData(BaseModel):
    signature: str
    authorization: TransferAuthorization


class PaymentPayload(BaseModel):
    """x402 payment payload carried in the settlement header"""

    x402_version: int = Field(X402_VERSION, alias="x402Version")
    scheme: str = SCHEME_EXACT
    network: str
    payload: PaymentPayloadData

    class Config:
        populate_by_name = True


@dataclass(frozen=True)
class AuthorizationRequest:
    """Everything a signer needs to sign one authorization"""

    authorization: TransferAuthorization
    domain: dict[str, Any]
    types: dict[str, Any]
    primary_type: str
    message: dict[str, Any]
    chain_id: int
    token_address: str


@dataclass(frozen=True)
class SignedAuthorization:
    """An authorization bound to its signature; consumed by exactly one settlement"""

    requirement: PaymentRequirement
    authorization: TransferAuthorization
    signature: str
    chain_id: int
    token_address: str

    def to_payment_payload(self) -> PaymentPayload:
        return PaymentPayload(
            network=self.requirement.network,
            payload=PaymentPayloadData(signature=self.signature, authorization=self.authorization),
        )


# ---------------------------------------------------------------------------
# EIP-712 builders
# ---------------------------------------------------------------------------


def build_eip712_message(auth: TransferAuthorization) -> dict[str, Any]:
    """Build EIP-712 message dict from authorization."""
    return {
        "from": auth.from_address,
        "to": auth.to,
        "value": int(auth.value),
        "validAfter": int(auth.valid_after),
        "validBefore": int(auth.valid_before),
        "nonce": bytes.fromhex(auth.nonce[2:] if auth.nonce.startswith("0x") else auth.nonce),
    }


def build_eip712_domain(
    token_name: str,
    token_version: str,
    chain_id: int,
    verifying_contract: str,
) -> dict[str, Any]:
    """Build EIP-712 domain dict for the token."""
    return {
        "name": token_name,
        "version": token_version,
        "chainId": chain_id,
        "verifyingContract": verifying_contract,
    }


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------


def create_nonce() -> str:
    """Generate a random 32-byte nonce (0x-prefixed hex)."""
    return "0x" + secrets.token_hex(32)


def create_valid_before(window: int = AUTHORIZATION_VALIDITY_SECONDS) -> int:
    """Expiry timestamp for an authorization signed now."""
    return int(time.time()) + window
