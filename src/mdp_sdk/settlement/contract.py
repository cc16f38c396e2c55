"""
Escrow contract helpers for contract-mode funding.
"""

from dataclasses import dataclass

from web3 import Web3

from mdp_sdk.abi import ESCROW_FUND_ABI, FUND_JOB_METHOD
from mdp_sdk.encoding import hex_to_bytes
from mdp_sdk.exceptions import (
    InvalidRequirementError,
    MissingWalletMetadataError,
    SignatureError,
)
from mdp_sdk.settlement.types import SignedAuthorization
from mdp_sdk.types import PaymentRequirement


@dataclass(frozen=True)
class SignatureParts:
    v: int
    r: bytes
    s: bytes


def derive_job_key(job_id: str) -> str:
    """
    Deterministic bytes32 escrow key for a job: keccak256 of the job id.

    Hex job ids are hashed as bytes, anything else as UTF-8 text.
    """
    if job_id.startswith("0x"):
        try:
            return Web3.to_hex(Web3.keccak(hexstr=job_id))
        except ValueError:
            pass
    return Web3.to_hex(Web3.keccak(text=job_id))


def split_signature(signature: str) -> SignatureParts:
    """
    Split a 65-byte r || s || v signature.

    v is normalised to 27/28 when the signer returns a 0/1 parity bit.

    Raises:
        SignatureError: If the signature is not 65 bytes or v is out of range
    """
    try:
        raw = hex_to_bytes(signature)
    except ValueError as e:
        raise SignatureError(f"Signature is not valid hex: {e}")
    if len(raw) != 65:
        raise SignatureError(f"Expected 65-byte signature, got {len(raw)} bytes")

    v = raw[64]
    if v in (0, 1):
        v += 27
    if v not in (27, 28):
        raise SignatureError(f"Invalid signature recovery id: {raw[64]}")
    return SignatureParts(v=v, r=raw[:32], s=raw[32:64])


def resolve_agent_wallets(requirement: PaymentRequirement) -> tuple[str, str]:
    """
    Executor and payout wallets for the escrow call.

    Payout defaults to the executor wallet.

    Raises:
        MissingWalletMetadataError: If no executor wallet is present
    """
    extra = requirement.extra
    if extra is None or not (extra.agent_executor_wallet or extra.agent_wallet):
        raise MissingWalletMetadataError(
            "Missing agent executor wallet in payment requirement extra"
        )
    executor = extra.agent_executor_wallet or extra.agent_wallet
    payout = extra.agent_payout_wallet or executor
    for wallet in (executor, payout):
        if not Web3.is_address(wallet):
            raise InvalidRequirementError(f"Invalid agent wallet address: {wallet!r}")
    return executor, payout


def resolve_job_key(requirement: PaymentRequirement, job_id: str) -> str:
    """
    Escrow key from requirement extra, or derived from the job id.

    Raises:
        InvalidRequirementError: If extra.jobKey is not a 0x-prefixed bytes32 value
    """
    job_key = requirement.extra.job_key if requirement.extra else None
    if not job_key:
        return derive_job_key(job_id)
    try:
        key_bytes = hex_to_bytes(job_key)
    except ValueError:
        key_bytes = b""
    if not job_key.startswith("0x") or len(key_bytes) != 32:
        raise InvalidRequirementError(f"Invalid jobKey: {job_key!r}")
    return job_key


def encode_fund_job_calldata(
    signed: SignedAuthorization,
    job_key: str,
    agent_executor: str,
    agent_payout: str,
) -> str:
    """ABI-encode fundJobWithAuthorization for a signed authorization."""
    auth = signed.authorization
    parts = split_signature(signed.signature)

    contract = Web3().eth.contract(abi=ESCROW_FUND_ABI)
    return contract.encode_abi(
        FUND_JOB_METHOD,
        args=[
            hex_to_bytes(job_key),
            Web3.to_checksum_address(auth.from_address),
            Web3.to_checksum_address(agent_executor),
            Web3.to_checksum_address(agent_payout),
            int(auth.value),
            int(auth.valid_after),
            int(auth.valid_before),
            hex_to_bytes(auth.nonce),
            parts.v,
            parts.r,
            parts.s,
        ],
    )
