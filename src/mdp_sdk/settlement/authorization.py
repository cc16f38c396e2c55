"""
Authorization builder for ERC-3009 TransferWithAuthorization.

Turns a payment requirement into the EIP-712 document a signer signs. Every
call produces a fresh nonce and a validity window starting at sign time, so
requirements in the same batch never share an authorization.
"""

import logging

from web3 import Web3

from mdp_sdk.abi import TRANSFER_AUTH_EIP712_TYPES, TRANSFER_AUTH_PRIMARY_TYPE
from mdp_sdk.config import NetworkConfig
from mdp_sdk.exceptions import InvalidRequirementError, SignatureCreationError
from mdp_sdk.settlement.types import (
    VALID_AFTER,
    AuthorizationRequest,
    SignedAuthorization,
    TransferAuthorization,
    build_eip712_domain,
    build_eip712_message,
    create_nonce,
    create_valid_before,
)
from mdp_sdk.signers.base import PaymentSigner
from mdp_sdk.types import PaymentRequirement

logger = logging.getLogger(__name__)

ERC20_ASSET_MARKER = "erc20:"


def parse_chain_id(network: str | None) -> int:
    """Chain ID from the network suffix, DEFAULT_CHAIN_ID (Base) if unparseable."""
    return NetworkConfig.get_chain_id(network)


def resolve_token_address(asset: str | None) -> str:
    """
    Token contract address from a requirement asset.

    Accepts "<network>/erc20:<address>" or a bare 0x address. Anything else
    falls back to canonical USDC.
    """
    if asset:
        _, marker, address = asset.rpartition(ERC20_ASSET_MARKER)
        candidate = address if marker else asset
        if Web3.is_address(candidate):
            return candidate
    logger.warning(
        "Requirement asset %r does not name a token address, using USDC %s",
        asset,
        NetworkConfig.USDC_ADDRESS,
    )
    return NetworkConfig.USDC_ADDRESS


def _parse_amount(requirement: PaymentRequirement) -> int:
    raw = requirement.max_amount_required
    if raw is None:
        raise InvalidRequirementError("Payment requirement is missing maxAmountRequired")
    if not (raw.isascii() and raw.isdigit()):
        raise InvalidRequirementError(f"Invalid maxAmountRequired: {raw!r}")
    return int(raw)


def build_transfer_authorization(
    requirement: PaymentRequirement,
    payer: str,
) -> AuthorizationRequest:
    """
    Build an unsigned TransferWithAuthorization for a requirement.

    Args:
        requirement: Payment requirement from the intent
        payer: Wallet address that signs and pays

    Returns:
        AuthorizationRequest with the authorization and its EIP-712 domain/types/message

    Raises:
        InvalidRequirementError: If payTo or maxAmountRequired is missing or malformed
    """
    if not requirement.pay_to:
        raise InvalidRequirementError("Payment requirement is missing payTo")
    if not Web3.is_address(requirement.pay_to):
        raise InvalidRequirementError(f"Invalid payTo address: {requirement.pay_to!r}")
    value = _parse_amount(requirement)

    chain_id = parse_chain_id(requirement.network)
    token_address = resolve_token_address(requirement.asset)

    authorization = TransferAuthorization(
        **{
            "from": payer,
            "to": requirement.pay_to,
            "value": str(value),
            "validAfter": str(VALID_AFTER),
            "validBefore": str(create_valid_before()),
            "nonce": create_nonce(),
        }
    )

    domain = build_eip712_domain(
        NetworkConfig.USDC_EIP712_NAME,
        NetworkConfig.USDC_EIP712_VERSION,
        chain_id,
        token_address,
    )

    return AuthorizationRequest(
        authorization=authorization,
        domain=domain,
        types=TRANSFER_AUTH_EIP712_TYPES,
        primary_type=TRANSFER_AUTH_PRIMARY_TYPE,
        message=build_eip712_message(authorization),
        chain_id=chain_id,
        token_address=token_address,
    )


async def sign_authorization(
    signer: PaymentSigner,
    requirement: PaymentRequirement,
    payer: str,
) -> SignedAuthorization:
    """Build and sign a fresh authorization for one requirement."""
    request = build_transfer_authorization(requirement, payer)

    logger.info(
        "[FUND] Signing TransferWithAuthorization: from=%s, to=%s, value=%s, token=%s, chain=%s",
        payer,
        request.authorization.to,
        request.authorization.value,
        request.token_address,
        request.chain_id,
    )

    signature = await signer.sign_typed_data(
        domain=request.domain,
        types=request.types,
        primary_type=request.primary_type,
        message=request.message,
    )
    if not signature:
        raise SignatureCreationError("Signer returned an empty signature")

    return SignedAuthorization(
        requirement=requirement,
        authorization=request.authorization,
        signature=signature,
        chain_id=request.chain_id,
        token_address=request.token_address,
    )
