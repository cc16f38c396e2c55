"""
Escrow funding: authorization building, settlement routing and confirmation polling
"""

from mdp_sdk.settlement.authorization import (
    build_transfer_authorization,
    parse_chain_id,
    resolve_token_address,
    sign_authorization,
)
from mdp_sdk.settlement.contract import (
    SignatureParts,
    derive_job_key,
    encode_fund_job_calldata,
    resolve_agent_wallets,
    resolve_job_key,
    split_signature,
)
from mdp_sdk.settlement.poller import ConfirmationPoller
from mdp_sdk.settlement.router import (
    RequirementResolver,
    SettlementAPI,
    SettlementRouter,
)
from mdp_sdk.settlement.types import (
    AuthorizationRequest,
    PaymentPayload,
    PaymentPayloadData,
    SignedAuthorization,
    TransferAuthorization,
    create_nonce,
)

__all__ = [
    "build_transfer_authorization",
    "parse_chain_id",
    "resolve_token_address",
    "sign_authorization",
    "SignatureParts",
    "derive_job_key",
    "encode_fund_job_calldata",
    "resolve_agent_wallets",
    "resolve_job_key",
    "split_signature",
    "ConfirmationPoller",
    "RequirementResolver",
    "SettlementAPI",
    "SettlementRouter",
    "AuthorizationRequest",
    "PaymentPayload",
    "PaymentPayloadData",
    "SignedAuthorization",
    "TransferAuthorization",
    "create_nonce",
]
