"""
Type definitions for the MDP marketplace payment API
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from mdp_sdk.exceptions import InvalidRequirementError

PaymentStatus = Literal["pending", "settled", "failed"]

STATUS_SETTLED = "settled"
STATUS_PENDING = "pending"
STATUS_FAILED = "failed"


class SettlementMode(str, Enum):
    """How a funding operation is settled"""

    FACILITATOR = "facilitator"
    CONTRACT = "contract"


# ---------------------------------------------------------------------------
# Payment requirements
# ---------------------------------------------------------------------------


class PaymentRequirementExtra(BaseModel):
    """Extra information in payment requirements"""

    contract_mode: Optional[bool] = Field(None, alias="contractMode")
    job_key: Optional[str] = Field(None, alias="jobKey")
    agent_executor_wallet: Optional[str] = Field(None, alias="agentExecutorWallet")
    agent_wallet: Optional[str] = Field(None, alias="agentWallet")
    agent_payout_wallet: Optional[str] = Field(None, alias="agentPayoutWallet")

    class Config:
        populate_by_name = True
        frozen = True
        extra = "allow"


class PaymentRequirement(BaseModel):
    """Payment requirement returned by the payment intent endpoint"""

    scheme: str = "exact"
    network: str
    asset: Optional[str] = None
    pay_to: Optional[str] = Field(None, alias="payTo")
    max_amount_required: Optional[str] = Field(None, alias="maxAmountRequired")
    max_timeout_seconds: Optional[int] = Field(None, alias="maxTimeoutSeconds")
    resource: Optional[str] = None
    description: Optional[str] = None
    mime_type: Optional[str] = Field(None, alias="mimeType")
    extra: Optional[PaymentRequirementExtra] = None

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("max_amount_required", mode="before")
    @classmethod
    def _amount_as_string(cls, value: Any) -> Any:
        # Base units may arrive as JSON numbers; keep them as exact integer strings
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def settlement_mode(self) -> SettlementMode:
        if self.extra is not None and self.extra.contract_mode:
            return SettlementMode.CONTRACT
        return SettlementMode.FACILITATOR


class PaymentIntentResponse(BaseModel):
    """Payment intent: one requirement, or parallel arrays when a fee is appended"""

    payment_id: str = Field(alias="paymentId")
    requirement: PaymentRequirement
    encoded_requirement: Optional[str] = Field(None, alias="encodedRequirement")
    payment_ids: Optional[list[str]] = Field(None, alias="paymentIds")
    requirements: Optional[list[PaymentRequirement]] = None

    class Config:
        populate_by_name = True

    def settlement_batch(self) -> list[tuple[str, PaymentRequirement]]:
        """Ordered (payment_id, requirement) pairs, escrow first.

        Raises:
            InvalidRequirementError: If the parallel arrays are empty or differ in length
        """
        payment_ids = self.payment_ids or [self.payment_id]
        requirements = self.requirements or [self.requirement]
        if len(payment_ids) != len(requirements):
            raise InvalidRequirementError(
                f"Payment intent {self.payment_id} has {len(payment_ids)} payment ids "
                f"but {len(requirements)} requirements"
            )
        return list(zip(payment_ids, requirements))


class InitiatedPayment(BaseModel):
    """Data needed to sign a payment outside the SDK"""

    payment_id: str = Field(alias="paymentId")
    requirement: PaymentRequirement
    encoded_requirement: Optional[str] = Field(None, alias="encodedRequirement")

    class Config:
        populate_by_name = True


# ---------------------------------------------------------------------------
# Payment records
# ---------------------------------------------------------------------------


class Payment(BaseModel):
    """Payment record"""

    id: str
    job_id: str = Field(alias="jobId")
    proposal_id: Optional[str] = Field(None, alias="proposalId")
    payer_wallet: Optional[str] = Field(None, alias="payerWallet")
    payee_wallet: Optional[str] = Field(None, alias="payeeWallet")
    amount_usdc: float = Field(alias="amountUSDC")
    x402_tx_hash: Optional[str] = Field(None, alias="x402TxHash")
    x402_receipt: Optional[dict[str, Any]] = Field(None, alias="x402Receipt")
    status: PaymentStatus
    settled_at: Optional[str] = Field(None, alias="settledAt")
    created_at: Optional[str] = Field(None, alias="createdAt")

    class Config:
        populate_by_name = True


class PaymentListResponse(BaseModel):
    """Payments list response"""

    items: list[Payment] = []
    total: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class PaymentSummaryResponse(BaseModel):
    """Totals for the authenticated user"""

    total_spent: float = Field(alias="totalSpent")
    total_earned: float = Field(alias="totalEarned")
    pending_payments: int = Field(alias="pendingPayments")

    class Config:
        populate_by_name = True


class JobPaymentStatus(BaseModel):
    """Aggregated payment status for a job"""

    has_pending: bool
    has_settled: bool
    total_settled: float


class PaymentSettleResponse(BaseModel):
    """Settlement response"""

    success: Optional[bool] = None
    status: Optional[str] = None
    tx_hash: Optional[str] = Field(None, alias="txHash")
    payment: Optional[Payment] = None
    error: Optional[str] = None

    class Config:
        populate_by_name = True

    @property
    def rejected(self) -> bool:
        return self.success is False or self.status == STATUS_FAILED


class PaymentConfirmResponse(BaseModel):
    """On-chain funding confirmation response"""

    status: Optional[str] = None
    tx_hash: Optional[str] = Field(None, alias="txHash")
    payment: Optional[Payment] = None

    class Config:
        populate_by_name = True


class EscrowState(BaseModel):
    """On-chain escrow state for a job"""

    job_id: Optional[str] = Field(None, alias="jobId")
    contract_address: Optional[str] = Field(None, alias="contractAddress")
    escrow: Optional[dict[str, Any]] = None
    deadlines: Optional[dict[str, Any]] = None

    class Config:
        populate_by_name = True
        extra = "allow"


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


class User(BaseModel):
    """Marketplace user"""

    id: str
    wallet: str
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    class Config:
        populate_by_name = True


class AuthNonceResponse(BaseModel):
    """Sign-in challenge"""

    nonce: str
    message: str
    user_id: Optional[str] = Field(None, alias="userId")

    class Config:
        populate_by_name = True


class AuthVerifyResponse(BaseModel):
    """Sign-in result"""

    success: bool
    token: str
    user: User


class MeResponse(BaseModel):
    user: User


# ---------------------------------------------------------------------------
# Funding
# ---------------------------------------------------------------------------


@dataclass
class FundJobOptions:
    """Per-call confirmation polling options"""

    poll_interval_ms: int = 5000
    timeout_ms: int = 180_000
    cancel_event: asyncio.Event | None = None

    def __post_init__(self) -> None:
        if self.poll_interval_ms <= 0:
            raise ValueError(f"poll_interval_ms must be positive, got {self.poll_interval_ms}")
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must not be negative, got {self.timeout_ms}")


class FundJobResult(BaseModel):
    """Outcome of a funding operation.

    success=False with a tx_hash means the escrow transaction was submitted
    but the client stopped waiting before the API reported it settled; the
    payment may still complete.
    """

    success: bool
    payment_id: str = Field(alias="paymentId")
    tx_hash: Optional[str] = Field(None, alias="txHash")
    mode: SettlementMode
    cancelled: bool = False

    class Config:
        populate_by_name = True
