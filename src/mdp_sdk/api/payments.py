"""
PaymentsAPI - payment endpoints and escrow funding
"""

import logging

from mdp_sdk.http import HttpTransport
from mdp_sdk.settlement.poller import ConfirmationPoller
from mdp_sdk.settlement.router import SettlementRouter
from mdp_sdk.signers.base import PaymentSigner
from mdp_sdk.types import (
    STATUS_PENDING,
    STATUS_SETTLED,
    FundJobOptions,
    FundJobResult,
    InitiatedPayment,
    JobPaymentStatus,
    Payment,
    PaymentConfirmResponse,
    PaymentIntentResponse,
    PaymentListResponse,
    PaymentSettleResponse,
    PaymentSummaryResponse,
)

logger = logging.getLogger(__name__)


class PaymentsAPI:
    """
    Payment endpoints of the marketplace API.

    Acts as both requirement resolver and settlement API for the
    SettlementRouter behind fund_job.
    """

    def __init__(self, http: HttpTransport) -> None:
        self._http = http
        self._router = SettlementRouter(self, self, ConfirmationPoller(self))

    async def get_summary(self) -> PaymentSummaryResponse:
        """Total spent, earned and pending payments for the authenticated user"""
        data = await self._http.get("/api/payments/summary")
        return PaymentSummaryResponse(**data)

    async def list(self, job_id: str) -> list[Payment]:
        """List payments for a job"""
        data = await self._http.get("/api/payments", params={"jobId": job_id})
        return PaymentListResponse(**data).items

    async def create_intent(self, job_id: str, proposal_id: str) -> PaymentIntentResponse:
        """
        Create a payment intent for an accepted proposal.

        Returns:
            PaymentIntentResponse; the escrow requirement comes first when a
            platform fee is appended
        """
        data = await self._http.post(
            "/api/payments/intent",
            {"jobId": job_id, "proposalId": proposal_id},
        )
        return PaymentIntentResponse(**data)

    async def resolve_requirements(self, job_id: str, proposal_id: str) -> PaymentIntentResponse:
        return await self.create_intent(job_id, proposal_id)

    async def settle(self, payment_id: str, payment_header: str) -> PaymentSettleResponse:
        """Settle a payment with a signed x402 payment header"""
        data = await self._http.post(
            "/api/payments/settle",
            {"paymentId": payment_id, "paymentHeader": payment_header},
        )
        return PaymentSettleResponse(**data)

    async def confirm(self, payment_id: str, tx_hash: str) -> PaymentConfirmResponse:
        """Report an on-chain escrow funding transaction (contract mode)"""
        data = await self._http.post(
            "/api/payments/confirm",
            {"paymentId": payment_id, "txHash": tx_hash},
        )
        return PaymentConfirmResponse(**data)

    async def initiate_payment(self, job_id: str, proposal_id: str) -> InitiatedPayment:
        """Create an intent and return what an external signer needs"""
        intent = await self.create_intent(job_id, proposal_id)
        return InitiatedPayment(
            paymentId=intent.payment_id,
            requirement=intent.requirement,
            encodedRequirement=intent.encoded_requirement,
        )

    async def get_job_payment_status(self, job_id: str) -> JobPaymentStatus:
        payments = await self.list(job_id)
        settled = [p for p in payments if p.status == STATUS_SETTLED]
        return JobPaymentStatus(
            has_pending=any(p.status == STATUS_PENDING for p in payments),
            has_settled=bool(settled),
            total_settled=sum(p.amount_usdc for p in settled),
        )

    async def fund_job(
        self,
        job_id: str,
        proposal_id: str,
        signer: PaymentSigner,
        options: FundJobOptions | None = None,
    ) -> FundJobResult:
        """
        Fund a job's escrow autonomously using an EIP-3009 authorization.

        Facilitator mode signs and settles through the API. Contract mode
        signs, calls fundJobWithAuthorization from the signer's wallet and
        polls the confirm endpoint.

        Args:
            job_id: Job ID
            proposal_id: Accepted proposal ID
            signer: Payment signer
            options: Confirmation polling options (contract mode)

        Returns:
            FundJobResult
        """
        logger.info(f"[FUND] Funding job {job_id} for proposal {proposal_id}")
        return await self._router.fund_job(job_id, proposal_id, signer, options)
