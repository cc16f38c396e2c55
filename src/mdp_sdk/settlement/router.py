"""
SettlementRouter - funds a job's escrow from a signed ERC-3009 authorization.

Flow:
    1. Check the signer can sign typed data (before any network call)
    2. Resolve the payment intent: escrow requirement first, optional fee after
    3. Pick the settlement mode from the escrow requirement
    4. Facilitator mode: sign and settle each requirement in order
       Contract mode: sign once, call fundJobWithAuthorization, poll confirm
"""

import logging
from typing import Protocol

from mdp_sdk.encoding import encode_payment_header
from mdp_sdk.exceptions import (
    SettlementFailedError,
    TransactionError,
    UnsupportedSignerError,
)
from mdp_sdk.settlement.authorization import sign_authorization
from mdp_sdk.settlement.contract import (
    encode_fund_job_calldata,
    resolve_agent_wallets,
    resolve_job_key,
)
from mdp_sdk.settlement.poller import ConfirmationPoller
from mdp_sdk.settlement.types import SignedAuthorization
from mdp_sdk.signers.base import PaymentSigner
from mdp_sdk.types import (
    FundJobOptions,
    FundJobResult,
    PaymentConfirmResponse,
    PaymentIntentResponse,
    PaymentRequirement,
    PaymentSettleResponse,
    SettlementMode,
)

logger = logging.getLogger(__name__)


class RequirementResolver(Protocol):
    """Source of payment requirements for a job/proposal pair"""

    async def resolve_requirements(self, job_id: str, proposal_id: str) -> PaymentIntentResponse:
        ...


class SettlementAPI(Protocol):
    """Settlement and confirmation endpoints"""

    async def settle(self, payment_id: str, payment_header: str) -> PaymentSettleResponse:
        ...

    async def confirm(self, payment_id: str, tx_hash: str) -> PaymentConfirmResponse:
        ...


class SettlementRouter:
    """
    Orchestrates one funding operation per fund_job call.

    Holds no per-operation state, so one router can serve concurrent
    operations for different jobs.
    """

    def __init__(
        self,
        resolver: RequirementResolver,
        settlement: SettlementAPI,
        poller: ConfirmationPoller | None = None,
    ) -> None:
        self._resolver = resolver
        self._settlement = settlement
        self._poller = poller or ConfirmationPoller(settlement)

    async def fund_job(
        self,
        job_id: str,
        proposal_id: str,
        signer: PaymentSigner,
        options: FundJobOptions | None = None,
    ) -> FundJobResult:
        """
        Fund a job's escrow for an accepted proposal.

        Args:
            job_id: Job ID
            proposal_id: Accepted proposal ID
            signer: Payment signer (typed data; transactions for contract mode)
            options: Confirmation polling options (contract mode)

        Returns:
            FundJobResult

        Raises:
            UnsupportedSignerError: Signer lacks typed-data signing, or
                transactions in contract mode
            InvalidRequirementError: Intent requirements are malformed
            MissingWalletMetadataError: Contract mode without agent wallets
            SettlementFailedError: A settle call was rejected
            TransactionError: The escrow transaction could not be submitted
            ConfirmationError: A confirm call failed after submission
        """
        if not self._can_sign_typed_data(signer):
            raise UnsupportedSignerError(
                "fund_job requires a signer with sign_typed_data. "
                "Use PrivateKeySigner, ManagedWalletSigner, or pass sign_typed_data_fn "
                "to ExternalWalletSigner."
            )
        options = options or FundJobOptions()

        intent = await self._resolver.resolve_requirements(job_id, proposal_id)
        batch = intent.settlement_batch()
        payment_id, escrow_requirement = batch[0]
        mode = escrow_requirement.settlement_mode

        logger.info(
            f"[FUND] Resolved payment intent {payment_id} for job {job_id}: "
            f"{len(batch)} requirement(s), mode={mode.value}"
        )

        if mode == SettlementMode.CONTRACT:
            return await self._fund_with_contract(
                job_id, payment_id, escrow_requirement, signer, options
            )
        return await self._fund_with_facilitator(batch, signer)

    # ------------------------------------------------------------------
    # Facilitator mode
    # ------------------------------------------------------------------

    async def _fund_with_facilitator(
        self,
        batch: list[tuple[str, PaymentRequirement]],
        signer: PaymentSigner,
    ) -> FundJobResult:
        payer = signer.get_address()
        escrow_payment_id = batch[0][0]
        escrow_tx_hash = None

        # Sequential: each requirement is signed only after the previous settle returned
        for index, (payment_id, requirement) in enumerate(batch):
            signed = await sign_authorization(signer, requirement, payer)
            response = await self._settle(index, payment_id, signed)
            if index == 0:
                escrow_tx_hash = response.tx_hash

        logger.info(f"[FUND] Payment {escrow_payment_id} settled via facilitator")
        return FundJobResult(
            success=True,
            paymentId=escrow_payment_id,
            txHash=escrow_tx_hash,
            mode=SettlementMode.FACILITATOR,
        )

    async def _settle(
        self,
        index: int,
        payment_id: str,
        signed: SignedAuthorization,
    ) -> PaymentSettleResponse:
        header = encode_payment_header(signed.to_payment_payload())
        logger.info(f"[FUND] Settling payment {payment_id} (requirement {index})")
        logger.debug(f"Encoded payment header length: {len(header)} chars")

        try:
            response = await self._settlement.settle(payment_id, header)
        except Exception as e:
            logger.error(f"Settle call failed for payment {payment_id}: {e}")
            raise SettlementFailedError(payment_id, index, str(e)) from e

        if response.rejected:
            reason = response.error or f"status={response.status}"
            logger.error(f"Settlement rejected for payment {payment_id}: {reason}")
            raise SettlementFailedError(payment_id, index, reason)
        return response

    # ------------------------------------------------------------------
    # Contract mode
    # ------------------------------------------------------------------

    async def _fund_with_contract(
        self,
        job_id: str,
        payment_id: str,
        requirement: PaymentRequirement,
        signer: PaymentSigner,
        options: FundJobOptions,
    ) -> FundJobResult:
        transactions = signer.transactions
        if transactions is None:
            raise UnsupportedSignerError(
                "Contract escrow mode requires a signer with transaction support. "
                "Use PrivateKeySigner, ManagedWalletSigner, or pass send_transaction_fn "
                "to ExternalWalletSigner."
            )
        agent_executor, agent_payout = resolve_agent_wallets(requirement)
        job_key = resolve_job_key(requirement, job_id)

        payer = signer.get_address()
        signed = await sign_authorization(signer, requirement, payer)

        # In contract mode payTo is the escrow contract
        escrow_contract = requirement.pay_to
        calldata = encode_fund_job_calldata(signed, job_key, agent_executor, agent_payout)

        logger.info(
            f"[FUND] Calling fundJobWithAuthorization on {escrow_contract} "
            f"for payment {payment_id} (chain {signed.chain_id})"
        )
        try:
            tx_hash = await transactions.send_transaction(
                to=escrow_contract,
                data=calldata,
                chain_id=signed.chain_id,
            )
        except Exception as e:
            logger.error(f"Escrow transaction failed for payment {payment_id}: {e}")
            raise TransactionError(
                f"Failed to submit escrow funding for payment {payment_id}: {e}",
                payment_id=payment_id,
            ) from e

        logger.info(f"[FUND] Escrow funding submitted for payment {payment_id}: tx={tx_hash}")
        return await self._poller.wait(
            payment_id,
            tx_hash,
            poll_interval_ms=options.poll_interval_ms,
            timeout_ms=options.timeout_ms,
            cancel_event=options.cancel_event,
        )

    @staticmethod
    def _can_sign_typed_data(signer: PaymentSigner) -> bool:
        return callable(getattr(signer, "sign_typed_data", None)) and bool(
            getattr(signer, "can_sign_typed_data", False)
        )
