"""
ConfirmationPoller - waits for the marketplace to observe an escrow funding transaction
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Protocol

from mdp_sdk.exceptions import ConfirmationError
from mdp_sdk.types import (
    STATUS_SETTLED,
    FundJobResult,
    PaymentConfirmResponse,
    SettlementMode,
)

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 5000
DEFAULT_TIMEOUT_MS = 180_000


class ConfirmationAPI(Protocol):
    async def confirm(self, payment_id: str, tx_hash: str) -> PaymentConfirmResponse:
        ...


class ConfirmationPoller:
    """
    Polls the confirm endpoint until it reports "settled" or the deadline passes.

    A timeout is not an error: the result carries success=False and the
    transaction hash, since the transaction can still settle later.
    """

    def __init__(
        self,
        api: ConfirmationAPI,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._api = api
        self._clock = clock
        self._sleep = sleep

    async def wait(
        self,
        payment_id: str,
        tx_hash: str,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        cancel_event: asyncio.Event | None = None,
    ) -> FundJobResult:
        """
        Wait for settlement of a submitted transaction.

        Args:
            payment_id: Escrow payment ID
            tx_hash: Submitted transaction hash
            poll_interval_ms: Delay between confirm calls
            timeout_ms: Give up after this long
            cancel_event: Set to stop waiting early

        Returns:
            FundJobResult; success=True only once the API reports settled

        Raises:
            ConfirmationError: If a confirm call fails
        """
        start = self._clock()
        interval = poll_interval_ms / 1000
        timeout = timeout_ms / 1000
        attempt = 0

        logger.info(
            f"Start polling confirmation for payment {payment_id}, tx {tx_hash} "
            f"(interval={poll_interval_ms}ms, timeout={timeout_ms}ms)"
        )

        while self._clock() - start < timeout:
            if cancel_event is not None and cancel_event.is_set():
                return self._unconfirmed(payment_id, tx_hash, cancelled=True)

            attempt += 1
            try:
                response = await self._api.confirm(payment_id, tx_hash)
            except Exception as e:
                logger.error(f"Confirm call failed for payment {payment_id}: {e}")
                raise ConfirmationError(payment_id, tx_hash, str(e)) from e

            logger.debug(f"Payment {payment_id} confirm attempt {attempt}: status={response.status}")
            if response.status == STATUS_SETTLED:
                logger.info(f"Payment {payment_id} settled after {attempt} confirm call(s)")
                return FundJobResult(
                    success=True,
                    paymentId=payment_id,
                    txHash=tx_hash,
                    mode=SettlementMode.CONTRACT,
                )

            if await self._pause(interval, cancel_event):
                return self._unconfirmed(payment_id, tx_hash, cancelled=True)

        logger.warning(
            f"Payment {payment_id} not confirmed within {timeout_ms}ms; "
            f"transaction {tx_hash} was submitted and may still settle"
        )
        return self._unconfirmed(payment_id, tx_hash)

    async def _pause(self, interval: float, cancel_event: asyncio.Event | None) -> bool:
        """Suspend for one interval; True if cancellation was requested meanwhile."""
        if cancel_event is None:
            await self._sleep(interval)
            return False

        # Race the injected sleep against the event so virtual clocks still advance
        sleeper = asyncio.ensure_future(self._sleep(interval))
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleeper, waiter):
                if not task.done():
                    task.cancel()
            await asyncio.gather(sleeper, waiter, return_exceptions=True)

        if sleeper.done() and not sleeper.cancelled() and sleeper.exception() is not None:
            raise sleeper.exception()
        return cancel_event.is_set()

    def _unconfirmed(self, payment_id: str, tx_hash: str, cancelled: bool = False) -> FundJobResult:
        if cancelled:
            logger.info(f"Confirmation wait for payment {payment_id} cancelled")
        return FundJobResult(
            success=False,
            paymentId=payment_id,
            txHash=tx_hash,
            mode=SettlementMode.CONTRACT,
            cancelled=cancelled,
        )
