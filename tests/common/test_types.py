"""
Tests for payment API models.
"""

import pytest

from mdp_sdk.exceptions import InvalidRequirementError
from mdp_sdk.types import (
    FundJobOptions,
    FundJobResult,
    Payment,
    PaymentIntentResponse,
    PaymentRequirement,
    PaymentSettleResponse,
    SettlementMode,
)


def _requirement(pay_to: str, amount="1000000", **kwargs) -> dict:
    return {
        "scheme": "exact",
        "network": "eip155:8453",
        "payTo": pay_to,
        "maxAmountRequired": amount,
        **kwargs,
    }


class TestPaymentRequirement:
    def test_parses_wire_form(self):
        req = PaymentRequirement(**_requirement("0x" + "bb" * 20, maxTimeoutSeconds=60))
        assert req.pay_to == "0x" + "bb" * 20
        assert req.max_amount_required == "1000000"
        assert req.max_timeout_seconds == 60
        assert req.settlement_mode == SettlementMode.FACILITATOR

    def test_numeric_amount_kept_exact(self):
        req = PaymentRequirement(**_requirement("0x" + "bb" * 20, amount=123456789012345678))
        assert req.max_amount_required == "123456789012345678"

    def test_contract_mode_from_extra(self):
        req = PaymentRequirement(
            **_requirement("0x" + "dd" * 20, extra={"contractMode": True, "jobKey": "0x" + "00" * 32})
        )
        assert req.settlement_mode == SettlementMode.CONTRACT
        assert req.extra.job_key == "0x" + "00" * 32

    def test_unknown_extra_fields_kept(self):
        req = PaymentRequirement(**_requirement("0x" + "bb" * 20, extra={"feeBps": 500}))
        assert req.extra.model_extra == {"feeBps": 500}

    def test_dump_uses_wire_names(self):
        req = PaymentRequirement(**_requirement("0x" + "bb" * 20))
        data = req.model_dump(by_alias=True, exclude_none=True)
        assert data["payTo"] == "0x" + "bb" * 20
        assert data["maxAmountRequired"] == "1000000"


class TestSettlementBatch:
    def test_single_requirement(self):
        intent = PaymentIntentResponse(
            paymentId="pay-1",
            requirement=_requirement("0x" + "bb" * 20),
        )
        batch = intent.settlement_batch()
        assert [pid for pid, _ in batch] == ["pay-1"]
        assert batch[0][1] == intent.requirement

    def test_escrow_then_fee(self):
        escrow = _requirement("0x" + "bb" * 20)
        fee = _requirement("0x" + "cc" * 20, amount="50000")
        intent = PaymentIntentResponse(
            paymentId="pay-escrow",
            requirement=escrow,
            paymentIds=["pay-escrow", "pay-fee"],
            requirements=[escrow, fee],
        )
        batch = intent.settlement_batch()
        assert [pid for pid, _ in batch] == ["pay-escrow", "pay-fee"]
        assert batch[1][1].pay_to == "0x" + "cc" * 20

    def test_length_mismatch(self):
        escrow = _requirement("0x" + "bb" * 20)
        intent = PaymentIntentResponse(
            paymentId="pay-escrow",
            requirement=escrow,
            paymentIds=["pay-escrow", "pay-fee"],
            requirements=[escrow],
        )
        with pytest.raises(InvalidRequirementError):
            intent.settlement_batch()


class TestResponses:
    def test_settle_rejected(self):
        assert PaymentSettleResponse(success=False).rejected
        assert PaymentSettleResponse(status="failed").rejected
        assert not PaymentSettleResponse(success=True, status="settled").rejected
        assert not PaymentSettleResponse().rejected

    def test_payment_record(self):
        payment = Payment(
            id="p1",
            jobId="job-1",
            amountUSDC=10.5,
            status="settled",
            x402TxHash="0xabc",
        )
        assert payment.job_id == "job-1"
        assert payment.amount_usdc == 10.5
        assert payment.x402_tx_hash == "0xabc"

    def test_fund_job_result_wire_form(self):
        result = FundJobResult(success=True, paymentId="pay-1", mode=SettlementMode.FACILITATOR)
        data = result.model_dump(by_alias=True)
        assert data["paymentId"] == "pay-1"
        assert data["txHash"] is None
        assert data["mode"] == "facilitator"
        assert data["cancelled"] is False


class TestFundJobOptions:
    def test_defaults(self):
        options = FundJobOptions()
        assert options.poll_interval_ms == 5000
        assert options.timeout_ms == 180_000
        assert options.cancel_event is None

    def test_zero_timeout_allowed(self):
        assert FundJobOptions(timeout_ms=0).timeout_ms == 0

    @pytest.mark.parametrize("interval", [0, -1])
    def test_non_positive_interval_rejected(self, interval):
        with pytest.raises(ValueError, match="poll_interval_ms"):
            FundJobOptions(poll_interval_ms=interval)

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValueError, match="timeout_ms"):
            FundJobOptions(timeout_ms=-1)
