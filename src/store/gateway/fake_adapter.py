"""Configurable fake payment gateway for development and testing.

Simulates a provider without any external calls. It can be told to succeed
or fail at runtime, and it records every call it receives.
"""

from uuid import uuid4

from store.gateway.port import ChargeResult, PaymentGateway, RefundResult


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    name = "fake"

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_charge(
        self,
        amount: float,
        currency: str,
        payment_method: str,
        idempotency_key: str,
    ) -> ChargeResult:
        self.calls.append(
            {
                "method": "create_charge",
                "amount": amount,
                "currency": currency,
                "payment_method": payment_method,
                "idempotency_key": idempotency_key,
            }
        )

        if self.should_succeed:
            return ChargeResult(
                success=True,
                transaction_id=f"fake_txn_{uuid4().hex[:12]}",
                gateway_status="succeeded",
                gateway_response="Charge successful",
            )
        return ChargeResult(
            success=False,
            gateway_status="failed",
            gateway_response="Charge declined",
            failure_reason=self.failure_reason,
        )

    def create_refund(
        self,
        transaction_id: str,
        amount: float,
        reason: str,
    ) -> RefundResult:
        self.calls.append(
            {
                "method": "create_refund",
                "transaction_id": transaction_id,
                "amount": amount,
                "reason": reason,
            }
        )

        if self.should_succeed:
            return RefundResult(
                success=True,
                refund_id=f"fake_ref_{uuid4().hex[:12]}",
                gateway_status="succeeded",
            )
        return RefundResult(success=False, gateway_status="failed", failure_reason=self.failure_reason)
