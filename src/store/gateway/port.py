"""Payment gateway port (abstract interface).

Defines the contract every payment provider adapter implements, so the
payment handlers never depend on a concrete provider.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChargeResult:
    """Result of a payment charge attempt."""

    success: bool
    transaction_id: str | None = None
    gateway_status: str | None = None
    gateway_response: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class RefundResult:
    """Result of a refund attempt."""

    success: bool
    refund_id: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    name: str = "unknown"

    @abstractmethod
    def create_charge(
        self,
        amount: float,
        currency: str,
        payment_method: str,
        idempotency_key: str,
    ) -> ChargeResult:
        """Charge the user through the provider."""
        ...

    @abstractmethod
    def create_refund(
        self,
        transaction_id: str,
        amount: float,
        reason: str,
    ) -> RefundResult:
        """Refund a previous charge."""
        ...
