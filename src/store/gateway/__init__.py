"""Payment gateway factory.

The active provider is chosen by name from ``PAYMENT_GATEWAY`` (``fake``
unless set) the first time ``get_gateway()`` is called. Tests and
deployments can install an instance directly with ``set_gateway()``.
"""

import os
from collections.abc import Callable

from store.gateway.fake_adapter import FakeGateway
from store.gateway.port import PaymentGateway

_FACTORIES: dict[str, Callable[[], PaymentGateway]] = {"fake": FakeGateway}

_current_gateway: PaymentGateway | None = None


def register_gateway(name: str, factory: Callable[[], PaymentGateway]) -> None:
    """Make a provider adapter selectable through ``PAYMENT_GATEWAY``."""
    _FACTORIES[name] = factory


def get_gateway() -> PaymentGateway:
    """Return the active payment gateway, building it on first use."""
    global _current_gateway
    if _current_gateway is None:
        name = os.getenv("PAYMENT_GATEWAY", "fake")
        try:
            factory = _FACTORIES[name]
        except KeyError:
            raise ValueError(f"Unknown payment gateway: {name}") from None
        _current_gateway = factory()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
