"""Store bounded context — Discounts, Bundles, Carts, Orders and Payments.

Owns the cart pricing engine: every cart item carries the price the user
will pay, kept consistent with live discounts and bundle membership.
Catalogue prices arrive as events and are kept in a local price list.
"""

import structlog
from protean.domain import Domain
from shared.logging import configure_logging

configure_logging()

store = Domain(name="store")

logger = structlog.get_logger(__name__)
