"""Product price list — the Store's local copy of catalogue pricing.

Populated by the Catalogue → Store cross-domain event handler. Cart and
bundle pricing read list prices and availability from here, never from
the Catalogue domain directly.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from store.domain import store


@store.projection
class ProductPrice:
    product_id = Identifier(identifier=True, required=True)
    title = String(max_length=255)
    product_type = String(max_length=20)
    game_id = Identifier()  # Base game, for addons
    price = Float(default=0.0)
    is_active = Boolean(default=False)
    updated_at = DateTime()
