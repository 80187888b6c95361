"""Cross-domain event contracts for Catalogue domain events.

These classes define the event shape for consumption by other domains
(the Store domain keeps its own price list in sync with them). They are
registered as external events via domain.register_external_event() with
matching __type__ strings so Protean's stream deserialization works.

The source-of-truth events are in src/catalogue/product/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import Boolean, DateTime, Float, Identifier, String


class ProductCreated(BaseEvent):
    """A game or addon was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    product_type = String(required=True)
    title = String(required=True)
    price = Float(required=True)
    game_id = Identifier()
    is_active = Boolean(default=False)
    created_at = DateTime(required=True)


class ProductDetailsUpdated(BaseEvent):
    """Descriptive fields of a product were edited."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True)
    short_description = String()
    developer = String()
    updated_at = DateTime(required=True)


class ProductPriceChanged(BaseEvent):
    """The list price of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)
    changed_at = DateTime(required=True)


class ProductActivated(BaseEvent):
    """A product became available for sale."""

    __version__ = 1

    product_id = Identifier(required=True)
    activated_at = DateTime(required=True)


class ProductDeactivated(BaseEvent):
    """A product was withdrawn from sale."""

    __version__ = 1

    product_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


class ProductDeleted(BaseEvent):
    """A product was soft deleted from the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    deleted_at = DateTime(required=True)
