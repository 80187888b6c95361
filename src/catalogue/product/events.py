"""Domain events for the Product aggregate.

ProductCreated, ProductDetailsUpdated, ProductPriceChanged,
ProductActivated, ProductDeactivated and ProductDeleted are consumed by the
Store domain; their contracts live in src/shared/events/catalogue.py.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A game or addon was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    product_type: String(required=True)
    title: String(required=True)
    price: Float(required=True)
    game_id: Identifier()
    is_active: Boolean(default=False)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive fields of a product were edited."""

    __version__ = 1

    product_id: Identifier(required=True)
    title: String(required=True)
    short_description: String()
    developer: String()
    updated_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductPriceChanged:
    """The list price of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)
    changed_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductActivated:
    """A product became available for sale."""

    __version__ = 1

    product_id: Identifier(required=True)
    activated_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDeactivated:
    """A product was withdrawn from sale."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDeleted:
    """A product was soft deleted from the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    deleted_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductRestored:
    """A soft-deleted product was brought back, still inactive."""

    __version__ = 1

    product_id: Identifier(required=True)
    restored_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductClassified:
    """One classification of a product (genres, tags, mechanics or mature contents) was replaced."""

    __version__ = 1

    product_id: Identifier(required=True)
    classification: String(required=True)  # one of product.CLASSIFICATIONS
    ids: Text(required=True)  # JSON: list of ids
