"""Domain events for the Discount aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from store.domain import store


@store.event(part_of="Discount")
class DiscountCreated:
    """A new discount was defined."""

    __version__ = 1

    discount_id = Identifier(required=True)
    name = String(required=True)
    discount_type = String(required=True)
    discount_value = Float(required=True)
    start_date = DateTime()
    end_date = DateTime()


@store.event(part_of="Discount")
class DiscountUpdated:
    """The terms of a discount changed."""

    __version__ = 1

    discount_id = Identifier(required=True)
    name = String(required=True)
    discount_type = String(required=True)
    discount_value = Float(required=True)
    start_date = DateTime()
    end_date = DateTime()


@store.event(part_of="Discount")
class ProductAssignedToDiscount:
    """A product became eligible for a discount."""

    __version__ = 1

    discount_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.event(part_of="Discount")
class ProductUnassignedFromDiscount:
    """A product is no longer eligible for a discount."""

    __version__ = 1

    discount_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.event(part_of="Discount")
class DiscountDeleted:
    """A discount was soft deleted and no longer applies to any product."""

    __version__ = 1

    discount_id = Identifier(required=True)
    deleted_at = DateTime(required=True)
