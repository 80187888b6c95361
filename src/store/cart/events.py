"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, Text

from store.domain import store


@store.event(part_of="Cart")
class CartCreated:
    """A user got a new active cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    created_at = DateTime(required=True)


@store.event(part_of="Cart")
class CartItemAdded:
    """A product was put in the cart at its current price."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    price = Float(required=True)
    total_amount = Float(required=True)


@store.event(part_of="Cart")
class CartBundleAdded:
    """Every product of a bundle was put in the cart at its distributed price."""

    __version__ = 1

    cart_id = Identifier(required=True)
    bundle_id = Identifier(required=True)
    product_ids = Text(required=True)  # JSON: list of product ids
    total_amount = Float(required=True)


@store.event(part_of="Cart")
class CartItemRemoved:
    """A product was taken out of the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    bundle_id = Identifier()
    total_amount = Float(required=True)


@store.event(part_of="Cart")
class CartReconciled:
    """Stale cart prices were brought in line with current pricing."""

    __version__ = 1

    cart_id = Identifier(required=True)
    previous_total = Float(required=True)
    new_total = Float(required=True)
    repriced_count = Integer(default=0)
    removed_count = Integer(default=0)
    added_count = Integer(default=0)


@store.event(part_of="Cart")
class CartArchived:
    """The cart was closed, usually because it became an order."""

    __version__ = 1

    cart_id = Identifier(required=True)
    archived_at = DateTime(required=True)


@store.event(part_of="Cart")
class CartAbandoned:
    """The cart sat idle long enough to be considered abandoned."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    abandoned_at = DateTime(required=True)


@store.event(part_of="Cart")
class CartRecovered:
    """An abandoned cart became the user's active cart again."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    recovered_at = DateTime(required=True)
