"""Domain events for the Bundle aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from store.domain import store


@store.event(part_of="Bundle")
class BundleCreated:
    """A new bundle was put together."""

    __version__ = 1

    bundle_id = Identifier(required=True)
    title = String(required=True)
    total_price = Float(required=True)
    is_active = Boolean(required=True)
    expires_at = DateTime()


@store.event(part_of="Bundle")
class BundleUpdated:
    """Bundle details, price, availability or expiry changed."""

    __version__ = 1

    bundle_id = Identifier(required=True)
    title = String(required=True)
    total_price = Float(required=True)
    is_active = Boolean(required=True)
    expires_at = DateTime()


@store.event(part_of="Bundle")
class BundleProductAdded:
    """A product joined the bundle."""

    __version__ = 1

    bundle_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.event(part_of="Bundle")
class BundleProductRemoved:
    """A product left the bundle."""

    __version__ = 1

    bundle_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.event(part_of="Bundle")
class BundlePricesRedistributed:
    """The bundle total was spread over its current members again."""

    __version__ = 1

    bundle_id = Identifier(required=True)
    total_price = Float(required=True)
    shares = Text(required=True)  # JSON: list of {product_id, distributed_price}


@store.event(part_of="Bundle")
class BundleDeactivated:
    """The bundle was withdrawn from sale."""

    __version__ = 1

    bundle_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)
