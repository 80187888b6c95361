"""Inbound cross-domain event handler — Store reacts to Catalogue events.

Keeps the ProductPrice list in step with the Catalogue: new products,
price changes, renames and availability changes. Carts holding affected
products are not touched here; they are reconciled the next time they are
read.

Cross-domain events are imported from shared.events.catalogue and registered
as external events via store.register_external_event().
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.catalogue import (
    ProductActivated,
    ProductCreated,
    ProductDeactivated,
    ProductDeleted,
    ProductDetailsUpdated,
    ProductPriceChanged,
)

from store.cart.cart import Cart
from store.domain import store
from store.pricing.product_price import ProductPrice

logger = structlog.get_logger(__name__)

# Register external events so Protean can deserialize them
store.register_external_event(ProductCreated, "Catalogue.ProductCreated.v1")
store.register_external_event(ProductDetailsUpdated, "Catalogue.ProductDetailsUpdated.v1")
store.register_external_event(ProductPriceChanged, "Catalogue.ProductPriceChanged.v1")
store.register_external_event(ProductActivated, "Catalogue.ProductActivated.v1")
store.register_external_event(ProductDeactivated, "Catalogue.ProductDeactivated.v1")
store.register_external_event(ProductDeleted, "Catalogue.ProductDeleted.v1")


def _get_price(product_id) -> ProductPrice | None:
    try:
        return current_domain.repository_for(ProductPrice).get(str(product_id))
    except ObjectNotFoundError:
        logger.warning("Catalogue event for unknown product", product_id=str(product_id))
        return None


@store.event_handler(part_of=Cart, stream_category="catalogue::product")
class CataloguePriceEventHandler:
    """Maintains the Store's price list from Catalogue product events."""

    @handle(ProductCreated)
    def on_product_created(self, event: ProductCreated) -> None:
        current_domain.repository_for(ProductPrice).add(
            ProductPrice(
                product_id=str(event.product_id),
                title=event.title,
                product_type=event.product_type,
                game_id=str(event.game_id) if event.game_id else None,
                price=event.price,
                is_active=bool(event.is_active),
                updated_at=event.created_at,
            )
        )
        logger.info("Product priced", product_id=str(event.product_id), price=event.price)

    @handle(ProductDetailsUpdated)
    def on_product_details_updated(self, event: ProductDetailsUpdated) -> None:
        record = _get_price(event.product_id)
        if record is None:
            return
        record.title = event.title
        record.updated_at = event.updated_at
        current_domain.repository_for(ProductPrice).add(record)

    @handle(ProductPriceChanged)
    def on_product_price_changed(self, event: ProductPriceChanged) -> None:
        record = _get_price(event.product_id)
        if record is None:
            return
        record.price = event.new_price
        record.updated_at = event.changed_at
        current_domain.repository_for(ProductPrice).add(record)
        logger.info(
            "Product price changed; carts will be repriced on next read",
            product_id=str(event.product_id),
            previous_price=event.previous_price,
            new_price=event.new_price,
        )

    @handle(ProductActivated)
    def on_product_activated(self, event: ProductActivated) -> None:
        self._set_availability(event.product_id, True, event.activated_at)

    @handle(ProductDeactivated)
    def on_product_deactivated(self, event: ProductDeactivated) -> None:
        self._set_availability(event.product_id, False, event.deactivated_at)

    @handle(ProductDeleted)
    def on_product_deleted(self, event: ProductDeleted) -> None:
        self._set_availability(event.product_id, False, event.deleted_at)

    def _set_availability(self, product_id, is_active, changed_at):
        record = _get_price(product_id)
        if record is None:
            return
        record.is_active = is_active
        record.updated_at = changed_at
        current_domain.repository_for(ProductPrice).add(record)
        logger.info("Product availability changed", product_id=str(product_id), is_active=is_active)
