"""Product card — lightweight listing projection for the storefront."""

import json

from protean.core.projector import on
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.events import (
    ProductActivated,
    ProductClassified,
    ProductCreated,
    ProductDeactivated,
    ProductDeleted,
    ProductDetailsUpdated,
    ProductPriceChanged,
    ProductRestored,
)
from catalogue.product.product import Product


@catalogue.projection
class ProductCard:
    product_id: Identifier(identifier=True, required=True)
    product_type: String(required=True)
    title: String(required=True)
    short_description: String()
    developer: String()
    price: Float(required=True)
    game_id: Identifier()
    genre_ids: Text()
    tag_ids: Text()
    mechanic_ids: Text()
    mature_content_ids: Text()
    is_active: Boolean(default=False)
    is_deleted: Boolean(default=False)
    created_at: DateTime()


@catalogue.projector(projector_for=ProductCard, aggregates=[Product])
class ProductCardProjector:
    @on(ProductCreated)
    def on_product_created(self, event):
        current_domain.repository_for(ProductCard).add(
            ProductCard(
                product_id=event.product_id,
                product_type=event.product_type,
                title=event.title,
                price=event.price,
                game_id=event.game_id,
                genre_ids=json.dumps([]),
                tag_ids=json.dumps([]),
                mechanic_ids=json.dumps([]),
                mature_content_ids=json.dumps([]),
                is_active=event.is_active,
                created_at=event.created_at,
            )
        )

    @on(ProductDetailsUpdated)
    def on_details_updated(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        card.title = event.title
        card.short_description = event.short_description
        card.developer = event.developer
        repo.add(card)

    @on(ProductPriceChanged)
    def on_price_changed(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        card.price = event.new_price
        repo.add(card)

    @on(ProductClassified)
    def on_product_classified(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        setattr(card, f"{event.classification[:-1]}_ids", event.ids)
        repo.add(card)

    @on(ProductActivated)
    def on_product_activated(self, event):
        self._set_flags(event.product_id, is_active=True)

    @on(ProductDeactivated)
    def on_product_deactivated(self, event):
        self._set_flags(event.product_id, is_active=False)

    @on(ProductDeleted)
    def on_product_deleted(self, event):
        self._set_flags(event.product_id, is_active=False, is_deleted=True)

    @on(ProductRestored)
    def on_product_restored(self, event):
        self._set_flags(event.product_id, is_deleted=False)

    def _set_flags(self, product_id, **flags):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(product_id)
        for name, value in flags.items():
            setattr(card, name, value)
        repo.add(card)
