"""Product aggregate root — games and their addons.

An addon always points at its base game through ``game_id``; a game never
does. New products start inactive and must be activated before they can be
sold. Deleting a product is a soft delete that also takes it off sale.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

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


class ProductType(Enum):
    GAME = "Game"
    ADDON = "Addon"


CLASSIFICATIONS = ("genres", "tags", "mechanics", "mature_contents")


@catalogue.aggregate
class Product:
    """A purchasable catalogue item."""

    product_type: String(required=True, choices=ProductType)
    title: String(required=True, max_length=255)
    short_description: String(max_length=500)
    description: Text()
    developer: String(max_length=255)
    price: Float(required=True, min_value=0.0)
    is_active: Boolean(default=False)
    is_deleted: Boolean(default=False)
    system_requirements: Text()
    game_id: Identifier()  # Base game, for addons
    genre_ids: Text()  # JSON array of genre ids
    tag_ids: Text()  # JSON array of tag ids
    mechanic_ids: Text()  # JSON array of mechanic ids
    mature_content_ids: Text()  # JSON array of mature content ids
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def addon_must_reference_a_game(self):
        if self.product_type == ProductType.ADDON.value and not self.game_id:
            raise ValidationError({"game_id": ["An addon must belong to a game"]})
        if self.product_type == ProductType.GAME.value and self.game_id:
            raise ValidationError({"game_id": ["A game cannot belong to another game"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        product_type,
        title,
        price,
        game_id=None,
        short_description=None,
        description=None,
        developer=None,
        system_requirements=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            product_type=product_type,
            title=title,
            price=price,
            game_id=game_id,
            short_description=short_description,
            description=description,
            developer=developer,
            system_requirements=system_requirements,
            genre_ids=json.dumps([]),
            tag_ids=json.dumps([]),
            mechanic_ids=json.dumps([]),
            mature_content_ids=json.dumps([]),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                product_type=product.product_type,
                title=product.title,
                price=product.price,
                game_id=str(game_id) if game_id else None,
                is_active=product.is_active,
                created_at=now,
            )
        )
        return product

    @property
    def is_game(self):
        return self.product_type == ProductType.GAME.value

    # -------------------------------------------------------------------
    # Details & pricing
    # -------------------------------------------------------------------
    def update_details(
        self,
        title=None,
        short_description=None,
        description=None,
        developer=None,
        system_requirements=None,
    ):
        self._ensure_not_deleted()

        if title is not None:
            self.title = title
        if short_description is not None:
            self.short_description = short_description
        if description is not None:
            self.description = description
        if developer is not None:
            self.developer = developer
        if system_requirements is not None:
            self.system_requirements = system_requirements

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                title=self.title,
                short_description=self.short_description,
                developer=self.developer,
                updated_at=now,
            )
        )

    def change_price(self, new_price):
        self._ensure_not_deleted()
        if new_price is None or new_price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})
        if new_price == self.price:
            return

        previous_price = self.price
        now = datetime.now(UTC)
        self.price = new_price
        self.updated_at = now

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=new_price,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Availability
    # -------------------------------------------------------------------
    def activate(self):
        self._ensure_not_deleted()
        if self.is_active:
            raise ValidationError({"is_active": ["Product is already active"]})

        now = datetime.now(UTC)
        self.is_active = True
        self.updated_at = now

        self.raise_(ProductActivated(product_id=str(self.id), activated_at=now))

    def deactivate(self):
        self._ensure_not_deleted()
        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now

        self.raise_(ProductDeactivated(product_id=str(self.id), deactivated_at=now))

    def delete(self):
        self._ensure_not_deleted()

        now = datetime.now(UTC)
        self.is_deleted = True
        self.is_active = False
        self.updated_at = now

        self.raise_(ProductDeleted(product_id=str(self.id), deleted_at=now))

    def restore(self):
        if not self.is_deleted:
            raise ValidationError({"is_deleted": ["Product is not deleted"]})

        now = datetime.now(UTC)
        self.is_deleted = False
        self.updated_at = now

        self.raise_(ProductRestored(product_id=str(self.id), restored_at=now))

    # -------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------
    def classify(self, classification, ids):
        """Replace one classification of the product, e.g. its genres or mature contents."""
        if classification not in CLASSIFICATIONS:
            raise ValidationError({"classification": [f"Unknown classification: {classification}"]})
        self._ensure_not_deleted()

        unique_ids = list(dict.fromkeys(str(i) for i in ids))
        setattr(self, f"{classification[:-1]}_ids", json.dumps(unique_ids))
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductClassified(
                product_id=str(self.id),
                classification=classification,
                ids=json.dumps(unique_ids),
            )
        )

    def classification_ids(self, classification):
        raw = getattr(self, f"{classification[:-1]}_ids")
        return json.loads(raw) if raw else []

    def _ensure_not_deleted(self):
        if self.is_deleted:
            raise ValidationError({"is_deleted": ["Product has been deleted"]})
