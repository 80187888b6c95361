"""Discount aggregate — a price reduction applied to a set of products.

A discount is either a percentage of the list price or a fixed amount, and
may be limited to a time window. Discounts on the same product stack.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, String

from shared.clock import naive_utc
from store.discount.events import (
    DiscountCreated,
    DiscountDeleted,
    DiscountUpdated,
    ProductAssignedToDiscount,
    ProductUnassignedFromDiscount,
)
from store.domain import store
from store.pricing.calculator import is_discount_active


class DiscountType(Enum):
    PERCENTAGE = "Percentage"
    FIXED = "Fixed"


@store.entity(part_of="Discount")
class ProductDiscount:
    product_id = Identifier(required=True)
    assigned_at = DateTime()


@store.aggregate
class Discount:
    name = String(required=True, max_length=50)
    discount_type = String(required=True, choices=DiscountType)
    discount_value = Float(required=True)
    start_date = DateTime()
    end_date = DateTime()
    is_deleted = Boolean(default=False)
    products = HasMany(ProductDiscount)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def value_must_be_positive(self):
        if self.discount_value is not None and self.discount_value <= 0:
            raise ValidationError({"discount_value": ["Discount value must be greater than zero"]})

    @invariant.post
    def percentage_cannot_exceed_hundred(self):
        if (
            self.discount_type == DiscountType.PERCENTAGE.value
            and self.discount_value is not None
            and self.discount_value > 100
        ):
            raise ValidationError({"discount_value": ["Percentage discount cannot exceed 100"]})

    @invariant.post
    def start_must_precede_end(self):
        if self.start_date and self.end_date and naive_utc(self.start_date) >= naive_utc(self.end_date):
            raise ValidationError({"end_date": ["End date must be after start date"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, discount_type, discount_value, start_date=None, end_date=None):
        now = datetime.now(UTC)
        discount = cls(
            name=name,
            discount_type=discount_type,
            discount_value=discount_value,
            start_date=start_date,
            end_date=end_date,
            created_at=now,
            updated_at=now,
        )
        discount.raise_(
            DiscountCreated(
                discount_id=str(discount.id),
                name=discount.name,
                discount_type=discount.discount_type,
                discount_value=discount.discount_value,
                start_date=discount.start_date,
                end_date=discount.end_date,
            )
        )
        return discount

    # -------------------------------------------------------------------
    # Terms
    # -------------------------------------------------------------------
    def update(self, name, discount_type, discount_value, start_date=None, end_date=None):
        """Replace the terms of the discount."""
        self._ensure_not_deleted()

        with atomic_change(self):
            self.name = name
            self.discount_type = discount_type
            self.discount_value = discount_value
            self.start_date = start_date
            self.end_date = end_date
            self.updated_at = datetime.now(UTC)

        self.raise_(
            DiscountUpdated(
                discount_id=str(self.id),
                name=self.name,
                discount_type=self.discount_type,
                discount_value=self.discount_value,
                start_date=self.start_date,
                end_date=self.end_date,
            )
        )

    def is_active_at(self, moment):
        return not self.is_deleted and is_discount_active(self, moment)

    # -------------------------------------------------------------------
    # Product assignment
    # -------------------------------------------------------------------
    def covers(self, product_id):
        return any(str(p.product_id) == str(product_id) for p in self.products)

    def assign_product(self, product_id):
        self._ensure_not_deleted()
        if self.covers(product_id):
            raise ValidationError({"product_id": ["Product is already assigned to this discount"]})

        now = datetime.now(UTC)
        self.add_products(ProductDiscount(product_id=product_id, assigned_at=now))
        self.updated_at = now

        self.raise_(ProductAssignedToDiscount(discount_id=str(self.id), product_id=str(product_id)))

    def unassign_product(self, product_id):
        self._ensure_not_deleted()
        assignment = next((p for p in self.products if str(p.product_id) == str(product_id)), None)
        if assignment is None:
            raise ValidationError({"product_id": ["Product is not assigned to this discount"]})

        self.remove_products(assignment)
        self.updated_at = datetime.now(UTC)

        self.raise_(ProductUnassignedFromDiscount(discount_id=str(self.id), product_id=str(product_id)))

    # -------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------
    def delete(self):
        self._ensure_not_deleted()

        now = datetime.now(UTC)
        self.is_deleted = True
        self.updated_at = now

        self.raise_(DiscountDeleted(discount_id=str(self.id), deleted_at=now))

    def _ensure_not_deleted(self):
        if self.is_deleted:
            raise ValidationError({"discount": ["Discount has been deleted"]})
