"""Bundle aggregate — several products sold together for one total price.

Each member carries a distributed price: its share of the bundle total,
proportional to its list price. Shares are recomputed whenever the total
or the membership changes, so they always add up to the total.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, String, Text

from shared.clock import naive_utc, utcnow
from store.bundle.events import (
    BundleCreated,
    BundleDeactivated,
    BundlePricesRedistributed,
    BundleProductAdded,
    BundleProductRemoved,
    BundleUpdated,
)
from store.domain import store
from store.pricing.calculator import PRICE_TOLERANCE, price_calculator

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@store.entity(part_of="Bundle")
class BundleProduct:
    product_id = Identifier(required=True)
    distributed_price = Float(default=0.0, min_value=0.0)


@store.aggregate
class Bundle:
    title = String(required=True, max_length=255)
    description = Text()
    total_price = Float(required=True, min_value=0.0)
    is_active = Boolean(default=True)
    expires_at = DateTime()
    products = HasMany(BundleProduct)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def shares_must_add_up_to_total(self):
        if not self.products:
            return
        shares = price_calculator.calculate_total(p.distributed_price for p in self.products)
        if price_calculator.are_prices_different(shares, self.total_price, PRICE_TOLERANCE):
            raise ValidationError({"products": ["Distributed prices must add up to the bundle total"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, title, total_price, description=None, expires_at=None, is_active=True):
        now = datetime.now(UTC)
        bundle = cls(
            title=title,
            description=description,
            total_price=total_price,
            expires_at=expires_at,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        bundle.raise_(
            BundleCreated(
                bundle_id=str(bundle.id),
                title=bundle.title,
                total_price=bundle.total_price,
                is_active=bundle.is_active,
                expires_at=bundle.expires_at,
            )
        )
        return bundle

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def member_ids(self):
        return [str(p.product_id) for p in self.products]

    def has_member(self, product_id):
        return str(product_id) in self.member_ids

    def is_expired(self, moment=None):
        if self.expires_at is None:
            return False
        return naive_utc(moment or utcnow()) >= naive_utc(self.expires_at)

    def is_available(self, moment=None):
        """Active and not yet expired, i.e. it can be put in a cart."""
        return bool(self.is_active) and not self.is_expired(moment)

    def shares(self):
        return [(str(p.product_id), p.distributed_price) for p in self.products]

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update(
        self,
        list_prices,
        title=_UNSET,
        description=_UNSET,
        total_price=_UNSET,
        is_active=_UNSET,
        expires_at=_UNSET,
    ):
        """Edit bundle details.

        ``list_prices`` maps member product ids to their current list prices
        and is used when a new total has to be spread over the members.
        """
        total_changed = total_price is not _UNSET and total_price != self.total_price

        with atomic_change(self):
            if title is not _UNSET:
                self.title = title
            if description is not _UNSET:
                self.description = description
            if total_price is not _UNSET:
                self.total_price = total_price
            if is_active is not _UNSET:
                self.is_active = is_active
            if expires_at is not _UNSET:
                self.expires_at = expires_at
            self.updated_at = datetime.now(UTC)

            if total_changed:
                self._distribute(list_prices)

        self.raise_(
            BundleUpdated(
                bundle_id=str(self.id),
                title=self.title,
                total_price=self.total_price,
                is_active=self.is_active,
                expires_at=self.expires_at,
            )
        )
        if total_changed:
            self._raise_redistributed()

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Bundle is already inactive"]})

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now

        self.raise_(BundleDeactivated(bundle_id=str(self.id), deactivated_at=now))

    # -------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------
    def add_product(self, product_id, list_prices):
        if self.has_member(product_id):
            raise ValidationError({"product_id": ["Product is already part of this bundle"]})

        with atomic_change(self):
            self.add_products(BundleProduct(product_id=product_id, distributed_price=0.0))
            self.updated_at = datetime.now(UTC)
            self._distribute(list_prices)

        self.raise_(BundleProductAdded(bundle_id=str(self.id), product_id=str(product_id)))
        self._raise_redistributed()

    def remove_product(self, product_id, list_prices):
        member = next((p for p in self.products if str(p.product_id) == str(product_id)), None)
        if member is None:
            raise ValidationError({"product_id": ["Product is not part of this bundle"]})

        with atomic_change(self):
            self.remove_products(member)
            self.updated_at = datetime.now(UTC)
            self._distribute(list_prices)

        self.raise_(BundleProductRemoved(bundle_id=str(self.id), product_id=str(product_id)))
        self._raise_redistributed()

    def redistribute(self, list_prices):
        """Spread the total over the current members using fresh list prices."""
        with atomic_change(self):
            self._distribute(list_prices)
            self.updated_at = datetime.now(UTC)

        self._raise_redistributed()

    def _distribute(self, list_prices):
        members = [(str(p.product_id), list_prices.get(str(p.product_id), 0.0)) for p in self.products]
        shares = dict(price_calculator.distribute_bundle_price(members, self.total_price))
        for member in self.products:
            member.distributed_price = shares[str(member.product_id)]

    def _raise_redistributed(self):
        self.raise_(
            BundlePricesRedistributed(
                bundle_id=str(self.id),
                total_price=self.total_price,
                shares=json.dumps(
                    [{"product_id": pid, "distributed_price": price} for pid, price in self.shares()]
                ),
            )
        )
