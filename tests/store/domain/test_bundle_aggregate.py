"""Tests for the Bundle aggregate — membership and price distribution."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError
from store.bundle.bundle import Bundle
from store.bundle.events import BundlePricesRedistributed, BundleProductAdded


def _make_bundle(total_price=20.0, **kwargs):
    return Bundle.create(title="Forge Starter Pack", total_price=total_price, **kwargs)


def _shares_total(bundle):
    return round(sum(price for _, price in bundle.shares()), 2)


class TestMembership:
    def test_first_member_takes_the_whole_total(self):
        bundle = _make_bundle()
        bundle.add_product("game-001", {"game-001": 30.0})
        assert bundle.shares() == [("game-001", 20.0)]

    def test_members_share_proportionally(self):
        bundle = _make_bundle()
        bundle.add_product("game-001", {"game-001": 30.0})
        bundle.add_product("game-002", {"game-001": 30.0, "game-002": 10.0})
        assert bundle.shares() == [("game-001", 15.0), ("game-002", 5.0)]

    def test_adding_raises_events(self):
        bundle = _make_bundle()
        bundle.add_product("game-001", {"game-001": 30.0})
        assert any(isinstance(e, BundleProductAdded) for e in bundle._events)
        assert any(isinstance(e, BundlePricesRedistributed) for e in bundle._events)

    def test_duplicate_member_is_rejected(self):
        bundle = _make_bundle()
        bundle.add_product("game-001", {"game-001": 30.0})
        with pytest.raises(ValidationError):
            bundle.add_product("game-001", {"game-001": 30.0})

    def test_removing_a_member_redistributes(self):
        bundle = _make_bundle()
        bundle.add_product("game-001", {"game-001": 30.0})
        bundle.add_product("game-002", {"game-001": 30.0, "game-002": 10.0})

        bundle.remove_product("game-002", {"game-001": 30.0})

        assert bundle.shares() == [("game-001", 20.0)]

    def test_removing_a_non_member(self):
        bundle = _make_bundle()
        with pytest.raises(ValidationError):
            bundle.remove_product("game-404", {})


class TestUpdate:
    def test_new_total_is_spread_over_members(self):
        bundle = _make_bundle(total_price=10.0)
        prices = {"game-001": 10.0, "game-002": 10.0, "game-003": 10.0}
        for product_id in prices:
            bundle.add_product(product_id, prices)

        bundle.update(prices, total_price=12.0)

        assert bundle.total_price == 12.0
        assert _shares_total(bundle) == 12.0
        assert bundle.shares() == [("game-001", 4.0), ("game-002", 4.0), ("game-003", 4.0)]

    def test_title_change_keeps_shares(self):
        bundle = _make_bundle()
        bundle.add_product("game-001", {"game-001": 30.0})
        bundle._events.clear()

        bundle.update({"game-001": 30.0}, title="Renamed")

        assert bundle.title == "Renamed"
        assert not any(isinstance(e, BundlePricesRedistributed) for e in bundle._events)


class TestAvailability:
    def test_active_bundle_without_expiry_is_available(self):
        assert _make_bundle().is_available()

    def test_expired_bundle_is_unavailable(self):
        bundle = _make_bundle(expires_at=datetime.now(UTC) - timedelta(minutes=1))
        assert bundle.is_expired()
        assert not bundle.is_available()

    def test_deactivated_bundle_is_unavailable(self):
        bundle = _make_bundle()
        bundle.deactivate()
        assert not bundle.is_available()

    def test_cannot_deactivate_twice(self):
        bundle = _make_bundle()
        bundle.deactivate()
        with pytest.raises(ValidationError):
            bundle.deactivate()
