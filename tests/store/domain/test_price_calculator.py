"""Tests for the PriceCalculator — discounts, totals and bundle distribution."""

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import pytest
from store.pricing.calculator import PriceCalculator, is_discount_active

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


def _discount(discount_type, value, start=None, end=None):
    return SimpleNamespace(discount_type=discount_type, discount_value=value, start_date=start, end_date=end)


@pytest.fixture()
def calculator():
    return PriceCalculator()


class TestApplyDiscount:
    def test_no_discounts_keeps_price(self, calculator):
        assert calculator.apply_discount(59.99, [], NOW) == 59.99

    def test_percentage_discount(self, calculator):
        assert calculator.apply_discount(40.0, [_discount("Percentage", 25)], NOW) == 30.0

    def test_fixed_discount(self, calculator):
        assert calculator.apply_discount(40.0, [_discount("Fixed", 7.5)], NOW) == 32.5

    def test_discounts_stack_against_original_price(self, calculator):
        discounts = [_discount("Percentage", 50), _discount("Percentage", 25)]
        # 100 - 50 - 25, not 100 * 0.5 * 0.75
        assert calculator.apply_discount(100.0, discounts, NOW) == 25.0

    def test_percentage_and_fixed_stack(self, calculator):
        discounts = [_discount("Percentage", 10), _discount("Fixed", 5)]
        assert calculator.apply_discount(50.0, discounts, NOW) == 40.0

    def test_price_below_zero_is_clamped(self, calculator):
        assert calculator.apply_discount(10.0, [_discount("Fixed", 25)], NOW) == 0.01

    def test_full_percentage_discount_gives_zero(self, calculator):
        assert calculator.apply_discount(10.0, [_discount("Percentage", 100)], NOW) == 0.0

    def test_expired_discount_is_ignored(self, calculator):
        expired = _discount("Percentage", 50, end=NOW - timedelta(days=1))
        assert calculator.apply_discount(20.0, [expired], NOW) == 20.0

    def test_future_discount_is_ignored(self, calculator):
        upcoming = _discount("Percentage", 50, start=NOW + timedelta(hours=1))
        assert calculator.apply_discount(20.0, [upcoming], NOW) == 20.0

    def test_result_is_rounded_half_up(self, calculator):
        # 9.99 * 0.85 = 8.4915
        assert calculator.apply_discount(9.99, [_discount("Percentage", 15)], NOW) == 8.49
        # 0.05 * 0.5 = 0.025
        assert calculator.apply_discount(0.05, [_discount("Percentage", 50)], NOW) == 0.03


class TestDiscountWindow:
    def test_open_ended_discount_is_always_active(self):
        assert is_discount_active(_discount("Fixed", 1), NOW)

    def test_naive_and_aware_datetimes_compare(self):
        start = datetime(2026, 4, 30, 12, 0)  # naive, read back from storage
        assert is_discount_active(_discount("Fixed", 1, start=start), NOW)


class TestTotals:
    def test_calculate_total(self, calculator):
        assert calculator.calculate_total([0.1, 0.2, 10.0]) == 10.3

    def test_total_of_nothing_is_zero(self, calculator):
        assert calculator.calculate_total([]) == 0.0

    def test_prices_within_tolerance_are_equal(self, calculator):
        assert not calculator.are_prices_different(10.0, 10.005)
        assert calculator.are_prices_different(10.0, 10.02)

    @pytest.mark.parametrize("base", [10.0, 20.0, 99.99, 1234.56])
    def test_one_cent_is_within_tolerance_at_any_magnitude(self, calculator, base):
        assert not calculator.are_prices_different(base, base + 0.01)
        assert not calculator.are_prices_different(base + 0.01, base)
        assert calculator.are_prices_different(base, base + 0.02)


class TestDistributeBundlePrice:
    def test_shares_are_proportional(self, calculator):
        shares = calculator.distribute_bundle_price([("a", 30.0), ("b", 10.0)], 20.0)
        assert shares == [("a", 15.0), ("b", 5.0)]

    def test_shares_add_up_to_total(self, calculator):
        members = [("a", 10.0), ("b", 10.0), ("c", 10.0)]
        shares = calculator.distribute_bundle_price(members, 10.0)
        assert round(sum(price for _, price in shares), 2) == 10.0

    def test_last_member_absorbs_remainder(self, calculator):
        members = [("a", 10.0), ("b", 10.0), ("c", 10.0)]
        shares = calculator.distribute_bundle_price(members, 10.0)
        assert shares == [("a", 3.33), ("b", 3.33), ("c", 3.34)]

    def test_free_members_share_evenly(self, calculator):
        shares = calculator.distribute_bundle_price([("a", 0.0), ("b", 0.0)], 9.0)
        assert shares == [("a", 4.5), ("b", 4.5)]

    def test_no_members(self, calculator):
        assert calculator.distribute_bundle_price([], 10.0) == []

    def test_rounding_never_leaves_a_negative_share(self, calculator):
        members = [("a", 1.0), ("b", 1.0), ("c", 0.0)]
        shares = calculator.distribute_bundle_price(members, 0.01)
        assert all(price >= 0 for _, price in shares)
        assert round(sum(price for _, price in shares), 2) == 0.01
