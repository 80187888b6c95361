"""Application tests for cart item commands — prices come from the Store price list."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from store.cart.cart import Cart
from store.cart.items import AddCartItem, RecalculateCartTotal, RemoveCartItem
from store.cart.management import GetOrCreateActiveCart
from store.discount.management import AssignProductToDiscount, CreateDiscount


def _new_cart(user_id="user-001"):
    return current_domain.process(GetOrCreateActiveCart(user_id=user_id), asynchronous=False)


def _discount(product_id, discount_type="Percentage", value=25.0):
    discount_id = current_domain.process(
        CreateDiscount(name="Sale", discount_type=discount_type, discount_value=value),
        asynchronous=False,
    )
    current_domain.process(
        AssignProductToDiscount(discount_id=discount_id, product_id=product_id),
        asynchronous=False,
    )
    return discount_id


class TestAddCartItem:
    def test_item_is_added_at_list_price(self, seed_product):
        seed_product("game-001", 20.0)
        cart_id = _new_cart()

        item_id = current_domain.process(AddCartItem(cart_id=cart_id, product_id="game-001"), asynchronous=False)

        cart = current_domain.repository_for(Cart).get(cart_id)
        assert str(cart.items[0].id) == item_id
        assert cart.items[0].price == 20.0
        assert cart.total_amount == 20.0

    def test_item_is_added_at_discounted_price(self, seed_product):
        seed_product("game-001", 20.0)
        _discount("game-001", value=25.0)
        _discount("game-001", discount_type="Fixed", value=2.5)
        cart_id = _new_cart()

        current_domain.process(AddCartItem(cart_id=cart_id, product_id="game-001"), asynchronous=False)

        cart = current_domain.repository_for(Cart).get(cart_id)
        assert cart.items[0].price == 12.5

    def test_discount_created_after_a_hundred_others_still_applies(self, seed_product):
        seed_product("game-001", 20.0)
        for _ in range(120):
            _discount("game-002", discount_type="Fixed", value=1.0)
        _discount("game-001", value=50.0)
        cart_id = _new_cart()

        current_domain.process(AddCartItem(cart_id=cart_id, product_id="game-001"), asynchronous=False)

        cart = current_domain.repository_for(Cart).get(cart_id)
        assert cart.items[0].price == 10.0

    def test_inactive_product_is_rejected(self, seed_product):
        seed_product("game-001", 20.0, is_active=False)
        cart_id = _new_cart()

        with pytest.raises(ValidationError):
            current_domain.process(AddCartItem(cart_id=cart_id, product_id="game-001"), asynchronous=False)

    def test_unknown_product_is_rejected(self):
        cart_id = _new_cart()
        with pytest.raises(ValidationError):
            current_domain.process(AddCartItem(cart_id=cart_id, product_id="game-404"), asynchronous=False)


class TestRemoveCartItem:
    def test_remove_standalone_item(self, seed_product):
        seed_product("game-001", 20.0)
        seed_product("game-002", 10.0)
        cart_id = _new_cart()
        item_id = current_domain.process(AddCartItem(cart_id=cart_id, product_id="game-001"), asynchronous=False)
        current_domain.process(AddCartItem(cart_id=cart_id, product_id="game-002"), asynchronous=False)

        removed = current_domain.process(RemoveCartItem(cart_id=cart_id, item_id=item_id), asynchronous=False)

        cart = current_domain.repository_for(Cart).get(cart_id)
        assert removed == 1
        assert len(cart.items) == 1
        assert cart.total_amount == 10.0


class TestRecalculateCartTotal:
    def test_returns_sum_of_item_prices(self, seed_product):
        seed_product("game-001", 19.99)
        seed_product("game-002", 0.02)
        cart_id = _new_cart()
        current_domain.process(AddCartItem(cart_id=cart_id, product_id="game-001"), asynchronous=False)
        current_domain.process(AddCartItem(cart_id=cart_id, product_id="game-002"), asynchronous=False)

        total = current_domain.process(RecalculateCartTotal(cart_id=cart_id), asynchronous=False)

        assert total == 20.01
