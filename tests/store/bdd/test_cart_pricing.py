"""BDD tests for cart pricing, reconciliation and checkout of stale carts."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when
from store.bundle.management import AddProductToBundle, CreateBundle, RemoveProductFromBundle
from store.cart.bundles import AddBundleToCart
from store.cart.cart import Cart
from store.cart.items import AddCartItem, RemoveCartItem
from store.cart.management import GetOrCreateActiveCart
from store.cart.reconciliation import RefreshCart, cart_reconciler
from store.discount.management import AssignProductToDiscount, CreateDiscount
from store.order.placement import PlaceOrder
from store.pricing.product_price import ProductPrice

scenarios("features/cart_pricing.feature")


@pytest.fixture()
def bundles():
    return {}


@pytest.fixture()
def error():
    return {}


def _cart(cart_id):
    return current_domain.repository_for(Cart).get(cart_id)


def _item(cart_id, product_id):
    return next(i for i in _cart(cart_id).items if str(i.product_id) == product_id)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the game "{product_id}" is on sale for {price:f}'))
def game_on_sale(seed_product, product_id, price):
    seed_product(product_id, price)


@given(parsers.cfparse('the user "{user_id}" has an active cart'), target_fixture="cart_id")
def active_cart(user_id):
    return current_domain.process(GetOrCreateActiveCart(user_id=user_id), asynchronous=False)


@given(parsers.cfparse('a {value:g} percent discount on "{product_id}"'))
def percent_discount(value, product_id):
    discount_id = current_domain.process(
        CreateDiscount(name="Sale", discount_type="Percentage", discount_value=value), asynchronous=False
    )
    current_domain.process(AssignProductToDiscount(discount_id=discount_id, product_id=product_id), asynchronous=False)


@given(parsers.cfparse('a bundle "{title}" of "{product_ids}" priced at {price:f}'))
def bundle_exists(bundles, title, product_ids, price):
    bundles[title] = current_domain.process(
        CreateBundle(title=title, total_price=price, product_ids=json.dumps(product_ids.split(","))),
        asynchronous=False,
    )


@given(parsers.cfparse('"{product_id}" is added to the cart'))
@when(parsers.cfparse('"{product_id}" is added to the cart'))
def add_product(cart_id, product_id):
    current_domain.process(AddCartItem(cart_id=cart_id, product_id=product_id), asynchronous=False)


@given(parsers.cfparse('the bundle "{title}" is added to the cart'))
@when(parsers.cfparse('the bundle "{title}" is added to the cart'))
def add_bundle(cart_id, bundles, title):
    current_domain.process(AddBundleToCart(cart_id=cart_id, bundle_id=bundles[title]), asynchronous=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the list price of "{product_id}" changes to {price:f}'))
def change_list_price(product_id, price):
    repo = current_domain.repository_for(ProductPrice)
    record = repo.get(product_id)
    record.price = price
    repo.add(record)


@when(parsers.cfparse('"{product_id}" joins the bundle "{title}"'))
def join_bundle(bundles, product_id, title):
    current_domain.process(AddProductToBundle(bundle_id=bundles[title], product_id=product_id), asynchronous=False)


@when(parsers.cfparse('"{product_id}" leaves the bundle "{title}"'))
def leave_bundle(bundles, product_id, title):
    current_domain.process(
        RemoveProductFromBundle(bundle_id=bundles[title], product_id=product_id), asynchronous=False
    )


@when("the cart is refreshed")
def refresh_cart(cart_id):
    current_domain.process(RefreshCart(cart_id=cart_id), asynchronous=False)


@when("the user checks out")
def check_out(cart_id, error):
    cart = _cart(cart_id)
    try:
        current_domain.process(PlaceOrder(cart_id=cart_id, user_id=str(cart.user_id)), asynchronous=False)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the cart item "{product_id}" is removed'))
def remove_item(cart_id, product_id):
    item = _item(cart_id, product_id)
    current_domain.process(RemoveCartItem(cart_id=cart_id, item_id=str(item.id)), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart item "{product_id}" costs {price:f}'))
def item_costs(cart_id, product_id, price):
    assert _item(cart_id, product_id).price == pytest.approx(price)


@then(parsers.cfparse("the cart total is {total:f}"))
def cart_total(cart_id, total):
    assert _cart(cart_id).total_amount == pytest.approx(total)


@then("the cart is stale")
def cart_is_stale(cart_id):
    assert not cart_reconciler.is_relevant(_cart(cart_id))


@then("the cart is up to date")
def cart_is_up_to_date(cart_id):
    assert cart_reconciler.is_relevant(_cart(cart_id))


@then("the checkout is rejected")
def checkout_rejected(error):
    assert isinstance(error.get("exc"), ValidationError)


@then(parsers.cfparse('the cart holds only "{product_id}"'))
def cart_holds_only(cart_id, product_id):
    assert [str(i.product_id) for i in _cart(cart_id).items] == [product_id]


@then("the cart is empty")
def cart_is_empty(cart_id):
    cart = _cart(cart_id)
    assert cart.items == []
    assert cart.total_amount == 0.0
