"""FastAPI routes for the Store domain — discounts, bundles, carts, orders, payments.

Thin adapters that translate HTTP requests into domain commands. Reads go
straight to repositories, except cart reads, which reconcile the cart with
current pricing first.
"""

import json
from datetime import datetime

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from store.api.schemas import (
    AbandonedCountResponse,
    AddBundleToCartRequest,
    AddCartItemRequest,
    AssignProductRequest,
    BundleIdResponse,
    BundleListResponse,
    BundleMemberResponse,
    BundleResponse,
    CartIdResponse,
    CartItemResponse,
    CartListResponse,
    CartResponse,
    CreateBundleRequest,
    DetectAbandonedCartsRequest,
    DiscountIdResponse,
    DiscountListResponse,
    DiscountRequest,
    DiscountResponse,
    ExecutePaymentRequest,
    GetOrCreateCartRequest,
    ItemIdResponse,
    OrderIdResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    PaymentListResponse,
    PaymentResponse,
    PaymentResultResponse,
    PlaceOrderRequest,
    RecoverCartRequest,
    RefreshResponse,
    RefundRequest,
    RefundResponse,
    RelevanceResponse,
    StatusResponse,
    UpdateBundleRequest,
    UpdateStatusRequest,
)
from store.bundle.bundle import Bundle
from store.bundle.management import (
    AddProductToBundle,
    CreateBundle,
    DeactivateBundle,
    RemoveProductFromBundle,
    UpdateBundle,
)
from store.bundle.queries import all_bundles, available_bundles
from store.cart.abandonment import DetectAbandonedCarts
from store.cart.bundles import AddBundleToCart
from store.cart.cart import Cart
from store.cart.items import AddCartItem, RemoveCartItem
from store.cart.management import (
    ArchiveCart,
    DeleteCart,
    GetOrCreateActiveCart,
    RecoverAbandonedCart,
    carts_of_user,
)
from store.cart.reconciliation import RefreshCart, cart_reconciler
from store.discount.discount import Discount
from store.discount.management import (
    AssignProductToDiscount,
    CreateDiscount,
    DeleteDiscount,
    UnassignProductFromDiscount,
    UpdateDiscount,
)
from store.discount.queries import all_discounts, discounts_active_at
from store.order.order import Order
from store.order.placement import PlaceOrder
from store.order.status import DeleteOrder, UpdateOrderStatus
from store.payment.execution import ExecutePayment
from store.payment.management import DeletePayment, UpdatePaymentStatus
from store.payment.payment import Payment
from store.payment.refund import RefundPayment
from store.pricing.lookup import discounts_for_product


# ---------------------------------------------------------------------------
# Response mapping
# ---------------------------------------------------------------------------
def _discount_response(discount) -> DiscountResponse:
    return DiscountResponse(
        discount_id=str(discount.id),
        name=discount.name,
        discount_type=discount.discount_type,
        discount_value=discount.discount_value,
        start_date=discount.start_date,
        end_date=discount.end_date,
        is_deleted=bool(discount.is_deleted),
        product_ids=[str(p.product_id) for p in discount.products],
    )


def _bundle_response(bundle) -> BundleResponse:
    return BundleResponse(
        bundle_id=str(bundle.id),
        title=bundle.title,
        description=bundle.description,
        total_price=bundle.total_price,
        is_active=bool(bundle.is_active),
        expires_at=bundle.expires_at,
        products=[BundleMemberResponse(product_id=pid, distributed_price=price) for pid, price in bundle.shares()],
    )


def _cart_response(cart) -> CartResponse:
    return CartResponse(
        cart_id=str(cart.id),
        user_id=str(cart.user_id),
        status=cart.status,
        total_amount=cart.total_amount or 0.0,
        items=[
            CartItemResponse(
                item_id=str(i.id),
                product_id=str(i.product_id),
                price=i.price,
                bundle_id=str(i.bundle_id) if i.bundle_id else None,
            )
            for i in cart.items
        ],
        created_at=cart.created_at,
        last_modified_at=cart.last_modified_at,
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        cart_id=str(order.cart_id),
        user_id=str(order.user_id),
        status=order.status,
        total_amount=order.total_amount,
        order_date=order.order_date,
        items=[
            OrderItemResponse(
                product_id=str(i.product_id),
                product_type=i.product_type,
                game_id=str(i.game_id) if i.game_id else None,
                final_price=i.final_price,
                bundle_id=str(i.bundle_id) if i.bundle_id else None,
            )
            for i in order.items
        ],
    )


def _payment_response(payment) -> PaymentResponse:
    return PaymentResponse(
        payment_id=str(payment.id),
        order_id=str(payment.order_id),
        user_id=str(payment.user_id),
        payment_method=payment.payment_method,
        amount=payment.amount,
        currency=payment.currency,
        status=payment.status,
        external_payment_id=payment.external_payment_id,
        provider_name=payment.provider_name,
        failure_reason=payment.failure_reason,
        payment_date=payment.payment_date,
    )


# ---------------------------------------------------------------------------
# Discount Router
# ---------------------------------------------------------------------------
discount_router = APIRouter(prefix="/discounts", tags=["discounts"])


@discount_router.post("", status_code=201, response_model=DiscountIdResponse)
async def create_discount(body: DiscountRequest) -> DiscountIdResponse:
    command = CreateDiscount(**body.model_dump())
    discount_id = current_domain.process(command, asynchronous=False)
    return DiscountIdResponse(discount_id=discount_id)


@discount_router.get("", response_model=DiscountListResponse)
async def list_discounts(active_at: datetime | None = None) -> DiscountListResponse:
    discounts = discounts_active_at(active_at) if active_at else all_discounts()
    return DiscountListResponse(discounts=[_discount_response(d) for d in discounts])


@discount_router.get("/product/{product_id}", response_model=DiscountListResponse)
async def list_product_discounts(product_id: str) -> DiscountListResponse:
    return DiscountListResponse(discounts=[_discount_response(d) for d in discounts_for_product(product_id)])


@discount_router.get("/{discount_id}", response_model=DiscountResponse)
async def get_discount(discount_id: str) -> DiscountResponse:
    discount = current_domain.repository_for(Discount).get(discount_id)
    return _discount_response(discount)


@discount_router.put("/{discount_id}", response_model=StatusResponse)
async def update_discount(discount_id: str, body: DiscountRequest) -> StatusResponse:
    command = UpdateDiscount(discount_id=discount_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@discount_router.delete("/{discount_id}", response_model=StatusResponse)
async def delete_discount(discount_id: str) -> StatusResponse:
    current_domain.process(DeleteDiscount(discount_id=discount_id), asynchronous=False)
    return StatusResponse()


@discount_router.post("/{discount_id}/products", response_model=StatusResponse)
async def assign_product(discount_id: str, body: AssignProductRequest) -> StatusResponse:
    command = AssignProductToDiscount(discount_id=discount_id, product_id=body.product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@discount_router.delete("/{discount_id}/products/{product_id}", response_model=StatusResponse)
async def unassign_product(discount_id: str, product_id: str) -> StatusResponse:
    command = UnassignProductFromDiscount(discount_id=discount_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Bundle Router
# ---------------------------------------------------------------------------
bundle_router = APIRouter(prefix="/bundles", tags=["bundles"])


@bundle_router.post("", status_code=201, response_model=BundleIdResponse)
async def create_bundle(body: CreateBundleRequest) -> BundleIdResponse:
    command = CreateBundle(
        title=body.title,
        description=body.description,
        total_price=body.total_price,
        is_active=body.is_active,
        expires_at=body.expires_at,
        product_ids=json.dumps(body.product_ids),
    )
    bundle_id = current_domain.process(command, asynchronous=False)
    return BundleIdResponse(bundle_id=bundle_id)


@bundle_router.get("", response_model=BundleListResponse)
async def list_bundles(active_only: bool = False) -> BundleListResponse:
    bundles = available_bundles() if active_only else all_bundles()
    return BundleListResponse(bundles=[_bundle_response(b) for b in bundles])


@bundle_router.get("/{bundle_id}", response_model=BundleResponse)
async def get_bundle(bundle_id: str) -> BundleResponse:
    return _bundle_response(current_domain.repository_for(Bundle).get(bundle_id))


@bundle_router.put("/{bundle_id}", response_model=StatusResponse)
async def update_bundle(bundle_id: str, body: UpdateBundleRequest) -> StatusResponse:
    command = UpdateBundle(bundle_id=bundle_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@bundle_router.post("/{bundle_id}/products", response_model=StatusResponse)
async def add_bundle_product(bundle_id: str, body: AssignProductRequest) -> StatusResponse:
    command = AddProductToBundle(bundle_id=bundle_id, product_id=body.product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@bundle_router.delete("/{bundle_id}/products/{product_id}", response_model=StatusResponse)
async def remove_bundle_product(bundle_id: str, product_id: str) -> StatusResponse:
    command = RemoveProductFromBundle(bundle_id=bundle_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@bundle_router.post("/{bundle_id}/deactivate", response_model=StatusResponse)
async def deactivate_bundle(bundle_id: str) -> StatusResponse:
    current_domain.process(DeactivateBundle(bundle_id=bundle_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", response_model=CartIdResponse)
async def get_or_create_cart(body: GetOrCreateCartRequest) -> CartIdResponse:
    cart_id = current_domain.process(GetOrCreateActiveCart(user_id=body.user_id), asynchronous=False)
    return CartIdResponse(cart_id=cart_id)


@cart_router.post("/recover", response_model=CartIdResponse)
async def recover_cart(body: RecoverCartRequest) -> CartIdResponse:
    cart_id = current_domain.process(RecoverAbandonedCart(user_id=body.user_id), asynchronous=False)
    if cart_id is None:
        raise ObjectNotFoundError(f"No abandoned cart for user {body.user_id}")
    return CartIdResponse(cart_id=cart_id)


@cart_router.get("/user/{user_id}", response_model=CartListResponse)
async def list_user_carts(user_id: str) -> CartListResponse:
    return CartListResponse(carts=[_cart_response(c) for c in carts_of_user(user_id)])


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    """Return the cart, repriced first if current pricing moved on."""
    current_domain.process(RefreshCart(cart_id=cart_id), asynchronous=False)
    return _cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.get("/{cart_id}/relevance", response_model=RelevanceResponse)
async def check_cart_relevance(cart_id: str) -> RelevanceResponse:
    cart = current_domain.repository_for(Cart).get(cart_id)
    reasons = cart_reconciler.stale_reasons(cart)
    return RelevanceResponse(relevant=not reasons, reasons=reasons)


@cart_router.post("/{cart_id}/refresh", response_model=RefreshResponse)
async def refresh_cart(cart_id: str) -> RefreshResponse:
    changed = current_domain.process(RefreshCart(cart_id=cart_id), asynchronous=False)
    return RefreshResponse(changed=bool(changed))


@cart_router.post("/{cart_id}/items", status_code=201, response_model=ItemIdResponse)
async def add_cart_item(cart_id: str, body: AddCartItemRequest) -> ItemIdResponse:
    item_id = current_domain.process(AddCartItem(cart_id=cart_id, product_id=body.product_id), asynchronous=False)
    return ItemIdResponse(item_id=item_id)


@cart_router.delete("/{cart_id}/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(cart_id: str, item_id: str) -> StatusResponse:
    current_domain.process(RemoveCartItem(cart_id=cart_id, item_id=item_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/bundles", response_model=StatusResponse)
async def add_bundle_to_cart(cart_id: str, body: AddBundleToCartRequest) -> StatusResponse:
    current_domain.process(AddBundleToCart(cart_id=cart_id, bundle_id=body.bundle_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/archive", response_model=StatusResponse)
async def archive_cart(cart_id: str) -> StatusResponse:
    current_domain.process(ArchiveCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}", response_model=StatusResponse)
async def delete_cart(cart_id: str) -> StatusResponse:
    current_domain.process(DeleteCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Maintenance: endpoints for periodic background jobs
# ---------------------------------------------------------------------------
@cart_router.post("/maintenance/detect-abandoned", response_model=AbandonedCountResponse)
async def detect_abandoned_carts(body: DetectAbandonedCartsRequest) -> AbandonedCountResponse:
    command = DetectAbandonedCarts(inactivity_minutes=body.inactivity_minutes, as_of=body.as_of)
    count = current_domain.process(command, asynchronous=False)
    return AbandonedCountResponse(abandoned_count=count or 0)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    order_id = current_domain.process(PlaceOrder(cart_id=body.cart_id, user_id=body.user_id), asynchronous=False)
    return OrderIdResponse(order_id=order_id)


@order_router.get("/user/{user_id}", response_model=OrderListResponse)
async def list_user_orders(user_id: str) -> OrderListResponse:
    orders = (
        current_domain.repository_for(Order)
        ._dao.query.filter(user_id=user_id, is_deleted=False)
        .limit(None)
        .all()
        .items
    )
    return OrderListResponse(orders=[_order_response(o) for o in orders])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateStatusRequest) -> StatusResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return StatusResponse()


@order_router.delete("/{order_id}", response_model=StatusResponse)
async def delete_order(order_id: str) -> StatusResponse:
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/payments", response_model=PaymentResultResponse)
async def pay_order(order_id: str, body: ExecutePaymentRequest) -> PaymentResultResponse:
    command = ExecutePayment(order_id=order_id, payment_method=body.payment_method, currency=body.currency)
    transaction_id = current_domain.process(command, asynchronous=False)
    if transaction_id is None:
        order = current_domain.repository_for(Order).get(order_id)
        raise ValidationError({"payment": [f"Payment declined; order is {order.status}"]})
    return PaymentResultResponse(status="Completed", transaction_id=transaction_id)


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.get("/order/{order_id}", response_model=PaymentListResponse)
async def list_order_payments(order_id: str) -> PaymentListResponse:
    payments = current_domain.repository_for(Payment)._dao.query.filter(order_id=order_id).limit(None).all().items
    return PaymentListResponse(payments=[_payment_response(p) for p in payments])


@payment_router.get("/transaction/{transaction_id}", response_model=PaymentResponse)
async def get_payment_by_transaction(transaction_id: str) -> PaymentResponse:
    payments = (
        current_domain.repository_for(Payment)
        ._dao.query.filter(external_payment_id=transaction_id)
        .limit(None)
        .all()
        .items
    )
    if not payments:
        raise ObjectNotFoundError(f"No payment with transaction id {transaction_id}")
    return _payment_response(payments[0])


@payment_router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str) -> PaymentResponse:
    return _payment_response(current_domain.repository_for(Payment).get(payment_id))


@payment_router.post("/{payment_id}/refund", response_model=RefundResponse)
async def refund_payment(payment_id: str, body: RefundRequest) -> RefundResponse:
    refund_id = current_domain.process(RefundPayment(payment_id=payment_id, reason=body.reason), asynchronous=False)
    return RefundResponse(refund_id=refund_id)


@payment_router.put("/{payment_id}/status", response_model=StatusResponse)
async def update_payment_status(payment_id: str, body: UpdateStatusRequest) -> StatusResponse:
    current_domain.process(UpdatePaymentStatus(payment_id=payment_id, status=body.status), asynchronous=False)
    return StatusResponse()


@payment_router.delete("/{payment_id}", response_model=StatusResponse)
async def delete_payment(payment_id: str) -> StatusResponse:
    current_domain.process(DeletePayment(payment_id=payment_id), asynchronous=False)
    return StatusResponse()
