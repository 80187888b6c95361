"""Pydantic request/response schemas for the Store API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Discounts
# ---------------------------------------------------------------------------
class DiscountRequest(BaseModel):
    name: str = Field(max_length=50)
    discount_type: str
    discount_value: float = Field(gt=0)
    start_date: datetime | None = None
    end_date: datetime | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Summer Sale",
                    "discount_type": "Percentage",
                    "discount_value": 25,
                    "start_date": "2026-06-01T00:00:00Z",
                    "end_date": "2026-06-30T23:59:59Z",
                }
            ]
        }
    }


class AssignProductRequest(BaseModel):
    product_id: str


class DiscountIdResponse(BaseModel):
    discount_id: str


class DiscountResponse(BaseModel):
    discount_id: str
    name: str
    discount_type: str
    discount_value: float
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_deleted: bool = False
    product_ids: list[str] = []


class DiscountListResponse(BaseModel):
    discounts: list[DiscountResponse]


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------
class CreateBundleRequest(BaseModel):
    title: str = Field(max_length=255)
    description: str | None = None
    total_price: float = Field(ge=0)
    is_active: bool = True
    expires_at: datetime | None = None
    product_ids: list[str] = []

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Strategy Starter Pack",
                    "description": "Two classics for one price",
                    "total_price": 39.99,
                    "product_ids": ["game-001", "game-002"],
                }
            ]
        }
    }


class UpdateBundleRequest(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    total_price: float | None = Field(default=None, ge=0)
    is_active: bool | None = None
    expires_at: datetime | None = None


class BundleIdResponse(BaseModel):
    bundle_id: str


class BundleMemberResponse(BaseModel):
    product_id: str
    distributed_price: float


class BundleResponse(BaseModel):
    bundle_id: str
    title: str
    description: str | None = None
    total_price: float
    is_active: bool
    expires_at: datetime | None = None
    products: list[BundleMemberResponse] = []


class BundleListResponse(BaseModel):
    bundles: list[BundleResponse]


# ---------------------------------------------------------------------------
# Carts
# ---------------------------------------------------------------------------
class GetOrCreateCartRequest(BaseModel):
    user_id: str


class RecoverCartRequest(BaseModel):
    user_id: str


class AddCartItemRequest(BaseModel):
    product_id: str


class AddBundleToCartRequest(BaseModel):
    bundle_id: str


class DetectAbandonedCartsRequest(BaseModel):
    inactivity_minutes: int = 60 * 24 * 7
    as_of: datetime | None = None


class CartIdResponse(BaseModel):
    cart_id: str


class ItemIdResponse(BaseModel):
    item_id: str


class CartItemResponse(BaseModel):
    item_id: str
    product_id: str
    price: float
    bundle_id: str | None = None


class CartResponse(BaseModel):
    cart_id: str
    user_id: str
    status: str
    total_amount: float
    items: list[CartItemResponse] = []
    created_at: datetime | None = None
    last_modified_at: datetime | None = None


class CartListResponse(BaseModel):
    carts: list[CartResponse]


class RefreshResponse(BaseModel):
    changed: bool


class RelevanceResponse(BaseModel):
    relevant: bool
    reasons: list[str] = []


class AbandonedCountResponse(BaseModel):
    abandoned_count: int


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    cart_id: str
    user_id: str


class UpdateStatusRequest(BaseModel):
    status: str


class ExecutePaymentRequest(BaseModel):
    payment_method: str = "Card"
    currency: str = Field(default="USD", max_length=3)


class OrderIdResponse(BaseModel):
    order_id: str


class OrderItemResponse(BaseModel):
    product_id: str
    product_type: str | None = None
    game_id: str | None = None
    final_price: float
    bundle_id: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    cart_id: str
    user_id: str
    status: str
    total_amount: float
    order_date: datetime | None = None
    items: list[OrderItemResponse] = []


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class PaymentResultResponse(BaseModel):
    status: str
    transaction_id: str | None = None


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
class RefundRequest(BaseModel):
    reason: str = "Requested by customer"


class RefundResponse(BaseModel):
    refund_id: str | None = None


class PaymentResponse(BaseModel):
    payment_id: str
    order_id: str
    user_id: str
    payment_method: str
    amount: float
    currency: str
    status: str
    external_payment_id: str | None = None
    provider_name: str | None = None
    failure_reason: str | None = None
    payment_date: datetime | None = None


class PaymentListResponse(BaseModel):
    payments: list[PaymentResponse]
