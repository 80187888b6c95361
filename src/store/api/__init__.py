"""Store domain API package."""

from store.api.routes import bundle_router, cart_router, discount_router, order_router, payment_router

__all__ = ["discount_router", "bundle_router", "cart_router", "order_router", "payment_router"]
