"""Library domain API package."""

from library.api.routes import achievement_router, library_router, review_router, wishlist_router

__all__ = ["library_router", "achievement_router", "review_router", "wishlist_router"]
