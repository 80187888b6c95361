"""Catalogue API routers."""

from catalogue.api.routes import genre_router, mature_content_router, mechanic_router, product_router, tag_router

__all__ = ["product_router", "genre_router", "tag_router", "mechanic_router", "mature_content_router"]
