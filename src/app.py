"""Forja FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV controls which config overlay is applied:
#   - default      → event_processing = "sync"  (projectors fire in UoW)
#   - "production" → event_processing = "async" (projectors fire via Engine)
from catalogue.domain import catalogue  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity  # noqa: E402
from library.domain import library  # noqa: E402
from protean.integrations.fastapi import register_exception_handlers
from shared.logging import request_context
from store.domain import store  # noqa: E402

identity.init()
catalogue.init()
store.init()
library.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/users": identity,
    "/products": catalogue,
    "/genres": catalogue,
    "/tags": catalogue,
    "/mechanics": catalogue,
    "/mature-contents": catalogue,
    "/discounts": store,
    "/bundles": store,
    "/carts": store,
    "/orders": store,
    "/payments": store,
    "/library": library,
    "/achievements": library,
    "/reviews": library,
    "/wishlist": library,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Forja API",
    description="Game storefront — Identity, Catalogue, Store & Library domains",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Protean domain context matching the URL and tag the request's logs."""
    domain = _resolve_domain(request.url.path)
    if domain is None:
        # Health check, docs
        return await call_next(request)

    with request_context(domain=domain.name, method=request.method, path=request.url.path):
        with domain.domain_context():
            return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from catalogue.api import genre_router, mature_content_router, mechanic_router, product_router, tag_router  # noqa: E402
from identity.api import router as identity_router  # noqa: E402
from library.api import achievement_router, library_router, review_router, wishlist_router  # noqa: E402
from store.api import bundle_router, cart_router, discount_router, order_router, payment_router  # noqa: E402

for router in (
    identity_router,
    product_router,
    genre_router,
    tag_router,
    mechanic_router,
    mature_content_router,
    discount_router,
    bundle_router,
    cart_router,
    order_router,
    payment_router,
    library_router,
    achievement_router,
    review_router,
    wishlist_router,
):
    app.include_router(router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {domain.name: {"name": domain.name} for domain in (identity, catalogue, store, library)},
        }
    )
