"""Storefront FastAPI application.

Web server that processes cart, checkout and order commands synchronously via
HTTP, and receives payment provider webhooks. Each request under a domain
prefix is wrapped in the ordering domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering  # noqa: E402
from ordering.utils.logging import add_context, clear_context  # noqa: E402

ordering.init()

_DOMAIN_PREFIXES = ("/carts", "/checkout", "/orders")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Shopping carts, checkout with a hosted payment page, and orders",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ordering domain context for domain routes."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        add_context(method=request.method, path=request.url.path)
        try:
            with ordering.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check and docs run without a domain context
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api import cart_router, checkout_router, order_router  # noqa: E402
from ordering.api.errors import register_error_handlers  # noqa: E402

app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "ordering": {"name": ordering.name},
            },
        }
    )
