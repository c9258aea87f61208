"""Tablerank FastAPI application.

Restaurant directory, review ledger and rating endpoints. Commands are
processed synchronously inside the dining domain context for every request.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied ("test", "production").
from dining.domain import dining  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from dining.utils.logging import bind_request_context, clear_request_context

dining.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Tablerank API",
    description="Restaurant reviews, reactions and weighted rankings",
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
    """Push the dining domain context and bind request log context."""
    bind_request_context(
        path=request.url.path,
        method=request.method,
        user_id=request.headers.get("x-user-id"),
    )
    try:
        with dining.domain_context():
            return await call_next(request)
    finally:
        clear_request_context()


# ---------------------------------------------------------------------------
# Routers and error translation
# ---------------------------------------------------------------------------
from dining.api import restaurant_router, review_router  # noqa: E402
from dining.api.errors import register_dining_error_handlers  # noqa: E402

app.include_router(restaurant_router)
app.include_router(review_router)

register_exception_handlers(app)
register_dining_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domains": {"dining": {"name": dining.name}}})
