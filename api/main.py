"""
api/main.py -- FastAPI application entry point for the inventory API.

Run with:      uvicorn asgi:app --reload
               python main.py

Middleware stack (outermost to innermost):
  1. log_requests       -- method, path, status and latency of every request
  2. cors_headers       -- permissive CORS headers on every response; answers
                           every OPTIONS request with an empty 200
  3. SlowAPIMiddleware  -- enforces per-route rate limits from api.limiter

Lifespan builds the object graph once -- engine -> stores -> services -- and
hangs it on app.state. Route handlers and guards read from app.state, so
tests swap the whole graph by replacing the lifespan.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.limiter import limiter
from api.models import ErrorDetail, ErrorResponse, HealthResponse
from api.routes.auth import router as auth_router
from api.routes.products import router as products_router
from auth.service import IdentityService
from auth.store import UserStore
from auth.tokens import TokenService, hash_password
from catalog.service import CatalogService
from catalog.store import CatalogStore
from core.config import get_settings
from core.database import check_db_connected, create_db_engine
from core.exceptions import InternalError, InvalidInput, InventoryError

API_VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("inventory.api")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the engine, stores and services on startup; dispose the engine on shutdown."""
    settings = get_settings()
    logger.info("Inventory API starting up")

    engine = create_db_engine(settings.database_url)
    user_store = UserStore(engine)
    catalog_store = CatalogStore(engine)
    if settings.seed_sample_data:
        user_store.seed_if_empty(hash_password)
        catalog_store.seed_if_empty()

    app.state.engine = engine
    app.state.token_service = TokenService.from_settings(settings)
    app.state.identity_service = IdentityService(user_store, app.state.token_service)
    app.state.catalog_service = CatalogService(catalog_store, strict=settings.strict_mutations)
    logger.info("Stores initialized (strict_mutations=%s)", settings.strict_mutations)

    yield

    engine.dispose()
    logger.info("Inventory API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Inventory API",
    description="Catalog CRUD with bearer-token authentication and admin-gated mutations.",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(SlowAPIMiddleware)

# SlowAPI looks for app.state.limiter by convention.
app.state.limiter = limiter


# ---------------------------------------------------------------------------
# CORS / preflight middleware
#
# Every route accepts OPTIONS as a no-op, protected or not, so preflight is
# answered here before routing or any guard runs. CORSMiddleware is not used
# because it only adds headers when the request carries an Origin.
# ---------------------------------------------------------------------------


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(products_router, prefix="/api", tags=["Products"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same ErrorResponse envelope so API clients can parse
# errors uniformly without inspecting status codes to choose a schema.
# ---------------------------------------------------------------------------


def _error_response(status_code: int, code: str, message: str, detail: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail)).model_dump(),
    )


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    """Map the service-layer error taxonomy onto HTTP status codes."""
    response = _error_response(exc.status_code, exc.code, exc.message)
    if exc.status_code == 401:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with a structured error when a rate limit is exceeded."""
    retry_after = int(getattr(exc, "retry_after", 60))
    response = _error_response(429, "rate_limited", "Too many requests.", str(exc))
    response.headers["Retry-After"] = str(retry_after)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 when the body is not valid JSON, misses fields, or a path id is not an integer."""
    return _error_response(
        InvalidInput.status_code, InvalidInput.code, InvalidInput.default_message, str(exc.errors())
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures are logged with traceback and reported as a generic 500."""
    logger.exception("Store error on %s %s", request.method, request.url.path)
    return _error_response(500, "internal_error", "Database error")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return a structured error for framework-raised HTTP errors (unknown route, bad method)."""
    return _error_response(exc.status_code, f"http_{exc.status_code}", str(exc.detail))


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception is written to the log only, never to the response body.
    Starlette runs this handler in ServerErrorMiddleware, outside cors_headers,
    so the CORS headers are applied here.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    response = _error_response(500, InternalError.code, InternalError.default_message)
    response.headers.update(CORS_HEADERS)
    return response


# ---------------------------------------------------------------------------
# Health endpoint
#
# Defined directly in main.py (not in a router) so it is always reachable
# regardless of router registration state. No rate limit applied.
# ---------------------------------------------------------------------------


@app.get("/api/health", tags=["Health"])
def health(request: Request) -> HealthResponse:
    """Return API liveness, version and database reachability."""
    db_ok = check_db_connected(request.app.state.engine)
    return HealthResponse(
        version=API_VERSION,
        components={"app": "ok", "database": "ok" if db_ok else "error"},
    )
