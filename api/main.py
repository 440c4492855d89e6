"""
Storefront Orders - Main FastAPI Application.

REST layer for order placement and fulfilment: store users place and
receive orders for their store, admins ship and deliver them.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time

from api.envelope import error_response
from api.routes import health, orders
from core.domain.exceptions import OrderingError
from core.infrastructure.database.config import close_database, init_database
from core.infrastructure.logging import configure_logging
from core.settings import get_app_settings


# Setup logging
configure_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Storefront Orders API",
    description="""
    Store ordering backend.

    Features:
    - Order placement priced from the live catalog
    - Atomic stock decrement
    - Role-gated status changes (store / admin)
    - Printable packing manifests

    All ids in paths and bodies are hashed ids.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure based on your needs
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(OrderingError)
async def ordering_error_handler(request: Request, exc: OrderingError):
    """Typed business errors carry their own status code."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error} on {request.url.path}: {exc.message}", exc_info=exc.__cause__)
    return error_response(exc.status_code, exc.error, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Routing errors (unknown path, wrong method) use the same envelope."""
    error = "API endpoint not found" if exc.status_code == 404 else str(exc.detail)
    response = error_response(exc.status_code, error, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return error_response(400, "Validation failed", details)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return error_response(500, "Internal server error", "An unexpected error occurred")


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("🚀 Storefront Orders API starting up...")
    await init_database(get_app_settings().database)
    logger.info("📚 Swagger UI available at: /docs")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    await close_database()
    logger.info("👋 Storefront Orders API shutting down...")


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    orders.router,
    prefix="/api/orders",
    tags=["Orders"]
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "Storefront Orders API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
