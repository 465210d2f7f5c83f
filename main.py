"""
UniMeal FastAPI Application
Main entry point: configuration, store lifecycle, middleware and routers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from adapters.mongo_adapter import build_store
from api.middleware import RequestLoggingMiddleware, register_exception_handlers
from api.routes import health, meals, upcoming_meals, reviews, meal_requests, users
from app.config import settings

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("unimeal.main")


def _open_store():
    store = build_store(settings)
    store.connect()
    store.ensure_indexes(settings)
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Opens the document store with retries and closes it on shutdown.
    """
    _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")

    store = None
    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # Blocking driver calls run in a worker thread
            store = await anyio.to_thread.run_sync(_open_store)
            break
        except Exception as exc:
            _logger.warning(
                "Store connection attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error("Store connection failed after %d attempts", attempt)
                raise

    app.state.store = store
    try:
        yield
    finally:
        _logger.info(f"Shutting down {settings.app_name}")
        store.close()
        app.state.store = None


# Create FastAPI application with enhanced configuration
app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=(
        f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
    ),
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(meals.router, prefix=settings.api_prefix)
app.include_router(upcoming_meals.router, prefix=settings.api_prefix)
app.include_router(reviews.router, prefix=settings.api_prefix)
app.include_router(meal_requests.router, prefix=settings.api_prefix)
app.include_router(users.router, prefix=settings.api_prefix)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
