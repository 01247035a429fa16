"""
FastAPI Application Factory.

Usage:
    # Development
    uvicorn api.app:create_app --factory --reload

    # Production
    uvicorn api.app:app --host 0.0.0.0 --port 8080 --workers 2

    # Or use the convenience function
    from api.app import create_app
    app = create_app()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from core.logging import configure_logging_from_settings, get_logger
from core.middleware import RequestTracingMiddleware
from search.catalog import get_catalog


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Runs on startup:
    - Initialize logging
    - Warm the resource catalog

    Runs on shutdown:
    - Log shutdown
    """
    settings = get_settings()
    configure_logging_from_settings(settings)

    catalog = get_catalog()
    logger.info(
        "Starting design directory search API",
        environment=settings.environment,
        port=settings.port,
        catalog_size=len(catalog),
        query_parser_configured=settings.query_parser_configured,
    )

    yield  # Application is running

    logger.info("Shutting down design directory search API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title="Design Directory Search API",
        description="""
        Semantic search over a curated directory of design tools and resources.

        ## Main Endpoints

        - `POST /api/search` - Hybrid search (local ranking + LLM query parsing)
        - `POST /api/search/parse-query` - Parse a query into filters and concepts
        - `GET /api/search/suggestions` - Completion suggestions

        ## Health Checks

        - `/health` - Basic health check
        - `/health/detailed` - Catalog and parser status
        - `/ready` - Kubernetes readiness probe
        - `/live` - Kubernetes liveness probe
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # =========================================================================
    # Middleware (order matters - first added = outermost)
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracing (adds X-Request-ID, logs timing)
    app.add_middleware(RequestTracingMiddleware)

    # =========================================================================
    # Routes
    # =========================================================================

    from api.routes.health import router as health_router
    app.include_router(health_router, tags=["Health"])

    from api.routes.search import router as search_router
    app.include_router(search_router)

    return app


# Create default app instance for uvicorn
# Usage: uvicorn api.app:app
app = create_app()
