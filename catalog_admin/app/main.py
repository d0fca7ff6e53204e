"""
Catalog Admin FastAPI Application
=================================

Main application entry point for the catalog admin backend.
Exposes the category deletion and product relocation workflow on top of the
remote catalog service.
"""

import time
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.categories import router as categories_router
from .api.v1.health import router as health_router
from .clients.catalog_client import CatalogApiClient
from .core.settings import get_settings
from .middleware.error.error_handler import setup_catalog_admin_error_handling
from .middleware.logging.request_logging import setup_request_logging_middleware
from .utils.logging import setup_catalog_admin_logging

settings = get_settings()
enable_file_logging = settings.ENABLE_FILE_LOGGING or settings.ENVIRONMENT.lower() in [
    "production",
    "staging",
]

logger = setup_catalog_admin_logging(
    "catalog_admin",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=enable_file_logging,
)


# Lifespan management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup and shutdown."""
    startup_start = time.time()

    app.state.catalog_client = CatalogApiClient(
        settings.CATALOG_API_BASE_URL,
        timeout=settings.REQUEST_TIMEOUT,
        token=settings.CATALOG_API_TOKEN,
    )

    logger.info(
        "Catalog admin started successfully",
        extra={
            "environment": settings.ENVIRONMENT,
            "debug_mode": settings.DEBUG,
            "catalog_api_url": settings.CATALOG_API_BASE_URL,
            "file_logging_enabled": enable_file_logging,
            "service_version": settings.APP_VERSION,
            "total_startup_duration_ms": int((time.time() - startup_start) * 1000),
        },
    )

    yield

    await app.state.catalog_client.close()
    logger.info("Catalog admin shutdown completed")


# Application factory
def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    _setup_middleware(app)
    _setup_cors(app)
    _setup_routers(app)

    return app


def _setup_middleware(app: FastAPI) -> None:
    """Configure middleware components."""
    if settings.ENABLE_ACCESS_LOGS:
        setup_request_logging_middleware(app)
        logger.info("Request logging middleware configured")

    setup_catalog_admin_error_handling(app)
    logger.info("Error handling configured")


def _setup_cors(app: FastAPI) -> None:
    """Configure CORS settings with logging."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )

    logger.info(
        "CORS middleware configured",
        extra={
            "allowed_origins": len(settings.CORS_ORIGINS),
            "credentials_allowed": settings.CORS_CREDENTIALS,
        },
    )


def _setup_routers(app: FastAPI) -> None:
    """Configure all application routers."""
    routers_info: list[dict[str, Any]] = []

    app.include_router(health_router, tags=["Health"])
    routers_info.append({"router": "health", "prefix": "", "tags": ["Health"]})

    app.include_router(
        categories_router, prefix="/api/v1", tags=["Category Deletion"]
    )
    routers_info.append(
        {"router": "categories", "prefix": "/api/v1", "tags": ["Category Deletion"]}
    )

    logger.info(
        "API routes configured",
        extra={"total_routers": len(routers_info), "routers": routers_info},
    )


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(  # type: ignore
        "catalog_admin.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=False,
    )
