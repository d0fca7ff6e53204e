"""
Error handling middleware for Catalog Admin.
Provides centralized exception handling and standardized error responses.
"""

import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...core.exceptions import (
    CatalogAdminError,
    CatalogServiceError,
    CategoryConflictError,
    CategoryNotFoundError,
    CategoryValidationError,
    DeleteAfterMoveError,
    PartialRelocationError,
    ProvisioningError,
)
from ...utils.logging import setup_catalog_admin_logging

logger = setup_catalog_admin_logging("catalog_admin_error_handler")

ERROR_STATUS_CODES = {
    CategoryNotFoundError: 404,
    CategoryValidationError: 422,
    CategoryConflictError: 409,
    PartialRelocationError: 409,
    ProvisioningError: 502,
    DeleteAfterMoveError: 502,
    CatalogServiceError: 502,
}


def status_code_for(exc: CatalogAdminError) -> int:
    for klass in type(exc).__mro__:
        if klass in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[klass]
    return 500


class CatalogAdminErrorHandler:
    """
    Centralized error handling for Catalog Admin.

    Deletion workflow errors keep their details in the response so the
    admin UI can explain what already happened on the catalog.
    """

    @staticmethod
    def setup_error_handlers(app: FastAPI) -> None:
        """Setup error handlers for the FastAPI application."""

        @app.exception_handler(CatalogAdminError)
        async def catalog_admin_error_handler(  # type: ignore
            request: Request, exc: CatalogAdminError
        ) -> JSONResponse:
            """Handle deletion workflow and catalog service errors."""

            return CatalogAdminErrorHandler._create_error_response(
                request=request,
                status_code=status_code_for(exc),
                error_type=exc.error_type,
                message=exc.message,
                details=exc.details,
            )

        @app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(  # type: ignore
            request: Request, exc: StarletteHTTPException
        ) -> JSONResponse:
            """Handle HTTP exceptions."""

            return CatalogAdminErrorHandler._create_error_response(
                request=request,
                status_code=exc.status_code,
                error_type="http_error",
                message=str(exc.detail),
                details={"path": request.url.path, "method": request.method},
            )

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(  # type: ignore
            request: Request, exc: RequestValidationError
        ) -> JSONResponse:
            """Handle request validation errors."""

            error_details: list[dict[str, str]] = []
            for error in exc.errors():
                error_details.append(
                    {
                        "field": ".".join(str(loc) for loc in error["loc"]),
                        "message": error["msg"],
                        "type": error["type"],
                    }
                )

            return CatalogAdminErrorHandler._create_error_response(
                request=request,
                status_code=422,
                error_type="validation_error",
                message="Request validation failed",
                details={"validation_errors": error_details},
            )

        @app.exception_handler(ValidationError)
        async def pydantic_validation_exception_handler(  # type: ignore
            request: Request, exc: ValidationError
        ) -> JSONResponse:
            """Handle Pydantic validation errors, e.g. malformed catalog payloads."""

            error_details: list[dict[str, str]] = []
            for error in exc.errors():
                error_details.append(
                    {
                        "field": ".".join(str(loc) for loc in error["loc"]),
                        "message": error["msg"],
                        "type": error["type"],
                    }
                )

            return CatalogAdminErrorHandler._create_error_response(
                request=request,
                status_code=400,
                error_type="data_validation_error",
                message="Data validation failed",
                details={"validation_errors": error_details},
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(  # type: ignore
            request: Request, exc: Exception
        ) -> JSONResponse:
            """Handle all uncaught exceptions."""

            logger.error(
                "Unhandled exception occurred",
                extra={
                    "correlation_id": getattr(
                        request.state, "correlation_id", "unknown"
                    ),
                    "path": request.url.path,
                    "method": request.method,
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                    "traceback": traceback.format_exc(),
                    "event_type": "unhandled_exception",
                },
                exc_info=True,
            )

            return CatalogAdminErrorHandler._create_error_response(
                request=request,
                status_code=500,
                error_type="internal_server_error",
                message="An internal server error occurred",
                details={"exception_type": type(exc).__name__},
            )

    @staticmethod
    def _create_error_response(
        request: Request,
        status_code: int,
        error_type: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""

        correlation_id = getattr(request.state, "correlation_id", "unknown")

        error_response: Dict[str, Any] = {
            "error": {
                "type": error_type,
                "message": message,
                "correlation_id": correlation_id,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "path": request.url.path,
                "method": request.method,
            }
        }

        if details:
            error_response["error"]["details"] = details

        if status_code < 500:
            logger.warning(
                f"Client error: {error_type}",
                extra={
                    "correlation_id": correlation_id,
                    "status_code": status_code,
                    "error_type": error_type,
                    "path": request.url.path,
                    "method": request.method,
                    "event_type": "client_error",
                },
            )
        else:
            logger.error(
                f"Server error: {error_type}",
                extra={
                    "correlation_id": correlation_id,
                    "status_code": status_code,
                    "error_type": error_type,
                    "path": request.url.path,
                    "method": request.method,
                    "event_type": "server_error",
                },
            )

        return JSONResponse(status_code=status_code, content=error_response)


def setup_catalog_admin_error_handling(app: FastAPI) -> None:
    """Setup error handling middleware for Catalog Admin."""

    error_handler = CatalogAdminErrorHandler()
    error_handler.setup_error_handlers(app)
