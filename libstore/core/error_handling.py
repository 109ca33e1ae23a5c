"""
Centralized error types and error response management.

This module defines the exceptions raised by the catalogue codec and the
standardized error responses the HTTP layer builds from them.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from libstore.core.logging import app_logger


class CatalogueStorageError(Exception):
    """Base class for catalogue encode/decode failures."""

    error_code = "CATALOGUE_STORAGE_ERROR"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class SerializationError(CatalogueStorageError):
    """Raised when an item cannot be written into the document."""

    error_code = "SERIALIZATION_ERROR"

    def __init__(self, detail: str, item: Any = None):
        super().__init__(detail)
        self.item = item


class DeserializationError(CatalogueStorageError):
    """Raised when a document, or one of its entries, cannot be decoded.

    ``missing_field`` names an absent top-level kind field (strict mode only).
    ``kind`` and ``index`` locate the offending array entry, and ``errors``
    carries the pydantic error list for that entry when there is one.
    """

    error_code = "DESERIALIZATION_ERROR"

    def __init__(
        self,
        detail: str,
        missing_field: Optional[str] = None,
        kind: Optional[str] = None,
        index: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(detail)
        self.missing_field = missing_field
        self.kind = kind
        self.index = index
        self.errors = errors or []

    def context(self) -> Dict[str, Any]:
        """Location of the failure, without empty entries."""
        context = {
            "missing_field": self.missing_field,
            "kind": self.kind,
            "index": self.index,
        }
        return {key: value for key, value in context.items() if value is not None}


class CorruptCatalogueError(CatalogueStorageError):
    """Raised when the stored document no longer decodes.

    Unlike ``DeserializationError`` on a submitted document, this is a fault
    of the service's own state, not of the request.
    """

    error_code = "CORRUPT_CATALOGUE"

    def __init__(self, detail: str, cause: DeserializationError):
        super().__init__(detail)
        self.cause = cause


class StandardErrorResponse(BaseModel):
    """Standardized error response schema."""
    model_config = ConfigDict(ser_json_timedelta='iso8601')

    success: bool = False
    error: str
    detail: Optional[str] = None  # Alias for 'error' for FastAPI compatibility
    error_code: Optional[str] = None
    details: Optional[Union[str, Dict[str, Any]]] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __init__(self, **data):
        super().__init__(**data)
        if self.detail is None:
            object.__setattr__(self, 'detail', self.error)


def create_error_response(
    request: Request,
    status_code: int,
    error: str,
    error_code: Optional[str] = None,
    details: Optional[Union[str, Dict[str, Any]]] = None
) -> JSONResponse:
    """Create standardized error response."""

    response_data = StandardErrorResponse(
        error=error,
        error_code=error_code,
        details=details
    )

    app_logger.error(
        f"API Error: {error}",
        extra={
            "status_code": status_code,
            "error_code": error_code,
            "path": request.url.path,
            "method": request.method,
        }
    )

    return JSONResponse(
        status_code=status_code,
        content=response_data.model_dump(mode='json')
    )


def handle_deserialization_error(
    request: Request,
    exc: DeserializationError
) -> JSONResponse:
    """Handle an undecodable catalogue document."""

    details: Dict[str, Any] = exc.context()
    if exc.errors:
        details["errors"] = [
            {
                "field": ".".join(str(loc) for loc in error.get("loc", [])),
                "message": error.get("msg", "Invalid value"),
            }
            for error in exc.errors
        ]

    return create_error_response(
        request=request,
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        error=exc.detail,
        error_code=exc.error_code,
        details=details or None
    )


def handle_corrupt_catalogue_error(
    request: Request,
    exc: CorruptCatalogueError
) -> JSONResponse:
    """Handle a stored catalogue that can no longer be read."""

    return create_error_response(
        request=request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=exc.detail,
        error_code=exc.error_code,
        details=exc.cause.context() or None
    )


def handle_serialization_error(
    request: Request,
    exc: SerializationError
) -> JSONResponse:
    """Handle a catalogue that could not be written out."""

    return create_error_response(
        request=request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=exc.detail,
        error_code=exc.error_code
    )
