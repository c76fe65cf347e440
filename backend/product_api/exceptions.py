"""
Product API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the three ways a request can fail.
Why:   Services raise typed errors; global handlers registered in main.py
       turn them into fixed JSON bodies with the right status code.
How:   Each exception carries a client-safe message and a context dict that
       is logged but never returned.

Exception Hierarchy:
    ProductAPIError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── StorageError      → 500 Internal Server Error (message per operation)
"""

from typing import Any, Dict, Optional


class ProductAPIError(Exception):
    """
    Base exception for all Product API errors.

    Attributes:
        message:  Client-facing error text (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ProductAPIError):
    """Raised when the request body is missing a field or has the wrong type."""

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid product data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ProductAPIError):
    """
    Raised when no product exists for the requested id.

    SQLAlchemy returns None for missing rows; the service converts that into
    this exception so the 404 comes from the global handler.
    """

    status_code = 404

    def __init__(
        self,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message="Product not found", context=ctx)


class StorageError(ProductAPIError):
    """
    Raised when the storage backend fails during an operation.

    The message is the fixed text for the operation (see STORAGE_ERROR_MESSAGES);
    the original exception type is kept in context for the server log only.
    """

    status_code = 500

    def __init__(
        self,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.operation = operation
        message = STORAGE_ERROR_MESSAGES.get(operation, "Internal server error")
        ctx = context or {}
        ctx["operation"] = operation
        super().__init__(message=message, context=ctx)


STORAGE_ERROR_MESSAGES: Dict[str, str] = {
    "create": "Unable to create product",
    "retrieve": "Unable to retrieve product",
    "update": "Unable to update product",
    "delete": "Unable to delete product",
}


def classify_storage_error(operation: str, exc: BaseException) -> ProductAPIError:
    """
    Map an exception raised while talking to storage onto the API taxonomy.

    Application errors (NotFoundError raised inside a storage block, for
    example) pass through unchanged. Anything else becomes a StorageError
    carrying the operation's fixed message.
    """
    if isinstance(exc, ProductAPIError):
        return exc
    return StorageError(
        operation=operation,
        context={"original_error": type(exc).__name__, "detail": str(exc)},
    )
