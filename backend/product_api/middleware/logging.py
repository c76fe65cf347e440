"""
Product API — Request Logging Middleware
==========================================

What:  One access-log line per product request: the operation, the product
       id it addressed, the outcome, duration and request ID.
How:   After the handler runs, the matched route (e.g. "PUT
       /products/{product_id}") is mapped to an operation name and the
       outcome is read off the status code. Log level follows the outcome,
       so storage failures show up as ERROR and unknown ids as WARNING.

Example line:
    update product=3 -> not_found 404 1.2ms [a1b2c3d4]

Request bodies are never logged.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from product_api.middleware.request_id import request_id_var

logger = logging.getLogger("product_api.access")

# Probe and documentation traffic, not worth a log line
_SKIP_PATHS = {"/health", "/api-docs", "/redoc", "/openapi.json"}

_OPERATIONS = {
    "POST": "create",
    "GET": "retrieve",
    "PUT": "update",
    "DELETE": "delete",
}

_OUTCOMES = {
    400: ("invalid", logging.WARNING),
    404: ("not_found", logging.WARNING),
}


def describe_operation(request: Request) -> str:
    """Name the product operation a request hit, or fall back to METHOD path."""
    route = request.scope.get("route")
    template: Optional[str] = getattr(route, "path", None) or request.url.path
    if template.startswith("/products"):
        return _OPERATIONS.get(request.method, request.method.lower())
    return f"{request.method} {request.url.path}"


def describe_outcome(status: int) -> tuple:
    """Map a status code to (outcome label, log level)."""
    if status >= 500:
        return "storage_error", logging.ERROR
    if status in _OUTCOMES:
        return _OUTCOMES[status]
    if status >= 400:
        return "client_error", logging.WARNING
    return "ok", logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs operation, product id, outcome and duration for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # Routing fills scope["route"] and scope["path_params"] in place
        operation = describe_operation(request)
        product_id = request.path_params.get("product_id", "-")
        outcome, level = describe_outcome(response.status_code)
        rid = request_id_var.get("")

        logger.log(
            level,
            "%s product=%s -> %s %d %.1fms [%s]",
            operation,
            product_id,
            outcome,
            response.status_code,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "operation": operation,
                "product_id": product_id,
                "outcome": outcome,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
