"""
Inventory Service — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": message}` bodies with the matching status code.
Who:   Raised by the store, the photo storage service, and route helpers.

Exception Hierarchy:
    InventoryServiceError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── UnsupportedMethodError   → 405 Method Not Allowed (empty body)
    └── FileStorageError         → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class InventoryServiceError(Exception):
    """
    Base exception for all inventory service errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(InventoryServiceError):
    """
    Raised when client input fails a presence or type check.

    When:    Missing/blank `inventory_name`, missing photo upload, malformed
             numeric id, unparseable JSON body.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(InventoryServiceError):
    """
    Raised when a requested item (or its photo) does not exist.

    The message is the short client-facing text ("not found",
    "photo not found"); the resource and id go into the context for logs.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str = "not found",
        resource: str = "item",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class UnsupportedMethodError(InventoryServiceError):
    """
    Raised when a known resource path is requested with a verb it does not serve.

    HTTP:    405 Method Not Allowed, empty body, `Allow` header preserved.
    """

    status_code = 405

    def __init__(
        self,
        method: str,
        path: str,
        allowed: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update({"method": method, "path": path})
        super().__init__(message=f"{method} is not allowed on {path}", context=ctx)
        self.method = method
        self.path = path
        self.allowed = allowed


class FileStorageError(InventoryServiceError):
    """
    Raised when writing an uploaded photo to the cache directory fails.

    When:    Disk full, permission denied, cache directory removed.
    HTTP:    500 Internal Server Error

    The OS error and path are kept in context for the server log; the client
    only sees the generic message.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Failed to save uploaded photo",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
