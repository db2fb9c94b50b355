"""
Hotel Listings API: Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for each failure the API can report.
Why:   Services raise one of these; global exception handlers (registered in
       main.py) turn them into JSON responses with the right HTTP status code.
How:   Each exception carries a client-safe message and an optional context
       dict that is logged but only returned where explicitly allowed.

Exception Hierarchy:
    HotelApiError (base)
    ├── ValidationError              → 400 Bad Request
    │   ├── MissingFieldsError       → "All fields are required"
    │   ├── InvalidTypesError        → "Invalid data types"
    │   └── InvalidRoomShapeError    → "Invalid room data structure"
    ├── NotFoundError                → 404 Not Found
    ├── StorageError                 → 500 Internal Server Error
    │   ├── StorageReadError
    │   └── StorageWriteError
    └── UploadError                  → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class HotelApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HotelApiError):
    """
    Raised when a hotel payload fails validation.

    HTTP: 400 Bad Request. The three subclasses below mirror the three checks
    the validator performs, in order; the first failing check wins.
    """

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


class MissingFieldsError(ValidationError):
    """A required hotel field is absent (or falsy, for non-coordinate fields)."""

    def __init__(self, field: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="All fields are required", field=field, context=context)


class InvalidTypesError(ValidationError):
    """A hotel field is present but has the wrong JSON type."""

    def __init__(self, field: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid data types", field=field, context=context)


class InvalidRoomShapeError(ValidationError):
    """An entry of `rooms` is not an object with the expected typed keys."""

    def __init__(self, index: Optional[int] = None, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if index is not None:
            ctx["room_index"] = index
        super().__init__(message="Invalid room data structure", field="rooms", context=ctx)


class NotFoundError(HotelApiError):
    """
    Raised when a requested resource does not exist.

    What:    Lookup by identifier found nothing (hotel id, uploaded file path).
    HTTP:    404 Not Found

    The message is always "<Resource> not found"; the identifier is kept in
    the context so it shows up in logs without being echoed to clients.
    """

    def __init__(
        self,
        resource: str = "Hotel",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)


class StorageError(HotelApiError):
    """
    Raised when the record store cannot be read or written.

    HTTP: 500 Internal Server Error. The client gets a generic message; the
    file path and OS error are logged server-side.
    """

    def __init__(
        self,
        message: str = "The hotel record store is unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageReadError(StorageError):
    """Record file missing, unreadable, or not a JSON array of hotels."""

    def __init__(
        self,
        message: str = "Could not read hotel records",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageWriteError(StorageError):
    """Record file could not be overwritten (permissions, disk full, ...)."""

    def __init__(
        self,
        message: str = "Could not save hotel records",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UploadError(HotelApiError):
    """
    Raised by the upload layer before any hotel lookup happens.

    When:  Too many files, files under an unexpected form field, an unparseable
           multipart body, or a failure writing bytes to the upload directory.
    HTTP:  500 Internal Server Error, body {"message": "Error uploading images", "error": ...}
    """

    def __init__(
        self,
        reason: str = "Upload failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message="Error uploading images", context=ctx)
        self.reason = reason
