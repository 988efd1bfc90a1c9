"""
Info API — Custom Exception Hierarchy
======================================

What:  Application-specific exceptions, each mapped to one HTTP status by the
       global handlers registered in main.py.
Why:   Handlers stay free of try/except; they raise and let the boundary
       produce a consistent response.

Exception Hierarchy:
    InfoApiError (base)
    ├── ValidationError              → 400 Bad Request
    │   └── BadRequestAlertError     → 400 Bad Request + X-{app}-error headers
    ├── NotFoundError                → 404 Not Found (empty body)
    └── UnsupportedMediaTypeError    → 415 Unsupported Media Type

Storage faults are NOT wrapped here: SQLAlchemyError propagates to its own
handler and becomes a generic 500.
"""

from typing import Any, Dict, Optional


class InfoApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where a handler chooses to)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(InfoApiError):
    """
    Raised when client input breaks a business rule that schema validation
    cannot express (for example an unknown sort property).

    HTTP: 400 Bad Request. Schema-level errors stay FastAPI's 422.
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


class BadRequestAlertError(ValidationError):
    """
    Raised when a client-supplied identifier violates the create/update rules.

    Carries the entity name and a machine-readable error key:

        idexists    a new entity already has an id
        idnull      an update payload has no id
        idinvalid   the payload id differs from the path id
        idnotfound  no stored entity has that id

    The handler echoes both as X-{app}-error / X-{app}-params headers.
    """

    def __init__(self, message: str, entity_name: str, error_key: str):
        super().__init__(
            message=message,
            context={"entity_name": entity_name, "error_key": error_key},
        )
        self.entity_name = entity_name
        self.error_key = error_key


class NotFoundError(InfoApiError):
    """
    Raised when a requested entity does not exist.

    HTTP: 404 Not Found with an empty body.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class UnsupportedMediaTypeError(InfoApiError):
    """Raised when a request body arrives with a content type the route does not consume."""

    def __init__(self, content_type: Optional[str], supported: str):
        super().__init__(
            message=f"Content type '{content_type or ''}' is not supported. Use '{supported}'.",
            context={"content_type": content_type, "supported": supported},
        )
        self.supported = supported
