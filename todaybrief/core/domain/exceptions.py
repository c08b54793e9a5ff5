"""Base domain exceptions.

Every domain error derives from DomainException. Subclasses pick their HTTP
response through the ``http_status_code`` and ``error_code`` class attributes,
so modules can add errors without touching the core handlers.
"""

from fastapi import status


class DomainException(Exception):
    """Base exception for all domain errors."""

    http_status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "A domain error occurred"):
        self.message = message
        super().__init__(self.message)


class EntityNotFoundError(DomainException):
    """Raised when an entity is not found."""

    http_status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: str | None = None):
        message = f"{entity_type} not found"
        if entity_id:
            message = f"{entity_type} with id '{entity_id}' not found"
        super().__init__(message)


class ValidationError(DomainException):
    """Raised when request data is missing or malformed."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class GenerationFailedError(DomainException):
    """The generation service call or the decoding of its output failed."""

    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "GENERATION_FAILED"

    def __init__(self, message: str = "Text generation failed"):
        super().__init__(message)


class UpstreamAuthError(DomainException):
    """The third-party OAuth exchange or message send failed."""

    http_status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "UPSTREAM_AUTH_ERROR"


class PersistenceError(DomainException):
    """A database call failed."""

    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "PERSISTENCE_ERROR"

    def __init__(self, message: str = "A database error occurred"):
        super().__init__(message)
