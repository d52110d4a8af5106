"""
Failure taxonomy for the sanitize pipeline.
Messages are client-safe: they come from record types or fixed text,
never from raw constructor exceptions.
"""
from enum import Enum


class SanitizeErrorCode(str, Enum):
    """Stable error codes for pipeline failures."""
    MISSING_BODY = "MISSING_BODY"
    VALIDATION_REJECTED = "VALIDATION_REJECTED"
    CONSTRUCTION_REJECTED = "CONSTRUCTION_REJECTED"
    NOT_FOUND = "NOT_FOUND"


class SanitizeError(Exception):
    """
    Base exception for pipeline failures.

    Attributes:
        error_code: Stable code for logging and response
        status_code: HTTP status code to return
        retryable: Whether the client should retry unchanged (never, for these)
        message: Client-safe message, surfaced verbatim
    """

    def __init__(
        self,
        error_code: SanitizeErrorCode,
        message: str = "Bad request",
        status_code: int = 400,
        retryable: bool = False
    ):
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SanitizeError):
            return NotImplemented
        return (
            self.error_code == other.error_code
            and self.status_code == other.status_code
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash((self.error_code, self.status_code, self.message))


class MissingBodyError(SanitizeError):
    """Raised when the request has no JSON object body."""

    def __init__(self, message: str = "Bad request"):
        super().__init__(
            error_code=SanitizeErrorCode.MISSING_BODY,
            message=message,
            status_code=400
        )


class ValidationRejected(SanitizeError):
    """Raised by pre_validate / post_validate hooks to reject input."""

    def __init__(self, reason: str):
        super().__init__(
            error_code=SanitizeErrorCode.VALIDATION_REJECTED,
            message=reason,
            status_code=400
        )


class ConstructionRejected(SanitizeError):
    """Raised when the record type cannot be built from the permitted mapping."""

    def __init__(self, reason: str = "Bad request"):
        super().__init__(
            error_code=SanitizeErrorCode.CONSTRUCTION_REJECTED,
            message=reason,
            status_code=400
        )


class NotFoundError(SanitizeError):
    """Raised when the record to patch does not exist in the store."""

    def __init__(self, message: str = "Not found"):
        super().__init__(
            error_code=SanitizeErrorCode.NOT_FOUND,
            message=message,
            status_code=404
        )
