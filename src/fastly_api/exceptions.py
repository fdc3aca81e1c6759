"""Fastly API exceptions.

Custom exceptions for Fastly API operations with detailed error context.
"""

from typing import Any


class FastlyAPIError(Exception):
    """Base exception for Fastly API errors.

    Attributes:
        message: Error message
        code: HTTP status code (if available)
        errors: List of error details from the Fastly response
        response: Raw response data (if available)
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
        response: dict[str, Any] | None = None,
    ) -> None:
        """Initialize FastlyAPIError.

        Args:
            message: Error message
            code: HTTP status code
            errors: List of error details
            response: Raw response data
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.errors = errors or []
        self.response = response

    def __str__(self) -> str:
        """Return string representation."""
        parts = [self.message]
        if self.code:
            parts.append(f"(code: {self.code})")
        if self.errors:
            error_msgs = [
                e.get("detail") or e.get("title") or e.get("message") or str(e)
                for e in self.errors
            ]
            parts.append(f"Details: {'; '.join(error_msgs)}")
        return " ".join(parts)


class FastlyAuthError(FastlyAPIError):
    """Authentication or authorization error.

    Raised when the API key is invalid, expired, or lacks required permissions.
    """


class FastlyRateLimitError(FastlyAPIError):
    """Rate limit exceeded error.

    Attributes:
        retry_after: Seconds to wait before retrying (if provided)
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class FastlyNotFoundError(FastlyAPIError):
    """Resource not found error.

    Raised when a requested resource (service, WAF, gzip rule) doesn't exist.

    Attributes:
        resource_type: Type of resource not found
        resource_id: ID of the missing resource
    """

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize not found error.

        Args:
            message: Error message
            resource_type: Type of resource (e.g., "waf", "gzip")
            resource_id: ID of the missing resource
            **kwargs: Additional arguments for base class
        """
        super().__init__(message, **kwargs)
        self.resource_type = resource_type
        self.resource_id = resource_id


class FastlyValidationError(FastlyAPIError):
    """Validation error for invalid request data.

    Raised when request parameters fail Fastly's validation, or when a
    request is rejected locally before it is sent.

    Attributes:
        field: Field that failed validation (if known)
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Error message
            field: Field that failed validation
            **kwargs: Additional arguments for base class
        """
        super().__init__(message, **kwargs)
        self.field = field


class FastlyMissingFieldError(FastlyValidationError):
    """A required identifier was empty.

    Raised before any HTTP request is made.
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field '{field}'", field=field)


class FastlyConflictError(FastlyAPIError):
    """Conflict error.

    Raised when an operation conflicts with existing state,
    e.g., creating a gzip rule with a name already used in the version,
    or editing a locked service version.
    """


class FastlyDecodeError(FastlyAPIError):
    """Response body could not be decoded.

    Raised when a body is not JSON, or does not have the JSON:API shape
    expected for the requested resource type.
    """


class FastlyNotOKError(FastlyAPIError):
    """Fastly answered a delete with a status other than "ok"."""
