"""Tests for fastly_api exceptions."""

import pytest
from fastly_api.exceptions import (
    FastlyAPIError,
    FastlyAuthError,
    FastlyConflictError,
    FastlyDecodeError,
    FastlyMissingFieldError,
    FastlyNotFoundError,
    FastlyNotOKError,
    FastlyRateLimitError,
    FastlyValidationError,
)


class TestFastlyAPIError:
    """Test suite for the base exception."""

    def test_message_only(self):
        """Test string form with only a message."""
        error = FastlyAPIError("Something failed")

        assert str(error) == "Something failed"
        assert error.code is None
        assert error.errors == []
        assert error.response is None

    def test_code_and_details(self):
        """Test string form with a code and error details."""
        error = FastlyAPIError(
            "Bad request",
            code=400,
            errors=[{"title": "Invalid", "detail": "name is blank"}, {"title": "Other"}],
        )

        assert str(error) == "Bad request (code: 400) Details: name is blank; Other"


class TestSubclasses:
    """Test suite for specialised exceptions."""

    @pytest.mark.parametrize(
        "error_class",
        [
            FastlyAuthError,
            FastlyConflictError,
            FastlyDecodeError,
            FastlyNotFoundError,
            FastlyNotOKError,
            FastlyValidationError,
        ],
    )
    def test_inherit_from_base(self, error_class):
        """Test that every exception can be caught as FastlyAPIError."""
        with pytest.raises(FastlyAPIError):
            raise error_class("failure")

    def test_rate_limit_retry_after(self):
        """Test rate limit error carries retry_after."""
        error = FastlyRateLimitError(retry_after=30, code=429)

        assert error.retry_after == 30
        assert error.message == "Rate limit exceeded"

    def test_not_found_context(self):
        """Test not found error carries resource context."""
        error = FastlyNotFoundError("missing", resource_type="gzip", resource_id="g1")

        assert error.resource_type == "gzip"
        assert error.resource_id == "g1"

    def test_missing_field(self):
        """Test missing field error names the field."""
        error = FastlyMissingFieldError("service_id")

        assert isinstance(error, FastlyValidationError)
        assert error.field == "service_id"
        assert "service_id" in str(error)
