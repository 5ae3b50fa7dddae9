"""
Unified Exception Hierarchy for Image Lookup.

Exception Hierarchy:
    ImageLookupError (base)
    ├── InputValidationError
    ├── UpstreamError
    │   ├── ServiceUnavailableError
    │   └── TokenNotFoundError
    ├── DataError
    │   ├── ParseError
    │   └── NoResultsError
    └── ConfigurationError

Every error carries a ``kind`` string. The gateway maps kinds to HTTP status
codes and flattens the error into a single message.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = auto()      # Caller mistake, nothing to retry
    ERROR = auto()        # Failed for this invocation
    CRITICAL = auto()     # Cannot continue
    TRANSIENT = auto()    # Temporary, a fresh attempt may succeed


class ErrorCategory(Enum):
    """Categories for error classification."""
    VALIDATION = "validation"
    UPSTREAM = "upstream"
    DATA = "data"
    CONFIGURATION = "config"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Rich context attached to an error."""
    operation: str | None = None
    input_value: Any = None
    service: str | None = None
    status_code: int | None = None
    cause: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class ImageLookupError(Exception):
    """
    Base exception for all image lookup errors.

    Provides:
    - A stable ``kind`` for mapping to responses
    - Structured error context
    - Severity classification and retry guidance
    """

    kind: str = "ImageLookupError"

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.UPSTREAM,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category
        self.retryable = retryable

    @property
    def cause(self) -> str | None:
        """Underlying transport or decoder message, if any."""
        return self.context.cause

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "kind": self.kind,
            "category": self.category.value,
            "severity": self.severity.name.lower(),
            "retryable": self.retryable,
        }
        if self.context.operation:
            result["operation"] = self.context.operation
        if self.context.status_code is not None:
            result["status_code"] = self.context.status_code
        if self.context.cause:
            result["cause"] = self.context.cause
        return result


# =============================================================================
# Validation Errors
# =============================================================================

class InputValidationError(ImageLookupError):
    """Raised when the caller's query is missing or malformed."""

    kind = "InputValidation"

    def __init__(
        self,
        message: str = 'Query parameter "q" is required.',
        *,
        value: Any = None,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext(operation="validate", input_value=value)
        super().__init__(
            message,
            context=ctx,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.VALIDATION,
            retryable=False,
        )


# =============================================================================
# Upstream Errors
# =============================================================================

class UpstreamError(ImageLookupError):
    """Base class for failures talking to the search provider."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.UPSTREAM,
            retryable=retryable,
        )


class ServiceUnavailableError(UpstreamError):
    """Raised on network-level failure or a non-success transport status."""

    kind = "ServiceUnavailable"

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        service: str = "duckduckgo.com",
        status_code: int | None = None,
        cause: str | None = None,
        operation: str | None = None,
    ) -> None:
        ctx = ErrorContext(
            operation=operation,
            service=service,
            status_code=status_code,
            cause=cause,
        )
        super().__init__(f"{service}: {message}", context=ctx, retryable=True)
        self.severity = ErrorSeverity.TRANSIENT


class TokenNotFoundError(UpstreamError):
    """Raised when a successful homepage response carries no session token."""

    kind = "TokenNotFound"

    def __init__(
        self,
        message: str = "Token Parsing Failed!",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context or ErrorContext(operation="token"),
            retryable=False,
        )


# =============================================================================
# Data Errors
# =============================================================================

class DataError(ImageLookupError):
    """Base class for data-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.DATA,
            retryable=False,
        )


class ParseError(DataError):
    """Raised when the search response cannot be decoded or has the wrong shape."""

    kind = "ParseFailure"

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        cause: str | None = None,
    ) -> None:
        full_msg = f"Parse error: {message}"
        if source:
            full_msg = f"Parse error ({source}): {message}"
        super().__init__(full_msg, context=ErrorContext(operation="parse", service=source, cause=cause))


class NoResultsError(DataError):
    """Raised when the result collection is absent or empty."""

    kind = "NoResults"

    def __init__(
        self,
        message: str = "No images found.",
        *,
        field_absent: bool = False,
    ) -> None:
        super().__init__(
            message,
            context=ErrorContext(operation="parse", metadata={"field_absent": field_absent}),
        )

    @property
    def field_absent(self) -> bool:
        """True when ``results`` was missing rather than empty."""
        return bool(self.context.metadata.get("field_absent"))


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(ImageLookupError):
    """Raised for configuration-related errors."""

    kind = "Configuration"

    def __init__(self, message: str) -> None:
        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            retryable=False,
        )


def is_retryable_error(error: Exception) -> bool:
    """Check if an error should be retried."""
    if isinstance(error, ImageLookupError):
        return error.retryable
    return False


def get_retry_delay(attempt: int, base_delay: float = 0.5) -> float:
    """
    Calculate retry delay with exponential backoff.

    Args:
        attempt: Current attempt number (0-based)
        base_delay: Delay before the first retry

    Returns:
        Delay in seconds before next retry
    """
    delay = base_delay * (2 ** attempt)
    jitter = random.uniform(0, 0.1 * delay)

    # Cap at 10 seconds
    return min(delay + jitter, 10.0)
