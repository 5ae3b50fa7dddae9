"""
Shared utilities: exception hierarchy, async helpers, configuration.
"""

from .config import LookupConfig, get_config
from .exceptions import (
    ConfigurationError,
    DataError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    ImageLookupError,
    InputValidationError,
    NoResultsError,
    ParseError,
    ServiceUnavailableError,
    TokenNotFoundError,
    UpstreamError,
)

__all__ = [
    "ConfigurationError",
    "DataError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "ImageLookupError",
    "InputValidationError",
    "LookupConfig",
    "NoResultsError",
    "ParseError",
    "ServiceUnavailableError",
    "TokenNotFoundError",
    "UpstreamError",
    "get_config",
]
