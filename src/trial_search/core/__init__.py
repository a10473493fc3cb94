"""
Core module for Clinical Trial Search.

Provides:
- Unified exception hierarchy
- Async retry decorator for the LLM collaborators
"""

from .async_utils import async_retry
from .exceptions import (
    # API errors
    APIError,
    # Configuration errors
    ConfigurationError,
    # Data errors
    DataError,
    DataLoadError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InvalidParameterError,
    InvalidQueryError,
    NetworkError,
    NotFoundError,
    ParseError,
    RateLimitError,
    ServiceUnavailableError,
    # Base
    TrialSearchError,
    # Validation errors
    ValidationError,
    # Utilities
    get_retry_delay,
    is_retryable_error,
)

__all__ = [
    # Exceptions
    "TrialSearchError",
    "ErrorContext",
    "ErrorSeverity",
    "ErrorCategory",
    "APIError",
    "RateLimitError",
    "NetworkError",
    "ServiceUnavailableError",
    "ValidationError",
    "InvalidQueryError",
    "InvalidParameterError",
    "DataError",
    "DataLoadError",
    "NotFoundError",
    "ParseError",
    "ConfigurationError",
    "is_retryable_error",
    "get_retry_delay",
    # Async utilities
    "async_retry",
]
