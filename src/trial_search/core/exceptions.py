"""
Unified Exception Hierarchy for Clinical Trial Search.

Exception Hierarchy:
    TrialSearchError (base)
    ├── APIError
    │   ├── RateLimitError
    │   ├── NetworkError
    │   └── ServiceUnavailableError
    ├── ValidationError
    │   ├── InvalidQueryError
    │   └── InvalidParameterError
    ├── DataError
    │   ├── DataLoadError
    │   ├── NotFoundError
    │   └── ParseError
    └── ConfigurationError

The search engine itself raises none of these: absent fields degrade to
"no match". They cover corpus loading, the LLM collaborators and the
outer surfaces (MCP tools, HTTP API).
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    WARNING = auto()  # Recoverable, can continue
    ERROR = auto()  # Failed but can retry
    CRITICAL = auto()  # Cannot continue
    TRANSIENT = auto()  # Temporary, should retry automatically


class ErrorCategory(Enum):
    """Categories for error classification."""

    API = "api"
    VALIDATION = "validation"
    DATA = "data"
    CONFIGURATION = "config"
    NETWORK = "network"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Rich context for error messages."""

    tool_name: str | None = None
    operation: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    example: str | None = None
    retry_after: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def merged(self, **overrides: Any) -> ErrorContext:
        """Return a copy with the given fields replaced."""
        values = {
            "tool_name": self.tool_name,
            "operation": self.operation,
            "input_value": self.input_value,
            "suggestion": self.suggestion,
            "example": self.example,
            "retry_after": self.retry_after,
            "metadata": self.metadata,
        }
        values.update(overrides)
        return ErrorContext(**values)


class TrialSearchError(Exception):
    """
    Base exception for all Clinical Trial Search errors.

    Provides:
    - Structured error context
    - Severity classification
    - Retry guidance
    - Agent-friendly formatting
    """

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.API,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "category": self.category.value,
            "severity": self.severity.name.lower(),
            "retryable": self.retryable,
        }
        if self.context.tool_name:
            result["tool"] = self.context.tool_name
        if self.context.suggestion:
            result["suggestion"] = self.context.suggestion
        if self.context.example:
            result["example"] = self.context.example
        if self.context.retry_after:
            result["retry_after_seconds"] = self.context.retry_after
        return result

    def to_agent_message(self) -> str:
        """Format for Agent consumption (Markdown)."""
        parts = [f"❌ **Error**: {self}"]

        if self.context.suggestion:
            parts.append(f"💡 **Suggestion**: {self.context.suggestion}")
        if self.context.example:
            parts.append(f"📝 **Example**: `{self.context.example}`")
        if self.retryable:
            if self.context.retry_after:
                parts.append(f"🔄 Retry after {self.context.retry_after:.1f} seconds")
            else:
                parts.append("🔄 This error is retryable")

        return "\n".join(parts)


# =============================================================================
# API Errors (LLM collaborators)
# =============================================================================


class APIError(TrialSearchError):
    """Base class for errors talking to the language-model service."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.API,
            retryable=retryable,
        )


class RateLimitError(APIError):
    """Raised when the LLM provider rejects a request with HTTP 429."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        *,
        retry_after: float = 1.0,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(retry_after=retry_after)
        if not ctx.suggestion:
            ctx = ctx.merged(suggestion="Wait and retry the request")
        super().__init__(message, context=ctx, retryable=True)
        self.severity = ErrorSeverity.TRANSIENT


class NetworkError(APIError):
    """Raised for network connectivity issues and timeouts."""

    def __init__(
        self,
        message: str = "Network connection failed",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context, retryable=True)
        self.category = ErrorCategory.NETWORK


class ServiceUnavailableError(APIError):
    """Raised when the LLM provider answers with a 5xx status."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        service: str = "LLM",
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(f"{service}: {message}", context=context, retryable=True)
        self.severity = ErrorSeverity.TRANSIENT


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(TrialSearchError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.VALIDATION,
            retryable=False,
        )


class InvalidQueryError(ValidationError):
    """Raised when a chat message or query payload cannot be used."""

    def __init__(
        self,
        query: Any,
        reason: str = "Query cannot be empty",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(input_value=query)
        if not ctx.suggestion:
            ctx = ctx.merged(suggestion="Provide a question about clinical trials")
        if not ctx.example:
            ctx = ctx.merged(example='ask_trials(message="recruiting phase 3 lung cancer trials")')
        super().__init__(f"Invalid query: {reason}", context=ctx)


class InvalidParameterError(ValidationError):
    """Raised when a parameter value is invalid."""

    def __init__(
        self,
        param_name: str,
        value: Any,
        expected: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(input_value=value, suggestion=f"Expected {expected}")
        super().__init__(
            f"Invalid parameter '{param_name}': {value!r} (expected {expected})",
            context=ctx,
        )


# =============================================================================
# Data Errors
# =============================================================================


class DataError(TrialSearchError):
    """Base class for data-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=severity,
            category=ErrorCategory.DATA,
            retryable=False,
        )


class DataLoadError(DataError):
    """
    Raised when the trial corpus cannot be loaded.

    Always fatal: a process must not serve queries against an empty or
    partial corpus.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        full_msg = f"Failed to load trial data: {message}"
        if source:
            full_msg = f"Failed to load trial data from {source}: {message}"
        ctx = (context or ErrorContext()).merged(input_value=source)
        if not ctx.suggestion:
            ctx = ctx.merged(suggestion="Check TRIAL_DATA_PATH points to a JSON array of studies")
        super().__init__(full_msg, context=ctx, severity=ErrorSeverity.CRITICAL)
        self.source = source


class NotFoundError(DataError):
    """Raised when requested data is not found."""

    def __init__(
        self,
        resource: str,
        identifier: str | None = None,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        msg = f"{resource} not found"
        if identifier:
            msg = f"{resource} not found: {identifier}"

        ctx = (context or ErrorContext()).merged(input_value=identifier)
        if not ctx.suggestion:
            ctx = ctx.merged(suggestion="Check the identifier and try again")
        super().__init__(msg, context=ctx)


class ParseError(DataError):
    """Raised when a collaborator response cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        full_msg = f"Parse error: {message}"
        if source:
            full_msg = f"Parse error ({source}): {message}"
        super().__init__(full_msg, context=context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(TrialSearchError):
    """Raised for configuration-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            retryable=False,
        )


# =============================================================================
# Retry helpers
# =============================================================================


def is_retryable_error(error: Exception) -> bool:
    """Check if an error should be retried."""
    if isinstance(error, TrialSearchError):
        return error.retryable

    error_str = str(error).lower()
    transient_patterns = [
        "rate limit",
        "too many requests",
        "temporarily unavailable",
        "service unavailable",
        "connection reset",
        "timeout",
    ]
    return any(pattern in error_str for pattern in transient_patterns)


def get_retry_delay(error: Exception, attempt: int) -> float:
    """
    Calculate retry delay with exponential backoff.

    Args:
        error: The exception that occurred
        attempt: Current attempt number (0-based)

    Returns:
        Delay in seconds before next retry
    """
    base_delay = 1.0

    if isinstance(error, TrialSearchError) and error.context.retry_after:
        base_delay = error.context.retry_after

    delay = base_delay * (2**attempt)
    jitter = random.uniform(0, 0.1 * delay)

    # Cap at 30 seconds
    return min(delay + jitter, 30.0)
