"""Tests for exceptions.py: exception hierarchy and retry helpers."""

from trial_search.core.exceptions import (
    APIError,
    ConfigurationError,
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
    TrialSearchError,
    ValidationError,
    get_retry_delay,
    is_retryable_error,
)


class TestTrialSearchError:
    def test_basic_creation(self):
        e = TrialSearchError("test error")
        assert str(e) == "test error"
        assert e.severity == ErrorSeverity.ERROR
        assert e.category == ErrorCategory.API
        assert e.retryable is False

    def test_to_dict(self):
        ctx = ErrorContext(tool_name="t", suggestion="s", example="e", retry_after=5.0)
        e = TrialSearchError("fail", context=ctx, retryable=True)
        d = e.to_dict()
        assert d["error"] == "fail"
        assert d["tool"] == "t"
        assert d["suggestion"] == "s"
        assert d["example"] == "e"
        assert d["retry_after_seconds"] == 5.0
        assert d["retryable"] is True
        assert d["severity"] == "error"

    def test_to_dict_minimal(self):
        d = TrialSearchError("fail").to_dict()
        assert "tool" not in d
        assert "suggestion" not in d

    def test_to_agent_message(self):
        ctx = ErrorContext(suggestion="fix it", example="do_it()")
        msg = TrialSearchError("fail", context=ctx, retryable=True).to_agent_message()
        assert "fail" in msg
        assert "fix it" in msg
        assert "`do_it()`" in msg
        assert "retryable" in msg

    def test_to_agent_message_retry_after(self):
        msg = RateLimitError(retry_after=2.5).to_agent_message()
        assert "Retry after 2.5 seconds" in msg

    def test_context_merged_keeps_other_fields(self):
        ctx = ErrorContext(tool_name="t", suggestion="s")
        merged = ctx.merged(suggestion="other")
        assert merged.tool_name == "t"
        assert merged.suggestion == "other"
        assert ctx.suggestion == "s"


class TestAPIErrors:
    def test_api_error_retryable_by_default(self):
        assert APIError("x").retryable is True
        assert APIError("x", retryable=False).retryable is False

    def test_rate_limit(self):
        e = RateLimitError(retry_after=3.0)
        assert isinstance(e, APIError)
        assert e.context.retry_after == 3.0
        assert e.severity == ErrorSeverity.TRANSIENT
        assert e.context.suggestion

    def test_network_error_category(self):
        e = NetworkError()
        assert e.category == ErrorCategory.NETWORK
        assert e.retryable is True

    def test_service_unavailable_prefix(self):
        e = ServiceUnavailableError("HTTP 503")
        assert str(e) == "LLM: HTTP 503"
        assert e.severity == ErrorSeverity.TRANSIENT


class TestValidationErrors:
    def test_invalid_query(self):
        e = InvalidQueryError("", "Message cannot be empty")
        assert isinstance(e, ValidationError)
        assert str(e) == "Invalid query: Message cannot be empty"
        assert e.severity == ErrorSeverity.WARNING
        assert e.category == ErrorCategory.VALIDATION
        assert e.context.example

    def test_invalid_parameter(self):
        e = InvalidParameterError("limit", -1, "a positive integer")
        assert "'limit'" in str(e)
        assert "-1" in str(e)
        assert e.context.suggestion == "Expected a positive integer"
        assert e.retryable is False


class TestDataErrors:
    def test_data_load_error_with_source(self):
        e = DataLoadError("file not found", source="/data/trials.json")
        assert isinstance(e, DataError)
        assert str(e) == "Failed to load trial data from /data/trials.json: file not found"
        assert e.source == "/data/trials.json"
        assert e.severity == ErrorSeverity.CRITICAL
        assert "TRIAL_DATA_PATH" in e.context.suggestion

    def test_data_load_error_without_source(self):
        e = DataLoadError("boom")
        assert str(e) == "Failed to load trial data: boom"
        assert e.source is None

    def test_not_found(self):
        assert str(NotFoundError("Trial", "NCT1")) == "Trial not found: NCT1"
        assert str(NotFoundError("Trial")) == "Trial not found"

    def test_parse_error(self):
        assert str(ParseError("bad json", source="llm")) == "Parse error (llm): bad json"
        assert ParseError("bad").category == ErrorCategory.DATA

    def test_configuration_error(self):
        e = ConfigurationError("no key")
        assert e.category == ErrorCategory.CONFIGURATION
        assert e.severity == ErrorSeverity.CRITICAL


class TestRetryHelpers:
    def test_is_retryable_for_hierarchy(self):
        assert is_retryable_error(RateLimitError()) is True
        assert is_retryable_error(InvalidQueryError("")) is False

    def test_is_retryable_by_message(self):
        assert is_retryable_error(RuntimeError("Connection reset by peer")) is True
        assert is_retryable_error(RuntimeError("something else")) is False

    def test_get_retry_delay_grows(self):
        first = get_retry_delay(NetworkError(), 0)
        third = get_retry_delay(NetworkError(), 2)
        assert 1.0 <= first <= 1.1
        assert 4.0 <= third <= 4.4

    def test_get_retry_delay_uses_retry_after(self):
        delay = get_retry_delay(RateLimitError(retry_after=5.0), 0)
        assert 5.0 <= delay <= 5.5

    def test_get_retry_delay_capped(self):
        assert get_retry_delay(NetworkError(), 10) == 30.0


class TestCorePackage:
    def test_reexports_hierarchy_and_retry(self):
        import trial_search.core as core
        from trial_search.core.async_utils import async_retry

        assert core.TrialSearchError is TrialSearchError
        assert core.DataLoadError is DataLoadError
        assert core.async_retry is async_retry
        assert set(core.__all__) >= {"TrialSearchError", "ParseError", "is_retryable_error", "async_retry"}
