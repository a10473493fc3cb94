"""
Chat Completions Client - OpenAI-compatible LLM API

Used by the assistant for query extraction and result summarization.
Defaults to Groq's OpenAI-compatible endpoint; any provider exposing
``POST {base_url}/chat/completions`` works.

Errors are mapped onto the shared exception hierarchy so that retries
are driven by ``is_retryable_error``:
    - 429          -> RateLimitError (honours Retry-After)
    - 5xx          -> ServiceUnavailableError
    - timeout/conn -> NetworkError
    - other 4xx    -> APIError (not retryable)
    - bad payload  -> ParseError

Usage:
    >>> async with ChatCompletionClient(api_key="...") as llm:
    ...     text = await llm.complete([{"role": "user", "content": "Hello"}])
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from trial_search.core.async_utils import async_retry
from trial_search.core.exceptions import (
    APIError,
    ConfigurationError,
    ErrorContext,
    NetworkError,
    ParseError,
    RateLimitError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TIMEOUT = 30.0
MAX_ATTEMPTS = 3


def _retry_after(response: httpx.Response) -> float:
    try:
        return max(float(response.headers.get("retry-after", "1")), 0.0)
    except ValueError:
        return 1.0


class ChatCompletionClient:
    """Async client for an OpenAI-compatible chat-completions API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize client.

        Args:
            api_key: Bearer token for the provider
            base_url: API root, without the ``/chat/completions`` suffix
            model: Model name sent with every request
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-init HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    @async_retry(max_attempts=MAX_ATTEMPTS)
    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """
        Request one completion and return its text ("" if the model sent none).

        Raises:
            ConfigurationError: If no API key is configured
            APIError: For provider/network failures (after retries)
            ParseError: If the response body is not a chat completion
        """
        if not self.api_key:
            raise ConfigurationError(
                "LLM API key is not configured",
                context=ErrorContext(suggestion="Set LLM_API_KEY (or GROQ_API_KEY)"),
            )

        payload: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        ctx = ErrorContext(operation="chat.completions", metadata={"model": self.model})
        try:
            response = await self.client.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.TimeoutException as e:
            raise NetworkError(f"LLM request timed out after {self.timeout}s", context=ctx) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"LLM request failed: {e}", context=ctx) from e

        if response.status_code == 429:
            raise RateLimitError(retry_after=_retry_after(response), context=ctx)
        if response.status_code >= 500:
            raise ServiceUnavailableError(f"HTTP {response.status_code}", context=ctx)
        if response.status_code >= 400:
            raise APIError(f"LLM request rejected: HTTP {response.status_code}", context=ctx, retryable=False)

        try:
            data = response.json()
            content = data["choices"][0]["message"].get("content")
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise ParseError(f"unexpected chat completion payload: {e}", source="llm") from e

        return content or ""

    async def close(self):
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()
