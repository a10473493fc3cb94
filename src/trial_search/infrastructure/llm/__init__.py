"""OpenAI-compatible language-model client."""

from .client import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT, ChatCompletionClient

__all__ = ["DEFAULT_BASE_URL", "DEFAULT_MODEL", "DEFAULT_TIMEOUT", "ChatCompletionClient"]
