"""
Application DI Container (dependency-injector).

Owns the single CorpusStore instance and injects it into the search
engine; no module-level corpus state exists anywhere else.

Usage::

    from trial_search.container import ApplicationContainer, settings_from_env

    container = ApplicationContainer()
    container.config.from_dict(settings_from_env())

    store = container.corpus_store()
    store.load()                       # fail fast at startup
    engine = container.search_engine()

    # In tests, override any provider:
    container.corpus_store.override(providers.Object(CorpusStore.from_records(records)))
"""

from __future__ import annotations

import logging
import os
from typing import Any

from dependency_injector import containers, providers

from trial_search.application.assistant import QueryExtractor, ResultSummarizer, TrialAssistant
from trial_search.application.search import RelevanceWeights, TrialSearchEngine
from trial_search.core.exceptions import ConfigurationError
from trial_search.infrastructure.corpus import CorpusStore
from trial_search.infrastructure.llm import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT, ChatCompletionClient

logger = logging.getLogger(__name__)


def settings_from_env(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """
    Read container settings from environment variables.

    Variables:
        TRIAL_DATA_PATH: Corpus JSON file (default: packaged sample data)
        TRIAL_SEARCH_WEIGHTS: JSON object overriding relevance weights
        LLM_API_KEY / GROQ_API_KEY: Chat-completions API key
        LLM_BASE_URL, LLM_MODEL, LLM_TIMEOUT: Chat-completions endpoint settings
    """
    env = os.environ if environ is None else environ

    raw_timeout = env.get("LLM_TIMEOUT", "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError as e:
        raise ConfigurationError(f"LLM_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from e

    return {
        "data_path": env.get("TRIAL_DATA_PATH", "").strip() or None,
        "weights": RelevanceWeights.from_json(env.get("TRIAL_SEARCH_WEIGHTS")).to_dict(),
        "llm": {
            "api_key": (env.get("LLM_API_KEY") or env.get("GROQ_API_KEY") or "").strip() or None,
            "base_url": env.get("LLM_BASE_URL", "").strip() or DEFAULT_BASE_URL,
            "model": env.get("LLM_MODEL", "").strip() or DEFAULT_MODEL,
            "timeout": timeout,
        },
    }


def _create_weights(weights: dict[str, Any] | None) -> RelevanceWeights:
    return RelevanceWeights.from_mapping(weights)


def _create_llm_client(
    api_key: str | None,
    base_url: str | None,
    model: str | None,
    timeout: float | None,
) -> ChatCompletionClient:
    return ChatCompletionClient(
        api_key=api_key,
        base_url=base_url or DEFAULT_BASE_URL,
        model=model or DEFAULT_MODEL,
        timeout=timeout or DEFAULT_TIMEOUT,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for the trial search application.

    Manages creation and lifecycle of:
    - ``corpus_store``: the one in-memory corpus (load-once)
    - ``search_engine``: query engine bound to the corpus store
    - ``llm_client``: chat-completions client for the assistant
    - ``assistant``: message -> query -> search -> summary
    """

    config = providers.Configuration()

    # Request threads may race the first access
    corpus_store = providers.ThreadSafeSingleton(CorpusStore, data_path=config.data_path)

    weights = providers.Singleton(_create_weights, weights=config.weights)

    search_engine = providers.Singleton(
        TrialSearchEngine,
        store=corpus_store,
        weights=weights,
    )

    llm_client = providers.Singleton(
        _create_llm_client,
        api_key=config.llm.api_key,
        base_url=config.llm.base_url,
        model=config.llm.model,
        timeout=config.llm.timeout,
    )

    query_extractor = providers.Singleton(QueryExtractor, llm=llm_client)

    summarizer = providers.Singleton(ResultSummarizer, llm=llm_client)

    assistant = providers.Singleton(
        TrialAssistant,
        engine=search_engine,
        extractor=query_extractor,
        summarizer=summarizer,
    )


def create_container(settings: dict[str, Any] | None = None) -> ApplicationContainer:
    """Build a configured container (settings default to the environment)."""
    container = ApplicationContainer()
    container.config.from_dict(settings if settings is not None else settings_from_env())
    return container


__all__ = ["ApplicationContainer", "create_container", "settings_from_env"]
