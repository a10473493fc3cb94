"""
Clinical Trial Search MCP Server

A Model Context Protocol server exposing the trial search engine and the
chat assistant as tools.

Architecture:
- instructions.py: SERVER_INSTRUCTIONS for AI agents
- tool_registry.py: Centralized tool registration
- tools/: Individual tool implementations by category
- container: DI container (dependency-injector) for service lifecycle

The corpus is loaded eagerly in ``create_server()``: a missing or
malformed data file raises DataLoadError before any tool is served.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from trial_search.container import ApplicationContainer, create_container
from trial_search.core.exceptions import DataLoadError, TrialSearchError

from .instructions import SERVER_INSTRUCTIONS
from .tool_registry import register_all_mcp_tools

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

logger = logging.getLogger(__name__)

# ── Module-level DI container ──────────────────────────────────────────────
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """Get the application DI container.

    Raises:
        RuntimeError: If ``create_server()`` has not been called yet.
    """
    if _container is None:
        msg = "Container not initialized. Call create_server() first."
        raise RuntimeError(msg)
    return _container


def _make_lifespan(
    container: ApplicationContainer,
) -> Callable[[FastMCP], AbstractAsyncContextManager[ApplicationContainer]]:
    """Create a FastMCP lifespan handler bound to *container*."""

    @asynccontextmanager
    async def _lifespan(server: FastMCP) -> AsyncIterator[ApplicationContainer]:
        """Application lifecycle: startup → yield → shutdown."""
        logger.info("Lifecycle: startup, corpus ready")
        try:
            yield container
        finally:
            await container.llm_client().close()
            logger.info("Lifecycle: shutdown, LLM client closed")

    return _lifespan


def create_server(
    settings: dict[str, Any] | None = None,
    name: str = "clinical-trial-search",
) -> FastMCP:
    """
    Create and configure the Clinical Trial Search MCP server.

    Args:
        settings: Container settings (default: read from the environment,
            see ``trial_search.container.settings_from_env``).
        name: Server name.

    Returns:
        Configured FastMCP server instance.

    Raises:
        DataLoadError: If the trial corpus cannot be loaded.
    """
    global _container
    logger.info("Initializing Clinical Trial Search MCP Server...")

    container = create_container(settings)
    container.corpus_store().load()
    _container = container

    engine = container.search_engine()
    assistant = container.assistant()
    if not container.llm_client().is_configured:
        logger.warning("No LLM API key configured: ask_trials uses plain keyword search")

    mcp = FastMCP(
        name,
        instructions=SERVER_INSTRUCTIONS,
        lifespan=_make_lifespan(container),
    )

    stats = register_all_mcp_tools(mcp=mcp, engine=engine, assistant=assistant)
    logger.info("Tool registration complete: %s", stats)

    logger.info("Clinical Trial Search MCP Server initialized successfully")
    return mcp


def main():
    """Run the MCP server over stdio."""
    logging.basicConfig(
        level=os.environ.get("TRIAL_SEARCH_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        server = create_server()
    except DataLoadError as e:
        logger.critical(f"Cannot start: {e}")
        sys.exit(1)
    except TrialSearchError as e:
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(2)

    server.run()


if __name__ == "__main__":
    main()
