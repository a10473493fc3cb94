"""
HTTP API Server for web frontends.

Runs the same container as the MCP server (one corpus store, one search
engine, one assistant) behind a small REST surface:

    GET  /health             corpus status
    POST /api/search         structured query -> result envelope
    POST /api/chat           free-text message -> summary + results
    GET  /api/trials/{id}    one trial

The corpus is loaded during application startup, so a bad data file
stops the server before it accepts requests.
"""

from __future__ import annotations

import argparse
import logging
import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from trial_search.container import ApplicationContainer, create_container
from trial_search.core.exceptions import (
    APIError,
    DataLoadError,
    NotFoundError,
    TrialSearchError,
    ValidationError,
)
from trial_search.domain.entities import QueryFilters, StructuredQuery

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 3001


# Pydantic models for API requests / responses
class FiltersModel(BaseModel):
    """Structured filter criteria (all optional, AND-combined)."""

    model_config = ConfigDict(populate_by_name=True)

    status: list[str] = Field(default_factory=list)
    phase: list[str] = Field(default_factory=list)
    intervention_type: list[str] = Field(default_factory=list, alias="interventionType")
    sponsor: str | None = None
    country: str | None = None


class SearchRequest(BaseModel):
    """Structured query. A missing or non-positive limit means 50."""

    keywords: list[str] = Field(default_factory=list)
    filters: FiltersModel = Field(default_factory=FiltersModel)
    limit: Any = None

    def to_query(self) -> StructuredQuery:
        return StructuredQuery(
            keywords=tuple(self.keywords),
            filters=QueryFilters(
                status=tuple(self.filters.status),
                phase=tuple(self.filters.phase),
                intervention_type=tuple(self.filters.intervention_type),
                sponsor=self.filters.sponsor,
                country=self.filters.country,
            ),
            limit=self.limit,
        )


class ChatRequest(BaseModel):
    """One chat turn."""

    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    trials: int
    llm_configured: bool


def _status_code_for(error: TrialSearchError) -> int:
    if isinstance(error, ValidationError):
        return 422
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, DataLoadError):
        return 503
    if isinstance(error, APIError):
        return 502
    return 500


def _container_of(request: Request) -> ApplicationContainer:
    return request.app.state.container


def create_api_server(container: ApplicationContainer | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        container: Pre-built DI container (default: configured from the
            environment).

    Returns:
        Configured FastAPI instance.
    """
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan manager."""
        store = container.corpus_store()
        store.load()
        logger.info(f"HTTP API server initialized with {len(store)} trials")

        yield

        await container.llm_client().close()
        logger.info("HTTP API server shutting down")

    app = FastAPI(
        title="Clinical Trial Search API",
        description="Keyword and filter search over clinical trials, plus a chat assistant.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TrialSearchError)
    async def trial_search_error_handler(request: Request, exc: TrialSearchError) -> JSONResponse:
        status_code = _status_code_for(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Health check endpoint."""
        c = _container_of(request)
        store = c.corpus_store()
        if not store.is_loaded:
            return HealthResponse(status="initializing", trials=0, llm_configured=c.llm_client().is_configured)
        return HealthResponse(status="healthy", trials=len(store), llm_configured=c.llm_client().is_configured)

    @app.post("/api/search")
    async def search_trials(body: SearchRequest, request: Request) -> dict[str, Any]:
        """Run a structured query; returns trials, totalResults, query and relevanceScores."""
        result = _container_of(request).search_engine().search(body.to_query())
        return result.to_dict()

    @app.post("/api/chat")
    async def chat(body: ChatRequest, request: Request) -> dict[str, Any]:
        """
        Answer a free-text question.

        Raises:
            422: If the message is empty or blank
        """
        reply = await _container_of(request).assistant().ask(body.message)
        return reply.to_dict()

    @app.get("/api/trials/{trial_id}")
    async def get_trial(trial_id: str, request: Request) -> dict[str, Any]:
        """Get one trial by id."""
        trial = _container_of(request).search_engine().get_trial(trial_id)
        if trial is None:
            raise HTTPException(status_code=404, detail=f"Trial {trial_id} not found")
        return trial.to_dict()

    return app


def run_api_server(host: str = DEFAULT_API_HOST, port: int = DEFAULT_API_PORT):
    """
    Run the HTTP API server.

    Args:
        host: Host to bind to (default: 127.0.0.1 for local only)
        port: Port to bind to (default: 3001)
    """
    import uvicorn

    app = create_api_server()
    logger.info(f"Starting HTTP API server on {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")


def main():
    """Command-line entry point for the HTTP API."""
    parser = argparse.ArgumentParser(description="Clinical Trial Search HTTP API Server")
    parser.add_argument("--host", default=os.environ.get("TRIAL_SEARCH_HTTP_HOST", DEFAULT_API_HOST))
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("TRIAL_SEARCH_HTTP_PORT", DEFAULT_API_PORT)),
        help="Port to bind to",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=os.environ.get("TRIAL_SEARCH_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    run_api_server(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
