"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from commit_review import __version__
from commit_review.agents.code_reviewer import describe_agent
from commit_review.api import reviews
from commit_review.config.settings import settings
from commit_review.database.db import check_db_connection, init_db
from commit_review.utils.logging import setup_observability

# Setup logging and observability
setup_observability()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Starting Commit Review Agent in {settings.environment} environment")

    logger.info("Initializing conversation memory database...")
    init_db()

    yield

    logger.info("Shutting down Commit Review Agent")


app = FastAPI(
    title="Commit Review Agent",
    description="LLM-powered review of GitHub commits and unified diffs using Pydantic AI",
    version=__version__,
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire if configured
if settings.logfire_token:
    import logfire

    logfire.instrument_fastapi(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reviews.router)


@app.get("/health")
async def health_check() -> dict[str, str | bool]:
    """Health check endpoint with configuration status."""
    agent_info = describe_agent()
    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": __version__,
        "model": agent_info["model"],
        "llm_configured": agent_info["llm_configured"],
        "github_token_configured": bool(settings.github_token),
        "logfire_enabled": bool(settings.logfire_token),
        "database_connected": check_db_connection(),
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "message": "Commit Review Agent API",
        "docs": "/docs",
        "health": "/health",
        "review": "/review",
    }
