"""Code review agent using Pydantic AI and an OpenAI-compatible chat model."""

import asyncio
import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, cast

from pydantic_ai import Agent, RunContext
from pydantic_ai.messages import ModelMessage
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from commit_review.config.settings import Settings, settings
from commit_review.errors import ReasoningEngineError, ReviewCancelledError
from commit_review.models.dependencies import ReviewDependencies
from commit_review.prompts.code_reviewer_prompt import SYSTEM_PROMPT
from commit_review.tools import github_tools

logger = logging.getLogger(__name__)

ChunkHandler = Callable[[str], None]


def build_review_model(config: Settings | None = None) -> OpenAIChatModel:
    """Create the chat model the review agent talks to.

    DeepSeek exposes an OpenAI-compatible API, so the OpenAI provider is
    pointed at the configured base URL.
    """
    config = config or settings
    provider = OpenAIProvider(base_url=config.llm_base_url, api_key=config.llm_api_key)
    return OpenAIChatModel(config.llm_model, provider=provider)


code_review_agent = Agent[ReviewDependencies, str](
    model=build_review_model(),
    deps_type=ReviewDependencies,
    output_type=str,
    system_prompt=SYSTEM_PROMPT,
)


@code_review_agent.tool
async def parse_repo_url(ctx: RunContext[ReviewDependencies], url: str) -> dict:
    """Parse a GitHub repository URL into owner and repo name."""
    return await github_tools.parse_repo_url(ctx, url)


@code_review_agent.tool
async def get_commits(
    ctx: RunContext[ReviewDependencies], owner: str, repo: str, per_page: int = 10
) -> dict:
    """Get recent commits from a GitHub repository (max 100).

    Returns:
        Dict with a ``commits`` list of {sha, message, author, date, url}
    """
    return await github_tools.get_commits(ctx, owner, repo, per_page)


@code_review_agent.tool
async def get_commit_detail(
    ctx: RunContext[ReviewDependencies], owner: str, repo: str, sha: str
) -> dict:
    """Get detailed information about a commit including file changes.

    This result is cached per commit to avoid redundant API calls.
    """
    cache_key = f"commit:{owner}/{repo}@{sha}"
    if cache_key in ctx.deps._cache:
        logger.debug(f"Returning cached commit detail for {sha[:7]}")
        return cast(dict, ctx.deps._cache[cache_key])

    result = await github_tools.get_commit_detail(ctx, owner, repo, sha)
    ctx.deps._cache[cache_key] = result
    return result


@dataclass
class StreamedReview:
    """Complete text of a streamed agent answer plus the messages it produced."""

    text: str
    new_messages: list[ModelMessage] = field(default_factory=list)


def write_to_stdout(chunk: str) -> None:
    """Echo a streamed fragment to the terminal as it arrives."""
    sys.stdout.write(chunk)
    sys.stdout.flush()


async def stream_review(
    prompt: str,
    *,
    deps: ReviewDependencies,
    agent: Agent[ReviewDependencies, str] | None = None,
    on_chunk: ChunkHandler | None = None,
    cancel_event: asyncio.Event | None = None,
    message_history: Sequence[ModelMessage] | None = None,
) -> StreamedReview:
    """
    Run the agent on a prompt and consume its answer incrementally.

    Each text fragment is handed to ``on_chunk`` in arrival order and
    appended to the result. The full text is returned only when the stream
    completes; on any failure the partial text is discarded.

    Args:
        prompt: User prompt to send
        deps: Dependencies for the agent's tools
        agent: Agent to run (default: code_review_agent)
        on_chunk: Callback for each fragment (default: write to stdout)
        cancel_event: When set, streaming stops with ReviewCancelledError
        message_history: Earlier messages of the same conversation

    Returns:
        StreamedReview with the concatenated text and new messages

    Raises:
        ReviewCancelledError: If cancel_event is set before the stream ends
        ReasoningEngineError: If the model call or stream fails
    """
    if agent is None:
        agent = code_review_agent
    if on_chunk is None:
        on_chunk = write_to_stdout

    if cancel_event is not None and cancel_event.is_set():
        raise ReviewCancelledError("Review cancelled before streaming started")

    chunks: list[str] = []
    try:
        async with agent.run_stream(
            prompt,
            deps=deps,
            message_history=list(message_history) if message_history else None,
        ) as result:
            async for chunk in result.stream_text(delta=True):
                if cancel_event is not None and cancel_event.is_set():
                    raise ReviewCancelledError("Review cancelled while streaming")
                chunks.append(chunk)
                on_chunk(chunk)
            new_messages = result.new_messages()
    except ReasoningEngineError:
        raise
    except Exception as e:
        logger.error(
            f"Review stream failed after {len(chunks)} fragments: {type(e).__name__}: {e}"
        )
        raise ReasoningEngineError(f"Failed to generate review: {e}") from e

    text = "".join(chunks)
    logger.info(f"Review stream completed: {len(chunks)} fragments, {len(text)} chars")
    return StreamedReview(text=text, new_messages=new_messages)


def describe_agent() -> dict[str, Any]:
    """Model configuration summary used by the health endpoint."""
    return {
        "model": settings.llm_model,
        "base_url": settings.llm_base_url,
        "llm_configured": bool(settings.llm_api_key),
    }
