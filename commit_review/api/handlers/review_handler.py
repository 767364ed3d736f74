"""Commit review workflow handler.

Runs the review pipeline for one request, strictly in sequence:

1. Normalize the request (GitHub reference or raw diff) into a CommitDetail
2. Render the review prompt from the CommitDetail
3. Stream the agent's review, surfacing fragments as they arrive
4. Return the complete review text

Every stage fails fast; nothing is retried and no partial review is returned.
"""

import asyncio
import logging

import httpx
from pydantic_ai import Agent

from commit_review.agents.code_reviewer import ChunkHandler, stream_review
from commit_review.config.settings import settings
from commit_review.models.dependencies import ReviewDependencies
from commit_review.models.requests import ReviewRequest, ReviewResponse
from commit_review.prompts.review_request_prompt import build_review_prompt
from commit_review.services.github_commits import GitHubCommitFetcher
from commit_review.services.normalizer import normalize_request

logger = logging.getLogger(__name__)


async def handle_code_review(
    request: ReviewRequest,
    *,
    fetcher: GitHubCommitFetcher | None = None,
    agent: Agent[ReviewDependencies, str] | None = None,
    on_chunk: ChunkHandler | None = None,
    cancel_event: asyncio.Event | None = None,
) -> ReviewResponse:
    """
    Review one commit or diff.

    Args:
        request: GithubRef or DiffPayload
        fetcher: GitHub client (default: one built from settings for this call)
        agent: Review agent (default: code_review_agent)
        on_chunk: Callback for each streamed fragment (default: stdout)
        cancel_event: Abort signal checked while the review streams

    Returns:
        ReviewResponse with the full review text

    Raises:
        InvalidInputError: Malformed repository URL
        RemoteFetchError: GitHub request failed
        MissingUpstreamDataError: Repository has no commits
        ReasoningEngineError: Review generation failed or was cancelled
    """
    if fetcher is None:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as http_client:
            return await handle_code_review(
                request,
                fetcher=GitHubCommitFetcher.from_settings(http_client),
                agent=agent,
                on_chunk=on_chunk,
                cancel_event=cancel_event,
            )

    logger.info(f"Starting code review ({type(request).__name__})")

    detail = await normalize_request(request, fetcher)
    logger.info(
        f"Normalized commit {detail.sha[:7]}: {len(detail.files)} files, "
        f"+{detail.stats.additions} -{detail.stats.deletions}"
    )

    prompt = build_review_prompt(detail)

    streamed = await stream_review(
        prompt,
        deps=ReviewDependencies(fetcher=fetcher),
        agent=agent,
        on_chunk=on_chunk,
        cancel_event=cancel_event,
    )

    logger.info(f"Code review completed for {detail.sha[:7]}")
    return ReviewResponse(review=streamed.text)
