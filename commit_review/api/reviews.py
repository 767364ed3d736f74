"""HTTP endpoints for commit reviews and agent chat."""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, status

from commit_review.api.handlers import handle_chat, handle_code_review
from commit_review.errors import (
    CodeReviewError,
    InvalidInputError,
    MissingUpstreamDataError,
    ReasoningEngineError,
    RemoteFetchError,
)
from commit_review.models.requests import ChatRequest, ChatResponse, ReviewResponse
from commit_review.services.normalizer import parse_review_request

logger = logging.getLogger(__name__)
router = APIRouter(tags=["reviews"])


def _discard_chunk(chunk: str) -> None:
    # HTTP callers receive the full text in the response body
    pass


def _to_http_exception(error: CodeReviewError) -> HTTPException:
    """Map a pipeline error to an HTTP error response."""
    if isinstance(error, InvalidInputError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, MissingUpstreamDataError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (RemoteFetchError, ReasoningEngineError)):
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=status_code, detail=str(error))


@router.post("/review", response_model=ReviewResponse)
async def review(payload: dict[str, Any] = Body(...)) -> ReviewResponse:
    """
    Review the latest commit of a repository or a raw diff.

    Body is either ``{"repoUrl": ...}`` or
    ``{"diffContent": ..., "commitMessage": ..., "author": ..., "commitSha": ...}``.
    """
    try:
        request = parse_review_request(payload)
        return await handle_code_review(request, on_chunk=_discard_chunk)
    except CodeReviewError as e:
        logger.warning(f"Review request failed: {type(e).__name__}: {e}")
        raise _to_http_exception(e) from e


@router.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest) -> ChatResponse:
    """Send a message to the review agent within a remembered thread."""
    try:
        reply = await handle_chat(
            body.message, body.thread_id, on_chunk=_discard_chunk
        )
    except CodeReviewError as e:
        logger.warning(f"Chat request failed: {type(e).__name__}: {e}")
        raise _to_http_exception(e) from e

    return ChatResponse(reply=reply, thread_id=body.thread_id)
