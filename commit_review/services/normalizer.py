"""Normalisation of review requests into a single CommitDetail record."""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from commit_review.errors import InvalidInputError
from commit_review.models.commit_types import (
    DEFAULT_AUTHOR,
    DEFAULT_COMMIT_MESSAGE,
    DIRECT_DIFF_SHA,
    CommitDetail,
)
from commit_review.models.requests import DiffPayload, GithubRef, ReviewRequest
from commit_review.services.diff_parser import parse_unified_diff
from commit_review.services.github_commits import GitHubCommitFetcher
from commit_review.utils.repo_url import parse_repo_url

logger = logging.getLogger(__name__)


def parse_review_request(payload: Mapping[str, Any]) -> ReviewRequest:
    """Decide which request shape a raw payload carries.

    A non-empty ``repoUrl`` selects a GitHub review, even if ``diffContent``
    is also present. Everything else must be a diff payload.

    Raises:
        InvalidInputError: If the payload matches neither shape
    """
    try:
        if payload.get("repoUrl") or payload.get("repo_url"):
            if payload.get("diffContent") or payload.get("diff_content"):
                logger.warning(
                    "Request has both repoUrl and diffContent; reviewing repoUrl"
                )
            return GithubRef.model_validate(payload)
        return DiffPayload.model_validate(payload)
    except ValidationError as e:
        raise InvalidInputError(
            "Request must contain either 'repoUrl' or 'diffContent'"
        ) from e


def build_diff_commit_detail(
    payload: DiffPayload, now: datetime | None = None
) -> CommitDetail:
    """Build a CommitDetail from raw diff text and optional metadata.

    Args:
        payload: Diff text with optional message, author and SHA
        now: Timestamp to record as the commit date (default: current UTC time)

    Returns:
        CommitDetail with parsed files, sentinel defaults and an empty URL
    """
    parsed = parse_unified_diff(payload.diff_content)
    timestamp = now or datetime.now(timezone.utc)

    return CommitDetail(
        sha=payload.commit_sha or DIRECT_DIFF_SHA,
        message=payload.commit_message or DEFAULT_COMMIT_MESSAGE,
        author=payload.author or DEFAULT_AUTHOR,
        date=timestamp.isoformat(),
        url="",
        stats=parsed.stats,
        files=parsed.files,
    )


async def normalize_request(
    request: ReviewRequest, fetcher: GitHubCommitFetcher
) -> CommitDetail:
    """Turn either request shape into the commit detail to review.

    Raises:
        InvalidInputError: If a repository URL cannot be parsed
        RemoteFetchError: If GitHub cannot be reached or rejects a request
        MissingUpstreamDataError: If the repository has no commits
    """
    match request:
        case GithubRef(repo_url=repo_url):
            ref = parse_repo_url(repo_url)
            logger.info(f"Reviewing latest commit of {ref.full_name}")
            return await fetcher.fetch_latest_commit_detail(ref.owner, ref.repo)
        case DiffPayload():
            detail = build_diff_commit_detail(request)
            logger.info(
                f"Reviewing direct diff {detail.sha}: {len(detail.files)} files"
            )
            return detail
        case _:
            raise InvalidInputError(f"Unsupported review request: {request!r}")
