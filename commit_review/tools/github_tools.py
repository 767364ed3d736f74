"""GitHub lookup tools for the code review agent."""

import logging
from typing import Any

from pydantic_ai import ModelRetry, RunContext

from commit_review.errors import InvalidInputError
from commit_review.models.dependencies import ReviewDependencies
from commit_review.utils.repo_url import parse_repo_url as _parse_repo_url

logger = logging.getLogger(__name__)


async def parse_repo_url(
    ctx: RunContext[ReviewDependencies], url: str
) -> dict[str, str]:
    """Extract owner and repo from a GitHub repository URL.

    Raises:
        ModelRetry: If the URL is not a GitHub repository URL
    """
    try:
        ref = _parse_repo_url(url)
    except InvalidInputError as e:
        raise ModelRetry(str(e)) from e

    return ref.model_dump()


async def get_commits(
    ctx: RunContext[ReviewDependencies], owner: str, repo: str, per_page: int = 10
) -> dict[str, Any]:
    """List recent commits of a repository, newest first.

    Raises:
        RemoteFetchError: If the GitHub API request fails
    """
    commits = await ctx.deps.fetcher.list_commits(owner, repo, per_page=per_page)
    return {"commits": [commit.model_dump() for commit in commits]}


async def get_commit_detail(
    ctx: RunContext[ReviewDependencies], owner: str, repo: str, sha: str
) -> dict[str, Any]:
    """Get one commit including its stats and per-file patches.

    Raises:
        RemoteFetchError: If the GitHub API request fails
    """
    detail = await ctx.deps.fetcher.get_commit_detail(owner, repo, sha)
    return detail.model_dump(exclude_none=True)
