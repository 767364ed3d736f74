"""Dependency injection types for the Pydantic AI review agent."""

from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

from commit_review.services.github_commits import GitHubCommitFetcher


class ReviewDependencies(BaseModel):
    """Dependencies for the code review agent.

    Holds the runtime collaborators the agent's tools need to look up
    commits on GitHub while answering a request.
    """

    fetcher: GitHubCommitFetcher

    # Private cache for tool results (not serialized)
    _cache: dict[str, Any] = PrivateAttr(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)
