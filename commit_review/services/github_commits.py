"""GitHub commit API client for fetching recent commits and their file changes."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from commit_review.config.settings import Settings, settings
from commit_review.errors import MissingUpstreamDataError, RemoteFetchError
from commit_review.models.commit_types import (
    CommitDetail,
    CommitStats,
    CommitSummary,
    FileChange,
    RepoRef,
)

logger = logging.getLogger(__name__)

GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"

# GitHub API caps per_page at 100
_MAX_PER_PAGE = 100


class GitHubCommitFetcher:
    """Fetch commit metadata from the GitHub REST API.

    Connection details (base URL, token, user agent) are injected so tests
    and alternative deployments never depend on module-level state.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        api_base_url: str = "https://api.github.com",
        token: str | None = None,
        user_agent: str = "Code-Review-Agent/1.0",
        per_page: int = 5,
    ) -> None:
        self._http_client = http_client
        self._api_base_url = api_base_url.rstrip("/")
        self._token = token
        self._user_agent = user_agent
        self._per_page = per_page

    @classmethod
    def from_settings(
        cls, http_client: httpx.AsyncClient, config: Settings | None = None
    ) -> "GitHubCommitFetcher":
        """Build a fetcher from application settings."""
        config = config or settings
        return cls(
            http_client,
            api_base_url=config.github_api_base_url,
            token=config.github_token,
            user_agent=config.github_user_agent,
            per_page=config.commits_per_page,
        )

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": GITHUB_ACCEPT_HEADER,
            "User-Agent": self._user_agent,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _get_json(
        self, path: str, params: dict[str, str | int] | None = None
    ) -> Any:
        """GET a GitHub API path and decode the JSON body.

        Raises:
            RemoteFetchError: On transport failure or non-success status
        """
        url = f"{self._api_base_url}{path}"
        try:
            response = await self._http_client.get(
                url, headers=self._headers(), params=params
            )
        except httpx.HTTPError as e:
            raise RemoteFetchError(f"GitHub API request failed: {e}") from e

        if not response.is_success:
            logger.warning(
                f"GitHub API: {response.status_code} {response.reason_phrase} for {path}"
            )
            raise RemoteFetchError(
                f"GitHub API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

        return response.json()

    async def list_commits(
        self, owner: str, repo: str, per_page: int | None = None
    ) -> list[CommitSummary]:
        """List the most recent commits of a repository, newest first.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name
            per_page: Number of commits to request (default from settings)

        Returns:
            Commit summaries in the order returned by GitHub

        Raises:
            RemoteFetchError: If the request fails
        """
        limit = min(per_page or self._per_page, _MAX_PER_PAGE)
        ref = RepoRef(owner=owner, repo=repo)
        try:
            data = await self._get_json(
                f"/repos/{owner}/{repo}/commits", params={"per_page": limit}
            )
        except RemoteFetchError as e:
            raise RemoteFetchError(
                f"Failed to fetch commits: {e}", status_code=e.status_code, reason=e.reason
            ) from e

        try:
            commits = [_to_commit_summary(item, ref) for item in data]
        except (KeyError, TypeError, ValidationError) as e:
            raise RemoteFetchError(
                f"Failed to fetch commits: unexpected GitHub API response ({e})"
            ) from e
        logger.info(f"Fetched {len(commits)} commits for {ref.full_name}")
        return commits

    async def get_commit_detail(self, owner: str, repo: str, sha: str) -> CommitDetail:
        """Fetch a single commit with its stats and per-file patches.

        Raises:
            RemoteFetchError: If the request fails
        """
        ref = RepoRef(owner=owner, repo=repo)
        try:
            data = await self._get_json(f"/repos/{owner}/{repo}/commits/{sha}")
        except RemoteFetchError as e:
            raise RemoteFetchError(
                f"Failed to fetch commit detail: {e}",
                status_code=e.status_code,
                reason=e.reason,
            ) from e

        try:
            detail = _to_commit_detail(data, ref)
        except (KeyError, TypeError, ValidationError) as e:
            raise RemoteFetchError(
                f"Failed to fetch commit detail: unexpected GitHub API response ({e})"
            ) from e
        logger.info(
            f"Fetched commit {detail.sha[:7]} for {ref.full_name}: "
            f"{len(detail.files)} files, +{detail.stats.additions} -{detail.stats.deletions}"
        )
        return detail

    async def fetch_latest_commit_detail(self, owner: str, repo: str) -> CommitDetail:
        """Fetch full detail of the newest commit of a repository.

        Raises:
            RemoteFetchError: If either request fails
            MissingUpstreamDataError: If the repository has no commits
        """
        commits = await self.list_commits(owner, repo)
        if not commits:
            raise MissingUpstreamDataError("No commits found")

        return await self.get_commit_detail(owner, repo, commits[0].sha)


def _author_of(item: dict[str, Any]) -> str:
    """GitHub login when the commit is linked to an account, else the git author name."""
    account = item.get("author") or {}
    if account.get("login"):
        return account["login"]
    return item["commit"]["author"]["name"]


def _to_commit_summary(item: dict[str, Any], ref: RepoRef) -> CommitSummary:
    return CommitSummary(
        sha=item["sha"],
        message=item["commit"]["message"],
        author=_author_of(item),
        date=item["commit"]["author"]["date"],
        url=ref.commit_url(item["sha"]),
    )


def _to_file_change(file: dict[str, Any]) -> FileChange:
    return FileChange(
        filename=file["filename"],
        additions=file.get("additions", 0),
        deletions=file.get("deletions", 0),
        changes=file.get("changes", 0),
        status=file.get("status", "modified"),
        patch=file.get("patch"),
    )


def _to_commit_detail(data: dict[str, Any], ref: RepoRef) -> CommitDetail:
    stats = data.get("stats") or {}
    return CommitDetail(
        **_to_commit_summary(data, ref).model_dump(),
        stats=CommitStats.from_counts(
            stats.get("additions", 0), stats.get("deletions", 0)
        ),
        files=[_to_file_change(file) for file in data.get("files", [])],
    )
