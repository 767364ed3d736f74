"""Unit tests for the GitHub commit fetcher."""

import httpx
import pytest

from commit_review.errors import MissingUpstreamDataError, RemoteFetchError
from commit_review.services.github_commits import GitHubCommitFetcher

# --- Helpers ---


def _commit_item(sha: str, login: str | None = "octocat", name: str = "Mona") -> dict:
    return {
        "sha": sha,
        "commit": {
            "message": f"Commit {sha}",
            "author": {
                "name": name,
                "email": "mona@example.com",
                "date": "2024-05-01T12:00:00Z",
            },
        },
        "author": {"login": login, "avatar_url": "https://example.com/a.png"}
        if login
        else None,
    }


def _commit_detail(sha: str) -> dict:
    item = _commit_item(sha)
    item["stats"] = {"additions": 7, "deletions": 3, "total": 10}
    item["files"] = [
        {
            "sha": "blobsha",
            "filename": "src/app.py",
            "status": "modified",
            "additions": 5,
            "deletions": 3,
            "changes": 8,
            "blob_url": "https://github.com/acme/widgets/blob/x/src/app.py",
            "patch": "@@ -1,3 +1,5 @@\n+import os\n",
        },
        {
            "sha": "blobsha2",
            "filename": "assets/logo.png",
            "status": "added",
            "additions": 2,
            "deletions": 0,
            "changes": 2,
        },
    ]
    return item


def _router(routes: dict[str, httpx.Response]):
    """Build a MockTransport handler mapping URL paths to responses."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return routes[request.url.path]

    handler.seen = seen  # type: ignore[attr-defined]
    return handler


# --- list_commits tests ---


class TestListCommits:
    """Tests for GitHubCommitFetcher.list_commits()."""

    @pytest.mark.asyncio
    async def test_list_commits_success(self, make_fetcher):
        handler = _router(
            {
                "/repos/acme/widgets/commits": httpx.Response(
                    200, json=[_commit_item("bbb"), _commit_item("aaa")]
                )
            }
        )
        fetcher = make_fetcher(handler, per_page=5)

        commits = await fetcher.list_commits("acme", "widgets")

        assert [c.sha for c in commits] == ["bbb", "aaa"]
        assert commits[0].message == "Commit bbb"
        assert commits[0].author == "octocat"
        assert commits[0].date == "2024-05-01T12:00:00Z"
        assert commits[0].url == "https://github.com/acme/widgets/commit/bbb"

        request = handler.seen[0]
        assert request.url.params["per_page"] == "5"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        assert request.headers["User-Agent"] == "Code-Review-Agent/1.0"
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_author_falls_back_to_git_name(self, make_fetcher):
        handler = _router(
            {
                "/repos/acme/widgets/commits": httpx.Response(
                    200, json=[_commit_item("aaa", login=None, name="Jane Dev")]
                )
            }
        )
        fetcher = make_fetcher(handler)

        commits = await fetcher.list_commits("acme", "widgets")

        assert commits[0].author == "Jane Dev"

    @pytest.mark.asyncio
    async def test_per_page_override_is_capped(self, make_fetcher):
        handler = _router(
            {"/repos/acme/widgets/commits": httpx.Response(200, json=[])}
        )
        fetcher = make_fetcher(handler)

        await fetcher.list_commits("acme", "widgets", per_page=500)

        assert handler.seen[0].url.params["per_page"] == "100"

    @pytest.mark.asyncio
    async def test_token_and_user_agent_are_sent(self, make_fetcher):
        handler = _router(
            {"/repos/acme/widgets/commits": httpx.Response(200, json=[])}
        )
        fetcher = make_fetcher(handler, token="ghp_test", user_agent="reviewer/2.0")

        await fetcher.list_commits("acme", "widgets")

        request = handler.seen[0]
        assert request.headers["Authorization"] == "Bearer ghp_test"
        assert request.headers["User-Agent"] == "reviewer/2.0"

    @pytest.mark.asyncio
    async def test_not_found_raises_remote_fetch_error(self, make_fetcher):
        handler = _router(
            {"/repos/acme/missing/commits": httpx.Response(404, json={"message": "Not Found"})}
        )
        fetcher = make_fetcher(handler)

        with pytest.raises(RemoteFetchError) as exc_info:
            await fetcher.list_commits("acme", "missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.reason == "Not Found"
        assert str(exc_info.value).startswith("Failed to fetch commits:")

    @pytest.mark.asyncio
    async def test_rate_limit_is_not_special_cased(self, make_fetcher):
        handler = _router(
            {"/repos/acme/widgets/commits": httpx.Response(403, json={"message": "API rate limit exceeded"})}
        )
        fetcher = make_fetcher(handler)

        with pytest.raises(RemoteFetchError) as exc_info:
            await fetcher.list_commits("acme", "widgets")

        assert exc_info.value.status_code == 403
        assert len(handler.seen) == 1

    @pytest.mark.asyncio
    async def test_transport_error_raises_remote_fetch_error(self, make_fetcher):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        fetcher = make_fetcher(handler)

        with pytest.raises(RemoteFetchError) as exc_info:
            await fetcher.list_commits("acme", "widgets")

        assert exc_info.value.status_code is None
        assert "Name or service not known" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unexpected_payload_raises_remote_fetch_error(self, make_fetcher):
        handler = _router(
            {"/repos/acme/widgets/commits": httpx.Response(200, json=[{"sha": "x"}])}
        )
        fetcher = make_fetcher(handler)

        with pytest.raises(RemoteFetchError):
            await fetcher.list_commits("acme", "widgets")


# --- get_commit_detail tests ---


class TestGetCommitDetail:
    """Tests for GitHubCommitFetcher.get_commit_detail()."""

    @pytest.mark.asyncio
    async def test_detail_is_reshaped(self, make_fetcher):
        handler = _router(
            {"/repos/acme/widgets/commits/aaa": httpx.Response(200, json=_commit_detail("aaa"))}
        )
        fetcher = make_fetcher(handler)

        detail = await fetcher.get_commit_detail("acme", "widgets", "aaa")

        assert detail.sha == "aaa"
        assert detail.url == "https://github.com/acme/widgets/commit/aaa"
        assert detail.stats.additions == 7
        assert detail.stats.deletions == 3
        assert detail.stats.total == 10
        assert [f.filename for f in detail.files] == ["src/app.py", "assets/logo.png"]
        assert detail.files[0].patch == "@@ -1,3 +1,5 @@\n+import os\n"
        assert detail.files[1].status == "added"
        assert detail.files[1].patch is None
        assert set(detail.files[0].model_dump()) == {
            "filename",
            "additions",
            "deletions",
            "changes",
            "status",
            "patch",
        }

    @pytest.mark.asyncio
    async def test_total_always_matches_counts(self, make_fetcher):
        payload = _commit_detail("aaa")
        payload["stats"] = {"additions": 4, "deletions": 1, "total": 99}
        handler = _router(
            {"/repos/acme/widgets/commits/aaa": httpx.Response(200, json=payload)}
        )
        fetcher = make_fetcher(handler)

        detail = await fetcher.get_commit_detail("acme", "widgets", "aaa")

        assert detail.stats.total == 5

    @pytest.mark.asyncio
    async def test_detail_error_has_stage_context(self, make_fetcher):
        handler = _router(
            {"/repos/acme/widgets/commits/aaa": httpx.Response(500)}
        )
        fetcher = make_fetcher(handler)

        with pytest.raises(RemoteFetchError) as exc_info:
            await fetcher.get_commit_detail("acme", "widgets", "aaa")

        assert exc_info.value.status_code == 500
        assert str(exc_info.value).startswith("Failed to fetch commit detail:")


# --- fetch_latest_commit_detail tests ---


class TestFetchLatestCommitDetail:
    """Tests for GitHubCommitFetcher.fetch_latest_commit_detail()."""

    @pytest.mark.asyncio
    async def test_fetches_newest_commit(self, make_fetcher):
        handler = _router(
            {
                "/repos/acme/widgets/commits": httpx.Response(
                    200, json=[_commit_item("newest"), _commit_item("older")]
                ),
                "/repos/acme/widgets/commits/newest": httpx.Response(
                    200, json=_commit_detail("newest")
                ),
            }
        )
        fetcher = make_fetcher(handler)

        detail = await fetcher.fetch_latest_commit_detail("acme", "widgets")

        assert detail.sha == "newest"
        assert [r.url.path for r in handler.seen] == [
            "/repos/acme/widgets/commits",
            "/repos/acme/widgets/commits/newest",
        ]

    @pytest.mark.asyncio
    async def test_empty_repository_raises(self, make_fetcher):
        handler = _router(
            {"/repos/acme/empty/commits": httpx.Response(200, json=[])}
        )
        fetcher = make_fetcher(handler)

        with pytest.raises(MissingUpstreamDataError):
            await fetcher.fetch_latest_commit_detail("acme", "empty")

    @pytest.mark.asyncio
    async def test_list_failure_skips_detail_request(self, make_fetcher):
        handler = _router(
            {"/repos/acme/widgets/commits": httpx.Response(404)}
        )
        fetcher = make_fetcher(handler)

        with pytest.raises(RemoteFetchError) as exc_info:
            await fetcher.fetch_latest_commit_detail("acme", "widgets")

        assert exc_info.value.status_code == 404
        assert len(handler.seen) == 1


def test_from_settings_uses_configuration():
    from commit_review.config.settings import Settings

    config = Settings(
        _env_file=None,
        github_api_base_url="https://ghe.example.com/api/v3/",
        GH_TOKEN="secret",
        commits_per_page=10,
    )
    fetcher = GitHubCommitFetcher.from_settings(httpx.AsyncClient(), config)

    assert fetcher._api_base_url == "https://ghe.example.com/api/v3"
    assert fetcher._token == "secret"
    assert fetcher._per_page == 10
