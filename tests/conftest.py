"""Pytest configuration and fixtures."""

import os

# Keep the test run away from any real memory database or production checks
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")

from collections.abc import Callable  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from commit_review.main import app  # noqa: E402
from commit_review.services.github_commits import GitHubCommitFetcher  # noqa: E402

SAMPLE_DIFF = """diff --git a/src/a.js b/src/a.js
--- a/src/a.js
+++ b/src/a.js
@@ -1,2 +1,3 @@
 x
+y
-z"""


@pytest.fixture
def client() -> TestClient:
    """Return a FastAPI TestClient."""
    return TestClient(app)


@pytest.fixture
def sample_diff() -> str:
    """Single-file diff with one added and one removed line."""
    return SAMPLE_DIFF


@pytest.fixture
def make_fetcher() -> Callable[..., GitHubCommitFetcher]:
    """Build a GitHubCommitFetcher whose HTTP traffic goes to a handler function."""

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GitHubCommitFetcher(http_client, **kwargs)

    return _make
