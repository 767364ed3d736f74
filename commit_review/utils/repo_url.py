"""GitHub repository URL parsing."""

import re

from commit_review.errors import InvalidInputError
from commit_review.models.commit_types import RepoRef

_GITHUB_REPO_URL = re.compile(r"github\.com/([^/]+)/([^/?#]+)")


def parse_repo_url(url: str) -> RepoRef:
    """Extract owner and repository name from a GitHub URL.

    Accepts browser and clone URLs (``https://github.com/acme/widgets``,
    ``https://github.com/acme/widgets.git``, ``git@github.com/acme/widgets``);
    anything after the repository segment is ignored.

    Raises:
        InvalidInputError: If no owner/repo pair can be found
    """
    match = _GITHUB_REPO_URL.search(url)
    if match:
        owner, repo = match.group(1), match.group(2)
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]
        if owner and repo:
            return RepoRef(owner=owner, repo=repo)

    raise InvalidInputError(f"Invalid GitHub URL format: {url}")
