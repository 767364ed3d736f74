"""Commit and file-change type definitions."""

from typing import Literal

from pydantic import BaseModel, Field

DIRECT_DIFF_SHA = "direct-diff"
DEFAULT_AUTHOR = "Unknown"
DEFAULT_COMMIT_MESSAGE = "Direct diff review"

FileStatus = Literal[
    "added",
    "modified",
    "removed",
    "deleted",
    "renamed",
    "copied",
    "changed",
    "unchanged",
]


class RepoRef(BaseModel):
    """Owner and name of a GitHub repository."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        """Repository in 'owner/repo' format."""
        return f"{self.owner}/{self.repo}"

    def commit_url(self, sha: str) -> str:
        """Browser URL of a commit in this repository."""
        return f"https://github.com/{self.owner}/{self.repo}/commit/{sha}"


class FileChange(BaseModel):
    """Changes to a single file in a commit.

    Represents one file section of a diff, or one entry of the ``files``
    array of the GitHub commit API, with its line counts and optional patch.
    """

    filename: str
    additions: int = Field(ge=0)
    deletions: int = Field(ge=0)
    changes: int = Field(ge=0)
    status: FileStatus = "modified"
    patch: str | None = None


class CommitStats(BaseModel):
    """Aggregate line statistics for a commit."""

    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    @classmethod
    def from_counts(cls, additions: int, deletions: int) -> "CommitStats":
        """Build stats whose total is always additions + deletions."""
        return cls(additions=additions, deletions=deletions, total=additions + deletions)

    @classmethod
    def from_files(cls, files: list[FileChange]) -> "CommitStats":
        """Sum per-file counters into aggregate stats."""
        return cls.from_counts(
            sum(f.additions for f in files), sum(f.deletions for f in files)
        )


class CommitSummary(BaseModel):
    """One entry of a repository's commit list."""

    sha: str
    message: str
    author: str
    date: str
    url: str


class CommitDetail(CommitSummary):
    """Commit metadata together with its statistics and file changes.

    This is the canonical record every review request is normalised into,
    whether it came from GitHub or from a raw diff.
    """

    stats: CommitStats = Field(default_factory=CommitStats)
    files: list[FileChange] = Field(default_factory=list)

    @property
    def is_direct_diff(self) -> bool:
        """True when the record was built from diff text rather than GitHub."""
        return self.sha == DIRECT_DIFF_SHA
