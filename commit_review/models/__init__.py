"""Data models for the commit review agent."""

from .commit_types import CommitDetail, CommitStats, CommitSummary, FileChange, RepoRef
from .conversation import ConversationThread
from .requests import DiffPayload, GithubRef, ReviewRequest, ReviewResponse

__all__ = [
    "CommitDetail",
    "CommitStats",
    "CommitSummary",
    "FileChange",
    "RepoRef",
    "ConversationThread",
    "GithubRef",
    "DiffPayload",
    "ReviewRequest",
    "ReviewResponse",
]
