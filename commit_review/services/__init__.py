"""Services for diff parsing, GitHub access and request normalisation."""

from commit_review.services.diff_parser import ParsedDiff, parse_unified_diff
from commit_review.services.github_commits import GitHubCommitFetcher

__all__ = ["GitHubCommitFetcher", "ParsedDiff", "parse_unified_diff"]
