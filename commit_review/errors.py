"""Exception types raised by the review pipeline."""


class CodeReviewError(Exception):
    """Base class for all review pipeline failures."""


class InvalidInputError(CodeReviewError, ValueError):
    """Raised when a review request or repository URL cannot be understood."""


class RemoteFetchError(CodeReviewError):
    """Raised when the GitHub API returns a non-success status or is unreachable."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class MissingUpstreamDataError(CodeReviewError):
    """Raised when the GitHub API returns no commits for a repository."""


class ReasoningEngineError(CodeReviewError):
    """Raised when the review model stream fails; partial output is discarded."""


class ReviewCancelledError(ReasoningEngineError):
    """Raised when the caller aborts a review while it is streaming."""
