"""Review the latest commit of a GitHub repository or a local diff file.

Usage:
    python scripts/review_commit.py --repo-url https://github.com/vercel/next.js
    git diff | python scripts/review_commit.py --diff-file - --author me
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent / ".env.local"
load_dotenv(env_path)

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from commit_review.api.handlers.review_handler import handle_code_review
from commit_review.errors import CodeReviewError
from commit_review.models.requests import DiffPayload, GithubRef, ReviewRequest
from commit_review.utils.logging import setup_observability


def build_request(args: argparse.Namespace) -> ReviewRequest:
    """Turn command line arguments into a review request."""
    if args.repo_url:
        return GithubRef(repo_url=args.repo_url)

    if args.diff_file == "-":
        diff_content = sys.stdin.read()
    else:
        diff_content = Path(args.diff_file).read_text(encoding="utf-8")

    return DiffPayload(
        diff_content=diff_content,
        commit_message=args.message,
        author=args.author,
        commit_sha=args.sha,
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Review a commit with the LLM agent")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--repo-url", help="GitHub repository URL")
    source.add_argument("--diff-file", help="Unified diff file, or '-' for stdin")
    parser.add_argument("--message", help="Commit message for a diff review")
    parser.add_argument("--author", help="Author for a diff review")
    parser.add_argument("--sha", help="Commit SHA for a diff review")
    parser.add_argument(
        "--verbose", action="store_true", help="Log at DEBUG level to stderr"
    )
    args = parser.parse_args()

    setup_observability("DEBUG" if args.verbose else None)

    try:
        asyncio.run(handle_code_review(build_request(args)))
    except CodeReviewError as e:
        print(f"\nReview failed: {e}", file=sys.stderr)
        return 1

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
