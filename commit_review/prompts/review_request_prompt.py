"""User prompt rendered from a commit detail for a single review run."""

from commit_review.models.commit_types import CommitDetail, FileChange

REVIEW_INSTRUCTIONS = """Please analyze this commit according to your code review guidelines and provide a detailed review report with:
1. Overview and summary
2. Detailed analysis of positive points and issues
3. Specific file-by-file review
4. Recommendations for improvement
5. Overall rating and action items

Focus on security, performance, code quality, best practices, architecture, and maintainability."""


def _render_file(file: FileChange) -> str:
    lines = [
        f"### {file.filename}",
        f"- Status: {file.status}",
        f"- Changes: +{file.additions} -{file.deletions} ({file.changes} total)",
    ]
    if file.patch:
        lines += ["", "**Code Changes:**", "```diff", file.patch.rstrip("\n"), "```"]
    return "\n".join(lines)


def build_review_prompt(detail: CommitDetail) -> str:
    """Render the review request for one commit.

    The output depends only on ``detail``, so identical commits always
    produce identical prompts. Files without a patch are listed with their
    counts only.
    """
    file_sections = "\n\n".join(_render_file(f) for f in detail.files)

    return f"""Please provide a comprehensive code review for the following commit:

**Commit Information:**
- SHA: {detail.sha}
- Message: {detail.message}
- Author: {detail.author}
- Date: {detail.date}
- URL: {detail.url}

**Statistics:**
- Files changed: {len(detail.files)}
- Lines added: {detail.stats.additions}
- Lines deleted: {detail.stats.deletions}
- Total changes: {detail.stats.total}

**File Changes:**

{file_sections}

{REVIEW_INSTRUCTIONS}"""
