"""Unified diff parsing into per-file change records."""

import logging
import re

from pydantic import BaseModel, Field

from commit_review.models.commit_types import CommitStats, FileChange

logger = logging.getLogger(__name__)

_FILE_HEADER = re.compile(r"^diff --git a/(.+?) b/(.+)$")


class ParsedDiff(BaseModel):
    """Files and aggregate statistics extracted from diff text."""

    files: list[FileChange] = Field(default_factory=list)
    stats: CommitStats = Field(default_factory=CommitStats)


class _Section:
    """Accumulator for the file section currently being scanned."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        self.additions = 0
        self.deletions = 0
        self.lines: list[str] = []

    def to_file_change(self) -> FileChange:
        return FileChange(
            filename=self.filename,
            additions=self.additions,
            deletions=self.deletions,
            changes=self.additions + self.deletions,
            status="modified",
            patch="".join(self.lines),
        )


def parse_unified_diff(diff_text: str) -> ParsedDiff:
    """Parse unified diff text into ordered file changes.

    Each ``diff --git a/<old> b/<new>`` line starts a new section named after
    the post-image path. ``+``/``-`` lines count as additions/deletions
    unless they are ``+++``/``---`` file headers. Lines seen before the first
    section header are dropped. Every section is reported as ``modified``;
    added, deleted and renamed files are not told apart. Diffs with CRLF line
    endings keep the carriage return in the patch but not in the filename.

    Args:
        diff_text: Raw output of ``git diff`` (may cover several files)

    Returns:
        ParsedDiff with files in order of appearance and summed stats
    """
    files: list[FileChange] = []
    current: _Section | None = None

    lines = diff_text.split("\n")
    if lines[-1] == "":
        # Newline-terminated input leaves an empty trailing piece
        lines.pop()

    for line in lines:
        header = _FILE_HEADER.match(line.rstrip("\r"))
        if header:
            if current is not None:
                files.append(current.to_file_change())
            current = _Section(header.group(2))
        elif current is not None:
            if line.startswith("+") and not line.startswith("+++"):
                current.additions += 1
            elif line.startswith("-") and not line.startswith("---"):
                current.deletions += 1

        if current is not None:
            current.lines.append(line + "\n")

    if current is not None:
        files.append(current.to_file_change())

    stats = CommitStats.from_files(files)
    logger.debug(
        f"Parsed diff: {len(files)} files, +{stats.additions} -{stats.deletions}"
    )
    return ParsedDiff(files=files, stats=stats)
