"""Git diff utilities for parsing and formatting diff statistics."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class DiffStats:
    """Parsed ``git diff --shortstat`` output."""

    files: Optional[int] = None
    insertions: Optional[int] = None
    deletions: Optional[int] = None

    @property
    def added_deleted(self) -> Tuple[int, int]:
        """(added, deleted) with missing values counted as zero."""
        return (self.insertions or 0, self.deletions or 0)


def _leading_number(part: str) -> Optional[int]:
    words = part.split()
    if not words:
        return None
    try:
        return int(words[0])
    except ValueError:
        return None


def parse_diff_shortstat(output: str) -> DiffStats:
    """
    Parse ``git diff --shortstat`` output.

    Example input: " 3 files changed, 45 insertions(+), 12 deletions(-)"
    Empty output (no changes) yields a DiffStats with every field None.
    """
    stats = DiffStats()
    for part in output.split(","):
        part = part.strip()
        if "file" in part:
            stats.files = _leading_number(part)
        elif "insertion" in part:
            stats.insertions = _leading_number(part)
        elif "deletion" in part:
            stats.deletions = _leading_number(part)
    return stats
