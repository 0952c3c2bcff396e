"""Responsive column layout for worktree listings.

Column widths are computed from the data on every call:

1. A column's natural width is the widest cell (in terminal cells) among the
   items and its header label. Columns no item has data for are dropped.
2. While the table is wider than the terminal, truncatable columns give up
   width in ``TRUNCATION_PRIORITY`` order (path first, then branch) down to
   their minimum width. The other columns keep their natural width.

When even the minimum widths do not fit, the minimum layout is returned and
the terminal wraps it.
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from rich.cells import cell_len

from git_worktree_keeper.constants import (
    COLUMN_SEPARATOR,
    COLUMNS,
    COLUMNS_BY_ID,
    SYMBOL_AHEAD,
    SYMBOL_BEHIND,
    SYMBOL_DIRTY,
    SYMBOL_PRIMARY,
    SYMBOL_WORKTREE,
    TRUNCATION_PRIORITY,
    ColumnId,
    ci_symbol,
)
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import ListItem

logger = get_logger(__name__)


@dataclass(frozen=True)
class Layout:
    """Widths of the visible columns, in display order."""

    column_widths: Dict[ColumnId, int]
    visible_columns: Tuple[ColumnId, ...]

    @property
    def total_width(self) -> int:
        return table_width(self.column_widths)


def table_width(column_widths: Dict[ColumnId, int]) -> int:
    """Width of a line with these columns, separators included."""
    if not column_widths:
        return 0
    separators = cell_len(COLUMN_SEPARATOR) * (len(column_widths) - 1)
    return sum(column_widths.values()) + separators


def format_marker(item: ListItem) -> str:
    info = item.worktree_info()
    if info is None:
        return ""
    return SYMBOL_PRIMARY if info.is_primary else SYMBOL_WORKTREE


def format_state(item: ListItem) -> str:
    """Dirty indicator plus ahead/behind markers, e.g. ``* ↑2 ↓1``."""
    parts = []
    info = item.worktree_info()
    if info is not None and info.is_dirty:
        parts.append(SYMBOL_DIRTY)
    counts = item.counts
    if counts.ahead:
        parts.append(f"{SYMBOL_AHEAD}{counts.ahead}")
    if counts.behind:
        parts.append(f"{SYMBOL_BEHIND}{counts.behind}")
    return " ".join(parts)


def format_diff_stats(item: ListItem) -> str:
    info = item.worktree_info()
    if info is None or not info.is_dirty:
        return ""
    added, deleted = info.working_tree_diff
    return f"+{added} -{deleted}"


def format_path(item: ListItem) -> str:
    """Worktree path followed by its diff stats, e.g. ``/src/repo.feat  +3 -1``."""
    info = item.worktree_info()
    if info is None:
        return ""
    stats = format_diff_stats(item)
    return f"{info.path}  {stats}" if stats else info.path


def column_text(item: ListItem, column: ColumnId) -> str:
    """Plain text of one cell, before padding or truncation."""
    if column is ColumnId.MARKER:
        return format_marker(item)
    if column is ColumnId.BRANCH:
        return item.branch_name or "(detached)"
    if column is ColumnId.STATE:
        return format_state(item)
    if column is ColumnId.PATH:
        return format_path(item)
    if column is ColumnId.CI:
        return ci_symbol(item.ci_status)
    raise ValueError(f"Unknown column: {column}")


def calculate_responsive_layout(items: Sequence[ListItem], terminal_width: int) -> Layout:
    """
    Fit the listing columns to ``terminal_width``.

    Args:
        items: Items in display order
        terminal_width: Available width in cells

    Returns:
        Layout whose total width is at most ``terminal_width``, or the
        minimum layout when the terminal is narrower than that
    """
    widths: Dict[ColumnId, int] = {}
    for column in COLUMNS:
        data_width = max((cell_len(column_text(item, column.id)) for item in items), default=0)
        if data_width == 0:
            continue
        widths[column.id] = max(data_width, cell_len(column.label))

    overflow = table_width(widths) - terminal_width
    for column_id in TRUNCATION_PRIORITY:
        if overflow <= 0:
            break
        if column_id not in widths:
            continue
        floor = min(widths[column_id], COLUMNS_BY_ID[column_id].min_width)
        shrink = min(overflow, widths[column_id] - floor)
        widths[column_id] -= shrink
        overflow -= shrink

    if overflow > 0:
        logger.debug(f"Terminal width {terminal_width} is below the minimum table width")

    visible = tuple(column.id for column in COLUMNS if column.id in widths)
    return Layout(column_widths=widths, visible_columns=visible)
