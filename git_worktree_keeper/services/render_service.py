"""Line-by-line rendering of worktree listings."""

import os
from typing import Optional

from rich.style import Style
from rich.text import Text

from git_worktree_keeper.constants import (
    COLUMN_SEPARATOR,
    COLUMNS_BY_ID,
    SYMBOL_AHEAD,
    SYMBOL_BEHIND,
    SYMBOL_CURRENT,
    SYMBOL_DIRTY,
    CiStatus,
    ColumnId,
)
from git_worktree_keeper.formatters.cells import fit_cell, fit_text
from git_worktree_keeper.models.worktree import ListItem
from git_worktree_keeper.output.context import OutputContext
from git_worktree_keeper.services.layout_service import Layout, column_text
from git_worktree_keeper.theme import Theme


def is_current_worktree(item: ListItem, current_path: Optional[str]) -> bool:
    """Compare the item's worktree with ``current_path`` after resolving symlinks."""
    info = item.worktree_info()
    if info is None or not current_path:
        return False
    return os.path.realpath(info.path) == os.path.realpath(current_path)


def _state_cell(item: ListItem, theme: Theme) -> Text:
    text = Text()
    info = item.worktree_info()
    parts = []
    if info is not None and info.is_dirty:
        parts.append((SYMBOL_DIRTY, theme.neutral))
    if item.counts.ahead:
        parts.append((f"{SYMBOL_AHEAD}{item.counts.ahead}", theme.addition))
    if item.counts.behind:
        parts.append((f"{SYMBOL_BEHIND}{item.counts.behind}", theme.deletion))
    for index, (part, style) in enumerate(parts):
        if index:
            text.append(" ")
        text.append(part, style=style)
    return text


def _path_cell(item: ListItem, theme: Theme) -> Text:
    info = item.worktree_info()
    if info is None:
        return Text()
    text = Text(info.path, style=theme.dim)
    if info.is_dirty:
        added, deleted = info.working_tree_diff
        text.append("  ")
        text.append(f"+{added}", style=theme.addition)
        text.append(" ")
        text.append(f"-{deleted}", style=theme.deletion)
    return text


def _ci_style(item: ListItem, theme: Theme) -> Optional[Style]:
    return {
        CiStatus.PASSED: theme.addition,
        CiStatus.FAILED: theme.deletion,
        CiStatus.RUNNING: theme.neutral,
    }.get(item.ci_status)


def _styled_cell(item: ListItem, column: ColumnId, theme: Theme, is_current: bool) -> Text:
    """Cell text with styles; its plain text matches ``column_text``."""
    info = item.worktree_info()
    is_primary = info is not None and info.is_primary
    if column is ColumnId.MARKER:
        if is_current:
            return Text(SYMBOL_CURRENT, style=theme.current)
        return Text(column_text(item, column), style=theme.primary if is_primary else theme.dim)
    if column is ColumnId.BRANCH:
        if is_current:
            style = theme.current
        elif is_primary:
            style = theme.primary
        else:
            style = ""
        return Text(column_text(item, column), style=style)
    if column is ColumnId.STATE:
        return _state_cell(item, theme)
    if column is ColumnId.PATH:
        return _path_cell(item, theme)
    return Text(column_text(item, column), style=_ci_style(item, theme) or "")


def format_header_line(ctx: OutputContext, layout: Layout) -> None:
    """Emit the header line for ``layout``."""
    cells = [
        fit_cell(
            COLUMNS_BY_ID[column].label,
            layout.column_widths[column],
            COLUMNS_BY_ID[column].truncation,
        )
        for column in layout.visible_columns
    ]
    ctx.print(Text(COLUMN_SEPARATOR.join(cells).rstrip(), style=ctx.theme.header))


def format_list_item_line(
    ctx: OutputContext, item: ListItem, layout: Layout, current_path: Optional[str]
) -> None:
    """Emit one row, highlighting the worktree the user is in."""
    is_current = is_current_worktree(item, current_path)
    line = Text()
    for index, column in enumerate(layout.visible_columns):
        if index:
            line.append(COLUMN_SEPARATOR)
        cell = _styled_cell(item, column, ctx.theme, is_current)
        line.append_text(fit_text(cell, layout.column_widths[column], COLUMNS_BY_ID[column].truncation))
    line.rstrip()
    ctx.print(line)
