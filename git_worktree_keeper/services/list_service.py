"""The ``list`` command: worktree table or JSON."""

import json
from dataclasses import dataclass
from typing import Optional, Sequence

from rich.text import Text

from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import ListItem, WorktreeEntry
from git_worktree_keeper.output.context import OutputContext
from git_worktree_keeper.services.git.worktrees import WorktreeService
from git_worktree_keeper.services.layout_service import calculate_responsive_layout
from git_worktree_keeper.services.render_service import format_header_line, format_list_item_line

logger = get_logger(__name__)


@dataclass
class SummaryMetrics:
    """Counts shown under the table."""

    worktrees: int = 0
    branches: int = 0
    dirty_worktrees: int = 0
    ahead_items: int = 0
    behind_items: int = 0

    def update(self, item: ListItem) -> None:
        info = item.worktree_info()
        if info is not None:
            self.worktrees += 1
            if info.is_dirty:
                self.dirty_worktrees += 1
        else:
            self.branches += 1
        if item.counts.ahead:
            self.ahead_items += 1
        if item.counts.behind:
            self.behind_items += 1

    def describe(self, include_branches: bool) -> str:
        """e.g. ``3 worktrees, 1 with changes, 2 ahead``."""
        parts = []
        if include_branches:
            parts.append(f"{self.worktrees} worktrees")
            if self.branches:
                parts.append(f"{self.branches} branches")
        else:
            plural = "" if self.worktrees == 1 else "s"
            parts.append(f"{self.worktrees} worktree{plural}")
        if self.dirty_worktrees:
            parts.append(f"{self.dirty_worktrees} with changes")
        if self.ahead_items:
            parts.append(f"{self.ahead_items} ahead")
        if self.behind_items:
            parts.append(f"{self.behind_items} behind")
        return ", ".join(parts)


def display_summary(ctx: OutputContext, items: Sequence[ListItem], include_branches: bool) -> None:
    """Print the summary line, or how to get started when there is nothing to list."""
    ctx.print()
    if not items:
        ctx.hint("No worktrees found")
        ctx.hint("Create one with: wt switch --create <branch>")
        return

    metrics = SummaryMetrics()
    for item in items:
        metrics.update(item)
    ctx.print(Text(f"Showing {metrics.describe(include_branches)}", style=ctx.theme.dim))


def render_table(
    ctx: OutputContext,
    items: Sequence[ListItem],
    current_path: Optional[str],
    include_branches: bool,
    terminal_width: int,
) -> None:
    """Header, one line per item, then the summary. An empty list only gets the summary hints."""
    if items:
        layout = calculate_responsive_layout(items, terminal_width)
        format_header_line(ctx, layout)
        for item in items:
            format_list_item_line(ctx, item, layout, current_path)
    display_summary(ctx, items, include_branches)


def render_json(ctx: OutputContext, items: Sequence[ListItem]) -> None:
    ctx.print(json.dumps([item.to_dict() for item in items], indent=2))


def handle_list(
    ctx: OutputContext,
    service: WorktreeService,
    output_format: str = "table",
    show_branches: bool = False,
    terminal_width: Optional[int] = None,
) -> None:
    """
    List worktrees (and branches without one when ``show_branches``).

    Args:
        ctx: Output context
        service: Worktree service for the current repository
        output_format: ``table`` or ``json``
        show_branches: Include branches that have no worktree
        terminal_width: Width to fit the table to; the console width when None
    """
    data = service.gather_list_data(show_branches=show_branches)
    worktree_count = sum(1 for item in data.items if isinstance(item, WorktreeEntry))
    logger.debug(f"Listing {worktree_count} worktrees, {len(data.items) - worktree_count} branches")

    if output_format == "json":
        render_json(ctx, data.items)
        return

    width = terminal_width if terminal_width is not None else ctx.console.width
    render_table(ctx, data.items, data.current_worktree_path, show_branches, width)
