"""Command services for git-worktree-keeper."""

from .git import WorktreeService
from .hook_service import run_hooks
from .layout_service import Layout, calculate_responsive_layout
from .list_service import handle_list

__all__ = [
    "WorktreeService",
    "run_hooks",
    "Layout",
    "calculate_responsive_layout",
    "handle_list",
]
