"""Git-related services for git-worktree-keeper."""

from .worktrees import WorktreeService, parse_worktree_porcelain

__all__ = [
    "WorktreeService",
    "parse_worktree_porcelain",
]
