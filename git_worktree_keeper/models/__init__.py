"""Data models for git-worktree-keeper."""

from .worktree import (
    BranchEntry,
    BranchInfo,
    Counts,
    ListData,
    ListItem,
    WorktreeEntry,
    WorktreeInfo,
)
from .results import (
    AlreadyOnDefault,
    CreatedWorktree,
    ExistingWorktree,
    RemovedOtherWorktree,
    RemovedWorktree,
    RemoveResult,
    SwitchedToDefault,
    SwitchResult,
)

__all__ = [
    # Listing
    "BranchEntry",
    "BranchInfo",
    "Counts",
    "ListData",
    "ListItem",
    "WorktreeEntry",
    "WorktreeInfo",
    # Results
    "AlreadyOnDefault",
    "CreatedWorktree",
    "ExistingWorktree",
    "RemovedOtherWorktree",
    "RemovedWorktree",
    "RemoveResult",
    "SwitchedToDefault",
    "SwitchResult",
]
