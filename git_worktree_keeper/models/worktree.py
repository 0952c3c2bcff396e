"""Worktree and branch listing models."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from git_worktree_keeper.constants import CiStatus


@dataclass(frozen=True)
class Counts:
    """Commits ahead of and behind the default branch."""

    ahead: int = 0
    behind: int = 0


@dataclass
class WorktreeInfo:
    """Information about a git worktree."""

    path: str  # Absolute
    branch: Optional[str]  # None = detached HEAD
    head: str = ""
    is_primary: bool = False
    working_tree_diff: Tuple[int, int] = (0, 0)  # (added, deleted) lines
    counts: Counts = field(default_factory=Counts)
    ci_status: Optional[CiStatus] = None

    @property
    def is_dirty(self) -> bool:
        added, deleted = self.working_tree_diff
        return added > 0 or deleted > 0

    def __str__(self) -> str:
        """String representation of worktree."""
        main_marker = " (primary)" if self.is_primary else ""
        return f"{self.branch or '(detached)'} @ {self.path}{main_marker}"


@dataclass
class BranchInfo:
    """A local branch without a worktree."""

    name: str
    head: str = ""
    counts: Counts = field(default_factory=Counts)
    ci_status: Optional[CiStatus] = None


@dataclass
class WorktreeEntry:
    """Listing item for a worktree."""

    info: WorktreeInfo

    @property
    def counts(self) -> Counts:
        return self.info.counts

    @property
    def branch_name(self) -> Optional[str]:
        return self.info.branch

    @property
    def ci_status(self) -> Optional[CiStatus]:
        return self.info.ci_status

    def worktree_info(self) -> Optional[WorktreeInfo]:
        return self.info

    def to_dict(self) -> dict:
        added, deleted = self.info.working_tree_diff
        return {
            "type": "worktree",
            "branch": self.info.branch,
            "path": self.info.path,
            "head": self.info.head,
            "is_primary": self.info.is_primary,
            "working_tree_diff": {"added": added, "deleted": deleted},
            "ahead": self.info.counts.ahead,
            "behind": self.info.counts.behind,
            "ci_status": self.info.ci_status.value if self.info.ci_status else None,
        }


@dataclass
class BranchEntry:
    """Listing item for a branch that has no worktree."""

    info: BranchInfo

    @property
    def counts(self) -> Counts:
        return self.info.counts

    @property
    def branch_name(self) -> Optional[str]:
        return self.info.name

    @property
    def ci_status(self) -> Optional[CiStatus]:
        return self.info.ci_status

    def worktree_info(self) -> Optional[WorktreeInfo]:
        return None

    def to_dict(self) -> dict:
        return {
            "type": "branch",
            "branch": self.info.name,
            "head": self.info.head,
            "ahead": self.info.counts.ahead,
            "behind": self.info.counts.behind,
            "ci_status": self.info.ci_status.value if self.info.ci_status else None,
        }


ListItem = Union[WorktreeEntry, BranchEntry]


@dataclass
class ListData:
    """Items to list, in repository order, and the worktree we are in."""

    items: List[ListItem]
    current_worktree_path: Optional[str] = None
