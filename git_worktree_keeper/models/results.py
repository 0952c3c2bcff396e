"""Outcomes of switch and remove operations."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ExistingWorktree:
    """Switched to a worktree that already existed."""

    path: str


@dataclass(frozen=True)
class CreatedWorktree:
    """Added a worktree; ``created_branch`` is True when the branch is new too."""

    path: str
    created_branch: bool


SwitchResult = Union[ExistingWorktree, CreatedWorktree]


@dataclass(frozen=True)
class AlreadyOnDefault:
    branch: str


@dataclass(frozen=True)
class RemovedWorktree:
    """Removed the current worktree; the shell should return to the primary."""

    primary_path: str


@dataclass(frozen=True)
class SwitchedToDefault:
    """The primary worktree was switched back to the default branch."""

    branch: str


@dataclass(frozen=True)
class RemovedOtherWorktree:
    branch: str


RemoveResult = Union[AlreadyOnDefault, RemovedWorktree, SwitchedToDefault, RemovedOtherWorktree]
