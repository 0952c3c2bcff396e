"""Shared constants for git-worktree-keeper."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class ColumnId(Enum):
    """Columns of the worktree listing, in display order."""

    MARKER = "marker"
    BRANCH = "branch"
    STATE = "state"
    PATH = "path"
    CI = "ci"


class Truncation(Enum):
    """How a column shrinks when the table does not fit."""

    NONE = "none"
    MIDDLE = "middle"
    END = "end"


@dataclass(frozen=True)
class ColumnDefinition:
    """Definition of a table column."""

    id: ColumnId
    label: str
    truncation: Truncation = Truncation.NONE
    min_width: int = 0  # Only meaningful for truncatable columns


# Display order of the listing
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition(ColumnId.MARKER, ""),
    ColumnDefinition(ColumnId.BRANCH, "Branch", Truncation.END, min_width=8),
    ColumnDefinition(ColumnId.STATE, "State"),
    ColumnDefinition(ColumnId.PATH, "Path", Truncation.MIDDLE, min_width=12),
    ColumnDefinition(ColumnId.CI, "CI"),
]

COLUMNS_BY_ID: Dict[ColumnId, ColumnDefinition] = {col.id: col for col in COLUMNS}

# Columns are shrunk in this order until the table fits
TRUNCATION_PRIORITY: List[ColumnId] = [ColumnId.PATH, ColumnId.BRANCH]

COLUMN_SEPARATOR = "  "
ELLIPSIS = "…"

# Cells of the path kept in front of the ellipsis by middle truncation
MIDDLE_ELLIPSIS_PREFIX = 4


# Listing symbols
SYMBOL_CURRENT = "@"
SYMBOL_PRIMARY = "^"
SYMBOL_WORKTREE = "+"
SYMBOL_DIRTY = "*"
SYMBOL_AHEAD = "↑"
SYMBOL_BEHIND = "↓"


class CiStatus(Enum):
    """CI status of a branch, supplied by the caller."""

    PASSED = "passed"
    FAILED = "failed"
    RUNNING = "running"
    NO_CI = "no-ci"


CI_SYMBOLS: Dict[CiStatus, str] = {
    CiStatus.PASSED: "✓",
    CiStatus.FAILED: "✗",
    CiStatus.RUNNING: "●",
    CiStatus.NO_CI: "",
}


# Message emojis
PROGRESS_EMOJI = "🔄"
SUCCESS_EMOJI = "✅"
ERROR_EMOJI = "❌"
WARNING_EMOJI = "🟡"
HINT_EMOJI = "💡"

GUTTER = "┃ "


# Shell integration
DIRECTIVES_ENV_VAR = "WT_DIRECTIVES"
DIRECTIVE_CHANGE_DIR = "CHANGE_DIR"
DIRECTIVE_EXEC = "EXEC"
DIRECTIVE_SENTINEL = "\0"
SUPPORTED_SHELLS = ("bash", "zsh", "fish")

# Color decision inputs
NO_COLOR_ENV_VARS = ("NO_COLOR",)
FORCE_COLOR_ENV_VARS = ("FORCE_COLOR", "CLICOLOR_FORCE")


# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
SIGNAL_EXIT_BASE = 128


# Hooks are read from git config keys under this section
HOOK_CONFIG_SECTION = "wt"
POST_CREATE_HOOK = "post-create"


def ci_symbol(status: Optional[CiStatus]) -> str:
    """Symbol for a CI status, empty when unknown."""
    if status is None:
        return ""
    return CI_SYMBOLS.get(status, "")
