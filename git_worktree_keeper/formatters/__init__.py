"""Formatting utilities for git-worktree-keeper.

This package provides formatting functions organized into logical modules:
- messages: Styled error/warning/hint/success messages and gutter blocks
- cells: Cell-width aware padding and truncation for table columns
- diff: Parsing of git diff statistics
"""

# Message formatters
from .messages import (
    format_error,
    format_error_block,
    format_error_with_bold,
    format_hint,
    format_progress,
    format_success,
    format_warning,
    format_with_gutter,
)

# Cell formatters
from .cells import fit_cell, fit_text

# Diff formatters
from .diff import DiffStats, parse_diff_shortstat

__all__ = [
    # Messages
    "format_error",
    "format_error_block",
    "format_error_with_bold",
    "format_hint",
    "format_progress",
    "format_success",
    "format_warning",
    "format_with_gutter",
    # Cells
    "fit_cell",
    "fit_text",
    # Diff
    "DiffStats",
    "parse_diff_shortstat",
]
