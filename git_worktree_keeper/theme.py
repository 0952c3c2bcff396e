"""Terminal styles and the color on/off decision."""

import os
from dataclasses import dataclass, field
from typing import IO, Mapping, Optional

from rich.console import Console
from rich.style import Style

from git_worktree_keeper.constants import FORCE_COLOR_ENV_VARS, NO_COLOR_ENV_VARS


@dataclass(frozen=True)
class Theme:
    """Centralized theme for terminal output styling.

    Maps semantic roles to rich styles so every message and table cell draws
    from one place.
    """

    # Status/message styles
    error: Style = field(default_factory=lambda: Style(color="red"))
    warning: Style = field(default_factory=lambda: Style(color="yellow"))
    hint: Style = field(default_factory=lambda: Style(dim=True))
    success: Style = field(default_factory=lambda: Style(color="green"))
    progress: Style = field(default_factory=lambda: Style(color="cyan"))

    # Emphasis styles
    dim: Style = field(default_factory=lambda: Style(dim=True))
    error_bold: Style = field(default_factory=lambda: Style(color="red", bold=True))
    success_bold: Style = field(default_factory=lambda: Style(color="green", bold=True))

    # Worktree-specific styles
    header: Style = field(default_factory=lambda: Style(bold=True))
    primary: Style = field(default_factory=lambda: Style(color="cyan"))
    current: Style = field(default_factory=lambda: Style(color="magenta", bold=True))

    # Diff/stat styles
    addition: Style = field(default_factory=lambda: Style(color="green"))
    deletion: Style = field(default_factory=lambda: Style(color="red"))
    neutral: Style = field(default_factory=lambda: Style(color="yellow"))


def should_use_color_with_env(no_color: bool, force_color: bool, is_terminal: bool) -> bool:
    """Decide whether to color output: force wins over disable, which wins over the TTY check."""
    if force_color:
        return True
    if no_color:
        return False
    return is_terminal


def _is_terminal(stream: Optional[IO[str]]) -> bool:
    if stream is None:
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty()) if isatty else False
    except ValueError:
        # Closed stream
        return False


def should_use_color(stream: Optional[IO[str]], environ: Optional[Mapping[str, str]] = None) -> bool:
    """Decide whether output written to ``stream`` should carry color."""
    env = os.environ if environ is None else environ
    return should_use_color_with_env(
        no_color=any(name in env for name in NO_COLOR_ENV_VARS),
        force_color=any(name in env for name in FORCE_COLOR_ENV_VARS),
        is_terminal=_is_terminal(stream),
    )


def make_console(stream: IO[str], color: bool) -> Console:
    """Build a rich console bound to ``stream`` with an explicit color decision.

    Soft wrapping is on so table lines are never re-wrapped by rich; the
    layout engine already fitted them to the terminal width.
    """
    return Console(
        file=stream,
        force_terminal=color,
        no_color=not color,
        color_system="standard" if color else None,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
    )
