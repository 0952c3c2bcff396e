"""Styled message formatting.

Every helper returns a ``rich.text.Text``; whether the styles turn into
escape codes is decided by the console that prints it, so the same message
degrades to plain text when color is off.
"""

from typing import Optional

from rich.text import Text

from git_worktree_keeper.constants import (
    ERROR_EMOJI,
    GUTTER,
    HINT_EMOJI,
    PROGRESS_EMOJI,
    SUCCESS_EMOJI,
    WARNING_EMOJI,
)
from git_worktree_keeper.theme import Theme


def _with_emoji(emoji: str, msg: str, style) -> Text:
    return Text.assemble(f"{emoji} ", (msg, style))


def format_error(msg: str, theme: Optional[Theme] = None) -> Text:
    """Format an error message with red color and ❌ emoji."""
    theme = theme or Theme()
    return _with_emoji(ERROR_EMOJI, msg, theme.error)


def format_warning(msg: str, theme: Optional[Theme] = None) -> Text:
    """Format a warning message with yellow color and 🟡 emoji."""
    theme = theme or Theme()
    return _with_emoji(WARNING_EMOJI, msg, theme.warning)


def format_hint(msg: str, theme: Optional[Theme] = None) -> Text:
    """Format a hint message with dim color and 💡 emoji."""
    theme = theme or Theme()
    return _with_emoji(HINT_EMOJI, msg, theme.hint)


def format_success(msg: str, theme: Optional[Theme] = None) -> Text:
    theme = theme or Theme()
    return _with_emoji(SUCCESS_EMOJI, msg, theme.success)


def format_progress(msg: str, theme: Optional[Theme] = None) -> Text:
    theme = theme or Theme()
    return _with_emoji(PROGRESS_EMOJI, msg, theme.progress)


def format_error_with_bold(
    prefix: str, emphasized: str, suffix: str, theme: Optional[Theme] = None
) -> Text:
    """
    Format an error message with bold emphasis on one part.

    Example:
        format_error_with_bold("Branch ", "feature-x", " already exists")
    """
    theme = theme or Theme()
    text = Text.assemble(f"{ERROR_EMOJI} ", (prefix, theme.error))
    if emphasized:
        text.append(emphasized, style=theme.error_bold)
    if suffix:
        text.append(suffix, style=theme.error)
    return text


def format_with_gutter(content: str, theme: Optional[Theme] = None) -> Text:
    """
    Indent a block (command, git output, file list) behind a dim gutter.

    Args:
        content: Block to show; trailing newlines are dropped

    Returns:
        One gutter-prefixed line per content line, without a trailing newline
    """
    theme = theme or Theme()
    lines = content.rstrip("\n").split("\n")
    text = Text()
    for index, line in enumerate(lines):
        if index:
            text.append("\n")
        text.append(GUTTER, style=theme.dim)
        text.append(line)
    return text


def format_error_block(header: Text, error: str, theme: Optional[Theme] = None) -> Text:
    """Format an error header followed by the gutter-indented error output."""
    trimmed = error.strip()
    if not trimmed:
        return header
    block = header.copy()
    block.append("\n")
    block.append_text(format_with_gutter(trimmed, theme))
    return block
