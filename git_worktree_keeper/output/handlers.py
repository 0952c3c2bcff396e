"""Output handlers for worktree operations."""

import os
from typing import Optional

from rich.text import Text

from git_worktree_keeper.constants import PROGRESS_EMOJI, SUCCESS_EMOJI
from git_worktree_keeper.formatters.messages import format_with_gutter
from git_worktree_keeper.models.results import (
    AlreadyOnDefault,
    CreatedWorktree,
    ExistingWorktree,
    RemovedOtherWorktree,
    RemovedWorktree,
    RemoveResult,
    SwitchedToDefault,
    SwitchResult,
)
from git_worktree_keeper.output.context import OutputContext
from git_worktree_keeper.shell import detect_shell
from git_worktree_keeper.theme import Theme


def _success_text(theme: Theme, *parts) -> Text:
    """Green success line; ``parts`` alternate plain and bold pieces."""
    text = Text(f"{SUCCESS_EMOJI} ")
    for index, part in enumerate(parts):
        text.append(part, style=theme.success_bold if index % 2 else theme.success)
    return text


def format_switch_message(result: SwitchResult, branch: str, theme: Optional[Theme] = None) -> Text:
    """Format message for switch operation (includes emoji and color)."""
    theme = theme or Theme()
    if isinstance(result, ExistingWorktree):
        return _success_text(theme, "Switched to worktree for ", branch, f" at {result.path}")
    if isinstance(result, CreatedWorktree):
        verb = "Created new worktree" if result.created_branch else "Added worktree"
        return _success_text(theme, f"{verb} for ", branch, f" at {result.path}")
    raise TypeError(f"Unknown switch result: {result!r}")


def format_remove_message(result: RemoveResult, theme: Optional[Theme] = None) -> Text:
    """Format message for remove operation (includes emoji and color)."""
    theme = theme or Theme()
    if isinstance(result, AlreadyOnDefault):
        return _success_text(theme, "Already on default branch ", result.branch)
    if isinstance(result, RemovedWorktree):
        return _success_text(theme, f"Removed worktree, returned to primary at {result.primary_path}")
    if isinstance(result, SwitchedToDefault):
        return _success_text(theme, "Switched to default branch ", result.branch)
    if isinstance(result, RemovedOtherWorktree):
        return _success_text(theme, "Removed worktree for ", result.branch)
    raise TypeError(f"Unknown remove result: {result!r}")


def shell_integration_hint(shell: Optional[str] = None) -> str:
    """How to turn on directive mode for the user's shell."""
    shell = shell or detect_shell(os.environ) or "<shell>"
    if shell == "fish":
        return "To enable automatic cd, add to your fish config: wt init fish | source"
    return f"To enable automatic cd, add to your shell config: eval \"$(wt init {shell})\""


def handle_switch_output(ctx: OutputContext, result: SwitchResult, branch: str) -> None:
    """Point the shell at the worktree and announce the switch."""
    ctx.change_directory(result.path)
    ctx.success(format_switch_message(result, branch, ctx.theme))


def handle_execute_output(ctx: OutputContext, execute: Optional[str]) -> None:
    """Run the ``--execute`` command, or explain how to get automatic cd."""
    if execute:
        ctx.progress(Text.assemble(f"{PROGRESS_EMOJI} ", ("Executing (--execute):", ctx.theme.progress)))
        ctx.progress(format_with_gutter(execute, ctx.theme))
        ctx.execute(execute)
    elif not ctx.is_directive:
        # Directive mode means the wrapper is already installed
        ctx.print()
        ctx.hint(shell_integration_hint())
    ctx.flush()


def handle_remove_output(ctx: OutputContext, result: RemoveResult) -> None:
    """Return the shell to the primary worktree when the current one was removed."""
    if isinstance(result, RemovedWorktree):
        ctx.change_directory(result.primary_path)
    ctx.success(format_remove_message(result, ctx.theme))
    if isinstance(result, RemovedWorktree) and not ctx.is_directive:
        ctx.hint(shell_integration_hint())
    ctx.flush()
