"""Project hooks run after a worktree is created."""

import sys
from typing import IO, List, Optional

from rich.prompt import Confirm
from rich.text import Text

from git_worktree_keeper.constants import PROGRESS_EMOJI, WARNING_EMOJI
from git_worktree_keeper.exceptions import (
    CommandNotApproved,
    HookCommandFailed,
    NotInteractiveError,
)
from git_worktree_keeper.formatters.messages import format_with_gutter
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.output.context import OutputContext
from git_worktree_keeper.output.streamer import stream_command

logger = get_logger(__name__)


def approve_commands(
    ctx: OutputContext, commands: List[str], hook_type: str, stdin: Optional[IO[str]] = None
) -> None:
    """
    Ask once before running ``commands``.

    Raises:
        NotInteractiveError: stdin is not a terminal
        CommandNotApproved: The user declined
    """
    stdin = stdin if stdin is not None else sys.stdin
    if not stdin.isatty():
        raise NotInteractiveError()

    ctx.warning(
        Text.assemble(
            f"{WARNING_EMOJI} ",
            (f"This repository wants to run {len(commands)} {hook_type} command(s):", ctx.theme.warning),
        )
    )
    for command in commands:
        ctx.print(format_with_gutter(command, ctx.theme))

    if not Confirm.ask("Allow and run?", console=ctx.console, default=False, stream=stdin):
        logger.info(f"User declined {hook_type} commands")
        raise CommandNotApproved()


def run_hooks(
    ctx: OutputContext,
    commands: List[str],
    worktree_path: str,
    hook_type: str,
    force: bool = False,
    stdin: Optional[IO[str]] = None,
) -> None:
    """
    Run ``commands`` one after another inside ``worktree_path``.

    Args:
        ctx: Output context; hook output goes to its child stream
        commands: Shell commands, in configuration order
        worktree_path: Working directory for the commands
        hook_type: Hook name used in messages (e.g. ``post-create``)
        force: Skip the approval prompt
        stdin: Stream to prompt on (defaults to sys.stdin)

    Raises:
        HookCommandFailed: A command exited non-zero; later commands are not run
    """
    if not commands:
        return
    if not force:
        approve_commands(ctx, commands, hook_type, stdin)

    for command in commands:
        ctx.progress(
            Text.assemble(f"{PROGRESS_EMOJI} ", (f"Running {hook_type} command:", ctx.theme.progress))
        )
        ctx.progress(format_with_gutter(command, ctx.theme))
        status = stream_command(ctx, worktree_path, command)
        if status != 0:
            raise HookCommandFailed(
                hook_type,
                f"exit status {status}",
                command_name=command,
                exit_code=status,
            )
        logger.debug(f"{hook_type} command succeeded: {command}")
