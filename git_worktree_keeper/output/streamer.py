"""Run user commands inside a worktree with merged, ordered output."""

import subprocess
from typing import TYPE_CHECKING

from git_worktree_keeper.constants import SIGNAL_EXIT_BASE
from git_worktree_keeper.exceptions import ChildProcessExited, CommandExecutionError
from git_worktree_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_keeper.output.context import OutputContext

logger = get_logger(__name__)


def _exit_status(returncode: int) -> int:
    """Shell-style status: a child killed by signal N reports 128 + N."""
    if returncode < 0:
        return SIGNAL_EXIT_BASE - returncode
    return returncode


def stream_command(ctx: "OutputContext", worktree_path: str, command: str) -> int:
    """
    Run ``command`` with ``sh -c`` in ``worktree_path`` and stream its output.

    Our own buffered messages are flushed first, so everything printed so far
    appears before the child's output. The child's stderr is pointed at the
    same pipe as its stdout when it is spawned, so both streams arrive in the
    order the child wrote them with no reader threads involved. Each line is
    re-emitted on stderr and flushed as soon as it arrives.

    Returns:
        The child's exit status (128 + N when killed by signal N)

    Raises:
        CommandExecutionError: The command could not be started
    """
    ctx.flush()
    sink = ctx.child_stream
    logger.debug(f"Running in {worktree_path}: {command}")

    try:
        process = subprocess.Popen(
            ["sh", "-c", command],
            cwd=worktree_path,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except OSError as e:
        raise CommandExecutionError(command, str(e)) from e

    with process:
        for raw_line in iter(process.stdout.readline, b""):
            line = raw_line.decode("utf-8", errors="replace").rstrip("\r\n")
            sink.write(line + "\n")
            sink.flush()
        returncode = process.wait()

    status = _exit_status(returncode)
    logger.debug(f"Command exited with status {status}")
    return status


def execute_command_in_worktree(ctx: "OutputContext", worktree_path: str, command: str) -> None:
    """
    Execute a command in a worktree directory.

    Output is streamed line by line through :func:`stream_command`. The
    directive stream is terminated on the way out whether the command
    succeeds or not (the sentinel in directive mode, nothing in interactive
    mode).

    Raises:
        ChildProcessExited: The command exited non-zero; carries its status
        CommandExecutionError: The command could not be started
    """
    try:
        status = stream_command(ctx, worktree_path, command)
        if status != 0:
            raise ChildProcessExited(status, f"Command failed with exit code: {status}")
        ctx.flush()
    finally:
        ctx.terminate_output()
