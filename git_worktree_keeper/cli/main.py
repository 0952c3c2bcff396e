"""Command-line entry point for git-worktree-keeper."""

import os
import shlex
import sys
from typing import List, Optional

from rich.text import Text

from git_worktree_keeper.cli.args import parse_args
from git_worktree_keeper.config import Config
from git_worktree_keeper.constants import EXIT_FAILURE, EXIT_SUCCESS, POST_CREATE_HOOK
from git_worktree_keeper.exceptions import (
    NoWorktreeFoundError,
    OutputStreamError,
    WorktreeKeeperError,
    WorktreeMissingError,
    exit_code,
)
from git_worktree_keeper.formatters.messages import format_error
from git_worktree_keeper.logging_config import get_logger, setup_logging
from git_worktree_keeper.models.results import CreatedWorktree
from git_worktree_keeper.output.context import OutputContext
from git_worktree_keeper.output.handlers import (
    handle_execute_output,
    handle_remove_output,
    handle_switch_output,
)
from git_worktree_keeper.output.streamer import execute_command_in_worktree
from git_worktree_keeper.services.git.worktrees import WorktreeService
from git_worktree_keeper.services.hook_service import run_hooks
from git_worktree_keeper.services.list_service import handle_list
from git_worktree_keeper.shell import render_wrapper

logger = get_logger(__name__)


def handle_switch(
    ctx: OutputContext,
    service: WorktreeService,
    config: Config,
    branch: str,
    create: bool = False,
    base: Optional[str] = None,
    execute: Optional[str] = None,
) -> None:
    """Switch to (or create) the worktree for ``branch``, then run hooks and ``--execute``."""
    result = service.switch(branch, create=create, base=base)
    handle_switch_output(ctx, result, branch)

    if isinstance(result, CreatedWorktree) and not config.no_verify:
        commands = service.hook_commands(POST_CREATE_HOOK)
        run_hooks(ctx, commands, result.path, POST_CREATE_HOOK, force=config.force)

    handle_execute_output(ctx, execute)


def handle_remove(ctx: OutputContext, service: WorktreeService, branch: Optional[str] = None) -> None:
    result = service.remove(branch)
    handle_remove_output(ctx, result)


def handle_run(ctx: OutputContext, service: WorktreeService, branch: str, command_args: List[str]) -> None:
    """Run a command in ``branch``'s worktree; its exit status becomes ours."""
    if command_args and command_args[0] == "--":
        command_args = command_args[1:]
    worktree = service.find_worktree(branch)
    if worktree is None:
        raise NoWorktreeFoundError(branch)
    if not os.path.isdir(worktree.path):
        raise WorktreeMissingError(branch)

    # A single argument is already a shell command line
    command = command_args[0] if len(command_args) == 1 else shlex.join(command_args)
    execute_command_in_worktree(ctx, worktree.path, command)


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail again."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        logger.debug("Could not redirect stdout to devnull")


def _finish_output(ctx: OutputContext, status: int) -> int:
    """Terminate the directive stream; a closed stdout at this point fails the command."""
    try:
        ctx.terminate_output()
    except OutputStreamError as e:
        _silence_stdout()
        ctx.error(e)
        return status or e.exit_code
    return status


def run_command(ctx: OutputContext, parsed_args) -> int:
    """Dispatch the parsed command and map its outcome to an exit code."""
    try:
        config = Config(
            output_format=getattr(parsed_args, "output_format", "table"),
            show_branches=getattr(parsed_args, "show_branches", False),
            main_branch=parsed_args.main_branch,
            force=getattr(parsed_args, "force", False),
            no_verify=getattr(parsed_args, "no_verify", False),
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )

        if config.debug:
            logger.debug(f"Output mode: {ctx.mode.value}")
            for key, value in config.to_dict().items():
                logger.debug(f"  {key}: {value}")

        if parsed_args.command == "init":
            ctx.stdout.write(render_wrapper(parsed_args.shell))
            ctx.flush()
            return EXIT_SUCCESS

        service = WorktreeService(os.getcwd(), main_branch=config.main_branch)

        if parsed_args.command == "list":
            handle_list(ctx, service, config.output_format, config.show_branches)
        elif parsed_args.command == "switch":
            handle_switch(
                ctx,
                service,
                config,
                parsed_args.branch,
                create=parsed_args.create,
                base=parsed_args.base,
                execute=parsed_args.execute,
            )
        elif parsed_args.command == "remove":
            handle_remove(ctx, service, parsed_args.branch)
        elif parsed_args.command == "run":
            handle_run(ctx, service, parsed_args.branch, parsed_args.run_command)

        return EXIT_SUCCESS
    except OutputStreamError as e:
        _silence_stdout()
        ctx.error(e)
        return e.exit_code
    except WorktreeKeeperError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        ctx.error(e)
        return e.exit_code
    except BrokenPipeError:
        _silence_stdout()
        return EXIT_FAILURE
    except KeyboardInterrupt as e:
        ctx.error_console.print(Text("\nOperation cancelled by user", style=ctx.theme.warning))
        return exit_code(e)
    except Exception as e:
        ctx.error_console.print(format_error(f"Error: {e}", ctx.theme))
        if parsed_args.debug:
            ctx.error_console.print_exception()
        return exit_code(e)


def main(argv=None) -> int:
    """Main entry point for the application."""
    # Mode comes from the environment only, so usage errors are covered too
    ctx = OutputContext()
    status = EXIT_FAILURE
    try:
        parsed_args = parse_args(argv)
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)
        status = run_command(ctx, parsed_args)
    except SystemExit as e:
        # argparse usage errors and --version
        status = e.code if isinstance(e.code, int) else EXIT_FAILURE
        raise
    finally:
        # Every exit path, errors included, ends the directive stream
        status = _finish_output(ctx, status)
    return status


if __name__ == "__main__":
    sys.exit(main())
