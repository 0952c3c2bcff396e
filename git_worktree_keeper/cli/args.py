"""Command-line argument parsing for git-worktree-keeper."""

import argparse

from git_worktree_keeper.__version__ import __version__
from git_worktree_keeper.constants import SUPPORTED_SHELLS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wt",
        description="Git worktree management with shell integration",
        epilog="Setup: add 'eval \"$(wt init bash)\"' (or zsh/fish) to your shell config "
        "so switch and remove can change your shell's directory",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-worktree-keeper {__version__}")
    parser.add_argument(
        "--main-branch",
        default=None,
        help="Default branch name (default: detect from origin/HEAD)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    list_parser = subparsers.add_parser("list", help="List worktrees")
    list_parser.add_argument(
        "--format",
        dest="output_format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    list_parser.add_argument(
        "--branches",
        dest="show_branches",
        action="store_true",
        help="Also list branches that have no worktree",
    )

    switch_parser = subparsers.add_parser("switch", help="Switch to a branch's worktree, creating it if needed")
    switch_parser.add_argument("branch", help="Branch name")
    switch_parser.add_argument("-c", "--create", action="store_true", help="Create a new branch")
    switch_parser.add_argument("-b", "--base", help="Base branch for --create (default: HEAD)")
    switch_parser.add_argument(
        "-x", "--execute", metavar="CMD", help="Command to run in the worktree after switching"
    )
    switch_parser.add_argument("--force", action="store_true", help="Skip approval prompts")
    switch_parser.add_argument(
        "--no-verify", action="store_true", help="Skip post-create hook commands"
    )

    remove_parser = subparsers.add_parser(
        "remove", help="Remove a worktree (the current one by default)"
    )
    remove_parser.add_argument("branch", nargs="?", help="Branch whose worktree to remove")

    run_parser = subparsers.add_parser("run", help="Run a command inside a branch's worktree")
    run_parser.add_argument("branch", help="Branch name")
    run_parser.add_argument("run_command", nargs=argparse.REMAINDER, metavar="COMMAND", help="Command to run")

    init_parser = subparsers.add_parser("init", help="Print the shell integration function")
    init_parser.add_argument("shell", choices=list(SUPPORTED_SHELLS), help="Shell to integrate with")

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "run" and not args.run_command:
        parser.error("run: a COMMAND to run is required")
    return args
