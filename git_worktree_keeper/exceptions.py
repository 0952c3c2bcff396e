"""Custom exceptions for git-worktree-keeper

Every error the tool raises on purpose derives from ``WorktreeKeeperError``
and carries the two facts the top-level dispatcher needs: the process exit
code and whether the error is silent. There are two families:

- **Domain errors** (``GitError`` subclasses) describe a git/worktree
  condition and render a styled message with a remediation hint.
- **Control errors** exist for exit-code fidelity or silent handling: a
  proxied child's exit status, a failed hook, a declined approval, a broken
  output pipe.
"""

from typing import Optional

from rich.text import Text

from git_worktree_keeper.constants import EXIT_FAILURE, EXIT_INTERRUPTED
from git_worktree_keeper.formatters.messages import (
    format_error,
    format_error_block,
    format_error_with_bold,
    format_hint,
)
from git_worktree_keeper.theme import Theme


class WorktreeKeeperError(Exception):
    """Base exception for all git-worktree-keeper errors."""

    exit_code: int = EXIT_FAILURE
    silent: bool = False

    def render(self, theme: Optional[Theme] = None) -> Text:
        """Styled, user-facing message."""
        return format_error(str(self), theme)


# ============================================================================
# Domain errors
# ============================================================================


class GitError(WorktreeKeeperError):
    """A git or worktree condition that ends the current command.

    The headline is split into ``prefix``, ``emphasized`` and ``suffix`` so
    the emphasized part (a branch, a path) can be rendered in bold.
    """

    def __init__(
        self,
        prefix: str,
        emphasized: str = "",
        suffix: str = "",
        hint: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.prefix = prefix
        self.emphasized = emphasized
        self.suffix = suffix
        self.hint = hint
        self.details = details
        super().__init__(f"{prefix}{emphasized}{suffix}")

    def render(self, theme: Optional[Theme] = None) -> Text:
        theme = theme or Theme()
        text = format_error_with_bold(self.prefix, self.emphasized, self.suffix, theme)
        if self.details:
            text = format_error_block(text, self.details, theme)
        if self.hint:
            text.append("\n\n")
            text.append_text(format_hint(self.hint, theme))
        return text


class DetachedHeadError(GitError):
    """Raised when an operation needs a branch but HEAD is detached."""

    def __init__(self, action: Optional[str] = None):
        self.action = action
        message = (
            f"Cannot {action}: not on a branch (detached HEAD)"
            if action
            else "Not on a branch (detached HEAD)"
        )
        super().__init__(message, hint="Switch to a branch first with 'git switch <branch>'")


class UncommittedChangesError(GitError):
    """Raised when the working tree must be clean but is not."""

    def __init__(self, action: Optional[str] = None):
        self.action = action
        message = (
            f"Cannot {action}: working tree has uncommitted changes"
            if action
            else "Working tree has uncommitted changes"
        )
        super().__init__(message, hint="Commit or stash them first")


class BranchAlreadyExistsError(GitError):
    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            "Branch ", branch, " already exists", hint="Remove --create flag to switch to it"
        )


class BranchNotFoundError(GitError):
    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            "Branch ", branch, " does not exist", hint="Use --create to create a new branch"
        )


class WorktreeMissingError(GitError):
    """Raised when git knows a worktree whose directory is gone."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            "Worktree directory missing for ",
            branch,
            hint="Run 'git worktree prune' to clean up",
        )


class NoWorktreeFoundError(GitError):
    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            "No worktree found for branch ",
            branch,
            hint=f"Create one with: wt switch {branch}",
        )


class WorktreePathOccupiedError(GitError):
    """Raised when the target path of a new worktree holds another worktree."""

    def __init__(self, branch: str, path: str, occupant: Optional[str] = None):
        self.branch = branch
        self.path = path
        self.occupant = occupant
        occupant_note = f" (currently on {occupant})" if occupant else ""
        super().__init__(
            "Cannot create worktree for ",
            branch,
            ": target path already exists",
            hint=f"Reuse the existing worktree at {path}{occupant_note} or remove it before retrying",
        )


class WorktreePathExistsError(GitError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(
            "Directory already exists: ",
            path,
            hint="Remove the directory or use a different branch name",
        )


class WorktreeCreationFailedError(GitError):
    def __init__(self, branch: str, error: str, base_branch: Optional[str] = None):
        self.branch = branch
        self.base_branch = base_branch
        self.error = error
        suffix = f" from base {base_branch}" if base_branch else ""
        super().__init__("Failed to create worktree for ", branch, suffix, details=error)


class WorktreeRemovalFailedError(GitError):
    def __init__(self, branch: str, path: str, error: str):
        self.branch = branch
        self.path = path
        self.error = error
        super().__init__("Failed to remove worktree for ", branch, f" at {path}", details=error)


class NotInteractiveError(GitError):
    """Raised when approval is needed but nobody can be asked."""

    def __init__(self):
        super().__init__(
            "Cannot prompt for approval in non-interactive environment",
            hint="In CI/CD, use --force to skip prompts",
        )


class GitOperationError(GitError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message
        super().__init__("Git operation ", operation, " failed", details=message)


class CommandExecutionError(GitError):
    """Raised when a command cannot be started at all."""

    def __init__(self, command: str, error: str):
        self.command = command
        self.error = error
        super().__init__("Failed to execute command", details=f"{command}\n{error}")


# ============================================================================
# Control errors
# ============================================================================


class ChildProcessExited(WorktreeKeeperError):
    """A proxied child exited non-zero; the tool exits with the same code."""

    def __init__(self, code: int, message: Optional[str] = None):
        self.code = code
        self.exit_code = code
        super().__init__(message or f"Command failed with exit code: {code}")


class HookCommandFailed(WorktreeKeeperError):
    """A hook command failed; keeps the hook's exit code when there is one."""

    def __init__(
        self,
        hook_type: str,
        error: str,
        command_name: Optional[str] = None,
        exit_code: Optional[int] = None,
    ):
        self.hook_type = hook_type
        self.command_name = command_name
        self.error = error
        self.hook_exit_code = exit_code
        self.exit_code = exit_code if exit_code else EXIT_FAILURE
        name_suffix = f": {command_name}" if command_name else ""
        super().__init__(f"{hook_type} command failed{name_suffix}: {error}")

    def render(self, theme: Optional[Theme] = None) -> Text:
        theme = theme or Theme()
        text = format_error(str(self), theme)
        text.append("\n\n")
        text.append_text(format_hint(f"Use --no-verify to skip {self.hook_type} commands", theme))
        return text


class CommandNotApproved(WorktreeKeeperError):
    """The user declined a command; nothing is printed, the exit is non-zero."""

    silent = True

    def __init__(self):
        super().__init__("Command not approved")

    def render(self, theme: Optional[Theme] = None) -> Text:
        return Text()


class OutputStreamError(WorktreeKeeperError):
    """The primary output stream stopped accepting writes (e.g. broken pipe)."""

    def __init__(self, error: OSError):
        self.error = error
        super().__init__(f"Output stream closed: {error}")


def exit_code(err: BaseException) -> int:
    """Process exit code for an exception that reached the top level."""
    if isinstance(err, WorktreeKeeperError):
        return err.exit_code
    if isinstance(err, KeyboardInterrupt):
        return EXIT_INTERRUPTED
    return EXIT_FAILURE


def is_command_not_approved(err: BaseException) -> bool:
    return isinstance(err, CommandNotApproved)
