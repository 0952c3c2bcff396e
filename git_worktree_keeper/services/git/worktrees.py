"""Worktree operations service for git-worktree-keeper."""

import os
from typing import Any, Dict, List, Optional

import git

from git_worktree_keeper.constants import HOOK_CONFIG_SECTION
from git_worktree_keeper.exceptions import (
    BranchAlreadyExistsError,
    BranchNotFoundError,
    DetachedHeadError,
    GitOperationError,
    NoWorktreeFoundError,
    UncommittedChangesError,
    WorktreeCreationFailedError,
    WorktreeMissingError,
    WorktreePathExistsError,
    WorktreePathOccupiedError,
    WorktreeRemovalFailedError,
)
from git_worktree_keeper.formatters.diff import parse_diff_shortstat
from git_worktree_keeper.logging_config import get_logger
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
from git_worktree_keeper.models.worktree import (
    BranchEntry,
    BranchInfo,
    Counts,
    ListData,
    ListItem,
    WorktreeEntry,
    WorktreeInfo,
)

logger = get_logger(__name__)


def _command_error(e: git.exc.GitCommandError) -> str:
    """Readable message from a GitCommandError (stderr, or the exit status)."""
    stderr = (e.stderr if hasattr(e, "stderr") else str(e)).strip()
    # GitPython wraps it as "stderr: '<text>'"
    if stderr.startswith("stderr: '") and stderr.endswith("'"):
        stderr = stderr[len("stderr: '"):-1].strip()
    status = e.status if hasattr(e, "status") else "unknown"
    if stderr:
        return stderr
    return f"git exited with code {status}"


def _same_path(a: str, b: str) -> bool:
    return os.path.realpath(a) == os.path.realpath(b)


def parse_worktree_porcelain(output: str) -> List[WorktreeInfo]:
    """
    Parse ``git worktree list --porcelain`` output.

    Format (blank line between worktrees, the first one is the primary):
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached")

    Bare entries are skipped.
    """
    worktrees: List[WorktreeInfo] = []
    current: Dict[str, Any] = {}
    is_first = True

    for line in output.splitlines() + [""]:
        if not line.strip():
            if current.get("path") and not current.get("bare"):
                worktrees.append(
                    WorktreeInfo(
                        path=current["path"],
                        branch=current.get("branch"),
                        head=current.get("HEAD", ""),
                        is_primary=is_first,
                    )
                )
            if current:
                is_first = False
            current = {}
            continue

        key, _, value = line.partition(" ")
        if key == "worktree":
            current["path"] = value
        elif key == "HEAD":
            current["HEAD"] = value
        elif key == "branch":
            # "branch refs/heads/feature" -> "feature"
            current["branch"] = value[len("refs/heads/"):] if value.startswith("refs/heads/") else None
        elif key == "detached":
            current["branch"] = None
        elif key == "bare":
            current["bare"] = True

    return worktrees


class WorktreeService:
    """Service for querying and changing git worktrees."""

    def __init__(self, repo_path: str, main_branch: Optional[str] = None):
        """Initialize the worktree service.

        Args:
            repo_path: Any directory inside the repository
            main_branch: Default branch; detected when None
        """
        self.repo_path = repo_path
        self.main_branch = main_branch

    def _get_repo(self) -> git.Repo:
        """Open the repository containing ``repo_path``.

        Raises:
            GitOperationError: ``repo_path`` is not inside a git repository
        """
        try:
            return git.Repo(self.repo_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise GitOperationError("open repository", f"Not a git repository: {self.repo_path}") from e

    def _git_in(self, path: str, *args: str) -> str:
        """Run a git command with ``path`` as its working tree."""
        return self._get_repo().git.execute(["git", "-C", path, *args])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_worktrees(self) -> List[WorktreeInfo]:
        """All worktrees in git's order, primary first."""
        try:
            output = self._get_repo().git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise GitOperationError("worktree list", _command_error(e)) from e
        worktrees = parse_worktree_porcelain(output)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def find_worktree(self, branch: str) -> Optional[WorktreeInfo]:
        return next((wt for wt in self.list_worktrees() if wt.branch == branch), None)

    def current_worktree_path(self) -> Optional[str]:
        """Top level of the worktree containing ``repo_path``."""
        try:
            return self._get_repo().git.rev_parse("--show-toplevel")
        except git.exc.GitCommandError as e:
            logger.debug(f"Not inside a worktree: {_command_error(e)}")
            return None

    def branch_exists(self, branch: str) -> bool:
        return branch in [head.name for head in self._get_repo().heads]

    def default_branch(self) -> str:
        """Configured main branch, else origin/HEAD, else main/master, else the primary's branch."""
        if self.main_branch:
            return self.main_branch

        repo = self._get_repo()
        try:
            ref = repo.git.symbolic_ref("refs/remotes/origin/HEAD", "--short")
            return ref.split("/", 1)[1] if "/" in ref else ref
        except git.exc.GitCommandError:
            logger.debug("origin/HEAD not set, guessing default branch")

        head_names = [head.name for head in repo.heads]
        for candidate in ("main", "master"):
            if candidate in head_names:
                return candidate

        worktrees = self.list_worktrees()
        if worktrees and worktrees[0].branch:
            return worktrees[0].branch
        return "main"

    def ahead_behind(self, base: str, ref: str) -> Counts:
        """Commits ``ref`` has that ``base`` lacks (ahead) and vice versa (behind)."""
        try:
            output = self._get_repo().git.rev_list("--left-right", "--count", f"{base}...{ref}")
            behind, ahead = (int(n) for n in output.split())
            return Counts(ahead=ahead, behind=behind)
        except (git.exc.GitCommandError, ValueError) as e:
            logger.debug(f"Could not count commits between {base} and {ref}: {e}")
            return Counts()

    def working_tree_diff(self, worktree_path: str) -> tuple:
        """(added, deleted) lines of uncommitted changes in a worktree."""
        if not os.path.isdir(worktree_path):
            logger.debug(f"Worktree path {worktree_path} doesn't exist (orphaned)")
            return (0, 0)
        try:
            output = self._git_in(worktree_path, "diff", "--shortstat", "HEAD")
        except git.exc.GitCommandError as e:
            logger.warning(f"Could not diff worktree {worktree_path}: {_command_error(e)}")
            return (0, 0)
        return parse_diff_shortstat(output).added_deleted

    def is_dirty(self, worktree_path: str) -> bool:
        """True if the worktree has staged, unstaged or untracked changes."""
        try:
            return bool(self._git_in(worktree_path, "status", "--porcelain").strip())
        except git.exc.GitCommandError as e:
            raise GitOperationError("status", _command_error(e)) from e

    def gather_list_data(self, show_branches: bool = False) -> ListData:
        """Worktrees (and optionally branches without one) with their counts and diffs."""
        worktrees = self.list_worktrees()
        default = self.default_branch()
        items: List[ListItem] = []

        for wt in worktrees:
            wt.working_tree_diff = self.working_tree_diff(wt.path)
            wt.counts = self.ahead_behind(default, wt.branch or wt.head)
            items.append(WorktreeEntry(wt))

        if show_branches:
            checked_out = {wt.branch for wt in worktrees if wt.branch}
            for head in self._get_repo().heads:
                if head.name in checked_out:
                    continue
                items.append(
                    BranchEntry(
                        BranchInfo(
                            name=head.name,
                            head=head.commit.hexsha,
                            counts=self.ahead_behind(default, head.name),
                        )
                    )
                )

        return ListData(items=items, current_worktree_path=self.current_worktree_path())

    def hook_commands(self, hook_type: str) -> List[str]:
        """Commands configured with ``git config --add wt.<hook_type> <command>``."""
        try:
            output = self._get_repo().git.config("--get-all", f"{HOOK_CONFIG_SECTION}.{hook_type}")
        except git.exc.GitCommandError:
            # Exit code 1: key not set
            return []
        return [line for line in output.splitlines() if line.strip()]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def worktree_path_for(self, branch: str) -> str:
        """``<parent of primary>/<repo name>.<branch>``, with ``/`` in the branch replaced by ``-``."""
        primary = self.list_worktrees()[0].path
        sanitized = branch.replace("/", "-")
        return os.path.join(os.path.dirname(primary), f"{os.path.basename(primary)}.{sanitized}")

    def switch(self, branch: str, create: bool = False, base: Optional[str] = None) -> SwitchResult:
        """Find or create the worktree for ``branch``."""
        existing = self.find_worktree(branch)
        if existing is not None:
            if create:
                raise BranchAlreadyExistsError(branch)
            if not os.path.isdir(existing.path):
                raise WorktreeMissingError(branch)
            return ExistingWorktree(existing.path)

        exists = self.branch_exists(branch)
        if create and exists:
            raise BranchAlreadyExistsError(branch)
        if not create and not exists:
            raise BranchNotFoundError(branch)

        path = self.worktree_path_for(branch)
        if os.path.exists(path):
            occupant = next((wt for wt in self.list_worktrees() if _same_path(wt.path, path)), None)
            if occupant is not None:
                raise WorktreePathOccupiedError(branch, path, occupant.branch)
            raise WorktreePathExistsError(path)

        args = ["add", "-b", branch, path] if create else ["add", path, branch]
        if create and base:
            args.append(base)
        try:
            self._get_repo().git.worktree(*args)
        except git.exc.GitCommandError as e:
            raise WorktreeCreationFailedError(branch, _command_error(e), base) from e

        logger.info(f"Created worktree for {branch} at {path}")
        return CreatedWorktree(path=path, created_branch=create)

    def _remove_worktree(self, primary: WorktreeInfo, worktree: WorktreeInfo) -> None:
        branch = worktree.branch or worktree.head
        if os.path.isdir(worktree.path) and self.is_dirty(worktree.path):
            raise UncommittedChangesError("remove worktree")
        try:
            # Run from the primary: the worktree's own directory is going away
            self._git_in(primary.path, "worktree", "remove", worktree.path)
        except git.exc.GitCommandError as e:
            raise WorktreeRemovalFailedError(branch, worktree.path, _command_error(e)) from e
        logger.info(f"Removed worktree at {worktree.path}")

    def remove(self, branch: Optional[str] = None) -> RemoveResult:
        """
        Remove the worktree for ``branch``, or the current one.

        Inside the primary worktree there is nothing to remove: it is
        switched back to the default branch instead.
        """
        worktrees = self.list_worktrees()
        primary = worktrees[0]
        current_path = self.current_worktree_path()

        if branch is None:
            worktree = next(
                (wt for wt in worktrees if current_path and _same_path(wt.path, current_path)), None
            )
            if worktree is None:
                raise GitOperationError("remove", "Not inside a worktree of this repository")
        else:
            worktree = next((wt for wt in worktrees if wt.branch == branch), None)
            if worktree is None:
                raise NoWorktreeFoundError(branch)

        if worktree.is_primary:
            if worktree.branch is None:
                raise DetachedHeadError("switch to default branch")
            default = self.default_branch()
            if worktree.branch == default:
                return AlreadyOnDefault(default)
            if self.is_dirty(worktree.path):
                raise UncommittedChangesError("switch to default branch")
            try:
                self._git_in(worktree.path, "switch", default)
            except git.exc.GitCommandError as e:
                raise GitOperationError("switch", _command_error(e)) from e
            return SwitchedToDefault(default)

        self._remove_worktree(primary, worktree)
        if current_path and _same_path(worktree.path, current_path):
            return RemovedWorktree(primary_path=primary.path)
        return RemovedOtherWorktree(branch=worktree.branch or worktree.head)
