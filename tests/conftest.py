"""Pytest fixtures for git-worktree-keeper tests"""
import io
import tempfile
from pathlib import Path

import git
import pytest

from git_worktree_keeper.constants import CiStatus
from git_worktree_keeper.models.worktree import (
    BranchEntry,
    BranchInfo,
    Counts,
    WorktreeEntry,
    WorktreeInfo,
)
from git_worktree_keeper.output import OutputContext, OutputMode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell settings out of the tests."""
    for name in ("WT_DIRECTIVES", "NO_COLOR", "FORCE_COLOR", "CLICOLOR_FORCE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SHELL", "/bin/bash")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def make_ctx():
    """Factory for an OutputContext writing to in-memory streams.

    Returns (ctx, stdout, stderr).
    """

    def _make(mode=OutputMode.INTERACTIVE, color=False):
        stdout = io.StringIO()
        stderr = io.StringIO()
        ctx = OutputContext(mode=mode, stdout=stdout, stderr=stderr, color=color)
        return ctx, stdout, stderr

    return _make


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    repo.git.branch("-M", "main")

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with a feature branch one commit ahead of main."""
    repo = git_repo
    repo_path = Path(repo.working_dir)

    repo.git.checkout("-b", "feature/test-feature")
    test_file = repo_path / "feature.txt"
    test_file.write_text("Feature content\n")
    repo.index.add(["feature.txt"])
    repo.index.commit("Add feature")

    repo.git.checkout("main")

    yield repo


@pytest.fixture
def sample_items():
    """Listing items: primary, a dirty worktree ahead of main, a plain branch."""
    return [
        WorktreeEntry(
            WorktreeInfo(path="/src/repo", branch="main", head="a" * 40, is_primary=True)
        ),
        WorktreeEntry(
            WorktreeInfo(
                path="/src/repo.feature-login",
                branch="feature/login",
                head="b" * 40,
                working_tree_diff=(12, 3),
                counts=Counts(ahead=2, behind=1),
            )
        ),
        BranchEntry(BranchInfo(name="fix/typo", head="c" * 40, ci_status=CiStatus.PASSED)),
    ]
