"""Tests for post-create hooks"""

import io

import pytest

from git_worktree_keeper.exceptions import (
    CommandNotApproved,
    HookCommandFailed,
    NotInteractiveError,
)
from git_worktree_keeper.output import OutputMode
from git_worktree_keeper.services.hook_service import run_hooks


class FakeTTY(io.StringIO):
    """Keyboard input for the approval prompt."""

    def isatty(self):
        return True


class TestRunHooks:
    """Test running hook commands."""

    def test_no_commands(self, make_ctx, temp_dir):
        ctx, stdout, stderr = make_ctx()
        run_hooks(ctx, [], str(temp_dir), "post-create", stdin=io.StringIO())
        assert stdout.getvalue() == ""
        assert stderr.getvalue() == ""

    def test_forced_commands_run_in_order(self, make_ctx, temp_dir):
        ctx, stdout, stderr = make_ctx()
        run_hooks(ctx, ["echo first", "echo second"], str(temp_dir), "post-create", force=True)
        assert stderr.getvalue() == "first\nsecond\n"
        assert "Running post-create command:" in stdout.getvalue()
        assert "┃ echo first" in stdout.getvalue()

    def test_runs_in_worktree(self, make_ctx, temp_dir):
        ctx, _, _ = make_ctx()
        run_hooks(ctx, ["touch created.txt"], str(temp_dir), "post-create", force=True)
        assert (temp_dir / "created.txt").exists()

    def test_failure_stops_and_keeps_exit_code(self, make_ctx, temp_dir):
        ctx, _, stderr = make_ctx()
        with pytest.raises(HookCommandFailed) as exc_info:
            run_hooks(ctx, ["exit 4", "echo never"], str(temp_dir), "post-create", force=True)
        assert exc_info.value.exit_code == 4
        assert exc_info.value.command_name == "exit 4"
        assert "never" not in stderr.getvalue()

    def test_directive_stream_left_open(self, make_ctx, temp_dir):
        ctx, stdout, _ = make_ctx(OutputMode.DIRECTIVE)
        run_hooks(ctx, ["true"], str(temp_dir), "post-create", force=True)
        assert "\0" not in stdout.getvalue()


class TestApproval:
    """Test the approval prompt."""

    def test_non_interactive_refuses(self, make_ctx, temp_dir):
        ctx, _, _ = make_ctx()
        with pytest.raises(NotInteractiveError):
            run_hooks(ctx, ["echo hi"], str(temp_dir), "post-create", stdin=io.StringIO())

    def test_approved(self, make_ctx, temp_dir):
        ctx, stdout, stderr = make_ctx()
        run_hooks(ctx, ["echo hi"], str(temp_dir), "post-create", stdin=FakeTTY("y\n"))
        assert "wants to run 1 post-create command(s)" in stdout.getvalue()
        assert "Allow and run?" in stdout.getvalue()
        assert stderr.getvalue() == "hi\n"

    def test_declined(self, make_ctx, temp_dir):
        ctx, _, stderr = make_ctx()
        with pytest.raises(CommandNotApproved):
            run_hooks(ctx, ["echo hi"], str(temp_dir), "post-create", stdin=FakeTTY("n\n"))
        assert stderr.getvalue() == ""

    def test_force_skips_prompt(self, make_ctx, temp_dir):
        ctx, stdout, _ = make_ctx()
        run_hooks(ctx, ["true"], str(temp_dir), "post-create", force=True, stdin=io.StringIO())
        assert "Allow and run?" not in stdout.getvalue()
