"""Tests for running commands inside worktrees"""

import pytest

from git_worktree_keeper.exceptions import ChildProcessExited, CommandExecutionError
from git_worktree_keeper.output import OutputMode, execute_command_in_worktree, stream_command


class TestStreamCommand:
    """Test the shared streaming core."""

    def test_echo_hello(self, make_ctx, temp_dir):
        ctx, stdout, stderr = make_ctx()
        status = stream_command(ctx, str(temp_dir), "echo hello")
        assert status == 0
        assert stderr.getvalue() == "hello\n"
        assert stdout.getvalue() == ""

    def test_stdout_and_stderr_merged_in_order(self, make_ctx, temp_dir):
        ctx, _, stderr = make_ctx()
        stream_command(ctx, str(temp_dir), "echo one; echo two 1>&2; echo three")
        assert stderr.getvalue() == "one\ntwo\nthree\n"

    def test_runs_in_worktree_directory(self, make_ctx, temp_dir):
        (temp_dir / "marker.txt").write_text("x")
        ctx, _, stderr = make_ctx()
        stream_command(ctx, str(temp_dir), "ls")
        assert "marker.txt" in stderr.getvalue()

    def test_returns_exit_status(self, make_ctx, temp_dir):
        ctx, _, _ = make_ctx()
        assert stream_command(ctx, str(temp_dir), "exit 7") == 7

    def test_signal_maps_to_128_plus_signum(self, make_ctx, temp_dir):
        ctx, _, _ = make_ctx()
        assert stream_command(ctx, str(temp_dir), "kill -TERM $$") == 128 + 15

    def test_does_not_terminate_directive_stream(self, make_ctx, temp_dir):
        ctx, stdout, _ = make_ctx(OutputMode.DIRECTIVE)
        stream_command(ctx, str(temp_dir), "true")
        assert "\0" not in stdout.getvalue()

    def test_messages_flushed_before_child_output(self, make_ctx, temp_dir):
        ctx, _, stderr = make_ctx(OutputMode.DIRECTIVE)
        ctx.progress("Running")
        stream_command(ctx, str(temp_dir), "echo child")
        output = stderr.getvalue()
        assert output.index("Running") < output.index("child")

    def test_missing_directory_raises(self, make_ctx, temp_dir):
        ctx, _, _ = make_ctx()
        with pytest.raises(CommandExecutionError):
            stream_command(ctx, str(temp_dir / "gone"), "true")


class TestExecuteCommandInWorktree:
    """Test exit-code proxying and termination."""

    def test_success(self, make_ctx, temp_dir):
        ctx, _, stderr = make_ctx()
        execute_command_in_worktree(ctx, str(temp_dir), "echo hello")
        assert stderr.getvalue() == "hello\n"

    def test_exit_status_proxied(self, make_ctx, temp_dir):
        ctx, _, _ = make_ctx()
        with pytest.raises(ChildProcessExited) as exc_info:
            execute_command_in_worktree(ctx, str(temp_dir), "exit 3")
        assert exc_info.value.exit_code == 3
        assert "exit code: 3" in str(exc_info.value)

    def test_sentinel_written_on_success(self, make_ctx, temp_dir):
        ctx, stdout, _ = make_ctx(OutputMode.DIRECTIVE)
        execute_command_in_worktree(ctx, str(temp_dir), "true")
        assert stdout.getvalue() == "\0"

    def test_sentinel_written_on_failure(self, make_ctx, temp_dir):
        ctx, stdout, _ = make_ctx(OutputMode.DIRECTIVE)
        with pytest.raises(ChildProcessExited):
            execute_command_in_worktree(ctx, str(temp_dir), "exit 1")
        assert stdout.getvalue() == "\0"

    def test_sentinel_written_on_spawn_failure(self, make_ctx, temp_dir):
        ctx, stdout, _ = make_ctx(OutputMode.DIRECTIVE)
        with pytest.raises(CommandExecutionError):
            execute_command_in_worktree(ctx, str(temp_dir / "gone"), "true")
        assert stdout.getvalue() == "\0"
