"""Tests for shell integration"""

import os
import shutil
import subprocess

import pytest

from git_worktree_keeper.output.handlers import shell_integration_hint
from git_worktree_keeper.shell import detect_shell, render_wrapper


class TestDetectShell:
    @pytest.mark.parametrize(
        "shell,expected",
        [("/bin/bash", "bash"), ("/usr/bin/zsh", "zsh"), ("/opt/fish/bin/fish", "fish"), ("/bin/tcsh", None)],
    )
    def test_detect(self, shell, expected):
        assert detect_shell({"SHELL": shell}) == expected

    def test_unset(self):
        assert detect_shell({}) is None


class TestRenderWrapper:
    """Test the generated shell functions."""

    @pytest.mark.parametrize("shell", ["bash", "zsh"])
    def test_posix_wrapper(self, shell):
        source = render_wrapper(shell)
        assert source.startswith("wt() {")
        assert "switch|remove)" in source
        assert "WT_DIRECTIVES=1 command wt" in source
        assert "CHANGE_DIR)" in source
        assert "EXEC)" in source

    def test_fish_wrapper(self):
        source = render_wrapper("fish")
        assert source.startswith("function wt")
        assert "case switch remove" in source
        assert "WT_DIRECTIVES=1 command wt" in source

    def test_unsupported_shell(self):
        with pytest.raises(ValueError, match="Unsupported shell"):
            render_wrapper("tcsh")

    @pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")
    def test_bash_wrapper_changes_directory(self, temp_dir):
        """Run the wrapper against a fake binary that emits directives."""
        target = temp_dir / "my worktree"
        target.mkdir()
        bin_dir = temp_dir / "bin"
        bin_dir.mkdir()
        fake = bin_dir / "wt"
        fake.write_text(
            "#!/bin/sh\n"
            f"printf 'CHANGE_DIR\\t%s\\nEXEC\\techo ran\\n\\0' '{target}'\n"
            "exit 0\n"
        )
        fake.chmod(0o755)

        script = render_wrapper("bash") + "\nwt switch feature && pwd\n"
        env = dict(os.environ, PATH=f"{bin_dir}{os.pathsep}{os.environ['PATH']}")
        result = subprocess.run(
            ["bash", "-c", script], capture_output=True, text=True, env=env, cwd=str(temp_dir)
        )

        assert result.returncode == 0
        assert result.stdout.splitlines() == ["ran", str(target)]

    @pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")
    def test_bash_wrapper_ignores_unterminated_output(self, temp_dir):
        """Directives without the trailing NUL are not acted on."""
        target = temp_dir / "elsewhere"
        target.mkdir()
        bin_dir = temp_dir / "bin"
        bin_dir.mkdir()
        fake = bin_dir / "wt"
        fake.write_text(
            "#!/bin/sh\n"
            f"printf 'CHANGE_DIR\\t%s\\n' '{target}'\n"
            "exit 2\n"
        )
        fake.chmod(0o755)

        script = render_wrapper("bash") + '\nwt switch feature; echo "status=$?"; pwd\n'
        env = dict(os.environ, PATH=f"{bin_dir}{os.pathsep}{os.environ['PATH']}")
        result = subprocess.run(
            ["bash", "-c", script], capture_output=True, text=True, env=env, cwd=str(temp_dir)
        )

        assert result.stdout.splitlines() == ["status=2", str(temp_dir)]
        assert "without its terminator" in result.stderr


class TestIntegrationHint:
    def test_posix_hint(self):
        assert 'eval "$(wt init zsh)"' in shell_integration_hint("zsh")

    def test_fish_hint(self):
        assert "wt init fish | source" in shell_integration_hint("fish")

    def test_hint_uses_detected_shell(self):
        # conftest sets SHELL=/bin/bash
        assert "wt init bash" in shell_integration_hint()
