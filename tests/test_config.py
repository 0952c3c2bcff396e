"""Tests for configuration and diff parsing"""

import pytest

from git_worktree_keeper.config import Config
from git_worktree_keeper.formatters.diff import parse_diff_shortstat


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.output_format == "table"
        assert config.main_branch is None
        assert not config.force

    def test_invalid_output_format(self):
        with pytest.raises(ValueError, match="output_format"):
            Config(output_format="xml")

    def test_blank_main_branch(self):
        with pytest.raises(ValueError, match="main_branch"):
            Config(main_branch="   ")

    def test_main_branch_stripped(self):
        assert Config(main_branch=" trunk ").main_branch == "trunk"

    def test_round_trip_ignores_unknown_keys(self):
        config = Config.from_dict({"output_format": "json", "force": True, "stale_days": 30})
        assert config.to_dict()["output_format"] == "json"
        assert config.force
        assert "stale_days" not in config.to_dict()


class TestDiffShortstat:
    """Test parsing git diff --shortstat."""

    def test_full_output(self):
        stats = parse_diff_shortstat(" 3 files changed, 45 insertions(+), 12 deletions(-)")
        assert (stats.files, stats.insertions, stats.deletions) == (3, 45, 12)
        assert stats.added_deleted == (45, 12)

    def test_insertions_only(self):
        stats = parse_diff_shortstat(" 1 file changed, 1 insertion(+)")
        assert stats.deletions is None
        assert stats.added_deleted == (1, 0)

    def test_empty_output(self):
        assert parse_diff_shortstat("").added_deleted == (0, 0)
