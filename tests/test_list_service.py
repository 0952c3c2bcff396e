"""Tests for the list command"""

import json
from unittest.mock import Mock

from git_worktree_keeper.models import ListData
from git_worktree_keeper.services.git import WorktreeService
from git_worktree_keeper.services.list_service import SummaryMetrics, handle_list


def _service_with(items, current_path=None):
    service = Mock(spec=WorktreeService)
    service.gather_list_data.return_value = ListData(items=items, current_worktree_path=current_path)
    return service


class TestTableOutput:
    """Test the table listing."""

    def test_empty_list_hint(self, make_ctx):
        ctx, stdout, _ = make_ctx()
        handle_list(ctx, _service_with([]), terminal_width=80)
        lines = stdout.getvalue().splitlines()
        assert lines == [
            "",
            "💡 No worktrees found",
            "💡 Create one with: wt switch --create <branch>",
        ]

    def test_header_rows_and_summary(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx()
        handle_list(ctx, _service_with(sample_items[:2], "/src/repo"), terminal_width=120)
        lines = stdout.getvalue().splitlines()
        assert "Branch" in lines[0]
        assert lines[1].startswith("@  main")
        assert lines[2].startswith("+  feature/login")
        assert lines[3] == ""
        assert lines[4] == "Showing 2 worktrees, 1 with changes, 1 ahead, 1 behind"

    def test_rows_fit_terminal(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx()
        handle_list(ctx, _service_with(sample_items), terminal_width=44)
        for line in stdout.getvalue().splitlines():
            assert len(line) <= 44

    def test_show_branches_passed_through(self, make_ctx, sample_items):
        ctx, _, _ = make_ctx()
        service = _service_with(sample_items)
        handle_list(ctx, service, show_branches=True, terminal_width=80)
        service.gather_list_data.assert_called_once_with(show_branches=True)


class TestJsonOutput:
    def test_json_items_in_order(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx()
        handle_list(ctx, _service_with(sample_items), output_format="json")
        data = json.loads(stdout.getvalue())
        assert [item["type"] for item in data] == ["worktree", "worktree", "branch"]
        assert data[1]["branch"] == "feature/login"
        assert data[1]["working_tree_diff"] == {"added": 12, "deleted": 3}
        assert data[2]["ci_status"] == "passed"

    def test_empty_json(self, make_ctx):
        ctx, stdout, _ = make_ctx()
        handle_list(ctx, _service_with([]), output_format="json")
        assert json.loads(stdout.getvalue()) == []


class TestSummaryMetrics:
    def test_single_worktree(self, sample_items):
        metrics = SummaryMetrics()
        metrics.update(sample_items[0])
        assert metrics.describe(include_branches=False) == "1 worktree"

    def test_with_branches(self, sample_items):
        metrics = SummaryMetrics()
        for item in sample_items:
            metrics.update(item)
        assert metrics.describe(include_branches=True) == (
            "2 worktrees, 1 branches, 1 with changes, 1 ahead, 1 behind"
        )


class TestRealRepository:
    def test_lists_primary(self, make_ctx, git_repo):
        ctx, stdout, _ = make_ctx()
        handle_list(ctx, WorktreeService(git_repo.working_dir), terminal_width=200)
        lines = stdout.getvalue().splitlines()
        assert lines[1].startswith("@  main")
        assert lines[-1] == "Showing 1 worktree"
