"""Tests for rendering listing lines"""

from git_worktree_keeper.models.worktree import WorktreeEntry, WorktreeInfo
from git_worktree_keeper.services.layout_service import calculate_responsive_layout
from git_worktree_keeper.services.render_service import (
    format_header_line,
    format_list_item_line,
    is_current_worktree,
)


class TestCurrentWorktree:
    def test_matches_same_path(self, sample_items):
        assert is_current_worktree(sample_items[0], "/src/repo")

    def test_trailing_slash_ignored(self, sample_items):
        assert is_current_worktree(sample_items[0], "/src/repo/")

    def test_branch_entry_never_current(self, sample_items):
        assert not is_current_worktree(sample_items[2], "/src/repo")

    def test_symlinked_path(self, temp_dir):
        real = temp_dir / "repo"
        real.mkdir()
        link = temp_dir / "link"
        link.symlink_to(real)
        item = WorktreeEntry(WorktreeInfo(path=str(real), branch="main"))
        assert is_current_worktree(item, str(link))


class TestHeaderLine:
    def test_header_labels_aligned(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx()
        layout = calculate_responsive_layout(sample_items, 200)
        format_header_line(ctx, layout)
        expected = f"{'':1}  {'Branch':13}  {'State':7}  {'Path':31}  CI"
        assert stdout.getvalue() == expected + "\n"


class TestListItemLine:
    """Test row rendering."""

    def test_current_worktree_marked(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx()
        layout = calculate_responsive_layout(sample_items, 200)
        format_list_item_line(ctx, sample_items[0], layout, "/src/repo")
        assert stdout.getvalue() == f"@  {'main':13}  {'':7}  /src/repo\n"

    def test_primary_marker_when_elsewhere(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx()
        layout = calculate_responsive_layout(sample_items, 200)
        format_list_item_line(ctx, sample_items[0], layout, "/src/repo.feature-login")
        assert stdout.getvalue().startswith("^  main")

    def test_truncated_row(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx()
        layout = calculate_responsive_layout(sample_items, 40)
        format_list_item_line(ctx, sample_items[1], layout, None)
        assert stdout.getvalue() == "+  feature/l…  * ↑2 ↓1  /src… +12 -3\n"

    def test_branch_row(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx()
        layout = calculate_responsive_layout(sample_items, 200)
        format_list_item_line(ctx, sample_items[2], layout, None)
        expected = f"{'':1}  {'fix/typo':13}  {'':7}  {'':31}  ✓"
        assert stdout.getvalue() == expected + "\n"

    def test_rows_fit_layout_width(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx()
        layout = calculate_responsive_layout(sample_items, 45)
        for item in sample_items:
            format_list_item_line(ctx, item, layout, None)
        for line in stdout.getvalue().splitlines():
            assert len(line) <= 45

    def test_current_row_styled(self, make_ctx, sample_items):
        ctx, stdout, _ = make_ctx(color=True)
        layout = calculate_responsive_layout(sample_items, 200)
        format_list_item_line(ctx, sample_items[0], layout, "/src/repo")
        # Magenta for the current worktree
        assert "\x1b[1;35m" in stdout.getvalue()
