"""Cell-width aware padding and truncation for table columns.

Widths are terminal cells (``rich.cells``), not characters: CJK text and
most emoji take two cells.
"""

from rich.cells import cell_len, get_character_cell_size
from rich.text import Text

from git_worktree_keeper.constants import ELLIPSIS, MIDDLE_ELLIPSIS_PREFIX, Truncation


def _head_index(plain: str, cells: int) -> int:
    """Index just past the longest prefix of ``plain`` fitting in ``cells``."""
    used = 0
    for index, char in enumerate(plain):
        used += get_character_cell_size(char)
        if used > cells:
            return index
    return len(plain)


def _tail_index(plain: str, cells: int) -> int:
    """Start index of the longest suffix of ``plain`` fitting in ``cells``."""
    used = 0
    for index in range(len(plain) - 1, -1, -1):
        used += get_character_cell_size(plain[index])
        if used > cells:
            return index + 1
    return 0


def _pad(text: Text, width: int) -> Text:
    missing = width - cell_len(text.plain)
    if missing > 0:
        text.append(" " * missing)
    return text


def fit_text(
    text: Text,
    width: int,
    truncation: Truncation = Truncation.END,
    prefix: int = MIDDLE_ELLIPSIS_PREFIX,
) -> Text:
    """
    Pad or shrink a styled cell to exactly ``width`` cells.

    Middle truncation keeps ``prefix`` cells of the head, one ellipsis, and
    as much of the tail as fits; it falls back to end truncation when the
    column is too narrow to hold the prefix, the ellipsis and one tail cell.
    Styles on the kept spans survive.
    """
    if width <= 0:
        return Text()
    plain = text.plain
    if cell_len(plain) <= width:
        return _pad(text.copy(), width)

    if truncation is Truncation.MIDDLE and width >= prefix + 2:
        head = _head_index(plain, prefix)
        tail_cells = width - cell_len(plain[:head]) - cell_len(ELLIPSIS)
        tail = _tail_index(plain, tail_cells)
        fitted = text[:head] + Text(ELLIPSIS) + text[tail:]
    else:
        head = _head_index(plain, width - cell_len(ELLIPSIS))
        fitted = text[:head] + Text(ELLIPSIS)
    return _pad(fitted, width)


def fit_cell(value: str, width: int, truncation: Truncation = Truncation.END) -> str:
    """Plain-string variant of :func:`fit_text`."""
    return fit_text(Text(value), width, truncation).plain
