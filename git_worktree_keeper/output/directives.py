"""Wire format between the binary and its shell wrapper.

Each directive is one line ``TAG<TAB>payload`` on stdout. Payloads are
escaped so a directive never spans lines::

    \\   ->  \\\\
    LF  ->  \\n
    TAB ->  \\t
    CR  ->  \\r

The wrapper undoes this with ``printf '%b'``. After the last directive the
binary writes a single NUL, which cannot appear in a path or a command line,
so the wrapper knows the stream is complete.
"""

from typing import IO, List, Tuple

from git_worktree_keeper.constants import (
    DIRECTIVE_CHANGE_DIR,
    DIRECTIVE_EXEC,
    DIRECTIVE_SENTINEL,
)
from git_worktree_keeper.exceptions import OutputStreamError
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\t": "\\t", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "n": "\n", "t": "\t", "r": "\r"}


def escape_payload(payload: str) -> str:
    """Escape a payload so it fits on one line."""
    if DIRECTIVE_SENTINEL in payload:
        raise ValueError("Directive payload cannot contain NUL")
    return "".join(_ESCAPES.get(char, char) for char in payload)


def unescape_payload(escaped: str) -> str:
    """Reverse :func:`escape_payload`."""
    chars = []
    index = 0
    while index < len(escaped):
        char = escaped[index]
        if char == "\\" and index + 1 < len(escaped) and escaped[index + 1] in _UNESCAPES:
            chars.append(_UNESCAPES[escaped[index + 1]])
            index += 2
            continue
        chars.append(char)
        index += 1
    return "".join(chars)


def parse_directives(stream: str) -> Tuple[List[Tuple[str, str]], bool]:
    """
    Decode a directive stream the way the shell wrapper does.

    Returns:
        Tuple of (directives as (tag, payload) pairs, whether the stream was
        terminated by the sentinel)
    """
    terminated = stream.endswith(DIRECTIVE_SENTINEL)
    body = stream[:-1] if terminated else stream
    directives = []
    for line in body.split("\n"):
        if not line:
            continue
        tag, _, payload = line.partition("\t")
        directives.append((tag, unescape_payload(payload)))
    return directives, terminated


class DirectiveEncoder:
    """Writes directives to the wrapper's stream.

    The first failed write raises ``OutputStreamError``; after that the
    encoder is closed and further writes, including the sentinel, are dropped
    silently.
    """

    def __init__(self, stream: IO[str]):
        self.stream = stream
        self.broken = False

    def change_directory(self, path: str) -> None:
        self._write(f"{DIRECTIVE_CHANGE_DIR}\t{escape_payload(path)}\n")

    def execute(self, command: str) -> None:
        self._write(f"{DIRECTIVE_EXEC}\t{escape_payload(command)}\n")

    def terminate(self) -> None:
        self._write(DIRECTIVE_SENTINEL)

    def _write(self, data: str) -> None:
        if self.broken:
            logger.debug(f"Dropping directive after stream failure: {data!r}")
            return
        try:
            self.stream.write(data)
            self.stream.flush()
        except OSError as e:
            # BrokenPipeError and friends: the wrapper is gone
            self.broken = True
            raise OutputStreamError(e) from e
