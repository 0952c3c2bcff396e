"""Process-wide output context.

One ``OutputContext`` is built per invocation and passed to every handler.
Its mode is fixed at construction:

- **Interactive**: messages go to stdout, shell-level actions are impossible
  (``change_directory`` only remembers the path, ``execute`` runs the command
  itself).
- **Directive**: stdout belongs to the shell wrapper and only carries
  directives; messages go to stderr.
"""

import os
import sys
from typing import IO, Callable, Mapping, Optional, Union

from rich.console import RenderableType
from rich.text import Text

from git_worktree_keeper.exceptions import OutputStreamError, WorktreeKeeperError
from git_worktree_keeper.formatters.messages import (
    format_hint,
    format_progress,
    format_success,
    format_warning,
)
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.output.directives import DirectiveEncoder
from git_worktree_keeper.output.mode import OutputMode
from git_worktree_keeper.output.streamer import execute_command_in_worktree
from git_worktree_keeper.theme import Theme, make_console, should_use_color

logger = get_logger(__name__)

Message = Union[str, Text]


class OutputContext:
    """Mode-aware message and action API."""

    def __init__(
        self,
        mode: Optional[OutputMode] = None,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
        color: Optional[bool] = None,
        theme: Optional[Theme] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            mode: Output mode; detected from the environment when None
            stdout: Primary stream (directives in directive mode)
            stderr: Secondary stream (child output, errors, directive-mode messages)
            color: Force color on or off; decided per stream when None
            theme: Styles for messages
            environ: Environment used for mode and color detection
        """
        self._mode = mode if mode is not None else OutputMode.from_env(environ)
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.theme = theme or Theme()

        user_stream = self.stderr if self.is_directive else self.stdout
        user_color = color if color is not None else should_use_color(user_stream, environ)
        error_color = color if color is not None else should_use_color(self.stderr, environ)
        self.console = make_console(user_stream, user_color)
        self.error_console = make_console(self.stderr, error_color)

        self._encoder = DirectiveEncoder(self.stdout) if self.is_directive else None
        self._target_dir: Optional[str] = None
        self._terminated = False

    @property
    def mode(self) -> OutputMode:
        return self._mode

    @property
    def is_directive(self) -> bool:
        return self._mode is OutputMode.DIRECTIVE

    @property
    def target_dir(self) -> Optional[str]:
        """Directory of the last ``change_directory`` call."""
        return self._target_dir

    @property
    def child_stream(self) -> IO[str]:
        """Where output of child processes is re-emitted."""
        return self.stderr

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def _message(self, msg: Message, decorate: Callable[[str, Theme], Text]) -> None:
        if isinstance(msg, str):
            msg = decorate(msg, self.theme)
        self.console.print(msg)

    def success(self, msg: Message) -> None:
        """Print a success line. Plain strings get the ✅ emoji and green style."""
        self._message(msg, format_success)

    def hint(self, msg: Message) -> None:
        """Print a hint line. Plain strings get the 💡 emoji and dim style."""
        self._message(msg, format_hint)

    def progress(self, msg: Message) -> None:
        """Print a progress line. Plain strings get the 🔄 emoji and cyan style."""
        self._message(msg, format_progress)

    def warning(self, msg: Message) -> None:
        self._message(msg, format_warning)

    def print(self, renderable: RenderableType = "") -> None:
        """Print a table line or data, undecorated."""
        self.console.print(renderable)

    def error(self, err: WorktreeKeeperError) -> None:
        """Render an error on stderr. Silent errors print nothing."""
        if err.silent:
            return
        self.error_console.print(err.render(self.theme))

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._terminated:
            raise RuntimeError("Directive stream already terminated")

    def change_directory(self, path: Union[str, os.PathLike]) -> None:
        """Ask the wrapper to ``cd`` to ``path``.

        In interactive mode the parent shell cannot be changed; the path is
        kept as the working directory for a later ``execute``.
        """
        path = os.fspath(path)
        self._target_dir = path
        if self._encoder is None:
            logger.debug(f"Interactive mode, not changing shell directory to {path}")
            return
        self._check_open()
        self._encoder.change_directory(path)

    def execute(self, command: str) -> None:
        """Run ``command`` in the parent shell (directive) or as our child (interactive)."""
        if self._encoder is None:
            execute_command_in_worktree(self, self._target_dir or os.getcwd(), command)
            return
        self._check_open()
        self._encoder.execute(command)

    def flush(self) -> None:
        """Write out anything buffered on either stream."""
        for stream in (self.stdout, self.stderr):
            try:
                stream.flush()
            except OSError as e:
                raise OutputStreamError(e) from e

    def terminate_output(self) -> None:
        """Mark the end of the directive stream.

        Writes the sentinel once in directive mode; later calls and
        interactive mode do nothing.
        """
        if self._encoder is None or self._terminated:
            return
        self._terminated = True
        self._encoder.terminate()
