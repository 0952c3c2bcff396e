"""Output layer: mode-aware messages, the directive protocol and command streaming.

- mode: Interactive/Directive mode detection
- directives: Wire format shared with the shell wrapper
- context: OutputContext, the per-invocation message and action API
- streamer: Running commands inside a worktree with merged output
- handlers: Messages for switch/remove results
"""

from .mode import OutputMode
from .context import OutputContext
from .streamer import execute_command_in_worktree, stream_command

__all__ = [
    "OutputMode",
    "OutputContext",
    "execute_command_in_worktree",
    "stream_command",
]
