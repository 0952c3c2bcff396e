"""Output mode selection."""

import os
from enum import Enum
from typing import Mapping, Optional

from git_worktree_keeper.constants import DIRECTIVES_ENV_VAR


class OutputMode(Enum):
    """How the process talks to whoever invoked it.

    INTERACTIVE: a human reads stdout; shell-level actions are impossible.
    DIRECTIVE: a shell wrapper reads stdout and carries out the directives.
    """

    INTERACTIVE = "interactive"
    DIRECTIVE = "directive"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OutputMode":
        """Directive mode iff the wrapper exported a non-empty, non-zero flag."""
        env = os.environ if environ is None else environ
        value = env.get(DIRECTIVES_ENV_VAR, "")
        if value and value != "0":
            return cls.DIRECTIVE
        return cls.INTERACTIVE
