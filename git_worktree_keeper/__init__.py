"""
git-worktree-keeper - git worktree management with shell integration
"""

from .__version__ import __version__
from .output import OutputContext, OutputMode
from .cli.main import main

__all__ = ["OutputContext", "OutputMode", "main", "__version__"]
