"""Allow running as ``python -m git_worktree_keeper``."""

import sys

from git_worktree_keeper.cli.main import main

sys.exit(main())
