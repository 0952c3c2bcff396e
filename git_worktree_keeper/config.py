"""Configuration handling for git-worktree-keeper"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Configuration for a single invocation, with validation."""

    # Listing
    output_format: str = "table"  # table, json
    show_branches: bool = False

    # Repository
    main_branch: Optional[str] = None  # None = detect from origin/HEAD

    # Execution modes
    force: bool = False  # Skip approval prompts
    no_verify: bool = False  # Skip hooks
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_output_format()
        self._validate_main_branch()

    def _validate_output_format(self):
        """Validate output_format is one of allowed values."""
        allowed = ["table", "json"]
        if self.output_format not in allowed:
            raise ValueError(f"output_format must be one of {allowed}, got '{self.output_format}'")

    def _validate_main_branch(self):
        """Validate main_branch is not blank when given."""
        if self.main_branch is None:
            return
        if not self.main_branch.strip():
            raise ValueError("main_branch cannot be empty")
        self.main_branch = self.main_branch.strip()

    def to_dict(self) -> dict:
        """Convert config to a dictionary (used for debug output)."""
        return {
            "output_format": self.output_format,
            "show_branches": self.show_branches,
            "main_branch": self.main_branch,
            "force": self.force,
            "no_verify": self.no_verify,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {
            "output_format",
            "show_branches",
            "main_branch",
            "force",
            "no_verify",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
