"""
Worktrees - manage a project as a directory of sibling git worktrees.

This package provides functionality for creating projects whose worktrees,
one per branch, live side by side under a single project directory.
"""

__version__ = "0.1.0"

from worktrees.config import Config, load_config

__all__ = [
    "__version__",
    "Config",
    "load_config",
]
