"""
Configuration management for worktrees.

Loads configuration from .worktreesrc files in the following priority:
1. Path specified via --config flag
2. .worktreesrc in current directory
3. .worktreesrc.toml in current directory
4. ~/.config/worktrees/config.toml
5. ~/.worktreesrc
"""

import logging
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class WorktreeConfig(BaseModel):
    """Configuration for creating worktrees."""

    symlinks: list[str] = Field(
        default_factory=list,
        description="Paths relative to the main worktree to symlink into new worktrees",
    )


class RemoveConfig(BaseModel):
    """Configuration for removing worktrees."""

    delete_branch: bool = Field(
        default=False,
        description="Delete the branch checked out in a removed worktree",
    )
    confirm: bool = Field(
        default=True,
        description="Ask for confirmation before removing worktrees",
    )


class Config(BaseModel):
    """Main configuration model for worktrees."""

    worktree: WorktreeConfig = Field(default_factory=WorktreeConfig)
    remove: RemoveConfig = Field(default_factory=RemoveConfig)

    def symlink_sources(self, main_worktree: Path) -> list[Path]:
        """Get the configured symlinks as absolute paths under the main worktree."""
        return [main_worktree / entry for entry in self.worktree.symlinks]


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Optional explicit path to config file.

    Returns:
        Config instance with loaded or default values.
    """
    search_paths = [
        Path(config_path) if config_path else None,
        Path.cwd() / ".worktreesrc",
        Path.cwd() / ".worktreesrc.toml",
        Path.home() / ".config" / "worktrees" / "config.toml",
        Path.home() / ".worktreesrc",
    ]

    for path in search_paths:
        if path and path.exists():
            try:
                data = toml.load(path)
                return Config(**data)
            except (OSError, toml.TomlDecodeError, ValidationError) as e:
                logger.warning(f"Ignoring invalid config file {path}: {e}")
                continue

    return Config()
