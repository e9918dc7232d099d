"""Pydantic models for worktree information."""

from pathlib import Path

from pydantic import BaseModel, Field


class WorktreeInfo(BaseModel):
    """Information about a git worktree."""

    path: Path = Field(description="Absolute path to the worktree directory")
    branch: str = Field(description="Branch name checked out in this worktree")
    head_commit: str = Field(default="", description="Short SHA of the HEAD commit")
    is_main: bool = Field(default=False, description="Whether this is the main worktree")
    is_detached: bool = Field(default=False, description="Whether HEAD is detached")

    @property
    def name(self) -> str:
        """Get the worktree directory name."""
        return self.path.name


class BranchRequest(BaseModel):
    """The branch a new worktree will check out."""

    name: str = Field(description="Branch name to check out")
    needs_creation: bool = Field(description="Whether the branch must be created first")


class WorktreeCreateResult(BaseModel):
    """Result of creating a new worktree."""

    path: Path = Field(description="Path of the new worktree")
    branch: str = Field(description="Branch checked out in the new worktree")
    created_branch: bool = Field(
        default=False, description="Whether a new branch was created"
    )
    symlinks: list[Path] = Field(
        default_factory=list, description="Symlinks created inside the new worktree"
    )
