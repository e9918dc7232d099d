"""
Pydantic models for worktree projects.

This package contains data models for:
- Worktree information and creation results
- Branch requests for new worktrees
- Removal outcomes and reports
"""

from worktrees.models.removal import RemovalOutcome, RemovalReport
from worktrees.models.worktree_info import (
    BranchRequest,
    WorktreeCreateResult,
    WorktreeInfo,
)

__all__ = [
    "BranchRequest",
    "RemovalOutcome",
    "RemovalReport",
    "WorktreeCreateResult",
    "WorktreeInfo",
]
