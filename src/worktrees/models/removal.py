"""Pydantic models describing the outcome of worktree removal."""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel


class RemovalOutcome(BaseModel):
    """Result of removing a single worktree."""

    name: str
    path: Optional[Path] = None
    branch: Optional[str] = None
    worktree_removed: bool = False
    branch_deleted: bool = False
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """Status line summarizing what happened to this worktree."""
        if not self.worktree_removed:
            return self.error or f"worktree '{self.name}' was not removed"

        msg = f"removed worktree '{self.name}'"
        if self.branch_deleted:
            msg += f" and branch '{self.branch}'"
        if self.error:
            msg += f", but {self.error}"
        return msg


class RemovalReport(BaseModel):
    """Report generated after a removal run."""

    targets: List[str] = []
    outcomes: List[RemovalOutcome] = []
    aborted: bool = False

    @property
    def failed(self) -> List[RemovalOutcome]:
        return [o for o in self.outcomes if not o.succeeded]
