"""
Core modules for worktree projects.

This package contains the business logic for:
- Path arithmetic between sibling worktrees
- Branch decisions and branch deletion
- Worktree creation, symlinking and removal
- Multi-worktree removal
- Project creation, from scratch or by cloning
- The git backend and interactive prompts they rely on
"""

from worktrees.core.backend import GitBackend, GitPythonBackend
from worktrees.core.branches import (
    BranchManager,
    branch_name_from_ref,
    resolve_branch_request,
)
from worktrees.core.clone import CloneBootstrap
from worktrees.core.exceptions import (
    BackendError,
    PreconditionError,
    TopologyError,
    WorktreeAlreadyExistsError,
    WorktreesError,
)
from worktrees.core.paths import project_root, sibling_worktree_path
from worktrees.core.project import init_project, list_worktree_names, new_worktree
from worktrees.core.prompts import Prompter, TerminalPrompter
from worktrees.core.removal import RemovalCoordinator
from worktrees.core.worktree import WorktreeManager

__all__ = [
    "BackendError",
    "BranchManager",
    "CloneBootstrap",
    "GitBackend",
    "GitPythonBackend",
    "PreconditionError",
    "Prompter",
    "RemovalCoordinator",
    "TerminalPrompter",
    "TopologyError",
    "WorktreeAlreadyExistsError",
    "WorktreeManager",
    "WorktreesError",
    "branch_name_from_ref",
    "init_project",
    "list_worktree_names",
    "new_worktree",
    "project_root",
    "resolve_branch_request",
    "sibling_worktree_path",
]
