"""Project-level operations: initializing a project, adding and listing worktrees."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from worktrees.core.backend import GitBackend
from worktrees.core.branches import BranchManager, resolve_branch_request
from worktrees.core.exceptions import PreconditionError
from worktrees.core.paths import sibling_worktree_path
from worktrees.core.worktree import WorktreeManager
from worktrees.models.worktree_info import WorktreeCreateResult, WorktreeInfo

logger = logging.getLogger(__name__)


def init_project(backend: GitBackend, name: str, parent_dir: Path) -> Path:
    """
    Create a new worktree project.

    The project is a directory called ``name`` under ``parent_dir`` whose first
    worktree is named after the default branch and holds one empty commit.

    Returns:
        Path of the main worktree.

    Raises:
        PreconditionError: If ``parent_dir`` is missing or the worktree exists.
    """
    if not parent_dir.exists():
        raise PreconditionError(f"path does not exist: {parent_dir}")

    branch = backend.default_branch_name()
    path = parent_dir / name / branch
    if path.exists():
        raise PreconditionError(f"project already exists: {path}")

    path.mkdir(parents=True)
    backend.init_repository(path, branch)
    logger.info(f"Initialized project '{name}' at {path}")
    return path


def new_worktree(
    backend: GitBackend,
    main_worktree: Path,
    name: str,
    existing_branch: Optional[str] = None,
    new_branch: Optional[str] = None,
    symlinks: Iterable[Path] = (),
) -> WorktreeCreateResult:
    """
    Add a worktree called ``name`` next to the main worktree.

    Args:
        backend: Git backend.
        main_worktree: Path of the main worktree.
        name: Directory name of the new worktree.
        existing_branch: Check out this existing branch.
        new_branch: Create a branch with this name instead of ``name``.
        symlinks: Files under the main worktree to symlink into the new one.

    Returns:
        WorktreeCreateResult for the new worktree.
    """
    worktrees = WorktreeManager(backend)
    branches = BranchManager(backend)

    path = sibling_worktree_path(main_worktree, name)
    request = resolve_branch_request(name, existing_branch, new_branch)

    worktrees.ensure_available(path)
    if request.needs_creation:
        branches.create_branch(main_worktree, request.name)
    worktrees.create(main_worktree, path, request.name)
    links = worktrees.propagate_symlinks(main_worktree, path, symlinks)

    return WorktreeCreateResult(
        path=path,
        branch=request.name,
        created_branch=request.needs_creation,
        symlinks=links,
    )


def removable_worktrees(backend: GitBackend, main_worktree: Path) -> list[WorktreeInfo]:
    """Get the worktrees that may be removed: everything but the default branch's."""
    default_branch = backend.default_branch_name()
    return [
        wt
        for wt in backend.list_worktrees(main_worktree)
        if not wt.is_main and wt.name != default_branch and wt.branch != default_branch
    ]


def list_worktree_names(backend: GitBackend, main_worktree: Path) -> list[str]:
    """Get the sorted names of the project's worktrees, the default branch's excluded."""
    return sorted(wt.name for wt in removable_worktrees(backend, main_worktree))
