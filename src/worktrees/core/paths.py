"""Path arithmetic for worktree projects.

Every worktree of a project is a direct child of the project directory, so all
locations derive from the parent of any known worktree joined with a name.
"""

import logging
from pathlib import Path

from worktrees.core.exceptions import PreconditionError

logger = logging.getLogger(__name__)


def project_root(worktree_path: Path) -> Path:
    """
    Get the project directory that holds a worktree.

    Args:
        worktree_path: Path of any worktree in the project.

    Returns:
        The parent directory of the worktree.

    Raises:
        PreconditionError: If the worktree is a filesystem root.
    """
    worktree_path = Path(worktree_path)
    parent = worktree_path.parent
    if parent == worktree_path:
        raise PreconditionError(f"worktree had no parent: {worktree_path}")
    return parent


def sibling_worktree_path(main_worktree: Path, name: str) -> Path:
    """Get the path of the worktree called ``name`` next to the main worktree."""
    path = project_root(main_worktree) / name
    logger.debug(f"Determined sibling worktree location: {path}")
    return path
