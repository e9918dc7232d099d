"""Branch decisions and branch reference handling for worktrees."""

import logging
from pathlib import Path
from typing import Optional

from worktrees.core.backend import GitBackend
from worktrees.core.exceptions import TopologyError
from worktrees.models.worktree_info import BranchRequest

logger = logging.getLogger(__name__)

LOCAL_BRANCH_PREFIX = "refs/heads/"


def resolve_branch_request(
    directory_name: str,
    existing_branch: Optional[str] = None,
    new_branch: Optional[str] = None,
) -> BranchRequest:
    """
    Decide which branch a new worktree checks out and whether to create it.

    Args:
        directory_name: Name of the new worktree directory.
        existing_branch: Branch that already exists and should be checked out.
        new_branch: Name of a branch to create instead of the directory name.

    Returns:
        BranchRequest with the branch name and whether it needs creating.

    Raises:
        ValueError: If both an existing and a new branch are given.
    """
    if existing_branch and new_branch:
        raise ValueError("existing_branch and new_branch are mutually exclusive")

    if existing_branch:
        logger.debug(f"Will check out existing branch '{existing_branch}'")
        return BranchRequest(name=existing_branch, needs_creation=False)

    if new_branch:
        logger.debug(f"Will make new branch '{new_branch}'")
        return BranchRequest(name=new_branch, needs_creation=True)

    logger.debug(f"Will make new branch with directory name '{directory_name}'")
    return BranchRequest(name=directory_name, needs_creation=True)


def branch_name_from_ref(ref_name: str) -> str:
    """
    Extract the short branch name from a ``refs/heads/<name>`` reference.

    Branch names may contain slashes, so everything after the prefix is kept.

    Raises:
        TopologyError: If the reference is not a local branch reference.
    """
    if not ref_name.startswith(LOCAL_BRANCH_PREFIX):
        raise TopologyError(f"not a local branch reference: '{ref_name}'")

    name = ref_name[len(LOCAL_BRANCH_PREFIX):]
    if not name:
        raise TopologyError(f"failed to get branch name from ref '{ref_name}'")
    return name


class BranchManager:
    """Creates and deletes the branches bound to worktrees."""

    def __init__(self, backend: GitBackend):
        self.backend = backend

    def create_branch(self, main_worktree: Path, name: str) -> None:
        self.backend.create_branch(main_worktree, name)

    def delete_branch(self, main_worktree: Path, branch_ref: str) -> str:
        """
        Delete the branch behind a full reference name.

        Must be called with the main worktree, never with a worktree that was
        just removed: its directory no longer exists to look the reference up from.

        Args:
            main_worktree: Path of the main worktree.
            branch_ref: Full reference name, e.g. ``refs/heads/feature``.

        Returns:
            The short name of the deleted branch.
        """
        name = branch_name_from_ref(branch_ref)
        self.backend.delete_branch(main_worktree, name)
        return name
