"""Git worktree creation and removal."""

import logging
import os
from pathlib import Path
from typing import Iterable

from worktrees.core.backend import GitBackend
from worktrees.core.exceptions import PreconditionError, WorktreeAlreadyExistsError

logger = logging.getLogger(__name__)


class WorktreeManager:
    """Manages the worktree directories of a project."""

    def __init__(self, backend: GitBackend):
        self.backend = backend

    def ensure_available(self, destination: Path) -> None:
        """
        Check that nothing exists yet where a worktree is about to be created.

        Raises:
            WorktreeAlreadyExistsError: If the destination already exists.
        """
        if destination.exists() or destination.is_symlink():
            raise WorktreeAlreadyExistsError(f"Directory already exists: {destination}")

    def create(self, main_worktree: Path, destination: Path, branch: str) -> None:
        """
        Create a worktree at ``destination`` with ``branch`` checked out.

        Args:
            main_worktree: Path of the main worktree.
            destination: Where the new worktree goes.
            branch: Existing branch to check out. Must not be checked out elsewhere.

        Raises:
            WorktreeAlreadyExistsError: If the destination already exists.
            BackendError: If git refuses to create the worktree.
        """
        self.ensure_available(destination)
        self.backend.add_worktree(main_worktree, destination, branch)
        logger.info(f"Created worktree {destination} on branch '{branch}'")

    def propagate_symlinks(
        self,
        main_worktree: Path,
        new_worktree: Path,
        sources: Iterable[Path],
    ) -> list[Path]:
        """
        Symlink files from the main worktree into a new worktree.

        Each link sits at the same position relative to the new worktree as its
        source does relative to the main worktree, and points at the source itself.
        Links created before a failure are left in place.

        Args:
            main_worktree: Path of the main worktree.
            new_worktree: Path of the freshly created worktree.
            sources: Absolute paths of files under the main worktree.

        Returns:
            Paths of the created links.

        Raises:
            PreconditionError: If a source is not under the main worktree.
        """
        created = []

        for source in sources:
            source = Path(source)
            try:
                suffix = source.relative_to(main_worktree)
            except ValueError as e:
                raise PreconditionError(
                    f"cannot symlink '{source}', it is not under the main worktree "
                    f"'{main_worktree}'"
                ) from e

            link = new_worktree / suffix
            try:
                link.parent.mkdir(parents=True, exist_ok=True)
                os.symlink(source, link)
            except OSError as e:
                raise PreconditionError(f"couldn't symlink '{source}': {e}") from e

            logger.debug(f"Symlinked {link} -> {source}")
            created.append(link)

        return created

    def remove(self, main_worktree: Path, path: Path) -> None:
        """Forcefully remove a worktree, discarding uncommitted changes."""
        self.backend.remove_worktree(main_worktree, path)
        logger.info(f"Removed worktree {path}")
