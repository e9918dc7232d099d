"""
Project creation by cloning a repository.

The project directory is named after the repository and its first worktree
after the default branch, neither of which is known before cloning. A throwaway
clone into a temporary directory discovers both, then the real clone goes
straight to its final location.
"""

import logging
import tempfile
from pathlib import Path
from typing import Optional

from worktrees.core.backend import GitBackend
from worktrees.core.exceptions import PreconditionError, TopologyError

logger = logging.getLogger(__name__)


class CloneBootstrap:
    """Creates a worktree project from a repository URL or path."""

    def __init__(self, backend: GitBackend):
        self.backend = backend

    def probe(self, source: str) -> tuple[str, str]:
        """
        Clone ``source`` into a temporary directory to learn its name and default branch.

        The temporary clone is deleted before returning, whether or not it succeeded.

        Returns:
            Tuple of (repository name, default branch).

        Raises:
            BackendError: If the clone fails.
            TopologyError: If the clone doesn't have exactly one local branch.
        """
        with tempfile.TemporaryDirectory(prefix="worktrees-clone-") as temp_dir:
            repo_path = self.backend.clone(source, Path(temp_dir))
            repo_name = repo_path.name
            default_branch = self._fresh_clone_branch(repo_path)

        logger.debug(f"Repository '{repo_name}' has default branch '{default_branch}'")
        return repo_name, default_branch

    def _fresh_clone_branch(self, repo_path: Path) -> str:
        """Get the only local branch of a fresh clone."""
        branches = self.backend.local_branches(repo_path)
        if not branches:
            raise TopologyError("couldn't determine repo default branch: repo had no branches")
        if len(branches) > 1:
            raise TopologyError(
                "couldn't determine repo default branch: fresh clone had "
                f"{len(branches)} local branches: {', '.join(sorted(branches))}"
            )
        return branches[0]

    def clone_project(
        self,
        source: str,
        clone_under: Path,
        name: Optional[str] = None,
    ) -> Path:
        """
        Create a project by cloning ``source``.

        Args:
            source: URL or local path of the repository. A relative local
                path is taken relative to the current directory.
            clone_under: Existing directory to create the project in.
            name: Project directory name. Defaults to the repository name.

        Returns:
            Path of the first worktree, ``<clone_under>/<name>/<default branch>``.

        Raises:
            PreconditionError: If ``clone_under`` doesn't exist.
            BackendError: If either clone fails. A failed second clone leaves
                the project directory behind.
        """
        if not clone_under.exists():
            raise PreconditionError(f"path does not exist: {clone_under}")

        # git clone runs inside the destination, so a local path must not stay relative.
        if Path(source).exists():
            source = str(Path(source).absolute())

        repo_name, default_branch = self.probe(source)
        project_path = clone_under / (name or repo_name)

        try:
            project_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PreconditionError(f"failed to create project directory: {e}") from e

        worktree_path = self.backend.clone(
            source, project_path, name=default_branch, branch=default_branch
        )
        logger.info(f"Cloned {source} into {worktree_path}")
        return worktree_path
