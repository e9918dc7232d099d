"""Git backend used by the worktree orchestration layer.

The orchestration code only talks to the abstract GitBackend. GitPythonBackend
implements it on top of GitPython, which shells out to the git executable.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from git import Git, Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from worktrees.core.exceptions import BackendError, TopologyError
from worktrees.models.worktree_info import WorktreeInfo

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"


class GitBackend(ABC):
    """Abstract interface for the git operations the orchestration layer needs.

    Every method either returns a value or raises a WorktreesError subclass.
    """

    @abstractmethod
    def discover_main_worktree(self, start: Path) -> Path:
        """Return the main worktree of the repository containing ``start``."""
        ...

    @abstractmethod
    def list_worktrees(self, main_worktree: Path) -> list[WorktreeInfo]:
        """List every worktree of the repository, main worktree first."""
        ...

    @abstractmethod
    def head_ref(self, worktree: Path) -> str:
        """Return the full reference name checked out in ``worktree``."""
        ...

    @abstractmethod
    def create_branch(self, main_worktree: Path, name: str) -> None:
        """Create a local branch at the current HEAD of the main worktree."""
        ...

    @abstractmethod
    def delete_branch(self, main_worktree: Path, name: str) -> None:
        """Delete a local branch. Fails if it is checked out in a worktree."""
        ...

    @abstractmethod
    def add_worktree(self, main_worktree: Path, path: Path, branch: str) -> None:
        """Add a worktree at ``path`` with ``branch`` checked out."""
        ...

    @abstractmethod
    def remove_worktree(self, main_worktree: Path, path: Path) -> None:
        """Forcefully remove the worktree at ``path``."""
        ...

    @abstractmethod
    def clone(
        self,
        source: str,
        into: Path,
        name: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> Path:
        """Clone ``source`` under ``into`` and return the directory that was created."""
        ...

    @abstractmethod
    def local_branches(self, repo_path: Path) -> list[str]:
        """Return the names of the local branches of a repository."""
        ...

    @abstractmethod
    def init_repository(self, path: Path, branch: str) -> None:
        """Initialize a repository on ``branch`` with one empty commit."""
        ...

    @abstractmethod
    def default_branch_name(self) -> str:
        """Return the globally configured default branch name."""
        ...


def _git_message(error: GitCommandError) -> str:
    """Extract git's diagnostic text from a GitCommandError."""
    text = str(error.stderr or "").strip()
    prefix = "stderr: '"
    if text.startswith(prefix) and text.endswith("'"):
        text = text[len(prefix):-1].strip()
    return text or str(error)


def _child_directories(path: Path) -> set[Path]:
    try:
        return {child for child in path.iterdir() if child.is_dir()}
    except OSError as e:
        raise BackendError(f"couldn't read directory: {path}: {e}") from e


class GitPythonBackend(GitBackend):
    """GitBackend implementation built on GitPython."""

    def _open(self, path: Path, search_parents: bool = False) -> Repo:
        try:
            return Repo(path, search_parent_directories=search_parents)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise BackendError(f"not a git repository: {path}") from e

    def discover_main_worktree(self, start: Path) -> Path:
        try:
            repo = self._open(start, search_parents=True)
        except BackendError as e:
            raise BackendError(f"couldn't determine current repository: {e}") from e

        worktrees = self._parse_worktree_list(repo)
        if not worktrees:
            raise TopologyError(f"couldn't find main worktree for: {start}")

        main = worktrees[0]
        if main.get("bare"):
            raise TopologyError("main worktree was a bare repository")

        main_path = Path(main["path"])
        logger.debug(f"Found main worktree: {main_path}")
        return main_path

    def list_worktrees(self, main_worktree: Path) -> list[WorktreeInfo]:
        repo = self._open(main_worktree)
        return [
            self._parse_worktree_entry(entry, is_main=index == 0)
            for index, entry in enumerate(self._parse_worktree_list(repo))
            if not entry.get("bare")
        ]

    def _parse_worktree_list(self, repo: Repo) -> list[dict]:
        """Parse ``git worktree list --porcelain`` into one dict per worktree."""
        try:
            output = repo.git.worktree("list", "--porcelain")
        except GitCommandError as e:
            raise BackendError(
                f"couldn't get worktrees for repository: {_git_message(e)}"
            ) from e

        entries = []
        current: dict = {}
        for line in output.split("\n"):
            line = line.strip()

            if not line:
                if current:
                    entries.append(current)
                    current = {}
                continue

            if line.startswith("worktree "):
                current["path"] = line[9:]
            elif line.startswith("HEAD "):
                current["head"] = line[5:]
            elif line.startswith("branch "):
                current["branch"] = line[7:]
            elif line == "detached":
                current["detached"] = True
            elif line == "bare":
                current["bare"] = True

        if current:
            entries.append(current)

        return entries

    def _parse_worktree_entry(self, entry: dict, is_main: bool) -> WorktreeInfo:
        branch_ref = entry.get("branch", "")
        if branch_ref.startswith("refs/heads/"):
            branch = branch_ref[11:]
        else:
            branch = branch_ref or "(detached)"

        return WorktreeInfo(
            path=Path(entry.get("path", "")),
            branch=branch,
            head_commit=entry.get("head", "")[:7],
            is_main=is_main,
            is_detached=entry.get("detached", False),
        )

    def head_ref(self, worktree: Path) -> str:
        repo = self._open(worktree)
        if repo.head.is_detached:
            raise TopologyError(f"worktree has a detached HEAD: {worktree}")
        return repo.head.ref.path

    def create_branch(self, main_worktree: Path, name: str) -> None:
        repo = self._open(main_worktree)
        try:
            repo.git.branch(name)
        except GitCommandError as e:
            raise BackendError(
                f"couldn't create branch '{name}': {_git_message(e)}"
            ) from e
        logger.debug(f"Created branch '{name}'")

    def delete_branch(self, main_worktree: Path, name: str) -> None:
        repo = self._open(main_worktree)
        try:
            repo.git.branch("-D", name)
        except GitCommandError as e:
            raise BackendError(
                f"couldn't delete branch '{name}': {_git_message(e)}"
            ) from e
        logger.debug(f"Deleted branch '{name}'")

    def add_worktree(self, main_worktree: Path, path: Path, branch: str) -> None:
        repo = self._open(main_worktree)
        try:
            repo.git.worktree("add", str(path), branch)
        except GitCommandError as e:
            raise BackendError(f"couldn't create worktree: {_git_message(e)}") from e

    def remove_worktree(self, main_worktree: Path, path: Path) -> None:
        repo = self._open(main_worktree)
        try:
            repo.git.worktree("remove", "--force", str(path))
        except GitCommandError as e:
            raise BackendError(f"couldn't remove worktree: {_git_message(e)}") from e

    def clone(
        self,
        source: str,
        into: Path,
        name: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> Path:
        try:
            into.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BackendError(f"couldn't create clone directory: {e}") from e

        before = _child_directories(into)

        args = [source]
        if name:
            args.append(name)
        kwargs = {"branch": branch} if branch else {}

        try:
            Git(str(into)).clone(*args, **kwargs)
        except GitCommandError as e:
            raise BackendError(f"couldn't clone repository: {_git_message(e)}") from e

        created = sorted(_child_directories(into) - before)
        if len(created) > 1:
            raise TopologyError(
                f"clone created more than one directory: {[str(p) for p in created]}"
            )
        if not created:
            raise TopologyError("clone didn't create a directory")

        logger.debug(f"Cloned {source} into {created[0]}")
        return created[0]

    def local_branches(self, repo_path: Path) -> list[str]:
        repo = self._open(repo_path)
        return [head.name for head in repo.heads]

    def init_repository(self, path: Path, branch: str) -> None:
        try:
            repo = Repo.init(path, initial_branch=branch)
            repo.git.commit("--allow-empty", "-m", "Initial commit")
        except GitCommandError as e:
            raise BackendError(
                f"couldn't initialize repository: {_git_message(e)}"
            ) from e

    def default_branch_name(self) -> str:
        try:
            name = Git().config("--global", "--get", "init.defaultBranch").strip()
        except GitCommandError:
            name = ""
        return name or DEFAULT_BRANCH
