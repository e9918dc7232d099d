"""
Pytest configuration and shared fixtures for worktrees tests.
"""

import subprocess
from pathlib import Path
from typing import Generator

import pytest

from worktrees.core.backend import GitPythonBackend
from worktrees.core.project import init_project


def git(*args: str, cwd: Path) -> str:
    """Run a git command and return its stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git_config_file(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Global git configuration used instead of the user's own."""
    config = tmp_path_factory.mktemp("gitconfig") / "config"
    config.write_text(
        "[init]\n"
        "\tdefaultBranch = main\n"
        "[user]\n"
        "\tname = Test User\n"
        "\temail = test@example.com\n"
    )
    return config


@pytest.fixture(autouse=True)
def isolated_git(git_config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the user's and the system's git configuration."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(git_config_file))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


@pytest.fixture
def temp_directory(tmp_path: Path) -> Path:
    """Temporary directory with symlinks resolved, as git reports paths."""
    return tmp_path.resolve()


@pytest.fixture
def backend() -> GitPythonBackend:
    return GitPythonBackend()


@pytest.fixture
def main_worktree(backend: GitPythonBackend, temp_directory: Path) -> Path:
    """Main worktree of a freshly initialized project called 'proj'."""
    return init_project(backend, "proj", temp_directory)


@pytest.fixture
def linked_worktree(main_worktree: Path) -> Generator[Path, None, None]:
    """A 'feature' worktree next to the main worktree, on branch 'feature'."""
    worktree_path = main_worktree.parent / "feature"
    git("worktree", "add", "-b", "feature", str(worktree_path), cwd=main_worktree)

    yield worktree_path

    if worktree_path.exists():
        subprocess.run(
            ["git", "worktree", "remove", "--force", str(worktree_path)],
            cwd=main_worktree,
            capture_output=True,
        )


@pytest.fixture
def source_repo(temp_directory: Path) -> Path:
    """A plain repository called 'repo_name' with one commit on 'main'."""
    repo_path = temp_directory / "sources" / "repo_name"
    repo_path.mkdir(parents=True)

    git("init", "--initial-branch=main", cwd=repo_path)
    (repo_path / "README.md").write_text("# Test Repository\n")
    git("add", ".", cwd=repo_path)
    git("commit", "-m", "Initial commit", cwd=repo_path)

    return repo_path
