"""
Tests for creating projects by cloning.

Tests cover:
- Final layout of a cloned project
- Naming stability across clones
- Default branch discovery failures
- Cleanup of the temporary clone
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from conftest import git
from worktrees.core.backend import GitBackend
from worktrees.core.clone import CloneBootstrap
from worktrees.core.exceptions import BackendError, PreconditionError, TopologyError


class TestCloneProject:
    """Tests for CloneBootstrap against real repositories."""

    @pytest.fixture
    def bootstrap(self, backend):
        return CloneBootstrap(backend)

    def test_clone_creates_default_branch_worktree(self, bootstrap, source_repo, temp_directory):
        out = temp_directory / "out"
        out.mkdir()

        path = bootstrap.clone_project(str(source_repo), out)

        assert path == out / "repo_name" / "main"
        assert (path / "README.md").read_text() == "# Test Repository\n"
        assert git("branch", "--show-current", cwd=path) == "main"

    def test_clone_uses_source_default_branch(self, bootstrap, source_repo, temp_directory):
        git("branch", "-m", "main", "trunk", cwd=source_repo)
        out = temp_directory / "out"
        out.mkdir()

        path = bootstrap.clone_project(str(source_repo), out)

        assert path == out / "repo_name" / "trunk"

    def test_clone_naming_is_stable(self, bootstrap, source_repo, temp_directory):
        first_root = temp_directory / "first"
        second_root = temp_directory / "second"
        first_root.mkdir()
        second_root.mkdir()

        first = bootstrap.clone_project(str(source_repo), first_root)
        second = bootstrap.clone_project(str(source_repo), second_root)

        assert first.relative_to(first_root) == second.relative_to(second_root)

    def test_clone_with_project_name(self, bootstrap, source_repo, temp_directory):
        out = temp_directory / "out"
        out.mkdir()

        path = bootstrap.clone_project(str(source_repo), out, name="renamed")

        assert path == out / "renamed" / "main"

    def test_clone_relative_local_path(self, bootstrap, source_repo, temp_directory, monkeypatch):
        out = temp_directory / "out"
        out.mkdir()
        monkeypatch.chdir(source_repo.parent)

        path = bootstrap.clone_project("repo_name", out)

        assert path == out / "repo_name" / "main"
        assert (path / "README.md").exists()

    def test_clone_into_missing_path(self, bootstrap, source_repo, temp_directory):
        with pytest.raises(PreconditionError, match="does not exist"):
            bootstrap.clone_project(str(source_repo), temp_directory / "missing")

    def test_clone_of_missing_repository(self, bootstrap, temp_directory):
        out = temp_directory / "out"
        out.mkdir()

        with pytest.raises(BackendError, match="couldn't clone repository"):
            bootstrap.clone_project(str(temp_directory / "no_such_repo"), out)

        assert list(out.iterdir()) == []

    def test_clone_of_empty_repository(self, bootstrap, temp_directory):
        empty = temp_directory / "empty_repo"
        empty.mkdir()
        git("init", cwd=empty)
        out = temp_directory / "out"
        out.mkdir()

        with pytest.raises(TopologyError, match="no branches"):
            bootstrap.clone_project(str(empty), out)


class TestProbe:
    """Tests for the temporary clone with a mocked backend."""

    @pytest.fixture
    def mock_backend(self):
        backend = MagicMock(spec=GitBackend)
        backend.clone.side_effect = self._fake_clone
        return backend

    @staticmethod
    def _fake_clone(source, into, name=None, branch=None):
        path = into / (name or "repo_name")
        path.mkdir()
        return path

    def test_probe_returns_name_and_branch(self, mock_backend):
        mock_backend.local_branches.return_value = ["develop"]

        assert CloneBootstrap(mock_backend).probe("git@example.com:repo_name.git") == (
            "repo_name",
            "develop",
        )

    def test_probe_removes_temporary_clone(self, mock_backend):
        mock_backend.local_branches.return_value = ["main"]

        CloneBootstrap(mock_backend).probe("source")

        temp_clone = mock_backend.clone.call_args.args[1]
        assert not Path(temp_clone).exists()

    def test_probe_removes_temporary_clone_on_failure(self, mock_backend):
        mock_backend.local_branches.return_value = []

        with pytest.raises(TopologyError):
            CloneBootstrap(mock_backend).probe("source")

        temp_clone = mock_backend.clone.call_args.args[1]
        assert not Path(temp_clone).exists()

    def test_probe_rejects_several_branches(self, mock_backend):
        mock_backend.local_branches.return_value = ["main", "develop"]

        with pytest.raises(TopologyError, match="2 local branches"):
            CloneBootstrap(mock_backend).probe("source")

    def test_commit_phase_checks_out_default_branch(self, mock_backend, temp_directory):
        mock_backend.local_branches.return_value = ["develop"]

        path = CloneBootstrap(mock_backend).clone_project("source", temp_directory)

        assert path == temp_directory / "repo_name" / "develop"
        mock_backend.clone.assert_called_with(
            "source", temp_directory / "repo_name", name="develop", branch="develop"
        )

    def test_missing_destination_clones_nothing(self, mock_backend, temp_directory):
        with pytest.raises(PreconditionError):
            CloneBootstrap(mock_backend).clone_project("source", temp_directory / "missing")

        mock_backend.clone.assert_not_called()
