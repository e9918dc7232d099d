"""Tests for Pydantic models."""

from pathlib import Path

from worktrees.models.removal import RemovalOutcome, RemovalReport
from worktrees.models.worktree_info import BranchRequest, WorktreeCreateResult, WorktreeInfo


class TestWorktreeInfo:
    """Test suite for WorktreeInfo model."""

    def test_name_is_directory_name(self):
        info = WorktreeInfo(path=Path("/projects/proj/feature"), branch="feature")

        assert info.name == "feature"

    def test_defaults(self):
        info = WorktreeInfo(path=Path("/projects/proj/feature"), branch="feature")

        assert info.head_commit == ""
        assert info.is_main is False
        assert info.is_detached is False

    def test_path_coerced_from_string(self):
        info = WorktreeInfo(path="/projects/proj/main", branch="main")

        assert isinstance(info.path, Path)


class TestBranchRequest:
    """Test suite for BranchRequest model."""

    def test_fields(self):
        request = BranchRequest(name="feature", needs_creation=True)

        assert request.name == "feature"
        assert request.needs_creation is True


class TestWorktreeCreateResult:
    """Test suite for WorktreeCreateResult model."""

    def test_defaults(self):
        result = WorktreeCreateResult(path=Path("/projects/proj/feature"), branch="feature")

        assert result.created_branch is False
        assert result.symlinks == []


class TestRemovalOutcome:
    """Test suite for RemovalOutcome messages."""

    def test_worktree_only(self):
        outcome = RemovalOutcome(name="feature", worktree_removed=True)

        assert outcome.succeeded is True
        assert outcome.message == "removed worktree 'feature'"

    def test_worktree_and_branch(self):
        outcome = RemovalOutcome(
            name="feature", branch="feature", worktree_removed=True, branch_deleted=True
        )

        assert outcome.message == "removed worktree 'feature' and branch 'feature'"

    def test_branch_deletion_failed(self):
        outcome = RemovalOutcome(
            name="feature",
            branch="feature",
            worktree_removed=True,
            error="couldn't delete branch 'feature'",
        )

        assert outcome.succeeded is False
        assert outcome.message == (
            "removed worktree 'feature', but couldn't delete branch 'feature'"
        )

    def test_worktree_not_removed(self):
        outcome = RemovalOutcome(name="feature", error="couldn't remove worktree 'feature'")

        assert outcome.message == "couldn't remove worktree 'feature'"


class TestRemovalReport:
    """Test suite for RemovalReport."""

    def test_failed_outcomes(self):
        ok = RemovalOutcome(name="a", worktree_removed=True)
        partial = RemovalOutcome(name="b", worktree_removed=True, error="branch")
        failed = RemovalOutcome(name="c", error="worktree")

        report = RemovalReport(targets=["a", "b", "c"], outcomes=[ok, partial, failed])

        assert report.failed == [partial, failed]
        assert report.aborted is False
