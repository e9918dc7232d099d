"""Exceptions raised by the worktree orchestration layer."""


class WorktreesError(Exception):
    """Base exception for all worktree project errors."""


class PreconditionError(WorktreesError):
    """Raised when a user-supplied input or the project layout is unusable."""


class WorktreeAlreadyExistsError(PreconditionError):
    """Raised when trying to create a worktree where a directory already exists."""


class BackendError(WorktreesError):
    """Raised when a git operation fails.

    The message carries git's own diagnostic text.
    """


class TopologyError(WorktreesError):
    """Raised when a repository doesn't have the branch or reference shape we expect."""
