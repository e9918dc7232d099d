"""
Removal of one or more worktrees.

Targets are removed one after the other. For each, the checked-out branch is
read before the worktree is removed, and the branch is only deleted once the
worktree is gone, since git refuses to delete a branch that is checked out.
A failure on one target is recorded and the remaining targets are still
processed.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from worktrees.core.backend import GitBackend
from worktrees.core.branches import BranchManager, branch_name_from_ref
from worktrees.core.exceptions import PreconditionError, WorktreesError
from worktrees.core.paths import sibling_worktree_path
from worktrees.core.project import removable_worktrees
from worktrees.core.prompts import Prompter
from worktrees.core.worktree import WorktreeManager
from worktrees.models.removal import RemovalOutcome, RemovalReport

logger = logging.getLogger(__name__)


class RemovalCoordinator:
    """Resolves, confirms and removes worktrees together with their branches."""

    def __init__(self, backend: GitBackend, prompter: Prompter):
        self.backend = backend
        self.prompter = prompter
        self.worktrees = WorktreeManager(backend)
        self.branches = BranchManager(backend)

    def resolve_targets(self, main_worktree: Path, names: Sequence[str]) -> list[str]:
        """
        Get the names of the worktrees to remove.

        Explicit names are used as given. Without names, the user picks from
        every worktree except the default branch's.

        Raises:
            PreconditionError: If there is nothing to pick from.
        """
        if names:
            return list(names)

        candidates = sorted(wt.name for wt in removable_worktrees(self.backend, main_worktree))
        if not candidates:
            raise PreconditionError("no other worktrees to remove")

        return self.prompter.select("Select worktrees to remove", candidates)

    def remove(
        self,
        main_worktree: Path,
        names: Sequence[str] = (),
        force: bool = False,
        delete_branches: bool = False,
        on_outcome: Optional[Callable[[RemovalOutcome], None]] = None,
    ) -> RemovalReport:
        """
        Remove worktrees and, optionally, their branches.

        Args:
            main_worktree: Path of the main worktree.
            names: Worktrees to remove. Prompts for a selection when empty.
            force: Skip the confirmation prompt.
            delete_branches: Also delete the branch checked out in each worktree.
            on_outcome: Called with each target's outcome as soon as it is known.

        Returns:
            RemovalReport with one outcome per target, or ``aborted`` set when
            the user declined.

        Raises:
            PreconditionError: If no names were given and there is nothing to remove.
        """
        targets = self.resolve_targets(main_worktree, names)
        report = RemovalReport(targets=targets)

        if not targets:
            logger.info("No worktrees selected")
            return report

        if not force:
            summary = ", ".join(f"'{name}'" for name in targets)
            noun = "worktrees" if len(targets) > 1 else "worktree"
            if not self.prompter.confirm(f"Remove {noun} {summary}?", default=False):
                report.aborted = True
                return report

        for name in targets:
            outcome = self.remove_one(main_worktree, name, delete_branches)
            report.outcomes.append(outcome)
            if on_outcome:
                on_outcome(outcome)

        return report

    def remove_one(
        self, main_worktree: Path, name: str, delete_branch: bool
    ) -> RemovalOutcome:
        """Remove a single worktree, recording rather than raising failures."""
        outcome = RemovalOutcome(name=name)

        try:
            path = sibling_worktree_path(main_worktree, name)
        except WorktreesError as e:
            outcome.error = f"couldn't get path for worktree '{name}': {e}"
            return outcome
        outcome.path = path

        # The branch has to be read while the worktree still exists.
        try:
            branch_ref = self.backend.head_ref(path)
            outcome.branch = branch_name_from_ref(branch_ref)
        except WorktreesError as e:
            outcome.error = f"couldn't get branch for worktree '{name}': {e}"
            return outcome

        try:
            self.worktrees.remove(main_worktree, path)
        except WorktreesError as e:
            outcome.error = f"couldn't remove worktree '{name}': {e}"
            return outcome
        outcome.worktree_removed = True

        if delete_branch:
            try:
                self.branches.delete_branch(main_worktree, branch_ref)
            except WorktreesError as e:
                outcome.error = f"couldn't delete branch '{outcome.branch}': {e}"
            else:
                outcome.branch_deleted = True

        return outcome
