"""Interactive prompts used when removing worktrees."""

from abc import ABC, abstractmethod

import click
from InquirerPy import inquirer


class Prompter(ABC):
    """Asks the user to pick from a list or to confirm an action."""

    @abstractmethod
    def select(self, message: str, choices: list[str]) -> list[str]:
        """Return the subset of ``choices`` the user picked."""
        ...

    @abstractmethod
    def confirm(self, message: str, default: bool = False) -> bool:
        """Return whether the user agreed."""
        ...


class TerminalPrompter(Prompter):
    """Prompter that talks to the user on the terminal."""

    def select(self, message: str, choices: list[str]) -> list[str]:
        # Ctrl-C propagates; click reports it as "Aborted!".
        selected = inquirer.checkbox(  # type: ignore[attr-defined]
            message=message,
            choices=choices,
            instruction="(space to select, enter to confirm)",
        ).execute()
        return list(selected or [])

    def confirm(self, message: str, default: bool = False) -> bool:
        return click.confirm(message, default=default, err=True)
