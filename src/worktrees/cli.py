"""CLI entry point for worktrees."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from worktrees import __version__
from worktrees.config import Config, load_config
from worktrees.core.backend import GitBackend, GitPythonBackend
from worktrees.core.clone import CloneBootstrap
from worktrees.core.exceptions import WorktreesError
from worktrees.core.project import init_project, list_worktree_names, new_worktree
from worktrees.core.prompts import TerminalPrompter
from worktrees.core.removal import RemovalCoordinator
from worktrees.models.removal import RemovalOutcome
from worktrees.utils.logging import setup_logging

console = Console(stderr=True, highlight=False)


@dataclass
class CliState:
    """Options shared by every command."""

    config: Config = field(default_factory=Config)
    quiet: bool = False
    backend: GitBackend = field(default_factory=GitPythonBackend)

    def emit(self, value: object) -> None:
        """Print a result on stdout unless --quiet was given."""
        if not self.quiet:
            click.echo(str(value))

    def status(self, message: str) -> None:
        """Print a status message on stderr unless --quiet was given."""
        if not self.quiet:
            console.print(message, soft_wrap=True)


def get_main_worktree(state: CliState) -> Path:
    """
    Locate the main worktree of the project containing the current directory.

    Raises:
        click.ClickException: If not inside a worktree project.
    """
    try:
        return state.backend.discover_main_worktree(Path.cwd())
    except WorktreesError as e:
        raise click.ClickException(f"couldn't locate main worktree: {e}") from e


def absolute_path(path: Path) -> Path:
    """Make a path absolute without following a symlink at its last component."""
    path = path.absolute()
    return path.parent.resolve() / path.name


@click.group()
@click.version_option(version=__version__, prog_name="wt")
@click.option("-q", "--quiet", is_flag=True, help="Silences all output.")
@click.option("-v", "--verbose", is_flag=True, help="Show progress messages.")
@click.option("--debug", is_flag=True, help="Show debug messages.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to a configuration file.",
)
@click.pass_context
def main(
    ctx: click.Context,
    quiet: bool,
    verbose: bool,
    debug: bool,
    config_path: Optional[str],
) -> None:
    """Utility for managing git worktrees.

    A project is a directory holding one worktree per branch, side by side.
    """
    setup_logging(verbose=verbose and not quiet, debug=debug)
    if ctx.obj is None:
        ctx.obj = CliState(config=load_config(config_path), quiet=quiet)
    else:
        ctx.obj.quiet = quiet


@main.command("init")
@click.argument("name", metavar="PROJ_NAME")
@click.option(
    "-p",
    "--path",
    type=click.Path(path_type=Path),
    help="The directory to create the project in [default: current directory].",
)
@click.pass_obj
def init_cmd(state: CliState, name: str, path: Optional[Path]) -> None:
    """Create a new worktree project called PROJ_NAME.

    The project directory holds a single worktree named after the default
    branch, with one empty commit.

    Example:
        wt init my-project
    """
    parent = absolute_path(path) if path else Path.cwd()
    try:
        worktree_path = init_project(state.backend, name, parent)
    except WorktreesError as e:
        raise click.ClickException(str(e)) from e

    state.emit(worktree_path)


@main.command("new")
@click.argument("name", metavar="DIR_NAME")
@click.option(
    "-b",
    "--branch",
    "existing_branch",
    metavar="EXISTING_BRANCH",
    help="Check out an existing branch (can't be checked out anywhere else).",
)
@click.option(
    "-n",
    "--new-branch",
    metavar="NEW_BRANCH",
    help="Create a new branch with a name different from the directory name.",
)
@click.option(
    "-s",
    "--symlink",
    "symlinks",
    multiple=True,
    type=click.Path(exists=True, path_type=Path),
    help="Additional file to symlink into the new worktree (repeatable).",
)
@click.pass_obj
def new_cmd(
    state: CliState,
    name: str,
    existing_branch: Optional[str],
    new_branch: Optional[str],
    symlinks: tuple[Path, ...],
) -> None:
    """Create a new worktree called DIR_NAME.

    By default a branch named DIR_NAME is created for the worktree.

    Example:
        wt new feature
        wt new review -b colleague/feature
        wt new fix -n bugfix/issue-12 -s .env
    """
    if existing_branch and new_branch:
        raise click.UsageError("--branch and --new-branch are mutually exclusive")

    main_worktree = get_main_worktree(state)

    sources = [absolute_path(p) for p in symlinks]
    for source in state.config.symlink_sources(main_worktree):
        if source not in sources and source.exists():
            sources.append(source)

    try:
        result = new_worktree(
            state.backend,
            main_worktree,
            name,
            existing_branch=existing_branch,
            new_branch=new_branch,
            symlinks=sources,
        )
    except WorktreesError as e:
        raise click.ClickException(str(e)) from e

    state.emit(result.path)


@main.command("rm")
@click.argument("names", nargs=-1, metavar="WT_NAME...")
@click.option(
    "-f",
    "--force",
    is_flag=True,
    help="Delete the worktree(s) without requiring confirmation.",
)
@click.option(
    "-d/-k",
    "--delete-branch/--keep-branch",
    default=None,
    help="Delete the branch(es) checked out in the worktree(s).",
)
@click.pass_obj
def rm_cmd(
    state: CliState,
    names: tuple[str, ...],
    force: bool,
    delete_branch: Optional[bool],
) -> None:
    """Remove one or more worktrees.

    Without WT_NAME, pick the worktrees to remove from a list.

    Example:
        wt rm feature
        wt rm feature fix --delete-branch --force
    """
    main_worktree = get_main_worktree(state)
    if delete_branch is None:
        delete_branch = state.config.remove.delete_branch
    force = force or not state.config.remove.confirm

    def report_outcome(outcome: RemovalOutcome) -> None:
        if outcome.succeeded:
            state.status(f"[green]{escape(outcome.message)}[/green]")
        else:
            state.status(f"[red]{escape(outcome.message)}[/red]")

    coordinator = RemovalCoordinator(state.backend, TerminalPrompter())
    try:
        report = coordinator.remove(
            main_worktree,
            names,
            force=force,
            delete_branches=delete_branch,
            on_outcome=report_outcome,
        )
    except WorktreesError as e:
        raise click.ClickException(str(e)) from e

    if report.aborted:
        state.status("[yellow]Aborted.[/yellow]")
        return

    if report.failed:
        raise click.ClickException(
            f"{len(report.failed)} of {len(report.outcomes)} worktree(s) "
            "could not be fully removed"
        )


@main.command("list")
@click.pass_obj
def list_cmd(state: CliState) -> None:
    """List the worktrees of this project.

    The worktree of the default branch is not shown.
    """
    main_worktree = get_main_worktree(state)
    try:
        names = list_worktree_names(state.backend, main_worktree)
    except WorktreesError as e:
        raise click.ClickException(str(e)) from e

    for name in names:
        state.emit(name)


@main.command("clone")
@click.argument("repo", metavar="REPO")
@click.option(
    "-p",
    "--path",
    type=click.Path(path_type=Path),
    help="The path under which to create the project [default: current directory].",
)
@click.option(
    "-n",
    "--name",
    help="The name of the project [default: repository name].",
)
@click.pass_obj
def clone_cmd(
    state: CliState, repo: str, path: Optional[Path], name: Optional[str]
) -> None:
    """Create a worktree project by cloning REPO.

    REPO is a URL or a path to a local repository. The first worktree is
    named after the repository's default branch.

    Example:
        wt clone https://github.com/user/repo.git
        wt clone ../repo --path ~/src --name repo-work
    """
    clone_under = absolute_path(path) if path else Path.cwd()
    try:
        worktree_path = CloneBootstrap(state.backend).clone_project(
            repo, clone_under, name=name
        )
    except WorktreesError as e:
        raise click.ClickException(str(e)) from e

    state.emit(worktree_path)


if __name__ == "__main__":
    main()
