"""Command line interface for deadwood."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from deadwood.git import ConfigurationError, GitError, GitRunner
from deadwood.inventory import BranchInventory
from deadwood.pruner import BranchPruner

# sysexits.h EX_CONFIG, kept apart from git failures
CONFIG_ERROR_EXIT_CODE = 78

app = typer.Typer(help="Remove local branches whose upstream was deleted on the remote")
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def get_runner(path: Path) -> GitRunner:
    """Get git runner for the working tree."""
    try:
        return GitRunner(path)
    except GitError as err:
        err_console.print(f"Error: {escape(str(err))}")
        raise typer.Exit(code=1) from err


@app.command()
def prune(
    path: Annotated[Path, typer.Option(help="Path to git repository")] = Path("."),
    remote: Annotated[
        str, typer.Option("--remote", "-r", envvar="DEADWOOD_REMOTE", help="Remote to compare local branches against")
    ] = "origin",
    force: Annotated[
        bool, typer.Option("--force", "-f", envvar="DEADWOOD_FORCE", help="Force deletion of unmerged branches")
    ] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", envvar="DEADWOOD_DRY_RUN", help="Only list branches, do not remove them")
    ] = False,
) -> None:
    """Find local branches whose remote branch is gone and remove them."""
    runner = get_runner(path)

    try:
        inventory = BranchInventory(runner, remote, console=err_console).collect()
        BranchPruner(
            runner, force=force, remove=not dry_run, console=console, err_console=err_console
        ).prune(inventory.stale_branches)
    except ConfigurationError as err:
        err_console.print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from err
    except GitError as err:
        err_console.print(f"Error: {escape(str(err))}")
        raise typer.Exit(code=1) from err


if __name__ == "__main__":
    app()
