"""Report or delete stale local branches."""

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from deadwood.git import GitError, GitRunner
from deadwood.models import PruneResult


class BranchPruner:
    """Deletes stale branches one at a time, or lists them in dry-run mode."""

    def __init__(
        self,
        runner: GitRunner,
        force: bool = False,
        remove: bool = True,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ) -> None:
        """Initialize pruner.

        Args:
            runner: Executes git commands in the working tree
            force: Use ``git branch -D`` instead of ``git branch -d``
            remove: Delete branches; when False only report them
            console: Where progress and the summary are printed
            err_console: Where per-branch errors are printed
        """
        self.runner = runner
        self.force = force
        self.remove = remove
        self.console = console or Console(soft_wrap=True)
        self.err_console = err_console or Console(stderr=True, soft_wrap=True)

    def delete_branch(self, branch_name: str) -> str:
        """Delete a single local branch and return git's output."""
        flag = "-D" if self.force else "-d"
        return self.runner.run("branch", flag, branch_name)

    def prune(self, stale_branches: Iterable[str]) -> PruneResult:
        """Handle every stale branch and print a summary."""
        candidates = tuple(stale_branches)
        if not candidates:
            self.console.print("No remotely removed branches found")
            return PruneResult(dry_run=not self.remove)

        if not self.remove:
            self.console.print("Found remotely removed branches:")
            for branch_name in candidates:
                self.console.print(f"  - {escape(branch_name)}", soft_wrap=True)
            self.console.print()
            self.console.print("[blue]INFO:[/blue] To remove branches, don't include the --dry-run flag")
            return PruneResult(dry_run=True, candidates=candidates)

        removed: list[str] = []
        broken: list[str] = []
        for branch_name in candidates:
            self.console.print()
            self.console.print(f'Removing "{escape(branch_name)}"', soft_wrap=True)
            try:
                out = self.delete_branch(branch_name)
            except GitError as err:
                self.err_console.print(
                    f'[red]ERROR:[/red] Unable to remove branch "{escape(branch_name)}": {escape(str(err))}',
                    soft_wrap=True,
                )
                broken.append(branch_name)
                continue
            if out:
                self.console.print(escape(out), soft_wrap=True)
            removed.append(branch_name)

        self.console.print()
        if broken:
            self.console.print("Not all branches were removed:")
            for branch_name in broken:
                self.console.print(f"  - {escape(branch_name)}", soft_wrap=True)
            self.console.print()
            self.console.print("[blue]INFO:[/blue] To force removal use --force flag")
        else:
            self.console.print("[blue]INFO:[/blue] Branches were removed")

        return PruneResult(removed=tuple(removed), broken=tuple(broken), candidates=candidates)
