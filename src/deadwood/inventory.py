"""Find local branches whose upstream was deleted on the remote."""

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from deadwood.git import ConfigurationError, GitError, GitRunner, split_lines
from deadwood.models import (
    HEAD,
    Inventory,
    LiveBranches,
    LocalBranchLink,
    Reachable,
    Reconciliation,
    Unreachable,
)
from deadwood.parsers import (
    is_remote_line,
    parse_cached_remote_line,
    parse_live_head_line,
    parse_upstream_line,
)

UPSTREAM_FORMAT = "--format=%(refname:short)@{%(upstream)}"

UNKNOWN_REMOTE = "unknown remote"
NO_CONNECTION = "no connection"


def reconcile(cached: Iterable[str], live: LiveBranches) -> Reconciliation:
    """Decide which remote branch names are authoritative.

    When the remote is reachable the live branches win and every cached branch
    missing from them is reported as unpruned. When it is not, the cached
    branches are kept as they are.
    """
    cached = tuple(cached)
    if isinstance(live, Unreachable):
        return Reconciliation(remote_branches=cached, no_connection=True)

    unpruned = tuple(branch for branch in cached if branch != HEAD and branch not in live.branches)
    return Reconciliation(remote_branches=live.branches, unpruned=unpruned)


def compute_stale(links: Iterable[LocalBranchLink], remote_branches: Iterable[str]) -> tuple[str, ...]:
    """Return local branches whose tracked remote branch is gone, in discovery order."""
    known = set(remote_branches)
    return tuple(
        link.local_branch
        for link in links
        if link.remote_branch and link.local_branch != HEAD and link.remote_branch not in known
    )


class BranchInventory:
    """Gathers local, cached and live branches for one remote."""

    def __init__(self, runner: GitRunner, remote: str, console: Optional[Console] = None) -> None:
        """Initialize inventory.

        Args:
            runner: Executes git commands in the working tree
            remote: Name of the remote to compare against
            console: Where warnings are printed, standard error by default
        """
        self.runner = runner
        self.remote = remote
        self.console = console or Console(stderr=True, soft_wrap=True)

    def gather_live_branches(self) -> LiveBranches:
        """Query the remote for the branches it currently has.

        Raises:
            ConfigurationError: If no remote name was given
            GitError: If ``git ls-remote`` fails for any reason but a lost connection
        """
        if self.remote == "":
            raise ConfigurationError("Remote is empty. Please specify remote with --remote parameter")

        remotes = self.runner.run("remote", "-v")
        if not any(is_remote_line(line, self.remote) for line in split_lines(remotes)):
            self.console.print(
                f'[yellow]WARNING:[/yellow] Unable to find remote "{escape(self.remote)}".\n\n'
                f"Available remotes are:\n{escape(remotes)}",
                soft_wrap=True,
            )
            return Unreachable(UNKNOWN_REMOTE)

        try:
            out = self.runner.run("ls-remote", "-h", self.remote)
        except GitError as err:
            if err.no_connection:
                return Unreachable(NO_CONNECTION)
            raise

        branches: list[str] = []
        for line in split_lines(out):
            name = parse_live_head_line(line)
            if name and name not in branches:
                branches.append(name)
        return Reachable(tuple(branches))

    def gather_local_branches(self) -> tuple[LocalBranchLink, ...]:
        """List local branches that track a branch on the remote."""
        out = self.runner.run("branch", UPSTREAM_FORMAT)
        links = (parse_upstream_line(line, self.remote) for line in split_lines(out))
        return tuple(link for link in links if link is not None)

    def gather_cached_remote_branches(self) -> tuple[str, ...]:
        """List remote-tracking branches stored locally for the remote."""
        out = self.runner.run("branch", "-r")
        names = (parse_cached_remote_line(line, self.remote) for line in split_lines(out))
        return tuple(name for name in names if name is not None)

    def report(self, reconciliation: Reconciliation) -> None:
        """Warn about an unreachable remote or a stale remote-tracking cache."""
        if reconciliation.no_connection:
            self.console.print("[yellow]WARNING:[/yellow] Unable to connect to remote host")
            return

        if reconciliation.unpruned:
            lines = [
                '[yellow]WARNING:[/yellow] Your git repository is outdated, please run "git fetch -p"',
                "         Following branches are not pruned yet locally:",
                "",
            ]
            lines.extend(f"         - {escape(branch)}" for branch in reconciliation.unpruned)
            self.console.print("\n".join(lines) + "\n", soft_wrap=True)

    def collect(self) -> Inventory:
        """Gather every branch set, reconcile them and find stale branches."""
        live = self.gather_live_branches()
        local_branches = self.gather_local_branches()
        cached_branches = self.gather_cached_remote_branches()

        reconciliation = reconcile(cached_branches, live)
        self.report(reconciliation)

        return Inventory(
            remote=self.remote,
            local_branches=local_branches,
            cached_branches=cached_branches,
            live=live,
            reconciliation=reconciliation,
            stale_branches=compute_stale(local_branches, reconciliation.remote_branches),
        )
