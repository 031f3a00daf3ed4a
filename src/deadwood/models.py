"""Branch data passed between the inventory and the pruner."""

from dataclasses import dataclass
from typing import Union

# Symbolic ref that never names a real remote branch
HEAD = "HEAD"


@dataclass(frozen=True)
class LocalBranchLink:
    """A local branch and the short name of the remote branch it tracks."""

    local_branch: str
    remote_branch: str


@dataclass(frozen=True)
class Reachable:
    """Branches that currently exist on the remote."""

    branches: tuple[str, ...] = ()


@dataclass(frozen=True)
class Unreachable:
    """The remote could not be queried."""

    reason: str


LiveBranches = Union[Reachable, Unreachable]


@dataclass(frozen=True)
class Reconciliation:
    """Outcome of comparing cached remote-tracking branches with live ones.

    Attributes:
        remote_branches: Authoritative remote branch names to compare against
        unpruned: Cached branches that no longer exist on the remote
        no_connection: Whether the live query was unavailable
    """

    remote_branches: tuple[str, ...]
    unpruned: tuple[str, ...] = ()
    no_connection: bool = False


@dataclass(frozen=True)
class Inventory:
    """Everything gathered for one remote in a single run."""

    remote: str
    local_branches: tuple[LocalBranchLink, ...]
    cached_branches: tuple[str, ...]
    live: LiveBranches
    reconciliation: Reconciliation
    stale_branches: tuple[str, ...]

    @property
    def no_connection(self) -> bool:
        """Whether the remote could not be queried."""
        return self.reconciliation.no_connection

    @property
    def live_branches(self) -> tuple[str, ...]:
        """Live branch names, empty when the remote was unreachable."""
        if isinstance(self.live, Reachable):
            return self.live.branches
        return ()


@dataclass(frozen=True)
class PruneResult:
    """Branches handled by a prune pass."""

    removed: tuple[str, ...] = ()
    broken: tuple[str, ...] = ()
    dry_run: bool = False
    candidates: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """Whether every branch could be removed."""
        return not self.broken
