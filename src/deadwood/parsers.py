"""Parsers for single lines of git output.

Each parser takes one trimmed line and returns ``None`` when the line does not
carry anything relevant for the configured remote.
"""

import re
from typing import Optional

from deadwood.models import HEAD, LocalBranchLink

_LIVE_HEAD = re.compile(r"refs/heads/(\S+)")


def parse_upstream_line(line: str, remote: str) -> Optional[LocalBranchLink]:
    """Parse ``git branch --format="%(refname:short)@{%(upstream)}"`` output.

    ``feature@{refs/remotes/origin/feature}`` yields ``feature -> feature``
    for remote ``origin``. Branches without an upstream (``feature@{}``) or
    tracking another remote yield ``None``.
    """
    marker = f"@{{refs/remotes/{remote}/"
    start = line.find(marker)
    if start <= 0 or not line.endswith("}"):
        return None

    local_branch = line[:start]
    remote_branch = line[start + len(marker) : -1].strip()
    if local_branch == HEAD:
        return None
    return LocalBranchLink(local_branch=local_branch, remote_branch=remote_branch)


def parse_live_head_line(line: str) -> Optional[str]:
    """Parse ``git ls-remote -h`` output: ``<sha>\\trefs/heads/<name>``."""
    match = _LIVE_HEAD.search(line)
    if not match:
        return None
    return match.group(1)


def parse_cached_remote_line(line: str, remote: str) -> Optional[str]:
    """Parse ``git branch -r`` output such as ``origin/feature``.

    The symbolic ``origin/HEAD -> origin/main`` line yields ``None``.
    """
    match = re.match(rf"^{re.escape(remote)}/(\S+)", line)
    if not match or match.group(1) == HEAD:
        return None
    return match.group(1)


def is_remote_line(line: str, remote: str) -> bool:
    """Check whether a ``git remote -v`` line describes ``remote``."""
    return re.match(rf"^{re.escape(remote)}\s", line) is not None
