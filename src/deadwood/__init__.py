"""Prune local git branches whose remote branch is gone.

Features:
- Compare local branches with live branches on the remote
- Fall back to remote-tracking branches when the remote is unreachable
- Warn about remote-tracking branches that need a fetch --prune
- Dry-run listing of stale branches
- Force option for unmerged branches
"""

__version__ = "0.1.0"
