"""Git operations.

This package provides async git operations:
    - GitRepo: named repository operations over a command runner
    - Stash messages used by the branch workflows
"""

from __future__ import annotations

from .client import AUTO_STASH_MESSAGE, MOVE_STASH_MESSAGE, GitRepo, parse_ahead_count

__all__ = [
    "AUTO_STASH_MESSAGE",
    "GitRepo",
    "MOVE_STASH_MESSAGE",
    "parse_ahead_count",
]
