"""CLI command modules for gitglue.

    - feat: create a feature branch from the remote trunk
    - pr: publish the current branch as a pull request
"""

from __future__ import annotations

from . import feat, pr

__all__ = ["feat", "pr"]
