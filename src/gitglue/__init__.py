"""gitglue - git and GitHub CLI shortcuts for everyday branch workflows.

This package provides the `git-feat` and `git-pr` command-line tools,
which sequence git and gh invocations to start feature branches and
publish them as pull requests.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.3.0"
