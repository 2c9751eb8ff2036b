"""
Error hierarchy for gitglue.

Every failure a flow can surface derives from GitGlueError so the CLI
layer can format them uniformly:

    from gitglue.core.errors import GitGlueError, InvalidInputError

    if not name.strip():
        raise InvalidInputError("Branch name is required.")
"""

from __future__ import annotations

from typing import Any


class GitGlueError(Exception):
    """Base exception for all gitglue errors.

    All custom exceptions should inherit from this class to enable
    consistent error handling across the codebase.
    """

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class ConfigError(GitGlueError):
    """Raised when a configuration file cannot be parsed."""


class NotARepositoryError(GitGlueError):
    """Raised when the working directory is not inside a git work tree."""


class InvalidInputError(GitGlueError):
    """Raised for empty branch names, commit messages or titles."""


class UpstreamNotFoundError(GitGlueError):
    """Raised when the remote trunk ref cannot be resolved after fetching."""


class GitParseError(GitGlueError):
    """Raised when git output cannot be interpreted (e.g. a non-numeric count)."""


class ProtectedBranchError(GitGlueError):
    """Raised when publishing is attempted directly from a trunk branch."""


class NothingToPublishError(GitGlueError):
    """Raised when the current branch has no commits ahead of the trunk."""


class PromptCancelledError(GitGlueError):
    """Raised when the user aborts an interactive prompt."""

    def __init__(self, message: str = "Prompt cancelled.") -> None:
        super().__init__(message)


class CommandFailedError(GitGlueError):
    """Raised when an external command exits non-zero.

    Examples:
    - git fetch cannot reach the remote
    - gh pr create rejects the request
    - The executable is not on PATH
    """

    def __init__(self, label: str, body: str, *, returncode: int | None = None) -> None:
        if returncode is None:
            message = f"Command failed: {label}"
        else:
            message = f"Command failed ({returncode}): {label}"
        if body:
            message = f"{message}\n{body}"
        super().__init__(message)
        self.label = label
        self.body = body
        self.returncode = returncode


__all__ = [
    "CommandFailedError",
    "ConfigError",
    "GitGlueError",
    "GitParseError",
    "InvalidInputError",
    "NotARepositoryError",
    "NothingToPublishError",
    "PromptCancelledError",
    "ProtectedBranchError",
    "UpstreamNotFoundError",
]
