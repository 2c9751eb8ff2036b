"""Pull request operations through the GitHub CLI."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from gitglue.core.console import console, get_logger
from gitglue.core.errors import CommandFailedError
from gitglue.core.process import CommandRunner

logger = get_logger(__name__)

# Phrasings gh has used when an open pull request for the head branch exists.
ALREADY_EXISTS_PHRASES: tuple[str, ...] = (
    "already exists",
    "existing pull request",
    "a pull request already exists",
)


class PullRequestStatus(StrEnum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


def is_already_exists(stdout: str, stderr: str) -> bool:
    """Return True when gh output reports an existing pull request.

    The check is best-effort: stdout and stderr are joined, lowercased and
    searched for any of ALREADY_EXISTS_PHRASES.
    """
    output = f"{stdout}\n{stderr}".lower()
    return any(phrase in output for phrase in ALREADY_EXISTS_PHRASES)


class GitHubCli:
    """Thin wrapper over `gh pr` subcommands."""

    def __init__(
        self,
        runner: CommandRunner,
        *,
        cwd: Path | None = None,
        gh_binary: str = "gh",
    ) -> None:
        self._runner = runner
        self._cwd = cwd
        self._gh = gh_binary

    async def create_pull_request(self, title: str, base: str) -> PullRequestStatus:
        result = await self._runner.run(
            self._gh,
            ["pr", "create", "--title", title, "--body", "", "--base", base],
            cwd=self._cwd,
            allow_failure=True,
        )
        if result.ok:
            return PullRequestStatus.CREATED

        if is_already_exists(result.stdout, result.stderr):
            logger.warning("A pull request for this branch already exists; opening it.")
            return PullRequestStatus.ALREADY_EXISTS

        raise CommandFailedError(f"{self._gh} pr create", result.stderr)

    async def view_pull_request(self, *, web: bool = True) -> None:
        args = ["pr", "view", "--web"] if web else ["pr", "view"]
        result = await self._runner.run(self._gh, args, cwd=self._cwd)
        if not web and result.stdout:
            console.print(result.stdout, markup=False, highlight=False)


__all__ = ["ALREADY_EXISTS_PHRASES", "GitHubCli", "PullRequestStatus", "is_already_exists"]
