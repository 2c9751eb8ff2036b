from __future__ import annotations

from pathlib import Path

from gitglue.core.console import get_logger
from gitglue.core.errors import GitParseError, NotARepositoryError, UpstreamNotFoundError
from gitglue.core.process import CommandResult, CommandRunner

logger = get_logger(__name__)

AUTO_STASH_MESSAGE = "git-feat auto-stash"
MOVE_STASH_MESSAGE = "git-feat move-to-feature"


def parse_ahead_count(raw: str) -> int:
    """Parse `git rev-list --count` output."""
    text = raw.strip()
    try:
        count = int(text)
    except ValueError as exc:
        raise GitParseError(f"Unable to parse ahead count from: {text!r}") from exc
    if count < 0:
        raise GitParseError(f"Unable to parse ahead count from: {text!r}")
    return count


class GitRepo:
    """Named git operations over a CommandRunner.

    Each method is a single invocation plus interpretation of its output;
    sequencing is left to the flows.
    """

    def __init__(
        self,
        runner: CommandRunner,
        *,
        cwd: Path | None = None,
        git_binary: str = "git",
    ) -> None:
        self._runner = runner
        self._cwd = cwd
        self._git = git_binary

    async def _run(self, *args: str, allow_failure: bool = False) -> CommandResult:
        return await self._runner.run(
            self._git, list(args), cwd=self._cwd, allow_failure=allow_failure
        )

    async def ensure_repo(self) -> None:
        result = await self._run("rev-parse", "--is-inside-work-tree", allow_failure=True)
        if result.returncode != 0 or result.stdout != "true":
            raise NotARepositoryError("Not inside a git repository.")

    async def is_dirty(self) -> bool:
        result = await self._run("status", "--porcelain")
        return len(result.stdout) > 0

    async def stage_all(self) -> None:
        await self._run("add", "-A")

    async def commit(self, message: str) -> None:
        await self._run("commit", "-m", message)

    async def current_branch(self) -> str:
        result = await self._run("rev-parse", "--abbrev-ref", "HEAD")
        return result.stdout

    async def ensure_remote_branch(self, remote: str, branch: str) -> str:
        """Fetch `branch` from `remote` and return the verified `remote/branch` ref."""
        ref = f"{remote}/{branch}"
        await self._run("fetch", remote, branch)
        verify = await self._run("rev-parse", "--verify", ref, allow_failure=True)
        if verify.returncode != 0:
            raise UpstreamNotFoundError(
                f"{ref} not found. Ensure the remote and branch exist.",
            )
        return ref

    async def ahead_count(self, base_ref: str) -> int:
        result = await self._run("rev-list", "--count", f"{base_ref}..HEAD")
        return parse_ahead_count(result.stdout)

    async def head_subject(self) -> str:
        result = await self._run("log", "-1", "--pretty=%s")
        return result.stdout

    async def local_branch_exists(self, name: str) -> bool:
        result = await self._run(
            "rev-parse", "--verify", "--quiet", f"refs/heads/{name}", allow_failure=True
        )
        return result.returncode == 0

    async def stash_push(self, message: str) -> None:
        await self._run("stash", "push", "-u", "-m", message)

    async def stash_pop(self) -> CommandResult:
        """Pop the latest stash; the caller decides what a failure means."""
        return await self._run("stash", "pop", allow_failure=True)

    async def reset_hard(self) -> None:
        await self._run("reset", "--hard")

    async def clean_untracked(self) -> None:
        await self._run("clean", "-fd")

    async def checkout(self, name: str) -> None:
        await self._run("checkout", name)

    async def create_branch(self, name: str, start_point: str) -> None:
        await self._run("checkout", "-b", name, start_point)

    async def delete_branch(self, name: str) -> None:
        logger.debug("Force deleting local branch %s", name)
        await self._run("branch", "-D", name)

    async def push_head(self, remote: str) -> None:
        await self._run("push", "-u", remote, "HEAD")


__all__ = [
    "AUTO_STASH_MESSAGE",
    "GitRepo",
    "MOVE_STASH_MESSAGE",
    "parse_ahead_count",
]
