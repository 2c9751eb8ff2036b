"""External command execution.

Provides:
- CommandResult for captured process output
- CommandRunner protocol, the seam every git/gh call goes through
- ProcessRunner, the asyncio subprocess implementation
"""

from __future__ import annotations

import asyncio
import shlex
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from gitglue.core.console import get_logger
from gitglue.core.errors import CommandFailedError

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Trimmed output and exit status of a finished command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def label(self) -> str:
        return " ".join(self.argv)


def failure_body(stdout: str, stderr: str) -> str:
    """Pick the output stream worth showing for a failed command."""
    return stderr if stderr else stdout


class CommandRunner(Protocol):
    """Protocol for executing external programs."""

    async def run(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        allow_failure: bool = False,
    ) -> CommandResult: ...


def _spawn_failure(
    argv: tuple[str, ...], workdir: Path | None, exc: OSError
) -> CommandFailedError:
    """Map an OSError raised while starting a process to a CommandFailedError."""
    program = argv[0]
    label = " ".join(argv)
    if workdir is not None and not workdir.is_dir():
        return CommandFailedError(label, f"working directory not found: {workdir}", returncode=127)
    if isinstance(exc, FileNotFoundError):
        return CommandFailedError(label, f"{program}: executable not found on PATH", returncode=127)
    # PermissionError and friends: the executable exists but cannot be run.
    return CommandFailedError(label, f"{program}: {exc.strerror or exc}", returncode=126)


class ProcessRunner:
    """Run programs as asyncio subprocesses with an explicit environment.

    The environment and default working directory are fixed at construction
    so nothing here reads process-global state.
    """

    def __init__(self, env: Mapping[str, str], cwd: Path | None = None) -> None:
        self._env = dict(env)
        self._cwd = cwd

    async def run(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        allow_failure: bool = False,
    ) -> CommandResult:
        argv = (program, *args)
        label = shlex.join(argv)
        workdir = cwd or self._cwd
        logger.debug("Running %s", label)

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=workdir,
                env=self._env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                stdin=asyncio.subprocess.DEVNULL,
            )
        except OSError as exc:
            raise _spawn_failure(argv, workdir, exc) from exc

        stdout_bytes, stderr_bytes = await proc.communicate()
        result = CommandResult(
            argv=argv,
            returncode=proc.returncode if proc.returncode is not None else 0,
            stdout=stdout_bytes.decode("utf-8", errors="replace").strip(),
            stderr=stderr_bytes.decode("utf-8", errors="replace").strip(),
        )
        logger.debug("%s exited with %s", label, result.returncode)

        if not result.ok and not allow_failure:
            raise CommandFailedError(
                result.label,
                failure_body(result.stdout, result.stderr),
                returncode=result.returncode,
            )
        return result


__all__ = ["CommandResult", "CommandRunner", "ProcessRunner", "failure_body"]
