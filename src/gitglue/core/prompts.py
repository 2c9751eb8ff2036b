"""Interactive prompting.

Flows never talk to the terminal directly; they receive a Prompter.
ConsolePrompter is the Rich-backed implementation used by the CLI.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from rich.console import Console
from rich.prompt import Prompt

from gitglue.core.console import console as default_console
from gitglue.core.errors import PromptCancelledError


class FlowAction(StrEnum):
    """Choices offered when the worktree is dirty or a branch name is taken."""

    STASH = "stash"
    COMMIT_TO_CURRENT = "commit_to_current"
    MOVE_TO_FEATURE = "move_to_feature"
    DROP = "drop"
    REUSE_EXISTING = "reuse_existing"
    RECREATE = "recreate"


@dataclass(frozen=True, slots=True)
class Choice:
    value: FlowAction
    label: str


class Prompter(Protocol):
    def ask_text(self, message: str, *, required: str) -> str:
        """Return a non-empty trimmed answer; `required` is shown for blank input."""
        ...

    def choose(
        self, message: str, choices: Sequence[Choice], *, default: FlowAction
    ) -> FlowAction: ...


class ConsolePrompter:
    """Prompt on the terminal with rich.prompt."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or default_console

    def ask_text(self, message: str, *, required: str) -> str:
        while True:
            try:
                answer = Prompt.ask(message, console=self._console)
            except (EOFError, KeyboardInterrupt) as exc:
                raise PromptCancelledError() from exc
            value = (answer or "").strip()
            if value:
                return value
            self._console.print(f"[red]{required}[/red]")

    def choose(
        self, message: str, choices: Sequence[Choice], *, default: FlowAction
    ) -> FlowAction:
        if not choices:
            raise ValueError("choose() needs at least one choice")

        self._console.print(message)
        keys: list[str] = []
        default_key = "1"
        for index, choice in enumerate(choices, start=1):
            key = str(index)
            keys.append(key)
            if choice.value is default:
                default_key = key
            self._console.print(f"  [cyan]{key}[/cyan]) {choice.label}")

        try:
            picked = Prompt.ask(
                "Select", console=self._console, choices=keys, default=default_key
            )
        except (EOFError, KeyboardInterrupt) as exc:
            raise PromptCancelledError() from exc
        return choices[int(picked) - 1].value


__all__ = ["Choice", "ConsolePrompter", "FlowAction", "Prompter"]
