from __future__ import annotations

import pytest
import typer
from rich.console import Console

from gitglue.core.decorators import handle_exceptions
from gitglue.core.errors import CommandFailedError, InvalidInputError


def test_error_is_printed_and_exits_non_zero(capture_console: Console) -> None:
    @handle_exceptions
    def command() -> None:
        raise InvalidInputError("Branch name is required.")

    with pytest.raises(typer.Exit) as excinfo:
        command()

    assert excinfo.value.exit_code == 1
    assert capture_console.export_text().strip() == "error: Branch name is required."


def test_long_error_line_is_not_wrapped(capture_console: Console) -> None:
    label = "git push -u origin HEAD " + "refs/heads/feature/" + "x" * 300

    @handle_exceptions
    def command() -> None:
        raise CommandFailedError(label, "", returncode=1)

    with pytest.raises(typer.Exit):
        command()

    lines = capture_console.export_text().splitlines()
    assert lines[0] == f"error: Command failed (1): {label}"


def test_other_exceptions_propagate() -> None:
    @handle_exceptions
    def command() -> None:
        raise RuntimeError("bug")

    with pytest.raises(RuntimeError):
        command()
