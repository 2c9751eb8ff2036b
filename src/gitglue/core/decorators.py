from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

import typer
from rich.markup import escape

from gitglue.core import console as console_mod
from gitglue.core.errors import GitGlueError

F = TypeVar("F", bound=Callable[..., Any])


def _handle_exception(exc: GitGlueError) -> NoReturn:
    console_mod.stderr_console.print(
        f"[red]error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True
    )
    raise typer.Exit(code=1)


def handle_exceptions(func: F) -> F:
    """Decorate CLI entrypoints to print `error: <message>` and exit non-zero."""

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except GitGlueError as exc:
                _handle_exception(exc)

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except GitGlueError as exc:
            _handle_exception(exc)

    return sync_wrapper  # type: ignore[return-value]


__all__ = ["handle_exceptions"]
