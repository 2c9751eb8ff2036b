"""`feat`: start a feature branch from the remote trunk."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import typer

from gitglue.core.console import console
from gitglue.core.decorators import handle_exceptions
from gitglue.flows.feature import create_feature_branch
from gitglue.git.client import GitRepo

if TYPE_CHECKING:
    from gitglue.main import AppState


@handle_exceptions
def feat(
    ctx: typer.Context,
    branch_name: str | None = typer.Argument(
        None, help="Feature branch to create (prompted for when omitted)."
    ),
) -> None:
    """Create a feature branch from the upstream trunk, handling local changes first."""
    state: AppState = ctx.obj
    settings = state.config.git
    repo = GitRepo(state.runner, git_binary=settings.git_binary)

    outcome = asyncio.run(create_feature_branch(repo, state.prompter, settings, branch_name))

    if outcome.stash_conflict:
        console.print("[yellow]Moved changes did not apply cleanly; see the warning above.[/]")
    console.print(f"[green]{outcome.summary}[/green]")
