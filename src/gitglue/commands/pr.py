"""`pr`: push the current branch and open its pull request."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import typer

from gitglue.core.console import console
from gitglue.core.decorators import handle_exceptions
from gitglue.flows.publish import publish_branch
from gitglue.git.client import GitRepo
from gitglue.hosting.github import GitHubCli

if TYPE_CHECKING:
    from gitglue.main import AppState


@handle_exceptions
def pr(ctx: typer.Context) -> None:
    """Publish the current branch as a pull request against the trunk."""
    state: AppState = ctx.obj
    settings = state.config.git
    repo = GitRepo(state.runner, git_binary=settings.git_binary)
    hub = GitHubCli(state.runner, gh_binary=settings.gh_binary)

    outcome = asyncio.run(
        publish_branch(
            repo,
            hub,
            state.prompter,
            settings,
            open_in_browser=state.config.user.open_in_browser,
        )
    )

    if outcome.already_existed:
        console.print(f"[yellow]Pull request for {outcome.branch} already open.[/yellow]")
    else:
        console.print(f"[green]Opened pull request:[/green] {outcome.title}", highlight=False)
