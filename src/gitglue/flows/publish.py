"""Publish the current branch as a pull request against the trunk."""

from __future__ import annotations

from dataclasses import dataclass

from gitglue.core.config import GitConfig
from gitglue.core.console import get_logger
from gitglue.core.errors import NothingToPublishError, ProtectedBranchError
from gitglue.core.prompts import Prompter
from gitglue.git.client import GitRepo
from gitglue.hosting.github import GitHubCli, PullRequestStatus

logger = get_logger(__name__)


@dataclass(frozen=True)
class PublishOutcome:
    branch: str
    title: str
    ahead: int
    status: PullRequestStatus

    @property
    def already_existed(self) -> bool:
        return self.status is PullRequestStatus.ALREADY_EXISTS


async def resolve_title(repo: GitRepo, prompter: Prompter, ahead: int) -> str:
    # A single commit already carries a reviewed subject line.
    if ahead == 1:
        return await repo.head_subject()
    title = prompter.ask_text(
        "Pull request title:", required="Pull request title is required."
    )
    return title.strip()


async def publish_branch(
    repo: GitRepo,
    hub: GitHubCli,
    prompter: Prompter,
    settings: GitConfig,
    *,
    open_in_browser: bool = True,
) -> PublishOutcome:
    await repo.ensure_repo()

    branch = await repo.current_branch()
    if branch in settings.protected_branches:
        raise ProtectedBranchError(
            f"git-pr cannot run on {branch}. Create a feature branch first."
        )

    if await repo.is_dirty():
        await repo.stage_all()
        message = prompter.ask_text("Commit message:", required="Commit message is required.")
        await repo.commit(message.strip())

    await repo.push_head(settings.remote)
    base_ref = await repo.ensure_remote_branch(settings.remote, settings.trunk_branch)

    ahead = await repo.ahead_count(base_ref)
    if ahead == 0:
        raise NothingToPublishError(f"Branch {branch} has no commits ahead of {base_ref}.")
    logger.debug("%s is %d commit(s) ahead of %s", branch, ahead, base_ref)

    title = await resolve_title(repo, prompter, ahead)
    status = await hub.create_pull_request(title, settings.trunk_branch)
    await hub.view_pull_request(web=open_in_browser)

    return PublishOutcome(branch=branch, title=title, ahead=ahead, status=status)


__all__ = ["PublishOutcome", "publish_branch", "resolve_title"]
