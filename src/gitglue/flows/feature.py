"""Create a feature branch from the remote trunk.

Sequence: verify repo, deal with local changes, fetch the trunk, resolve the
target branch, then reapply moved changes. Nothing is rolled back on failure;
a pushed stash stays in `git stash list` for the user.
"""

from __future__ import annotations

from dataclasses import dataclass

from gitglue.core.config import GitConfig
from gitglue.core.console import get_logger
from gitglue.core.errors import InvalidInputError
from gitglue.core.prompts import Choice, FlowAction, Prompter
from gitglue.git.client import AUTO_STASH_MESSAGE, MOVE_STASH_MESSAGE, GitRepo

logger = get_logger(__name__)

DIRTY_CHOICES: tuple[Choice, ...] = (
    Choice(FlowAction.STASH, "stash (keep changes in stash)"),
    Choice(FlowAction.COMMIT_TO_CURRENT, "commit to current branch"),
    Choice(FlowAction.MOVE_TO_FEATURE, "move changes to feature branch"),
    Choice(FlowAction.DROP, "drop changes"),
)

EXISTING_BRANCH_CHOICES: tuple[Choice, ...] = (
    Choice(FlowAction.REUSE_EXISTING, "switch to the existing branch"),
    Choice(FlowAction.RECREATE, "delete it and recreate from upstream"),
)


@dataclass(frozen=True)
class FeatureBranchOutcome:
    branch: str
    base_ref: str
    dirty_action: FlowAction | None = None
    reused: bool = False
    stash_conflict: bool = False

    @property
    def summary(self) -> str:
        if self.reused:
            return f"Switched to existing branch {self.branch}."
        return f"Created and switched to {self.branch} from {self.base_ref}."


def resolve_branch_name(branch_arg: str | None, prompter: Prompter) -> str:
    raw = branch_arg
    if raw is None:
        raw = prompter.ask_text("Feature branch name:", required="Branch name is required.")
    name = raw.strip()
    if not name:
        raise InvalidInputError("Branch name is required.")
    return name


async def handle_dirty_worktree(repo: GitRepo, prompter: Prompter) -> FlowAction | None:
    """Offer the dirty-worktree choices and apply the selected one."""
    if not await repo.is_dirty():
        return None

    action = prompter.choose(
        "Worktree has changes. What do you want to do?",
        DIRTY_CHOICES,
        default=FlowAction.STASH,
    )
    logger.debug("Dirty worktree action: %s", action)

    if action is FlowAction.STASH:
        await repo.stash_push(AUTO_STASH_MESSAGE)
    elif action is FlowAction.COMMIT_TO_CURRENT:
        await repo.stage_all()
        message = prompter.ask_text("Commit message:", required="Commit message is required.")
        await repo.commit(message.strip())
    elif action is FlowAction.MOVE_TO_FEATURE:
        await repo.stash_push(MOVE_STASH_MESSAGE)
    elif action is FlowAction.DROP:
        await repo.reset_hard()
        await repo.clean_untracked()
    else:
        raise InvalidInputError(f"Unsupported action for a dirty worktree: {action}")
    return action


async def _switch_or_create(
    repo: GitRepo, prompter: Prompter, name: str, base_ref: str
) -> bool:
    """Check out `name`, returning True if an existing branch was reused."""
    if not await repo.local_branch_exists(name):
        await repo.create_branch(name, base_ref)
        return False

    action = prompter.choose(
        f"Branch {name} already exists. What do you want to do?",
        EXISTING_BRANCH_CHOICES,
        default=FlowAction.REUSE_EXISTING,
    )
    if action is FlowAction.REUSE_EXISTING:
        await repo.checkout(name)
        return True

    await repo.delete_branch(name)
    await repo.create_branch(name, base_ref)
    return False


async def create_feature_branch(
    repo: GitRepo,
    prompter: Prompter,
    settings: GitConfig,
    branch_arg: str | None = None,
) -> FeatureBranchOutcome:
    name = resolve_branch_name(branch_arg, prompter)

    await repo.ensure_repo()
    action = await handle_dirty_worktree(repo, prompter)

    base_ref = await repo.ensure_remote_branch(settings.remote, settings.trunk_branch)
    reused = await _switch_or_create(repo, prompter, name, base_ref)

    stash_conflict = False
    if action is FlowAction.MOVE_TO_FEATURE:
        pop = await repo.stash_pop()
        if not pop.ok:
            stash_conflict = True
            logger.warning(
                "Stash pop failed. Resolve conflicts and run `git stash apply` if needed."
            )

    return FeatureBranchOutcome(
        branch=name,
        base_ref=base_ref,
        dirty_action=action,
        reused=reused,
        stash_conflict=stash_conflict,
    )


__all__ = [
    "DIRTY_CHOICES",
    "EXISTING_BRANCH_CHOICES",
    "FeatureBranchOutcome",
    "create_feature_branch",
    "handle_dirty_worktree",
    "resolve_branch_name",
]
