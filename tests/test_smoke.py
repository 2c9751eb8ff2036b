from __future__ import annotations

from typing import Any

import pytest
from rich.console import Console
from typer.testing import CliRunner

import gitglue.main as gitglue_main
from gitglue import __version__
from gitglue.core.prompts import FlowAction
from gitglue.main import app, feat_app, pr_app
from mocks.fakes import FakePrompter, FakeRunner, clean_repo_responses

runner = CliRunner()


@pytest.fixture
def fake_runner(monkeypatch: Any) -> FakeRunner:
    fake = FakeRunner(clean_repo_responses())
    monkeypatch.setattr(gitglue_main, "ProcessRunner", lambda env, cwd=None: fake)
    return fake


@pytest.fixture
def fake_prompter(monkeypatch: Any) -> FakePrompter:
    fake = FakePrompter()
    monkeypatch.setattr(gitglue_main, "ConsolePrompter", lambda console=None: fake)
    return fake


def test_app_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_all_commands_have_help() -> None:
    names = {command.name for command in app.registered_commands}
    assert names == {"feat", "pr", "config", "version"}
    for name in sorted(names):
        result = runner.invoke(app, [name, "--help"])
        assert result.exit_code == 0, f"Command 'gitglue {name} --help' failed!"
        assert "Usage:" in result.stdout


@pytest.mark.parametrize("entry", [feat_app, pr_app])
def test_standalone_entry_points_have_help(entry: Any) -> None:
    result = runner.invoke(entry, ["--help"])
    assert result.exit_code == 0
    assert "--config" in result.stdout


def test_config_command(capture_console: Console) -> None:
    result = runner.invoke(app, ["config"], env={"GITGLUE_GIT__TRUNK_BRANCH": "main"})
    assert result.exit_code == 0
    output = capture_console.export_text()
    assert "git.trunk_branch" in output
    assert "git.trunk_branch" in output.split("Env overrides:")[1]


def test_git_feat_creates_branch(
    fake_runner: FakeRunner, fake_prompter: FakePrompter, capture_console: Console
) -> None:
    result = runner.invoke(feat_app, ["feature/login"])

    assert result.exit_code == 0
    assert fake_runner.git_commands()[-1] == "checkout -b feature/login origin/master"
    assert "Created and switched to feature/login from origin/master." in (
        capture_console.export_text()
    )


def test_git_feat_blank_name_exits_non_zero(
    fake_runner: FakeRunner, fake_prompter: FakePrompter, capture_console: Console
) -> None:
    result = runner.invoke(feat_app, ["   "])

    assert result.exit_code == 1
    assert fake_runner.calls == []
    assert "error: Branch name is required." in capture_console.export_text()


def test_gitglue_feat_with_dirty_drop(
    fake_runner: FakeRunner, fake_prompter: FakePrompter
) -> None:
    fake_runner.respond("git", "status", "--porcelain", stdout=" M app.py")
    fake_prompter.queue(choices=[FlowAction.DROP])

    result = runner.invoke(app, ["feat", "feature/login"])

    assert result.exit_code == 0
    assert "reset --hard" in fake_runner.git_commands()


def test_git_pr_on_protected_branch(
    fake_runner: FakeRunner, fake_prompter: FakePrompter, capture_console: Console
) -> None:
    fake_runner.respond("git", "rev-parse", "--abbrev-ref", "HEAD", stdout="main")

    result = runner.invoke(pr_app, [])

    assert result.exit_code == 1
    assert not fake_runner.invoked("git", "push")
    assert "error: git-pr cannot run on main" in capture_console.export_text()


def test_git_pr_publishes(
    fake_runner: FakeRunner, fake_prompter: FakePrompter, capture_console: Console
) -> None:
    result = runner.invoke(pr_app, [])

    assert result.exit_code == 0
    assert fake_runner.argvs[-1] == ("gh", "pr", "view", "--web")
    assert "Add login form" in capture_console.export_text()


def test_git_pr_existing_pull_request(
    fake_runner: FakeRunner, fake_prompter: FakePrompter, capture_console: Console
) -> None:
    fake_runner.respond("gh", "pr", "create", returncode=1, stderr="already exists")

    result = runner.invoke(app, ["pr"])

    assert result.exit_code == 0
    assert "already open" in capture_console.export_text()


def test_git_pr_respects_open_in_browser(
    fake_runner: FakeRunner, fake_prompter: FakePrompter
) -> None:
    result = runner.invoke(pr_app, [], env={"GITGLUE_USER__OPEN_IN_BROWSER": "false"})

    assert result.exit_code == 0
    assert fake_runner.argvs[-1] == ("gh", "pr", "view")


def test_prompt_cancel_is_reported(
    fake_runner: FakeRunner, monkeypatch: Any, capture_console: Console
) -> None:
    from gitglue.core.errors import PromptCancelledError

    cancelling = FakePrompter(texts=[PromptCancelledError()])
    monkeypatch.setattr(gitglue_main, "ConsolePrompter", lambda console=None: cancelling)

    result = runner.invoke(feat_app, [])

    assert result.exit_code == 1
    assert "error: Prompt cancelled." in capture_console.export_text()
    assert fake_runner.calls == []


def test_non_executable_git_binary_is_reported(
    tmp_path: Any, fake_prompter: FakePrompter, capture_console: Console
) -> None:
    git_binary = tmp_path / "git"
    git_binary.write_text("#!/bin/sh\n", encoding="utf-8")
    git_binary.chmod(0o644)

    result = runner.invoke(
        feat_app, ["feature/x"], env={"GITGLUE_GIT__GIT_BINARY": str(git_binary)}
    )

    assert result.exit_code == 1
    assert not isinstance(result.exception, PermissionError)
    assert "error: Command failed (126)" in capture_console.export_text()


def test_unreadable_config_enters_safe_mode(
    tmp_path: Any,
    fake_runner: FakeRunner,
    fake_prompter: FakePrompter,
    capture_console: Console,
) -> None:
    result = runner.invoke(feat_app, ["--config", str(tmp_path), "feature/x"])

    assert result.exit_code == 0
    output = capture_console.export_text()
    assert "Safe Mode Active" in output
    assert "Cannot read" in output
    assert fake_runner.git_commands()[-1] == "checkout -b feature/x origin/master"
