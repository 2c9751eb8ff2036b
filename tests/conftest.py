from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from typer.testing import CliRunner

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for entry in (SRC, ROOT / "tests"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: Any) -> Path:
    """Point config to a temp path so tests don't read user settings."""
    for key in list(os.environ):
        if key.startswith("GITGLUE_"):
            monkeypatch.delenv(key, raising=False)
    cfg_path = tmp_path / "gitglue.toml"
    monkeypatch.setenv("GITGLUE_CONFIG", str(cfg_path))
    return cfg_path


@pytest.fixture(autouse=True)
def capture_console(monkeypatch: Any) -> Console:
    """Use an in-memory Rich console for stdout and stderr during tests."""
    test_console = Console(record=True, width=200)
    import gitglue.commands.feat as feat_cmd
    import gitglue.commands.pr as pr_cmd
    import gitglue.core.console as core_console
    import gitglue.hosting.github as github
    import gitglue.main as gitglue_main

    monkeypatch.setattr(core_console, "console", test_console)
    monkeypatch.setattr(core_console, "stderr_console", test_console)
    for module in (feat_cmd, pr_cmd, github, gitglue_main):
        monkeypatch.setattr(module, "console", test_console)
    return test_console
