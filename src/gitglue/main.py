from __future__ import annotations

import logging
import os
import signal
from dataclasses import dataclass
from pathlib import Path
from types import FrameType

import typer
from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .commands.feat import feat as feat_command
from .commands.pr import pr as pr_command
from .core.config import AppConfig, ConfigLoadResult, load_config
from .core.console import console, setup_logging
from .core.process import CommandRunner, ProcessRunner
from .core.prompts import ConsolePrompter, Prompter

app = typer.Typer(help="gitglue: git and gh shortcuts for feature branches and pull requests.")
feat_app = typer.Typer(add_completion=False)
pr_app = typer.Typer(add_completion=False)


class ApplicationLifecycle:
    """Signal handling for the interactive entry points.

    SIGINT is routed to KeyboardInterrupt even while asyncio is running, so a
    Ctrl-C at a prompt surfaces as a cancelled prompt.
    """

    def handle_interrupt(self, signum: int, frame: FrameType | None) -> None:
        raise KeyboardInterrupt

    def handle_terminate(self, signum: int, frame: FrameType | None) -> None:
        console.print("\n[yellow]Terminated. Check `git stash list` for shelved changes.[/yellow]")
        raise SystemExit(128 + signum)

    def register_signal_handlers(self) -> None:
        signal.signal(signal.SIGINT, self.handle_interrupt)
        signal.signal(signal.SIGTERM, self.handle_terminate)


@dataclass
class AppState:
    config: AppConfig
    config_meta: ConfigLoadResult
    logger: logging.Logger
    runner: CommandRunner
    prompter: Prompter


def build_app_state(config_path: Path | None, verbose: bool) -> AppState:
    loaded_config, meta = load_config(config_path=config_path)
    app_logger = setup_logging(level=loaded_config.user.log_level, verbose=verbose)

    state = AppState(
        config=loaded_config,
        config_meta=meta,
        logger=app_logger,
        runner=ProcessRunner(env=dict(os.environ), cwd=Path.cwd()),
        prompter=ConsolePrompter(console),
    )

    if meta.error:
        console.print(
            Panel(
                f"[bold red]Configuration Error - Safe Mode Active[/bold red]\n\n"
                f"Failed to load {meta.path}:\n{escape(meta.error)}\n\n"
                f"[yellow]Using default settings.[/yellow]",
                border_style="red",
            )
        )
    else:
        app_logger.debug(
            "Loaded configuration from %s (env overrides: %s)",
            meta.path,
            sorted(meta.env_overrides),
        )
    return state


_CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="Path to a gitglue config file (TOML or JSON)."
)
_VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = _CONFIG_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    ctx.obj = build_app_state(config, verbose)


app.command("feat")(feat_command)
app.command("pr")(pr_command)


@app.command("config")
def show_config(ctx: typer.Context) -> None:
    """Show the active configuration and where it came from."""
    state: AppState = ctx.obj
    config = state.config
    meta = state.config_meta

    table = Table(title="Config", box=box.SIMPLE, expand=True)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    for group, values in config.model_dump().items():
        for key, value in values.items():
            table.add_row(f"{group}.{key}", str(value))

    console.print(table)

    meta_lines = [
        f"Path: {meta.path}",
        "File loaded: yes" if meta.file_loaded else "File loaded: no (using defaults + env)",
    ]

    if meta.env_overrides:
        meta_lines.append("Env overrides: " + ", ".join(sorted(meta.env_overrides)))

    console.print(Panel("\n".join(meta_lines), title="Config source", box=box.SIMPLE))


@app.command("version")
def show_version() -> None:
    """Print the gitglue version."""
    console.print(__version__)


@feat_app.command()
def git_feat(
    ctx: typer.Context,
    branch_name: str | None = typer.Argument(
        None, help="Feature branch to create (prompted for when omitted)."
    ),
    config: Path | None = _CONFIG_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """Create a feature branch from the upstream trunk, handling local changes first."""
    ctx.obj = build_app_state(config, verbose)
    feat_command(ctx, branch_name)


@pr_app.command()
def git_pr(
    ctx: typer.Context,
    config: Path | None = _CONFIG_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """Publish the current branch as a pull request against the trunk."""
    ctx.obj = build_app_state(config, verbose)
    pr_command(ctx)


def cli() -> None:
    ApplicationLifecycle().register_signal_handlers()
    app()


def feat_cli() -> None:
    ApplicationLifecycle().register_signal_handlers()
    feat_app(prog_name="git-feat")


def pr_cli() -> None:
    ApplicationLifecycle().register_signal_handlers()
    pr_app(prog_name="git-pr")


if __name__ == "__main__":
    cli()
