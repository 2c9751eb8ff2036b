"""Core shared infrastructure for gitglue.

This package contains foundational utilities:
    - config: Application configuration management
    - console: Rich console output and logging
    - errors: Error hierarchy surfaced to the CLI
    - process: External command execution
    - prompts: Interactive input
"""

from __future__ import annotations

from . import config, console

__all__ = ["config", "console"]
