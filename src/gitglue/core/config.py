"""Application configuration management.

Handles loading and validating configuration from multiple sources:
    - TOML/JSON config files
    - Environment variables (GITGLUE_* prefix)
    - Default values

Key components:
    - AppConfig: Main configuration model
    - load_config(): Safe config loading with fallback
    - ConfigLoadResult: Metadata about config source
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from unittest.mock import patch

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from gitglue.core.errors import ConfigError

CONFIG_ENV_VAR = "GITGLUE_CONFIG"


# -----------------------------------------------------------------------------
# Sub-configuration Models
# -----------------------------------------------------------------------------


class GitConfig(BaseModel):
    """Repository and hosting settings."""

    remote: str = Field(default="origin", description="Remote to fetch from and push to.")
    trunk_branch: str = Field(
        default="master", description="Branch features start from and pull requests target."
    )
    protected_branches: list[str] = Field(
        default_factory=lambda: ["master", "main"],
        description="Branches git-pr refuses to publish from.",
    )
    git_binary: str = Field(default="git", description="git executable to invoke.")
    gh_binary: str = Field(default="gh", description="GitHub CLI executable to invoke.")

    @field_validator("remote", "trunk_branch", "git_binary", "gh_binary")
    @classmethod
    def ensure_not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be empty")
        return stripped


class UserConfig(BaseModel):
    """User preferences."""

    log_level: str = Field(default="WARNING", description="Log level for gitglue output.")
    open_in_browser: bool = Field(
        default=True, description="Open pull requests in the browser instead of printing them."
    )


@dataclass
class ConfigLoadResult:
    path: Path
    file_loaded: bool
    env_overrides: set[str]
    error: str | None = None


class AppConfig(BaseSettings):
    """Application-wide configuration with nested sub-configs."""

    model_config = SettingsConfigDict(
        env_prefix="GITGLUE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    git: GitConfig = Field(default_factory=GitConfig)
    user: UserConfig = Field(default_factory=UserConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        # Environment variables override config file entries.
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


def _resolve_config_path(config_path: Path | None, env_vars: Mapping[str, str]) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    from_env = env_vars.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()
    return Path.home() / ".gitglue.toml"


def _read_config_file(path: Path) -> dict[str, Any] | None:
    """Parse a TOML or JSON config file; None when there is no file."""
    if not path.exists():
        return None

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    try:
        data = json.loads(raw) if path.suffix.lower() == ".json" else tomllib.loads(raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Syntax error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be a mapping.")
    return data


_GROUPS: dict[str, type[BaseModel]] = {"git": GitConfig, "user": UserConfig}


def _detect_env_overrides(env_vars: Mapping[str, str]) -> set[str]:
    """Dotted names of settings set through GITGLUE_<GROUP>__<FIELD> variables."""
    prefix = AppConfig.model_config.get("env_prefix", "")
    delimiter = AppConfig.model_config.get("env_nested_delimiter", "__")
    return {
        f"{group}.{field}"
        for group, model_cls in _GROUPS.items()
        for field in model_cls.model_fields
        if f"{prefix}{group}{delimiter}{field}".upper() in env_vars
    }


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> tuple[AppConfig, ConfigLoadResult]:
    """Load configuration without raising.

    A config file that cannot be read, parsed, or validated yields the
    default settings, with the problem recorded in `ConfigLoadResult.error`.
    `env` is layered over `os.environ` for the duration of the call.
    """
    env_vars: Mapping[str, str] = os.environ if env is None else {**os.environ, **env}
    meta = ConfigLoadResult(
        path=_resolve_config_path(config_path, env_vars),
        file_loaded=False,
        env_overrides=_detect_env_overrides(env_vars),
    )

    file_data: dict[str, Any] = {}
    try:
        parsed = _read_config_file(meta.path)
    except ConfigError as exc:
        meta.error = str(exc)
    else:
        if parsed is not None:
            file_data = parsed
            meta.file_loaded = True

    scoped_env = patch.dict(os.environ, env_vars) if env is not None else nullcontext()
    try:
        with scoped_env:
            config = AppConfig(**file_data)
    except ValidationError as exc:
        meta.error = str(exc)
        config = AppConfig.model_construct(git=GitConfig(), user=UserConfig())

    return config, meta
