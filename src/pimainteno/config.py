"""Daemon configuration.

Configuration is read once from a TOML file into frozen pydantic models and
then handed, section by section, to the components that need it.

Example ``PiMainteno.toml``::

    [llm]
    command = "codex"
    provider = "openai"

    [scheduler]
    enabled = true
    interval_seconds = 86400
    projects = ["~/src/weather-bot", "~/src/home-dash"]

    [cache]
    path = "~/.local/share/pimainteno/status.db"
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_CONFIG_PATH = "PiMainteno.toml"


class ConfigError(Exception):
    """Configuration file missing, unreadable or invalid."""


def expand_home(value: str) -> str:
    """Expand a leading ``~/`` against $HOME, leaving other paths untouched."""
    home = os.environ.get("HOME")
    if home and value.startswith("~/"):
        return str(Path(home) / value[2:])
    return value


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class LLMConfig(_Section):
    """Settings for the external code-generation agent."""

    command: str = "codex"
    provider: str = "openai"
    extra_args: tuple[str, ...] = ("-q", "-a", "full-auto")
    timeout_seconds: float = Field(default=1800.0, gt=0)


class SchedulerConfig(_Section):
    """Which projects to maintain and how often."""

    enabled: bool = True
    interval_seconds: float = Field(default=24 * 60 * 60, gt=0)
    projects: tuple[str, ...] = ()
    remote: str | None = None
    branch: str | None = None

    @field_validator("projects", mode="after")
    @classmethod
    def _expand_projects(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(expand_home(p) for p in value)


class CacheConfig(_Section):
    """Location of the status store database."""

    path: str = "pimainteno.db"

    @field_validator("path", mode="after")
    @classmethod
    def _expand_path(cls, value: str) -> str:
        return expand_home(value)


class WebConfig(_Section):
    """Status API listener."""

    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)


class SystemdMonitorConfig(_Section):
    """Placeholder unit-failure listener."""

    enabled: bool = False
    units: tuple[str, ...] = ()
    poll_seconds: float = Field(default=60.0, gt=0)


class ServicesConfig(_Section):
    """How project services are restarted."""

    unit_suffix: str = ".service"
    user: bool = False
    use_sudo: bool = False
    timeout_seconds: float = Field(default=60.0, gt=0)


class GitConfig(_Section):
    timeout_seconds: float = Field(default=120.0, gt=0)


class Config(_Section):
    """Complete daemon configuration."""

    llm: LLMConfig = LLMConfig()
    scheduler: SchedulerConfig = SchedulerConfig()
    cache: CacheConfig = CacheConfig()
    web: WebConfig = WebConfig()
    systemd_monitor: SystemdMonitorConfig = SystemdMonitorConfig()
    services: ServicesConfig = ServicesConfig()
    git: GitConfig = GitConfig()


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> Config:
    """Load and validate a TOML configuration file.

    Args:
        path: Path to the TOML file.

    Returns:
        The validated, immutable Config.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read config file '{path}': {e}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot parse config file '{path}': {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file '{path}': {e}") from e
