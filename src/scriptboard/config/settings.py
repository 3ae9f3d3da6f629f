"""Settings for the scene store, board defaults, AI services and logging."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scriptboard.exceptions import ConfigurationError, check_config_keys

BUILTIN_COLUMNS = ["unscheduled", "scheduled", "shot", "edit"]


class ScriptBoardSettings(BaseSettings):
    """Everything ScriptBoard reads from its environment.

    A value set in more than one place resolves in this order, first wins:

    1. command flags, e.g. ``scriptboard --db-path film.db board``
    2. a config file, e.g. ``default_columns: [unscheduled, scheduled, shot]``
       in ``scriptboard.yaml`` or the file given with ``--config``
    3. ``SCRIPTBOARD_*`` variables, e.g. ``SCRIPTBOARD_ANALYSIS_MAX_CHARS=20000``
    4. ``.env`` in the working directory
    5. the field defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database settings
    database_path: Path = Field(
        default_factory=lambda: Path.cwd() / "scriptboard.db",
        description="Path to the SQLite scene store",
    )
    database_timeout: float = Field(
        default=30.0,
        description="SQLite connection timeout in seconds",
        ge=0.1,
    )
    database_journal_mode: str = Field(
        default="WAL",
        description="SQLite journal mode (DELETE, TRUNCATE, PERSIST, MEMORY, WAL, OFF)",
        pattern="^(DELETE|TRUNCATE|PERSIST|MEMORY|WAL|OFF)$",
    )
    database_synchronous: str = Field(
        default="NORMAL",
        description="SQLite synchronous mode (OFF, NORMAL, FULL, EXTRA)",
        pattern="^(OFF|NORMAL|FULL|EXTRA)$",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    # LLM settings
    llm_endpoint: str | None = Field(
        default=None,
        description="OpenAI-compatible API endpoint URL",
    )
    llm_api_key: str | None = Field(
        default=None,
        description="API key for OpenAI-compatible endpoint",
    )
    llm_model: str | None = Field(
        default=None,
        description="Model used for scene analysis and script parsing",
    )
    llm_temperature: float = Field(
        default=0.4,
        description="Temperature for analysis completions",
        ge=0.0,
        le=2.0,
    )
    llm_timeout: float = Field(
        default=120.0,
        description="HTTP timeout in seconds for LLM requests",
        gt=0,
    )

    # Board settings
    analysis_max_chars: int = Field(
        default=30000,
        description="Characters of script text submitted to whole-script parsing",
        gt=0,
    )
    default_columns: list[str] = Field(
        default_factory=lambda: list(BUILTIN_COLUMNS),
        description="Columns a new project board starts with",
        min_length=1,
    )

    @field_validator("database_path", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand $VARS and ~ so ``database_path: ~/films/pilot.db`` works."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be string or Path. Got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Accept ``debug`` as well as ``DEBUG``."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Accept ``JSON`` as well as ``json``."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("llm_model", mode="before")
    @classmethod
    def normalize_llm_model(cls, v: Any) -> Any:
        """Treat placeholders like "default" or "auto" as unset."""
        if isinstance(v, str) and v.strip().lower() in {"", "default", "auto", "none"}:
            return None
        return v

    @field_validator("default_columns")
    @classmethod
    def unique_columns(cls, v: list[str]) -> list[str]:
        """Trim column names and drop blanks and repeats, keeping order."""
        columns: list[str] = []
        for name in v:
            name = name.strip()
            if name and name not in columns:
                columns.append(name)
        if not columns:
            raise ValueError("default_columns must contain at least one name")
        return columns

    @classmethod
    def from_env(cls) -> ScriptBoardSettings:
        """Settings from ``SCRIPTBOARD_*`` variables, .env and defaults."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScriptBoardSettings:
        """Read one ``.yaml``, ``.toml`` or ``.json`` settings file.

        Known misspellings are refused, so ``default_column`` fails loudly
        instead of leaving new boards with the built-in columns.

        Raises:
            ConfigurationError: For another suffix or a misspelt key
            FileNotFoundError: If the file is missing
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                },
            )

        check_config_keys(data)
        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> ScriptBoardSettings:
        """Merge config files, the environment and command flags.

        Later ``config_files`` override earlier ones and a missing one is
        skipped with a warning. ``cli_args`` entries that are None (flags
        the user left off) do not mask a file value, so
        ``{"database_path": None}`` keeps the configured scene store.
        """
        data: dict[str, Any] = {}

        for config_file in config_files or []:
            try:
                file_settings = cls.from_file(config_file)
            except FileNotFoundError:
                from scriptboard.config.logging import get_logger as _get_logger

                _get_logger(__name__).warning(
                    "Settings file missing, skipped",
                    config_file=str(config_file),
                )
                continue
            data.update(file_settings.model_dump(exclude_unset=True))

        if env_file:
            settings = cast("ScriptBoardSettings", cast(Any, cls)(_env_file=env_file, **data))
        else:
            settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated_data = settings.model_dump()
                updated_data.update(cli_data)
                settings = cls(**updated_data)

        return settings


_settings: ScriptBoardSettings | None = None


def _get_config_paths() -> list[Path | str]:
    """User-level then project-level settings files that exist."""
    potential_paths = [
        Path.home() / ".config" / "scriptboard" / "config.yaml",
        Path.home() / ".config" / "scriptboard" / "config.toml",
        Path.cwd() / "scriptboard.yaml",
        Path.cwd() / "scriptboard.toml",
        Path.cwd() / "scriptboard.json",
    ]
    existing: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing.append(path)
        except OSError:
            continue
    return existing


def get_settings() -> ScriptBoardSettings:
    """Process-wide settings, read once from the standard locations."""
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = ScriptBoardSettings.from_multiple_sources(
                config_files=config_paths
            )
        else:
            _settings = ScriptBoardSettings.from_env()
    return _settings


def set_settings(settings: ScriptBoardSettings) -> None:
    """Replace the process-wide settings, e.g. with a test database."""
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Make the next get_settings() read files and environment again."""
    global _settings
    _settings = None


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> ScriptBoardSettings:
    """Settings for one CLI invocation.

    ``--config`` replaces the standard file lookup; ``cli_overrides``
    such as ``{"database_path": Path("film.db")}`` go on top.

    Raises:
        FileNotFoundError: If ``config_file`` is given but missing
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return ScriptBoardSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    filtered = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    if filtered:
        data = settings.model_dump()
        data.update(filtered)
        settings = ScriptBoardSettings(**data)
    return settings
