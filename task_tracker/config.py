"""Configuration management for the task tracker.

Configuration Precedence (highest to lowest):
    1. Constructor arguments (the CLI passes its options here)
    2. Environment variables
    3. Default values

Environment Variables:
    TASK_TRACKER_MODE: "local" or "remote" (default: local)
    TASK_TRACKER_FILE: Local state document (default: task_manager.yaml)
    TASK_TRACKER_BASE_URL: Remote service base URL
    TASK_TRACKER_API_KEY: Static key sent in the ``api-key`` header
    TASK_TRACKER_TIMEOUT: Remote request timeout in seconds (default: 10)
    TASK_TRACKER_ID_POLICY: "count" or "next-max" (default: count)
    TASK_TRACKER_LOG_LEVEL: Logging level name (default: WARNING)

Example:
    >>> config = TrackerConfig()
    >>> remote = config.with_overrides(
    ...     mode="remote", base_url="https://tasks.example.com", api_key="k"
    ... )

"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv

from task_tracker.exceptions import ConfigurationError
from task_tracker.registry import IdPolicy

# Auto-load .env file if it exists (searches current dir and parents)
_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    load_dotenv()


@dataclass(frozen=True, slots=True)
class TrackerConfig:
    """Immutable settings for one tracker run.

    Attributes:
        mode: Which backend to use, "local" or "remote".
        data_file: Path of the local YAML state document.
        base_url: Remote service base URL.
        api_key: Static API key for the remote service.
        timeout: Remote request timeout in seconds.
        id_policy: Id allocation rule for local mode.
        log_level: Logging level name.

    """

    MODES: ClassVar[tuple[str, ...]] = ("local", "remote")
    DEFAULT_MODE: ClassVar[str] = "local"
    DEFAULT_DATA_FILE: ClassVar[str] = "task_manager.yaml"
    DEFAULT_TIMEOUT: ClassVar[float] = 10.0
    DEFAULT_ID_POLICY: ClassVar[str] = IdPolicy.COUNT.value
    DEFAULT_LOG_LEVEL: ClassVar[str] = "WARNING"

    mode: str = field(
        default_factory=lambda: _get_env("TASK_TRACKER_MODE", TrackerConfig.DEFAULT_MODE)
    )
    data_file: Path = field(
        default_factory=lambda: Path(
            _get_env("TASK_TRACKER_FILE", TrackerConfig.DEFAULT_DATA_FILE)
        )
    )
    base_url: str | None = field(
        default_factory=lambda: _get_env_optional("TASK_TRACKER_BASE_URL")
    )
    api_key: str | None = field(default_factory=lambda: _get_env_optional("TASK_TRACKER_API_KEY"))
    timeout: float = field(
        default_factory=lambda: _get_float(
            "TASK_TRACKER_TIMEOUT", TrackerConfig.DEFAULT_TIMEOUT
        )
    )
    id_policy: str = field(
        default_factory=lambda: _get_env(
            "TASK_TRACKER_ID_POLICY", TrackerConfig.DEFAULT_ID_POLICY
        )
    )
    log_level: str = field(
        default_factory=lambda: _get_env(
            "TASK_TRACKER_LOG_LEVEL", TrackerConfig.DEFAULT_LOG_LEVEL
        )
    )

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate all configuration values.

        Raises:
            ConfigurationError: If any configuration value is invalid.

        """
        object.__setattr__(self, "mode", self.mode.lower())
        if self.mode not in self.MODES:
            raise ConfigurationError(
                f"Invalid mode '{self.mode}'. Must be one of: {', '.join(self.MODES)}"
            )

        object.__setattr__(self, "data_file", Path(self.data_file))

        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

        try:
            IdPolicy.from_string(self.id_policy)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"Unknown log level '{self.log_level}'")

        if self.base_url is not None:
            if not self.base_url.startswith(("http://", "https://")):
                raise ConfigurationError(
                    f"Invalid base_url: {self.base_url} (must start with http:// or https://)"
                )
            # Remove trailing slash for consistency
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        if self.mode == "remote":
            if not self.base_url:
                raise ConfigurationError("Remote mode requires a base URL")
            if not self.api_key:
                raise ConfigurationError("Remote mode requires an API key")

    @property
    def is_remote(self) -> bool:
        return self.mode == "remote"

    @property
    def id_allocation(self) -> IdPolicy:
        return IdPolicy.from_string(self.id_policy)

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls, **overrides: object) -> TrackerConfig:
        """Build a configuration from the environment and explicit values.

        Explicit values replace their environment variables before anything
        is validated; ``None`` values are ignored.

        Example:
            >>> TrackerConfig.from_env(base_url="https://tasks.example.com", mode=None)

        """
        return cls(**{k: v for k, v in overrides.items() if v is not None})  # type: ignore[arg-type]

    def with_overrides(self, **kwargs: object) -> TrackerConfig:
        """Create a new configuration with specified overrides.

        ``None`` values are ignored so unset CLI options keep the current
        value.

        Example:
            >>> TrackerConfig().with_overrides(data_file="other.yaml", mode=None)

        """
        current_values: dict[str, object] = {f.name: getattr(self, f.name) for f in fields(self)}
        current_values.update({k: v for k, v in kwargs.items() if v is not None})
        return TrackerConfig(**current_values)  # type: ignore[arg-type]


def _get_env(key: str, default: str) -> str:
    """Get environment variable with default."""
    value = os.environ.get(key)
    if value is None or value == "":
        return default
    return value


def _get_env_optional(key: str) -> str | None:
    """Get optional environment variable."""
    value = os.environ.get(key)
    if value is None or value == "":
        return None
    return value


def _get_float(key: str, default: float) -> float:
    raw = _get_env(key, str(default))
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from e
