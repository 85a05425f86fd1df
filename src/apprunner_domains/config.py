"""Configuration management for the App Runner custom domain reconciler."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

_config_logger = logging.getLogger(__name__)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")
    botocore_level: str = Field(
        default="WARNING",
        description="Level for the botocore and boto3 loggers",
    )
    waiter_level: str | None = Field(
        default=None,
        description="Level for per-poll waiter logging; inherits `level` when unset",
    )


class ExecutionSettings(BaseModel):
    sdk_timeout_seconds: int = Field(default=30, ge=1, le=300)
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Per-call retries handled by botocore, never by the waiter.",
    )


class WaiterSettings(BaseModel):
    """Polling parameters handed to every Waiter the reconciler starts."""

    poll_interval_seconds: float = Field(default=5.0, gt=0)
    create_timeout_seconds: float = Field(default=300.0, ge=0)
    delete_timeout_seconds: float = Field(default=300.0, ge=0)

    @model_validator(mode="after")
    def _interval_within_timeouts(self) -> "WaiterSettings":
        longest = max(self.create_timeout_seconds, self.delete_timeout_seconds)
        if longest and self.poll_interval_seconds > longest:
            raise ValueError("poll_interval_seconds must not exceed the waiter timeouts")
        return self


class AWSSettings(BaseModel):
    default_region: str | None = Field(default=None)
    default_profile: str | None = Field(default=None)


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    waiter: WaiterSettings = Field(default_factory=WaiterSettings)
    aws: AWSSettings = Field(default_factory=AWSSettings)


ENV_KEYS = {
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "botocore_log_level": "LOG_LEVEL_BOTOCORE",
    "waiter_log_level": "LOG_LEVEL_WAITER",
    "aws_region": "AWS_DEFAULT_REGION",
    "aws_profile": "AWS_PROFILE",
    "sdk_timeout": "SDK_TIMEOUT_SECONDS",
    "max_retries": "APPRUNNER_MAX_RETRIES",
    "poll_interval": "WAITER_POLL_INTERVAL_SECONDS",
    "create_timeout": "WAITER_CREATE_TIMEOUT_SECONDS",
    "delete_timeout": "WAITER_DELETE_TIMEOUT_SECONDS",
}


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _resolve_path(path: str) -> str:
    candidate = Path(path)
    root = _project_root().resolve()
    if candidate.is_absolute():
        resolved = candidate.resolve()
    else:
        resolved = (root / candidate).resolve()
    if not resolved.is_relative_to(root):
        raise ValueError(f"Path traversal detected: '{path}' resolves outside project root")
    return str(resolved)


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        _config_logger.warning(
            "Invalid integer value for %s: %r, using default %d", key, value, default
        )
        return default


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        _config_logger.warning(
            "Invalid float value for %s: %r, using default %s", key, value, default
        )
        return default


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=_project_root() / ".env")
    log_file_env = os.getenv(ENV_KEYS["log_file"])

    settings_data: dict[str, object] = {
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": _resolve_path(log_file_env) if log_file_env else None,
            "botocore_level": os.getenv(
                ENV_KEYS["botocore_log_level"], LoggingSettings().botocore_level
            ),
            "waiter_level": os.getenv(ENV_KEYS["waiter_log_level"]) or None,
        },
        "execution": {
            "sdk_timeout_seconds": _env_int(
                ENV_KEYS["sdk_timeout"],
                ExecutionSettings().sdk_timeout_seconds,
            ),
            "max_retries": _env_int(
                ENV_KEYS["max_retries"],
                ExecutionSettings().max_retries,
            ),
        },
        "waiter": {
            "poll_interval_seconds": _env_float(
                ENV_KEYS["poll_interval"],
                WaiterSettings().poll_interval_seconds,
            ),
            "create_timeout_seconds": _env_float(
                ENV_KEYS["create_timeout"],
                WaiterSettings().create_timeout_seconds,
            ),
            "delete_timeout_seconds": _env_float(
                ENV_KEYS["delete_timeout"],
                WaiterSettings().delete_timeout_seconds,
            ),
        },
        "aws": {
            "default_region": os.getenv("AWS_REGION") or os.getenv(ENV_KEYS["aws_region"]),
            "default_profile": os.getenv(ENV_KEYS["aws_profile"]),
        },
    }

    try:
        settings = Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    return settings
