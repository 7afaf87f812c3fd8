from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from savepoints.exceptions import ConfigurationError

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_CONFIG_PATH = Path("config/default.yaml")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class StorageSettings(BaseModel):
    region: str | None = None
    profile: str | None = None
    # For S3-compatible stores such as MinIO
    endpoint_url: str | None = None


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    log_file: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> str:
        if value is None:
            return "INFO"
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level '{value}'")
        return level


class Settings(BaseModel):
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from a YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                SAVEPOINTS_CONFIG environment variable or config/default.yaml.

        Returns:
            Settings instance. Defaults are used when no file was requested
            explicitly and the default file is absent.

        Raises:
            ConfigurationError: If a requested file is missing or invalid.
        """
        env_path = os.getenv("SAVEPOINTS_CONFIG")
        config_path = path or (Path(env_path) if env_path else DEFAULT_CONFIG_PATH)
        if not config_path.exists():
            if path is None and env_path is None:
                return cls()
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)},
            )
        try:
            with config_path.open("r", encoding="utf-8") as fp:
                payload = yaml.safe_load(fp) or {}
            return cls(**payload)
        except (yaml.YAMLError, ValidationError, TypeError) as exc:
            raise ConfigurationError(
                f"Invalid configuration: {exc}",
                {"path": str(config_path)},
            ) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "StorageSettings",
    "LoggingSettings",
    "LOG_LEVELS",
    "get_settings",
]
