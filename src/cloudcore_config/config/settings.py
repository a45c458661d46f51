"""
cloudcore-config runtime settings.

Settings for the validator tool itself (not the CloudCore configuration it
checks), managed with Pydantic settings. Loaded from environment and .env by
default; YAML loading is also supported.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CLOUDCORE_CONFIG_PATH = "/etc/kubeedge/config/cloudcore.yaml"

LOG_FORMATS = ("json", "console")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
OUTPUT_FORMATS = ("table", "json")


class LoggingSettings(BaseSettings):
    """How cloudcore-config logs: level, renderer (json or console) and an optional file copy of stderr."""

    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")

    log_level: str = Field(default="INFO", description="Minimum level written, one of LOG_LEVELS")
    log_format: str = Field(default="console", description="Renderer, one of LOG_FORMATS")
    log_file: Optional[str] = Field(default=None, description="Also append log lines to this file")

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"log_format {v!r} is not one of {LOG_FORMATS}")
        return fmt

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level {v!r} is not one of {LOG_LEVELS}")
        return level


class ValidatorSettings(BaseSettings):
    """Where to find the CloudCore configuration and how to report problems."""

    model_config = SettingsConfigDict(env_prefix="CLOUDCORE_", extra="ignore")

    config_path: str = Field(
        default=DEFAULT_CLOUDCORE_CONFIG_PATH,
        description="cloudcore.yaml checked when no --config is given",
    )
    output_format: str = Field(default="table", description="Report format: 'table' or 'json'")

    @field_validator("output_format")
    @classmethod
    def check_output_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"output_format {v!r} is not one of {OUTPUT_FORMATS}")
        return fmt


class Settings(BaseSettings):
    """Everything the CLI needs besides the cloudcore.yaml under test (LOG_* and CLOUDCORE_* variables)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings, description="Logging config")
    validator: ValidatorSettings = Field(default_factory=ValidatorSettings, description="Validator config")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Build settings from a YAML file with optional `logging` and `validator` sections."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        sections: dict[str, Any] = {}
        if isinstance(data.get("logging"), dict):
            sections["logging"] = LoggingSettings.model_validate(data["logging"])
        if isinstance(data.get("validator"), dict):
            sections["validator"] = ValidatorSettings.model_validate(data["validator"])
        return cls(**sections)


# Process-wide settings, built on first use
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached settings, building them from the environment on first call."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Rebuild the cached settings, picking up environment changes."""
    global _settings
    _settings = Settings()
    return _settings
