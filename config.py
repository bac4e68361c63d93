"""
Configuration management for the website checker.
"""

import os
import json
import logging
from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Any, Dict, Union

from jsonschema import validate, ValidationError as SchemaValidationError

from website_checker.utils.errors import ConfigurationError, ValidationError


DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_URLS_PATH = "urls.txt"

ENV_PREFIX = "WEBSITE_CHECKER_"


@dataclass(frozen=True)
class RunConfig:
    """Settings for one checking run. Read once, never mutated."""
    worker_threads: int = 4
    request_timeout_secs: int = 10
    max_retries: int = 2
    log_file: str = "website_checks.log"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ValidationError: If configuration is invalid
        """
        errors = []

        if self.worker_threads < 0:
            errors.append("worker_threads must be non-negative")

        if self.request_timeout_secs < 0:
            errors.append("request_timeout_secs must be non-negative")

        if self.max_retries < 0:
            errors.append("max_retries must be non-negative")

        if not self.log_file:
            errors.append("log_file must not be empty")

        if errors:
            raise ValidationError(
                "Run configuration validation failed",
                {"errors": errors}
            )

    @property
    def effective_worker_threads(self) -> int:
        """Worker count actually used; zero is raised to one."""
        return max(1, self.worker_threads)

    @property
    def timeout(self) -> float:
        """Per-attempt timeout in seconds. Zero makes every attempt time out."""
        return float(self.request_timeout_secs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Configuration schema for validation
CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "worker_threads": {"type": "integer", "minimum": 0},
        "request_timeout_secs": {"type": "integer", "minimum": 0},
        "max_retries": {"type": "integer", "minimum": 0},
        "log_file": {"type": "string", "minLength": 1}
    },
    "required": ["worker_threads", "request_timeout_secs", "max_retries", "log_file"],
    "additionalProperties": False
}

INTEGER_FIELDS = ("worker_threads", "request_timeout_secs", "max_retries")


class ConfigManager:
    """Loads, validates and applies environment overrides to the run configuration."""

    def __init__(self, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path)

    def validate_config(self, config_data: Any) -> None:
        """Validate configuration data against schema."""
        try:
            validate(instance=config_data, schema=CONFIG_SCHEMA)
        except SchemaValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e.message}",
                {"path": str(self.config_path), "field": "/".join(str(p) for p in e.path)}
            )

    def load_config(self) -> RunConfig:
        """
        Load configuration from the JSON file, then apply environment overrides.

        Raises:
            ConfigurationError: If the file is missing, unreadable, malformed or invalid
        """
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Configuration file not found: {self.config_path}",
                {"path": str(self.config_path)}
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Malformed JSON in {self.config_path}: {e}",
                {"path": str(self.config_path)}
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to read configuration {self.config_path}: {e}",
                {"path": str(self.config_path)}
            ) from e

        self.validate_config(config_data)
        config = self._dict_to_config(config_data)
        config = self._override_with_env_vars(config)

        logging.info(f"Configuration loaded and validated from {self.config_path}")
        return config

    def _dict_to_config(self, data: Dict[str, Any]) -> RunConfig:
        """Convert dictionary to RunConfig object."""
        # the schema accepts 3.0 as an integer
        values = {key: int(value) if key in INTEGER_FIELDS else value for key, value in data.items()}
        try:
            return RunConfig(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e.message}", e.details) from e

    def _override_with_env_vars(self, config: RunConfig) -> RunConfig:
        """Override configuration with WEBSITE_CHECKER_* environment variables."""
        overrides: Dict[str, Any] = {}

        for name in INTEGER_FIELDS:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is None or not raw.strip():
                continue
            try:
                overrides[name] = int(raw)
            except ValueError:
                raise ConfigurationError(
                    f"Environment variable {ENV_PREFIX + name.upper()} must be an integer",
                    {"value": raw}
                )

        log_file = os.getenv(ENV_PREFIX + "LOG_FILE")
        if log_file:
            overrides["log_file"] = log_file

        if not overrides:
            return config

        logging.info(f"Configuration overridden from environment: {sorted(overrides)}")
        try:
            return replace(config, **overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration override: {e.message}", e.details) from e


def load_config(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> RunConfig:
    """Convenience wrapper around ConfigManager.load_config."""
    return ConfigManager(config_path).load_config()
