# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Plugin configuration loaded from environment variables and YAML."""

import os
from dataclasses import dataclass, fields
from typing import Any

import yaml

from .constants import DEFAULT_CLI_LOCATION_UNIX, DEFAULT_CLI_LOCATION_WINDOWS
from .exceptions import ConfigurationError
from .node import ExecutionNode

# Field name -> environment variable
ENV_VARS = {
    "cli_location_unix": "TOPAZ_CLI_LOCATION_UNIX",
    "cli_location_windows": "TOPAZ_CLI_LOCATION_WINDOWS",
    "registry_type": "CONNECTION_REGISTRY_TYPE",
    "registry_path": "CONNECTION_REGISTRY_PATH",
    "job_store_type": "JOB_STORE_TYPE",
    "jobs_path": "JOBS_PATH",
    "credentials_type": "CREDENTIALS_TYPE",
    "credentials_path": "CREDENTIALS_PATH",
    "log_level": "LOG_LEVEL",
    "logger_name": "LOG_NAME",
}


@dataclass
class PluginConfig:
    """Endevor SCM plugin configuration."""
    cli_location_unix: str = DEFAULT_CLI_LOCATION_UNIX
    cli_location_windows: str = DEFAULT_CLI_LOCATION_WINDOWS
    registry_type: str = "file"  # "file", "inmemory"
    registry_path: str = "connections.yaml"
    job_store_type: str = "file"  # "file", "inmemory"
    jobs_path: str = "jobs"
    credentials_type: str = "local"  # "local", "inmemory"
    credentials_path: str = "credentials"
    log_level: str = "INFO"
    logger_name: str = "endevor-scm"

    def __post_init__(self):
        # Backend selectors compare lower-case
        self.registry_type = self.registry_type.lower()
        self.job_store_type = self.job_store_type.lower()
        self.credentials_type = self.credentials_type.lower()

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "PluginConfig":
        """Load configuration from environment variables, keeping defaults for unset ones."""
        environ = environ if environ is not None else os.environ
        values = {name: environ[var] for name, var in ENV_VARS.items() if environ.get(var)}
        return cls(**values)

    @classmethod
    def from_yaml_file(cls, filepath: str, environ: dict[str, str] | None = None) -> "PluginConfig":
        """Load configuration from the environment, then apply a YAML file on top.

        A missing file yields the environment configuration.

        Raises:
            ConfigurationError: If the file is unreadable or has unknown keys
        """
        config = cls.from_env(environ)

        if not os.path.exists(filepath):
            return config

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read configuration {filepath}: {e}") from e

        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Configuration {filepath} must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = set(yaml_config) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys in {filepath}: {sorted(unknown)}")

        # Empty keys keep the environment value
        overrides = {k: str(v) for k, v in yaml_config.items() if v is not None}
        return cls(**{**config.to_dict(), **overrides})

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def cli_location(self, node: ExecutionNode) -> str:
        """CLI installation directory for the operating system of ``node``."""
        return self.cli_location_unix if node.is_unix else self.cli_location_windows
