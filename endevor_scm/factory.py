# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Factories for the registry, job store and credentials backends."""

from typing import Any, cast

from .credentials import CredentialsProvider, InMemoryCredentialsProvider, LocalFileCredentialsProvider
from .exceptions import ConfigurationError
from .job_store import FileJobStore, InMemoryJobStore, JobStore
from .registry import ConnectionRegistry, FileConnectionRegistry, InMemoryConnectionRegistry


def _create(kind: str, choice: str, implementations: dict[str, type], **kwargs: Any) -> Any:
    choice = choice.lower()
    if choice not in implementations:
        raise ConfigurationError(
            f"Unknown {kind} type: {choice}. "
            f"Available: {', '.join(implementations.keys())}"
        )
    return implementations[choice](**kwargs)


def create_connection_registry(registry_type: str, **kwargs: Any) -> ConnectionRegistry:
    """Create a host connection registry.

    Args:
        registry_type: "file" (requires ``path``) or "inmemory"
        **kwargs: Registry-specific configuration

    Raises:
        ConfigurationError: If registry_type is unknown

    Example:
        >>> registry = create_connection_registry("file", path="connections.yaml")
    """
    implementations: dict[str, type] = {
        "file": FileConnectionRegistry,
        "inmemory": InMemoryConnectionRegistry,
    }
    return cast(ConnectionRegistry, _create("registry", registry_type, implementations, **kwargs))


def create_job_store(store_type: str, **kwargs: Any) -> JobStore:
    """Create a job store: "file" (requires ``root``) or "inmemory"."""
    implementations: dict[str, type] = {
        "file": FileJobStore,
        "inmemory": InMemoryJobStore,
    }
    return cast(JobStore, _create("job store", store_type, implementations, **kwargs))


def create_credentials_provider(provider_type: str, **kwargs: Any) -> CredentialsProvider:
    """Create a credentials provider: "local" (requires ``base_path``) or "inmemory"."""
    implementations: dict[str, type] = {
        "local": LocalFileCredentialsProvider,
        "inmemory": InMemoryCredentialsProvider,
    }
    return cast(CredentialsProvider, _create("credentials", provider_type, implementations, **kwargs))
