# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Endevor SCM adapter.

Downloads Endevor members into a CI build workspace through the Topaz CLI,
and migrates legacy per-job ``hostPort``/``codePage`` settings into a
shared host connection registry when old job configurations are loaded.

Example:
    >>> from endevor_scm import InMemoryConnectionRegistry, InMemoryJobStore, MigrationSweeper, load_jobs
    >>> registry = InMemoryConnectionRegistry()
    >>> store = InMemoryJobStore()
    >>> result = MigrationSweeper(store).sweep(load_jobs(store, registry))
"""

__version__ = "0.1.0"

from .config import PluginConfig
from .credentials import CredentialsProvider, InMemoryCredentialsProvider, LocalFileCredentialsProvider
from .downloader import BuildContext, EndevorDownloader
from .exceptions import (
    CompatibilityError,
    ConfigurationError,
    ConnectionNotFoundError,
    CredentialsNotFoundError,
    EndevorScmError,
    PersistenceError,
    ProcessExitError,
    ProcessLaunchError,
)
from .factory import create_connection_registry, create_credentials_provider, create_job_store
from .job_store import FileJobStore, InMemoryJobStore, JobStore
from .loader import LoadedJob, load_job, load_jobs
from .migration import normalize_config
from .models import Credentials, DownloadRequest, HostConnection, Job, JobConfig
from .node import ExecutionNode, LocalNode
from .registry import ConnectionRegistry, FileConnectionRegistry, InMemoryConnectionRegistry
from .sweeper import MigrationSweeper, SweepResult

__all__ = [
    # Version
    "__version__",
    # Models
    "HostConnection",
    "JobConfig",
    "Job",
    "Credentials",
    "DownloadRequest",
    # Collaborators
    "ConnectionRegistry",
    "InMemoryConnectionRegistry",
    "FileConnectionRegistry",
    "CredentialsProvider",
    "InMemoryCredentialsProvider",
    "LocalFileCredentialsProvider",
    "JobStore",
    "InMemoryJobStore",
    "FileJobStore",
    "ExecutionNode",
    "LocalNode",
    # Migration
    "normalize_config",
    "LoadedJob",
    "load_job",
    "load_jobs",
    "MigrationSweeper",
    "SweepResult",
    # Download
    "BuildContext",
    "EndevorDownloader",
    # Configuration
    "PluginConfig",
    # Factories
    "create_connection_registry",
    "create_credentials_provider",
    "create_job_store",
    # Exceptions
    "EndevorScmError",
    "ConfigurationError",
    "CompatibilityError",
    "ProcessExitError",
    "ProcessLaunchError",
    "PersistenceError",
    "ConnectionNotFoundError",
    "CredentialsNotFoundError",
]
