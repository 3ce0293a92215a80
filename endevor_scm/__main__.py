# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Command line entry point: ``python -m endevor_scm``."""

import argparse
import os
import sys

from .config import PluginConfig
from .downloader import BuildContext, EndevorDownloader
from .exceptions import EndevorScmError
from .factory import create_connection_registry, create_credentials_provider, create_job_store
from .loader import load_job, load_jobs
from .logging_config import configure_logging
from .node import LocalNode
from .sweeper import MigrationSweeper

DEFAULT_CONFIG_FILE = "endevor-scm.yaml"


def _collaborators(config: PluginConfig):
    registry_kwargs = {"path": config.registry_path} if config.registry_type == "file" else {}
    store_kwargs = {"root": config.jobs_path} if config.job_store_type == "file" else {}
    registry = create_connection_registry(config.registry_type, **registry_kwargs)
    job_store = create_job_store(config.job_store_type, **store_kwargs)
    return registry, job_store


def run_startup(config: PluginConfig) -> int:
    """Load every job and save the ones whose configuration was migrated."""
    registry, job_store = _collaborators(config)
    result = MigrationSweeper(job_store).sweep(load_jobs(job_store, registry))

    print(f"Migrated jobs: {len(result.migrated)}")
    for name in result.failed:
        print(f"Failed to migrate job: {name}", file=sys.stderr)
    return 0


def run_download(config: PluginConfig, job_name: str, workspace: str) -> int:
    """Download the Endevor members of one job into a local workspace."""
    registry, job_store = _collaborators(config)
    loaded = load_job(job_store.load(job_name), registry)
    if loaded.job.scm is None:
        print(f"Job {job_name} is not configured for Endevor", file=sys.stderr)
        return 1

    credentials_kwargs = {"base_path": config.credentials_path} if config.credentials_type == "local" else {}
    credentials = create_credentials_provider(config.credentials_type, **credentials_kwargs)

    downloader = EndevorDownloader(loaded.job.scm, registry, credentials, config)
    context = BuildContext(job_name=job_name, node=LocalNode(), environment=dict(os.environ))
    downloader.get_source(context, os.path.abspath(workspace), sys.stdout)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="endevor-scm",
        description="Endevor source download and host connection migration",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"Plugin configuration file (default: {DEFAULT_CONFIG_FILE})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("startup", help="Migrate legacy job configurations")

    download = subparsers.add_parser("download", help="Download Endevor members for a job")
    download.add_argument("job", help="Full name of the job")
    download.add_argument("--workspace", required=True, help="Workspace directory")

    args = parser.parse_args(argv)

    try:
        config = PluginConfig.from_yaml_file(args.config)
        configure_logging(config.log_level, config.logger_name)

        if args.command == "startup":
            return run_startup(config)
        return run_download(config, args.job, args.workspace)
    except EndevorScmError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
