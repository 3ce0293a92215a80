# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Job loading pipeline: read persisted jobs, then normalize their configuration."""

import logging
from dataclasses import dataclass

from .job_store import JobStore
from .migration import normalize_config
from .models import Job
from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)


@dataclass
class LoadedJob:
    """A job together with whether loading it migrated its configuration."""

    job: Job
    migrated: bool = False


def load_job(job: Job, registry: ConnectionRegistry) -> LoadedJob:
    """Normalize one freshly read job."""
    if job.scm is None:
        return LoadedJob(job=job)
    return LoadedJob(job=job, migrated=normalize_config(job.scm, registry))


def load_jobs(job_store: JobStore, registry: ConnectionRegistry) -> list[LoadedJob]:
    """Read every job from the store and normalize each configuration.

    Args:
        job_store: Job persistence backend
        registry: Host connection registry used by the migration

    Returns:
        Loaded jobs in store order
    """
    loaded = [load_job(job, registry) for job in job_store.list_all_jobs()]
    migrated = sum(1 for item in loaded if item.migrated)
    logger.info(f"Loaded {len(loaded)} jobs, {migrated} with legacy connection settings")
    return loaded
