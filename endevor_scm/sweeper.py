# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Startup sweep that saves every job migrated while loading."""

import logging
from dataclasses import dataclass, field

from .job_store import JobStore
from .loader import LoadedJob
from .models import JobConfig

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Outcome of a migration sweep."""

    migrated: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class MigrationSweeper:
    """Persist jobs whose configuration was migrated during loading.

    Runs once per process, after all jobs have been loaded. A job that
    cannot be saved is logged and skipped; the sweep always finishes.
    """

    def __init__(self, job_store: JobStore):
        """Initialize the sweeper.

        Args:
            job_store: Store used to save migrated jobs
        """
        self.job_store = job_store
        self._completed = False

    def sweep(self, loaded_jobs: list[LoadedJob]) -> SweepResult:
        """Save every migrated Endevor job.

        Args:
            loaded_jobs: Result of loading all jobs

        Returns:
            Names of saved jobs and of jobs whose save failed
        """
        result = SweepResult()
        if self._completed:
            logger.warning("Migration sweep already ran in this process, skipping")
            return result

        logger.debug("All jobs have been loaded, sweeping migrated configurations")
        for item in loaded_jobs:
            job = item.job
            if not isinstance(job.scm, JobConfig) or not item.migrated:
                continue

            try:
                self.job_store.save(job)
                result.migrated.append(job.full_name)
                logger.info(f"Job {job.full_name} has been migrated.")
            except Exception:
                result.failed.append(job.full_name)
                logger.error(f"Failed to upgrade job {job.full_name}", exc_info=True)
                # Continue with other jobs

        self._completed = True
        logger.info(
            f"Migration sweep completed: {len(result.migrated)} saved, {len(result.failed)} failed"
        )
        return result
