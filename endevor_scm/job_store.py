# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Job persistence: read every job, save one job."""

import copy
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

import yaml

from .exceptions import ConfigurationError, PersistenceError
from .models import Job

logger = logging.getLogger(__name__)

JOB_CONFIG_FILE = "config.yaml"


class JobStore(ABC):
    """Abstract base class for job persistence backends."""

    @abstractmethod
    def list_all_jobs(self) -> list[Job]:
        """Return every persisted job."""
        pass

    @abstractmethod
    def load(self, full_name: str) -> Job:
        """Load a single job.

        Raises:
            ConfigurationError: If the job does not exist or cannot be parsed
        """
        pass

    @abstractmethod
    def save(self, job: Job) -> None:
        """Persist a job.

        Raises:
            PersistenceError: If the job cannot be written
        """
        pass


class InMemoryJobStore(JobStore):
    """In-memory job store for testing and local development."""

    def __init__(self, jobs: list[Job] | None = None):
        self.jobs: dict[str, dict] = {}
        for job in jobs or []:
            self.jobs[job.full_name] = job.to_dict()

    def put_raw(self, full_name: str, data: dict) -> None:
        """Store a persisted mapping as-is, e.g. an old-format configuration."""
        self.jobs[full_name] = copy.deepcopy(data)

    def list_all_jobs(self) -> list[Job]:
        return [Job.from_dict(name, copy.deepcopy(data)) for name, data in self.jobs.items()]

    def load(self, full_name: str) -> Job:
        if full_name not in self.jobs:
            raise ConfigurationError(f"Job not found: {full_name}")
        return Job.from_dict(full_name, copy.deepcopy(self.jobs[full_name]))

    def save(self, job: Job) -> None:
        self.jobs[job.full_name] = copy.deepcopy(job.to_dict())
        logger.debug(f"InMemoryJobStore: saved job {job.full_name}")


class FileJobStore(JobStore):
    """Jobs stored as ``<root>/<full_name>/config.yaml``."""

    def __init__(self, root: str):
        self.root = Path(root)

    def _config_path(self, full_name: str) -> Path:
        path = (self.root / full_name / JOB_CONFIG_FILE).resolve()
        try:
            path.relative_to(self.root.resolve())
        except ValueError as e:
            raise ConfigurationError(f"Invalid job name: {full_name}") from e
        return path

    def _read(self, full_name: str, path: Path) -> Job:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read job {full_name}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Job {full_name} configuration must be a mapping")
        return Job.from_dict(full_name, data)

    def list_all_jobs(self) -> list[Job]:
        if not self.root.is_dir():
            logger.debug(f"Job root {self.root} does not exist, no jobs loaded")
            return []

        jobs = []
        for path in sorted(self.root.rglob(JOB_CONFIG_FILE)):
            full_name = path.parent.relative_to(self.root).as_posix()
            try:
                jobs.append(self._read(full_name, path))
            except ConfigurationError as e:
                logger.error(f"Failed to load job {full_name}, skipping: {e}")
                # Continue with other jobs
        return jobs

    def load(self, full_name: str) -> Job:
        path = self._config_path(full_name)
        if not path.is_file():
            raise ConfigurationError(f"Job not found: {full_name}")
        return self._read(full_name, path)

    def save(self, job: Job) -> None:
        path = self._config_path(job.full_name)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(job.to_dict(), f, sort_keys=False)
            os.replace(tmp_path, path)
        except OSError as e:
            raise PersistenceError(f"Failed to save job {job.full_name}: {e}", job_name=job.full_name) from e
