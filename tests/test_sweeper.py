# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Tests for the startup migration sweep."""

import logging
from unittest.mock import Mock

from endevor_scm import (
    InMemoryConnectionRegistry,
    InMemoryJobStore,
    Job,
    JobConfig,
    LoadedJob,
    MigrationSweeper,
    PersistenceError,
    load_jobs,
)


def _loaded(name: str, migrated: bool = True, scm: JobConfig | None = None) -> LoadedJob:
    return LoadedJob(job=Job(full_name=name, scm=scm or JobConfig(connection_id="c1")), migrated=migrated)


class TestMigrationSweeper:
    """Test cases for MigrationSweeper."""

    def test_saves_only_migrated_jobs(self):
        mock_store = Mock()
        sweeper = MigrationSweeper(mock_store)

        result = sweeper.sweep([_loaded("a"), _loaded("b", migrated=False), _loaded("c")])

        saved = [call.args[0].full_name for call in mock_store.save.call_args_list]
        assert saved == ["a", "c"]
        assert result.migrated == ["a", "c"]
        assert result.failed == []

    def test_skips_jobs_without_endevor_config(self):
        mock_store = Mock()
        loaded = LoadedJob(job=Job(full_name="git-job"), migrated=True)

        result = MigrationSweeper(mock_store).sweep([loaded])

        mock_store.save.assert_not_called()
        assert result.migrated == []

    def test_failed_save_does_not_abort_sweep(self, caplog):
        mock_store = Mock()
        mock_store.save.side_effect = [None, PersistenceError("disk full", job_name="b"), None, None]
        jobs = [_loaded("a"), _loaded("b"), _loaded("c"), _loaded("d")]

        with caplog.at_level(logging.INFO, logger="endevor_scm.sweeper"):
            result = MigrationSweeper(mock_store).sweep(jobs)

        assert mock_store.save.call_count == 4
        assert result.migrated == ["a", "c", "d"]
        assert result.failed == ["b"]
        assert "Failed to upgrade job b" in caplog.text
        assert "Job d has been migrated." in caplog.text

    def test_unexpected_exception_is_contained(self):
        mock_store = Mock()
        mock_store.save.side_effect = RuntimeError("boom")

        result = MigrationSweeper(mock_store).sweep([_loaded("a"), _loaded("b")])

        assert result.failed == ["a", "b"]

    def test_runs_once_per_instance(self):
        mock_store = Mock()
        sweeper = MigrationSweeper(mock_store)

        sweeper.sweep([_loaded("a")])
        second = sweeper.sweep([_loaded("a")])

        assert mock_store.save.call_count == 1
        assert second.migrated == []

    def test_end_to_end_with_store(self):
        store = InMemoryJobStore()
        store.put_raw("legacy", {"scm": {"type": "endevor", "hostPort": "MF1:1234", "codePage": "037"}})
        registry = InMemoryConnectionRegistry()

        result = MigrationSweeper(store).sweep(load_jobs(store, registry))

        assert result.migrated == ["legacy"]
        persisted = store.jobs["legacy"]["scm"]
        assert persisted["connectionId"] == registry.list_connections()[0].connection_id
        assert "hostPort" not in persisted

        # Saved jobs no longer carry legacy settings
        assert load_jobs(store, registry)[0].migrated is False
