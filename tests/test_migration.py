# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Tests for legacy connection migration and job loading."""

from endevor_scm import (
    HostConnection,
    InMemoryConnectionRegistry,
    InMemoryJobStore,
    Job,
    JobConfig,
    load_jobs,
    normalize_config,
)


class TestNormalizeConfig:
    """Tests for normalize_config."""

    def test_legacy_config_gets_connection_id(self):
        registry = InMemoryConnectionRegistry()
        config = JobConfig(host_port="MF1:1234", code_page="037")

        migrated = normalize_config(config, registry)

        assert migrated is True
        assert config.connection_id
        connection = registry.find_by_id(config.connection_id)
        assert connection.description == "MF1:1234 037"
        assert connection.host == "MF1"
        assert connection.port == "1234"
        assert len(registry.list_connections()) == 1

    def test_legacy_fields_are_not_cleared(self):
        config = JobConfig(host_port="MF1:1234", code_page="037")
        normalize_config(config, InMemoryConnectionRegistry())
        assert config.host_port == "MF1:1234"
        assert config.code_page == "037"

    def test_identical_settings_share_one_entry(self):
        registry = InMemoryConnectionRegistry()
        first = JobConfig(host_port="MF1:1234", code_page="037")
        second = JobConfig(host_port="MF1:1234", code_page="037")

        normalize_config(first, registry)
        normalize_config(second, registry)

        assert first.connection_id == second.connection_id
        assert len(registry.list_connections()) == 1

    def test_existing_entry_is_reused(self):
        existing = HostConnection(description="Prod", host_port="MF1:1234", code_page="037")
        registry = InMemoryConnectionRegistry([existing])
        config = JobConfig(host_port="MF1:1234", code_page="037")

        assert normalize_config(config, registry) is True
        assert config.connection_id == existing.connection_id
        assert len(registry.list_connections()) == 1

    def test_remigration_is_tolerated(self):
        registry = InMemoryConnectionRegistry()
        config = JobConfig(host_port="MF1:1234", code_page="037")

        normalize_config(config, registry)
        first_id = config.connection_id
        assert normalize_config(config, registry) is True

        assert config.connection_id == first_id
        assert len(registry.list_connections()) == 1

    def test_empty_host_port_is_noop(self):
        registry = InMemoryConnectionRegistry()
        config = JobConfig(connection_id="keep", host_port="", code_page="037")

        assert normalize_config(config, registry) is False
        assert config.connection_id == "keep"
        assert registry.list_connections() == []

    def test_empty_code_page_is_noop(self):
        registry = InMemoryConnectionRegistry()
        config = JobConfig(host_port="MF1:1234", code_page="")

        assert normalize_config(config, registry) is False
        assert config.connection_id == ""
        assert registry.list_connections() == []


class TestLoadJobs:
    """Tests for load_jobs."""

    def test_reports_migrated_jobs(self):
        store = InMemoryJobStore()
        store.put_raw("legacy", {"scm": {"type": "endevor", "hostPort": "MF1:1234", "codePage": "037"}})
        store.put_raw("current", {"scm": {"type": "endevor", "connectionId": "c1"}})
        store.put_raw("other", {"scm": {"type": "git"}})
        registry = InMemoryConnectionRegistry()

        loaded = {item.job.full_name: item for item in load_jobs(store, registry)}

        assert loaded["legacy"].migrated is True
        assert loaded["legacy"].job.scm.connection_id
        assert loaded["current"].migrated is False
        assert loaded["current"].job.scm.connection_id == "c1"
        assert loaded["other"].migrated is False
        assert loaded["other"].job.scm is None

    def test_loading_does_not_save(self):
        store = InMemoryJobStore()
        store.put_raw("legacy", {"scm": {"type": "endevor", "hostPort": "MF1:1234", "codePage": "037"}})

        load_jobs(store, InMemoryConnectionRegistry())

        assert store.jobs["legacy"]["scm"]["hostPort"] == "MF1:1234"

    def test_job_without_endevor_config(self):
        assert load_jobs(InMemoryJobStore([Job(full_name="plain")]), InMemoryConnectionRegistry())[0].migrated is False
