# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Test fixtures for the endevor_scm adapter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TextIO

import pytest

from endevor_scm import (
    Credentials,
    HostConnection,
    InMemoryConnectionRegistry,
    InMemoryCredentialsProvider,
    JobConfig,
    PluginConfig,
)
from endevor_scm.node import ExecutionNode

VERSIONS_XML = '<?xml version="1.0"?><versions><product name="Topaz Workbench CLI" version="{}"/></versions>'


@dataclass
class Launch:
    args: list[str]
    env: dict[str, str]
    cwd: str


@dataclass
class FakeNode(ExecutionNode):
    """Execution node that records filesystem calls and process launches."""

    unix: bool = True
    exit_code: int = 0
    output: str = "Downloading members...\n"
    files: dict[str, str] = field(default_factory=dict)
    created_dirs: list[str] = field(default_factory=list)
    deleted_dirs: list[str] = field(default_factory=list)
    launches: list[Launch] = field(default_factory=list)

    @property
    def is_unix(self) -> bool:
        return self.unix

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_text(self, path: str) -> str:
        return self.files[path]

    def mkdirs(self, path: str) -> None:
        self.created_dirs.append(path)

    def delete_recursive(self, path: str) -> None:
        self.deleted_dirs.append(path)

    def launch(self, args: list[str], env: dict[str, str], stdout: TextIO, cwd: str) -> int:
        self.launches.append(Launch(args=list(args), env=dict(env), cwd=cwd))
        stdout.write(self.output)
        return self.exit_code

    def install_cli(self, location: str, version: str) -> None:
        self.files[location + self.file_separator + "versions.xml"] = VERSIONS_XML.format(version)


@pytest.fixture
def plugin_config() -> PluginConfig:
    return PluginConfig(cli_location_unix="/opt/topaz", cli_location_windows="C:\\topaz")


@pytest.fixture
def unix_node() -> FakeNode:
    node = FakeNode(unix=True)
    node.install_cli("/opt/topaz", "20.04.01")
    return node


@pytest.fixture
def windows_node() -> FakeNode:
    node = FakeNode(unix=False)
    node.install_cli("C:\\topaz", "20.04.01")
    return node


@pytest.fixture
def connection() -> HostConnection:
    return HostConnection(
        description="Test mainframe",
        host_port="mf1.example.com:16196",
        code_page="1047",
        timeout="30",
        protocol="",
        connection_id="conn-1",
    )


@pytest.fixture
def registry(connection) -> InMemoryConnectionRegistry:
    return InMemoryConnectionRegistry([connection])


@pytest.fixture
def credentials_provider() -> InMemoryCredentialsProvider:
    provider = InMemoryCredentialsProvider()
    provider.add("mf-login", Credentials(username="XDEVREG", password="s3cr3t"))
    return provider


@pytest.fixture
def job_config() -> JobConfig:
    return JobConfig(
        connection_id="conn-1",
        filter_pattern="PROD.*",
        file_extension="cbl",
        credentials_id="mf-login",
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging so caplog keeps seeing package records."""
    yield
    package_logger = logging.getLogger("endevor_scm")
    package_logger.handlers = []
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
