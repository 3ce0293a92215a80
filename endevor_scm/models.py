# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Data models for host connections, job configuration and downloads."""

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from .constants import ENDEVOR
from .exceptions import ConfigurationError


def _text(value: Any) -> str:
    """Normalize an optional persisted value to a string."""
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class HostConnection:
    """A named connection to a mainframe host, owned by the registry."""

    description: str
    host_port: str
    code_page: str
    timeout: str = ""
    protocol: str = ""
    connection_id: str = field(default_factory=lambda: str(uuid4()))

    @property
    def host(self) -> str:
        """Host part of ``host_port``."""
        host, _, _ = self._split()
        return host

    @property
    def port(self) -> str:
        """Port part of ``host_port``, empty when none was given."""
        _, _, port = self._split()
        return port

    def _split(self) -> tuple[str, str, str]:
        if ":" not in self.host_port:
            return self.host_port, "", ""
        return self.host_port.rpartition(":")

    def matches(self, host_port: str, code_page: str) -> bool:
        """Return True if this connection has exactly these legacy settings."""
        return self.host_port == host_port and self.code_page == code_page

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {
            "connectionId": self.connection_id,
            "description": self.description,
            "hostPort": self.host_port,
            "codePage": self.code_page,
            "timeout": self.timeout,
            "protocol": self.protocol,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HostConnection":
        """Create HostConnection from a persisted mapping.

        Raises:
            ConfigurationError: If the identifier or host is missing
        """
        if not data.get("connectionId") or not data.get("hostPort"):
            raise ConfigurationError(
                f"Host connection requires connectionId and hostPort: {sorted(data)}"
            )
        return cls(
            connection_id=_text(data["connectionId"]),
            description=_text(data.get("description")),
            host_port=_text(data["hostPort"]),
            code_page=_text(data.get("codePage")),
            timeout=_text(data.get("timeout")),
            protocol=_text(data.get("protocol")),
        )


@dataclass
class JobConfig:
    """Endevor SCM configuration of a single job.

    ``host_port`` and ``code_page`` are only populated when an older
    configuration is read. They are never written back by :meth:`to_dict`.
    """

    connection_id: str = ""
    filter_pattern: str = ""
    file_extension: str = ""
    target_folder: str = ""
    credentials_id: str = ""
    host_port: str = ""
    code_page: str = ""

    @property
    def has_legacy_connection(self) -> bool:
        return bool(self.host_port) and bool(self.code_page)

    def to_dict(self) -> dict[str, str]:
        """Convert to the persisted ``scm`` mapping."""
        return {
            "type": ENDEVOR,
            "connectionId": self.connection_id,
            "filterPattern": self.filter_pattern,
            "fileExtension": self.file_extension,
            "targetFolder": self.target_folder,
            "credentialsId": self.credentials_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JobConfig":
        """Create JobConfig from the persisted ``scm`` mapping."""
        return cls(
            connection_id=_text(data.get("connectionId")),
            filter_pattern=_text(data.get("filterPattern")),
            file_extension=_text(data.get("fileExtension")),
            target_folder=_text(data.get("targetFolder")),
            credentials_id=_text(data.get("credentialsId")),
            host_port=_text(data.get("hostPort")),
            code_page=_text(data.get("codePage")),
        )


@dataclass
class Job:
    """A CI job as seen by this plugin."""

    full_name: str
    scm: JobConfig | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.properties)
        if self.scm is not None:
            data["scm"] = self.scm.to_dict()
        return data

    @classmethod
    def from_dict(cls, full_name: str, data: dict[str, Any]) -> "Job":
        """Create a Job from its persisted mapping.

        Only an ``scm`` section of type ``endevor`` becomes a JobConfig;
        any other section is kept in ``properties`` unchanged.
        """
        properties = dict(data)
        scm_data = properties.get("scm")
        scm = None
        if isinstance(scm_data, dict) and scm_data.get("type") == ENDEVOR:
            scm = JobConfig.from_dict(properties.pop("scm"))
        return cls(full_name=full_name, scm=scm, properties=properties)


@dataclass(frozen=True)
class Credentials:
    """Username and plaintext password resolved for a job."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class DownloadRequest:
    """Everything resolved for one CLI invocation."""

    connection: HostConnection
    credentials: Credentials
    target_folder: str
    filter_pattern: str
    file_extension: str
    scratch_dir: str
