# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Host connection registry shared by all Endevor job configurations."""

import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path

import yaml

from .exceptions import ConfigurationError, ConnectionNotFoundError, PersistenceError
from .models import HostConnection

logger = logging.getLogger(__name__)


class ConnectionRegistry(ABC):
    """Abstract base class for host connection registries."""

    @abstractmethod
    def find_by_host_and_codepage(self, host_port: str, code_page: str) -> HostConnection | None:
        """Find the connection with exactly these settings.

        Args:
            host_port: Host and port as ``host:port``
            code_page: Code page of the connection

        Returns:
            Matching connection, or None
        """
        pass

    @abstractmethod
    def find_by_id(self, connection_id: str) -> HostConnection:
        """Look up a connection by its identifier.

        Raises:
            ConnectionNotFoundError: If no connection has this identifier
        """
        pass

    @abstractmethod
    def add(self, connection: HostConnection) -> None:
        """Add a connection unless one with the same settings already exists."""
        pass

    @abstractmethod
    def find_or_create(self, host_port: str, code_page: str) -> tuple[HostConnection, bool]:
        """Atomically return the matching connection, creating it if needed.

        Returns:
            Tuple of (connection, created)
        """
        pass

    @abstractmethod
    def list_connections(self) -> list[HostConnection]:
        pass


class InMemoryConnectionRegistry(ConnectionRegistry):
    """Thread-safe in-memory registry.

    One lock guards every read and write so that concurrent
    ``find_or_create`` calls for the same settings yield a single entry.
    """

    def __init__(self, connections: list[HostConnection] | None = None):
        self._lock = threading.RLock()
        self._connections: list[HostConnection] = []
        for connection in connections or []:
            self._insert(connection)

    def _insert(self, connection: HostConnection) -> bool:
        if self._find(connection.host_port, connection.code_page) is not None:
            logger.debug(
                f"Connection {connection.host_port} {connection.code_page} already registered, not added"
            )
            return False
        self._connections.append(connection)
        return True

    def _find(self, host_port: str, code_page: str) -> HostConnection | None:
        for connection in self._connections:
            if connection.matches(host_port, code_page):
                return connection
        return None

    def _persist(self) -> None:
        """Hook for subclasses that store the registry."""

    def _persist_or_discard(self, connection: HostConnection) -> None:
        """Persist after an insert; drop the new entry again if that fails."""
        try:
            self._persist()
        except Exception:
            self._connections.remove(connection)
            raise

    def find_by_host_and_codepage(self, host_port: str, code_page: str) -> HostConnection | None:
        with self._lock:
            return self._find(host_port, code_page)

    def find_by_id(self, connection_id: str) -> HostConnection:
        with self._lock:
            for connection in self._connections:
                if connection.connection_id == connection_id:
                    return connection
        raise ConnectionNotFoundError(
            f"Host connection not found: {connection_id}", connection_id=connection_id
        )

    def add(self, connection: HostConnection) -> None:
        with self._lock:
            if self._insert(connection):
                self._persist_or_discard(connection)

    def find_or_create(self, host_port: str, code_page: str) -> tuple[HostConnection, bool]:
        with self._lock:
            connection = self._find(host_port, code_page)
            if connection is not None:
                return connection, False

            connection = HostConnection(
                description=f"{host_port} {code_page}",
                host_port=host_port,
                code_page=code_page,
            )
            self._connections.append(connection)
            self._persist_or_discard(connection)
            logger.info(f"Created host connection '{connection.description}' ({connection.connection_id})")
            return connection, True

    def list_connections(self) -> list[HostConnection]:
        with self._lock:
            return list(self._connections)


class FileConnectionRegistry(InMemoryConnectionRegistry):
    """Registry persisted as a YAML list of connections.

    The whole file is rewritten on every insert. The file is read once,
    on construction; a missing file means an empty registry.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        super().__init__(self._load())
        logger.debug(f"Loaded {len(self._connections)} host connections from {self.path}")

    def _load(self) -> list[HostConnection]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read connection registry {self.path}: {e}") from e

        entries = data.get("connections", []) if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise ConfigurationError(f"Connection registry {self.path} must contain a 'connections' list")

        return [HostConnection.from_dict(entry) for entry in entries]

    def _persist(self) -> None:
        payload = {"connections": [c.to_dict() for c in self._connections]}
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(payload, f, sort_keys=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceError(f"Failed to write connection registry {self.path}: {e}") from e
