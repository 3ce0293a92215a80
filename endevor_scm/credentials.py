# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Credentials providers used to resolve the login of a job."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from .exceptions import ConfigurationError, CredentialsNotFoundError
from .models import Credentials

logger = logging.getLogger(__name__)


def _scopes(scope: str) -> list[str]:
    """Folder scopes of a job, innermost first, ending with the global scope.

    ``"team/app/build"`` yields ``["team/app/build", "team/app", "team", ""]``.
    """
    parts = [p for p in scope.split("/") if p]
    return ["/".join(parts[:i]) for i in range(len(parts), -1, -1)]


class CredentialsProvider(ABC):
    """Abstract base class for credentials providers."""

    @abstractmethod
    def resolve(self, scope: str, credentials_id: str) -> Credentials:
        """Resolve credentials visible from a job.

        Args:
            scope: Full name of the job requesting the credentials
            credentials_id: Identifier of the stored credentials

        Returns:
            Credentials with a plaintext password

        Raises:
            CredentialsNotFoundError: If no scope holds these credentials
        """
        pass


class InMemoryCredentialsProvider(CredentialsProvider):
    """Credentials held in a dictionary keyed by ``(scope, credentials_id)``.

    The empty scope is the global one.
    """

    def __init__(self, credentials: dict[tuple[str, str], Credentials] | None = None):
        self._credentials = dict(credentials or {})

    def add(self, credentials_id: str, credentials: Credentials, scope: str = "") -> None:
        self._credentials[(scope, credentials_id)] = credentials

    def resolve(self, scope: str, credentials_id: str) -> Credentials:
        for candidate in _scopes(scope):
            found = self._credentials.get((candidate, credentials_id))
            if found is not None:
                return found
        raise CredentialsNotFoundError(f"Credentials not found: {credentials_id}")


class LocalFileCredentialsProvider(CredentialsProvider):
    """Credentials stored as files under a base directory.

    Each credentials id is a directory holding a ``username`` and a
    ``password`` file. Folder-scoped credentials live below the folder path:

        <base>/team/app/mf-login/username
        <base>/mf-login/username          (global)
    """

    def __init__(self, base_path: str):
        """Initialize the provider.

        Raises:
            ConfigurationError: If base_path does not exist or is not a directory
        """
        self.base_path = Path(base_path)

        if not self.base_path.is_dir():
            raise ConfigurationError(f"Credentials base path is not a directory: {base_path}")

    def _credentials_dir(self, scope: str, credentials_id: str) -> Path:
        candidate = (self.base_path / scope / credentials_id).resolve()
        try:
            candidate.relative_to(self.base_path.resolve())
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid credentials id (path traversal detected): {credentials_id}"
            ) from e
        return candidate

    def resolve(self, scope: str, credentials_id: str) -> Credentials:
        if not credentials_id:
            raise CredentialsNotFoundError("No credentials id configured")

        for candidate in _scopes(scope):
            directory = self._credentials_dir(candidate, credentials_id)
            username_file = directory / "username"
            if not username_file.is_file():
                continue

            password_file = directory / "password"
            try:
                username = username_file.read_text(encoding="utf-8").strip()
                password = password_file.read_text(encoding="utf-8").strip() if password_file.is_file() else ""
            except OSError as e:
                raise CredentialsNotFoundError(f"Failed to read credentials {credentials_id}: {e}") from e

            logger.debug(f"Resolved credentials {credentials_id} from scope '{candidate or '<global>'}'")
            return Credentials(username=username, password=password)

        raise CredentialsNotFoundError(f"Credentials not found: {credentials_id}")
