# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Exceptions for Endevor SCM operations."""


class EndevorScmError(Exception):
    """Base exception for Endevor SCM errors."""
    pass


class ConfigurationError(EndevorScmError):
    """Raised when configuration is invalid or missing required fields."""
    pass


class CompatibilityError(EndevorScmError):
    """Raised when the installed Topaz CLI cannot serve the request."""

    def __init__(self, message: str, cli_version: str | None = None, minimum_version: str | None = None):
        """Initialize CompatibilityError with context.

        Args:
            message: Error message
            cli_version: Installed CLI version, if it could be determined
            minimum_version: Minimum version required by the failed check
        """
        super().__init__(message)
        self.cli_version = cli_version
        self.minimum_version = minimum_version


class ProcessExitError(EndevorScmError):
    """Raised when the CLI process exits with a non-zero code."""

    def __init__(self, script: str, exit_code: int):
        """Initialize ProcessExitError with context.

        Args:
            script: Name of the launcher script that was run
            exit_code: Exit code returned by the process
        """
        super().__init__(f"Call {script} exited with value = {exit_code}")
        self.script = script
        self.exit_code = exit_code


class ProcessLaunchError(EndevorScmError):
    """Raised when the CLI process cannot be started at all."""

    def __init__(self, message: str, script: str | None = None):
        super().__init__(message)
        self.script = script


class PersistenceError(EndevorScmError):
    """Raised when a job cannot be saved."""

    def __init__(self, message: str, job_name: str | None = None):
        super().__init__(message)
        self.job_name = job_name


class ConnectionNotFoundError(EndevorScmError):
    """Raised when a connection id is not present in the registry."""

    def __init__(self, message: str, connection_id: str | None = None):
        super().__init__(message)
        self.connection_id = connection_id


class CredentialsNotFoundError(EndevorScmError):
    """Raised when credentials cannot be found in any scope."""
    pass
