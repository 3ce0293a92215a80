# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Execution nodes: where the workspace lives and where the CLI runs."""

import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO

from .exceptions import ProcessLaunchError

logger = logging.getLogger(__name__)


class ExecutionNode(ABC):
    """Filesystem and process access on the node running a build.

    Builds may run on nodes with a different operating system than the
    controlling process, so path conventions always come from the node.
    """

    @property
    @abstractmethod
    def is_unix(self) -> bool:
        pass

    @property
    def file_separator(self) -> str:
        return "/" if self.is_unix else "\\"

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def read_text(self, path: str) -> str:
        pass

    @abstractmethod
    def mkdirs(self, path: str) -> None:
        """Create a directory and its parents; no-op if it exists."""
        pass

    @abstractmethod
    def delete_recursive(self, path: str) -> None:
        """Delete a directory tree; no-op if it does not exist."""
        pass

    @abstractmethod
    def launch(self, args: list[str], env: dict[str, str], stdout: TextIO, cwd: str) -> int:
        """Run a process to completion.

        Args:
            args: Command line, program first
            env: Environment variables added to the node's environment
            stdout: Sink receiving the combined output as it is produced
            cwd: Working directory

        Returns:
            Process exit code
        """
        pass


class LocalNode(ExecutionNode):
    """The machine this process runs on."""

    @property
    def is_unix(self) -> bool:
        return os.name != "nt"

    @property
    def file_separator(self) -> str:
        return os.sep

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def mkdirs(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def delete_recursive(self, path: str) -> None:
        if Path(path).exists():
            shutil.rmtree(path)

    def launch(self, args: list[str], env: dict[str, str], stdout: TextIO, cwd: str) -> int:
        process_env = dict(os.environ)
        process_env.update(env)

        logger.debug(f"Launching {args[0]} in {cwd}")
        try:
            process = subprocess.Popen(
                args,
                cwd=cwd,
                env=process_env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise ProcessLaunchError(f"Failed to launch {args[0]}: {e}", script=args[0]) from e

        with process:
            assert process.stdout is not None
            for line in process.stdout:
                stdout.write(line)
                stdout.flush()
            return process.wait()
