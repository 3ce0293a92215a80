# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Topaz CLI version discovery and compatibility checks."""

import logging
import xml.etree.ElementTree as ET

from .constants import CLI_VERSIONS_FILE_NAME, PROTOCOL_MINIMUM_CLI_VERSION
from .exceptions import CompatibilityError
from .node import ExecutionNode

logger = logging.getLogger(__name__)


def _parse_version(version: str) -> tuple[int, ...]:
    """Parse a dotted version such as ``20.04.01`` into integers.

    Raises:
        ValueError: If a component is not numeric
    """
    parts = version.strip().split(".")
    if not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid version: {version}")
    return tuple(int(p) for p in parts)


def compare_versions(left: str, right: str) -> int:
    """Compare two dotted versions.

    Returns:
        Negative, zero or positive as ``left`` is lower, equal or higher
    """
    a = _parse_version(left)
    b = _parse_version(right)
    width = max(len(a), len(b))
    a += (0,) * (width - len(a))
    b += (0,) * (width - len(b))
    return (a > b) - (a < b)


def get_cli_version(node: ExecutionNode, cli_directory: str, minimum_version: str) -> str:
    """Read the version of the CLI installed on a node.

    The version is the ``version`` attribute of the first element of
    ``versions.xml`` that has one.

    Args:
        node: Node the CLI is installed on
        cli_directory: CLI installation directory on that node
        minimum_version: Version reported in the error if detection fails

    Returns:
        Installed CLI version

    Raises:
        CompatibilityError: If the version cannot be determined
    """
    versions_file = cli_directory.rstrip("/\\") + node.file_separator + CLI_VERSIONS_FILE_NAME
    missing = CompatibilityError(
        f"The Topaz CLI version could not be determined from {versions_file}. "
        f"Install Topaz CLI version {minimum_version} or later.",
        minimum_version=minimum_version,
    )

    if not node.exists(versions_file):
        raise missing

    try:
        root = ET.fromstring(node.read_text(versions_file))
    except (OSError, ValueError, ET.ParseError) as e:
        raise missing from e

    for element in root.iter():
        version = element.get("version")
        if version:
            logger.debug(f"Topaz CLI version {version} found in {versions_file}")
            return version.strip()

    raise missing


def _check_minimum(cli_version: str, minimum_version: str, message: str) -> None:
    try:
        too_old = compare_versions(cli_version, minimum_version) < 0
    except ValueError as e:
        raise CompatibilityError(
            f"Unrecognized Topaz CLI version: {cli_version}",
            cli_version=cli_version,
            minimum_version=minimum_version,
        ) from e

    if too_old:
        raise CompatibilityError(message, cli_version=cli_version, minimum_version=minimum_version)


def check_cli_compatibility(cli_version: str, minimum_version: str) -> None:
    """Fail unless the installed CLI is at least ``minimum_version``.

    Raises:
        CompatibilityError: If the CLI is older or its version is unparseable
    """
    _check_minimum(
        cli_version,
        minimum_version,
        f"The installed Topaz CLI version {cli_version} is not compatible with this feature. "
        f"Install Topaz CLI version {minimum_version} or later.",
    )


def check_protocol_supported(cli_version: str) -> None:
    """Fail unless the installed CLI accepts the ``-protocol`` option.

    Raises:
        CompatibilityError: If the CLI predates protocol support
    """
    _check_minimum(
        cli_version,
        PROTOCOL_MINIMUM_CLI_VERSION,
        f"The installed Topaz CLI version {cli_version} does not support selecting a protocol. "
        f"Install Topaz CLI version {PROTOCOL_MINIMUM_CLI_VERSION} or later, "
        f"or set the connection protocol to None.",
    )
