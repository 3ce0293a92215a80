# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Migration of legacy per-job connection settings into the registry.

Older job configurations carry ``hostPort`` and ``codePage`` inline. These
are replaced by a reference to a shared host connection. The matching
registry entry is reused when it exists and created otherwise.
"""

import logging

from .models import JobConfig
from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)


def normalize_config(config: JobConfig, registry: ConnectionRegistry) -> bool:
    """Point a legacy job configuration at a registry connection.

    The legacy fields are left in place. They are not written back when the
    job is saved, so a configuration that was never saved migrates again on
    its next load and resolves to the same registry entry.

    Args:
        config: Job configuration as read from storage
        registry: Host connection registry

    Returns:
        True if the configuration was migrated and should be saved
    """
    if not config.has_legacy_connection:
        return False

    connection, created = registry.find_or_create(config.host_port, config.code_page)
    if not created:
        # Already present after an earlier migration, a revert, or another job
        logger.debug(f"Reusing host connection {connection.connection_id} for {config.host_port} {config.code_page}")

    config.connection_id = connection.connection_id
    return True
