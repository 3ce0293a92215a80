# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Download of Endevor members through the Topaz CLI."""

import logging
from dataclasses import dataclass, field
from typing import TextIO
from uuid import uuid4

from . import constants
from .arguments import ArgumentListBuilder, convert_filter_pattern, escape_for_script, resolve_path
from .cli_version import check_cli_compatibility, check_protocol_supported, get_cli_version
from .config import PluginConfig
from .credentials import CredentialsProvider
from .exceptions import ProcessExitError
from .models import DownloadRequest, JobConfig
from .node import ExecutionNode
from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)


@dataclass
class BuildContext:
    """The build a download runs for."""

    job_name: str
    node: ExecutionNode
    environment: dict[str, str] = field(default_factory=dict)


def _protocol_requested(protocol: str) -> bool:
    """Blank and ``None`` protocols are left to the CLI default."""
    return bool(protocol.strip()) and protocol.strip().lower() != constants.PROTOCOL_NONE


class EndevorDownloader:
    """Download Endevor members into a build workspace using the Topaz CLI."""

    def __init__(
        self,
        config: JobConfig,
        registry: ConnectionRegistry,
        credentials_provider: CredentialsProvider,
        plugin_config: PluginConfig | None = None,
    ):
        """Initialize the downloader.

        Args:
            config: Endevor configuration of the job being built
            registry: Registry resolving ``config.connection_id``
            credentials_provider: Store resolving ``config.credentials_id``
            plugin_config: Plugin configuration (CLI location)
        """
        self.config = config
        self.registry = registry
        self.credentials_provider = credentials_provider
        self.plugin_config = plugin_config or PluginConfig()

    def _build_request(self, context: BuildContext, workspace: str, sink: TextIO) -> DownloadRequest:
        node = context.node
        separator = node.file_separator

        connection = self.registry.find_by_id(self.config.connection_id)
        credentials = self.credentials_provider.resolve(context.job_name, self.config.credentials_id)

        target_folder = workspace
        if self.config.target_folder:
            target_folder = resolve_path(self.config.target_folder, workspace, separator)
            print(f"Source download folder: {target_folder}", file=sink)

        scratch_dir = workspace.rstrip("/\\") + separator + constants.TOPAZ_CLI_WORKSPACE + str(uuid4())
        print(f"topazCliWorkspace: {scratch_dir}", file=sink)

        return DownloadRequest(
            connection=connection,
            credentials=credentials,
            target_folder=target_folder,
            filter_pattern=convert_filter_pattern(self.config.filter_pattern),
            file_extension=self.config.file_extension,
            scratch_dir=scratch_dir,
        )

    def build_arguments(self, script: str, request: DownloadRequest, cli_version: str) -> ArgumentListBuilder:
        """Assemble the CLI command line for a download request.

        Raises:
            CompatibilityError: If a protocol is set that the CLI does not support
        """
        connection = request.connection

        args = ArgumentListBuilder(script)
        args.add(constants.HOST_PARM, escape_for_script(connection.host))
        args.add(constants.PORT_PARM, escape_for_script(connection.port))
        args.add(constants.USERID_PARM, escape_for_script(request.credentials.username))
        args.add(constants.PW_PARM)
        args.add(escape_for_script(request.credentials.password), mask=True)

        if _protocol_requested(connection.protocol):
            check_protocol_supported(cli_version)
            args.add(constants.PROTOCOL_PARM, connection.protocol)

        args.add(constants.CODE_PAGE_PARM, connection.code_page)
        args.add(constants.TIMEOUT_PARM, escape_for_script(connection.timeout))
        args.add(constants.SCM_TYPE_PARM, constants.ENDEVOR)
        args.add(constants.TARGET_FOLDER_PARM, escape_for_script(request.target_folder))
        args.add(constants.DATA_PARM, request.scratch_dir)
        args.add(constants.FILTER_PARM, escape_for_script(request.filter_pattern))
        args.add(constants.FILE_EXT_PARM, escape_for_script(request.file_extension))
        return args

    def get_source(self, context: BuildContext, workspace: str, sink: TextIO) -> bool:
        """Download the configured members into ``workspace``.

        Args:
            context: Build being run, including the node it runs on
            workspace: Workspace directory on that node
            sink: Build output receiving progress text and CLI output

        Returns:
            True when the CLI succeeded

        Raises:
            CompatibilityError: If the installed CLI is too old
            ConnectionNotFoundError: If the configured connection is unknown
            CredentialsNotFoundError: If the configured credentials are unknown
            ProcessExitError: If the CLI exits with a non-zero code
            ProcessLaunchError: If the CLI script cannot be started
        """
        node = context.node
        cli_directory = self.plugin_config.cli_location(node)

        cli_version = get_cli_version(node, cli_directory, constants.DOWNLOADER_MINIMUM_CLI_VERSION)
        check_cli_compatibility(cli_version, constants.DOWNLOADER_MINIMUM_CLI_VERSION)

        os_file = constants.SCM_DOWNLOADER_CLI_SH if node.is_unix else constants.SCM_DOWNLOADER_CLI_BAT
        cli_script_file = cli_directory.rstrip("/\\") + node.file_separator + os_file
        print(f"cliScriptFile: {cli_script_file}", file=sink)

        request = self._build_request(context, workspace, sink)
        args = self.build_arguments(cli_script_file, request, cli_version)
        logger.debug(f"Topaz CLI command: {args.to_masked_string()}")

        node.mkdirs(workspace)

        exit_code = node.launch(args.to_list(), env=context.environment, stdout=sink, cwd=workspace)
        if exit_code != 0:
            logger.error(f"Endevor download for {context.job_name} failed with exit code {exit_code}")
            raise ProcessExitError(os_file, exit_code)

        print(f"Call {os_file} exited with value = {exit_code}", file=sink)
        node.delete_recursive(request.scratch_dir)
        logger.info(f"Endevor download for {context.job_name} completed into {request.target_folder}")
        return True
