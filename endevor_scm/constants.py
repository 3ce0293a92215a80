# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Constants shared by the downloader and the Topaz CLI helpers."""

# SCM type tag passed to the CLI and stored in persisted job configuration
ENDEVOR = "endevor"

# Launcher scripts shipped with the Topaz Workbench CLI
SCM_DOWNLOADER_CLI_SH = "SCMDownloaderCLI.sh"
SCM_DOWNLOADER_CLI_BAT = "SCMDownloaderCLI.bat"

# File in the CLI installation directory that carries its version
CLI_VERSIONS_FILE_NAME = "versions.xml"

DOWNLOADER_MINIMUM_CLI_VERSION = "19.05.01"
PROTOCOL_MINIMUM_CLI_VERSION = "20.01.01"

# Prefix of the per-invocation scratch directory created in the workspace
TOPAZ_CLI_WORKSPACE = "TopazCliWkspc"

DEFAULT_CLI_LOCATION_UNIX = "/opt/Compuware/TopazCLI"
DEFAULT_CLI_LOCATION_WINDOWS = "C:\\Program Files\\Compuware\\Topaz Workbench CLI"

# CLI parameters
HOST_PARM = "-host"
PORT_PARM = "-port"
USERID_PARM = "-userid"
PW_PARM = "-pw"
PROTOCOL_PARM = "-protocol"
CODE_PAGE_PARM = "-code"
TIMEOUT_PARM = "-timeout"
SCM_TYPE_PARM = "-scm"
TARGET_FOLDER_PARM = "-targetFolder"
DATA_PARM = "-data"
FILTER_PARM = "-filter"
FILE_EXT_PARM = "-fileExtension"

# Protocol value meaning "let the CLI decide"
PROTOCOL_NONE = "none"
