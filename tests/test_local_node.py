# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Tests for LocalNode."""

import io
import os
import sys

import pytest

from endevor_scm import LocalNode, ProcessLaunchError


class TestLocalNode:
    """Tests for LocalNode."""

    def test_launch_streams_output_and_returns_exit_code(self, tmp_path):
        sink = io.StringIO()
        script = "import os, sys; print(os.getcwd()); print(os.environ['BUILD_TAG']); sys.exit(3)"

        code = LocalNode().launch(
            [sys.executable, "-c", script], env={"BUILD_TAG": "build-7"}, stdout=sink, cwd=str(tmp_path)
        )

        assert code == 3
        lines = sink.getvalue().splitlines()
        assert os.path.samefile(lines[0], tmp_path)
        assert lines[1] == "build-7"

    def test_stderr_is_merged(self, tmp_path):
        sink = io.StringIO()
        script = "import sys; sys.stderr.write('warning from cli\\n')"

        code = LocalNode().launch([sys.executable, "-c", script], env={}, stdout=sink, cwd=str(tmp_path))

        assert code == 0
        assert "warning from cli" in sink.getvalue()

    def test_missing_script_raises_launch_error(self, tmp_path):
        script = str(tmp_path / "cli" / "SCMDownloaderCLI.sh")

        with pytest.raises(ProcessLaunchError, match="SCMDownloaderCLI.sh") as exc_info:
            LocalNode().launch([script, "-host", '"MF1"'], env={}, stdout=io.StringIO(), cwd=str(tmp_path))

        assert exc_info.value.script == script
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_directory_operations(self, tmp_path):
        node = LocalNode()
        scratch = str(tmp_path / "ws" / "TopazCliWkspc1")

        node.mkdirs(scratch)
        node.mkdirs(scratch)
        (tmp_path / "ws" / "TopazCliWkspc1" / "file.txt").write_text("x")
        assert node.exists(scratch)

        node.delete_recursive(scratch)
        node.delete_recursive(scratch)
        assert not node.exists(scratch)

    def test_separator_matches_platform(self):
        node = LocalNode()
        assert node.file_separator == os.sep
        assert node.is_unix == (os.name != "nt")
