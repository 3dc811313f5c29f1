"""Tests for the local native-image executor."""

import subprocess
from unittest.mock import Mock

import pytest

from graalvm_native.core.executor import NativeImageExecutor
from graalvm_native.models.platform import Platform
from graalvm_native.services.exceptions import BuildError, BuildTimeoutError, CompilerError


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def make_tool(root, *parts):
    path = root.joinpath(*parts)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    return path


class TestNativeImageExecutor:
    """Test cases for NativeImageExecutor."""

    def test_bin_dir_per_platform(self, tmp_path):
        assert NativeImageExecutor(Platform.LINUX_X64).bin_dir(tmp_path) == tmp_path / "bin"
        assert NativeImageExecutor(Platform.MACOS_AARCH64).bin_dir(tmp_path) == (
            tmp_path / "Contents" / "Home" / "bin"
        )
        assert NativeImageExecutor(Platform.WINDOWS_X64).native_image_path(tmp_path) == (
            tmp_path / "bin" / "native-image.cmd"
        )
        assert NativeImageExecutor(Platform.WINDOWS_X64).gu_path(tmp_path).name == "gu.cmd"

    def test_install_runs_gu_when_native_image_missing(self, tmp_path):
        gu = make_tool(tmp_path, "bin", "gu")
        runner = Mock(return_value=completed())

        installed = NativeImageExecutor(Platform.LINUX_X64, runner).install_native_image(tmp_path)

        assert installed is True
        runner.assert_called_once_with([str(gu), "install", "native-image"], cwd=None, timeout=None)

    def test_install_skipped_when_native_image_present(self, tmp_path):
        make_tool(tmp_path, "bin", "gu")
        make_tool(tmp_path, "bin", "native-image")
        runner = Mock()

        assert NativeImageExecutor(Platform.LINUX_X64, runner).install_native_image(tmp_path) is False
        runner.assert_not_called()

    def test_install_skipped_without_gu(self, tmp_path):
        runner = Mock()

        assert NativeImageExecutor(Platform.LINUX_X64, runner).install_native_image(tmp_path) is False
        runner.assert_not_called()

    def test_compile(self, tmp_path):
        native_image = make_tool(tmp_path, "Contents", "Home", "bin", "native-image")
        runner = Mock(return_value=completed(stdout="Finished generating 'hello'"))
        work_dir = tmp_path / "build" / "graalvm"

        NativeImageExecutor(Platform.MACOS_X64, runner).compile(
            tmp_path, ["-cp", "/classes", "com.example.Main"], cwd=work_dir, timeout=300
        )

        runner.assert_called_once_with(
            [str(native_image), "-cp", "/classes", "com.example.Main"], cwd=work_dir, timeout=300
        )
        assert work_dir.is_dir()

    def test_compile_failure_carries_output(self, tmp_path):
        runner = Mock(return_value=completed(returncode=1, stdout="out", stderr="Error: class not found"))

        with pytest.raises(CompilerError, match="class not found") as exc_info:
            NativeImageExecutor(Platform.LINUX_X64, runner).compile(tmp_path, [], cwd=tmp_path)

        assert exc_info.value.returncode == 1
        assert "out" in exc_info.value.output

    def test_compile_timeout(self, tmp_path):
        runner = Mock(side_effect=subprocess.TimeoutExpired(cmd="native-image", timeout=10))

        with pytest.raises(BuildTimeoutError, match="timed out"):
            NativeImageExecutor(Platform.LINUX_X64, runner).compile(tmp_path, [], cwd=tmp_path, timeout=10)

    def test_compile_cannot_start(self, tmp_path):
        runner = Mock(side_effect=FileNotFoundError("native-image"))

        with pytest.raises(BuildError, match="Failed to start native-image"):
            NativeImageExecutor(Platform.LINUX_X64, runner).compile(tmp_path, [], cwd=tmp_path)
