"""Tests for distribution handling."""

from unittest.mock import Mock, patch

import pytest

from graalvm_native.core.distribution import DistributionManager, find_root_folder
from graalvm_native.models.config import BuildConfiguration
from graalvm_native.models.platform import Platform
from graalvm_native.services.exceptions import BuildError, ConfigurationError


class TestDistributionManager:
    """Test cases for DistributionManager."""

    def test_resolve_download(self, build_dir):
        config = BuildConfiguration(java_version="java17", image_version="22.3.0")

        handle = DistributionManager(build_dir).resolve(config, Platform.LINUX_X64)

        assert len(handle.urls) == 3
        assert handle.archive_path == build_dir / "graalvm" / "graalvm-ce-java17-linux-amd64-22.3.0.tar.gz"
        assert handle.unpack_dir == build_dir / "graalvm" / "sdk"
        assert handle.root_dir is None

    def test_resolve_local_file(self, build_dir, tmp_path):
        config = BuildConfiguration(image_file=str(tmp_path / "graalvm.tar.gz"))

        handle = DistributionManager(build_dir).resolve(config, Platform.LINUX_X64)

        assert handle.urls == []
        assert handle.archive_path == tmp_path / "graalvm.tar.gz"

    def test_ensure_downloads_and_extracts(self, build_dir, tar_gz_factory):
        downloader = Mock()

        def fake_download(urls, destination):
            tar_gz_factory(destination, {"graalvm-ce-java17-22.3.0/bin/native-image": (b"x", 0o755)})
            return destination

        downloader.download.side_effect = fake_download
        manager = DistributionManager(build_dir, downloader=downloader)
        config = BuildConfiguration(java_version="java17", image_version="22.3.0")

        handle = manager.ensure(manager.resolve(config, Platform.LINUX_X64))

        downloader.download.assert_called_once()
        assert handle.root_name == "graalvm-ce-java17-22.3.0"
        assert (handle.root_dir / "bin" / "native-image").exists()

    @patch("graalvm_native.core.distribution.Downloader")
    def test_default_downloader_is_closed(self, mock_downloader_class, build_dir, tar_gz_factory):
        downloader = mock_downloader_class.return_value
        downloader.__enter__.return_value = downloader
        downloader.__exit__.return_value = False
        downloader.download.side_effect = lambda urls, destination: tar_gz_factory(
            destination, {"graalvm/bin/native-image": b"x"}
        )
        manager = DistributionManager(build_dir)

        manager.ensure(manager.resolve(BuildConfiguration(), Platform.LINUX_X64))

        downloader.download.assert_called_once()
        downloader.__exit__.assert_called_once()

    def test_ensure_local_file_skips_download(self, build_dir, tmp_path, tar_gz_factory):
        archive = tar_gz_factory(tmp_path / "graalvm.tar.gz", {"graalvm-jdk/bin/gu": b"gu"})
        downloader = Mock()
        manager = DistributionManager(build_dir, downloader=downloader)

        handle = manager.ensure(
            manager.resolve(BuildConfiguration(image_file=str(archive)), Platform.LINUX_X64)
        )

        downloader.download.assert_not_called()
        assert handle.root_name == "graalvm-jdk"

    def test_ensure_missing_local_file(self, build_dir, tmp_path):
        manager = DistributionManager(build_dir)
        handle = manager.resolve(
            BuildConfiguration(image_file=str(tmp_path / "missing.zip")), Platform.WINDOWS_X64
        )

        with pytest.raises(ConfigurationError, match="Distribution file not found"):
            manager.ensure(handle)


class TestFindRootFolder:
    """Test cases for find_root_folder."""

    def test_first_subdirectory_alphabetically(self, tmp_path):
        (tmp_path / "graalvm-b").mkdir()
        (tmp_path / "graalvm-a").mkdir()
        (tmp_path / "aaa.txt").write_text("file")

        assert find_root_folder(tmp_path) == "graalvm-a"

    def test_no_subdirectory(self, tmp_path):
        with pytest.raises(BuildError, match="No distribution folder"):
            find_root_folder(tmp_path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(BuildError, match="Not a directory"):
            find_root_folder(tmp_path / "missing")
