"""Tests for distribution URL building."""

import csv
from pathlib import Path

import pytest

from graalvm_native.models.platform import Platform
from graalvm_native.services.exceptions import ConfigurationError
from graalvm_native.services.url_builder import build_distribution_urls

FIXTURES = Path(__file__).parent.parent / "fixtures"
BASE = "https://github.com/graalvm/graalvm-ce-builds/releases/download"
KNOWN_URL_COUNT = 240


def load_known_urls():
    with open(FIXTURES / "graalvm_urls.csv", newline="") as handle:
        return [
            (row["platform"], row["version"], row["java_version"], row["url"])
            for row in csv.DictReader(handle)
        ]


class TestBuildDistributionUrls:
    """Test cases for build_distribution_urls."""

    def test_order_for_linux_x64(self):
        urls = build_distribution_urls("java17", "22.3.0", Platform.LINUX_X64)

        assert urls == [
            f"{BASE}/jdk-22.3.0/graalvm-community-jdk-22.3.0_linux-x64_bin.tar.gz",
            f"{BASE}/vm-22.3.0/graalvm-ce-java17-linux-x64-22.3.0.tar.gz",
            f"{BASE}/vm-22.3.0/graalvm-ce-java17-linux-amd64-22.3.0.tar.gz",
        ]

    def test_windows_uses_zip(self):
        urls = build_distribution_urls("java17", "22.3.0", Platform.WINDOWS_X64)

        assert all(url.endswith(".zip") for url in urls)
        assert urls[-1] == f"{BASE}/vm-22.3.0/graalvm-ce-java17-windows-amd64-22.3.0.zip"

    def test_linux_aarch64_has_no_legacy_url(self):
        urls = build_distribution_urls("java17", "22.3.0", Platform.LINUX_AARCH64)

        assert len(urls) == 2
        assert urls[1] == f"{BASE}/vm-22.3.0/graalvm-ce-java17-linux-aarch64-22.3.0.tar.gz"

    @pytest.mark.parametrize("platform", [
        Platform.LINUX_X64, Platform.MACOS_X64, Platform.MACOS_AARCH64, Platform.WINDOWS_X64,
    ])
    def test_legacy_url_present(self, platform):
        assert len(build_distribution_urls("java17", "22.3.0", platform)) == 3

    def test_missing_version(self):
        with pytest.raises(ConfigurationError, match="GraalVM version must be specified"):
            build_distribution_urls("java17", None, Platform.LINUX_X64)

    def test_missing_platform(self):
        with pytest.raises(ConfigurationError, match="Platform must be specified"):
            build_distribution_urls("java17", "22.3.0", None)

    def test_known_release_table_size(self):
        """The table covers every platform across the CE and community releases."""
        rows = load_known_urls()
        assert len(rows) == KNOWN_URL_COUNT
        assert {row[0] for row in rows} == {platform.suffix for platform in Platform}

    @pytest.mark.parametrize("suffix,version,java_version,url", load_known_urls())
    def test_known_release_urls(self, suffix, version, java_version, url):
        """Every published asset URL is among the candidates."""
        urls = build_distribution_urls(java_version, version, Platform.from_suffix(suffix))
        assert url in urls
