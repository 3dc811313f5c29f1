"""Candidate download URLs for GraalVM distributions."""

from typing import List, Optional

from ..core.constants import GITHUB_RELEASES_URL
from ..models.platform import Platform
from .exceptions import ConfigurationError

# Asset name suffixes used before the unified "graalvm-community" naming.
# linux-aarch64 never had a separate legacy name.
LEGACY_SUFFIXES = {
    Platform.MACOS_X64: "darwin-amd64",
    Platform.LINUX_X64: "linux-amd64",
    Platform.WINDOWS_X64: "windows-amd64",
    Platform.MACOS_AARCH64: "darwin-aarch64",
}


def build_distribution_urls(
    java_version: Optional[str],
    version: Optional[str],
    platform: Optional[Platform],
) -> List[str]:
    """Build the ordered list of candidate URLs for a distribution.

    The current community naming comes first, then the versioned CE naming,
    then a legacy asset name where one exists for the platform. Callers try
    them in order and stop at the first that resolves.

    Args:
        java_version: Java version tag used by CE assets (e.g. "java17")
        version: GraalVM version (e.g. "24.0.1" or "22.3.0")
        platform: Target platform

    Returns:
        List of candidate URLs

    Raises:
        ConfigurationError: If version or platform is missing
    """
    if not version:
        raise ConfigurationError("GraalVM version must be specified")
    if platform is None:
        raise ConfigurationError("Platform must be specified")

    urls = [
        _community_url(version, platform),
        _ce_url(java_version, version, platform, platform.suffix),
    ]

    legacy_suffix = LEGACY_SUFFIXES.get(platform)
    if legacy_suffix:
        urls.append(_ce_url(java_version, version, platform, legacy_suffix))

    return urls


def _community_url(version: str, platform: Platform) -> str:
    return (
        f"{GITHUB_RELEASES_URL}/jdk-{version}/"
        f"graalvm-community-jdk-{version}_{platform.suffix}_bin.{platform.extension}"
    )


def _ce_url(java_version: Optional[str], version: str, platform: Platform, suffix: str) -> str:
    return (
        f"{GITHUB_RELEASES_URL}/vm-{version}/"
        f"graalvm-ce-{java_version}-{suffix}-{version}.{platform.extension}"
    )
