"""Supported target platforms for GraalVM distributions."""

import platform as host_platform
from enum import Enum
from typing import Optional

from ..services.exceptions import UnsupportedPlatformError


class Platform(Enum):
    """Platform a GraalVM distribution is published for.

    Each member carries the suffix used in release asset names and the
    archive extension of the distribution.
    """

    LINUX_X64 = ("linux-x64", "tar.gz")
    LINUX_AARCH64 = ("linux-aarch64", "tar.gz")
    MACOS_X64 = ("macos-x64", "tar.gz")
    MACOS_AARCH64 = ("macos-aarch64", "tar.gz")
    WINDOWS_X64 = ("windows-x64", "zip")

    def __init__(self, suffix: str, extension: str):
        self.suffix = suffix
        self.extension = extension

    @property
    def is_windows(self) -> bool:
        return self is Platform.WINDOWS_X64

    @property
    def is_macos(self) -> bool:
        return self in (Platform.MACOS_X64, Platform.MACOS_AARCH64)

    @property
    def os_name(self) -> str:
        """OS name used in legacy archive file names."""
        if self.is_windows:
            return "windows"
        if self.is_macos:
            return "darwin"
        return "linux"

    @property
    def arch_name(self) -> str:
        """Architecture name used in legacy archive file names."""
        return "aarch64" if self.suffix.endswith("aarch64") else "amd64"

    @classmethod
    def detect(cls, os_name: Optional[str] = None, arch: Optional[str] = None) -> "Platform":
        """Detect the platform from OS and architecture names.

        Args:
            os_name: OS name such as "Linux", "Mac OS X" or "Windows 10"
                (defaults to the host OS)
            arch: Architecture such as "x86_64", "amd64" or "arm64"
                (defaults to the host machine)

        Returns:
            The matching platform

        Raises:
            UnsupportedPlatformError: If the combination is not supported
        """
        if os_name is None:
            os_name = host_platform.system()
        if arch is None:
            arch = host_platform.machine()

        os_lower = os_name.lower()
        arch_lower = arch.lower()

        is_windows = "windows" in os_lower
        # "darwin" is what platform.system() reports on macOS
        is_mac = "mac" in os_lower or "darwin" in os_lower
        is_linux = "linux" in os_lower

        is_x64 = "x86_64" in arch_lower or "amd64" in arch_lower or arch_lower == "x64"
        is_aarch64 = "aarch64" in arch_lower or "arm64" in arch_lower

        if is_linux:
            if is_aarch64:
                return cls.LINUX_AARCH64
            if is_x64:
                return cls.LINUX_X64

        if is_mac:
            if is_aarch64:
                return cls.MACOS_AARCH64
            if is_x64:
                return cls.MACOS_X64

        if is_windows and is_x64:
            return cls.WINDOWS_X64

        raise UnsupportedPlatformError(
            f'Unsupported OS or architecture: os.name="{os_lower}", os.arch="{arch_lower}"'
        )

    @classmethod
    def from_suffix(cls, suffix: str) -> "Platform":
        """Look up a platform by its suffix, ignoring case.

        Raises:
            UnsupportedPlatformError: If no platform has the given suffix
        """
        for member in cls:
            if member.suffix.lower() == suffix.lower():
                return member
        raise UnsupportedPlatformError(f'No Platform with suffix="{suffix}"')
