"""Service layer for downloads, archives and Docker operations."""

from .archive import ArchiveExtractor
from .container_service import ContainerService
from .docker_service import DockerService, resolve_docker_client
from .downloader import Downloader
from .shell_docker_service import ShellDockerService
from .exceptions import (
    NativeBuildError,
    ConfigurationError,
    UnsupportedPlatformError,
    DistributionNotFoundError,
    ArchiveError,
    BuildError,
    BuildTimeoutError,
    CompilerError,
    DockerServiceError,
    DockerNotRunningError,
)

__all__ = [
    "ArchiveExtractor",
    "ContainerService",
    "DockerService",
    "Downloader",
    "ShellDockerService",
    "resolve_docker_client",
    "NativeBuildError",
    "ConfigurationError",
    "UnsupportedPlatformError",
    "DistributionNotFoundError",
    "ArchiveError",
    "BuildError",
    "BuildTimeoutError",
    "CompilerError",
    "DockerServiceError",
    "DockerNotRunningError",
]
