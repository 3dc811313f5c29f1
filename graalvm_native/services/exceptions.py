"""Custom exceptions for the native-image build pipeline."""


class NativeBuildError(Exception):
    """Base exception for all native-image build errors."""

    pass


class ConfigurationError(NativeBuildError):
    """Exception raised when a required setting is missing or invalid."""

    pass


class UnsupportedPlatformError(NativeBuildError):
    """Exception raised when the host OS/architecture is not supported."""

    pass


class DistributionNotFoundError(NativeBuildError):
    """Exception raised when no candidate download URL resolves."""

    def __init__(self, urls):
        self.urls = list(urls)
        super().__init__(f"Failed to download file from urls {self.urls}")


class ArchiveError(NativeBuildError):
    """Exception raised when an archive cannot be extracted."""

    pass


class BuildError(NativeBuildError):
    """Exception raised when a build step fails."""

    pass


class BuildTimeoutError(BuildError):
    """Exception raised when the overall build time budget is exhausted."""

    pass


class CompilerError(BuildError):
    """Exception raised when the native-image compiler exits with an error."""

    def __init__(self, message: str, returncode: int = 1, output: str = ""):
        self.returncode = returncode
        self.output = output
        super().__init__(f"{message}: {output}" if output else message)


class DockerServiceError(NativeBuildError):
    """Exception raised for Docker service operations."""

    pass


class DockerNotRunningError(DockerServiceError):
    """Exception raised when the Docker daemon cannot be reached."""

    pass
