"""Fetch and unpack GraalVM distributions."""

import dataclasses
import logging
from pathlib import Path
from typing import Optional

from ..models.build import DistributionHandle
from ..models.config import BuildConfiguration
from ..models.platform import Platform
from ..services.archive import ArchiveExtractor
from ..services.downloader import Downloader
from ..services.exceptions import BuildError, ConfigurationError
from ..services.url_builder import build_distribution_urls
from .constants import DISTRIBUTION_DIR, GRAALVM_DIR


class DistributionManager:
    """Resolves, downloads and extracts the distribution for a build directory.

    Archives are cached under ``<build>/graalvm`` and unpacked into
    ``<build>/graalvm/sdk``. Both steps are skipped for files already on disk.
    """

    def __init__(
        self,
        build_dir: Path,
        downloader: Optional[Downloader] = None,
        extractor: Optional[ArchiveExtractor] = None,
    ):
        self.build_dir = Path(build_dir)
        self.downloader = downloader
        self.extractor = extractor or ArchiveExtractor()

    @property
    def cache_dir(self) -> Path:
        return self.build_dir / GRAALVM_DIR

    @property
    def unpack_dir(self) -> Path:
        return self.build_dir / DISTRIBUTION_DIR

    @staticmethod
    def archive_name(config: BuildConfiguration, platform: Platform) -> str:
        return (
            f"graalvm-ce-{config.get_java_version()}-{platform.os_name}-"
            f"{platform.arch_name}-{config.get_image_version()}.{platform.extension}"
        )

    def resolve(self, config: BuildConfiguration, platform: Platform) -> DistributionHandle:
        """Describe where the distribution comes from and where it goes.

        A configured ``image_file`` is used as-is and nothing is downloaded.
        """
        if config.image_file:
            return DistributionHandle(
                urls=[],
                archive_path=Path(config.image_file),
                unpack_dir=self.unpack_dir,
            )

        urls = build_distribution_urls(
            config.get_java_version(), config.get_image_version(), platform
        )
        return DistributionHandle(
            urls=urls,
            archive_path=self.cache_dir / self.archive_name(config, platform),
            unpack_dir=self.unpack_dir,
        )

    def ensure(self, handle: DistributionHandle) -> DistributionHandle:
        """Download (if needed) and extract the distribution.

        Returns:
            The handle with its root folder resolved

        Raises:
            ConfigurationError: If a local distribution file does not exist
            DistributionNotFoundError: If no candidate URL resolves
            BuildError: If the unpacked distribution has no root folder
        """
        if handle.urls:
            if self.downloader is not None:
                self.downloader.download(handle.urls, handle.archive_path)
            else:
                with Downloader() as downloader:
                    downloader.download(handle.urls, handle.archive_path)
        elif not handle.archive_path.exists():
            raise ConfigurationError(f"Distribution file not found: {handle.archive_path}")

        logging.getLogger(__name__).info(
            f"Extracting {handle.archive_path.name} to {handle.unpack_dir}"
        )
        self.extractor.extract(handle.archive_path, handle.unpack_dir)

        return dataclasses.replace(handle, root_name=find_root_folder(handle.unpack_dir))


def find_root_folder(directory: Path) -> str:
    """Return the alphabetically first subdirectory name of directory.

    Distributions unpack into a single folder whose name is not known in
    advance.

    Raises:
        BuildError: If directory is missing or has no subdirectory
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise BuildError(f"Not a directory: {directory}")

    subdirectories = sorted(path.name for path in directory.iterdir() if path.is_dir())
    if not subdirectories:
        raise BuildError(f"No distribution folder found in {directory}")
    return subdirectories[0]
