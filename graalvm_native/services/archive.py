"""Streaming extraction of zip, jar and tar.gz archives."""

import logging
import os
import shutil
import stat
import tarfile
import zipfile
from pathlib import Path
from typing import BinaryIO

from .exceptions import ArchiveError

logger = logging.getLogger(__name__)

BUFFER_SIZE = 1024 * 64
EXECUTABLE_MODE = 0o755


class ArchiveExtractor:
    """Extracts archives without overwriting files that already exist.

    Re-extracting into the same directory is cheap and safe, but a
    partially written file from an earlier run is never repaired.
    """

    def extract(self, archive: Path, output_dir: Path) -> None:
        """Extract a .zip, .jar or .tar.gz archive.

        Args:
            archive: Archive file
            output_dir: Directory to extract into (created if missing)

        Raises:
            ArchiveError: If the archive cannot be read or written out
        """
        name = Path(archive).name.lower()
        if name.endswith(".zip"):
            self.extract_zip(archive, output_dir)
        elif name.endswith(".jar"):
            self.extract_jar(archive, output_dir)
        else:
            self.extract_tar_gz(archive, output_dir)

    def extract_zip(self, archive: Path, output_dir: Path) -> None:
        """Extract a .zip archive."""
        directory = self._prepare_output(output_dir)
        try:
            with zipfile.ZipFile(archive) as zf:
                for info in zf.infolist():
                    if info.is_dir():
                        continue
                    target = self._resolve_target(directory, info.filename)
                    self._check_write_target(directory, target, info.filename)
                    if target.exists():
                        continue
                    with zf.open(info) as source:
                        self._write_file(source, target)
                    mode = (info.external_attr >> 16) & 0o777
                    if mode == EXECUTABLE_MODE:
                        self._make_executable(target)
        except (zipfile.BadZipFile, OSError) as e:
            raise ArchiveError(f"Failed to extract {archive}: {e}") from e

    def extract_jar(self, archive: Path, output_dir: Path) -> None:
        """Extract a .jar archive (used to flatten runtime dependencies)."""
        self.extract_zip(archive, output_dir)

    def extract_tar_gz(self, archive: Path, output_dir: Path) -> None:
        """Extract a .tar.gz archive, recreating symbolic links."""
        directory = self._prepare_output(output_dir)
        try:
            # Stream mode reads members sequentially without seeking
            with tarfile.open(archive, mode="r|gz") as tar:
                for member in tar:
                    if member.isdir():
                        continue
                    target = self._resolve_target(directory, member.name)
                    if member.issym():
                        self._create_symlink(target, member.linkname)
                    elif member.islnk():
                        self._create_hardlink(directory, target, member.linkname)
                    elif member.isfile():
                        self._check_write_target(directory, target, member.name)
                        if target.exists():
                            continue
                        source = tar.extractfile(member)
                        if source is None:
                            continue
                        with source:
                            self._write_file(source, target)
                        if member.mode & 0o777 == EXECUTABLE_MODE:
                            self._make_executable(target)
        except (tarfile.TarError, OSError) as e:
            raise ArchiveError(f"Failed to extract {archive}: {e}") from e

    def _prepare_output(self, output_dir: Path) -> Path:
        directory = Path(output_dir).resolve()
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArchiveError(
                f"Unable to create directory '{directory}', during extraction of archive contents."
            ) from e
        return directory

    def _resolve_target(self, directory: Path, entry_name: str) -> Path:
        target = directory / entry_name
        # normpath rather than resolve: the entry may itself be a symlink
        if not os.path.normpath(str(target)).startswith(str(directory) + os.sep):
            raise ArchiveError(f"Archive entry escapes output directory: {entry_name}")
        return target

    def _check_write_target(self, directory: Path, target: Path, entry_name: str) -> None:
        """Refuse to write a file through a symlink created by an earlier entry."""
        if target.is_symlink():
            raise ArchiveError(f"Archive entry overwrites a symbolic link: {entry_name}")
        parent = target.parent.resolve()
        if parent != directory and directory not in parent.parents:
            raise ArchiveError(f"Archive entry escapes output directory: {entry_name}")

    def _write_file(self, source: BinaryIO, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as dest:
            shutil.copyfileobj(source, dest, BUFFER_SIZE)

    def _create_symlink(self, target: Path, link_name: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            os.symlink(link_name, target)
        except FileExistsError:
            pass
        except NotImplementedError:
            logger.warning(f"Symbolic links are not supported here, skipping {target}")

    def _create_hardlink(self, directory: Path, target: Path, link_name: str) -> None:
        self._check_write_target(directory, target, str(target))
        if target.exists():
            return
        source = self._resolve_target(directory, link_name)
        if not source.exists():
            logger.warning(f"Hard link source {link_name} missing, skipping {target}")
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)

    def _make_executable(self, target: Path) -> None:
        mode = target.stat().st_mode
        target.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
