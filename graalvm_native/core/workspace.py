"""Flatten runtime dependencies into a single classes directory."""

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Optional

from ..models.build import Workspace
from ..services.archive import ArchiveExtractor
from ..services.exceptions import BuildError
from ..utils.paths import classpath_separator, format_to_unix
from .constants import DEFAULT_WORKDIR, GRAALVM_JAVA_DIR, GRAALVM_JAVA_MAIN, LIBS_DIR

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIXES = (".jar", ".zip")


class WorkspaceAssembler:
    """Builds the flattened workspace and classpath for one build directory.

    Local builds get native absolute paths joined with the host separator.
    Container builds get POSIX paths joined with ``:``, with the container
    working directory standing in for the flattened directory.
    """

    def __init__(
        self,
        build_dir: Path,
        extractor: Optional[ArchiveExtractor] = None,
        windows: Optional[bool] = None,
    ):
        self.build_dir = Path(build_dir)
        self.extractor = extractor or ArchiveExtractor()
        self.windows = windows

    @property
    def flattened_dir(self) -> Path:
        return self.build_dir / GRAALVM_JAVA_MAIN

    def clear(self) -> None:
        """Delete the previous build's classes so nothing stale survives."""
        stale = self.build_dir / GRAALVM_JAVA_DIR
        if stale.exists():
            logger.debug(f"Removing stale workspace {stale}")
            shutil.rmtree(stale)

    def collect_runtime_classpath(self, runtime_classpath: Iterable[Path]) -> List[Path]:
        """Runtime classpath entries followed by the project jars in the libs directory.

        Files already extracted are never overwritten, so an entry earlier in
        this list wins when two archives contain the same file.
        """
        files: List[Path] = [Path(entry) for entry in runtime_classpath]
        libs_dir = self.build_dir / LIBS_DIR
        if libs_dir.is_dir():
            files.extend(sorted(path for path in libs_dir.iterdir() if path.is_file()))
        return files

    def assemble(
        self,
        runtime_classpath: Iterable[Path],
        extra_classpath: Optional[str] = None,
        for_container: bool = False,
    ) -> Workspace:
        """Rebuild the flattened directory and compute the classpath.

        Args:
            runtime_classpath: Resolved runtime classpath entries (jars or directories)
            extra_classpath: Comma-separated extra classpath entries
            for_container: Render the classpath for a container build

        Returns:
            The assembled workspace

        Raises:
            BuildError: If the workspace cannot be written
        """
        try:
            self.clear()
            self.flattened_dir.mkdir(parents=True, exist_ok=True)
            for entry in self.collect_runtime_classpath(runtime_classpath):
                self._flatten(entry)
        except OSError as e:
            raise BuildError(f"Failed to assemble workspace in {self.flattened_dir}: {e}") from e

        extras = [item.strip() for item in (extra_classpath or "").split(",") if item.strip()]
        return self.build_workspace(extras, for_container)

    def build_workspace(self, extras: List[str], for_container: bool = False) -> Workspace:
        """Compute the classpath for an already flattened directory."""
        if for_container:
            entries = [DEFAULT_WORKDIR]
            entries.extend(format_to_unix(os.path.abspath(extra), self.windows) for extra in extras)
            separator = ":"
        else:
            entries = [os.path.abspath(self.flattened_dir)]
            entries.extend(os.path.abspath(extra) for extra in extras)
            separator = classpath_separator(self.windows)

        return Workspace(
            flattened_dir=self.flattened_dir,
            classpath_entries=entries,
            separator=separator,
        )

    def _flatten(self, entry: Path) -> None:
        if entry.is_dir():
            shutil.copytree(entry, self.flattened_dir, dirs_exist_ok=True)
        elif entry.suffix.lower() in ARCHIVE_SUFFIXES and entry.is_file():
            self.extractor.extract_jar(entry, self.flattened_dir)
        else:
            logger.debug(f"Skipping classpath entry {entry}")
