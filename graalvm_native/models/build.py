"""Build strategy and result models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class BuildStrategy(str, Enum):
    """How the native image gets built."""

    LOCAL = "local"
    CONTAINER_FROM_BASE_IMAGE = "container-from-base-image"
    CONTAINER_FROM_DOCKERFILE = "container-from-dockerfile"


@dataclass(frozen=True)
class DistributionHandle:
    """A fetched (or to be fetched) GraalVM distribution."""

    urls: List[str]
    archive_path: Path
    unpack_dir: Path
    root_name: Optional[str] = None

    @property
    def root_dir(self) -> Optional[Path]:
        if self.root_name is None:
            return None
        return self.unpack_dir / self.root_name


@dataclass(frozen=True)
class Workspace:
    """Flattened classes directory and the classpath derived from it."""

    flattened_dir: Path
    classpath_entries: List[str] = field(default_factory=list)
    separator: str = ":"

    @property
    def classpath(self) -> str:
        return self.separator.join(self.classpath_entries)


@dataclass
class BuildResult:
    """Outcome of one build invocation."""

    strategy: Optional[BuildStrategy]
    output_dir: Path
    skipped: bool = False
    arguments: List[str] = field(default_factory=list)
    dockerfile_path: Optional[Path] = None
    image_tag: Optional[str] = None
