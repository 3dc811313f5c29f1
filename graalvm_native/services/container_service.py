"""Container service protocol shared by the Docker backends."""

from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from ..core.constants import DOCKERFILE_NAME, GRAALVM_JAVA_MAIN, GRAALVM_OUTPUT_DIR


@runtime_checkable
class ContainerService(Protocol):
    """Minimal container operations needed to build a native image."""

    def is_running(self) -> bool:
        """Return True if the daemon answers; never raises."""
        ...

    def build_image(self, build_dir: Path, image_tag: str, dockerfile_content: str) -> Path:
        """Write the Dockerfile into the build context and build the image."""
        ...

    def run_image(self, build_dir: Path, image_tag: str, timeout: Optional[float] = None) -> None:
        """Run the image to completion with the output directory mounted, then remove it."""
        ...

    def remove_image(self, image_tag: str) -> None:
        """Remove the image; a missing image is not an error."""
        ...


def build_context_dir(build_dir: Path) -> Path:
    """Directory sent to the daemon as the build context."""
    return Path(build_dir) / GRAALVM_JAVA_MAIN


def output_dir(build_dir: Path) -> Path:
    """Host directory bound to the container's output volume."""
    return Path(build_dir) / GRAALVM_OUTPUT_DIR


def write_dockerfile(build_dir: Path, dockerfile_content: str) -> Path:
    """Write Dockerfile content to its fixed location in the build context.

    Returns:
        Path of the written Dockerfile
    """
    context_dir = build_context_dir(build_dir)
    context_dir.mkdir(parents=True, exist_ok=True)
    dockerfile_path = context_dir / DOCKERFILE_NAME
    dockerfile_path.write_text(dockerfile_content, encoding="utf-8")
    return dockerfile_path
