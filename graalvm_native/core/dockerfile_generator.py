"""Dockerfile generation logic."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from ..services.exceptions import ConfigurationError
from .constants import DEFAULT_WORKDIR

logger = logging.getLogger(__name__)

INSTALL_NATIVE_IMAGE = (
    "# Ensure GraalVM native-image component is installed\n"
    'RUN sh -c "if ! command -v native-image >/dev/null 2>&1; then gu install native-image; fi"\n'
)


class DockerfileGenerator:
    """Generates Dockerfiles that compile a native image inside the container."""

    def __init__(
        self,
        base_image: str,
        native_image_args: Optional[Iterable[str]] = None,
        main_class: Optional[str] = None,
        workspace_dir: Optional[Path] = None,
        install_native_image: bool = True,
    ):
        """Initialize generator.

        Args:
            base_image: Image to build from (e.g. "ghcr.io/graalvm/native-image-community:24.0.1")
            native_image_args: Arguments for the native-image invocation
            main_class: Fully-qualified main class appended after the arguments
            workspace_dir: Flattened classes directory; copied in only when it exists
            install_native_image: Emit the step that installs native-image with ``gu``

        Raises:
            ConfigurationError: If no base image is given
        """
        if not base_image:
            raise ConfigurationError("baseImage must be provided")
        self.base_image = base_image
        self.native_image_args: List[str] = list(native_image_args or [])
        self.main_class = main_class
        self.workspace_dir = workspace_dir
        self.install_native_image = install_native_image

    def generate_contents(self) -> str:
        """Generate the Dockerfile text."""
        sections = [f"FROM {self.base_image}\n"]

        if self.install_native_image:
            sections.append(f"\n{INSTALL_NATIVE_IMAGE}")

        sections.append(f"\nWORKDIR {DEFAULT_WORKDIR}\n")

        if self.workspace_dir is not None and Path(self.workspace_dir).exists():
            sections.append("\nCOPY . .\n")

        if self.main_class or self.native_image_args:
            command = ["native-image"] + self.native_image_args
            if self.main_class:
                command.append(self.main_class)
            sections.append(
                "\n# Build native-image with parameters\n"
                f"RUN {' '.join(command)}\n"
            )

        contents = "".join(sections)
        logger.debug(f"Generated Dockerfile:\n{contents}")
        return contents

    def write_to(self, output_path: Path) -> Path:
        """Write the generated Dockerfile to output_path."""
        output_path = Path(output_path)
        output_path.write_text(self.generate_contents(), encoding="utf-8")
        return output_path
