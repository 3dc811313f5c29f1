"""Docker service that shells out to the docker CLI."""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from ..core.constants import CONTAINER_OUTPUT_DIR
from .container_service import output_dir, write_dockerfile
from .exceptions import DockerServiceError

logger = logging.getLogger(__name__)

IMAGE_NOT_FOUND_MARKERS = ("no such image", "not found")


class ShellDockerService:
    """Container service backed by the ``docker`` command line."""

    def __init__(self, docker_binary: str = "docker"):
        self.docker_binary = docker_binary

    def _run_docker_command(
        self, args: list[str], timeout: Optional[float] = None
    ) -> subprocess.CompletedProcess:
        """Run a docker command and capture its output.

        Raises:
            DockerServiceError: If the command cannot be started or times out
        """
        cmd = [self.docker_binary] + args
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise DockerServiceError(f"docker {args[0]} timed out after {e.timeout}s") from e
        except OSError as e:
            raise DockerServiceError(f"Failed to start docker {args[0]} process: {e}") from e

    def is_running(self) -> bool:
        """Check the daemon with ``docker info``."""
        try:
            result = self._run_docker_command(["info"])
        except DockerServiceError as e:
            logger.debug(f"docker info failed: {e}")
            return False
        return result.returncode == 0

    def build_image(self, build_dir: Path, image_tag: str, dockerfile_content: str) -> Path:
        """Build an image with ``docker build``.

        Returns:
            Path of the written Dockerfile

        Raises:
            DockerServiceError: If the build fails
        """
        dockerfile_path = write_dockerfile(build_dir, dockerfile_content)
        context_dir = dockerfile_path.parent

        result = self._run_docker_command(
            ["build", "-t", image_tag, "-f", str(dockerfile_path), str(context_dir)]
        )
        if result.returncode != 0:
            raise DockerServiceError(
                f"docker build failed with exit code {result.returncode}: {result.stderr}"
            )

        logger.info(f"Built image {image_tag}")
        return dockerfile_path

    def run_image(self, build_dir: Path, image_tag: str, timeout: Optional[float] = None) -> None:
        """Run the image with ``docker run --rm`` and the output directory mounted.

        Raises:
            DockerServiceError: If the container exits non-zero
        """
        host_output = output_dir(build_dir)
        host_output.mkdir(parents=True, exist_ok=True)

        result = self._run_docker_command(
            [
                "run",
                "--rm",
                "-v",
                f"{host_output.resolve()}:{CONTAINER_OUTPUT_DIR}",
                image_tag,
            ],
            timeout=timeout,
        )
        if result.returncode != 0:
            output = (result.stdout or "") + (result.stderr or "")
            raise DockerServiceError(
                f"docker run failed with exit code {result.returncode}: {output}"
            )

    def remove_image(self, image_tag: str) -> None:
        """Remove an image with ``docker rmi -f``, ignoring a missing one.

        Raises:
            DockerServiceError: If removal fails for another reason
        """
        result = self._run_docker_command(["rmi", "-f", image_tag])
        if result.returncode == 0:
            logger.info(f"Removed image: {image_tag}")
            return

        output = (result.stdout or "") + (result.stderr or "")
        if any(marker in output.lower() for marker in IMAGE_NOT_FOUND_MARKERS):
            logger.debug(f"Image {image_tag} not found, nothing to remove")
            return

        raise DockerServiceError(
            f"docker rmi failed with exit code {result.returncode}: {output}"
        )
