"""Docker service talking to the daemon API through the Docker SDK."""

import logging
import time
from pathlib import Path
from typing import Optional, Sequence

import docker
import docker.errors
from docker import DockerClient

from ..core.constants import (
    CONTAINER_NAME_PREFIX,
    CONTAINER_OUTPUT_DIR,
    DOCKER_CONNECT_TIMEOUT,
    DOCKER_ENDPOINTS,
    DOCKERFILE_NAME,
)
from .container_service import build_context_dir, output_dir, write_dockerfile
from .exceptions import DockerNotRunningError, DockerServiceError

logger = logging.getLogger(__name__)


def resolve_docker_client(
    endpoints: Optional[Sequence[str]] = None,
    timeout: int = DOCKER_CONNECT_TIMEOUT,
) -> DockerClient:
    """Connect to the first Docker endpoint that answers a ping.

    Endpoints are tried strictly in order: the system socket, the
    alternative system socket, the per-user socket and finally plain TCP
    on localhost.

    Args:
        endpoints: Endpoint URLs to try; ``{home}`` is replaced by the user's home
        timeout: Client timeout in seconds

    Returns:
        A connected Docker client

    Raises:
        DockerNotRunningError: If no endpoint answers
    """
    home = str(Path.home())
    for endpoint in endpoints or DOCKER_ENDPOINTS:
        base_url = endpoint.format(home=home)
        try:
            client = docker.DockerClient(base_url=base_url, timeout=timeout)
            client.ping()
        except Exception as e:
            logger.debug(f"Docker endpoint {base_url} not available: {e}")
            continue
        logger.debug(f"Using Docker endpoint {base_url}")
        return client

    raise DockerNotRunningError(
        "Cannot connect to Docker on any known endpoint. "
        "Please start Docker Desktop or the Docker service."
    )


class DockerService:
    """Container service backed by the Docker daemon API."""

    def __init__(self, client: Optional[DockerClient] = None):
        """Initialize Docker service.

        Args:
            client: Connected Docker client (resolved from the known endpoints if omitted)

        Raises:
            DockerNotRunningError: If no client is given and no endpoint answers
        """
        self.client = client if client is not None else resolve_docker_client()

    def is_running(self) -> bool:
        """Check whether the daemon answers a ping."""
        try:
            self.client.ping()
            return True
        except Exception as e:
            logger.debug(f"Docker ping failed: {e}")
            return False

    def build_image(self, build_dir: Path, image_tag: str, dockerfile_content: str) -> Path:
        """Build an image from Dockerfile content.

        Args:
            build_dir: Project build directory
            image_tag: Tag for the image
            dockerfile_content: Dockerfile text

        Returns:
            Path of the written Dockerfile

        Raises:
            DockerServiceError: If the build fails
        """
        dockerfile_path = write_dockerfile(build_dir, dockerfile_content)
        context_dir = build_context_dir(build_dir)

        try:
            _, logs = self.client.images.build(
                path=str(context_dir),
                dockerfile=DOCKERFILE_NAME,
                tag=image_tag,
                rm=True,
            )
            for log in logs:
                if 'stream' in log:
                    logger.debug(log['stream'].rstrip())
        except docker.errors.BuildError as e:
            build_log = "".join(
                entry.get('stream', '') for entry in (e.build_log or []) if isinstance(entry, dict)
            )
            raise DockerServiceError(f"Failed to build image: {e}\n{build_log}") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to build image: {e}") from e

        logger.info(f"Built image {image_tag}")
        return dockerfile_path

    def run_image(self, build_dir: Path, image_tag: str, timeout: Optional[float] = None) -> None:
        """Run a container from the image and wait for it to finish.

        The host output directory is bound to the container's output volume
        so the compiled binary is left on the host. The container is always
        removed afterwards.

        Raises:
            DockerServiceError: If the container cannot run or exits non-zero
        """
        host_output = output_dir(build_dir)
        host_output.mkdir(parents=True, exist_ok=True)

        try:
            container = self.client.containers.create(
                image_tag,
                name=f"{CONTAINER_NAME_PREFIX}-{int(time.time() * 1000)}",
                volumes={
                    str(host_output.resolve()): {'bind': CONTAINER_OUTPUT_DIR, 'mode': 'rw'}
                },
            )
        except docker.errors.ImageNotFound as e:
            raise DockerServiceError(f"Image '{image_tag}' not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to create container: {e}") from e

        try:
            container.start()
            result = container.wait(timeout=timeout)
            status_code = result.get('StatusCode', 0)
            if status_code != 0:
                output = container.logs().decode('utf-8', errors='replace')
                raise DockerServiceError(
                    f"Container exited with status {status_code}: {output}"
                )
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to run container: {e}") from e
        finally:
            try:
                container.remove(force=True)
            except docker.errors.APIError as e:
                logger.warning(f"Could not remove container {container.id}: {e}")

    def remove_image(self, image_tag: str) -> None:
        """Force-remove an image, ignoring a missing one.

        Raises:
            DockerServiceError: If removal fails for another reason
        """
        try:
            self.client.images.remove(image_tag, force=True)
            logger.info(f"Removed image: {image_tag}")
        except docker.errors.ImageNotFound:
            logger.debug(f"Image {image_tag} not found, nothing to remove")
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to remove image: {e}") from e
