"""Native image build orchestration."""

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..models.build import BuildResult, BuildStrategy, Workspace
from ..models.config import BuildConfiguration
from ..models.platform import Platform
from ..services.archive import ArchiveExtractor
from ..services.container_service import ContainerService, output_dir
from ..services.docker_service import DockerService
from ..services.downloader import Downloader
from ..services.exceptions import (
    BuildError,
    BuildTimeoutError,
    ConfigurationError,
    DockerNotRunningError,
)
from .arguments import container_build_arguments, local_build_arguments
from .constants import GRAALVM_DIR
from .distribution import DistributionManager
from .dockerfile_generator import DockerfileGenerator
from .executor import NativeImageExecutor, ProcessRunner, run_process
from .workspace import WorkspaceAssembler

logger = logging.getLogger(__name__)

ContainerServiceFactory = Callable[[], ContainerService]


class Deadline:
    """Overall time budget for one build."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self.expires_at = None if timeout is None else time.monotonic() + timeout

    def remaining(self) -> Optional[float]:
        if self.expires_at is None:
            return None
        return max(self.expires_at - time.monotonic(), 0.0)

    def check(self, step: str) -> Optional[float]:
        """Return the remaining time, raising once it is used up.

        Raises:
            BuildTimeoutError: If the deadline has passed
        """
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise BuildTimeoutError(f"Build timed out after {self.timeout}s before {step}")
        return remaining


class NativeImageBuilder:
    """Builds a native image for one project with the configured strategy."""

    def __init__(
        self,
        config: BuildConfiguration,
        project_dir: Path,
        build_dir: Optional[Path] = None,
        runtime_classpath: Iterable[Path] = (),
        container_service_factory: Optional[ContainerServiceFactory] = None,
        downloader: Optional[Downloader] = None,
        extractor: Optional[ArchiveExtractor] = None,
        runner: ProcessRunner = run_process,
        platform: Optional[Platform] = None,
    ):
        """Initialize builder.

        Args:
            config: Build configuration
            project_dir: Project root; its name is the default executable name
            build_dir: Build output directory (defaults to ``<project>/build``)
            runtime_classpath: Jars and class directories of the application
            container_service_factory: Creates the container service for
                container strategies (defaults to ``DockerService``)
            downloader: Fetcher for distributions
            extractor: Archive extractor shared by distribution and workspace
            runner: Process execution hook for local builds
            platform: Target platform (defaults to the configured or detected one)
        """
        self.config = config
        self.project_dir = Path(project_dir)
        self.build_dir = Path(build_dir) if build_dir else self.project_dir / "build"
        self.runtime_classpath: List[Path] = [Path(entry) for entry in runtime_classpath]
        self.container_service_factory = container_service_factory or DockerService
        self.extractor = extractor or ArchiveExtractor()
        self.distributions = DistributionManager(self.build_dir, downloader, self.extractor)
        self.assembler = WorkspaceAssembler(self.build_dir, self.extractor)
        self.runner = runner
        self.platform = platform

    @property
    def project_name(self) -> str:
        return self.project_dir.resolve().name

    def build(self, timeout: Optional[float] = None) -> BuildResult:
        """Run the build.

        Args:
            timeout: Overall time budget in seconds, checked between steps
                and passed on to every external process

        Returns:
            The build result; ``skipped`` is set when no main class is configured

        Raises:
            NativeBuildError: If any step fails
        """
        if not self.config.is_configured:
            logger.info("No main class configured, skipping native image build")
            return BuildResult(strategy=None, output_dir=self.build_dir / GRAALVM_DIR, skipped=True)

        strategy = self.config.strategy
        deadline = Deadline(timeout)
        logger.info(f"Building native image ({strategy.value})")

        try:
            if strategy is BuildStrategy.LOCAL:
                return self._build_local(deadline)
            if strategy is BuildStrategy.CONTAINER_FROM_BASE_IMAGE:
                return self._build_from_base_image(deadline)
            return self._build_from_dockerfile(deadline)
        except OSError as e:
            raise BuildError(f"Native image build failed: {e}") from e

    def _build_local(self, deadline: Deadline) -> BuildResult:
        platform = self.platform or self.config.get_platform()
        executor = NativeImageExecutor(platform, self.runner)

        handle = self.distributions.resolve(self.config, platform)
        deadline.check("fetching the distribution")
        handle = self.distributions.ensure(handle)

        deadline.check("assembling the workspace")
        workspace = self._assemble(for_container=False)

        executor.install_native_image(handle.root_dir, timeout=deadline.check("installing native-image"))

        args = local_build_arguments(self.config, workspace.classpath, self.project_name)
        work_dir = self.build_dir / GRAALVM_DIR
        executor.compile(handle.root_dir, args, cwd=work_dir, timeout=deadline.check("compiling"))

        logger.info(f"Native image written to {work_dir}")
        return BuildResult(strategy=BuildStrategy.LOCAL, output_dir=work_dir, arguments=args)

    def _build_from_base_image(self, deadline: Deadline) -> BuildResult:
        service = self._container_service()
        workspace = self._assemble(for_container=True)

        args = container_build_arguments(self.config, workspace.classpath)
        generator = DockerfileGenerator(
            base_image=self.config.docker_image,
            native_image_args=args,
            main_class=self.config.main_class_name,
            workspace_dir=workspace.flattened_dir,
        )
        result = self._run_container(
            service, generator.generate_contents(), deadline, BuildStrategy.CONTAINER_FROM_BASE_IMAGE
        )
        result.arguments = args
        return result

    def _build_from_dockerfile(self, deadline: Deadline) -> BuildResult:
        service = self._container_service()

        dockerfile = Path(self.config.docker_file)
        if not dockerfile.is_absolute():
            dockerfile = self.project_dir / dockerfile
        if not dockerfile.is_file():
            raise ConfigurationError(f"Dockerfile not found: {dockerfile}")
        content = dockerfile.read_text(encoding="utf-8")

        self._assemble(for_container=True)
        return self._run_container(
            service, content, deadline, BuildStrategy.CONTAINER_FROM_DOCKERFILE
        )

    def _container_service(self) -> ContainerService:
        service = self.container_service_factory()
        if not service.is_running():
            raise DockerNotRunningError("Docker is not running")
        return service

    def _assemble(self, for_container: bool) -> Workspace:
        return self.assembler.assemble(
            self.runtime_classpath, self.config.add_classpath, for_container=for_container
        )

    def _run_container(
        self,
        service: ContainerService,
        dockerfile_content: str,
        deadline: Deadline,
        strategy: BuildStrategy,
    ) -> BuildResult:
        image_tag = self.config.get_output_image_tag()

        deadline.check("removing the previous image")
        service.remove_image(image_tag)

        deadline.check("building the image")
        dockerfile_path = service.build_image(self.build_dir, image_tag, dockerfile_content)

        service.run_image(self.build_dir, image_tag, timeout=deadline.check("running the container"))

        host_output = output_dir(self.build_dir)
        logger.info(f"Native image written to {host_output}")
        return BuildResult(
            strategy=strategy,
            output_dir=host_output,
            dockerfile_path=dockerfile_path,
            image_tag=image_tag,
        )
