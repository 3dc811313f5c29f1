"""Run the GraalVM tools of an unpacked distribution on the host."""

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..models.platform import Platform
from ..services.exceptions import BuildError, BuildTimeoutError, CompilerError
from .constants import GU, NATIVE_IMAGE

logger = logging.getLogger(__name__)

ProcessRunner = Callable[..., subprocess.CompletedProcess]


def run_process(
    cmd: Sequence[str], cwd: Optional[Path] = None, timeout: Optional[float] = None
) -> subprocess.CompletedProcess:
    """Run a command to completion and capture its output."""
    return subprocess.run(
        list(cmd),
        cwd=cwd,
        check=False,
        capture_output=True,
        text=True,
        timeout=timeout,
    )


class NativeImageExecutor:
    """Invokes ``gu`` and ``native-image`` from a distribution root."""

    def __init__(self, platform: Platform, runner: ProcessRunner = run_process):
        self.platform = platform
        self.runner = runner

    def bin_dir(self, root: Path) -> Path:
        """Binary directory of a distribution; macOS bundles nest it under Contents/Home."""
        if self.platform.is_macos:
            return Path(root) / "Contents" / "Home" / "bin"
        return Path(root) / "bin"

    def _tool(self, root: Path, name: str) -> Path:
        if self.platform.is_windows:
            name = f"{name}.cmd"
        return self.bin_dir(root) / name

    def native_image_path(self, root: Path) -> Path:
        return self._tool(root, NATIVE_IMAGE)

    def gu_path(self, root: Path) -> Path:
        return self._tool(root, GU)

    def install_native_image(self, root: Path, timeout: Optional[float] = None) -> bool:
        """Install the native-image component with ``gu`` when it is missing.

        Newer distributions ship native-image and no ``gu``; nothing is done then.

        Returns:
            True if ``gu install`` was run

        Raises:
            CompilerError: If the install fails
        """
        if self.native_image_path(root).exists():
            return False

        gu = self.gu_path(root)
        if not gu.exists():
            logger.debug(f"{gu} not found, skipping component install")
            return False

        logger.info("Installing native-image component")
        self._run([str(gu), "install", NATIVE_IMAGE], cwd=None, timeout=timeout)
        return True

    def compile(
        self,
        root: Path,
        args: List[str],
        cwd: Path,
        timeout: Optional[float] = None,
    ) -> subprocess.CompletedProcess:
        """Run native-image with args in cwd.

        Raises:
            CompilerError: If native-image exits non-zero
            BuildTimeoutError: If it runs past the timeout
        """
        cmd = [str(self.native_image_path(root))] + list(args)
        Path(cwd).mkdir(parents=True, exist_ok=True)
        logger.info(f"Running {' '.join(cmd)}")
        result = self._run(cmd, cwd=cwd, timeout=timeout)
        if result.stdout:
            logger.debug(result.stdout)
        return result

    def _run(
        self, cmd: List[str], cwd: Optional[Path], timeout: Optional[float]
    ) -> subprocess.CompletedProcess:
        tool = Path(cmd[0]).name
        try:
            result = self.runner(cmd, cwd=cwd, timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise BuildTimeoutError(f"{tool} timed out after {e.timeout}s") from e
        except OSError as e:
            raise BuildError(f"Failed to start {tool}: {e}") from e

        if result.returncode != 0:
            output = (result.stdout or "") + (result.stderr or "")
            raise CompilerError(
                f"{tool} failed with exit code {result.returncode}",
                returncode=result.returncode,
                output=output,
            )
        return result
