import io
import tarfile
import zipfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from graalvm_native.models.config import BuildConfiguration
from graalvm_native.models.platform import Platform


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_docker_client():
    """Provides a mocked Docker client."""
    mock_client = MagicMock()
    mock_client.ping.return_value = True
    mock_client.images.build.return_value = (MagicMock(), [{"stream": "Step 1/3"}])
    mock_container = MagicMock()
    mock_container.wait.return_value = {"StatusCode": 0}
    mock_client.containers.create.return_value = mock_container
    return mock_client


@pytest.fixture
def project_dir(tmp_path):
    """Creates a project directory with an empty build directory."""
    project_path = tmp_path / "hello-app"
    (project_path / "build").mkdir(parents=True)
    return project_path


@pytest.fixture
def build_dir(project_dir):
    return project_dir / "build"


@pytest.fixture
def linux_platform():
    return Platform.LINUX_X64


@pytest.fixture
def main_config():
    """Minimal configuration that triggers a build."""
    return BuildConfiguration(main_class_name="com.example.Main")


def write_jar(path: Path, entries: dict) -> Path:
    """Write a jar (zip) containing the given name -> bytes entries."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


def write_tar_gz(path: Path, files: dict, symlinks: dict = None, mode: int = 0o644) -> Path:
    """Write a tar.gz with regular files (name -> (bytes, mode) or bytes) and symlinks."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as tar:
        for name, content in files.items():
            data, file_mode = content if isinstance(content, tuple) else (content, mode)
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = file_mode
            tar.addfile(info, io.BytesIO(data))
        for name, target in (symlinks or {}).items():
            info = tarfile.TarInfo(name)
            info.type = tarfile.SYMTYPE
            info.linkname = target
            tar.addfile(info)
    return path


@pytest.fixture
def jar_factory():
    return write_jar


@pytest.fixture
def tar_gz_factory():
    return write_tar_gz


@pytest.fixture
def isolated_cli_runner(cli_runner):
    """Provides a CLI runner with isolated filesystem."""
    with cli_runner.isolated_filesystem():
        yield cli_runner
