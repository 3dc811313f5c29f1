"""Tests for Docker service."""

from unittest.mock import Mock, MagicMock, patch, call
import pytest
import docker.errors

from graalvm_native.services.container_service import ContainerService
from graalvm_native.services.docker_service import DockerService, resolve_docker_client
from graalvm_native.services.exceptions import DockerNotRunningError, DockerServiceError


class TestResolveDockerClient:
    """Test cases for resolve_docker_client."""

    @patch('docker.DockerClient')
    def test_first_answering_endpoint_wins(self, mock_client_class):
        """Endpoints are tried in order until one answers a ping."""
        failing = Mock()
        failing.ping.side_effect = docker.errors.DockerException("connection refused")
        working = Mock()
        mock_client_class.side_effect = [failing, working]

        client = resolve_docker_client(["unix:///var/run/docker.sock", "unix:///run/docker.sock",
                                        "tcp://localhost:2375"])

        assert client is working
        assert mock_client_class.call_args_list == [
            call(base_url="unix:///var/run/docker.sock", timeout=30),
            call(base_url="unix:///run/docker.sock", timeout=30),
        ]

    @patch('docker.DockerClient')
    def test_default_endpoint_order(self, mock_client_class):
        mock_client_class.side_effect = docker.errors.DockerException("nope")

        with patch('graalvm_native.services.docker_service.Path.home', return_value="/home/dev"):
            with pytest.raises(DockerNotRunningError):
                resolve_docker_client()

        base_urls = [c.kwargs["base_url"] for c in mock_client_class.call_args_list]
        assert base_urls == [
            "unix:///var/run/docker.sock",
            "unix:///run/docker.sock",
            "unix:///home/dev/.docker/run/docker.sock",
            "tcp://localhost:2375",
        ]

    @patch('graalvm_native.services.docker_service.resolve_docker_client')
    def test_service_resolves_client_when_not_given(self, mock_resolve):
        mock_resolve.return_value = Mock()

        service = DockerService()

        assert service.client is mock_resolve.return_value


class TestDockerService:
    """Test cases for DockerService."""

    def test_satisfies_protocol(self, mock_docker_client):
        assert isinstance(DockerService(mock_docker_client), ContainerService)

    def test_is_running(self, mock_docker_client):
        assert DockerService(mock_docker_client).is_running() is True

        mock_docker_client.ping.side_effect = docker.errors.APIError("down")
        assert DockerService(mock_docker_client).is_running() is False

    def test_build_image_writes_dockerfile(self, mock_docker_client, build_dir):
        service = DockerService(mock_docker_client)

        path = service.build_image(build_dir, "app:latest", "FROM scratch\n")

        context = build_dir / "graalvm" / "java" / "main"
        assert path == context / "Dockerfile"
        assert path.read_text() == "FROM scratch\n"
        mock_docker_client.images.build.assert_called_once_with(
            path=str(context),
            dockerfile="Dockerfile",
            tag="app:latest",
            rm=True,
        )

    def test_build_image_failure(self, mock_docker_client, build_dir):
        mock_docker_client.images.build.side_effect = docker.errors.BuildError(
            "Build failed", [{"stream": "RUN native-image failed"}]
        )

        with pytest.raises(DockerServiceError, match="RUN native-image failed"):
            DockerService(mock_docker_client).build_image(build_dir, "app:latest", "FROM scratch\n")

    def test_run_image_binds_output(self, mock_docker_client, build_dir):
        service = DockerService(mock_docker_client)

        service.run_image(build_dir, "app:latest", timeout=60)

        output = build_dir / "graalvm" / "output"
        assert output.is_dir()
        args, kwargs = mock_docker_client.containers.create.call_args
        assert args == ("app:latest",)
        assert kwargs["name"].startswith("copy-file-container-")
        assert kwargs["volumes"] == {str(output.resolve()): {'bind': '/output', 'mode': 'rw'}}
        container = mock_docker_client.containers.create.return_value
        container.start.assert_called_once()
        container.wait.assert_called_once_with(timeout=60)
        container.remove.assert_called_once_with(force=True)

    def test_run_image_non_zero_exit(self, mock_docker_client, build_dir):
        container = mock_docker_client.containers.create.return_value
        container.wait.return_value = {"StatusCode": 1}
        container.logs.return_value = b"Error: Main class not found"

        with pytest.raises(DockerServiceError, match="Main class not found"):
            DockerService(mock_docker_client).run_image(build_dir, "app:latest")

        container.remove.assert_called_once_with(force=True)

    def test_remove_image(self, mock_docker_client):
        DockerService(mock_docker_client).remove_image("app:latest")

        mock_docker_client.images.remove.assert_called_once_with("app:latest", force=True)

    def test_remove_missing_image_is_ignored(self, mock_docker_client):
        mock_docker_client.images.remove.side_effect = docker.errors.ImageNotFound("missing")

        DockerService(mock_docker_client).remove_image("app:latest")

    def test_remove_image_failure(self, mock_docker_client):
        mock_docker_client.images.remove.side_effect = docker.errors.APIError("conflict")

        with pytest.raises(DockerServiceError, match="Failed to remove image"):
            DockerService(mock_docker_client).remove_image("app:latest")
