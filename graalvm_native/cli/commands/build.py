"""Build command."""

import sys
from pathlib import Path

import click
from rich.console import Console

from ...core.builder import NativeImageBuilder
from ...services.docker_service import DockerService
from ...services.exceptions import NativeBuildError
from ...services.shell_docker_service import ShellDockerService
from ..helpers import config_option, load_configuration, project_dir_option, setup_logging


@click.command()
@project_dir_option
@click.option('--build-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Build directory (defaults to <project>/build)')
@config_option
@click.option('--main-class', help='Fully-qualified main class')
@click.option('--docker-image', help='Base image to compile inside a container')
@click.option('--dockerfile', 'docker_file', help='Dockerfile to build instead of a generated one')
@click.option('--output-name', help='Name of the native executable')
@click.option('--image-tag', help='Tag of the container image')
@click.option('--classpath', 'classpath', multiple=True,
              type=click.Path(exists=True, path_type=Path),
              help='Runtime classpath entry (jar or class directory); repeatable')
@click.option('--timeout', type=float, help='Overall build timeout in seconds')
@click.option('--shell-docker', is_flag=True, help='Drive Docker through the docker CLI')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def build(project_dir, build_dir, config_file, main_class, docker_image, docker_file,
          output_name, image_tag, classpath, timeout, shell_docker, verbose):
    """Build a native image for the project"""
    setup_logging(verbose)
    console = Console()

    config = load_configuration(
        project_dir,
        config_file,
        main_class_name=main_class,
        docker_image=docker_image,
        docker_file=docker_file,
        output_file_name=output_name,
        output_image_tag=image_tag,
    )

    builder = NativeImageBuilder(
        config,
        project_dir=project_dir,
        build_dir=build_dir,
        runtime_classpath=classpath,
        container_service_factory=ShellDockerService if shell_docker else DockerService,
    )

    try:
        result = builder.build(timeout=timeout)
    except NativeBuildError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if result.skipped:
        console.print("[yellow]No main class configured, nothing to build.[/yellow]")
        return

    console.print(f"[green]Native image built ({result.strategy.value})[/green]")
    console.print(f"Output directory: {result.output_dir}")
    if result.image_tag:
        console.print(f"Image: {result.image_tag}")
