"""Dockerfile command."""

import sys
from pathlib import Path

import click

from ...core.arguments import container_build_arguments
from ...core.dockerfile_generator import DockerfileGenerator
from ...core.workspace import WorkspaceAssembler
from ...services.exceptions import NativeBuildError
from ..helpers import config_option, load_configuration, project_dir_option


@click.command()
@project_dir_option
@click.option('--build-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Build directory (defaults to <project>/build)')
@config_option
@click.option('--docker-image', help='Base image to compile inside a container')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write the Dockerfile to this path instead of stdout')
def dockerfile(project_dir, build_dir, config_file, docker_image, output):
    """Print the Dockerfile generated for the configuration"""
    config = load_configuration(project_dir, config_file, docker_image=docker_image)

    assembler = WorkspaceAssembler(build_dir or project_dir / "build")
    workspace = assembler.build_workspace(config.get_extra_classpath(), for_container=True)

    try:
        generator = DockerfileGenerator(
            base_image=config.docker_image,
            native_image_args=container_build_arguments(config, workspace.classpath),
            main_class=config.main_class_name,
            workspace_dir=workspace.flattened_dir,
        )
        if output:
            generator.write_to(output)
            click.echo(f"Dockerfile written to {output}")
        else:
            click.echo(generator.generate_contents(), nl=False)
    except NativeBuildError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
