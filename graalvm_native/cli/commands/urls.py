"""Urls command."""

import sys

import click

from ...services.exceptions import NativeBuildError
from ...services.url_builder import build_distribution_urls
from ..helpers import config_option, load_configuration, print_table, project_dir_option


@click.command()
@project_dir_option
@config_option
@click.option('--image-version', help='GraalVM version (e.g. 22.3.0)')
@click.option('--java-version', help='Java version (e.g. java17)')
@click.option('--platform', 'platform_suffix', help='Platform suffix (e.g. linux-x64)')
def urls(project_dir, config_file, image_version, java_version, platform_suffix):
    """List candidate download URLs for a GraalVM distribution"""
    config = load_configuration(
        project_dir,
        config_file,
        image_version=image_version,
        java_version=java_version,
        platform=platform_suffix,
    )

    try:
        platform = config.get_platform()
        candidates = build_distribution_urls(
            config.get_java_version(), config.get_image_version(), platform
        )
    except NativeBuildError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"GraalVM {config.get_image_version()} ({config.get_java_version()}) for {platform.suffix}")
    print_table(["#", "URL"], [[index, url] for index, url in enumerate(candidates, 1)])
