"""Main CLI entry point for the native-image builder."""

import click

from .commands.args import args
from .commands.build import build
from .commands.dockerfile import dockerfile
from .commands.show_platform import show_platform
from .commands.urls import urls


@click.group()
@click.version_option(package_name='graalvm-native-builder')
def cli():
    """Build GraalVM native images locally or inside Docker"""
    pass


# Register commands
cli.add_command(build)
cli.add_command(args)
cli.add_command(urls)
cli.add_command(show_platform)
cli.add_command(dockerfile)


if __name__ == '__main__':
    cli()
