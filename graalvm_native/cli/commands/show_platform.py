"""Platform command."""

import sys

import click

from ...models.platform import Platform
from ...services.exceptions import UnsupportedPlatformError
from ..helpers import print_table


@click.command(name='platform')
@click.option('--os', 'os_name', help='OS name to resolve instead of the host OS')
@click.option('--arch', help='Architecture to resolve instead of the host architecture')
def show_platform(os_name, arch):
    """Show the platform a distribution would be fetched for"""
    try:
        platform = Platform.detect(os_name, arch)
    except UnsupportedPlatformError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    print_table(
        ["Suffix", "Archive", "OS", "Arch"],
        [[platform.suffix, platform.extension, platform.os_name, platform.arch_name]],
    )
