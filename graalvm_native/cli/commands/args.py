"""Args command."""

import click

from ...core.arguments import translate_arguments
from ..helpers import config_option, load_configuration, project_dir_option


@click.command()
@project_dir_option
@config_option
def args(project_dir, config_file):
    """Print the native-image arguments for the configuration, one per line"""
    config = load_configuration(project_dir, config_file)
    for token in translate_arguments(config):
        click.echo(token)
