"""CLI helper functions shared by the commands."""

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import click
from tabulate import tabulate

from ..models.config import BuildConfiguration
from ..services.exceptions import NativeBuildError
from ..utils.config_manager import ConfigManager

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for a command run."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def load_configuration(
    project_dir: Path, config_file: Optional[Path] = None, **overrides: Any
) -> BuildConfiguration:
    """Load the project configuration and apply command line overrides.

    Exits with status 1 when the configuration cannot be loaded.
    """
    try:
        config = ConfigManager(project_dir, config_file).load_config()
        return config.merged(**overrides)
    except NativeBuildError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def print_table(headers: List[str], rows: List[List[Any]], tablefmt: str = "simple") -> None:
    """Print a table with project-wide defaults."""
    click.echo(tabulate(rows, headers=headers, tablefmt=tablefmt))


project_dir_option = click.option(
    '--project-dir',
    type=click.Path(file_okay=False, path_type=Path),
    default='.',
    show_default=True,
    help='Project root directory',
)
config_option = click.option(
    '--config',
    'config_file',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Configuration file (defaults to native-image.yaml in the project)',
)
