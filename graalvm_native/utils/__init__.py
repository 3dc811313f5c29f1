"""Utilities for the native-image builder."""

from .config_manager import ConfigManager
from .paths import classpath_separator, format_to_unix, is_windows_host

__all__ = [
    'ConfigManager',
    'classpath_separator',
    'format_to_unix',
    'is_windows_host',
]
