"""Path helpers for host and container builds."""

import os
from typing import Optional


def is_windows_host() -> bool:
    return os.name == "nt"


def format_to_unix(path: str, windows: Optional[bool] = None) -> str:
    """Render a path in POSIX form.

    On Windows ``C:\\work\\app`` becomes ``/C/work/app``; elsewhere the path
    is returned unchanged.

    Args:
        path: Path to format
        windows: Treat the path as a Windows path (defaults to the host OS)
    """
    if windows is None:
        windows = is_windows_host()
    if not windows:
        return path

    formatted = path.replace("\\", "/").replace(":", "")
    if not formatted.startswith("/"):
        formatted = "/" + formatted
    return formatted


def classpath_separator(windows: Optional[bool] = None) -> str:
    """Return the classpath separator for the host (or the given) OS."""
    if windows is None:
        windows = is_windows_host()
    return ";" if windows else ":"
