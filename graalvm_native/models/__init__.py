"""Models for the native-image builder."""

from .build import BuildResult, BuildStrategy, DistributionHandle, Workspace
from .config import BuildConfiguration
from .platform import Platform

__all__ = [
    'BuildConfiguration',
    'BuildResult',
    'BuildStrategy',
    'DistributionHandle',
    'Platform',
    'Workspace',
]
