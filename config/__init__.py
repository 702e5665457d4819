"""
Configuration package for platform-specific settings.

Provides the environment-driven configuration interface and the desktop
implementation used by the Qt and console entry points.
"""
from .base import BaseConfiguration, ConfigurationError
from .desktop import DesktopConfiguration

__all__ = [
    'BaseConfiguration',
    'ConfigurationError',
    'DesktopConfiguration'
]
