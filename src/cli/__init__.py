"""Command-line interface for the Confluence label organizer.

This package provides the `label-organizer` CLI tool: it loads credentials
and configuration, runs the label procedures, and reports results and
failures with exit codes.
"""

from .config import ConfigLoader
from .models import ExitCode
from .errors import (
    CLIError,
    ConfigError,
    ConfigFilesystemError,
)

__all__ = [
    'ConfigLoader',
    'ExitCode',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
]
