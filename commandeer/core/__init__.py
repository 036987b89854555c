"""
Commandeer Core Module

Configuration loading shared by the filesystem, shell and search.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    FilesystemConfig,
    LoggingConfig,
    ShellConfig,
    SearchConfig,
    get_config,
)

__all__ = [
    'ConfigLoader',
    'Config',
    'FilesystemConfig',
    'LoggingConfig',
    'ShellConfig',
    'SearchConfig',
    'get_config',
]
