"""
Commandeer Exception Hierarchy

Architecture:
    FileSystemException
    ├── NotFoundError
    ├── AlreadyExistsError
    ├── InvalidOperationError
    └── NotDirectoryError
    TreeCorruptionError
    ConfigError
    └── ConfigValidationError
    SearchError

Filesystem exceptions describe expected failures; the filesystem reports
them through return values and ``last_error`` rather than letting them
escape. ``TreeCorruptionError`` marks a broken invariant and is never caught.
"""

from .fs_exceptions import (
    FileSystemException,
    NotFoundError,
    AlreadyExistsError,
    InvalidOperationError,
    NotDirectoryError,
    TreeCorruptionError,
)

from .config_exceptions import (
    ConfigError,
    ConfigValidationError,
)

from .search_exceptions import SearchError

__all__ = [
    # Filesystem exceptions
    "FileSystemException",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidOperationError",
    "NotDirectoryError",
    "TreeCorruptionError",
    # Config exceptions
    "ConfigError",
    "ConfigValidationError",
    # Search exceptions
    "SearchError",
]
