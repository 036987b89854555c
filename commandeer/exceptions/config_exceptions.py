"""
Configuration Exceptions

Errors raised while loading or updating the JSON configuration.

Author: Commandeer Developers
Version: 1.0.0
"""

from typing import Optional, Any


class ConfigError(Exception):
    """
    The configuration file cannot be read or parsed.

    Attributes:
        message: Human-readable error description
        source: Path of the configuration file (if any)
        context: Additional key/value details
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.context = context or {}

    def __str__(self) -> str:
        if self.source:
            return f"{self.message} (source={self.source})"
        return self.message


class ConfigValidationError(ConfigError):
    """A configuration key is unknown or has the wrong type."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        source: Optional[str] = None
    ) -> None:
        super().__init__(message, source=source, context={'key': key} if key else None)
        self.key = key
