"""
Filesystem Exceptions

Exceptions raised inside the virtual filesystem while validating a
mutation or a lookup.

Author: Commandeer Developers
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all expected filesystem failures.

    Attributes:
        message: Human-readable error description
        path: Path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        context: Additional key/value details
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base


class NotFoundError(FileSystemException):
    """
    The path does not resolve to a node.

    Example:
        >>> raise NotFoundError("/Documents/missing.txt")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"No such file or directory: {path}",
            path=path,
            error_code=4001,
            context=context
        )


class AlreadyExistsError(FileSystemException):
    """
    A node with the destination name already exists in the parent.

    Example:
        >>> raise AlreadyExistsError("/Documents/notes.txt")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File exists: {path}",
            path=path,
            error_code=4002,
            context=context
        )


class InvalidOperationError(FileSystemException):
    """
    The operation is not allowed on this path.

    Raised for removing the root or a protected directory, renaming the
    root, or moving a directory into its own subtree.

    Example:
        >>> raise InvalidOperationError("/", operation="remove", reason="root directory")
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        message = f"Operation not permitted: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message=message,
            path=path,
            error_code=4003,
            context=ctx
        )
        self.operation = operation
        self.reason = reason


class NotDirectoryError(FileSystemException):
    """
    A directory was expected but the path names a file.

    Example:
        >>> raise NotDirectoryError("/main.cpp")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Not a directory: {path}",
            path=path,
            error_code=4004,
            context=context
        )


class TreeCorruptionError(Exception):
    """
    A tree invariant is broken, e.g. a directory without a children map.

    This is a programming error. Operations let it propagate.
    """

    def __init__(self, message: str, node_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.node_id = node_id
