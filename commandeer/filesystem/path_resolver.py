"""
Path Resolver Module

Handles path resolution and manipulation in the virtual file system.
Every function here is pure and never raises.

Author: Commandeer Developers
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass
class ParsedPath:
    """A parsed path with its components."""
    is_absolute: bool
    components: List[str]

    def __str__(self) -> str:
        if self.is_absolute:
            return '/' + '/'.join(self.components)
        return '/'.join(self.components) if self.components else '.'


class PathResolver:
    """
    Resolves and manipulates filesystem paths.

    Handles:
    - Absolute and relative paths
    - . and .. components (.. is clamped at the root)
    - Canonical form: leading '/', no trailing '/', no empty segments
    """

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path into components.

        Args:
            path: Path string to parse

        Returns:
            ParsedPath with components
        """
        is_absolute = path.startswith('/')

        # Split and filter empty components
        components = [c for c in path.split('/') if c and c != '.']

        return ParsedPath(is_absolute=is_absolute, components=components)

    @staticmethod
    def normalize(path: str) -> str:
        """
        Normalize a path by resolving . and ..

        Relative input stays relative ('.' when nothing is left).

        Args:
            path: Path to normalize

        Returns:
            Normalized path string
        """
        parsed = PathResolver.parse(path)

        result: List[str] = []

        for component in parsed.components:
            if component == '..':
                if result:
                    result.pop()
            else:
                result.append(component)

        if parsed.is_absolute:
            return '/' + '/'.join(result)
        return '/'.join(result) if result else '.'

    @staticmethod
    def resolve(path: str, cwd: str = '/') -> str:
        """
        Resolve a path against a current working directory.

        Absolute paths ignore ``cwd``. A relative ``cwd`` is treated as if
        it started at the root, so the result is always canonical.

        Args:
            path: Path to resolve
            cwd: Current working directory

        Returns:
            Canonical absolute path
        """
        if PathResolver.is_absolute(path):
            return PathResolver.normalize(path)

        base = cwd if PathResolver.is_absolute(cwd) else '/' + cwd
        return PathResolver.normalize(base.rstrip('/') + '/' + path)

    @staticmethod
    def join(*paths: str) -> str:
        """
        Join multiple path components.

        A later absolute component discards everything before it.

        Args:
            *paths: Path components to join

        Returns:
            Joined path string
        """
        if not paths:
            return '.'

        result = paths[0]

        for path in paths[1:]:
            if path.startswith('/'):
                result = path
            else:
                result = result.rstrip('/') + '/' + path

        return PathResolver.normalize(result)

    @staticmethod
    def dirname(path: str) -> str:
        """
        Get the directory name of a path.

        Args:
            path: Path string

        Returns:
            Directory name portion
        """
        normalized = PathResolver.normalize(path)

        if normalized == '/':
            return '/'

        if '/' not in normalized:
            return '.'

        return normalized.rsplit('/', 1)[0] or '/'

    @staticmethod
    def basename(path: str) -> str:
        """
        Get the base name of a path.

        The root has an empty base name.

        Args:
            path: Path string

        Returns:
            Base name portion
        """
        normalized = PathResolver.normalize(path)

        if normalized == '/':
            return ''

        if '/' not in normalized:
            return normalized

        return normalized.rsplit('/', 1)[1]

    @staticmethod
    def split(path: str) -> Tuple[str, str]:
        """
        Split a path into directory and base name.

        Args:
            path: Path string

        Returns:
            Tuple of (dirname, basename)
        """
        return (PathResolver.dirname(path), PathResolver.basename(path))

    @staticmethod
    def components(path: str) -> List[str]:
        """Segments of a canonical path; empty for the root."""
        return [c for c in path.split('/') if c]

    @staticmethod
    def is_absolute(path: str) -> bool:
        """Check if a path is absolute."""
        return path.startswith('/')

    @staticmethod
    def is_within(path: str, scope: str) -> bool:
        """
        Check whether ``path`` is ``scope`` or lies beneath it.

        Both arguments are canonicalized first. '/prefix' does not contain
        '/prefixed'.
        """
        path = PathResolver.resolve(path)
        scope = PathResolver.resolve(scope)

        if scope == '/':
            return True
        return path == scope or path.startswith(scope + '/')
