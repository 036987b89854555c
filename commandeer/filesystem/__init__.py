"""
Commandeer Virtual File System Module

Provides the in-memory file system:
- Node model (files and directories)
- Path resolution
- Tree store with path lookup
- Create, remove, rename, copy, chmod
- Recursive path enumeration
- Display formatting
"""

from .node import Node, NodeKind, Permission, default_permissions
from .path_resolver import PathResolver, ParsedPath
from .tree import FileTree
from .layout import LayoutEntry, SAMPLE_LAYOUT
from .vfs import VirtualFileSystem, PathWalk
from .formatting import (
    PermissionTriple,
    PermissionSet,
    parse_permissions,
    build_permissions,
    format_permissions,
    format_mode,
    parse_mode,
    format_size,
    format_timestamp,
    sort_nodes,
)

__all__ = [
    # Node
    'Node',
    'NodeKind',
    'Permission',
    'default_permissions',
    # Path Resolver
    'PathResolver',
    'ParsedPath',
    # Tree
    'FileTree',
    'LayoutEntry',
    'SAMPLE_LAYOUT',
    # VFS
    'VirtualFileSystem',
    'PathWalk',
    # Formatting
    'PermissionTriple',
    'PermissionSet',
    'parse_permissions',
    'build_permissions',
    'format_permissions',
    'format_mode',
    'parse_mode',
    'format_size',
    'format_timestamp',
    'sort_nodes',
]
