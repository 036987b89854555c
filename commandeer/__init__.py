"""
Commandeer - a simulated filesystem terminal

An in-memory hierarchical filesystem with path resolution, mutation
operations (create, remove, rename, copy, chmod) and recursive
enumeration, driven from a terminal-style command interface.
"""

__version__ = "1.0.0"

from .filesystem import VirtualFileSystem, NodeKind, Node, PathResolver
from .search import FileSearch
from .shell import Shell, create_shell

__all__ = [
    'VirtualFileSystem',
    'NodeKind',
    'Node',
    'PathResolver',
    'FileSearch',
    'Shell',
    'create_shell',
]
