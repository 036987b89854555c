"""
Node Module

The node model of the virtual file system. A node is either a file or a
directory; directories own their children through a name -> node map.

Author: Commandeer Developers
Version: 1.0.0
"""

import time
from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Optional, Any, List

from commandeer.exceptions import TreeCorruptionError


class NodeKind(Enum):
    """Kinds of nodes."""
    FILE = 'file'
    DIRECTORY = 'directory'

    @classmethod
    def parse(cls, value: 'str | NodeKind') -> 'NodeKind':
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


class Permission(Flag):
    """Permission bits. Owner bits 6-8, group 3-5, other 0-2."""
    # Owner permissions
    OWNER_READ = 0o400
    OWNER_WRITE = 0o200
    OWNER_EXEC = 0o100

    # Group permissions
    GROUP_READ = 0o040
    GROUP_WRITE = 0o020
    GROUP_EXEC = 0o010

    # Other permissions
    OTHER_READ = 0o004
    OTHER_WRITE = 0o002
    OTHER_EXEC = 0o001

    # Common combinations
    OWNER_RW = OWNER_READ | OWNER_WRITE
    OWNER_RWX = OWNER_READ | OWNER_WRITE | OWNER_EXEC

    # Default permissions
    DEFAULT_FILE = OWNER_RW | GROUP_READ | OTHER_READ
    DEFAULT_DIR = OWNER_RWX | GROUP_READ | GROUP_EXEC | OTHER_READ | OTHER_EXEC


PERMISSION_MASK = 0o777


def default_permissions(kind: NodeKind) -> int:
    """Default mode for a newly created node: 755 for directories, 644 for files."""
    if kind is NodeKind.DIRECTORY:
        return Permission.DEFAULT_DIR.value
    return Permission.DEFAULT_FILE.value


@dataclass(eq=False)
class Node:
    """
    A file or directory in the tree.

    ``children`` is the only structural link: a directory always has a
    map (possibly empty), a file never has one. ``parent_id`` is kept for
    display and debugging and is never used to walk the tree.

    Nodes compare by identity; compare ``id`` to ask whether two
    references name the same node.
    """

    id: int
    name: str
    kind: NodeKind
    permissions: int = 0o644
    size: int = 0
    modified_at: float = field(default_factory=time.time)
    children: Optional[dict[str, 'Node']] = field(default=None, repr=False)
    content: Optional[str] = field(default=None, repr=False)
    parent_id: Optional[int] = None

    def __post_init__(self):
        self.permissions &= PERMISSION_MASK
        if self.kind is NodeKind.DIRECTORY:
            if self.children is None:
                self.children = {}
            if self.content is not None:
                raise ValueError("Directories cannot carry content")
            # directories report a nominal size of 0
            self.size = 0
        elif self.children is not None:
            raise ValueError("Files cannot have children")

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    def touch(self) -> None:
        """Update the modification time."""
        self.modified_at = time.time()

    def chmod(self, mode: int) -> None:
        """Change permission mode, keeping only the lower 9 bits."""
        self.permissions = mode & PERMISSION_MASK
        self.touch()

    # Directory operations

    def _entries(self) -> dict[str, 'Node']:
        if not self.is_directory:
            raise ValueError("Not a directory")
        if self.children is None:
            raise TreeCorruptionError(
                f"Directory '{self.name}' has no children map", node_id=self.id
            )
        return self.children

    def get_child(self, name: str) -> Optional['Node']:
        """Get a child by name; None for files and missing names."""
        if not self.is_directory:
            return None
        return self._entries().get(name)

    def has_child(self, name: str) -> bool:
        return self.get_child(name) is not None

    def add_child(self, child: 'Node') -> None:
        """Insert a child under its own name and point it at this node."""
        entries = self._entries()
        if child.name in entries:
            raise TreeCorruptionError(
                f"Duplicate entry '{child.name}' in '{self.name}'", node_id=self.id
            )
        entries[child.name] = child
        child.parent_id = self.id

    def remove_child(self, name: str) -> Optional['Node']:
        """Detach a child; returns it, or None if absent."""
        return self._entries().pop(name, None)

    def list_children(self) -> List['Node']:
        """Children in insertion order; empty for files."""
        if not self.is_directory:
            return []
        return list(self._entries().values())

    def to_dict(self) -> dict[str, Any]:
        """Convert node to dictionary for display."""
        return {
            'id': self.id,
            'name': self.name,
            'kind': self.kind.value,
            'permissions': f"{self.permissions:03o}",
            'size': self.size,
            'modified': time.strftime('%Y-%m-%d %H:%M', time.localtime(self.modified_at)),
            'parent_id': self.parent_id,
            'children': len(self.children) if self.children is not None else None,
        }
