"""
File Tree Module

Owns the root directory and every node reachable from it, hands out node
ids, and looks nodes up by canonical path.

Author: Commandeer Developers
Version: 1.0.0
"""

import threading
from typing import Optional, Iterator

from .node import Node, NodeKind, default_permissions
from .path_resolver import PathResolver


class FileTree:
    """
    The tree store.

    Exactly one root exists, named '/', always a directory. Ids come from a
    counter that only grows, so an id is never handed out twice even after
    the node carrying it is removed.
    """

    ROOT_ID = 1

    def __init__(self):
        self._next_id = self.ROOT_ID + 1
        self._id_lock = threading.Lock()
        self._root = Node(
            id=self.ROOT_ID,
            name='/',
            kind=NodeKind.DIRECTORY,
            permissions=default_permissions(NodeKind.DIRECTORY),
        )

    @property
    def root(self) -> Node:
        return self._root

    def generate_id(self) -> int:
        """Generate a new node id."""
        with self._id_lock:
            node_id = self._next_id
            self._next_id += 1
            return node_id

    def lookup(self, path: str) -> Optional[Node]:
        """
        Find the node at a canonical path.

        Stops at the first segment that is missing, or that would have to
        descend through a file.

        Args:
            path: Canonical absolute path

        Returns:
            The node, or None if the path does not resolve
        """
        if path == '/':
            return self._root

        current = self._root
        for component in PathResolver.components(path):
            if not current.is_directory:
                return None
            child = current.get_child(component)
            if child is None:
                return None
            current = child

        return current

    def iter_nodes(self, start: Optional[Node] = None) -> Iterator[Node]:
        """Yield ``start`` (default: root) and all its descendants, depth-first."""
        stack = [start or self._root]
        while stack:
            node = stack.pop()
            yield node
            if node.is_directory:
                stack.extend(reversed(node.list_children()))

    def count_nodes(self) -> int:
        return sum(1 for _ in self.iter_nodes())
