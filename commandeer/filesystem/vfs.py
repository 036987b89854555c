"""
Virtual File System (VFS) Module

The operations on the in-memory tree:
- Query: lookup, list, recursive path enumeration
- Mutation: create, remove, rename (move), copy (deep clone), chmod

Mutations validate everything before touching the tree, so a failed call
leaves no trace. Expected failures are returned as None/False and the
reason is kept in ``last_error``.

Author: Commandeer Developers
Version: 1.0.0
"""

import threading
from typing import Optional, Any, Callable, Iterable, Iterator, List, Tuple, TypeVar, Union

from .layout import LayoutEntry, SAMPLE_LAYOUT
from .node import Node, NodeKind, default_permissions
from .path_resolver import PathResolver
from .tree import FileTree
from commandeer.core.config_loader import Config, get_config
from commandeer.exceptions import (
    FileSystemException,
    NotFoundError,
    AlreadyExistsError,
    InvalidOperationError,
    NotDirectoryError,
)
from commandeer.logger import get_logger


T = TypeVar('T')


class PathWalk:
    """
    Lazy, restartable depth-first walk of canonical paths.

    Each call to ``iter()`` walks the live tree again; nothing is cached.
    Directories are yielded before their contents, children in insertion
    order. A file yields only itself; a missing path yields nothing.
    """

    def __init__(self, tree: FileTree, path: str):
        self._tree = tree
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def __iter__(self) -> Iterator[str]:
        start = self._tree.lookup(self._path)
        if start is None:
            return

        # explicit stack so deep trees don't hit the recursion limit
        stack: List[Tuple[str, Node]] = [(self._path, start)]
        while stack:
            path, node = stack.pop()
            yield path
            if node.is_directory:
                prefix = path.rstrip('/')
                for child in reversed(node.list_children()):
                    stack.append((f"{prefix}/{child.name}", child))

    def __repr__(self) -> str:
        return f"PathWalk({self._path!r})"


class VirtualFileSystem:
    """
    In-memory hierarchical filesystem.

    Every public operation takes the single filesystem lock for its whole
    duration, so no other thread can observe a half-finished mutation.

    Example:
        >>> vfs = VirtualFileSystem()
        >>> vfs.create('/a', NodeKind.DIRECTORY)
        >>> vfs.create('b.txt', NodeKind.FILE, cwd='/a')
        >>> [n.name for n in vfs.list('/a')]
        ['b.txt']
    """

    def __init__(
        self,
        protected_paths: Optional[Iterable[str]] = None,
        tree: Optional[FileTree] = None
    ):
        self._tree = tree or FileTree()
        self._lock = threading.RLock()
        self._logger = get_logger('filesystem')
        self._protected = frozenset(
            PathResolver.resolve(p) for p in (protected_paths or ())
        )
        self.last_error: Optional[FileSystemException] = None

    @classmethod
    def with_sample_layout(
        cls,
        protected_paths: Optional[Iterable[str]] = ('/home',)
    ) -> 'VirtualFileSystem':
        """Create a filesystem pre-populated with the sample tree."""
        vfs = cls(protected_paths=protected_paths)
        vfs.seed(SAMPLE_LAYOUT)
        return vfs

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'VirtualFileSystem':
        """Create a filesystem from the ``filesystem`` config section."""
        fs_config = (config or get_config()).filesystem
        vfs = cls(protected_paths=fs_config.protected_paths)
        if fs_config.seed_sample:
            vfs.seed(SAMPLE_LAYOUT)
        return vfs

    @property
    def tree(self) -> FileTree:
        return self._tree

    @property
    def root(self) -> Node:
        return self._tree.root

    @property
    def protected_paths(self) -> frozenset:
        return self._protected

    # Internal helpers

    def _attempt(
        self,
        operation: str,
        action: Callable[[], T],
        failure: Any,
        context: dict[str, Any]
    ) -> Any:
        """Run ``action`` under the lock, turning expected failures into ``failure``."""
        with self._lock:
            try:
                result = action()
            except FileSystemException as e:
                self.last_error = e
                self._logger.debug(
                    f"{operation} failed: {e.message}",
                    context={'operation': operation, **context}
                )
                return failure
            self.last_error = None
            return result

    def _require(self, path: str) -> Node:
        node = self._tree.lookup(path)
        if node is None:
            raise NotFoundError(path)
        return node

    def _parent_directory(self, path: str, operation: str) -> Tuple[Node, str]:
        """Find the directory that will hold ``path``, and the entry name."""
        parent_path, name = PathResolver.split(path)
        if not name:
            raise InvalidOperationError(path, operation=operation, reason="root directory")

        parent = self._tree.lookup(parent_path)
        if parent is None:
            raise NotFoundError(parent_path)
        if not parent.is_directory:
            raise NotDirectoryError(parent_path)

        return parent, name

    def _is_protected(self, path: str) -> bool:
        """True for the root, a protected path, or any ancestor of one."""
        if path == '/':
            return True
        return any(PathResolver.is_within(p, path) for p in self._protected)

    # Path resolution

    @staticmethod
    def resolve(path: str, cwd: str = '/') -> str:
        """Canonical absolute form of ``path`` relative to ``cwd``."""
        return PathResolver.resolve(path, cwd)

    # Query operations

    def lookup(self, path: str, cwd: str = '/') -> Optional[Node]:
        """
        Get the node at a path.

        Args:
            path: Path to look up
            cwd: Current working directory

        Returns:
            Node or None if not found
        """
        with self._lock:
            return self._tree.lookup(PathResolver.resolve(path, cwd))

    get_node = lookup

    def exists(self, path: str, cwd: str = '/') -> bool:
        """Check if a path exists."""
        return self.lookup(path, cwd) is not None

    def is_directory(self, path: str, cwd: str = '/') -> bool:
        """Check if a path is a directory."""
        node = self.lookup(path, cwd)
        return node is not None and node.is_directory

    def is_file(self, path: str, cwd: str = '/') -> bool:
        """Check if a path is a file."""
        node = self.lookup(path, cwd)
        return node is not None and node.is_file

    def list(self, path: str = '/', cwd: str = '/') -> List[Node]:
        """
        List directory contents.

        Missing paths and files give an empty list; this is a query and
        does not fail.

        Args:
            path: Directory path
            cwd: Current working directory

        Returns:
            Immediate children of the directory
        """
        with self._lock:
            node = self._tree.lookup(PathResolver.resolve(path, cwd))
            if node is None or not node.is_directory:
                return []
            return node.list_children()

    def iter_paths(self, path: str = '/', cwd: str = '/') -> PathWalk:
        """Lazy walk of every path at or beneath ``path``."""
        return PathWalk(self._tree, PathResolver.resolve(path, cwd))

    def enumerate_all_paths(self, path: str = '/', cwd: str = '/') -> List[str]:
        """
        Every canonical path at or beneath ``path``, depth-first.

        Directories are included as well as files. A file gives a
        one-element list; a missing path gives an empty one.
        """
        with self._lock:
            return list(self.iter_paths(path, cwd))

    def get_stats(self) -> dict[str, Any]:
        """Get filesystem statistics."""
        with self._lock:
            files = directories = total_size = 0
            for node in self._tree.iter_nodes():
                if node.is_directory:
                    directories += 1
                else:
                    files += 1
                    total_size += node.size
            return {
                'total_nodes': files + directories,
                'files': files,
                'directories': directories,
                'total_size': total_size,
            }

    # Mutation operations

    def create(
        self,
        path: str,
        kind: Union[str, NodeKind] = NodeKind.FILE,
        cwd: str = '/'
    ) -> Optional[Node]:
        """
        Create a file or directory.

        Args:
            path: Path for the new node
            kind: NodeKind (or its value); an unknown kind fails like any other error
            cwd: Current working directory

        Returns:
            The created node, or None on failure (see ``last_error``)
        """
        resolved = PathResolver.resolve(path, cwd)
        return self._attempt(
            'create',
            lambda: self._create(resolved, kind),
            None,
            {'path': resolved, 'kind': getattr(kind, 'value', kind)}
        )

    def _create(self, path: str, kind: Union[str, NodeKind]) -> Node:
        try:
            kind = NodeKind.parse(kind)
        except ValueError:
            raise InvalidOperationError(
                path, operation='create', reason=f"unknown node kind '{kind}'"
            ) from None

        parent, name = self._parent_directory(path, 'create')

        if parent.has_child(name):
            raise AlreadyExistsError(path)

        node = Node(
            id=self._tree.generate_id(),
            name=name,
            kind=kind,
            permissions=default_permissions(kind),
        )
        parent.add_child(node)

        self._logger.debug(
            f"Created {kind.value}",
            context={'path': path, 'id': node.id, 'mode': oct(node.permissions)}
        )
        return node

    def remove(self, path: str, cwd: str = '/') -> bool:
        """
        Remove a node together with its whole subtree.

        The root, protected paths and ancestors of protected paths are
        refused.

        Returns:
            True on success, False on failure (see ``last_error``)
        """
        resolved = PathResolver.resolve(path, cwd)
        return self._attempt(
            'remove',
            lambda: self._remove(resolved),
            False,
            {'path': resolved}
        )

    def _remove(self, path: str) -> bool:
        self._require(path)

        if path == '/':
            raise InvalidOperationError(path, operation='remove', reason="root directory")
        if self._is_protected(path):
            raise InvalidOperationError(path, operation='remove', reason="protected path")

        parent_path, name = PathResolver.split(path)
        parent = self._require(parent_path)
        parent.remove_child(name)

        self._logger.debug("Removed node", context={'path': path})
        return True

    def rename(self, old_path: str, new_path: str, cwd: str = '/') -> bool:
        """
        Rename or move a node.

        Source and destination parents may differ. The node keeps its id.
        Protected paths and their ancestors cannot be moved.

        Returns:
            True on success, False on failure (see ``last_error``)
        """
        source = PathResolver.resolve(old_path, cwd)
        destination = PathResolver.resolve(new_path, cwd)
        return self._attempt(
            'rename',
            lambda: self._rename(source, destination),
            False,
            {'path': source, 'destination': destination}
        )

    def _rename(self, source: str, destination: str) -> bool:
        if source == '/':
            raise InvalidOperationError(source, operation='rename', reason="root directory")

        node = self._require(source)
        if self._is_protected(source):
            raise InvalidOperationError(source, operation='rename', reason="protected path")

        new_parent, new_name = self._parent_directory(destination, 'rename')

        if new_parent.has_child(new_name):
            raise AlreadyExistsError(destination)
        if node.is_directory and PathResolver.is_within(destination, source):
            raise InvalidOperationError(
                destination,
                operation='rename',
                reason=f"cannot move '{source}' into itself"
            )

        old_parent_path, old_name = PathResolver.split(source)
        old_parent = self._require(old_parent_path)

        old_parent.remove_child(old_name)
        node.name = new_name
        node.touch()
        new_parent.add_child(node)

        self._logger.debug(
            "Renamed node",
            context={'from': source, 'to': destination, 'id': node.id}
        )
        return True

    def copy(self, source_path: str, dest_path: str, cwd: str = '/') -> bool:
        """
        Deep-copy a node to a new path.

        Every copied node gets a fresh id. The whole clone is built before
        it is linked into the destination directory.

        Returns:
            True on success, False on failure (see ``last_error``)
        """
        source = PathResolver.resolve(source_path, cwd)
        destination = PathResolver.resolve(dest_path, cwd)
        return self._attempt(
            'copy',
            lambda: self._copy(source, destination),
            False,
            {'path': source, 'destination': destination}
        )

    def _copy(self, source: str, destination: str) -> bool:
        node = self._require(source)
        parent, name = self._parent_directory(destination, 'copy')

        if parent.has_child(name):
            raise AlreadyExistsError(destination)

        clone = self._clone_subtree(node, name)
        clone.touch()
        parent.add_child(clone)

        self._logger.debug(
            "Copied node",
            context={'from': source, 'to': destination, 'id': clone.id}
        )
        return True

    def _clone_node(self, node: Node, name: str) -> Node:
        return Node(
            id=self._tree.generate_id(),
            name=name,
            kind=node.kind,
            permissions=node.permissions,
            size=node.size,
            modified_at=node.modified_at,
            content=node.content,
        )

    def _clone_subtree(self, source: Node, name: str) -> Node:
        """Clone ``source`` and its descendants top-down; the result is unattached."""
        top = self._clone_node(source, name)
        stack = [(source, top)]

        while stack:
            original, copy = stack.pop()
            for child in original.list_children():
                child_copy = self._clone_node(child, child.name)
                copy.add_child(child_copy)
                if child.is_directory:
                    stack.append((child, child_copy))

        return top

    def chmod(self, path: str, mode: int, cwd: str = '/') -> bool:
        """
        Change permissions.

        Only the low nine bits of ``mode`` are kept.

        Returns:
            True on success, False on failure (see ``last_error``)
        """
        resolved = PathResolver.resolve(path, cwd)
        return self._attempt(
            'chmod',
            lambda: self._chmod(resolved, mode),
            False,
            {'path': resolved, 'mode': oct(mode)}
        )

    def _chmod(self, path: str, mode: int) -> bool:
        node = self._require(path)
        node.chmod(mode)

        self._logger.debug(
            "Changed permissions",
            context={'path': path, 'mode': oct(node.permissions)}
        )
        return True

    # Seeding

    def seed(self, entries: Iterable[LayoutEntry]) -> int:
        """
        Populate the tree from layout entries.

        Raises:
            FileSystemException: If an entry conflicts with the existing tree

        Returns:
            Number of nodes created
        """
        count = 0
        with self._lock:
            for entry in entries:
                path = PathResolver.resolve(entry.path)
                node = self._create(path, entry.kind)
                if node.is_file:
                    node.size = entry.size
                    node.content = entry.content
                count += 1

        self._logger.info("Seeded filesystem", context={'nodes': count})
        return count
