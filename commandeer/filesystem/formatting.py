"""
Formatting Helpers

Display strings for permissions, sizes and timestamps, plus the listing
order used by ``ls``. Permissions are plain 9-bit integers; conversion to
text happens only here.
"""

import math
import time
from dataclasses import dataclass
from typing import Iterable, List

from .node import Node, PERMISSION_MASK


_SIZE_UNITS = ['B', 'KB', 'MB', 'GB', 'TB']

SORT_KEYS = ('name', 'size', 'modified')


@dataclass
class PermissionTriple:
    """Read/write/execute for one class of user."""
    read: bool = False
    write: bool = False
    execute: bool = False

    @classmethod
    def from_bits(cls, bits: int) -> 'PermissionTriple':
        return cls(read=bool(bits & 4), write=bool(bits & 2), execute=bool(bits & 1))

    def to_bits(self) -> int:
        return (4 if self.read else 0) | (2 if self.write else 0) | (1 if self.execute else 0)

    def __str__(self) -> str:
        return (
            ('r' if self.read else '-')
            + ('w' if self.write else '-')
            + ('x' if self.execute else '-')
        )


@dataclass
class PermissionSet:
    """Owner, group and other triples of a mode."""
    owner: PermissionTriple
    group: PermissionTriple
    other: PermissionTriple

    def __str__(self) -> str:
        return f"{self.owner}{self.group}{self.other}"


def parse_permissions(mode: int) -> PermissionSet:
    """Split a mode into its three triples."""
    mode &= PERMISSION_MASK
    return PermissionSet(
        owner=PermissionTriple.from_bits(mode >> 6),
        group=PermissionTriple.from_bits(mode >> 3),
        other=PermissionTriple.from_bits(mode),
    )


def build_permissions(perms: PermissionSet) -> int:
    """Inverse of ``parse_permissions``."""
    return (perms.owner.to_bits() << 6) | (perms.group.to_bits() << 3) | perms.other.to_bits()


def format_permissions(mode: int) -> str:
    """
    Render the low nine bits of a mode.

    >>> format_permissions(0o755)
    'rwxr-xr-x'
    """
    return str(parse_permissions(mode))


def format_mode(node: Node) -> str:
    """``ls -l`` style mode: 'd' or '-' followed by the permission string."""
    prefix = 'd' if node.is_directory else '-'
    return prefix + format_permissions(node.permissions)


def parse_mode(text: str) -> int:
    """
    Parse an octal mode string such as '755' or '0o600'.

    Raises:
        ValueError: If the text is not a non-negative octal number
    """
    text = text.strip()
    if text.lower().startswith('0o'):
        text = text[2:]
    if not text or any(c not in '01234567' for c in text):
        raise ValueError(f"invalid mode: '{text}'")
    return int(text, 8)


def format_size(size: int) -> str:
    """
    Human-readable byte count, base 1024.

    >>> format_size(0)
    '0 B'
    >>> format_size(1200)
    '1.2 KB'
    """
    if size <= 0:
        return '0 B'

    exponent = min(int(math.log(size, 1024)), len(_SIZE_UNITS) - 1)
    # log() can land just below an exact power
    if exponent + 1 < len(_SIZE_UNITS) and size >= 1024 ** (exponent + 1):
        exponent += 1

    value = round(size / 1024 ** exponent, 1)
    if value == int(value):
        return f"{int(value)} {_SIZE_UNITS[exponent]}"
    return f"{value} {_SIZE_UNITS[exponent]}"


def format_timestamp(epoch: float) -> str:
    """Local time as 'YYYY-MM-DD HH:MM'."""
    return time.strftime('%Y-%m-%d %H:%M', time.localtime(epoch))


def sort_nodes(nodes: Iterable[Node], key: str = 'name', reverse: bool = False) -> List[Node]:
    """
    Order nodes for display.

    Directories always come before files, whatever the direction; within
    each group nodes are ordered by ``key`` ('name', 'size' or 'modified').
    """
    if key not in SORT_KEYS:
        raise ValueError(f"unknown sort key: '{key}'")

    def value(node: Node):
        if key == 'size':
            return node.size
        if key == 'modified':
            return node.modified_at
        return node.name.lower()

    nodes = list(nodes)
    directories = sorted((n for n in nodes if n.is_directory), key=value, reverse=reverse)
    files = sorted((n for n in nodes if not n.is_directory), key=value, reverse=reverse)
    return directories + files
