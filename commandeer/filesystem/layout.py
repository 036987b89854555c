"""
Initial Layouts

Fixed trees used to populate a fresh filesystem at startup.
"""

from dataclasses import dataclass
from typing import Optional, List

from .node import NodeKind


@dataclass(frozen=True)
class LayoutEntry:
    """One node to create while seeding. Parents must come first."""
    path: str
    kind: NodeKind
    size: int = 0
    content: Optional[str] = None


SAMPLE_LAYOUT: List[LayoutEntry] = [
    LayoutEntry('/Documents', NodeKind.DIRECTORY),
    LayoutEntry('/Documents/report.docx', NodeKind.FILE, size=12288),
    LayoutEntry('/Documents/notes.txt', NodeKind.FILE, size=1200, content='This is a note.'),
    LayoutEntry('/Pictures', NodeKind.DIRECTORY),
    LayoutEntry('/Pictures/vacation.jpg', NodeKind.FILE, size=204800),
    LayoutEntry('/main.cpp', NodeKind.FILE, size=5120),
    LayoutEntry('/README.md', NodeKind.FILE, size=1024),
    LayoutEntry('/home', NodeKind.DIRECTORY),
]
