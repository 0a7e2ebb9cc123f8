"""Core data models shared across codesnap components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List


class EntryKind(str, Enum):
    """Filesystem node kinds the scanner distinguishes."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Entry:
    """One filesystem node discovered while listing a directory."""

    name: str
    kind: EntryKind
    path: Path
    relative_path: str

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class RenderedFile:
    """Header and body of a single file as it appears in a snapshot."""

    header: str
    body: str
    readable: bool = True

    def lines(self) -> List[str]:
        """Return the framed block: header, blank, content lines, blank.

        Content is split on newlines only so other control characters survive.
        """
        content = self.body.split("\n") if self.body else []
        if content and content[-1] == "":
            content.pop()
        return [self.header, "", *content, ""]


@dataclass
class OutputChunk:
    """A snapshot artifact on disk and the number of lines written to it."""

    index: int
    path: Path
    line_count: int = 0


@dataclass
class SnapshotResult:
    """Outcome of a snapshot run."""

    project_name: str
    root: Path
    chunks: List[OutputChunk] = field(default_factory=list)
    files_rendered: int = 0
    unreadable_files: int = 0

    @property
    def paths(self) -> List[Path]:
        return [chunk.path for chunk in self.chunks]
