"""Line-budgeted output writer for snapshot artifacts."""

from __future__ import annotations

import re
from pathlib import Path
from types import TracebackType
from typing import List, Optional, Sequence, TextIO, Type

from .config import validate_max_lines
from .logging import get_logger
from .models import OutputChunk

logger = get_logger("chunker")


def single_artifact_name(project_name: str) -> str:
    return f"{project_name}_combined.txt"


def chunk_artifact_name(project_name: str, index: int) -> str:
    return f"{project_name}_combined_{index:03d}.txt"


def is_artifact_name(name: str, project_name: str) -> bool:
    """Return ``True`` if ``name`` is a snapshot artifact written for ``project_name``."""
    pattern = rf"{re.escape(project_name)}_combined(_\d{{3,}})?\.txt"
    return re.fullmatch(pattern, name) is not None


class ChunkWriter:
    """Streams framed blocks into numbered output files.

    Each block passed to :meth:`write_block` lands in a single chunk. When
    appending it would push the open chunk past ``max_lines`` the chunk is
    closed and the next one opened first; a block that is larger than the
    budget on its own still gets written whole. With ``max_lines=None`` a
    single unchunked artifact is produced instead.

    Use as a context manager so the open chunk is closed on every exit path.
    """

    def __init__(
        self,
        output_dir: Path | str,
        project_name: str,
        max_lines: Optional[int] = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.project_name = project_name
        self.max_lines = None if max_lines is None else validate_max_lines(max_lines)
        self.chunks: List[OutputChunk] = []
        self._handle: Optional[TextIO] = None

    @property
    def chunked(self) -> bool:
        return self.max_lines is not None

    @property
    def current(self) -> Optional[OutputChunk]:
        return self.chunks[-1] if self.chunks else None

    def __enter__(self) -> "ChunkWriter":
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._open_next()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def write_block(self, lines: Sequence[str]) -> None:
        """Append ``lines`` as one atomic unit, rotating chunks as needed."""
        if self._handle is None:
            raise RuntimeError("ChunkWriter is not open")
        current = self.chunks[-1]
        if (
            self.max_lines is not None
            and current.line_count > 0
            and current.line_count + len(lines) > self.max_lines
        ):
            self._open_next()
            current = self.chunks[-1]
        if self.max_lines is not None and len(lines) > self.max_lines:
            logger.debug(
                "Block of %d lines exceeds budget of %d in %s",
                len(lines),
                self.max_lines,
                current.path.name,
            )
        self._handle.write("".join(f"{line}\n" for line in lines))
        current.line_count += len(lines)

    def close(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        handle.close()
        current = self.chunks[-1]
        logger.debug("Closed %s (%d lines)", current.path.name, current.line_count)

    def _open_next(self) -> None:
        self.close()
        index = len(self.chunks) + 1
        if self.chunked:
            name = chunk_artifact_name(self.project_name, index)
        else:
            name = single_artifact_name(self.project_name)
        path = self.output_dir / name
        self._handle = path.open("w", encoding="utf-8", newline="\n")
        self.chunks.append(OutputChunk(index=index, path=path))
        logger.debug("Opened %s", path)


__all__ = [
    "ChunkWriter",
    "chunk_artifact_name",
    "is_artifact_name",
    "single_artifact_name",
]
