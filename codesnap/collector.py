"""Deterministic enumeration and rendering of snapshot file contents."""

from __future__ import annotations

from pathlib import Path
from typing import Collection, Iterator, List, Optional

from .filters import PathPredicate, list_entries
from .logging import get_logger
from .models import Entry, RenderedFile

logger = get_logger("collector")


def iter_included_files(
    root: Path,
    ignore_set: Collection[str],
    skip: Optional[PathPredicate] = None,
) -> List[Entry]:
    """Return every included file below ``root`` sorted by relative path.

    Excluded directories are pruned before their contents are listed.
    """
    files: List[Entry] = []
    pending: List[Path] = [root]
    while pending:
        directory = pending.pop()
        for entry in list_entries(directory, root, ignore_set, skip):
            if entry.is_dir:
                pending.append(entry.path)
            else:
                files.append(entry)
    files.sort(key=lambda entry: entry.relative_path)
    return files


def read_body(path: Path) -> tuple[str, bool]:
    """Return the text of ``path`` or a placeholder naming the read error.

    Invalid UTF-8 sequences are replaced with U+FFFD rather than failing.
    """
    try:
        return path.read_text(encoding="utf-8", errors="replace"), True
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return f"[Error reading file: {exc}]", False


def render_file(entry: Entry, project_name: str) -> RenderedFile:
    body, readable = read_body(entry.path)
    return RenderedFile(
        header=f"{project_name}/{entry.relative_path}",
        body=body,
        readable=readable,
    )


def collect(
    directory: Path | str,
    ignore_set: Collection[str],
    project_name: str,
    *,
    skip: Optional[PathPredicate] = None,
) -> Iterator[RenderedFile]:
    """Yield a :class:`RenderedFile` for each included file in path order."""
    root = Path(directory)
    for entry in iter_included_files(root, ignore_set, skip):
        logger.debug("Rendering %s", entry.relative_path)
        yield render_file(entry, project_name)


__all__ = ["collect", "iter_included_files", "read_body", "render_file"]
