"""Inclusion rules and filtered directory listings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Collection, List, Optional

from .logging import get_logger
from .models import Entry, EntryKind

MEDIA_EXTENSIONS: tuple[str, ...] = (
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".mp3",
    ".mp4",
    ".mov",
    ".avi",
    ".mpeg",
    ".webm",
    ".webp",
    ".svg",
    ".ico",
    ".pdf",
)

PathPredicate = Callable[[Path], bool]

logger = get_logger("filters")


def is_media_file(name: str) -> bool:
    return name.lower().endswith(MEDIA_EXTENSIONS)


def include(name: str, is_dir: bool, ignore_set: Collection[str]) -> bool:
    """Return ``True`` when an entry named ``name`` belongs in a snapshot.

    Hidden names are always dropped. Markdown and media files are dropped
    by suffix (case-insensitive). Anything whose name exactly matches an
    entry of ``ignore_set`` is dropped regardless of depth or kind.
    """
    if name.startswith("."):
        return False
    if not is_dir:
        lower_name = name.lower()
        if lower_name.endswith(".md"):
            return False
        if is_media_file(lower_name):
            return False
    return name not in ignore_set


def list_entries(
    directory: Path,
    root: Path,
    ignore_set: Collection[str],
    skip: Optional[PathPredicate] = None,
) -> List[Entry]:
    """Return the included children of ``directory`` in listing order.

    Symlinks are never reported as directories. An unreadable directory is
    logged and treated as empty.
    """
    try:
        with os.scandir(directory) as iterator:
            dirents = list(iterator)
    except OSError as exc:
        logger.warning("Skipping unreadable directory %s: %s", directory, exc)
        return []

    entries: List[Entry] = []
    for dirent in dirents:
        try:
            is_dir = dirent.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        if not include(dirent.name, is_dir, ignore_set):
            continue
        path = directory / dirent.name
        if skip is not None and skip(path):
            logger.debug("Skipping %s", path)
            continue
        entries.append(
            Entry(
                name=dirent.name,
                kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
                path=path,
                relative_path=path.relative_to(root).as_posix(),
            )
        )
    return entries


__all__ = ["MEDIA_EXTENSIONS", "PathPredicate", "include", "is_media_file", "list_entries"]
