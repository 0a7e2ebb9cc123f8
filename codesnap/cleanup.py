"""Recursive removal of named directories such as ``node_modules``."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import List

from .logging import get_logger

DEFAULT_TARGET = "node_modules"

logger = get_logger("cleanup")


def remove_tree(root: Path | str, target_dir_name: str = DEFAULT_TARGET) -> List[Path]:
    """Delete every directory named ``target_dir_name`` below ``root``.

    Matching directories are removed with all their contents and never
    descended into. Symlinks are not followed. Directories that cannot be
    listed are logged and skipped. Returns the removed paths in walk order.
    """
    if not target_dir_name:
        raise ValueError("target_dir_name must not be empty")

    removed: List[Path] = []
    pending: List[Path] = [Path(root)]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as iterator:
                dirents = sorted(iterator, key=lambda item: item.name)
        except OSError as exc:
            logger.debug("Skipping %s: %s", directory, exc)
            continue

        subdirectories: List[Path] = []
        for dirent in dirents:
            try:
                is_dir = dirent.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if not is_dir:
                continue
            full_path = directory / dirent.name
            if dirent.name == target_dir_name:
                logger.info("Removing: %s", full_path)
                shutil.rmtree(full_path)
                logger.info("Removed: %s", full_path)
                removed.append(full_path)
            else:
                subdirectories.append(full_path)
        pending.extend(reversed(subdirectories))

    return removed


__all__ = ["DEFAULT_TARGET", "remove_tree"]
