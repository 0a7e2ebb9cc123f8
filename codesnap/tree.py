"""Folder tree rendering in the style of the ``tree`` command."""

from __future__ import annotations

import unicodedata
from pathlib import Path
from typing import Collection, Iterator, List, Optional, Sequence, Tuple

from .filters import PathPredicate, list_entries
from .models import Entry

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_SPACER = "│   "
BLANK_SPACER = "    "


def collation_key(name: str) -> str:
    """Accent- and case-insensitive form of ``name`` for ordering."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold()


def tree_sort_key(entry: Entry) -> Tuple[int, str, str]:
    """Directories first, then collated name order with the raw name as tie-break."""
    return (0 if entry.is_dir else 1, collation_key(entry.name), entry.name)


def sorted_children(
    directory: Path,
    root: Path,
    ignore_set: Collection[str],
    skip: Optional[PathPredicate] = None,
) -> List[Entry]:
    return sorted(list_entries(directory, root, ignore_set, skip), key=tree_sort_key)


def _with_last_flag(entries: Sequence[Entry]) -> Iterator[Tuple[Entry, bool]]:
    last_index = len(entries) - 1
    for index, entry in enumerate(entries):
        yield entry, index == last_index


def render_tree(
    directory: Path | str,
    ignore_set: Collection[str],
    *,
    skip: Optional[PathPredicate] = None,
) -> str:
    """Return the filtered tree below ``directory``, one newline-terminated line per entry."""
    root = Path(directory)
    lines: List[str] = []
    stack: List[Tuple[Iterator[Tuple[Entry, bool]], str]] = [
        (_with_last_flag(sorted_children(root, root, ignore_set, skip)), "")
    ]

    while stack:
        children, prefix = stack[-1]
        item = next(children, None)
        if item is None:
            stack.pop()
            continue
        entry, is_last = item
        lines.append(f"{prefix}{LAST_BRANCH if is_last else BRANCH}{entry.name}")
        if entry.is_dir:
            child_prefix = prefix + (BLANK_SPACER if is_last else PIPE_SPACER)
            stack.append(
                (_with_last_flag(sorted_children(entry.path, root, ignore_set, skip)), child_prefix)
            )

    return "".join(f"{line}\n" for line in lines)


__all__ = ["collation_key", "render_tree", "sorted_children", "tree_sort_key"]
