"""Snapshot pipeline: filter, enumerate, render and write chunked output."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .chunker import ChunkWriter, is_artifact_name
from .collector import collect
from .config import (
    DEFAULT_MAX_LINES,
    ConfigError,
    SnapshotConfig,
    SnapshotMode,
    load_config,
    validate_max_lines,
)
from .filters import PathPredicate
from .logging import get_logger
from .models import SnapshotResult
from .tree import render_tree

logger = get_logger("orchestrator")


def tree_block(project_name: str, tree_text: str) -> list[str]:
    """Return the heading block placed at the top of an unchunked snapshot."""
    return [f"tree {project_name}", *tree_text.splitlines(), "", ""]


class Snapshotter:
    """Coordinates a single snapshot run over a project directory."""

    def __init__(self, cwd: Path | None = None) -> None:
        self._cwd = cwd

    def run(
        self,
        project_name: str,
        root: Path | str = ".",
        *,
        mode: SnapshotMode | str | None = None,
        max_lines: Optional[int] = None,
        output_dir: Path | str | None = None,
    ) -> SnapshotResult:
        """Write the snapshot of ``root`` and return the artifacts produced.

        Explicit arguments win over ``.codesnap.yml`` values, which win over
        the built-in defaults.
        """
        project_name = _validate_project_name(project_name)
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Root directory not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {root}")

        config = load_config(root_path)
        effective_mode = self._resolve_mode(mode, config)
        budget = self._resolve_max_lines(max_lines, config)
        target_dir = self._resolve_output_dir(output_dir, config)
        ignore_set = config.ignore_set()
        skip = _artifact_skipper(target_dir, project_name)

        logger.info("Snapshotting %s as %s (%s mode)", root_path, project_name, effective_mode.value)
        logger.debug("Ignore set: %s", ", ".join(ignore_set) or "(empty)")

        result = SnapshotResult(project_name=project_name, root=root_path)
        writer = ChunkWriter(
            target_dir,
            project_name,
            budget if effective_mode is SnapshotMode.CHUNKED else None,
        )
        with writer:
            if effective_mode is SnapshotMode.SINGLE:
                tree_text = render_tree(root_path, ignore_set, skip=skip)
                writer.write_block(tree_block(project_name, tree_text))
            for rendered in collect(root_path, ignore_set, project_name, skip=skip):
                writer.write_block(rendered.lines())
                result.files_rendered += 1
                if not rendered.readable:
                    result.unreadable_files += 1

        result.chunks = list(writer.chunks)
        logger.info(
            "Rendered %d files into %d artifact(s)", result.files_rendered, len(result.chunks)
        )
        return result

    @staticmethod
    def _resolve_mode(mode: SnapshotMode | str | None, config: SnapshotConfig) -> SnapshotMode:
        if mode is not None:
            return SnapshotMode.parse(mode)
        return config.mode or SnapshotMode.CHUNKED

    @staticmethod
    def _resolve_max_lines(max_lines: Optional[int], config: SnapshotConfig) -> int:
        if max_lines is not None:
            return validate_max_lines(max_lines)
        return config.max_lines or DEFAULT_MAX_LINES

    def _resolve_output_dir(self, output_dir: Path | str | None, config: SnapshotConfig) -> Path:
        if output_dir is not None:
            base = Path(output_dir).expanduser()
            if not base.is_absolute():
                base = (self._cwd or Path.cwd()) / base
            return base.resolve()
        if config.output_dir is not None:
            return config.output_dir.resolve()
        return (self._cwd or Path.cwd()).resolve()


def _validate_project_name(project_name: str) -> str:
    name = (project_name or "").strip()
    if not name:
        raise ConfigError("Project name must not be empty")
    if "/" in name or "\\" in name:
        raise ConfigError(f"Project name must not contain path separators: {project_name!r}")
    return name


def _artifact_skipper(output_dir: Path, project_name: str) -> PathPredicate:
    def _skip(path: Path) -> bool:
        return path.parent == output_dir and is_artifact_name(path.name, project_name)

    return _skip


__all__ = ["Snapshotter", "tree_block"]
