"""Configuration loading for codesnap (.codesnap.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".codesnap.yml"

DEFAULT_MAX_LINES = 5000

DEFAULT_IGNORE: Tuple[str, ...] = (
    ".git",
    "node_modules",
    "public",
    "scripts",
    ".env",
    "yarn.lock",
    "assets",
    "README.md",
    "CODE_OF_CONDUCT.md",
    "CONTRIBUTING.md",
    "LICENSE.md",
    "yarn-error.log",
)


class ConfigError(RuntimeError):
    """Raised when the configuration file or an option value is invalid."""


class SnapshotMode(str, Enum):
    """Output layouts supported by the snapshot orchestrator."""

    CHUNKED = "chunked"
    SINGLE = "single"

    @classmethod
    def parse(cls, value: "str | SnapshotMode") -> "SnapshotMode":
        if isinstance(value, SnapshotMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(mode.value for mode in cls)
            raise ConfigError(f"Unknown snapshot mode {value!r} (expected one of: {choices})") from exc


@dataclass
class SnapshotConfig:
    """Settings read from .codesnap.yml; ``None`` means use the built-in default."""

    root: Path
    ignore: Optional[List[str]] = None
    extra_ignore: List[str] = field(default_factory=list)
    max_lines: Optional[int] = None
    mode: Optional[SnapshotMode] = None
    output_dir: Optional[Path] = None

    def ignore_set(self) -> Tuple[str, ...]:
        """Return the ordered, de-duplicated ignore names for this project."""
        base = list(DEFAULT_IGNORE) if self.ignore is None else list(self.ignore)
        return build_ignore_set(base + list(self.extra_ignore))


def build_ignore_set(names: Sequence[str]) -> Tuple[str, ...]:
    """Collapse ``names`` into an ordered tuple without duplicates or blanks."""
    seen: Dict[str, None] = {}
    for name in names:
        cleaned = name.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


def validate_max_lines(value: Any) -> int:
    """Return ``value`` as a positive line budget or raise ``ConfigError``."""
    if isinstance(value, bool):
        raise ConfigError(f"max_lines must be a positive integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"max_lines must be a positive integer, got {value!r}") from exc
    if number <= 0:
        raise ConfigError(f"max_lines must be a positive integer, got {value!r}")
    return number


def load_config(config_path: Path) -> SnapshotConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SnapshotConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    ignore = _as_str_list(data["ignore"]) if "ignore" in data else None

    max_lines = None
    if data.get("max_lines") is not None:
        max_lines = validate_max_lines(data["max_lines"])

    mode = None
    if data.get("mode") is not None:
        mode = SnapshotMode.parse(str(data["mode"]))

    output_dir_str = _as_str(data.get("output_dir"))
    output_dir = root / output_dir_str if output_dir_str else None

    return SnapshotConfig(
        root=root,
        ignore=ignore,
        extra_ignore=_as_str_list(data.get("extra_ignore")),
        max_lines=max_lines,
        mode=mode,
        output_dir=output_dir,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
