"""Codebase snapshot and cleanup utilities."""

from .cleanup import remove_tree
from .config import ConfigError, SnapshotMode
from .orchestrator import Snapshotter

__all__ = ["ConfigError", "Snapshotter", "SnapshotMode", "remove_tree"]
