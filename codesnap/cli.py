"""CLI entrypoints for the snapshot and cleanup commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .cleanup import DEFAULT_TARGET, remove_tree
from .config import DEFAULT_MAX_LINES, ConfigError, SnapshotMode
from .logging import configure_logging
from .orchestrator import Snapshotter


def _add_logging_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid line count: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"line count must be positive: {value!r}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapshot",
        description="Flatten a project directory into text snapshots (folder tree plus file contents).",
    )
    _add_logging_options(parser)
    parser.add_argument(
        "project_name",
        nargs="?",
        metavar="projectName",
        help="Name used to prefix file headers and output artifacts.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        metavar="rootDirectory",
        help="Directory to snapshot (defaults to current directory).",
    )
    parser.add_argument(
        "max_lines",
        nargs="?",
        type=_positive_int,
        default=None,
        metavar="maxLinesPerChunk",
        help=f"Maximum lines per output chunk in chunked mode (default {DEFAULT_MAX_LINES}).",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in SnapshotMode],
        default=None,
        help="Write numbered chunks (chunked) or one file headed by the folder tree (single).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory receiving the artifacts (defaults to current directory).",
    )
    return parser


def _build_cleanup_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clean-node-modules",
        description="Recursively remove every node_modules directory below a path.",
    )
    _add_logging_options(parser)
    parser.add_argument(
        "path",
        nargs="?",
        metavar="pathToProjects",
        help="Root directory to scan.",
    )
    parser.add_argument(
        "--target",
        default=DEFAULT_TARGET,
        help=f"Directory name to remove (default {DEFAULT_TARGET}).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for the snapshot command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.project_name:
        parser.print_usage(sys.stderr)
        parser.exit(1, "snapshot: error: projectName is required\n")

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        result = Snapshotter().run(
            args.project_name,
            args.root,
            mode=args.mode,
            max_lines=args.max_lines,
            output_dir=args.output_dir,
        )
    except (FileNotFoundError, NotADirectoryError, ConfigError) as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"snapshot failed: {exc}\nRun with --verbose for more details.\n")

    for path in result.paths:
        print(f"Snapshot written to: {_relativize(path)}")


def cleanup_main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for the node_modules cleanup command."""
    parser = _build_cleanup_parser()
    args = parser.parse_args(argv)

    if not args.path:
        parser.print_usage(sys.stderr)
        parser.exit(1, "clean-node-modules: error: pathToProjects is required\n")

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    absolute_path = Path(args.path).expanduser().resolve()
    print(f"Starting cleanup in: {absolute_path}")
    try:
        remove_tree(absolute_path, args.target)
    except (OSError, ValueError) as exc:
        parser.exit(1, f"Error during cleanup: {exc}\n")
    print("Cleanup complete!")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
