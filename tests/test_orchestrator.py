"""End-to-end tests for codesnap.orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.repo_builder import RepoBuilder, read_artifacts

from codesnap.config import ConfigError, SnapshotMode
from codesnap.orchestrator import Snapshotter


def _demo_project(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/index.js": "hi",
            "README.md": "# Demo\n",
            ".env": "TOKEN=abc\n",
            "node_modules/pkg/index.js": "module.exports = 1;\n",
        }
    )


def test_chunked_snapshot_of_demo_project(repo_builder: RepoBuilder) -> None:
    _demo_project(repo_builder)

    result = repo_builder.snapshot("demo")

    assert [path.name for path in result.paths] == ["demo_combined_001.txt"]
    content = read_artifacts(result)
    assert content == "demo/src/index.js\n\nhi\n\n"
    assert "README.md" not in content
    assert ".env" not in content
    assert "node_modules" not in content
    assert result.files_rendered == 1
    assert result.unreadable_files == 0


def test_single_mode_prefixes_tree_heading(repo_builder: RepoBuilder) -> None:
    _demo_project(repo_builder)

    result = repo_builder.snapshot("demo", mode=SnapshotMode.SINGLE)

    assert [path.name for path in result.paths] == ["demo_combined.txt"]
    assert read_artifacts(result) == (
        "tree demo\n"
        "└── src\n"
        "    └── index.js\n"
        "\n"
        "\n"
        "demo/src/index.js\n"
        "\n"
        "hi\n"
        "\n"
    )


def test_chunked_snapshot_respects_line_budget(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "a.txt": "1\n2\n3\n",
            "b.txt": "1\n2\n3\n",
            "c.txt": "\n".join(str(n) for n in range(20)) + "\n",
            "d.txt": "x\n",
        }
    )

    result = repo_builder.snapshot("p", max_lines=12)

    names = [path.name for path in result.paths]
    assert names == ["p_combined_001.txt", "p_combined_002.txt", "p_combined_003.txt"]
    counts = [chunk.line_count for chunk in result.chunks]
    # a + b fit together (6 + 6); c alone overflows; d follows in a fresh chunk.
    assert counts == [12, 23, 4]
    first = result.paths[0].read_text(encoding="utf-8")
    assert first.startswith("p/a.txt\n\n1\n2\n3\n\np/b.txt\n")


def test_snapshot_is_idempotent_when_written_inside_root(tmp_path: Path) -> None:
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.py").write_text("print('x')\n", encoding="utf-8")
    snapshotter = Snapshotter(cwd=root)

    first = snapshotter.run("proj", root, mode="single")
    first_text = read_artifacts(first)
    second = snapshotter.run("proj", root, mode="single")

    assert second.paths == first.paths
    assert read_artifacts(second) == first_text
    assert "proj_combined" not in first_text


def test_chunked_snapshot_is_idempotent_when_written_inside_root(tmp_path: Path) -> None:
    root = tmp_path / "project"
    (root / "pkg").mkdir(parents=True)
    for name in ("a", "b", "c", "d"):
        (root / "pkg" / f"{name}.py").write_text(f"{name} = 1\n{name} += 1\n", encoding="utf-8")
    snapshotter = Snapshotter(cwd=root)

    first = snapshotter.run("proj", root, mode="chunked", max_lines=10)
    first_bytes = [path.read_bytes() for path in first.paths]
    second = snapshotter.run("proj", root, mode="chunked", max_lines=10)

    assert [path.name for path in first.paths] == ["proj_combined_001.txt", "proj_combined_002.txt"]
    assert second.paths == first.paths
    assert [path.read_bytes() for path in second.paths] == first_bytes
    assert all(b"proj_combined" not in body for body in first_bytes)


def test_snapshot_reads_settings_from_config_file(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".codesnap.yml": """
                mode: single
                extra_ignore:
                  - dist
                output_dir: snapshots
            """,
            "dist/bundle.js": "minified\n",
            "lib/core.js": "core\n",
        }
    )

    result = repo_builder.snapshot("cfg", output_dir=None)

    assert result.paths == [(repo_builder.path() / "snapshots" / "cfg_combined.txt").resolve()]
    content = read_artifacts(result)
    assert "dist" not in content
    assert "cfg/lib/core.js" in content
    assert content.startswith("tree cfg\n")


def test_explicit_arguments_override_config(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".codesnap.yml": "mode: single\nmax_lines: 1\n",
            "one.txt": "1\n",
            "two.txt": "2\n",
        }
    )

    result = repo_builder.snapshot("ovr", mode="chunked", max_lines=100)

    assert [path.name for path in result.paths] == ["ovr_combined_001.txt"]


def test_config_can_replace_default_ignore_set(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".codesnap.yml": "ignore: [vendor]\n",
            "vendor/lib.js": "v\n",
            "scripts/build.sh": "echo build\n",
        }
    )

    content = read_artifacts(repo_builder.snapshot("demo"))

    assert "demo/scripts/build.sh" in content
    assert "vendor" not in content


def test_unreadable_files_are_counted_and_rendered(repo_builder: RepoBuilder, monkeypatch) -> None:
    repo_builder.write({"data.bin": "payload\n", "main.py": "x = 1\n"})
    original = Path.read_text

    def _deny(self: Path, *args, **kwargs) -> str:
        if self.name == "data.bin":
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", _deny)

    result = repo_builder.snapshot("demo")

    assert result.files_rendered == 2
    assert result.unreadable_files == 1
    content = read_artifacts(result)
    assert content.startswith("demo/data.bin\n\n[Error reading file: [Errno 13] Permission denied")
    assert "demo/main.py\n\nx = 1\n\n" in content


def test_non_utf8_files_keep_their_content(repo_builder: RepoBuilder) -> None:
    (repo_builder.path() / "legacy.c").write_bytes(b"/* caf\xe9 */\nint x;\n")

    result = repo_builder.snapshot("demo")

    assert result.unreadable_files == 0
    assert read_artifacts(result) == "demo/legacy.c\n\n/* caf\ufffd */\nint x;\n\n"


def test_snapshot_does_not_modify_scanned_tree(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"a.py": "a = 1\n", "pkg/b.py": "b = 2\n"})
    before = sorted(p.relative_to(repo_builder.path()) for p in repo_builder.path().rglob("*"))

    repo_builder.snapshot("demo")

    after = sorted(p.relative_to(repo_builder.path()) for p in repo_builder.path().rglob("*"))
    assert before == after


def test_snapshot_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Snapshotter(cwd=tmp_path).run("demo", tmp_path / "missing")
    assert list(tmp_path.iterdir()) == []


def test_snapshot_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        Snapshotter(cwd=tmp_path).run("demo", target)


@pytest.mark.parametrize("name", ["", "   ", "a/b"])
def test_snapshot_rejects_bad_project_names(tmp_path: Path, name: str) -> None:
    with pytest.raises(ConfigError):
        Snapshotter(cwd=tmp_path).run(name, tmp_path)


def test_snapshot_rejects_unknown_mode(repo_builder: RepoBuilder) -> None:
    with pytest.raises(ConfigError, match="Unknown snapshot mode"):
        repo_builder.snapshot("demo", mode="zip")
