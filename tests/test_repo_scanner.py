"""Tests for the component scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.repo_builder import RepoBuilder
from vueinsight.repo_scanner import ComponentScanner, hash_file


def test_scanner_collects_component_files(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/App.vue": "<template><div /></template>\n",
            "src/components/Btn.vue": "<template><button /></template>\n",
            "src/main.ts": "createApp(App)\n",
            "node_modules/lib/Widget.vue": "<template><i /></template>\n",
        }
    )

    manifest = repo_builder.scan()

    assert [meta.path for meta in manifest.files] == ["src/App.vue", "src/components/Btn.vue"]
    assert manifest.root == str(repo_builder.path().resolve())


def test_scanner_honours_gitignore_and_config_excludes(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".gitignore": "legacy/\n",
            ".vueinsight.yml": "exclude_paths:\n  - src/experimental/\n",
            "src/App.vue": "<template><div /></template>\n",
            "legacy/Old.vue": "<template><div /></template>\n",
            "src/experimental/Beta.vue": "<template><div /></template>\n",
        }
    )

    manifest = repo_builder.scan()

    assert [meta.path for meta in manifest.files] == ["src/App.vue"]


def test_scanner_uses_configured_extensions(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".vueinsight.yml": "extensions: [vue, html]\n",
            "index.html": "<template><div /></template>\n",
            "App.vue": "<template><div /></template>\n",
        }
    )

    manifest = repo_builder.scan()

    assert sorted(meta.path for meta in manifest.files) == ["App.vue", "index.html"]


def test_scanner_records_hash_and_size(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"App.vue": "<template><div /></template>\n"})

    (meta,) = repo_builder.scan().files

    path = repo_builder.path() / "App.vue"
    assert meta.hash == hash_file(path)
    assert meta.size == path.stat().st_size


def test_scanner_rejects_missing_or_file_roots(tmp_path: Path) -> None:
    scanner = ComponentScanner()
    with pytest.raises(FileNotFoundError):
        scanner.scan(str(tmp_path / "missing"))

    file_root = tmp_path / "file.txt"
    file_root.write_text("x", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        scanner.scan(str(file_root))
