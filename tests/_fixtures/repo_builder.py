"""Helper utilities for constructing temporary Vue projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from vueinsight.models import ComponentManifest
from vueinsight.repo_scanner import ComponentScanner


class RepoBuilder:
    """Utility for writing files into a throwaway project and rescanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self._scanner = ComponentScanner()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def scan(self) -> ComponentManifest:
        """Return a fresh manifest of the project's component files."""
        return self._scanner.scan(str(self.root))

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["RepoBuilder"]
