"""Resolve the component files a single-file component imports."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .component import extract_script

_STATIC_IMPORT = re.compile(
    r"""\bimport\s+([A-Za-z_$][\w$]*)\s+from\s+(['"])([^'"]+)\2"""
)
_DYNAMIC_IMPORT = re.compile(
    r"""(?:\bconst|\blet|\bvar)\s+([A-Za-z_$][\w$]*)\s*=\s*defineAsyncComponent\s*\(\s*\(\s*\)\s*=>\s*import\s*\(\s*(['"])([^'"]+)\2\s*\)"""
)
_DEFAULT_EXTENSIONS = (".vue",)


@dataclass(frozen=True)
class ComponentImport:
    """A component binding declared in a parent's script block."""

    local_name: str
    specifier: str


def find_component_imports(
    source: str, extensions: Sequence[str] = _DEFAULT_EXTENSIONS
) -> List[ComponentImport]:
    """Return component imports whose specifier ends in one of ``extensions``."""
    script = extract_script(source)
    if script is None:
        return []

    imports: List[ComponentImport] = []
    seen = set()
    for pattern in (_STATIC_IMPORT, _DYNAMIC_IMPORT):
        for match in pattern.finditer(script):
            specifier = match.group(3)
            if not specifier.lower().endswith(tuple(extensions)):
                continue
            if specifier in seen:
                continue
            seen.add(specifier)
            imports.append(ComponentImport(local_name=match.group(1), specifier=specifier))
    return imports


def resolve_import(
    specifier: str,
    importer: Path,
    root: Path,
    aliases: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """Map an import specifier to a file under ``root``.

    Relative specifiers resolve against the importing file, aliased ones
    (``@/components/Foo.vue`` with ``{"@": "src"}``) against the configured
    directory. Bare package specifiers and missing files resolve to ``None``.
    """
    candidate: Optional[Path] = None
    if specifier.startswith(("./", "../")):
        candidate = importer.parent / specifier
    elif specifier.startswith("/"):
        candidate = root / specifier.lstrip("/")
    else:
        # Longest alias first so "@ui" wins over "@".
        for alias in sorted(aliases or {}, key=len, reverse=True):
            if specifier == alias or specifier.startswith(f"{alias}/"):
                target = (aliases or {})[alias]
                remainder = specifier[len(alias) :].lstrip("/")
                candidate = root / target / remainder
                break

    if candidate is None:
        return None
    resolved = candidate.resolve()
    if not resolved.is_file():
        return None
    try:
        resolved.relative_to(root.resolve())
    except ValueError:
        return None
    return resolved


__all__ = ["ComponentImport", "find_component_imports", "resolve_import"]
