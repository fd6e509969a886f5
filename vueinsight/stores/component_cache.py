"""Persistent cache for parsed component interfaces."""

from __future__ import annotations

from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Dict, Iterable, Optional

from ..models import VueComponent

_CACHE_VERSION = 1
CACHE_FILENAME = "component_cache.json"


class ComponentCache:
    """Stores parsed interfaces keyed by relative path and content hash."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, Dict[str, object]] = {}
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    @classmethod
    def for_project(cls, root: Path) -> "ComponentCache":
        return cls(root / ".vueinsight" / CACHE_FILENAME)

    def get(self, key: str, *, fingerprint: str) -> Optional[VueComponent]:
        entry = self._entries.get(key)
        if not entry or entry.get("fingerprint") != fingerprint:
            return None
        payload = entry.get("component")
        if not isinstance(payload, dict):
            return None
        try:
            return VueComponent.from_dict(payload)
        except (KeyError, TypeError):
            return None

    def store(self, key: str, *, fingerprint: str, component: VueComponent) -> None:
        self._entries[key] = {
            "fingerprint": fingerprint,
            "component": component.to_dict(),
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        self._dirty = True

    def prune(self, keys_to_keep: Iterable[str]) -> None:
        keep = set(keys_to_keep)
        removed = [key for key in self._entries if key not in keep]
        if removed:
            for key in removed:
                self._entries.pop(key, None)
            self._dirty = True

    def persist(self) -> None:
        if not self._dirty or self._path is None:
            return
        payload = {
            "version": _CACHE_VERSION,
            "entries": self._entries,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
        )
        self._dirty = False

    def clear(self) -> None:
        self._entries.clear()
        self._dirty = True

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict) or data.get("version") != _CACHE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        self._entries = {
            key: raw
            for key, raw in entries.items()
            if isinstance(key, str)
            and isinstance(raw, dict)
            and "fingerprint" in raw
            and "component" in raw
        }
        self._dirty = False


__all__ = ["CACHE_FILENAME", "ComponentCache"]
