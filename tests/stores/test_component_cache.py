from __future__ import annotations

import json
from pathlib import Path

from vueinsight.models import Event, Prop, Slot, VueComponent
from vueinsight.stores import ComponentCache


def _component() -> VueComponent:
    return VueComponent(
        name="Btn",
        full_path="src/Btn.vue",
        props=[Prop(name="label", type="String", required=True)],
        events=[Event(name="click")],
        slots=[Slot(name="icon", description="Leading icon")],
    )


def test_cache_round_trip(tmp_path: Path) -> None:
    cache = ComponentCache.for_project(tmp_path)
    cache.store("src/Btn.vue", fingerprint="abc", component=_component())
    cache.persist()

    cache_file = tmp_path / ".vueinsight" / "component_cache.json"
    assert cache_file.exists()
    payload = json.loads(cache_file.read_text(encoding="utf-8"))
    assert payload["version"] == 1
    assert payload["entries"]["src/Btn.vue"]["fingerprint"] == "abc"

    reloaded = ComponentCache.for_project(tmp_path)
    assert reloaded.get("src/Btn.vue", fingerprint="abc") == _component()
    assert reloaded.get("src/Btn.vue", fingerprint="changed") is None
    assert reloaded.get("src/Other.vue", fingerprint="abc") is None


def test_prune_drops_stale_entries(tmp_path: Path) -> None:
    cache = ComponentCache.for_project(tmp_path)
    cache.store("src/Btn.vue", fingerprint="abc", component=_component())
    cache.store("src/Gone.vue", fingerprint="def", component=_component())

    cache.prune(["src/Btn.vue"])
    cache.persist()

    reloaded = ComponentCache.for_project(tmp_path)
    assert reloaded.get("src/Gone.vue", fingerprint="def") is None
    assert reloaded.get("src/Btn.vue", fingerprint="abc") is not None


def test_cache_ignores_unknown_versions_and_corrupt_files(tmp_path: Path) -> None:
    cache_file = tmp_path / ".vueinsight" / "component_cache.json"
    cache_file.parent.mkdir()

    cache_file.write_text(json.dumps({"version": 99, "entries": {}}), encoding="utf-8")
    assert ComponentCache(cache_file).get("src/Btn.vue", fingerprint="abc") is None

    cache_file.write_text("{not json", encoding="utf-8")
    assert ComponentCache(cache_file).get("src/Btn.vue", fingerprint="abc") is None


def test_in_memory_cache_never_writes(tmp_path: Path) -> None:
    cache = ComponentCache(None)
    cache.store("src/Btn.vue", fingerprint="abc", component=_component())
    cache.persist()

    assert cache.get("src/Btn.vue", fingerprint="abc") == _component()
    assert not (tmp_path / ".vueinsight").exists()


def test_clear_empties_persisted_entries(tmp_path: Path) -> None:
    cache = ComponentCache.for_project(tmp_path)
    cache.store("src/Btn.vue", fingerprint="abc", component=_component())
    cache.persist()

    cache.clear()
    cache.persist()

    assert ComponentCache.for_project(tmp_path).get("src/Btn.vue", fingerprint="abc") is None
