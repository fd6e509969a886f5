from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient

from tests._fixtures.repo_builder import RepoBuilder
from vueinsight.orchestrator import Orchestrator
from vueinsight.service import create_app

BUTTON = """
<template><button><slot name="icon" /></button></template>
<script>
export default { props: ['label'], emits: ['click'] }
</script>
"""

APP = """
<template><Btn label="Go" /></template>
<script setup>
import Btn from './Btn.vue'
</script>
"""


def _client() -> TestClient:
    return TestClient(create_app(lambda: Orchestrator(use_cache=False)))


def test_health() -> None:
    response = _client().get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_template() -> None:
    payload = {
        "template": '<Btn label="Go" @click="go"><template v-slot:icon>*</template></Btn>',
        "component": {
            "name": "Btn",
            "fullPath": "Btn.vue",
            "props": [{"name": "label"}, {"name": "size"}],
            "events": [{"name": "click"}],
            "slots": [{"name": "icon"}],
        },
    }

    response = _client().post("/analyze", json=payload)

    assert response.status_code == 200
    assert response.json() == {
        "fullPath": "Btn.vue",
        "usedProps": [0],
        "usedEvents": [0],
        "usedSlots": [0],
    }


def test_analyze_rejects_incomplete_payload() -> None:
    response = _client().post("/analyze", json={"template": "<div />"})

    assert response.status_code == 422


def test_scan_project(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"Btn.vue": BUTTON, "App.vue": APP})

    response = _client().post("/scan", json={"path": str(repo_builder.path())})

    assert response.status_code == 200
    body = response.json()
    usage = next(item for item in body["usages"] if item["fullPath"] == "App.vue")
    assert usage["dependencies"] == [
        {"fullPath": "Btn.vue", "usedProps": [0], "usedEvents": [], "usedSlots": []}
    ]
    assert body["unused"][0]["events"] == ["click"]
    assert body["unused"][0]["slots"] == ["icon"]


def test_scan_missing_project(tmp_path) -> None:
    response = _client().post("/scan", json={"path": str(tmp_path / "missing")})

    assert response.status_code == 404
    assert "Project path not found" in response.json()["detail"]


def test_scan_invalid_config(repo_builder: RepoBuilder) -> None:
    repo_builder.write({".vueinsight.yml": "- not\n- a mapping\n"})

    response = _client().post("/scan", json={"path": str(repo_builder.path())})

    assert response.status_code == 400


def test_scan_honours_use_cache_flag(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"Btn.vue": BUTTON, "App.vue": APP})
    client = _client()

    response = client.post("/scan", json={"path": str(repo_builder.path()), "useCache": False})
    assert response.status_code == 200
    assert not (repo_builder.path() / ".vueinsight").exists()

    response = client.post("/scan", json={"path": str(repo_builder.path())})
    assert response.status_code == 200
    assert (repo_builder.path() / ".vueinsight" / "component_cache.json").exists()


def test_analyze_runs_off_the_event_loop() -> None:
    loops_seen: list[bool] = []

    class _RecordingOrchestrator(Orchestrator):
        def analyze_template(self, template, component):  # type: ignore[no-untyped-def]
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                loops_seen.append(False)
            else:
                loops_seen.append(True)
            return super().analyze_template(template, component)

    client = TestClient(create_app(lambda: _RecordingOrchestrator(use_cache=False)))
    payload = {"template": "<Btn />", "component": {"name": "Btn", "fullPath": "Btn.vue"}}

    response = client.post("/analyze", json=payload)

    assert response.status_code == 200
    assert loops_seen == [False]
