from __future__ import annotations

import json

import pytest

from tests._fixtures.repo_builder import RepoBuilder
from vueinsight import cli
from vueinsight.logging import configure_logging

BUTTON = """
<template><button @click="$emit('press')"><slot /></button></template>
<script>
export default { props: ['label', 'size'] }
</script>
"""

APP = """
<template><Btn :label="title" @press="onPress" /></template>
<script setup>
import Btn from './Btn.vue'
</script>
"""


def test_build_parser_scan_defaults() -> None:
    parser = cli._build_parser()

    args = parser.parse_args(["scan"])

    assert args.command == "scan"
    assert args.path == "."
    assert args.format is None
    assert args.output is None
    assert args.no_cache is False
    assert args.verbose is False


def test_build_parser_accepts_verbose_after_subcommand() -> None:
    parser = cli._build_parser()

    args = parser.parse_args(["scan", "-v", "app", "--format", "markdown", "--no-cache"])

    assert args.verbose is True
    assert args.path == "app"
    assert args.format == "markdown"
    assert args.no_cache is True


def test_scan_writes_json_report(repo_builder: RepoBuilder, tmp_path, capsys) -> None:
    repo_builder.write({"Btn.vue": BUTTON, "App.vue": APP})
    output = tmp_path / "report.json"

    cli.main(["scan", str(repo_builder.path()), "--output", str(output), "--no-cache"])

    payload = json.loads(output.read_text(encoding="utf-8"))
    usage = next(item for item in payload["usages"] if item["fullPath"] == "App.vue")
    assert usage["dependencies"] == [
        {"fullPath": "Btn.vue", "usedProps": [0], "usedEvents": [0], "usedSlots": []}
    ]
    assert payload["unused"][0]["props"] == ["size"]
    assert "Report written to" in capsys.readouterr().out
    assert not (repo_builder.path() / ".vueinsight").exists()


def test_scan_prints_markdown_from_config(repo_builder: RepoBuilder, capsys) -> None:
    repo_builder.write(
        {"Btn.vue": BUTTON, "App.vue": APP, ".vueinsight.yml": "report:\n  format: markdown\n"}
    )

    cli.main(["scan", str(repo_builder.path()), "--no-cache"])

    out = capsys.readouterr().out
    assert out.startswith("# Component usage report: project")
    assert "| App | Btn | label | press | - |" in out


def test_scan_missing_path_exits_with_error(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["scan", str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "Project path not found" in capsys.readouterr().err


def test_inspect_prints_component_interface(repo_builder: RepoBuilder, capsys) -> None:
    repo_builder.write({"Btn.vue": BUTTON})

    cli.main(["inspect", str(repo_builder.path() / "Btn.vue")])

    payload = json.loads(capsys.readouterr().out)
    assert payload["name"] == "Btn"
    assert [prop["name"] for prop in payload["props"]] == ["label", "size"]
    assert payload["events"] == [{"name": "press"}]
    assert payload["slots"] == [{"name": "default"}]


def test_inspect_missing_file_exits(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["inspect", str(tmp_path / "Nope.vue")])

    assert excinfo.value.code == 1


def test_log_file_option_before_or_after_command(tmp_path) -> None:
    parser = cli._build_parser()

    assert parser.parse_args(["scan"]).log_file is None
    before = parser.parse_args(["--log-file", str(tmp_path / "a.log"), "scan"])
    after = parser.parse_args(["inspect", "Btn.vue", "--log-file", str(tmp_path / "b.log")])

    assert before.log_file == tmp_path / "a.log"
    assert after.log_file == tmp_path / "b.log"


def test_scan_writes_debug_log_file(repo_builder: RepoBuilder, tmp_path, capsys) -> None:
    repo_builder.write({"Btn.vue": BUTTON, "App.vue": APP})
    log_file = tmp_path / "scan.log"

    try:
        cli.main(["scan", str(repo_builder.path()), "--no-cache", "--log-file", str(log_file)])
    finally:
        configure_logging()

    text = log_file.read_text(encoding="utf-8")
    assert "[project] Starting usage analysis" in text
    assert "[project] Scanner discovered 2 component files" in text
    assert "DEBUG" not in capsys.readouterr().err
