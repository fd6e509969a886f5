"""Project report payloads and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Set

from jinja2 import Environment, FileSystemLoader

from .models import AnalysisError, ComponentUsage, VueComponent

_TEMPLATES_DIR = Path(__file__).with_name("templates")


@dataclass
class UnusedChannels:
    """Interface members of a component that no parent exercises."""

    name: str
    full_path: str
    imported_by: int
    props: List[str] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    slots: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.props or self.events or self.slots)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "fullPath": self.full_path,
            "importedBy": self.imported_by,
            "props": list(self.props),
            "events": list(self.events),
            "slots": list(self.slots),
        }


@dataclass
class ProjectReport:
    """Outcome of analysing every component of a project."""

    root: str
    components: Dict[str, VueComponent] = field(default_factory=dict)
    usages: List[ComponentUsage] = field(default_factory=list)
    errors: List[AnalysisError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "components": [self.components[key].to_dict() for key in sorted(self.components)],
            "usages": [usage.to_dict() for usage in self.usages],
            "unused": [entry.to_dict() for entry in summarize_unused(self)],
            "errors": [{"path": error.path, "message": error.message} for error in self.errors],
        }


def summarize_unused(report: ProjectReport) -> List[UnusedChannels]:
    """List, per imported component, the members no importing parent uses.

    Components nobody imports are left out since nothing can be said about
    their call sites.
    """
    used: Dict[str, Dict[str, Set[int]]] = {}
    parents: Dict[str, int] = {}
    for usage in report.usages:
        for dependency in usage.dependencies:
            bucket = used.setdefault(
                dependency.full_path, {"props": set(), "events": set(), "slots": set()}
            )
            bucket["props"].update(dependency.used_props)
            bucket["events"].update(dependency.used_events)
            bucket["slots"].update(dependency.used_slots)
            parents[dependency.full_path] = parents.get(dependency.full_path, 0) + 1

    summary: List[UnusedChannels] = []
    for path in sorted(used):
        component = report.components.get(path)
        if component is None:
            continue
        bucket = used[path]
        entry = UnusedChannels(
            name=component.name,
            full_path=path,
            imported_by=parents[path],
            props=[p.name for i, p in enumerate(component.props) if i not in bucket["props"]],
            events=[e.name for i, e in enumerate(component.events) if i not in bucket["events"]],
            slots=[s.name for i, s in enumerate(component.slots) if i not in bucket["slots"]],
        )
        summary.append(entry)
    return summary


def render_markdown(report: ProjectReport, templates_dir: Path | None = None) -> str:
    """Render ``report`` as Markdown using the bundled Jinja template."""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or _TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template("report.md.j2")
    rows = []
    for usage in report.usages:
        for dependency in usage.dependencies:
            component = report.components.get(dependency.full_path)
            if component is None:
                continue
            rows.append(
                {
                    "parent": usage.name,
                    "dependency": component.name,
                    "props": [component.props[i].name for i in dependency.used_props],
                    "events": [component.events[i].name for i in dependency.used_events],
                    "slots": [component.slots[i].name for i in dependency.used_slots],
                }
            )
    return template.render(
        project=Path(report.root).name or report.root,
        components=[report.components[key] for key in sorted(report.components)],
        rows=rows,
        unused=[entry for entry in summarize_unused(report) if not entry.is_empty],
        errors=report.errors,
    )


__all__ = ["ProjectReport", "UnusedChannels", "render_markdown", "summarize_unused"]
