"""Core data models shared across vueinsight components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Prop:
    """Configurable input declared by a component."""

    name: str
    type: Optional[str] = None
    required: bool = False
    description: Optional[str] = None


@dataclass(frozen=True)
class Event:
    """Event a component can emit to its parent."""

    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Slot:
    """Named content insertion point of a component."""

    name: str
    description: Optional[str] = None


@dataclass
class VueComponent:
    """Resolved interface of a single component file."""

    name: str
    full_path: str
    props: List[Prop] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    slots: List[Slot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "fullPath": self.full_path,
            "props": [
                _compact({"name": p.name, "type": p.type, "required": p.required, "description": p.description})
                for p in self.props
            ],
            "events": [_compact({"name": e.name, "description": e.description}) for e in self.events],
            "slots": [_compact({"name": s.name, "description": s.description}) for s in self.slots],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "VueComponent":
        return cls(
            name=str(payload["name"]),
            full_path=str(payload.get("fullPath", "")),
            props=[
                Prop(
                    name=str(item["name"]),
                    type=item.get("type"),
                    required=bool(item.get("required", False)),
                    description=item.get("description"),
                )
                for item in payload.get("props") or []
            ],
            events=[
                Event(name=str(item["name"]), description=item.get("description"))
                for item in payload.get("events") or []
            ],
            slots=[
                Slot(name=str(item["name"]), description=item.get("description"))
                for item in payload.get("slots") or []
            ],
        )


@dataclass
class Dependency:
    """Which interface members of a dependency one parent actually uses."""

    full_path: str
    used_props: List[int] = field(default_factory=list)
    used_events: List[int] = field(default_factory=list)
    used_slots: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fullPath": self.full_path,
            "usedProps": list(self.used_props),
            "usedEvents": list(self.used_events),
            "usedSlots": list(self.used_slots),
        }


@dataclass
class ComponentUsage:
    """Dependencies of one parent component with their usage reports."""

    name: str
    full_path: str
    dependencies: List[Dependency] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "fullPath": self.full_path,
            "dependencies": [dependency.to_dict() for dependency in self.dependencies],
        }


@dataclass
class AnalysisError:
    """A file that could not be parsed or analysed."""

    path: str
    message: str


@dataclass
class FileMeta:
    """Metadata for an individual component file."""

    path: str
    size: int
    hash: str


@dataclass
class ComponentManifest:
    """Normalized view of the component files in a project."""

    root: str
    files: List[FileMeta]


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value not in (None, False)}
