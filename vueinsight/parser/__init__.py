"""Component interface extraction and usage detection."""

from __future__ import annotations

from .channels import (
    find_dependency_instances_in_template,
    get_dependency_with_used_channels_analysis,
    get_used_channels,
    is_event_used,
    is_prop_used,
    is_slot_used,
)
from .component import (
    ComponentParseError,
    extract_template,
    parse_component_file,
    parse_component_source,
)
from .imports import ComponentImport, find_component_imports, resolve_import
from .naming import kebabize

__all__ = [
    "ComponentImport",
    "ComponentParseError",
    "extract_template",
    "find_component_imports",
    "find_dependency_instances_in_template",
    "get_dependency_with_used_channels_analysis",
    "get_used_channels",
    "is_event_used",
    "is_prop_used",
    "is_slot_used",
    "kebabize",
    "parse_component_file",
    "parse_component_source",
    "resolve_import",
]
