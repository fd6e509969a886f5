"""Detect which props, events and slots of a dependency a template uses."""

from __future__ import annotations

from typing import Callable, List, Sequence, TypeVar

from bs4 import BeautifulSoup
from bs4.element import Tag

from ..models import Dependency, Event, Prop, Slot, VueComponent
from .naming import kebabize

Channel = TypeVar("Channel")

# Nested <template> blocks would otherwise be read as inert template content.
_TEMPLATE_TAG = "template"
_TEMPLATE_PLACEHOLDER = "temp-tag"

_MARKUP_PARSER = "html.parser"


def find_dependency_instances_in_template(template: str, name: str) -> List[Tag]:
    """Return every element in ``template`` that instantiates component ``name``.

    Both the registered spelling and its kebab-case form are queried; an element
    matching both is returned twice.
    """
    if not name:
        return []
    markup = template.replace(_TEMPLATE_TAG, _TEMPLATE_PLACEHOLDER)
    fragment = BeautifulSoup(markup, _MARKUP_PARSER)
    # html.parser lower-cases tag names, so queries have to follow suit.
    camel_case_usages = list(fragment.find_all(name.lower()))
    kebab_case_usages = list(fragment.find_all(kebabize(name).lower()))
    return [*camel_case_usages, *kebab_case_usages]


def _has_attribute(instance: Tag, attribute: str) -> bool:
    return attribute.lower() in instance.attrs


def is_prop_used(instance: Tag, prop: Prop) -> bool:
    kebab = kebabize(prop.name)
    prop_formats = [prop.name, f":{prop.name}", f":{kebab}", kebab]
    return any(_has_attribute(instance, candidate) for candidate in prop_formats)


def is_event_used(instance: Tag, event: Event) -> bool:
    event_formats = [f"@{event.name}", f"v-on:{event.name}"]
    return any(_has_attribute(instance, candidate) for candidate in event_formats)


def is_slot_used(instance: Tag, slot: Slot) -> bool:
    """Slots are filled by nested markup, so search the serialised children.

    Attribute names come back lower-cased from the parser while text keeps its
    case, so each candidate is tried in both spellings.
    """
    inner_markup = instance.decode_contents()
    slot_formats = [f"#{slot.name}", f"v-slot:{slot.name}"]
    return any(
        candidate in inner_markup or candidate.lower() in inner_markup
        for candidate in slot_formats
    )


def get_used_channels(
    dependency_instances: Sequence[Tag],
    channels: Sequence[Channel],
    validator: Callable[[Tag, Channel], bool],
) -> List[int]:
    """Return indices of ``channels`` used by at least one instance, in first-match order."""
    used_channels: List[int] = []
    seen = set()
    for index, channel in enumerate(channels):
        for instance in dependency_instances:
            if index not in seen and validator(instance, channel):
                seen.add(index)
                used_channels.append(index)
    return used_channels


def get_dependency_with_used_channels_analysis(
    template: str, component: VueComponent
) -> Dependency:
    """Build the usage report of ``component`` inside the markup of a parent."""
    dependency_instances = find_dependency_instances_in_template(template, component.name)
    return Dependency(
        full_path=component.full_path,
        used_props=get_used_channels(dependency_instances, component.props, is_prop_used),
        used_events=get_used_channels(dependency_instances, component.events, is_event_used),
        used_slots=get_used_channels(dependency_instances, component.slots, is_slot_used),
    )


__all__ = [
    "find_dependency_instances_in_template",
    "get_dependency_with_used_channels_analysis",
    "get_used_channels",
    "is_event_used",
    "is_prop_used",
    "is_slot_used",
]
