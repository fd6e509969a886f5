"""Extract the public interface (props, events, slots) of a Vue single-file component."""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, TypeVar

from bs4 import BeautifulSoup

from ..logging import get_logger
from ..models import Event, Prop, Slot, VueComponent

logger = get_logger("parser.component")

Member = TypeVar("Member", Prop, Event, Slot)

_OPENING_TEMPLATE = re.compile(r"<template(?:\s[^>]*)?>", re.IGNORECASE)
_CLOSING_TEMPLATE = "</template>"
_SCRIPT_BLOCK = re.compile(r"<script(?:\s[^>]*)?>(.*?)</script>", re.IGNORECASE | re.DOTALL)

_OPTIONS_OBJECT = re.compile(r"export\s+default\s+(?:defineComponent\s*\(\s*)?\{")
_DEFINE_OPTIONS = re.compile(r"\bdefineOptions\s*\(\s*\{")
_MACRO = re.compile(r"\b(defineProps|defineEmits|defineSlots)\s*(<|\()")
_ENTRY_KEY = re.compile(
    r"^(?:readonly\s+)?(?:(?P<quote>['\"])(?P<quoted>[^'\"]+)(?P=quote)|(?P<key>[A-Za-z_$][\w$]*))"
    r"\s*(?P<optional>\?)?\s*(?P<sep>[:(])"
)
_SHORTHAND_KEY = re.compile(r"^(?P<key>[A-Za-z_$][\w$]*)\s*$")
_LEADING_COMMENTS = re.compile(r"^(?:\s+|/\*.*?\*/|//[^\n]*)*", re.DOTALL)
_TYPE_MEMBER_START = re.compile(
    r"\s*(?:\(|(?:readonly\s+)?(?:['\"][^'\"\n]*['\"]|[A-Za-z_$][\w$]*)\s*\??\s*[:(])"
)
_STRING_LITERAL = re.compile(r"(['\"`])((?:\\.|(?!\1).)*)\1")
_JSDOC = re.compile(r"/\*\*(.*?)\*/", re.DOTALL)
_COMMENTS = re.compile(r"/\*.*?\*/|//[^\n]*", re.DOTALL)
_CALL_SIGNATURE = re.compile(r"\(\s*[A-Za-z_$][\w$]*\s*:\s*([^,)]+)")
_EMIT_CALL = re.compile(r"(?:\$emit|\bemit)\s*\(\s*(['\"`])([^'\"`]+)\1")
_OPTION_TYPE = re.compile(r"\btype\s*:\s*([^,\n}]+)")
_OPTION_REQUIRED = re.compile(r"\brequired\s*:\s*true\b")

_PAIRS = {"{": "}", "[": "]", "(": ")"}


class ComponentParseError(ValueError):
    """Raised when a source file does not look like a single-file component."""


@dataclass
class _Entry:
    key: str
    value: str
    optional: bool
    description: Optional[str]


def extract_template(source: str) -> Optional[str]:
    """Return the content of the outermost ``<template>`` block, if any."""
    opening = _OPENING_TEMPLATE.search(source)
    if opening is None:
        return None
    closing = source.rfind(_CLOSING_TEMPLATE)
    if closing < opening.end():
        return None
    return source[opening.end() : closing]


def extract_script(source: str) -> Optional[str]:
    """Return the concatenated content of every ``<script>`` block, if any."""
    blocks = [match.group(1) for match in _SCRIPT_BLOCK.finditer(source)]
    if not blocks:
        return None
    return "\n".join(blocks)


def parse_component_source(source: str, full_path: str, *, stem: Optional[str] = None) -> VueComponent:
    """Parse SFC source text into a :class:`VueComponent`."""
    template = extract_template(source)
    script = extract_script(source)
    if template is None and script is None:
        raise ComponentParseError(f"No <template> or <script> block found in {full_path}")

    script = script or ""
    masked = _mask_literals(script)
    options = _options_entries(script, masked)

    name = _component_name(options) or stem or Path(full_path).stem
    return VueComponent(
        name=name,
        full_path=full_path,
        props=_collect_props(script, masked, options),
        events=_collect_events(script, masked, options, template or ""),
        slots=_collect_slots(script, masked, template or ""),
    )


async def parse_component_file(path: Path | str, *, full_path: Optional[str] = None) -> Optional[VueComponent]:
    """Read and parse a component file, logging failures instead of raising."""
    file_path = Path(path)
    try:
        source = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
        return parse_component_source(source, full_path or str(file_path), stem=file_path.stem)
    except (OSError, UnicodeDecodeError, ComponentParseError) as exc:
        logger.error("Something went wrong while parsing %s: %s", file_path, exc)
    except Exception as exc:
        # bs4 raises ParserRejectedMarkup for markup html.parser cannot tokenise.
        logger.error("Something went wrong while parsing %s: %s", file_path, exc)
        logger.debug("Parser failure details for %s", file_path, exc_info=True)
    return None


# ---------------------------------------------------------------------------
# Interface members
# ---------------------------------------------------------------------------


def _component_name(options: List[_Entry]) -> Optional[str]:
    for entry in options:
        if entry.key == "name":
            literal = _STRING_LITERAL.match(entry.value.strip())
            if literal:
                return literal.group(2)
    return None


def _collect_props(script: str, masked: str, options: List[_Entry]) -> List[Prop]:
    props: List[Prop] = []
    for body, kind in _declarations(script, masked, options, option_key="props", macro="defineProps"):
        if kind == "[":
            props.extend(Prop(name=name) for name in _string_items(body))
            continue
        for entry in _entries(body, typed=kind == "type"):
            if kind == "type":
                props.append(
                    Prop(
                        name=entry.key,
                        type=_clean(_COMMENTS.sub("", entry.value)),
                        required=not entry.optional,
                        description=entry.description,
                    )
                )
            else:
                props.append(_runtime_prop(entry))
    return _unique(props)


def _runtime_prop(entry: _Entry) -> Prop:
    value = _COMMENTS.sub("", entry.value).strip()
    if value.startswith("{"):
        type_match = _OPTION_TYPE.search(value)
        return Prop(
            name=entry.key,
            type=_clean(type_match.group(1)) if type_match else None,
            required=bool(_OPTION_REQUIRED.search(value)),
            description=entry.description,
        )
    return Prop(name=entry.key, type=_clean(value) or None, description=entry.description)


def _collect_events(script: str, masked: str, options: List[_Entry], template: str) -> List[Event]:
    events: List[Event] = []
    for body, kind in _declarations(script, masked, options, option_key="emits", macro="defineEmits"):
        if kind == "[":
            events.extend(Event(name=name) for name in _string_items(body))
            continue
        if kind == "type":
            for signature in _CALL_SIGNATURE.finditer(body):
                events.extend(
                    Event(name=literal.group(2)) for literal in _STRING_LITERAL.finditer(signature.group(1))
                )
        entries = _entries(body, typed=kind == "type")
        events.extend(Event(name=entry.key, description=entry.description) for entry in entries)

    for source in (script, template):
        events.extend(Event(name=match.group(2)) for match in _EMIT_CALL.finditer(source))
    return _unique(events)


def _collect_slots(script: str, masked: str, template: str) -> List[Slot]:
    slots: List[Slot] = []
    if template:
        fragment = BeautifulSoup(template, "html.parser")
        for element in fragment.find_all("slot"):
            name = element.get("name")
            if name:
                slots.append(Slot(name=str(name)))
            elif not any(attr in element.attrs for attr in (":name", "v-bind:name")):
                slots.append(Slot(name="default"))
    for body, kind in _declarations(script, masked, [], option_key=None, macro="defineSlots"):
        entries = _entries(body, typed=kind == "type")
        slots.extend(Slot(name=entry.key, description=entry.description) for entry in entries)
    return _unique(slots)


def _unique(members: List[Member]) -> List[Member]:
    seen = set()
    result = []
    for member in members:
        if member.name in seen:
            continue
        seen.add(member.name)
        result.append(member)
    return result


# ---------------------------------------------------------------------------
# Declaration lookup
# ---------------------------------------------------------------------------


def _options_entries(script: str, masked: str) -> List[_Entry]:
    entries: List[_Entry] = []
    for pattern in (_OPTIONS_OBJECT, _DEFINE_OPTIONS):
        match = pattern.search(masked)
        if match is None:
            continue
        span = _balanced_span(masked, match.end() - 1)
        if span is not None:
            entries.extend(_entries(script[span[0] : span[1]]))
    return entries


def _declarations(
    script: str,
    masked: str,
    options: List[_Entry],
    *,
    option_key: Optional[str],
    macro: str,
) -> Iterator[Tuple[str, str]]:
    """Yield ``(body, kind)`` pairs where kind is ``[``, ``{`` or ``type``."""
    for entry in options:
        if entry.key == option_key:
            value = entry.value.strip()
            if value[:1] in {"[", "{"}:
                span = _balanced_span(_mask_literals(value), 0)
                if span is not None:
                    yield value[span[0] : span[1]], value[0]

    for match in _MACRO.finditer(masked):
        if match.group(1) != macro:
            continue
        position = _skip_space(masked, match.end())
        if match.group(2) == "<":
            if masked[position : position + 1] == "{":
                span = _balanced_span(masked, position)
                if span is not None:
                    yield script[span[0] : span[1]], "type"
            else:
                reference = re.match(r"[A-Za-z_$][\w$]*", masked[position:])
                if reference:
                    body = _type_reference(script, masked, reference.group(0))
                    if body is not None:
                        yield body, "type"
        else:
            opener = masked[position : position + 1]
            if opener in {"[", "{"}:
                span = _balanced_span(masked, position)
                if span is not None:
                    yield script[span[0] : span[1]], opener
            else:
                reference = re.match(r"[A-Za-z_$][\w$]*", masked[position:])
                if reference:
                    resolved = _value_reference(script, masked, reference.group(0))
                    if resolved is not None:
                        yield resolved


def _type_reference(script: str, masked: str, name: str) -> Optional[str]:
    pattern = re.compile(
        rf"\b(?:interface\s+{re.escape(name)}\b[^{{]*|type\s+{re.escape(name)}\s*=\s*)\{{"
    )
    match = pattern.search(masked)
    if match is None:
        return None
    span = _balanced_span(masked, match.end() - 1)
    return script[span[0] : span[1]] if span else None


def _value_reference(script: str, masked: str, name: str) -> Optional[Tuple[str, str]]:
    pattern = re.compile(rf"\b(?:const|let|var)\s+{re.escape(name)}\s*(?::[^=]+)?=\s*([\[{{])")
    match = pattern.search(masked)
    if match is None:
        return None
    span = _balanced_span(masked, match.end() - 1)
    if span is None:
        return None
    return script[span[0] : span[1]], match.group(1)


# ---------------------------------------------------------------------------
# Lightweight script scanning
# ---------------------------------------------------------------------------


def _mask_literals(script: str) -> str:
    """Blank out string contents and comments, keeping every offset intact."""
    chars = list(script)
    length = len(script)

    def blank(start: int, end: int) -> None:
        for index in range(start, min(end, length)):
            if chars[index] != "\n":
                chars[index] = " "

    index = 0
    while index < length:
        char = script[index]
        if script.startswith("//", index):
            end = script.find("\n", index)
            end = length if end == -1 else end
            blank(index, end)
            index = end
        elif script.startswith("/*", index):
            end = script.find("*/", index + 2)
            end = length if end == -1 else end + 2
            blank(index, end)
            index = end
        elif char in "'\"`":
            end = index + 1
            while end < length and script[end] != char:
                end += 2 if script[end] == "\\" else 1
            blank(index + 1, end)
            index = end + 1
        else:
            index += 1
    return "".join(chars)


def _balanced_span(masked: str, start: int) -> Optional[Tuple[int, int]]:
    """Return the inner span of the bracket opened at ``start``."""
    opener = masked[start]
    closer = _PAIRS[opener]
    depth = 0
    for index in range(start, len(masked)):
        char = masked[index]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return start + 1, index
    return None


def _skip_space(text: str, index: int) -> int:
    while index < len(text) and text[index].isspace():
        index += 1
    return index


def _split_top_level(body: str, *, typed: bool = False) -> List[str]:
    """Split an object or type literal body into its member segments.

    Type literals may separate members by newlines alone and use angle
    brackets for generics, so ``typed`` enables both.
    """
    masked = _mask_literals(body)
    segments: List[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(masked):
        if char in "{[(":
            depth += 1
        elif char in "}])":
            depth -= 1
        elif typed and char == "<":
            depth += 1
        elif typed and char == ">" and masked[index - 1 : index] != "=":
            depth -= 1
        elif depth != 0:
            continue
        elif char in ",;" or (typed and char == "\n" and _starts_member(masked, start, index)):
            segments.append(body[start:index])
            start = index + 1
    segments.append(body[start:])
    return [segment for segment in segments if segment.strip()]


def _starts_member(masked: str, start: int, newline: int) -> bool:
    if not masked[start:newline].strip():
        return False
    return _TYPE_MEMBER_START.match(masked, newline + 1) is not None


def _entries(body: str, *, typed: bool = False) -> List[_Entry]:
    entries: List[_Entry] = []
    for segment in _split_top_level(body, typed=typed):
        leading = _LEADING_COMMENTS.match(segment)
        prefix_end = leading.end() if leading else 0
        docs = _JSDOC.findall(segment[:prefix_end])
        code = segment[prefix_end:].strip()
        match = _ENTRY_KEY.match(code)
        if match is not None:
            key = match.group("quoted") or match.group("key")
            value = code[match.end() :] if match.group("sep") == ":" else code[match.start("sep") :]
            optional = bool(match.group("optional"))
        else:
            shorthand = _SHORTHAND_KEY.match(_COMMENTS.sub("", code).strip())
            if shorthand is None:
                continue
            key, value, optional = shorthand.group("key"), "", False
        entries.append(
            _Entry(
                key=key,
                value=value,
                optional=optional,
                description=_describe(docs[-1]) if docs else None,
            )
        )
    return entries


def _string_items(body: str) -> List[str]:
    items: List[str] = []
    for segment in _split_top_level(body):
        literal = _STRING_LITERAL.match(_COMMENTS.sub("", segment).strip())
        if literal:
            items.append(literal.group(2))
    return items


def _describe(doc: str) -> Optional[str]:
    lines = [line.strip().lstrip("*").strip() for line in doc.splitlines()]
    text = " ".join(line for line in lines if line and not line.startswith("@"))
    return text or None


def _clean(value: str) -> str:
    return " ".join(value.split()).rstrip(",;").strip()


__all__ = [
    "ComponentParseError",
    "extract_script",
    "extract_template",
    "parse_component_file",
    "parse_component_source",
]
