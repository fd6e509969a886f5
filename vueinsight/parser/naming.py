"""Identifier casing helpers."""

from __future__ import annotations

import re

_WORD_BOUNDARY = re.compile(r"[A-Z]+(?![a-z])|[A-Z]")


def kebabize(identifier: str) -> str:
    """Return the hyphenated lower-case spelling of a camel/pascal-case identifier.

    ``myProp`` becomes ``my-prop`` and ``FooBar`` becomes ``foo-bar``. A run of
    capitals not followed by a lower-case letter stays one word, so
    ``HTMLInput`` becomes ``html-input``.
    """
    return _WORD_BOUNDARY.sub(
        lambda match: ("-" if match.start() else "") + match.group(0).lower(),
        identifier,
    )


__all__ = ["kebabize"]
