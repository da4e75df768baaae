"""Helpers shared by the rendering backends."""

from __future__ import annotations

from typing import Any

from draftschema.labels import DictionaryLabel, Label
from draftschema.visitor import Position


def schema_label(source: Any) -> DictionaryLabel:
    """Accept a label, or anything exposing one (schemas, records)."""
    label = source if isinstance(source, Label) else source.label
    if not isinstance(label, DictionaryLabel):
        msg = f"Only dictionaries can be rendered as a schema, got {label.kind}"
        raise TypeError(msg)
    return label


def pad(nesting: int) -> str:
    return " " * (nesting * 2)


def separator(position: Position) -> str:
    """Comma-newline after every member except the final one."""
    if position in (Position.FIRST, Position.MIDDLE):
        return ",\n"
    return "\n"


def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]
