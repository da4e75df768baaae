"""TypeScript interface declarations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from draftschema.formatters._common import pad, schema_label
from draftschema.formatters.description import formatted_key
from draftschema.labels import IteratorLabel, ListLabel
from draftschema.reporter import Event, ReporterDelegate, StringBuffer, render

if TYPE_CHECKING:
    from draftschema.labels import PrimitiveLabel


@dataclass(frozen=True)
class TypeScriptOptions:
    name: str


type _Event = Event[StringBuffer, TypeScriptOptions]


class TypeScriptDelegate(ReporterDelegate[StringBuffer, TypeScriptOptions]):
    """Pointers render as the target interface's name; iterators as arrays of it."""

    def open_schema(self, event: _Event) -> str:
        return f"export interface {event.options.name} {{\n"

    def close_schema(self, event: _Event) -> str:
        return "}"

    def open_dictionary(self, event: _Event) -> str:
        return "{\n"

    def close_dictionary(self, event: _Event) -> str:
        return f"{pad(event.nesting)}}}"

    def emit_key(self, event: _Event) -> str:
        assert event.key is not None
        assert event.label is not None
        return f"{pad(event.nesting)}{formatted_key(event.key, event.label.optionality)}: "

    def close_value(self, event: _Event) -> str:
        return ";\n"

    def open_generic(self, event: _Event) -> str | None:
        if isinstance(event.label, ListLabel | IteratorLabel):
            return "Array<"
        return None

    def close_generic(self, event: _Event) -> str | None:
        if isinstance(event.label, ListLabel | IteratorLabel):
            return ">"
        return None

    def emit_primitive(self, event: _Event) -> str:
        label: PrimitiveLabel = event.label  # type: ignore[assignment]
        return label.typescript

    def emit_named_type(self, event: _Event) -> str:
        assert event.label is not None
        return f"{event.label.name}"


def typescript(source: Any, *, name: str) -> str:
    """Render ``source`` as ``export interface <name> { ... }``."""
    return render(
        schema_label(source),
        TypeScriptDelegate(),
        StringBuffer(),
        TypeScriptOptions(name=name),
    )
