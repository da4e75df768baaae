"""Human-readable description of a schema.

    {
      hed: <single line string>,
      dek?: <string>,
      tags?: list of <single word string>
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from draftschema.formatters._common import pad, schema_label, separator
from draftschema.labels import IteratorLabel, ListLabel, Optionality, PointerLabel
from draftschema.reporter import Event, ReporterDelegate, StringBuffer, render

if TYPE_CHECKING:
    from draftschema.labels import PrimitiveLabel


def formatted_key(key: str, optionality: Optionality) -> str:
    if optionality is Optionality.OPTIONAL:
        return f"{key}?"
    return key


class DescriptionDelegate(ReporterDelegate[StringBuffer, None]):
    def open_schema(self, event: Event[StringBuffer, None]) -> str:
        return "{\n"

    def close_schema(self, event: Event[StringBuffer, None]) -> str:
        return "}"

    def open_dictionary(self, event: Event[StringBuffer, None]) -> str:
        return "{\n"

    def close_dictionary(self, event: Event[StringBuffer, None]) -> str:
        return f"{pad(event.nesting)}}}"

    def emit_key(self, event: Event[StringBuffer, None]) -> str:
        assert event.key is not None
        assert event.label is not None
        return f"{pad(event.nesting)}{formatted_key(event.key, event.label.optionality)}: "

    def close_value(self, event: Event[StringBuffer, None]) -> str:
        return separator(event.position)

    def open_generic(self, event: Event[StringBuffer, None]) -> str:
        match event.label:
            case ListLabel():
                return "list of "
            case PointerLabel():
                return "has one "
            case IteratorLabel():
                return "has many "
            case _:
                msg = f"Not a generic label: {event.label!r}"
                raise TypeError(msg)

    def emit_primitive(self, event: Event[StringBuffer, None]) -> str:
        label: PrimitiveLabel = event.label  # type: ignore[assignment]
        return f"<{label.description}>"

    def emit_named_type(self, event: Event[StringBuffer, None]) -> str:
        assert event.label is not None
        return f"{event.label.name}"


def describe(source: Any) -> str:
    """Render ``source`` (a schema, record or dictionary label) for people."""
    return render(schema_label(source), DescriptionDelegate(), StringBuffer())
