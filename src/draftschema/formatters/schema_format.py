"""Render a schema back into declaration source.

The output is the body of a ``Schema(...)`` call using the names exported by
``draftschema``:

    {
      "hed": SingleLine().required(),
      "tags": List(SingleWord()),
      "person": has_one("SimpleArticle").required(),
      "author": Author.required()
    }

Named members render as the bare name, so the namespace the output is
evaluated in must bind each name to its declared type.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from draftschema.formatters._common import pad, schema_label, separator
from draftschema.labels import IteratorLabel, ListLabel, PointerLabel
from draftschema.reporter import Event, ReporterDelegate, StringBuffer, render
from draftschema.visitor import Position

if TYPE_CHECKING:
    from draftschema.labels import PrimitiveLabel

type _Event = Event[StringBuffer, None]

_CONSTRUCTORS = {ListLabel: "List", PointerLabel: "has_one", IteratorLabel: "has_many"}
_REFERENCE_SLOTS = (Position.POINTER_ITEM, Position.ITERATOR_ITEM)


def _required_suffix(event: _Event) -> str:
    return ".required()" if event.required else ""


class SchemaFormatDelegate(ReporterDelegate[StringBuffer, None]):
    def open_schema(self, event: _Event) -> str:
        return "{\n"

    def close_schema(self, event: _Event) -> str:
        return "}"

    def open_dictionary(self, event: _Event) -> str:
        return "Dictionary({\n"

    def close_dictionary(self, event: _Event) -> str:
        return f"{pad(event.nesting)}}}){_required_suffix(event)}"

    def emit_key(self, event: _Event) -> str:
        return f"{pad(event.nesting)}{json.dumps(event.key)}: "

    def close_value(self, event: _Event) -> str:
        return separator(event.position)

    def open_generic(self, event: _Event) -> str:
        return f"{_CONSTRUCTORS[type(event.label)]}("  # type: ignore[index]

    def close_generic(self, event: _Event) -> str:
        return f"){_required_suffix(event)}"

    def emit_primitive(self, event: _Event) -> str:
        label: PrimitiveLabel = event.label  # type: ignore[assignment]
        args = ", ".join(repr(arg) for arg in label.schema_type.args)
        return f"{label.schema_type.name}({args}){_required_suffix(event)}"

    def emit_named_type(self, event: _Event) -> str:
        assert event.label is not None
        if event.position in _REFERENCE_SLOTS:
            return json.dumps(event.label.name)
        return f"{event.label.name}{_required_suffix(event)}"


def schema_format(source: Any) -> str:
    """Render ``source`` as the field mapping it was declared with."""
    return render(schema_label(source), SchemaFormatDelegate(), StringBuffer())
