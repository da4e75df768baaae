"""JSON text describing each field's declared type.

Every scalar renders as ``{ "type": <name>, "details": [<args>], "required": <bool> }``
and lists as ``{ "type": "list", "of": <item> }``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from draftschema.formatters._common import pad, schema_label, separator
from draftschema.reporter import Event, ReporterDelegate, StringBuffer, render

if TYPE_CHECKING:
    from draftschema.labels import PrimitiveLabel

type _Event = Event[StringBuffer, None]


class SerializeFormatDelegate(ReporterDelegate[StringBuffer, None]):
    def open_schema(self, event: _Event) -> str:
        return "{\n"

    def close_schema(self, event: _Event) -> str:
        return "}"

    def open_dictionary(self, event: _Event) -> str:
        return "{\n"

    def close_dictionary(self, event: _Event) -> str:
        return f"{pad(event.nesting)}}}"

    def emit_key(self, event: _Event) -> str:
        return f"{pad(event.nesting)}{json.dumps(event.key)}: "

    def close_value(self, event: _Event) -> str:
        return separator(event.position)

    def open_generic(self, event: _Event) -> str:
        assert event.label is not None
        return f'{{ "type": {json.dumps(event.label.kind)}, "of": '

    def close_generic(self, event: _Event) -> str:
        return " }"

    def emit_primitive(self, event: _Event) -> str:
        label: PrimitiveLabel = event.label  # type: ignore[assignment]
        schema_type = label.schema_type
        return (
            f'{{ "type": {json.dumps(schema_type.name)}, '
            f'"details": {json.dumps(list(schema_type.args))}, '
            f'"required": {json.dumps(event.required)} }}'
        )

    def emit_named_type(self, event: _Event) -> str:
        assert event.label is not None
        return json.dumps(event.label.name)


def serialize_format(source: Any) -> str:
    """Render ``source`` as JSON text; the result parses with ``json.loads``."""
    return render(schema_label(source), SerializeFormatDelegate(), StringBuffer())
