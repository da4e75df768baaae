"""GraphQL object type definitions.

Anonymous nested dictionaries cannot be written inline in GraphQL, so each
one is hoisted into its own type named after its parent and key
(``MediumArticle`` + ``geo`` -> ``MediumArticleGeo``). Hoisted types come
first, in the order they close, followed by the root type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from draftschema.formatters._common import capitalize, schema_label
from draftschema.labels import IteratorLabel, ListLabel
from draftschema.reporter import Event, ReporterDelegate, render

if TYPE_CHECKING:
    from collections.abc import Mapping

    from draftschema.labels import PrimitiveLabel

DEFAULT_GRAPHQL_SCALARS: Mapping[str, str] = MappingProxyType(
    {
        "Text": "String",
        "SingleLine": "SingleLine",
        "SingleWord": "SingleWord",
        "Integer": "Int",
        "Float": "Float",
        "Number": "Float",
        "Boolean": "Boolean",
        "Any": "JSON",
    },
)


@dataclass(frozen=True)
class GraphQLOptions:
    """``scalar_map`` maps schema type names to GraphQL scalars.

    Names missing from the map are used as-is.
    """

    name: str
    scalar_map: Mapping[str, str] = field(default_factory=lambda: DEFAULT_GRAPHQL_SCALARS)


class TypeBuffer:
    """Body of one ``type Name { ... }`` block."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.key: str | None = None
        self._parts = [f"type {name} {{\n"]

    def push(self, s: str) -> None:
        self._parts.append(s)

    def done(self) -> str:
        return "".join(self._parts)


class DocumentBuffer(TypeBuffer):
    """Root type plus every type hoisted out of it."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.hoisted: list[str] = []

    def done(self) -> str:
        return "\n\n".join([*self.hoisted, super().done()])


type _Event = Event[TypeBuffer, GraphQLOptions]


def _is_sequence(label: Any) -> bool:
    return isinstance(label, ListLabel | IteratorLabel)


class GraphQLDelegate(ReporterDelegate[TypeBuffer, GraphQLOptions]):
    def close_schema(self, event: _Event) -> str:
        return "}"

    def emit_key(self, event: _Event) -> str:
        event.buffer.key = event.key
        return f"  {event.key}: "

    def close_value(self, event: _Event) -> str:
        return "!\n" if event.required else "\n"

    def open_dictionary(self, event: _Event) -> None:
        parent = event.buffer
        name = f"{parent.name}{capitalize(parent.key or '')}"
        parent.push(name)
        event.reporter.push_state(TypeBuffer(name))

    def close_dictionary(self, event: _Event) -> None:
        event.buffer.push("}")
        finished = event.reporter.pop_state().buffer
        event.reporter.root.buffer.hoisted.append(finished.done())

    def open_generic(self, event: _Event) -> str | None:
        return "[" if _is_sequence(event.label) else None

    def close_generic(self, event: _Event) -> str | None:
        return "!]" if _is_sequence(event.label) else None

    def emit_primitive(self, event: _Event) -> str:
        label: PrimitiveLabel = event.label  # type: ignore[assignment]
        name = label.schema_type.name
        return event.options.scalar_map.get(name, name)

    def emit_named_type(self, event: _Event) -> str:
        assert event.label is not None
        return f"{event.label.name}"


def graphql(
    source: Any,
    *,
    name: str,
    scalar_map: Mapping[str, str] | None = None,
) -> str:
    """Render ``source`` as GraphQL type definitions rooted at ``name``."""
    options = GraphQLOptions(
        name=name,
        scalar_map=DEFAULT_GRAPHQL_SCALARS if scalar_map is None else scalar_map,
    )
    return render(schema_label(source), GraphQLDelegate(), DocumentBuffer(name), options)
