"""Structural dump of a schema as plain ``dict``/``list`` data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from draftschema.formatters._common import capitalize, schema_label
from draftschema.labels import IteratorLabel, ListLabel, PointerLabel
from draftschema.visitor import RecursiveDelegate, RecursiveVisitor

if TYPE_CHECKING:
    from draftschema.labels import DictionaryLabel, GenericLabel, Label, PrimitiveLabel

type Item = dict[str, Any]


class StructuralDelegate(RecursiveDelegate[Item]):
    """One ``{"type": ..., "required": ...}`` entry per label.

    Items of lists and references are structural slots and always report
    ``required: True``.
    """

    def schema(self, label: DictionaryLabel, members: list[tuple[str, Item]]) -> dict[str, Item]:
        return dict(members)

    def dictionary(
        self,
        label: DictionaryLabel,
        members: list[tuple[str, Item]],
        *,
        required: bool,
    ) -> Item:
        return {"type": "Dictionary", "members": dict(members), "required": required}

    def primitive(self, label: PrimitiveLabel, *, required: bool) -> Item:
        schema_type = label.schema_type
        if schema_type.args:
            return {"type": schema_type.name, "args": list(schema_type.args), "required": required}
        return {"type": schema_type.name, "required": required}

    def generic(self, item: Item, label: GenericLabel, *, required: bool) -> Item:
        match label:
            case ListLabel():
                return {"type": "List", "items": item, "required": required}
            case PointerLabel(schema_type=schema_type):
                return {
                    "type": "Pointer",
                    "kind": schema_type.name,
                    "entity": item,
                    "required": required,
                }
            case IteratorLabel(schema_type=schema_type):
                return {
                    "type": "Iterator",
                    "kind": schema_type.name,
                    "items": item,
                    "required": required,
                }

    def named(self, label: Label, *, required: bool) -> Item:
        return {"type": capitalize(label.kind), "name": label.name, "required": required}


def to_structural_json(source: Any) -> dict[str, Item]:
    """Dump ``source`` to JSON-compatible data, keyed by member name."""
    return RecursiveVisitor(StructuralDelegate()).run(schema_label(source))
