"""Inventory of the type names a schema uses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from draftschema.formatters._common import capitalize, schema_label
from draftschema.visitor import RecursiveDelegate, RecursiveVisitor

if TYPE_CHECKING:
    from draftschema.labels import DictionaryLabel, GenericLabel, Label, PrimitiveLabel


class ListTypesDelegate(RecursiveDelegate[frozenset[str]]):
    def schema(
        self,
        label: DictionaryLabel,
        members: list[tuple[str, frozenset[str]]],
    ) -> list[str]:
        return sorted(frozenset().union(*(names for _, names in members)))

    def dictionary(
        self,
        label: DictionaryLabel,
        members: list[tuple[str, frozenset[str]]],
        *,
        required: bool,
    ) -> frozenset[str]:
        return frozenset({"Dictionary"}).union(*(names for _, names in members))

    def primitive(self, label: PrimitiveLabel, *, required: bool) -> frozenset[str]:
        return frozenset({label.schema_type.name})

    def generic(
        self,
        item: frozenset[str],
        label: GenericLabel,
        *,
        required: bool,
    ) -> frozenset[str]:
        return item | {capitalize(label.kind)}

    def named(self, label: Label, *, required: bool) -> frozenset[str]:
        assert label.name is not None
        return frozenset({label.name})


def list_types(source: Any) -> list[str]:
    """Sorted names of every scalar, container kind and referenced record used."""
    return RecursiveVisitor(ListTypesDelegate()).run(schema_label(source))
