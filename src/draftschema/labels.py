"""Label tree: the pure-data shape description of a Type node.

Every rendering backend reads labels, never type nodes. A label is computed
on demand from the type node that owns it and is never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar, dataclass_transform


class Optionality(Enum):
    """How a slot participates in its container.

    ``NONE`` marks a structural slot that is present whenever the container
    is visited (a list's item, a reference's target), as opposed to a field
    the author declared required or optional.
    """

    REQUIRED = "required"
    OPTIONAL = "optional"
    NONE = "none"


@dataclass(frozen=True)
class SchemaType:
    """Name and arguments a scalar was declared with, e.g. ``Url("absolute")``."""

    name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
@dataclass_transform(frozen_default=True, kw_only_default=True)
class Label:
    """Base for labels. ``kind`` is the registered tag."""

    kind: ClassVar[str]
    registry: ClassVar[dict[str, type[Label]]] = {}

    optionality: Optionality = Optionality.NONE
    name: str | None = None

    def __init_subclass__(cls, kind: str | None = None) -> None:
        """Register label subclass under its kind."""
        dataclass(frozen=True, kw_only=True)(cls)
        cls.kind = kind if kind is not None else cls.__name__.lower().removesuffix(
            "label",
        )

        if (existing := Label.registry.get(cls.kind)) and existing is not cls:
            msg = (
                f"Kind '{cls.kind}' already registered to {existing}. "
                "Choose a different kind."
            )
            raise ValueError(msg)

        Label.registry[cls.kind] = cls

    @property
    def is_required(self) -> bool:
        return self.optionality is Optionality.REQUIRED

    @property
    def is_named(self) -> bool:
        return self.name is not None

    def with_optionality(self, optionality: Optionality) -> Label:
        return replace(self, optionality=optionality)

    def with_name(self, name: str | None) -> Label:
        return replace(self, name=name)


class PrimitiveLabel(Label, kind="primitive"):
    """Leaf value.

    Attributes:
        schema_type: declared scalar name and arguments
        description: human wording used by ``describe``
        typescript: TypeScript type used by ``typescript``

    """

    schema_type: SchemaType
    description: str
    typescript: str


class ListLabel(Label, kind="list"):
    """Homogeneous list; ``item`` always has ``Optionality.NONE``."""

    item: Label


class DictionaryLabel(Label, kind="dictionary"):
    """Ordered key -> label members."""

    members: tuple[tuple[str, Label], ...] = ()

    def member(self, key: str) -> Label:
        for member_key, label in self.members:
            if member_key == key:
                return label
        raise KeyError(key)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.members)


class PointerLabel(Label, kind="pointer"):
    """Single reference to a named dictionary (``has_one``)."""

    schema_type: SchemaType
    entity: Label


class IteratorLabel(Label, kind="iterator"):
    """Sequence of references to a named dictionary (``has_many``)."""

    schema_type: SchemaType
    item: Label


type GenericLabel = ListLabel | PointerLabel | IteratorLabel


def reference_label(name: str) -> DictionaryLabel:
    """Label standing for a named dictionary without inlining its members.

    Traversals dispatch named labels as references, so the members are never
    read. Resolve the shape itself through a ``Registry``.
    """
    return DictionaryLabel(name=name)


def generic_item(label: GenericLabel) -> Label:
    """Return the single inner label of a list, pointer or iterator."""
    match label:
        case ListLabel(item=item) | IteratorLabel(item=item):
            return item
        case PointerLabel(entity=entity):
            return entity


def primitive_label(
    name: str,
    *,
    typescript: str,
    description: str | None = None,
    args: tuple[str, ...] = (),
    optionality: Optionality = Optionality.NONE,
) -> PrimitiveLabel:
    """Build a primitive label; ``description`` defaults to the TypeScript type."""
    return PrimitiveLabel(
        optionality=optionality,
        schema_type=SchemaType(name=name, args=args),
        description=description or typescript,
        typescript=typescript,
    )
