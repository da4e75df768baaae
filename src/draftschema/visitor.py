"""Position-aware traversal over label trees.

The ``Visitor`` decides, for every label it reaches, which ``Position`` the
label occupies and which delegate method handles it. It holds no traversal
state: recursion into children is the delegate's job, so each delegate
controls what happens between entering and leaving a container.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Protocol

from draftschema.errors import ProtocolError
from draftschema.labels import (
    DictionaryLabel,
    IteratorLabel,
    Label,
    ListLabel,
    Optionality,
    PointerLabel,
    PrimitiveLabel,
    generic_item,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from draftschema.labels import GenericLabel


class Position(Enum):
    """Where a label sits relative to its container."""

    WHOLE_SCHEMA = auto()
    FIRST = auto()
    MIDDLE = auto()
    LAST = auto()
    ONLY = auto()
    LIST_ITEM = auto()
    POINTER_ITEM = auto()
    ITERATOR_ITEM = auto()
    ANY = auto()


def generic_position(label: GenericLabel) -> Position:
    """The fixed position of a list, pointer or iterator's single item."""
    match label:
        case ListLabel():
            return Position.LIST_ITEM
        case PointerLabel():
            return Position.POINTER_ITEM
        case IteratorLabel():
            return Position.ITERATOR_ITEM


def member_position(index: int, count: int) -> Position:
    if count == 1:
        return Position.ONLY
    if index == 0:
        return Position.FIRST
    if index == count - 1:
        return Position.LAST
    return Position.MIDDLE


def iter_members(label: DictionaryLabel) -> Iterator[tuple[str, Label, Position]]:
    """Yield ``(key, member, position)`` in declaration order."""
    count = len(label.members)
    for index, (key, member) in enumerate(label.members):
        yield key, member, member_position(index, count)


class VisitorDelegate[R](Protocol):
    """Handlers the visitor dispatches to, one per label shape."""

    def primitive(self, label: PrimitiveLabel, position: Position) -> R: ...

    def generic(self, label: GenericLabel, position: Position) -> R: ...

    def dictionary(self, label: DictionaryLabel, position: Position) -> R: ...

    def named(self, label: Label, position: Position) -> R: ...


class Visitor[R]:
    """Dispatch labels to a delegate by shape.

    A label carrying a name is dispatched to ``named`` instead of being
    entered, except in the whole-schema slot, which always describes the
    schema's own structure. This keeps references to records (including
    self-references) from being inlined.
    """

    def __init__(self, delegate: VisitorDelegate[R]) -> None:
        self.delegate = delegate

    def visit(self, label: Label, position: Position = Position.ANY) -> R:
        if label.is_named and position is not Position.WHOLE_SCHEMA:
            return self.delegate.named(label, position)

        match label:
            case PrimitiveLabel():
                return self.delegate.primitive(label, position)
            case ListLabel() | PointerLabel() | IteratorLabel():
                return self.delegate.generic(label, position)
            case DictionaryLabel():
                return self.delegate.dictionary(label, position)
            case _:
                msg = f"Unreachable label {type(label).__name__} at {position.name}"
                raise ProtocolError(msg)


class RecursiveDelegate[R](ABC):
    """Value-producing backend: each handler returns the value for its label.

    Children are visited before their container's handler is called, so
    ``generic`` receives its item's value and ``dictionary``/``schema``
    receive ``members`` as ``(key, value)`` pairs in declaration order.
    """

    @abstractmethod
    def schema(self, label: DictionaryLabel, members: list[tuple[str, R]]) -> Any: ...

    @abstractmethod
    def dictionary(
        self,
        label: DictionaryLabel,
        members: list[tuple[str, R]],
        *,
        required: bool,
    ) -> R: ...

    @abstractmethod
    def primitive(self, label: PrimitiveLabel, *, required: bool) -> R: ...

    @abstractmethod
    def generic(self, item: R, label: GenericLabel, *, required: bool) -> R: ...

    @abstractmethod
    def named(self, label: Label, *, required: bool) -> R: ...


def _slot_required(label: Label) -> bool:
    # structural slots (list items, reference targets) are always present
    return label.optionality is not Optionality.OPTIONAL


class RecursiveVisitor[R]:
    """Drive a ``RecursiveDelegate`` bottom-up over a label tree."""

    def __init__(self, delegate: RecursiveDelegate[R]) -> None:
        self.delegate = delegate
        self._visitor: Visitor[Any] = Visitor(self)

    def run(self, label: Label) -> Any:
        return self._visitor.visit(label, Position.WHOLE_SCHEMA)

    def primitive(self, label: PrimitiveLabel, position: Position) -> R:
        return self.delegate.primitive(label, required=_slot_required(label))

    def generic(self, label: GenericLabel, position: Position) -> R:
        item = self._visitor.visit(generic_item(label), generic_position(label))
        return self.delegate.generic(item, label, required=_slot_required(label))

    def dictionary(self, label: DictionaryLabel, position: Position) -> Any:
        members = [
            (key, self._visitor.visit(member, slot))
            for key, member, slot in iter_members(label)
        ]
        if position is Position.WHOLE_SCHEMA:
            return self.delegate.schema(label, members)
        return self.delegate.dictionary(
            label,
            members,
            required=_slot_required(label),
        )

    def named(self, label: Label, position: Position) -> R:
        return self.delegate.named(label, required=_slot_required(label))
