"""Reporter: turns visitor dispatch into a flat stream of backend events.

String-producing backends implement a ``ReporterDelegate``. The ``Reporter``
walks the label tree with a ``Visitor``, enforces the order in which events
may occur, and appends whatever each handler returns to the active buffer.

Two stacks are kept per traversal:

* protocol frames (schema, dictionary, value, generic) that reject events
  which are invalid where they occur;
* state frames (buffer + nesting) that delegates may push and pop, e.g. to
  write a nested anonymous dictionary into its own top-level declaration
  and then resume the parent's output.

Both are discarded when the traversal finishes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Protocol

from draftschema.errors import ProtocolError, UnhandledEventError, UnsupportedEventError
from draftschema.labels import generic_item
from draftschema.visitor import Position, Visitor, generic_position, iter_members

if TYPE_CHECKING:
    from draftschema.labels import (
        DictionaryLabel,
        GenericLabel,
        Label,
        PrimitiveLabel,
    )

logger = logging.getLogger(__name__)


class Accumulator[R](Protocol):
    """Buffer a reporter writes handler output into."""

    def push(self, s: str) -> None: ...

    def done(self) -> R: ...


class StringBuffer:
    """Plain string accumulator."""

    def __init__(self, initial: str = "") -> None:
        self._parts = [initial]

    def push(self, s: str) -> None:
        self._parts.append(s)

    def done(self) -> str:
        return "".join(self._parts)


@dataclass
class ReporterState[B]:
    """A buffer and the nesting depth of output written into it."""

    buffer: B
    nesting: int = 0


@dataclass(frozen=True)
class Event[B, O]:
    """Arguments passed to every delegate handler.

    ``key`` is set for ``emit_key``; ``required`` reflects the label the
    event concerns (the member for keys and values).
    """

    reporter: Reporter[Any, Any]
    buffer: B
    options: O
    nesting: int
    position: Position = Position.ANY
    label: Label | None = None
    key: str | None = None
    required: bool = False


class ReporterDelegate[B, O]:
    """Event handlers of a string backend.

    Structural handlers default to emitting nothing. Leaf handlers have no
    sensible default: a backend that can reach a primitive or a named
    reference must say how to render it. Templated values are unsupported
    unless a backend opts in.

    A handler may return a string to append to the active buffer, or write to
    ``event.buffer`` itself and return ``None``.
    """

    def open_schema(self, event: Event[B, O]) -> str | None:
        return None

    def close_schema(self, event: Event[B, O]) -> str | None:
        return None

    def open_dictionary(self, event: Event[B, O]) -> str | None:
        return None

    def close_dictionary(self, event: Event[B, O]) -> str | None:
        return None

    def emit_key(self, event: Event[B, O]) -> str | None:
        return None

    def close_value(self, event: Event[B, O]) -> str | None:
        return None

    def open_generic(self, event: Event[B, O]) -> str | None:
        return None

    def close_generic(self, event: Event[B, O]) -> str | None:
        return None

    def emit_primitive(self, event: Event[B, O]) -> str | None:
        raise UnhandledEventError(self, "emit_primitive")

    def end_primitive(self, event: Event[B, O]) -> str | None:
        return None

    def emit_named_type(self, event: Event[B, O]) -> str | None:
        raise UnhandledEventError(self, "emit_named_type")

    def open_templated_value(self, event: Event[B, O]) -> str | None:
        raise UnsupportedEventError(self, "open_templated_value")

    def close_templated_value(self, event: Event[B, O]) -> str | None:
        raise UnsupportedEventError(self, "close_templated_value")


class Frame(Enum):
    SCHEMA = auto()
    DICTIONARY = auto()
    VALUE = auto()
    GENERIC = auto()
    TEMPLATE = auto()


_VALUE_SLOTS = (Frame.VALUE, Frame.GENERIC, Frame.TEMPLATE)
_KEY_SLOTS = (Frame.SCHEMA, Frame.DICTIONARY)


@dataclass
class _OpenFrame:
    kind: Frame
    state: ReporterState[Any]


class Reporter[B: Accumulator[Any], O]:
    """Drive a ``ReporterDelegate`` over one label tree.

    A reporter is single use: create one per traversal.
    """

    def __init__(self, delegate: ReporterDelegate[B, O], options: O, buffer: B) -> None:
        self.delegate = delegate
        self.options = options
        self._states: list[ReporterState[Any]] = [ReporterState(buffer)]
        self._frames: list[_OpenFrame] = []
        self._visitor: Visitor[None] = Visitor(self)

    # -- state stack ----------------------------------------------------------

    @property
    def state(self) -> ReporterState[Any]:
        return self._states[-1]

    @property
    def root(self) -> ReporterState[B]:
        return self._states[0]

    def push_state(self, buffer: Any, nesting: int = 1) -> ReporterState[Any]:
        """Redirect output into ``buffer`` until the matching ``pop_state``."""
        state = ReporterState(buffer, nesting)
        self._states.append(state)
        return state

    def pop_state(self) -> ReporterState[Any]:
        """Finish the active state and resume the one below it."""
        if len(self._states) == 1:
            msg = "Cannot pop the root reporter state"
            raise ProtocolError(msg)
        return self._states.pop()

    # -- traversal ------------------------------------------------------------

    def run(self, label: DictionaryLabel) -> Any:
        """Report ``label`` as a whole schema and return the finished output."""
        self._visitor.visit(label, Position.WHOLE_SCHEMA)
        if self._frames:
            msg = f"Traversal ended inside {self._frames[-1].kind.name}"
            raise ProtocolError(msg)
        return self.finish()

    def finish(self) -> Any:
        return self.root.buffer.done()

    def primitive(self, label: PrimitiveLabel, position: Position) -> None:
        self.emit_primitive(label, position)
        self.end_primitive(label, position)

    def named(self, label: Label, position: Position) -> None:
        self.emit_named_type(label, position)

    def generic(self, label: GenericLabel, position: Position) -> None:
        self.open_generic(label, position)
        self._visitor.visit(generic_item(label), generic_position(label))
        self.close_generic(label, position)

    def dictionary(self, label: DictionaryLabel, position: Position) -> None:
        whole = position is Position.WHOLE_SCHEMA
        if whole:
            self.open_schema(label)
        else:
            self.open_dictionary(label, position)

        for key, member, slot in iter_members(label):
            self.emit_key(key, slot, member)
            self._visitor.visit(member, slot)
            self.close_value(slot, member)

        if whole:
            self.close_schema(label)
        else:
            self.close_dictionary(label, position)

    # -- events ---------------------------------------------------------------

    def open_schema(self, label: DictionaryLabel) -> None:
        if self._frames:
            msg = "open_schema must be the first event of a traversal"
            raise ProtocolError(msg)
        self._frames.append(_OpenFrame(Frame.SCHEMA, self.state))
        self.state.nesting += 1
        self._emit("open_schema", Position.WHOLE_SCHEMA, label)

    def close_schema(self, label: DictionaryLabel) -> None:
        self._leave(Frame.SCHEMA, "close_schema")
        self._emit("close_schema", Position.WHOLE_SCHEMA, label)

    def open_dictionary(self, label: DictionaryLabel, position: Position) -> None:
        self._enter(Frame.DICTIONARY, _VALUE_SLOTS, "open_dictionary")
        self.state.nesting += 1
        self._emit("open_dictionary", position, label)

    def close_dictionary(self, label: DictionaryLabel, position: Position) -> None:
        frame = self._leave(Frame.DICTIONARY, "close_dictionary")
        frame.state.nesting -= 1
        self._emit("close_dictionary", position, label)

    def emit_key(self, key: str, position: Position, member: Label) -> None:
        self._expect(_KEY_SLOTS, "emit_key")
        self._emit("emit_key", position, member, key=key)
        self._frames.append(_OpenFrame(Frame.VALUE, self.state))

    def close_value(self, position: Position, member: Label) -> None:
        self._leave(Frame.VALUE, "close_value")
        self._emit("close_value", position, member)

    def open_generic(self, label: GenericLabel, position: Position) -> None:
        self._enter(Frame.GENERIC, _VALUE_SLOTS, "open_generic")
        self._emit("open_generic", position, label)

    def close_generic(self, label: GenericLabel, position: Position) -> None:
        self._leave(Frame.GENERIC, "close_generic")
        self._emit("close_generic", position, label)

    def open_templated_value(self, label: Label, position: Position) -> None:
        self._enter(Frame.TEMPLATE, _VALUE_SLOTS, "open_templated_value")
        self._emit("open_templated_value", position, label)

    def close_templated_value(self, label: Label, position: Position) -> None:
        self._leave(Frame.TEMPLATE, "close_templated_value")
        self._emit("close_templated_value", position, label)

    def emit_primitive(self, label: PrimitiveLabel, position: Position) -> None:
        self._expect(_VALUE_SLOTS, "emit_primitive")
        self._emit("emit_primitive", position, label)

    def end_primitive(self, label: PrimitiveLabel, position: Position) -> None:
        self._expect(_VALUE_SLOTS, "end_primitive")
        self._emit("end_primitive", position, label)

    def emit_named_type(self, label: Label, position: Position) -> None:
        self._expect(_VALUE_SLOTS, "emit_named_type")
        self._emit("emit_named_type", position, label)

    # -- internals ------------------------------------------------------------

    def _expect(self, allowed: tuple[Frame, ...], event: str) -> None:
        active = self._frames[-1].kind if self._frames else None
        if active not in allowed:
            where = active.name if active is not None else "no open frame"
            msg = f"'{event}' is not valid in {where}"
            raise ProtocolError(msg)

    def _enter(self, kind: Frame, allowed: tuple[Frame, ...], event: str) -> None:
        self._expect(allowed, event)
        self._frames.append(_OpenFrame(kind, self.state))

    def _leave(self, kind: Frame, event: str) -> _OpenFrame:
        self._expect((kind,), event)
        return self._frames.pop()

    def _emit(
        self,
        event: str,
        position: Position,
        label: Label | None,
        key: str | None = None,
    ) -> None:
        state = self.state
        logger.debug("%s at %s (nesting %d)", event, position.name, state.nesting)
        handler = getattr(self.delegate, event)
        result = handler(
            Event(
                reporter=self,
                buffer=state.buffer,
                options=self.options,
                nesting=state.nesting,
                position=position,
                label=label,
                key=key,
                required=label.is_required if label is not None else False,
            ),
        )
        if isinstance(result, str):
            state.buffer.push(result)


def render[R, O](
    label: DictionaryLabel,
    delegate: ReporterDelegate[Any, O],
    buffer: Accumulator[R],
    options: O = None,  # type: ignore[assignment]
) -> R:
    """Report ``label`` through ``delegate`` into a fresh ``buffer``."""
    return Reporter(delegate, options, buffer).run(label)
