"""Exception hierarchy for schema construction and rendering.

Validation failures are not exceptions: they are collected as
``ValidationError`` values by the validation engine. The exceptions here
signal programming mistakes, either in a backend delegate or in the way a
schema was declared.
"""

from __future__ import annotations


class SchemaError(Exception):
    """Base class for all draftschema exceptions."""


class ProtocolError(SchemaError):
    """A traversal event arrived that the active state cannot handle.

    Raised for unreachable label kinds and for events that are invalid in the
    current reporter frame. Always a bug in a backend or in the traversal.
    """


class UnhandledEventError(ProtocolError):
    """A backend delegate has no handler for a reachable label shape."""

    def __init__(self, delegate: object, event: str) -> None:
        self.delegate = delegate
        self.event = event
        msg = (
            f"{type(delegate).__name__} does not handle '{event}'. "
            "Implement the handler for every label shape the backend can reach."
        )
        super().__init__(msg)


class UnsupportedEventError(ProtocolError):
    """A backend was asked for an event it declares unsupported."""

    def __init__(self, delegate: object, event: str) -> None:
        self.delegate = delegate
        self.event = event
        msg = f"{type(delegate).__name__} does not support '{event}'"
        super().__init__(msg)


class DuplicateNameError(SchemaError, ValueError):
    """A name was registered twice to different records."""


class UnknownReferenceError(SchemaError, KeyError):
    """A reference names a record that is not registered."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""
