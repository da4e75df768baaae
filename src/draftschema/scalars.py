"""Scalar declarations.

Each constructor returns a fresh optional ``ScalarType``; call
``.required()`` on it to make the field mandatory.
"""

from __future__ import annotations

from draftschema.primitives import (
    AnyPrimitive,
    BooleanPrimitive,
    FloatPrimitive,
    IntegerPrimitive,
    NumberPrimitive,
    Primitive,
    SingleLinePrimitive,
    SingleWordPrimitive,
    TextPrimitive,
)
from draftschema.types import ScalarType


def scalar(primitive: Primitive) -> ScalarType:
    """Wrap a primitive that does not widen in draft mode."""
    return ScalarType(primitive=primitive)


def refined(primitive: Primitive, base: ScalarType) -> ScalarType:
    """Wrap a primitive that widens to ``base`` in draft mode."""
    return ScalarType(primitive=primitive, base=base.required(False))


def Text() -> ScalarType:  # noqa: N802
    return scalar(TextPrimitive())


def Number() -> ScalarType:  # noqa: N802
    return scalar(NumberPrimitive())


def Float() -> ScalarType:  # noqa: N802
    return scalar(FloatPrimitive())


def Integer() -> ScalarType:  # noqa: N802
    return scalar(IntegerPrimitive())


def Boolean() -> ScalarType:  # noqa: N802
    return scalar(BooleanPrimitive())


def Any() -> ScalarType:  # noqa: N802
    """Accept any value; rendered as ``unknown`` in TypeScript."""
    return scalar(AnyPrimitive())


def SingleLine() -> ScalarType:  # noqa: N802
    """Text without line breaks; widens to ``Text`` in drafts."""
    return refined(SingleLinePrimitive(), Text())


def SingleWord() -> ScalarType:  # noqa: N802
    """Text without whitespace; widens to ``Text`` in drafts."""
    return refined(SingleWordPrimitive(), Text())
