"""Leaf behaviour of scalar types.

A ``Primitive`` knows how to describe, validate, serialize and parse one kind
of leaf value. Scalar type nodes wrap a primitive and add requiredness,
naming and draft widening.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, dataclass_transform

from draftschema.labels import PrimitiveLabel, primitive_label

if TYPE_CHECKING:
    from draftschema.validation import ValidationBuilder, ValidationEngine


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Primitive(ABC):
    """Base for leaf definitions.

    Subclasses are registered by tag; the tag is the scalar's schema type
    name (``Text``, ``SingleLine``...) and must be unique.
    """

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[Primitive]]] = {}

    typescript: ClassVar[str] = "unknown"
    description: ClassVar[str | None] = None

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register primitive subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.removesuffix("Primitive")

        if (existing := Primitive.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Primitive.registry[cls.tag] = cls

    @property
    def args(self) -> tuple[str, ...]:
        """Declaration arguments shown by the source-form renderer."""
        return ()

    @property
    def label(self) -> PrimitiveLabel:
        return primitive_label(
            self.tag,
            typescript=self.typescript,
            description=self.description,
            args=self.args,
        )

    @abstractmethod
    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        """Build the validator for a present value."""

    def serialize(self, value: Any) -> Any:
        return value

    def parse(self, wire: Any) -> Any:
        return wire


class TextPrimitive(Primitive, tag="Text"):
    typescript = "string"

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        return engine.is_string()


class NumberPrimitive(Primitive, tag="Number"):
    typescript = "number"

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        return engine.is_number()


class FloatPrimitive(Primitive, tag="Float"):
    typescript = "number"
    description = "float"

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        return engine.is_number()


class IntegerPrimitive(Primitive, tag="Integer"):
    typescript = "number"
    description = "integer"

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        return engine.is_integer()


class BooleanPrimitive(Primitive, tag="Boolean"):
    typescript = "boolean"

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        return engine.is_boolean()


class AnyPrimitive(Primitive, tag="Any"):
    typescript = "unknown"
    description = "any"

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        return engine.anything()


class SingleLinePrimitive(TextPrimitive, tag="SingleLine"):
    """Text without line breaks."""

    description = "single line string"

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        return (
            super()
            .validation(engine)
            .and_then(engine.is_(lambda value: "\n" not in value, "string:single-line"))
        )


class SingleWordPrimitive(TextPrimitive, tag="SingleWord"):
    """Text without any whitespace."""

    description = "single word string"

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        return (
            super()
            .validation(engine)
            .and_then(
                engine.is_(
                    lambda value: not any(c.isspace() for c in value),
                    "string:single-word",
                ),
            )
        )
