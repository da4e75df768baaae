"""Validation engine: leaf predicates and the combinators that compose them.

Type nodes never reach for these globally. They receive a ``ValidationEngine``
and build a ``ValidationBuilder`` from its methods, so a different engine (or
a scripted stub in tests) can be injected anywhere validation happens.

Builders are descriptions. Nothing runs until ``ValidationEngine.validate``
awaits the builder against a value, producing an ordered list of
``ValidationError`` values. Failures are collected, never raised.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorMessage:
    """Uniform failure payload: a ``name`` plus opaque ``details``."""

    name: str
    details: Any = None


@dataclass(frozen=True)
class ValidationError:
    """A failure at ``path`` (keys and list indexes, outermost first)."""

    path: tuple[str, ...]
    message: ErrorMessage

    def prefixed(self, segment: str) -> ValidationError:
        return ValidationError(path=(segment, *self.path), message=self.message)

    def __str__(self) -> str:
        location = ".".join(self.path) or "<root>"
        return f"{location}: {self.message.name} ({self.message.details!r})"


def type_error(details: str, path: Sequence[str] = ()) -> ValidationError:
    """Build the ``type`` error that leaf predicates report."""
    return ValidationError(path=tuple(path), message=ErrorMessage("type", details))


class Environment(Protocol):
    """Property access used by object validators."""

    def get(self, obj: Any, key: str) -> Any: ...


class DictEnvironment:
    """Reads keys from mappings; anything missing reads as ``None``."""

    def get(self, obj: Any, key: str) -> Any:
        if obj is None:
            return None
        if isinstance(obj, Mapping):
            return obj.get(key)
        return getattr(obj, key, None)


DEFAULT_ENVIRONMENT = DictEnvironment()

type Check = Callable[[Any], bool | Awaitable[bool]]
type ErrorMapper = Callable[[list[ValidationError]], list[ValidationError]]


class ValidationBuilder(ABC):
    """Composable validation step."""

    @abstractmethod
    async def run(self, value: Any, env: Environment) -> list[ValidationError]:
        """Validate ``value`` and return every failure found."""
        ...

    def and_then(self, other: ValidationBuilder) -> ValidationBuilder:
        """Run ``other`` only when this step passed."""
        return AndThen(self, other)

    def or_(self, other: ValidationBuilder) -> ValidationBuilder:
        """Pass when either step passes."""
        return Or(self, other)

    def catch(self, mapper: ErrorMapper) -> ValidationBuilder:
        """Rewrite the failures of this step."""
        return Catch(self, mapper)


@dataclass(frozen=True)
class Predicate(ValidationBuilder):
    """Leaf check; reports ``message`` when ``check`` is false."""

    check: Check
    message: ErrorMessage

    async def run(self, value: Any, env: Environment) -> list[ValidationError]:
        result = self.check(value)
        if inspect.isawaitable(result):
            result = await result
        if result:
            return []
        return [ValidationError(path=(), message=self.message)]


@dataclass(frozen=True)
class AndThen(ValidationBuilder):
    first: ValidationBuilder
    second: ValidationBuilder

    async def run(self, value: Any, env: Environment) -> list[ValidationError]:
        errors = await self.first.run(value, env)
        if errors:
            return errors
        return await self.second.run(value, env)


@dataclass(frozen=True)
class Or(ValidationBuilder):
    """Alternation.

    When both sides fail, the result is a single ``multiple`` error whose
    details are the two failure lists, left first.
    """

    left: ValidationBuilder
    right: ValidationBuilder

    async def run(self, value: Any, env: Environment) -> list[ValidationError]:
        left_errors = await self.left.run(value, env)
        if not left_errors:
            return []
        right_errors = await self.right.run(value, env)
        if not right_errors:
            return []
        return [
            ValidationError(
                path=(),
                message=ErrorMessage("multiple", [left_errors, right_errors]),
            ),
        ]


@dataclass(frozen=True)
class Catch(ValidationBuilder):
    inner: ValidationBuilder
    mapper: ErrorMapper

    async def run(self, value: Any, env: Environment) -> list[ValidationError]:
        errors = await self.inner.run(value, env)
        if not errors:
            return []
        return self.mapper(errors)


@dataclass(frozen=True)
class ArrayOf(ValidationBuilder):
    """Validate a list, then every item with ``item``."""

    item: ValidationBuilder

    async def run(self, value: Any, env: Environment) -> list[ValidationError]:
        if not isinstance(value, list | tuple):
            return [type_error("array")]
        errors: list[ValidationError] = []
        for index, entry in enumerate(value):
            item_errors = await self.item.run(entry, env)
            errors.extend(error.prefixed(str(index)) for error in item_errors)
        return errors


@dataclass(frozen=True)
class ObjectOf(ValidationBuilder):
    """Validate each declared field; ``strict`` also rejects unknown keys."""

    fields: tuple[tuple[str, ValidationBuilder], ...]
    strict: bool = False

    async def run(self, value: Any, env: Environment) -> list[ValidationError]:
        if value is None or isinstance(value, _SCALARS):
            return [type_error("object")]
        errors: list[ValidationError] = []
        for key, builder in self.fields:
            field_errors = await builder.run(env.get(value, key), env)
            errors.extend(error.prefixed(key) for error in field_errors)
        if self.strict and isinstance(value, Mapping):
            known = {key for key, _ in self.fields}
            errors.extend(
                type_error("absent", (str(key),)) for key in value if key not in known
            )
        return errors


_SCALARS = (str, bytes, int, float, bool, list, tuple)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


class ValidationEngine:
    """Factory for leaf predicates and aggregate combinators.

    Subclass to change how a predicate is implemented; type nodes only call
    the methods below.
    """

    def is_present(self) -> ValidationBuilder:
        return Predicate(lambda value: value is not None, ErrorMessage("type", "present"))

    def is_absent(self) -> ValidationBuilder:
        return Predicate(lambda value: value is None, ErrorMessage("type", "absent"))

    def is_string(self) -> ValidationBuilder:
        return self.is_(lambda value: isinstance(value, str), "string")

    def is_number(self) -> ValidationBuilder:
        return self.is_(_is_number, "number")

    def is_integer(self) -> ValidationBuilder:
        return self.is_number().and_then(
            self.is_(lambda value: isinstance(value, int) or value.is_integer(), "number:integer"),
        )

    def is_boolean(self) -> ValidationBuilder:
        return self.is_(lambda value: isinstance(value, bool), "boolean")

    def is_(self, check: Check, name: str) -> ValidationBuilder:
        """Custom predicate reported as a ``type`` error named ``name``."""
        return Predicate(check, ErrorMessage("type", name))

    def anything(self) -> ValidationBuilder:
        return Predicate(lambda _value: True, ErrorMessage("any"))

    def array(self, item: ValidationBuilder) -> ValidationBuilder:
        return ArrayOf(item)

    def object(self, fields: Mapping[str, ValidationBuilder]) -> ValidationBuilder:
        return ObjectOf(tuple(fields.items()))

    def strict_object(
        self,
        fields: Mapping[str, ValidationBuilder],
    ) -> ValidationBuilder:
        return ObjectOf(tuple(fields.items()), strict=True)

    async def validate(
        self,
        value: Any,
        builder: ValidationBuilder,
        env: Environment | None = None,
    ) -> list[ValidationError]:
        """Run ``builder`` against ``value`` and return the ordered failures."""
        errors = await builder.run(value, env if env is not None else DEFAULT_ENVIRONMENT)
        logger.debug("validation finished with %d error(s)", len(errors))
        return errors


DEFAULT_ENGINE = ValidationEngine()


def _unwrap_alternatives(errors: list[ValidationError]) -> list[ValidationError]:
    first = errors[0]
    if first.message.name == "multiple":
        alternatives = first.message.details
        if len(alternatives) == 2:
            return alternatives[1]
    return errors


def maybe(engine: ValidationEngine, builder: ValidationBuilder) -> ValidationBuilder:
    """Accept an absent value, otherwise run ``builder``.

    A present but invalid value fails both alternatives. Only the real
    validator's failures are reported; the "not absent" branch is discarded.
    """
    return engine.is_absent().or_(builder).catch(_unwrap_alternatives)


def validation_for(
    engine: ValidationEngine,
    builder: ValidationBuilder,
    *,
    required: bool,
) -> ValidationBuilder:
    """Wrap ``builder`` with the presence rule for a required or optional slot."""
    if required:
        return engine.is_present().and_then(builder)
    return maybe(engine, builder)
