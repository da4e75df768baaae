"""Type nodes: the behavioural tree a schema is declared with.

The node kinds form a closed set (``AnyType``). Everything that depends on
the kind (labels, draft refinement, validation, serialization, parsing) is a
function that matches exhaustively over that set, so adding a kind is a
change every one of those functions has to acknowledge.

Nodes are frozen. ``required()`` and ``named()`` return new nodes and never
change the kind.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Self,
    assert_never,
    dataclass_transform,
)

from draftschema.labels import (
    DictionaryLabel,
    IteratorLabel,
    Label,
    ListLabel,
    Optionality,
    PointerLabel,
    SchemaType,
    reference_label,
)
from draftschema.primitives import Primitive
from draftschema.validation import (
    DEFAULT_ENGINE,
    Environment,
    ValidationBuilder,
    ValidationEngine,
    ValidationError,
    maybe,
    validation_for,
)

if TYPE_CHECKING:
    from draftschema.registry import Registry


class _Omitted(Enum):
    OMITTED = "omitted"


OMITTED = _Omitted.OMITTED
"""Result of serializing or parsing a relationship field.

Dictionaries drop members whose result is ``OMITTED``; explicit ``None`` is
kept.
"""


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Type:
    """Base for type nodes."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[Type]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register type node subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.lower().removesuffix("type")

        if (existing := Type.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Type.registry[cls.tag] = cls

    # Concrete nodes declare `is_required` and `name` as their last two fields.

    def required(self, is_required: bool = True) -> Self:
        """Return a copy with the given requiredness."""
        return replace(self, is_required=is_required)

    def named(self, name: str | None) -> Self:
        """Return a copy carrying ``name`` (``None`` removes it)."""
        return replace(self, name=name)

    @property
    def base(self) -> AnyType | None:
        """The widened type used in draft mode."""
        return draft_type(self)  # type: ignore[arg-type]

    @property
    def label(self) -> Label:
        return label_of(self)  # type: ignore[arg-type]

    def validation(self, engine: ValidationEngine = DEFAULT_ENGINE) -> ValidationBuilder:
        return validation_of(self, engine)  # type: ignore[arg-type]

    def serialize(self, value: Any) -> Any:
        return serialize(self, value)  # type: ignore[arg-type]

    def parse(self, wire: Any) -> Any:
        return parse(self, wire)  # type: ignore[arg-type]

    async def validate(
        self,
        value: Any,
        env: Environment | None = None,
        *,
        engine: ValidationEngine = DEFAULT_ENGINE,
    ) -> list[ValidationError]:
        """Validate ``value`` and return the ordered list of failures."""
        return await engine.validate(value, self.validation(engine), env)


class ScalarType(Type, tag="scalar"):
    """Leaf value.

    ``base`` is the less refined scalar this one widens to in draft mode
    (``SingleLine`` -> ``Text``); ``None`` for scalars that do not widen.
    """

    primitive: Primitive
    base: ScalarType | None = None  # type: ignore[assignment]
    is_required: bool = False
    name: str | None = None


class DictionaryType(Type, tag="dictionary"):
    """Ordered, unique-key mapping of member names to type nodes."""

    members: tuple[tuple[str, AnyType], ...]
    is_required: bool = False
    name: str | None = None

    def __post_init__(self) -> None:
        keys = [key for key, _ in self.members]
        if len(keys) != len(set(keys)):
            msg = f"Duplicate member keys in dictionary: {keys}"
            raise ValueError(msg)

    def __getitem__(self, key: str) -> AnyType:
        for member_key, member in self.members:
            if member_key == key:
                return member
        raise KeyError(key)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.members)


class RecordType(DictionaryType, tag="record"):
    """Dictionary with a declared name and its own draft pairing."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.name:
            msg = "A record must be declared with a name"
            raise ValueError(msg)

    @property
    def draft(self) -> RecordType:
        return draft_type(self)  # type: ignore[return-value]


class ListType(Type, tag="list"):
    """Homogeneous list. A required list must be non-empty in strict mode."""

    item: AnyType
    is_required: bool = False
    name: str | None = None


class PointerType(Type, tag="pointer"):
    """Single reference to the named dictionary ``target``."""

    target: str
    is_required: bool = False
    name: str | None = None

    def resolve(self, registry: Registry) -> RecordType:
        return registry.resolve(self.target)


class IteratorType(Type, tag="iterator"):
    """Sequence of references to the named dictionary ``target``."""

    target: str
    is_required: bool = False
    name: str | None = None

    def resolve(self, registry: Registry) -> RecordType:
        return registry.resolve(self.target)


type AnyType = ScalarType | DictionaryType | ListType | PointerType | IteratorType


def _optionality(node: AnyType) -> Optionality:
    return Optionality.REQUIRED if node.is_required else Optionality.OPTIONAL


# =============================================================================
# Refinement: strict/draft pairing
# =============================================================================


def strict_type(node: AnyType) -> AnyType:
    """The strict view of a declared node is the node itself."""
    return node


def draft_type(node: AnyType) -> AnyType:
    """Derive the draft view of ``node``.

    Scalars widen one level to their base, keeping their own requiredness and
    name. Every dictionary member becomes
    optional, recursively. Lists, pointers and iterators become optional, and
    a draft list never enforces non-emptiness.
    """
    match node:
        case ScalarType(base=base):
            if base is None:
                return node
            return base.required(node.is_required).named(node.name)
        case DictionaryType(members=members):
            draft_members = tuple(
                (key, draft_type(member).required(False)) for key, member in members
            )
            return replace(node, members=draft_members, is_required=False)
        case ListType(item=item):
            return replace(node, item=draft_type(item), is_required=False)
        case PointerType() | IteratorType():
            return node.required(False)
        case _:
            assert_never(node)


# =============================================================================
# Labels
# =============================================================================


def label_of(node: AnyType) -> Label:
    """Project ``node`` onto its label."""
    optionality = _optionality(node)
    match node:
        case ScalarType(primitive=primitive):
            return replace(primitive.label, optionality=optionality, name=node.name)
        case DictionaryType(members=members):
            return DictionaryLabel(
                optionality=optionality,
                name=node.name,
                members=tuple((key, label_of(member)) for key, member in members),
            )
        case ListType(item=item):
            return ListLabel(
                optionality=optionality,
                name=node.name,
                item=label_of(item).with_optionality(Optionality.NONE),
            )
        case PointerType(target=target):
            return PointerLabel(
                optionality=optionality,
                name=node.name,
                schema_type=SchemaType(name="hasOne"),
                entity=reference_label(target),
            )
        case IteratorType(target=target):
            return IteratorLabel(
                optionality=optionality,
                name=node.name,
                schema_type=SchemaType(name="hasMany"),
                item=reference_label(target),
            )
        case _:
            assert_never(node)


# =============================================================================
# Validation
# =============================================================================


def _is_relationship(node: AnyType) -> bool:
    return isinstance(node, PointerType | IteratorType)


def validation_of(node: AnyType, engine: ValidationEngine) -> ValidationBuilder:
    """Build the validator for ``node`` from ``engine``'s combinators."""
    match node:
        case ScalarType(primitive=primitive):
            inner = primitive.validation(engine)
        case DictionaryType(members=members):
            inner = engine.object(
                {
                    key: validation_of(member, engine)
                    for key, member in members
                    if not _is_relationship(member)
                },
            )
        case ListType(item=item):
            items = engine.array(validation_of(item.required(), engine))
            if not node.is_required:
                return maybe(engine, items)
            return (
                engine.is_present()
                .and_then(items)
                .and_then(engine.is_(lambda value: len(value) > 0, "present-array"))
            )
        case PointerType() | IteratorType():
            inner = engine.anything()
        case _:
            assert_never(node)
    return validation_for(engine, inner, required=node.is_required)


# =============================================================================
# Serialization
# =============================================================================


def _member_value(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return getattr(value, key, None)


def _list_entry(result: Any) -> Any:
    # lists keep their length; an omitted relationship entry becomes null
    return None if result is OMITTED else result


def serialize(node: AnyType, value: Any) -> Any:
    """Convert an in-memory value to its wire form.

    ``None`` stays ``None`` so an intentionally empty field is distinguishable
    from an omitted one. Relationship fields serialize to ``OMITTED``.
    """
    match node:
        case PointerType() | IteratorType():
            return OMITTED
        case _ if value is None:
            return None
        case ScalarType(primitive=primitive):
            return primitive.serialize(value)
        case DictionaryType(members=members):
            out: dict[str, Any] = {}
            for key, member in members:
                out[key] = serialize(member, _member_value(value, key))
            return {key: wire for key, wire in out.items() if wire is not OMITTED}
        case ListType(item=item):
            return [_list_entry(serialize(item, entry)) for entry in value]
        case _:
            assert_never(node)


def parse(node: AnyType, wire: Any) -> Any:
    """Convert a wire value back to its in-memory form; mirrors ``serialize``."""
    match node:
        case PointerType() | IteratorType():
            return OMITTED
        case _ if wire is None:
            return None
        case ScalarType(primitive=primitive):
            return primitive.parse(wire)
        case DictionaryType(members=members):
            out: dict[str, Any] = {}
            for key, member in members:
                out[key] = parse(member, _member_value(wire, key))
            return {key: value for key, value in out.items() if value is not OMITTED}
        case ListType(item=item):
            return [_list_entry(parse(item, entry)) for entry in wire]
        case _:
            assert_never(node)


# =============================================================================
# Declaration surface
# =============================================================================


def Dictionary(members: Mapping[str, AnyType]) -> DictionaryType:  # noqa: N802
    """Declare an optional dictionary with the given members, in order."""
    return DictionaryType(members=tuple(members.items()))


def Required(members: Mapping[str, AnyType]) -> DictionaryType:  # noqa: N802
    """Declare a dictionary whose members are all required."""
    return Dictionary({key: member.required() for key, member in members.items()})


def List(item: AnyType) -> ListType:  # noqa: N802
    """Declare an optional list of ``item``."""
    return ListType(item=item)


def Record(  # noqa: N802
    name: str,
    members: Mapping[str, AnyType],
    *,
    registry: Registry | None = None,
) -> RecordType:
    """Declare a named dictionary, optionally registering it for references."""
    record = RecordType(members=tuple(members.items()), name=name)
    if registry is not None:
        registry.register(record)
    return record


def _target_name(target: str | Any) -> str:
    if isinstance(target, str):
        return target
    name = getattr(target, "name", None)
    if not name:
        msg = f"Relationship target must be named, got {target!r}"
        raise ValueError(msg)
    return name


def has_one(target: str | RecordType) -> PointerType:
    """Declare a single reference to a named record (or schema)."""
    return PointerType(target=_target_name(target))


def has_many(target: str | RecordType) -> IteratorType:
    """Declare a sequence of references to a named record (or schema)."""
    return IteratorType(target=_target_name(target))
