"""The authoring surface: a named set of fields with strict and draft views."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from draftschema.types import AnyType, Record, RecordType, draft_type
from draftschema.validation import DEFAULT_ENGINE

if TYPE_CHECKING:
    from collections.abc import Mapping

    from draftschema.labels import DictionaryLabel
    from draftschema.registry import Registry
    from draftschema.validation import Environment, ValidationEngine, ValidationError


class Schema:
    """A named field -> type mapping declared once.

    ``strict`` is the publish-ready view and ``draft`` the in-progress view.
    Both are derived on every access; the schema holds no other state.

    Example:
        SimpleArticle = Schema("SimpleArticle", {
            "hed": SingleLine().required(),
            "dek": Text(),
            "body": Text().required(),
        })

        errors = await SimpleArticle.validate({"hed": "Hi"})
        draft_errors = await SimpleArticle.draft.validate({"hed": "Hi"})

    """

    def __init__(
        self,
        name: str,
        fields: Mapping[str, AnyType],
        *,
        registry: Registry | None = None,
    ) -> None:
        self.name = name
        self._fields = dict(fields)
        if registry is not None:
            registry.register(self.strict)

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, keys={list(self._fields)})"

    @property
    def fields(self) -> dict[str, AnyType]:
        return dict(self._fields)

    @property
    def strict(self) -> RecordType:
        return Record(self.name, self._fields)

    @property
    def draft(self) -> RecordType:
        return draft_type(self.strict)  # type: ignore[return-value]

    @property
    def label(self) -> DictionaryLabel:
        return self.strict.label  # type: ignore[return-value]

    async def validate(
        self,
        value: Any,
        env: Environment | None = None,
        *,
        engine: ValidationEngine = DEFAULT_ENGINE,
    ) -> list[ValidationError]:
        """Validate ``value`` against the strict view."""
        return await self.strict.required().validate(value, env, engine=engine)

    def serialize(self, value: Any) -> dict[str, Any]:
        return self.strict.serialize(value)

    def parse(self, wire: Any) -> dict[str, Any]:
        return self.strict.parse(wire)
