"""Shared fixtures: custom scalars, example schemas and error helpers."""

import asyncio
import re
from datetime import datetime
from textwrap import dedent
from typing import Any
from urllib.parse import SplitResult, urlsplit, urlunsplit

from draftschema import (
    Dictionary,
    ErrorMessage,
    Integer,
    List,
    Primitive,
    Record,
    Registry,
    Schema,
    SingleLine,
    SingleWord,
    Text,
    ValidationBuilder,
    ValidationEngine,
    ValidationError,
    has_many,
    has_one,
    refined,
    scalar,
)


def _is_iso_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


class ISODatePrimitive(Primitive, tag="ISODate"):
    """Dates travel as ISO 8601 strings and do not widen in drafts."""

    typescript = "Date"
    description = "ISO Date"

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        return engine.is_(_is_iso_date, "iso-date")

    def serialize(self, value: datetime) -> str:
        return value.isoformat()

    def parse(self, wire: str) -> datetime:
        return datetime.fromisoformat(wire)


URL_FORMATS = {
    "absolute": re.compile(r"^(https?:)?//[^?#]+(\?[^#]*)?(#.*)?$"),
    "relative": re.compile(r"^(?!(https?:)?//)[^?#]+(\?[^#]*)?(#.*)?$"),
    "http": re.compile(r"^http://[^?#]+(\?[^#]*)?(#.*)?$"),
    "https": re.compile(r"^https://[^?#]+(\?[^#]*)?(#.*)?$"),
    "protocol-relative": re.compile(r"^//[^?#]+(\?[^#]*)?(#.*)?$"),
    "leading-slash": re.compile(r"^/[^?#]+(\?[^#]*)?(#.*)?$"),
}


class UrlPrimitive(Primitive, tag="Url"):
    """URL string of one of the given kinds (absolute when none are given)."""

    kinds: tuple[str, ...] = ()

    typescript = "string"
    description = "url"

    @property
    def args(self) -> tuple[str, ...]:
        return self.kinds

    def validation(self, engine: ValidationEngine) -> ValidationBuilder:
        kinds = self.kinds or ("absolute",)
        matches = engine.is_(
            lambda value: any(URL_FORMATS[kind].match(value) for kind in kinds),
            "url",
        )
        failure = [ValidationError(path=(), message=ErrorMessage("url", list(kinds)))]
        return engine.is_string().and_then(matches).catch(lambda _errors: failure)

    def serialize(self, value: SplitResult) -> str:
        return urlunsplit(value)

    def parse(self, wire: str) -> SplitResult:
        return urlsplit(wire)


def ISODate():  # noqa: N802, ANN201
    return scalar(ISODatePrimitive())


def Url(*kinds: str):  # noqa: N802, ANN201
    return refined(UrlPrimitive(kinds=kinds), Text())


GRAPHQL_SCALAR_MAP = {
    "SingleLine": "SingleLine",
    "SingleWord": "SingleWord",
    "ISODate": "ISODate",
    "Url": "Url",
    "Text": "String",
    "Integer": "Int",
    "Number": "Float",
    "Boolean": "Boolean",
}

REGISTRY = Registry()

SIMPLE = Schema(
    "SimpleArticle",
    {
        "hed": SingleLine().required(),
        "dek": Text(),
        "body": Text().required(),
    },
    registry=REGISTRY,
)

DETAILED = Schema(
    "MediumArticle",
    {
        "hed": SingleLine().required(),
        "dek": Text(),
        "body": Text().required(),
        "author": Dictionary({"first": SingleLine(), "last": SingleLine()}),
        "issueDate": ISODate(),
        "canonicalUrl": Url(),
        "tags": List(SingleWord()),
        "categories": List(SingleLine()).required(),
        "geo": Dictionary({"lat": Integer().required(), "long": Integer().required()}),
        "contributors": List(Dictionary({"first": SingleLine(), "last": SingleLine()})),
    },
    registry=REGISTRY,
)

RELATED = Record(
    "Related",
    {
        "first": SingleLine(),
        "last": Text(),
        "person": has_one(SIMPLE).required(),
        "articles": has_many(DETAILED),
    },
    registry=REGISTRY,
)

NESTING = Record(
    "Nesting",
    {
        "people": List(Dictionary({"first": SingleLine(), "last": Text()})).required(),
    },
)


def strip(text: str) -> str:
    """Dedent a triple-quoted expectation and drop its first and last lines."""
    return dedent(text).strip("\n")


def validate(node: Any, value: Any) -> list[ValidationError]:
    return asyncio.run(node.validate(value))


def type_error(kind: str, path: str) -> ValidationError:
    return ValidationError(path=tuple(path.split(".")), message=ErrorMessage("type", kind))


def missing_error(path: str) -> ValidationError:
    return type_error("present", path)


def error(name: str, details: Any, path: str) -> ValidationError:
    return ValidationError(path=tuple(path.split(".")), message=ErrorMessage(name, details))
