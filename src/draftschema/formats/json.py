"""JSON wire format for values of a declared type."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from draftschema.schema import Schema
    from draftschema.types import AnyType


def to_json(node: AnyType | Schema, value: Any, *, indent: int | None = 2) -> str:
    """Serialize ``value`` through ``node`` and encode it as JSON.

    Args:
        node: Type node or schema describing ``value``
        value: In-memory value to serialize
        indent: JSON indentation level (default 2, None for compact)

    Returns:
        JSON string of the wire form; relationship fields are omitted

    """
    return json.dumps(node.serialize(value), indent=indent)


def from_json(node: AnyType | Schema, s: str) -> Any:
    """Decode JSON and parse it through ``node``.

    Args:
        node: Type node or schema describing the encoded value
        s: JSON string to decode

    Returns:
        The parsed in-memory value

    Raises:
        json.JSONDecodeError: If ``s`` is not valid JSON

    """
    return node.parse(json.loads(s))
