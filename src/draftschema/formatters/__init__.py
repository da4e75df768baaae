"""Rendering backends.

Every backend reads the label tree only. String backends implement a
``ReporterDelegate``; value backends implement a ``RecursiveDelegate``.
"""

from draftschema.formatters.description import describe
from draftschema.formatters.graphql import DEFAULT_GRAPHQL_SCALARS, GraphQLOptions, graphql
from draftschema.formatters.list_types import list_types
from draftschema.formatters.schema_format import schema_format
from draftschema.formatters.serialize_format import serialize_format
from draftschema.formatters.structural import to_structural_json
from draftschema.formatters.typescript import TypeScriptOptions, typescript

__all__ = [
    "DEFAULT_GRAPHQL_SCALARS",
    "GraphQLOptions",
    "TypeScriptOptions",
    "describe",
    "graphql",
    "list_types",
    "schema_format",
    "serialize_format",
    "to_structural_json",
    "typescript",
]
