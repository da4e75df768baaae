"""draftschema - declare a data shape once, validate and render it strict or draft."""

from draftschema.errors import (
    DuplicateNameError,
    ProtocolError,
    SchemaError,
    UnhandledEventError,
    UnknownReferenceError,
    UnsupportedEventError,
)
from draftschema.formats.json import (
    from_json,
    to_json,
)
from draftschema.formatters import (
    DEFAULT_GRAPHQL_SCALARS,
    GraphQLOptions,
    TypeScriptOptions,
    describe,
    graphql,
    list_types,
    schema_format,
    serialize_format,
    to_structural_json,
    typescript,
)
from draftschema.labels import (
    DictionaryLabel,
    IteratorLabel,
    Label,
    ListLabel,
    Optionality,
    PointerLabel,
    PrimitiveLabel,
    SchemaType,
)
from draftschema.primitives import Primitive
from draftschema.registry import Registry
from draftschema.reporter import (
    Event,
    Reporter,
    ReporterDelegate,
    StringBuffer,
    render,
)
from draftschema.scalars import (
    Any,
    Boolean,
    Float,
    Integer,
    Number,
    SingleLine,
    SingleWord,
    Text,
    refined,
    scalar,
)
from draftschema.schema import Schema
from draftschema.types import (
    OMITTED,
    AnyType,
    Dictionary,
    DictionaryType,
    IteratorType,
    List,
    ListType,
    PointerType,
    Record,
    RecordType,
    Required,
    ScalarType,
    Type,
    draft_type,
    has_many,
    has_one,
    strict_type,
)
from draftschema.validation import (
    DEFAULT_ENGINE,
    DictEnvironment,
    Environment,
    ErrorMessage,
    ValidationBuilder,
    ValidationEngine,
    ValidationError,
)
from draftschema.visitor import (
    Position,
    RecursiveDelegate,
    RecursiveVisitor,
    Visitor,
)

__all__ = [
    "OMITTED",
    "Any",
    "AnyType",
    "Boolean",
    "DEFAULT_ENGINE",
    "DEFAULT_GRAPHQL_SCALARS",
    "DictEnvironment",
    "Dictionary",
    "DictionaryLabel",
    "DictionaryType",
    "DuplicateNameError",
    "Environment",
    "ErrorMessage",
    "Event",
    "Float",
    "GraphQLOptions",
    "Integer",
    "IteratorLabel",
    "IteratorType",
    "Label",
    "List",
    "ListLabel",
    "ListType",
    "Number",
    "Optionality",
    "PointerLabel",
    "PointerType",
    "Position",
    "Primitive",
    "PrimitiveLabel",
    "ProtocolError",
    "Record",
    "RecordType",
    "RecursiveDelegate",
    "RecursiveVisitor",
    "Registry",
    "Reporter",
    "ReporterDelegate",
    "Required",
    "ScalarType",
    "Schema",
    "SchemaError",
    "SchemaType",
    "SingleLine",
    "SingleWord",
    "StringBuffer",
    "Text",
    "Type",
    "TypeScriptOptions",
    "UnhandledEventError",
    "UnknownReferenceError",
    "UnsupportedEventError",
    "ValidationBuilder",
    "ValidationEngine",
    "ValidationError",
    "Visitor",
    "describe",
    "draft_type",
    "from_json",
    "graphql",
    "has_many",
    "has_one",
    "list_types",
    "refined",
    "render",
    "scalar",
    "schema_format",
    "serialize_format",
    "strict_type",
    "to_json",
    "to_structural_json",
    "typescript",
]
