"""Tests for the rendering backends."""

import json

from support import (
    DETAILED,
    GRAPHQL_SCALAR_MAP,
    NESTING,
    RELATED,
    SIMPLE,
    ISODate,
    Url,
    strip,
)

from draftschema import (
    DEFAULT_GRAPHQL_SCALARS,
    Boolean,
    Float,
    List,
    Record,
    Required,
    SingleLine,
    Text,
    describe,
    graphql,
    has_one,
    list_types,
    schema_format,
    serialize_format,
    to_structural_json,
    typescript,
)

RECORDS = Record(
    "records",
    {
        "geo": Required({"lat": Float(), "long": Float()}),
        "author": Required({"first": SingleLine(), "last": SingleLine()}).required(),
        "date": ISODate(),
    },
)


class TestDescribe:
    """Tests for the human-readable description."""

    def test_simple(self) -> None:
        assert describe(SIMPLE) == strip("""
            {
              hed: <single line string>,
              dek?: <string>,
              body: <string>
            }
        """)

    def test_simple_draft(self) -> None:
        assert describe(SIMPLE.draft) == strip("""
            {
              hed?: <string>,
              dek?: <string>,
              body?: <string>
            }
        """)

    def test_detailed(self) -> None:
        assert describe(DETAILED) == strip("""
            {
              hed: <single line string>,
              dek?: <string>,
              body: <string>,
              author?: {
                first?: <single line string>,
                last?: <single line string>
              },
              issueDate?: <ISO Date>,
              canonicalUrl?: <url>,
              tags?: list of <single word string>,
              categories: list of <single line string>,
              geo?: {
                lat: <integer>,
                long: <integer>
              },
              contributors?: list of {
                first?: <single line string>,
                last?: <single line string>
              }
            }
        """)

    def test_detailed_draft(self) -> None:
        assert describe(DETAILED.draft) == strip("""
            {
              hed?: <string>,
              dek?: <string>,
              body?: <string>,
              author?: {
                first?: <string>,
                last?: <string>
              },
              issueDate?: <ISO Date>,
              canonicalUrl?: <string>,
              tags?: list of <string>,
              categories?: list of <string>,
              geo?: {
                lat?: <integer>,
                long?: <integer>
              },
              contributors?: list of {
                first?: <string>,
                last?: <string>
              }
            }
        """)

    def test_required_dictionaries(self) -> None:
        assert describe(RECORDS) == strip("""
            {
              geo?: {
                lat: <float>,
                long: <float>
              },
              author: {
                first: <single line string>,
                last: <single line string>
              },
              date?: <ISO Date>
            }
        """)
        assert describe(RECORDS.draft) == strip("""
            {
              geo?: {
                lat?: <float>,
                long?: <float>
              },
              author?: {
                first?: <string>,
                last?: <string>
              },
              date?: <ISO Date>
            }
        """)

    def test_relationships(self) -> None:
        assert describe(RELATED) == strip("""
            {
              first?: <single line string>,
              last?: <string>,
              person: has one SimpleArticle,
              articles?: has many MediumArticle
            }
        """)

    def test_nested(self) -> None:
        assert describe(NESTING) == strip("""
            {
              people: list of {
                first?: <single line string>,
                last?: <string>
              }
            }
        """)
        assert describe(NESTING.draft) == strip("""
            {
              people?: list of {
                first?: <string>,
                last?: <string>
              }
            }
        """)

    def test_single_member_has_no_separator(self) -> None:
        single = Record("Single", {"only": Boolean().required()})
        assert describe(single) == "{\n  only: <boolean>\n}"

    def test_accepts_labels(self) -> None:
        assert describe(SIMPLE.label) == describe(SIMPLE)


class TestTypeScript:
    """Tests for TypeScript interface rendering."""

    def test_simple(self) -> None:
        assert typescript(SIMPLE, name="SimpleArticle") == strip("""
            export interface SimpleArticle {
              hed: string;
              dek?: string;
              body: string;
            }
        """)
        assert typescript(SIMPLE.draft, name="SimpleArticleDraft") == strip("""
            export interface SimpleArticleDraft {
              hed?: string;
              dek?: string;
              body?: string;
            }
        """)

    def test_detailed(self) -> None:
        assert typescript(DETAILED, name="MediumArticle") == strip("""
            export interface MediumArticle {
              hed: string;
              dek?: string;
              body: string;
              author?: {
                first?: string;
                last?: string;
              };
              issueDate?: Date;
              canonicalUrl?: string;
              tags?: Array<string>;
              categories: Array<string>;
              geo?: {
                lat: number;
                long: number;
              };
              contributors?: Array<{
                first?: string;
                last?: string;
              }>;
            }
        """)

    def test_records(self) -> None:
        assert typescript(RECORDS, name="Records") == strip("""
            export interface Records {
              geo?: {
                lat: number;
                long: number;
              };
              author: {
                first: string;
                last: string;
              };
              date?: Date;
            }
        """)
        assert typescript(RECORDS.draft, name="RecordsDraft") == strip("""
            export interface RecordsDraft {
              geo?: {
                lat?: number;
                long?: number;
              };
              author?: {
                first?: string;
                last?: string;
              };
              date?: Date;
            }
        """)

    def test_relationships(self) -> None:
        assert typescript(RELATED, name="Related") == strip("""
            export interface Related {
              first?: string;
              last?: string;
              person: SimpleArticle;
              articles?: Array<MediumArticle>;
            }
        """)


class TestGraphQL:
    """Tests for GraphQL type rendering."""

    def test_simple(self) -> None:
        assert graphql(SIMPLE, name="Simple", scalar_map=GRAPHQL_SCALAR_MAP) == strip("""
            type Simple {
              hed: SingleLine!
              dek: String
              body: String!
            }
        """)
        assert graphql(SIMPLE.draft, name="Simple", scalar_map=GRAPHQL_SCALAR_MAP) == strip("""
            type Simple {
              hed: String
              dek: String
              body: String
            }
        """)

    def test_nested_dictionaries_are_hoisted(self) -> None:
        assert graphql(DETAILED, name="MediumArticle", scalar_map=GRAPHQL_SCALAR_MAP) == strip("""
            type MediumArticleAuthor {
              first: SingleLine
              last: SingleLine
            }

            type MediumArticleGeo {
              lat: Int!
              long: Int!
            }

            type MediumArticleContributors {
              first: SingleLine
              last: SingleLine
            }

            type MediumArticle {
              hed: SingleLine!
              dek: String
              body: String!
              author: MediumArticleAuthor
              issueDate: ISODate
              canonicalUrl: Url
              tags: [SingleWord!]
              categories: [SingleLine!]!
              geo: MediumArticleGeo
              contributors: [MediumArticleContributors!]
            }
        """)

    def test_relationships(self) -> None:
        assert graphql(RELATED, name="Related", scalar_map=GRAPHQL_SCALAR_MAP) == strip("""
            type Related {
              first: SingleLine
              last: String
              person: SimpleArticle!
              articles: [MediumArticle!]
            }
        """)

    def test_default_scalar_map(self) -> None:
        assert DEFAULT_GRAPHQL_SCALARS["Text"] == "String"
        assert graphql(SIMPLE, name="Simple") == strip("""
            type Simple {
              hed: SingleLine!
              dek: String
              body: String!
            }
        """)

    def test_unmapped_scalars_keep_their_name(self) -> None:
        dated = Record("Dated", {"on": ISODate().required()})
        assert graphql(dated, name="Dated", scalar_map={}) == "type Dated {\n  on: ISODate!\n}"


class TestStructuralJson:
    """Tests for the structural dump."""

    def test_simple(self) -> None:
        assert to_structural_json(SIMPLE) == {
            "hed": {"type": "SingleLine", "required": True},
            "dek": {"type": "Text", "required": False},
            "body": {"type": "Text", "required": True},
        }
        assert to_structural_json(SIMPLE.draft) == {
            "hed": {"type": "Text", "required": False},
            "dek": {"type": "Text", "required": False},
            "body": {"type": "Text", "required": False},
        }

    def test_detailed(self) -> None:
        name = {
            "type": "Dictionary",
            "members": {
                "first": {"type": "SingleLine", "required": False},
                "last": {"type": "SingleLine", "required": False},
            },
        }
        assert to_structural_json(DETAILED) == {
            "hed": {"type": "SingleLine", "required": True},
            "dek": {"type": "Text", "required": False},
            "body": {"type": "Text", "required": True},
            "author": {**name, "required": False},
            "issueDate": {"type": "ISODate", "required": False},
            "canonicalUrl": {"type": "Url", "required": False},
            "tags": {
                "type": "List",
                "items": {"type": "SingleWord", "required": True},
                "required": False,
            },
            "categories": {
                "type": "List",
                "items": {"type": "SingleLine", "required": True},
                "required": True,
            },
            "geo": {
                "type": "Dictionary",
                "members": {
                    "lat": {"type": "Integer", "required": True},
                    "long": {"type": "Integer", "required": True},
                },
                "required": False,
            },
            "contributors": {
                "type": "List",
                "items": {**name, "required": True},
                "required": False,
            },
        }

    def test_detailed_draft_items_stay_required(self) -> None:
        dumped = to_structural_json(DETAILED.draft)
        assert dumped["categories"] == {
            "type": "List",
            "items": {"type": "Text", "required": True},
            "required": False,
        }
        assert dumped["geo"]["members"]["lat"] == {"type": "Integer", "required": False}

    def test_relationships(self) -> None:
        dumped = to_structural_json(RELATED)
        assert dumped["person"] == {
            "type": "Pointer",
            "kind": "hasOne",
            "entity": {"type": "Dictionary", "name": "SimpleArticle", "required": True},
            "required": True,
        }
        assert dumped["articles"] == {
            "type": "Iterator",
            "kind": "hasMany",
            "items": {"type": "Dictionary", "name": "MediumArticle", "required": True},
            "required": False,
        }

    def test_arguments_are_listed(self) -> None:
        linked = Record("Linked", {"href": Url("https", "relative")})
        assert to_structural_json(linked) == {
            "href": {"type": "Url", "args": ["https", "relative"], "required": False},
        }

    def test_output_is_json_compatible(self) -> None:
        dumped = to_structural_json(DETAILED)
        assert json.loads(json.dumps(dumped)) == dumped


class TestListTypes:
    """Tests for the type inventory."""

    def test_simple(self) -> None:
        assert list_types(SIMPLE) == ["SingleLine", "Text"]

    def test_detailed(self) -> None:
        assert list_types(DETAILED) == [
            "Dictionary",
            "ISODate",
            "Integer",
            "List",
            "SingleLine",
            "SingleWord",
            "Text",
            "Url",
        ]

    def test_records(self) -> None:
        assert list_types(RECORDS) == ["Dictionary", "Float", "ISODate", "SingleLine"]

    def test_relationships(self) -> None:
        assert list_types(RELATED) == [
            "Iterator",
            "MediumArticle",
            "Pointer",
            "SimpleArticle",
            "SingleLine",
            "Text",
        ]

    def test_draft_narrows_inventory(self) -> None:
        assert list_types(SIMPLE.draft) == ["Text"]


class TestSchemaFormat:
    """Tests for rendering declarations back to source."""

    def test_simple(self) -> None:
        assert schema_format(SIMPLE) == strip("""
            {
              "hed": SingleLine().required(),
              "dek": Text(),
              "body": Text().required()
            }
        """)
        assert schema_format(SIMPLE.draft) == strip("""
            {
              "hed": Text(),
              "dek": Text(),
              "body": Text()
            }
        """)

    def test_detailed(self) -> None:
        assert schema_format(DETAILED) == strip("""
            {
              "hed": SingleLine().required(),
              "dek": Text(),
              "body": Text().required(),
              "author": Dictionary({
                "first": SingleLine(),
                "last": SingleLine()
              }),
              "issueDate": ISODate(),
              "canonicalUrl": Url(),
              "tags": List(SingleWord()),
              "categories": List(SingleLine()).required(),
              "geo": Dictionary({
                "lat": Integer().required(),
                "long": Integer().required()
              }),
              "contributors": List(Dictionary({
                "first": SingleLine(),
                "last": SingleLine()
              }))
            }
        """)

    def test_records(self) -> None:
        assert schema_format(RECORDS) == strip("""
            {
              "geo": Dictionary({
                "lat": Float().required(),
                "long": Float().required()
              }),
              "author": Dictionary({
                "first": SingleLine().required(),
                "last": SingleLine().required()
              }).required(),
              "date": ISODate()
            }
        """)

    def test_relationships(self) -> None:
        assert schema_format(RELATED) == strip("""
            {
              "first": SingleLine(),
              "last": Text(),
              "person": has_one("SimpleArticle").required(),
              "articles": has_many("MediumArticle")
            }
        """)
        assert schema_format(RELATED.draft) == strip("""
            {
              "first": Text(),
              "last": Text(),
              "person": has_one("SimpleArticle"),
              "articles": has_many("MediumArticle")
            }
        """)

    def test_arguments_are_rendered(self) -> None:
        linked = Record("Linked", {"href": Url("https").required()})
        assert schema_format(linked) == "{\n  \"href\": Url('https').required()\n}"

    def test_output_evaluates_to_equal_fields(self) -> None:
        namespace = {"Text": Text, "List": List, "Boolean": Boolean}
        source = Record(
            "Roundtrip",
            {"title": Text().required(), "flags": List(Boolean()), "notes": Text()},
        )
        fields = eval(schema_format(source), namespace)  # noqa: S307
        assert Record("Roundtrip", fields) == source

    def test_named_members_evaluate_to_their_types(self) -> None:
        geo = Record("Geo", {"lat": Float().required(), "long": Float().required()})
        title = Text().named("Title")
        source = Record(
            "Located",
            {"geo": geo.required(), "title": title, "near": has_one("Geo")},
        )
        rendered = schema_format(source)
        assert rendered == strip("""
            {
              "geo": Geo.required(),
              "title": Title,
              "near": has_one("Geo")
            }
        """)
        namespace = {"Geo": geo, "Title": title, "has_one": has_one}
        fields = eval(rendered, namespace)  # noqa: S307
        assert Record("Located", fields) == source


class TestSerializeFormat:
    """Tests for the JSON text rendering of field types."""

    def test_simple(self) -> None:
        assert serialize_format(SIMPLE) == strip("""
            {
              "hed": { "type": "SingleLine", "details": [], "required": true },
              "dek": { "type": "Text", "details": [], "required": false },
              "body": { "type": "Text", "details": [], "required": true }
            }
        """)

    def test_draft(self) -> None:
        assert serialize_format(SIMPLE.draft) == strip("""
            {
              "hed": { "type": "Text", "details": [], "required": false },
              "dek": { "type": "Text", "details": [], "required": false },
              "body": { "type": "Text", "details": [], "required": false }
            }
        """)

    def test_output_is_valid_json(self) -> None:
        parsed = json.loads(serialize_format(DETAILED))
        assert parsed["tags"] == {
            "type": "list",
            "of": {"type": "SingleWord", "details": [], "required": False},
        }
        assert parsed["geo"]["lat"] == {"type": "Integer", "details": [], "required": True}
