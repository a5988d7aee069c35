"""
Tests for type graph comparison.
"""

import pytest
from graphql import build_schema

from phoebus.graphql.conformance import (
    assert_conforms,
    describe_schema,
    diff_type_graphs,
    interface_violations,
    round_trip,
)
from phoebus.graphql.schema import print_sdl, schema
from phoebus.validation import SchemaConformanceError, ValidationError


def graph_of(sdl: str):
    return describe_schema(build_schema(sdl))


class TestDescribeSchema:
    """Tests for describe_schema."""

    def test_excludes_introspection_types_and_builtin_scalars(self, contract_graph):
        assert not [name for name in contract_graph.types if name.startswith("__")]
        assert "String" not in contract_graph.types
        assert "Boolean" not in contract_graph.types

    def test_accepts_strawberry_and_graphql_core_schemas(self):
        assert describe_schema(schema) == describe_schema(schema._schema)

    def test_custom_scalars_and_unions_are_described(self):
        graph = graph_of(
            """
            scalar Date
            type A { when: Date }
            type B { id: ID! }
            union AB = A | B
            type Query { ab: AB }
            """
        )
        assert graph.types["Date"].kind == "SCALAR"
        assert graph.types["AB"].possible_types == ["A", "B"]
        assert "ID" not in graph.types


class TestDiffTypeGraphs:
    """Tests for diff_type_graphs."""

    def test_code_first_schema_matches_contract(self, contract_graph, code_graph):
        assert diff_type_graphs(contract_graph, code_graph) == []

    def test_reports_nullability_change(self, contract_sdl, contract_graph):
        changed = graph_of(contract_sdl.replace("  age: Int\n", "  age: Int!\n"))
        assert diff_type_graphs(contract_graph, changed) == [
            "Person.age has type Int!, expected Int"
        ]

    def test_reports_list_item_nullability_change(self, contract_sdl, contract_graph):
        changed = graph_of(contract_sdl.replace("pets: [Pet!]!", "pets: [Pet]!"))
        assert diff_type_graphs(contract_graph, changed) == [
            "Person.pets has type [Pet]!, expected [Pet!]!"
        ]

    def test_reports_missing_and_extra_enum_members(self, contract_sdl, contract_graph):
        changed = graph_of(contract_sdl.replace("  LAB\n", "  POODLE\n"))
        assert diff_type_graphs(contract_graph, changed) == [
            "enum DogBreed missing LAB",
            "enum DogBreed has unexpected POODLE",
        ]

    def test_reports_argument_changes(self, contract_sdl, contract_graph):
        changed = graph_of(
            contract_sdl.replace("testIntArg: Int,", "testIntArg: Int!,").replace(
                ", testBoolArg: Boolean", ""
            )
        )
        assert diff_type_graphs(contract_graph, changed) == [
            "Query.person(testBoolArg) is missing",
            "Query.person(testIntArg) has type Int!, expected Int",
        ]

    def test_reports_missing_and_extra_fields(self, contract_sdl, contract_graph):
        changed = graph_of(contract_sdl.replace("  lastName: String!\n", "  nickname: String\n"))
        assert diff_type_graphs(contract_graph, changed) == [
            "Person.lastName is missing",
            "Person.nickname is not declared in the contract",
        ]

    def test_reports_missing_type_and_interface(self, contract_sdl, contract_graph):
        changed = graph_of(
            contract_sdl.replace("type Cat implements Pet", "type Cat").replace(
                "enum CatBreed {\n  TABBY\n  MIX\n}\n", "enum CatBreed {\n  TABBY\n  MIX\n}\n\nscalar Extra\n"
            )
        )
        assert diff_type_graphs(contract_graph, changed) == [
            "type Extra is not declared in the contract",
            "Cat interfaces missing Pet",
        ]

    def test_reports_kind_change(self, contract_sdl, contract_graph):
        changed = graph_of(
            contract_sdl.replace("interface Pet {", "type Pet {")
            .replace("type Dog implements Pet", "type Dog")
            .replace("type Cat implements Pet", "type Cat")
        )
        differences = diff_type_graphs(contract_graph, changed)
        assert "type Pet is OBJECT, expected INTERFACE" in differences

    def test_reports_root_type_change(self, contract_graph):
        changed = graph_of(
            """
            schema { query: Root }
            type Root { peopleCount: Int! }
            """
        )
        assert "root query_type is Root, expected Query" in diff_type_graphs(contract_graph, changed)


class TestInterfaceViolations:
    """Tests for interface_violations."""

    def test_contract_has_none(self, contract_graph, code_graph):
        assert interface_violations(contract_graph) == []
        assert interface_violations(code_graph) == []

    def test_missing_interface_field(self):
        graph = graph_of(
            """
            interface Pet { name: String! }
            type Dog implements Pet { barks: Boolean }
            type Query { pet: Pet }
            """
        )
        assert interface_violations(graph) == ["Dog does not expose Pet.name"]

    def test_nullable_interface_field(self):
        graph = graph_of(
            """
            interface Pet { name: String! }
            type Cat implements Pet { name: String }
            type Query { pet: Pet }
            """
        )
        assert interface_violations(graph) == ["Cat.name has type String, Pet requires String!"]


class TestRoundTrip:
    """Printing to SDL and re-parsing keeps the type graph."""

    def test_contract_round_trip(self, contract_schema, contract_graph):
        assert describe_schema(round_trip(contract_schema)) == contract_graph

    def test_code_first_round_trip(self, code_graph):
        assert describe_schema(round_trip(schema)) == code_graph

    def test_code_first_sdl_parses_to_contract(self, contract_graph):
        assert describe_schema(build_schema(print_sdl(schema))) == contract_graph

    def test_sorted_sdl_keeps_the_graph(self, contract_schema, contract_graph):
        sorted_sdl = print_sdl(contract_schema, sort=True)
        assert sorted_sdl.index("type Cat") < sorted_sdl.index("type Dog")
        assert describe_schema(build_schema(sorted_sdl)) == contract_graph


class TestAssertConforms:
    """Tests for assert_conforms."""

    def test_passes_for_matching_schemas(self, contract_schema):
        assert_conforms(contract_schema, schema)

    def test_raises_with_differences(self, contract_sdl, contract_schema):
        changed = build_schema(contract_sdl.replace("  MIX\n", ""))

        with pytest.raises(SchemaConformanceError) as exc_info:
            assert_conforms(contract_schema, changed)

        assert exc_info.value.differences == ["enum CatBreed missing MIX"]
        assert "enum CatBreed missing MIX" in str(exc_info.value)
        assert isinstance(exc_info.value, ValidationError)
