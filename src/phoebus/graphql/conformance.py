"""
Structural comparison of GraphQL type graphs.

A type graph is the part of a schema a client depends on: type names and
kinds, field names, field and argument types (with nullability and list
wrapping), implemented interfaces and enum members. Descriptions, default
values and declaration order are left out (every list in a snapshot is
sorted by name), so an SDL contract and a code-first schema can be compared
directly.
"""

from __future__ import annotations

from typing import Literal

import strawberry
from graphql import (
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    build_schema,
    print_schema,
)
from pydantic import BaseModel, Field

from ..validation import SchemaConformanceError

TypeKind = Literal["OBJECT", "INTERFACE", "UNION", "ENUM", "INPUT_OBJECT", "SCALAR"]

BUILTIN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})


class ArgumentShape(BaseModel):
    """An argument (or input field) and its type in SDL notation."""

    name: str
    type: str


class FieldShape(BaseModel):
    """A field, its type in SDL notation and its arguments."""

    name: str
    type: str
    args: list[ArgumentShape] = Field(default_factory=list)


class TypeShape(BaseModel):
    """A named type of the graph."""

    name: str
    kind: TypeKind
    fields: list[FieldShape] = Field(default_factory=list)
    interfaces: list[str] = Field(default_factory=list)
    possible_types: list[str] = Field(default_factory=list)
    enum_values: list[str] = Field(default_factory=list)

    def field(self, name: str) -> FieldShape | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None


class TypeGraph(BaseModel):
    """Every user-defined type of a schema plus its root operation types."""

    query_type: str | None = None
    mutation_type: str | None = None
    subscription_type: str | None = None
    types: dict[str, TypeShape] = Field(default_factory=dict)


def _as_graphql_schema(schema: GraphQLSchema | strawberry.Schema) -> GraphQLSchema:
    if isinstance(schema, strawberry.Schema):
        return schema._schema
    return schema


def _describe_type(named_type) -> TypeShape | None:
    if isinstance(named_type, GraphQLObjectType | GraphQLInterfaceType):
        fields = [
            FieldShape(
                name=field_name,
                type=str(field.type),
                args=[
                    ArgumentShape(name=arg_name, type=str(arg.type))
                    for arg_name, arg in sorted(field.args.items())
                ],
            )
            for field_name, field in sorted(named_type.fields.items())
        ]
        return TypeShape(
            name=named_type.name,
            kind="OBJECT" if isinstance(named_type, GraphQLObjectType) else "INTERFACE",
            fields=fields,
            interfaces=sorted(interface.name for interface in named_type.interfaces),
        )
    if isinstance(named_type, GraphQLUnionType):
        return TypeShape(
            name=named_type.name,
            kind="UNION",
            possible_types=sorted(member.name for member in named_type.types),
        )
    if isinstance(named_type, GraphQLEnumType):
        return TypeShape(name=named_type.name, kind="ENUM", enum_values=sorted(named_type.values))
    if isinstance(named_type, GraphQLInputObjectType):
        return TypeShape(
            name=named_type.name,
            kind="INPUT_OBJECT",
            fields=[
                FieldShape(name=field_name, type=str(field.type))
                for field_name, field in sorted(named_type.fields.items())
            ],
        )
    if named_type.name in BUILTIN_SCALARS:
        return None
    return TypeShape(name=named_type.name, kind="SCALAR")


def describe_schema(schema: GraphQLSchema | strawberry.Schema) -> TypeGraph:
    """Snapshot the type graph of a graphql-core or strawberry schema."""
    graphql_schema = _as_graphql_schema(schema)

    types: dict[str, TypeShape] = {}
    for name, named_type in graphql_schema.type_map.items():
        if name.startswith("__"):
            continue
        shape = _describe_type(named_type)
        if shape is not None:
            types[name] = shape

    return TypeGraph(
        query_type=graphql_schema.query_type.name if graphql_schema.query_type else None,
        mutation_type=graphql_schema.mutation_type.name if graphql_schema.mutation_type else None,
        subscription_type=(
            graphql_schema.subscription_type.name if graphql_schema.subscription_type else None
        ),
        types=types,
    )


def _diff_names(label: str, expected: list[str], actual: list[str]) -> list[str]:
    differences = []
    missing = sorted(set(expected) - set(actual))
    extra = sorted(set(actual) - set(expected))
    if missing:
        differences.append(f"{label} missing {', '.join(missing)}")
    if extra:
        differences.append(f"{label} has unexpected {', '.join(extra)}")
    return differences


def _diff_fields(type_name: str, expected: TypeShape, actual: TypeShape) -> list[str]:
    differences = []
    expected_fields = {field.name: field for field in expected.fields}
    actual_fields = {field.name: field for field in actual.fields}

    for name in expected_fields.keys() - actual_fields.keys():
        differences.append(f"{type_name}.{name} is missing")
    for name in actual_fields.keys() - expected_fields.keys():
        differences.append(f"{type_name}.{name} is not declared in the contract")

    for name in sorted(expected_fields.keys() & actual_fields.keys()):
        want, got = expected_fields[name], actual_fields[name]
        if want.type != got.type:
            differences.append(f"{type_name}.{name} has type {got.type}, expected {want.type}")

        want_args = {arg.name: arg.type for arg in want.args}
        got_args = {arg.name: arg.type for arg in got.args}
        for arg in sorted(want_args.keys() - got_args.keys()):
            differences.append(f"{type_name}.{name}({arg}) is missing")
        for arg in sorted(got_args.keys() - want_args.keys()):
            differences.append(f"{type_name}.{name}({arg}) is not declared in the contract")
        for arg in sorted(want_args.keys() & got_args.keys()):
            if want_args[arg] != got_args[arg]:
                differences.append(
                    f"{type_name}.{name}({arg}) has type {got_args[arg]}, "
                    f"expected {want_args[arg]}"
                )

    return sorted(differences)


def diff_type_graphs(expected: TypeGraph, actual: TypeGraph) -> list[str]:
    """List every structural difference between two type graphs.

    Returns:
        Human readable differences; empty when the graphs are identical
    """
    differences: list[str] = []

    for root in ("query_type", "mutation_type", "subscription_type"):
        want, got = getattr(expected, root), getattr(actual, root)
        if want != got:
            differences.append(f"root {root} is {got}, expected {want}")

    for name in sorted(expected.types.keys() - actual.types.keys()):
        differences.append(f"type {name} is missing")
    for name in sorted(actual.types.keys() - expected.types.keys()):
        differences.append(f"type {name} is not declared in the contract")

    for name in sorted(expected.types.keys() & actual.types.keys()):
        want, got = expected.types[name], actual.types[name]
        if want.kind != got.kind:
            differences.append(f"type {name} is {got.kind}, expected {want.kind}")
            continue

        differences.extend(_diff_fields(name, want, got))
        differences.extend(_diff_names(f"{name} interfaces", want.interfaces, got.interfaces))
        differences.extend(
            _diff_names(f"{name} possible types", want.possible_types, got.possible_types)
        )
        differences.extend(_diff_names(f"enum {name}", want.enum_values, got.enum_values))

    return differences


def interface_violations(graph: TypeGraph) -> list[str]:
    """List implementers that do not expose their interfaces' fields exactly.

    Field types must match the interface's type verbatim, nullability
    included.
    """
    violations = []
    for type_shape in graph.types.values():
        for interface_name in type_shape.interfaces:
            interface = graph.types.get(interface_name)
            if interface is None or interface.kind != "INTERFACE":
                violations.append(f"{type_shape.name} implements unknown interface {interface_name}")
                continue

            for interface_field in interface.fields:
                field = type_shape.field(interface_field.name)
                if field is None:
                    violations.append(
                        f"{type_shape.name} does not expose {interface_name}.{interface_field.name}"
                    )
                elif field.type != interface_field.type:
                    violations.append(
                        f"{type_shape.name}.{field.name} has type {field.type}, "
                        f"{interface_name} requires {interface_field.type}"
                    )
    return violations


def implementers_of(graph: TypeGraph, interface_name: str) -> list[str]:
    """Names of the object types declaring the given interface, sorted."""
    return sorted(
        shape.name
        for shape in graph.types.values()
        if shape.kind == "OBJECT" and interface_name in shape.interfaces
    )


def round_trip(schema: GraphQLSchema | strawberry.Schema) -> GraphQLSchema:
    """Print a schema as SDL and parse it back."""
    return build_schema(print_schema(_as_graphql_schema(schema)))


def assert_conforms(
    expected: GraphQLSchema | strawberry.Schema | TypeGraph,
    actual: GraphQLSchema | strawberry.Schema | TypeGraph,
) -> None:
    """Raise if ``actual`` does not have exactly the type graph of ``expected``.

    Raises:
        SchemaConformanceError: Listing every difference
    """
    if not isinstance(expected, TypeGraph):
        expected = describe_schema(expected)
    if not isinstance(actual, TypeGraph):
        actual = describe_schema(actual)

    differences = diff_type_graphs(expected, actual)
    if differences:
        raise SchemaConformanceError("Schema does not conform to the contract", differences)
