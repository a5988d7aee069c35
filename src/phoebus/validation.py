"""
Contract validation for Phoebus.

This module checks that the code-first schema and the bundled SDL contract
describe the same type graph, so drift is caught before anything consumes
the schema.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .logging import get_logger

logger = get_logger(__name__)


class ValidationError(Exception):
    """Raised when a schema, contract or fixture file is invalid."""

    pass


class SchemaConformanceError(ValidationError):
    """Raised when two type graphs differ."""

    def __init__(self, message: str, differences: list[str] | None = None):
        self.differences = differences or []
        if self.differences:
            message = f"{message}: {'; '.join(self.differences)}"
        super().__init__(message)


def validate_contract(contract_path: Path | str | None = None) -> dict[str, Any]:
    """
    Validate the code-first schema against the SDL contract.

    Returns a dictionary with validation results. Problems are collected
    rather than raised so every one of them can be reported at once.
    """
    from graphql import validate_schema as gql_validate_schema

    from .graphql.conformance import (
        describe_schema,
        diff_type_graphs,
        interface_violations,
        round_trip,
    )
    from .graphql.schema import load_contract_schema, schema, validate_schema

    results: dict[str, Any] = {
        "valid": True,
        "warnings": [],
        "errors": [],
        "type_count": 0,
    }

    try:
        contract = load_contract_schema(contract_path)
    except ValidationError as e:
        results["valid"] = False
        results["errors"].append(str(e))
        logger.error("Contract could not be loaded", error=str(e))
        return results

    contract_errors = gql_validate_schema(contract)
    if contract_errors:
        results["valid"] = False
        results["errors"].extend(f"contract: {error.message}" for error in contract_errors)

    try:
        validate_schema(schema)
    except ValidationError as e:
        results["valid"] = False
        results["errors"].append(f"code: {e}")

    expected = describe_schema(contract)
    actual = describe_schema(schema)
    results["type_count"] = len(expected.types)

    differences = diff_type_graphs(expected, actual)
    if differences:
        results["valid"] = False
        results["errors"].extend(f"drift: {difference}" for difference in differences)

    for label, graph in (("contract", expected), ("code", actual)):
        for violation in interface_violations(graph):
            results["valid"] = False
            results["errors"].append(f"{label}: {violation}")

    for label, built in (("contract", contract), ("code", schema._schema)):
        round_trip_differences = diff_type_graphs(
            describe_schema(built), describe_schema(round_trip(built))
        )
        if round_trip_differences:
            results["valid"] = False
            results["errors"].extend(
                f"{label} round trip: {difference}" for difference in round_trip_differences
            )

    if results["valid"]:
        logger.info("Contract validation successful", type_count=results["type_count"])
    else:
        logger.error("Contract validation failed", error_count=len(results["errors"]))

    return results
