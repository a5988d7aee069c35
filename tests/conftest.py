"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from graphql import GraphQLSchema

from phoebus.fixtures import Dataset
from phoebus.graphql.conformance import TypeGraph, describe_schema
from phoebus.graphql.schema import CONTRACT_SCHEMA_PATH, load_contract_schema, schema


@pytest.fixture
def contract_sdl() -> str:
    """The bundled SDL contract text."""
    return CONTRACT_SCHEMA_PATH.read_text(encoding="utf-8")


@pytest.fixture
def contract_schema() -> GraphQLSchema:
    """The bundled SDL contract parsed by graphql-core."""
    return load_contract_schema(CONTRACT_SCHEMA_PATH)


@pytest.fixture
def contract_graph(contract_schema: GraphQLSchema) -> TypeGraph:
    return describe_schema(contract_schema)


@pytest.fixture
def code_graph() -> TypeGraph:
    return describe_schema(schema)


@pytest.fixture
def dataset() -> Dataset:
    """The built-in fixture dataset."""
    return Dataset()


@pytest.fixture
def write_file(tmp_path: Path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
