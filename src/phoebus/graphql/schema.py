"""
Main GraphQL schema definition using Strawberry
"""

import time
from pathlib import Path
from typing import Any

import strawberry
from graphql import GraphQLError, GraphQLSchema, build_schema, lexicographic_sort_schema, print_schema
from graphql import validate_schema as gql_validate_schema
from strawberry.extensions import DisableIntrospection, QueryDepthLimiter
from strawberry.types import ExecutionResult

from ..config import settings
from ..fixtures import Dataset, load_dataset
from ..logging import clear_query_context, get_logger, get_query_id, set_query_context
from ..validation import ValidationError
from .queries.root import Query
from .types.pet import Cat, Dog

logger = get_logger(__name__)

CONTRACT_SCHEMA_PATH = Path(__file__).with_name("schema.graphql")


def create_schema(
    enable_introspection: bool | None = None, max_query_depth: int | None = None
) -> strawberry.Schema:
    """Create the code-first schema.

    Args:
        enable_introspection: Allow ``__schema``/``__type`` queries; defaults to settings,
            and is always off in the production environment
        max_query_depth: Reject documents nested deeper than this; defaults to settings
    """
    if enable_introspection is None:
        enable_introspection = (
            settings.enable_introspection and settings.environment != "production"
        )
    if max_query_depth is None:
        max_query_depth = settings.max_query_depth

    extensions: list[Any] = []
    if not enable_introspection:
        extensions.append(DisableIntrospection)
    if max_query_depth is not None:
        extensions.append(lambda: QueryDepthLimiter(max_depth=max_query_depth))

    return strawberry.Schema(
        query=Query,
        # Only reachable through the Pet interface
        types=[Dog, Cat],
        extensions=extensions,
    )


# Create the GraphQL schema
schema = create_schema()


def validate_schema(target: strawberry.Schema) -> None:
    """Validate a code-first schema.

    Strawberry validates while building, so this only fails for a schema
    whose graphql-core form was assembled or altered outside strawberry.
    Checks the graphql-core schema and runs an introspection query against it.

    Raises:
        ValidationError: If the schema is invalid or cannot be introspected
    """
    from graphql import get_introspection_query, graphql_sync

    graphql_schema = target._schema

    errors = gql_validate_schema(graphql_schema)
    if errors:
        error_messages = [str(e) for e in errors]
        logger.error("GraphQL schema validation failed", errors=error_messages)
        raise ValidationError(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        error_messages = [str(e) for e in result.errors]
        logger.error("GraphQL introspection failed", errors=error_messages)
        raise ValidationError(f"GraphQL introspection failed: {'; '.join(error_messages)}")

    logger.info("GraphQL schema validation successful")


def load_contract_sdl(path: Path | str | None = None) -> str:
    """Read the SDL contract.

    Args:
        path: SDL file; defaults to ``settings.contract_schema_path``, then the bundled file
    """
    if path is None:
        path = settings.contract_schema_path or CONTRACT_SCHEMA_PATH
    path = Path(path)

    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValidationError(f"Failed to read schema contract from {path}: {e}") from e


def load_contract_schema(path: Path | str | None = None) -> GraphQLSchema:
    """Parse the SDL contract into a graphql-core schema."""
    sdl = load_contract_sdl(path)
    try:
        return build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        raise ValidationError(f"Schema contract could not be parsed: {e}") from e


def print_sdl(target: strawberry.Schema | GraphQLSchema, sort: bool = False) -> str:
    """Print a schema as SDL.

    Args:
        target: Strawberry or graphql-core schema
        sort: Sort types, fields, arguments and enum values by name
    """
    graphql_schema = target._schema if isinstance(target, strawberry.Schema) else target
    if sort:
        graphql_schema = lexicographic_sort_schema(graphql_schema)
    elif isinstance(target, strawberry.Schema):
        return target.as_str()
    return print_schema(graphql_schema)


async def execute_query(
    query: str,
    variables: dict[str, Any] | None = None,
    operation_name: str | None = None,
    dataset: Dataset | None = None,
    graphql_schema: strawberry.Schema | None = None,
) -> ExecutionResult:
    """Execute a GraphQL document against the fixture resolvers.

    Errors are reported in the result, never raised.
    """
    target = graphql_schema or schema
    if dataset is None:
        dataset = load_dataset()

    set_query_context(operation_name=operation_name)
    start = time.perf_counter()
    try:
        result = await target.execute(
            query,
            variable_values=variables,
            operation_name=operation_name,
            context_value={"dataset": dataset},
        )
        duration_us = int((time.perf_counter() - start) * 1_000_000)
        logger.info(
            "Query executed",
            query_id=get_query_id(),
            operation_name=operation_name,
            duration_us=duration_us,
            error_count=len(result.errors or []),
        )
        return result
    finally:
        clear_query_context()


def format_result(result: ExecutionResult) -> dict[str, Any]:
    """Build the response body for an execution result."""
    response: dict[str, Any] = {"data": result.data}
    if result.errors:
        response["errors"] = [error.formatted for error in result.errors]
    return response
