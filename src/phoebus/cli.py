#!/usr/bin/env python3
"""
Main CLI entry point for Phoebus.
"""

import asyncio
import json
import sys

import click

from phoebus import __version__
from phoebus.config import settings
from phoebus.logging import configure_logging, get_logger
from phoebus.validation import ValidationError

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="phoebus")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: from PHOEBUS_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """Phoebus CLI - print, check and query the people/pets schema."""
    configure_logging(
        debug=settings.debug or log_level == "debug",
        log_level=log_level or settings.log_level,
    )


@cli.group()
def schema() -> None:
    """Inspect the schema contract."""
    pass


@schema.command("print")
@click.option(
    "--source",
    default="code",
    type=click.Choice(["code", "contract"]),
    help="Print the code-first schema or the SDL contract (default: code)",
)
@click.option(
    "--sort",
    is_flag=True,
    default=False,
    help="Sort types, fields and enum values by name",
)
@click.option(
    "--contract",
    "contract_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="SDL contract to read instead of the bundled one",
)
def print_schema_command(source: str, sort: bool, contract_path: str | None) -> None:
    """Print the schema as SDL."""
    from phoebus.graphql.schema import load_contract_schema, print_sdl
    from phoebus.graphql.schema import schema as code_schema

    try:
        target = code_schema if source == "code" else load_contract_schema(contract_path)
    except ValidationError as e:
        logger.error("Failed to load schema", source=source, error=str(e))
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    click.echo(print_sdl(target, sort=sort).rstrip("\n"))


@schema.command("check")
@click.option(
    "--contract",
    "contract_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="SDL contract to check against instead of the bundled one",
)
def check_schema(contract_path: str | None) -> None:
    """Check that the code-first schema matches the SDL contract."""
    from phoebus.validation import validate_contract

    results = validate_contract(contract_path)

    if results["valid"]:
        click.echo(f"✓ Schema conforms to the contract ({results['type_count']} types)")
        return

    click.echo(f"✗ Schema does not conform to the contract ({len(results['errors'])} problems)")
    for error in results["errors"]:
        click.echo(f"  • {error}")
    sys.exit(1)


@cli.command()
@click.argument("query_file", type=click.File("r"), required=False)
@click.option("--query", "-q", "query_text", default=None, help="Query document text")
@click.option(
    "--variables",
    default=None,
    help="Variables as a JSON object",
)
@click.option(
    "--operation-name",
    default=None,
    help="Operation to run when the document defines several",
)
@click.option(
    "--fixtures",
    "fixtures_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML fixture dataset (default: from PHOEBUS_FIXTURES_PATH, else built-in)",
)
def query(
    query_file,
    query_text: str | None,
    variables: str | None,
    operation_name: str | None,
    fixtures_path: str | None,
) -> None:
    """Run a query against the fixture resolvers and print the JSON response.

    QUERY_FILE may be '-' to read the document from stdin.
    """
    from phoebus.fixtures import load_dataset
    from phoebus.graphql.schema import execute_query, format_result

    if query_text is not None and query_file is not None:
        raise click.UsageError("Provide either a QUERY_FILE or --query, not both")
    if query_text is None:
        if query_file is None:
            raise click.UsageError("Provide a QUERY_FILE or --query")
        query_text = query_file.read()

    variable_values = None
    if variables:
        try:
            variable_values = json.loads(variables)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="--variables") from e
        if not isinstance(variable_values, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--variables")

    try:
        dataset = load_dataset(fixtures_path)
    except ValidationError as e:
        logger.error("Failed to load fixtures", error=str(e))
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    result = asyncio.run(
        execute_query(
            query_text,
            variables=variable_values,
            operation_name=operation_name,
            dataset=dataset,
        )
    )

    click.echo(json.dumps(format_result(result), indent=2))
    if result.errors:
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
