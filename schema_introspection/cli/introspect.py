"""Command line entry point printing an introspected database."""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import click

from ..catalog import Introspection, build
from ..config import Config, load_config
from ..errors import IntrospectionError
from ..session import PostgreSQLSessionProvider
from ..utils.logging import setup_logging


class IntrospectionPrinter:
    """Prints an introspection tree in a readable format."""

    def __init__(self, emit):
        self.emit = emit

    def display(self, introspection: Introspection) -> None:
        database = introspection.database
        self.emit(f"Database: {database.name}")
        self.emit("=" * 80)
        if not database.schemas:
            self.emit("No schemas selected.")
            return
        for schema in database.schemas:
            self._print_schema(schema)

    def _print_schema(self, schema) -> None:
        header = f"\nSchema: {schema.name}"
        self.emit(header)
        self.emit("-" * len(header.strip()))
        if not schema.relations:
            self.emit("  (no tables or views)")
        for relation in schema.relations:
            self.emit(f"\nRelation: {schema.name}.{relation.name}")
            self._print_columns(relation)

    def _print_columns(self, relation) -> None:
        self.emit("  Columns:")
        for column in relation.columns:
            self.emit(f"    - {column.name}: type oid {column.type_id}")


def run_introspection(config: Config) -> Introspection:
    """Connect with the configured pool, introspect, and disconnect."""
    provider = PostgreSQLSessionProvider(config.database.config, name=config.database.name)
    with provider:
        return asyncio.run(build(provider, config.introspection))


@click.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Path to YAML config file.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the tree as JSON.")
@click.option("--log-level", default=None, help="Override the configured log level.")
def cli(config_path: str, as_json: bool, log_level: Optional[str]) -> None:
    """Introspect the schemas of a PostgreSQL database."""
    config = load_config(config_path)
    setup_logging(
        level=log_level or config.logging.level,
        structured=config.logging.structured,
        log_file=config.logging.log_file,
    )
    try:
        introspection = run_introspection(config)
    except IntrospectionError as exc:
        click.echo(f"error: {exc}", err=True)
        raise click.exceptions.Exit(1)

    if as_json:
        click.echo(json.dumps(introspection.to_dict(), indent=2))
    else:
        IntrospectionPrinter(click.echo).display(introspection)


if __name__ == "__main__":
    cli()
