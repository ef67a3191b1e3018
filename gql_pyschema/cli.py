"""Command-line interface for gql-pyschema."""

import asyncio
import importlib
import json
import logging
from pathlib import Path

import click

from .core.builder import BuildOptions, build_schema
from .core.errors import GraphSchemaError


def load_modules(modules: tuple[str, ...]):
    """Import the modules whose decorators declare the schema."""
    for module in modules:
        importlib.import_module(module)


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


module_option = click.option(
    "--module",
    "-m",
    "modules",
    required=True,
    multiple=True,
    help="Module to import before building (repeatable).",
)
resolver_option = click.option(
    "--resolver",
    "-r",
    "resolvers",
    required=True,
    multiple=True,
    help="Resolver class name to include in the schema (repeatable).",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)


@click.group()
@click.version_option()
def main():
    """Declare GraphQL schemas on Python classes.

    Build and inspect schemas from declared resolvers.
    """
    pass


@main.command()
@module_option
@resolver_option
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Write the SDL to this file instead of stdout.",
)
@click.option(
    "--strict-args",
    is_flag=True,
    help="Fail when a resolver method has parameters without a declared arg.",
)
@verbose_option
def sdl(modules: tuple[str, ...], resolvers: tuple[str, ...], output: str | None, strict_args: bool, verbose: bool):
    """Print the schema built from RESOLVERS as GraphQL SDL.

    Examples:

        gql-pyschema sdl -m app.schema -r UserResolver

        gql-pyschema sdl -m app.users -m app.orders -r UserResolver -r OrderResolver -o schema.graphql
    """
    configure_logging(verbose)
    try:
        load_modules(modules)
        session = build_schema(list(resolvers), options=BuildOptions(allow_arg_gaps=not strict_args))
    except GraphSchemaError as e:
        raise click.ClickException(str(e)) from e

    text = session.sdl()
    if output is None:
        click.echo(text)
        return

    output_path = Path(output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text + "\n")
    if verbose:
        click.echo(f"  Types: {len(session.schema.type_map)}")
    click.echo(f"Done! Wrote schema to {output_path}")


@main.command()
@module_option
@resolver_option
@click.option(
    "--document",
    "-d",
    required=True,
    help="Query or mutation document; $name tokens are replaced from --variables.",
)
@click.option(
    "--variables",
    "-V",
    default=None,
    help="JSON object of variables.",
)
@verbose_option
def query(modules: tuple[str, ...], resolvers: tuple[str, ...], document: str, variables: str | None, verbose: bool):
    """Execute a document against the schema built from RESOLVERS.

    Examples:

        gql-pyschema query -m app.schema -r Root -d 'query { hello }'

        gql-pyschema query -m app.schema -r Root -d 'mutation { setId(id: $id) }' -V '{"id": 1}'
    """
    configure_logging(verbose)
    try:
        values = json.loads(variables) if variables else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--variables") from e

    try:
        load_modules(modules)
        session = build_schema(list(resolvers))
        data = asyncio.run(session.execute(document, values))
    except GraphSchemaError as e:
        raise click.ClickException(str(e)) from e

    click.echo(json.dumps(data, indent=2))


if __name__ == "__main__":
    main()
