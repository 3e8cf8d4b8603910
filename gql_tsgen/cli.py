"""Command-line interface for gql-tsgen."""

import asyncio
from pathlib import Path

import click
from graphql import parse, print_ast
from graphql.error import GraphQLError

from .config import ConfigurationError, TypegenConfig, find_config, load_config
from .core.errors import TypegenError
from .core.loader import collect_documents, load_schema
from .core.orchestrator import TypeGenerator
from .core.scrubber import scrub_document
from .logging import configure_logging


def _load_config(config: str | None, **overrides) -> TypegenConfig:
    config_path = Path(config) if config else find_config(Path.cwd())
    return load_config(config_path, **overrides)


@click.group()
@click.version_option(package_name="gql-tsgen")
def main():
    """TypeScript type definitions for GraphQL documents.

    Generate typed artifacts for the queries, mutations, subscriptions and
    fragments of a project.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a schema file, a directory of schema files, or an introspection JSON file.",
)
@click.option(
    "--documents",
    "-d",
    required=True,
    type=click.Path(exists=True),
    help="File or directory with .graphql/.gql documents.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Output directory for generated types (overrides the config file).",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a gql-tsgen.yml config file.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--fragment-masking/--no-fragment-masking",
    default=None,
    help="Mask fragment data in generated shapes (default: on).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    documents: str,
    output: str | None,
    config: str | None,
    template_dir: str | None,
    fragment_masking: bool | None,
    verbose: bool,
):
    """Generate type definitions for GraphQL documents.

    Examples:

        gql-tsgen generate --schema ./schema.graphql --documents ./src

        gql-tsgen generate -s ./schema.json -d ./src -o ./src/generated
    """
    configure_logging(verbose=verbose)
    try:
        settings = _load_config(
            config,
            output_dir=Path(output) if output else None,
            template_dir=Path(template_dir) if template_dir else None,
            fragment_masking=fragment_masking,
        )

        if verbose:
            click.echo(f"Schema: {Path(schema).resolve()}")
            click.echo(f"Documents: {Path(documents).resolve()}")
            click.echo(f"Output: {settings.output_dir.resolve()}")

        click.echo("Loading schema...")
        gql_schema = load_schema(schema)

        click.echo("Collecting documents...")
        collected = collect_documents(documents, exclude=[Path(schema)])
        if verbose:
            operations = sum(1 for doc in collected if doc.kind.value == "operation")
            click.echo(f"  Operations: {operations}")
            click.echo(f"  Fragments: {len(collected) - operations}")

        click.echo("Generating types...")
        generator = TypeGenerator(settings, gql_schema)
        paths = asyncio.run(generator.generate(collected))
    except (TypegenError, ConfigurationError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Done! Generated {len(paths)} artifacts in {settings.output_dir}")


@main.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--directive",
    "directives",
    multiple=True,
    help="Internal directive name to strip (repeatable; defaults to the configured ones).",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a gql-tsgen.yml config file.",
)
def scrub(document: str, directives: tuple[str, ...], config: str | None):
    """Print a document with internal directives and unused variables removed.

    Examples:

        gql-tsgen scrub ./src/queries/AllItems.graphql

        gql-tsgen scrub ./query.graphql --directive list --directive when
    """
    try:
        settings = _load_config(config, internal_directives=list(directives) or None)
        ast = parse(Path(document).read_text(encoding="utf-8"))
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    except GraphQLError as e:
        raise click.ClickException(f"Error parsing {document}: {e}") from e

    click.echo(print_ast(scrub_document(ast, settings.is_internal_directive)))


if __name__ == "__main__":
    main()
