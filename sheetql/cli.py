"""CLI interface for SheetQL."""

import json
import logging
from typing import Optional, Tuple

import click

from .core import SheetQL
from .exceptions import SheetQLError
from .loader import load_datasets
from .schema import BuildContext, plan_dataset


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _report(error: SheetQLError, verbose: bool) -> None:
    click.echo(f"\n❌ {error.error_code}: {error.message}", err=True)
    if error.context:
        click.echo(f"📍 Context: {error.context}", err=True)
    if error.suggestions:
        click.echo("\n💡 Suggestions:", err=True)
        for suggestion in error.suggestions:
            click.echo(f"   • {suggestion}", err=True)
    if verbose:
        click.echo(f"\n🔍 Correlation ID: {error.correlation_id}", err=True)


@click.group()
def cli():
    """SheetQL - GraphQL schemas inferred from spreadsheet data."""
    pass


@cli.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path(exists=True))
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging and error output')
def schema(paths: Tuple[str, ...], verbose: bool):
    """Print the GraphQL schema inferred from PATHS."""
    _configure_logging(verbose)
    try:
        server = SheetQL.from_paths(*paths)
        click.echo(server.print_schema())
    except SheetQLError as e:
        _report(e, verbose)
        raise click.Abort()


@cli.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path(exists=True))
@click.option('--query', '-q', 'source', required=True, help='GraphQL query to execute')
@click.option('--variables', default=None, help='Query variables as a JSON object')
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging and error output')
def query(paths: Tuple[str, ...], source: str, variables: Optional[str], verbose: bool):
    """Run a GraphQL query against the data in PATHS."""
    _configure_logging(verbose)
    try:
        values = json.loads(variables) if variables else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint='--variables')

    try:
        server = SheetQL.from_paths(*paths)
        data = server.query(source, values)
        click.echo(json.dumps(data, indent=2))
    except SheetQLError as e:
        _report(e, verbose)
        raise click.Abort()


@cli.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path(exists=True))
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging and error output')
def collections(paths: Tuple[str, ...], verbose: bool):
    """List datasets, collections and inferred field types in PATHS."""
    _configure_logging(verbose)
    try:
        datasets = load_datasets(*paths)
    except SheetQLError as e:
        _report(e, verbose)
        raise click.Abort()

    context = BuildContext()
    for name, dataset in datasets.items():
        plan = plan_dataset(name, dataset, context)
        click.echo(f"📁 {name} (type {plan.type_name})")
        for collection in reversed(plan.collections):
            click.echo(
                f"  📊 {collection.collection_name}: {len(collection.rows)} rows "
                f"-> {collection.singular_name} / {collection.plural_name}"
            )
            for field in collection.fields:
                kind = f"{field.kind.value} -> {field.target}" if field.target else field.kind.value
                click.echo(f"     - {field.name}: {kind}")


if __name__ == '__main__':
    cli()
