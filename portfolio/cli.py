"""
Command-line interface for browsing portfolio content.

This module provides CLI commands over the content repositories:
- types: List supported entity types
- list: Page through a collection
- get: Fetch one entity by id
- search: Case-insensitive text search
- count: Count entities, optionally filtered

Every command prints JSON. Failed operations print the error envelope and
exit with status 1.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Tuple

import click
from pydantic_core import to_jsonable_python

from portfolio.config import RepositoryConfig, get_settings
from portfolio.exceptions import UnknownEntityTypeException
from portfolio.factories import DefaultComponentFactory, RepositoryFactory
from portfolio.models.common import DataResult, PaginationParams

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(to_jsonable_python(value), indent=2))


def _echo_error(code: str, message: str, details: Any = None) -> None:
    payload = {"error": {"code": code, "message": message, "details": details}}
    click.echo(json.dumps(to_jsonable_python(payload), indent=2), err=True)


def _report(result: DataResult) -> int:
    """Print a result envelope; return the exit code."""
    if result.error:
        _echo_error(result.error.code, result.error.message, result.error.details)
        return 1
    _echo_json(result.data)
    return 0


def _parse_filter_value(raw: str) -> Any:
    """Interpret ``true``/``false``, integers, numbers and comma lists."""
    if "," in raw:
        return [part.strip() for part in raw.split(",") if part.strip()]
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


def _parse_filters(pairs: Tuple[str, ...]) -> Dict[str, Any]:
    filters = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got {pair!r}", param_hint="--filter")
        filters[key.strip()] = _parse_filter_value(value.strip())
    return filters


def _get_factory(ctx: click.Context) -> RepositoryFactory:
    """Factory from the context object, or one built from settings."""
    ctx.ensure_object(dict)
    factory = ctx.obj.get("factory")
    if factory is None:
        settings = get_settings()
        factory = RepositoryFactory(
            component_factory=DefaultComponentFactory(settings),
            default_config=RepositoryConfig.from_settings(settings),
        )
        ctx.obj["factory"] = factory
    return factory


def _run(ctx: click.Context, entity_type: str, operation) -> None:
    """Resolve the repository, run ``operation`` on it and exit with its status."""
    try:
        repository = _get_factory(ctx).create(entity_type)
    except UnknownEntityTypeException as e:
        _echo_error(e.error_code, e.message)
        raise SystemExit(1)

    async def run_operation() -> int:
        try:
            return _report(await operation(repository))
        except Exception as e:
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            logger.exception(f"{entity_type} command failed")
            return 1

    exit_code = asyncio.run(run_operation())
    raise SystemExit(exit_code)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """
    Portfolio content CLI.

    Read-only access to projects, technologies, contact and about content.
    """
    ctx.ensure_object(dict)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")
    else:
        logging.getLogger().setLevel(get_settings().log_level)


@cli.command('types')
@click.pass_context
def types_command(ctx: click.Context):
    """List the supported entity types."""
    _echo_json(_get_factory(ctx).entity_types())


@cli.command('list')
@click.argument('entity_type')
@click.option('--page', '-p', default=1, type=click.IntRange(min=1), help='Page number (default: 1)')
@click.option('--limit', '-l', default=10, type=click.IntRange(min=1), help='Items per page (default: 10)')
@click.option('--sort-by', '-s', default=None, help='Field to sort by')
@click.option('--desc', is_flag=True, help='Sort descending')
@click.pass_context
def list_command(
    ctx: click.Context,
    entity_type: str,
    page: int,
    limit: int,
    sort_by: Optional[str],
    desc: bool,
):
    """
    Page through a collection.

    Examples:

        \b
        # Second page of projects, two per page
        portfolio list project --page 2 --limit 2

        \b
        # Technologies by proficiency, highest first
        portfolio list technology --sort-by proficiency_rank --desc
    """
    params = PaginationParams(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order="desc" if desc else "asc",
    )
    _run(ctx, entity_type, lambda repo: repo.get_paginated(params))


@cli.command('get')
@click.argument('entity_type')
@click.argument('entity_id')
@click.pass_context
def get_command(ctx: click.Context, entity_type: str, entity_id: str):
    """Fetch one entity by id (prints null when absent)."""
    _run(ctx, entity_type, lambda repo: repo.get_by_id(entity_id))


@cli.command('search')
@click.argument('entity_type')
@click.argument('query')
@click.option('--page', '-p', default=None, type=click.IntRange(min=1), help='Page number')
@click.option('--limit', '-l', default=10, type=click.IntRange(min=1), help='Items per page (default: 10)')
@click.pass_context
def search_command(ctx: click.Context, entity_type: str, query: str, page: Optional[int], limit: int):
    """
    Case-insensitive text search over titles, names, descriptions and content.

    Examples:

        \b
        portfolio search project mobile
    """
    params = PaginationParams(page=page, limit=limit) if page else None
    _run(ctx, entity_type, lambda repo: repo.search(query, params))


@cli.command('count')
@click.argument('entity_type')
@click.option(
    '--filter', '-f', 'filters',
    multiple=True,
    help='key=value filter; repeat for AND, comma-separate values for any-of'
)
@click.pass_context
def count_command(ctx: click.Context, entity_type: str, filters: Tuple[str, ...]):
    """
    Count entities, optionally matching every --filter.

    Examples:

        \b
        portfolio count project --filter category=mobile --filter featured=true
    """
    parsed = _parse_filters(filters)
    _run(ctx, entity_type, lambda repo: repo.count(parsed or None))


if __name__ == '__main__':
    cli()
