"""CLI entry point for logid."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from logid import __version__
from logid.config import load_config
from logid.lut.allocator import new_id, parse_method
from logid.lut.id_table import IDTable
from logid.lut.location_table import LocationTable
from logid.lut.reconcile import reconcile as reconcile_table
from logid.lut.reverse import build_reverse_index, duplicates as find_duplicates, find_ids
from logid.models.format import FormatDescriptor, LocationInfo
from logid.services.exceptions import AllocationError, LookupTableError
from logid.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)
console = Console()


def _diagnostics():
    """Stream for progress and warning text, kept off stdout."""
    return sys.stderr


def _fatal(error: Exception) -> click.ClickException:
    """Log error and turn it into a ClickException (exit status 1)."""
    logger.error("fatal_error", error_type=type(error).__name__, error=str(error))
    return click.ClickException(str(error))


def _load_id_table(ctx: click.Context) -> IDTable:
    try:
        return IDTable.load_from_file(ctx.obj["id_list"], out=_diagnostics())
    except LookupTableError as e:
        raise _fatal(e)


def _load_location_table(ctx: click.Context) -> LocationTable:
    try:
        return LocationTable.load_from_file(
            ctx.obj["location_list"], out=_diagnostics(), verbose=ctx.obj["verbose"]
        )
    except LookupTableError as e:
        raise _fatal(e)


@click.group()
@click.version_option(version=__version__, prog_name="logid")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration file (default: ./logid.yaml)",
)
@click.option("--id-list", type=str, default=None, help="Override ID list file")
@click.option("--location-list", type=str, default=None, help="Override location list file")
@click.option("--verbose", is_flag=True, help="Write extra diagnostics")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    id_list: Optional[str],
    location_list: Optional[str],
    verbose: bool,
):
    """logid: Allocate and maintain IDs for log format strings."""
    configure_logging()

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error("config_load_failed", error=str(e))
        raise click.ClickException(str(e))

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["id_list"] = id_list or config.files.id_list
    ctx.obj["location_list"] = location_list or config.files.location_list
    ctx.obj["verbose"] = verbose or config.verbose


@cli.command()
@click.argument("type_tag")
@click.argument("fmt")
@click.option("--method", type=str, default=None, help="ID search method: random, upward or downward")
@click.option(
    "--min", "id_min", type=click.IntRange(min=1), default=None, help="Smallest allowed ID (0 is reserved)"
)
@click.option("--max", "id_max", type=int, default=None, help="Largest allowed ID")
@click.option(
    "--reuse/--no-reuse",
    default=True,
    help="Reuse an existing ID bound to the same format string (default: reuse)",
)
@click.option("--file", "source_file", type=str, default=None, help="Source file using the ID")
@click.option("--line", type=int, default=0, help="Line number in the source file")
@click.pass_context
def new(
    ctx: click.Context,
    type_tag: str,
    fmt: str,
    method: Optional[str],
    id_min: Optional[int],
    id_max: Optional[int],
    reuse: bool,
    source_file: Optional[str],
    line: int,
):
    """
    Get an ID for a format string and record it in the ID list.

    Examples:
        logid new TRICE16 "temp %d"              # Allocate (or reuse) an ID
        logid new TRICE8 "x=%u" --method upward  # Smallest free ID
        logid new TRICE "boot" --file main.c --line 42
    """
    config = ctx.obj["config"]
    id_min = config.ids.min if id_min is None else id_min
    id_max = config.ids.max if id_max is None else id_max
    method = method or config.ids.method.value
    descriptor = FormatDescriptor(type=type_tag, strg=fmt)

    logger.info("new_command_started", type=type_tag, method=method, id_min=id_min, id_max=id_max)

    if parse_method(method) is None:
        raise _fatal(ValueError(f"unknown ID search method: {method}"))

    table = _load_id_table(ctx)

    existing = find_ids(build_reverse_index(table), descriptor) if reuse else []
    if existing:
        allocated = existing[0]
        logger.info("id_reused", id=allocated, type=type_tag)
    else:
        try:
            allocated = new_id(
                table, id_min, id_max, method, out=_diagnostics(), verbose=ctx.obj["verbose"]
            )
        except AllocationError as e:
            raise _fatal(e)

        table.add(allocated, descriptor)
        try:
            table.save_to_file(ctx.obj["id_list"])
        except LookupTableError as e:
            raise _fatal(e)

    if source_file:
        locations = _load_location_table(ctx)
        locations.add(allocated, LocationInfo(file=source_file, line=line))
        try:
            locations.save_to_file(ctx.obj["location_list"])
        except LookupTableError as e:
            raise _fatal(e)

    click.echo(str(allocated))


@cli.command()
@click.pass_context
def reconcile(ctx: click.Context):
    """Add format specifier counts to type tags that lack one."""
    table = _load_id_table(ctx)
    updated = reconcile_table(table, out=_diagnostics())

    if updated:
        try:
            table.save_to_file(ctx.obj["id_list"])
        except LookupTableError as e:
            raise _fatal(e)

    click.echo(f"Updated {updated} type tag(s)")


@cli.command()
@click.pass_context
def show(ctx: click.Context):
    """List every ID with its type tag, format string and location."""
    table = _load_id_table(ctx)
    locations = _load_location_table(ctx)

    if not len(table):
        click.echo("ID list is empty.")
        return

    view = Table(title=f"{ctx.obj['id_list']} ({len(table)} IDs)")
    view.add_column("ID", justify="right")
    view.add_column("Type")
    view.add_column("Format")
    view.add_column("Location")

    for id_, descriptor in table.items():
        location = locations.get(id_)
        where = f"{location.file}:{location.line}" if location else ""
        view.add_row(str(id_), Text(descriptor.type), Text(descriptor.strg), Text(where))

    console.print(view)


@cli.command()
@click.pass_context
def duplicates(ctx: click.Context):
    """Report format strings bound to more than one ID."""
    table = _load_id_table(ctx)
    dups = find_duplicates(build_reverse_index(table))

    if not dups:
        click.echo("No duplicate format strings.")
        return

    for descriptor, ids in dups.items():
        click.echo(f"{descriptor.type} {descriptor.strg!r}: {', '.join(str(i) for i in ids)}")


def main():
    """Main entry point for setuptools console script."""
    cli()


if __name__ == "__main__":
    main()
