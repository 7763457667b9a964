"""Command line interface for bfset.

Inspect, build and combine BitTorrent bitfield payloads given as hex strings.
"""

from __future__ import annotations

import itertools
import json
import logging
from typing import Any, NoReturn

import click

from bfset.config.config import init_config
from bfset.core.bit_field_set import BitFieldSet
from bfset.models import Config, LogLevel
from bfset.utils.console_utils import create_console, print_error, print_table
from bfset.utils.exceptions import BFSetError
from bfset.utils.logging_config import LoggingContext, setup_logging

logger = logging.getLogger(__name__)

OPERATIONS = ("union", "intersection", "difference")


def _fail(ctx: click.Context, message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    print_error(message)
    ctx.exit(1)


def _get_config(ctx: click.Context) -> Config:
    return ctx.obj["config"]


def _load(ctx: click.Context, payload: str, size: int) -> BitFieldSet:
    """Parse a hex payload into a BitFieldSet, exiting on invalid input."""
    try:
        content = bytes.fromhex(payload)
    except ValueError:
        _fail(ctx, f"Payload is not valid hex: {payload!r}")

    with LoggingContext("parse_bitfield", size=size):
        result = BitFieldSet.create(content, size)
    if not result.ok:
        _fail(ctx, f"Invalid bitfield: {result.error}")
    return result.unwrap()


def _members(ctx: click.Context, bitfield: BitFieldSet) -> tuple[list[int], bool]:
    """Return the members to display and whether the list was truncated."""
    cfg = _get_config(ctx).bitfield
    members = bitfield.iter_indices(cfg.enumeration_chunk_bits)
    if not cfg.max_display_members:
        return list(members), False
    shown = list(itertools.islice(members, cfg.max_display_members))
    return shown, len(shown) < bitfield.count()


def _format_members(members: list[int], truncated: bool) -> str:
    text = ", ".join(str(m) for m in members) or "-"
    return f"{text}, ..." if truncated else text


def _summary(ctx: click.Context, bitfield: BitFieldSet) -> dict[str, Any]:
    members, truncated = _members(ctx, bitfield)
    return {
        "size": bitfield.size,
        "count": bitfield.count(),
        "empty": bitfield.is_empty(),
        "full": bitfield.is_full(),
        "payload": bitfield.to_hex(),
        "members": members,
        "truncated": truncated,
    }


def _print_summary(ctx: click.Context, bitfield: BitFieldSet, title: str) -> None:
    summary = _summary(ctx, bitfield)
    table = print_table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Size", str(summary["size"]))
    table.add_row("Count", str(summary["count"]))
    table.add_row("Empty", "yes" if summary["empty"] else "no")
    table.add_row("Full", "yes" if summary["full"] else "no")
    table.add_row("Payload", summary["payload"] or "-")
    table.add_row("Members", _format_members(summary["members"], summary["truncated"]))
    create_console().print(table)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug)",
)
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: int) -> None:
    """Bfset - inspect and combine BitTorrent bitfields."""
    ctx.ensure_object(dict)
    try:
        config_manager = init_config(config)
    except BFSetError as e:
        _fail(ctx, str(e))

    cfg = config_manager.config
    if verbose:
        level = LogLevel.DEBUG if verbose > 1 else LogLevel.INFO
        setup_logging(cfg.observability.model_copy(update={"log_level": level}))
    ctx.obj["config"] = cfg


@cli.command()
@click.argument("payload")
@click.option("--size", "-s", type=int, required=True, help="Number of pieces")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def inspect(ctx: click.Context, payload: str, size: int, as_json: bool) -> None:
    """Show the pieces held in a hex PAYLOAD."""
    bitfield = _load(ctx, payload, size)
    if as_json:
        click.echo(json.dumps(_summary(ctx, bitfield)))
        return
    _print_summary(ctx, bitfield, "Bitfield")


@cli.command()
@click.argument("indices", nargs=-1, type=int)
@click.option("--size", "-s", type=int, required=True, help="Number of pieces")
@click.pass_context
def build(ctx: click.Context, indices: tuple[int, ...], size: int) -> None:
    """Print the hex payload holding INDICES."""
    try:
        bitfield = BitFieldSet.from_indices(indices, size)
    except BFSetError as e:
        _fail(ctx, str(e))
    click.echo(bitfield.to_hex())


@cli.command()
@click.option("--size", "-s", type=int, required=True, help="Number of pieces")
@click.pass_context
def fill(ctx: click.Context, size: int) -> None:
    """Print the hex payload of a complete bitfield."""
    try:
        bitfield = BitFieldSet.empty(size).fill()
    except BFSetError as e:
        _fail(ctx, str(e))
    click.echo(bitfield.to_hex())


@cli.command()
@click.argument("operation", type=click.Choice(OPERATIONS))
@click.argument("payload_a")
@click.argument("payload_b")
@click.option("--size", "-s", type=int, required=True, help="Number of pieces")
@click.option(
    "--other-size",
    type=int,
    default=None,
    help="Number of pieces in PAYLOAD_B (defaults to --size)",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def combine(
    ctx: click.Context,
    operation: str,
    payload_a: str,
    payload_b: str,
    size: int,
    other_size: int | None,
    as_json: bool,
) -> None:
    """Apply OPERATION to PAYLOAD_A and PAYLOAD_B."""
    a = _load(ctx, payload_a, size)
    b = _load(ctx, payload_b, size if other_size is None else other_size)
    try:
        result = getattr(a, operation)(b)
    except BFSetError as e:
        _fail(ctx, str(e))

    logger.debug("Combined bitfields with %s payload=%s", operation, result.to_hex())
    if as_json:
        click.echo(json.dumps(_summary(ctx, result)))
        return
    _print_summary(ctx, result, operation.capitalize())


@cli.command()
@click.argument("payload_a")
@click.argument("payload_b")
@click.option("--size", "-s", type=int, required=True, help="Number of pieces")
@click.option(
    "--other-size",
    type=int,
    default=None,
    help="Number of pieces in PAYLOAD_B (defaults to --size)",
)
@click.pass_context
def compare(
    ctx: click.Context,
    payload_a: str,
    payload_b: str,
    size: int,
    other_size: int | None,
) -> None:
    """Compare the pieces of PAYLOAD_A and PAYLOAD_B."""
    a = _load(ctx, payload_a, size)
    b = _load(ctx, payload_b, size if other_size is None else other_size)
    try:
        checks = {
            "A ⊆ B": a.issubset(b),
            "A ⊇ B": a.issuperset(b),
            "Disjoint": a.isdisjoint(b),
            "Equal": a.equal(b),
        }
    except BFSetError as e:
        _fail(ctx, str(e))

    table = print_table(title="Comparison")
    table.add_column("Check", style="cyan")
    table.add_column("Result")
    for name, value in checks.items():
        table.add_row(name, "[green]yes[/green]" if value else "[red]no[/red]")
    create_console().print(table)


def main() -> None:
    """Entry point for the ``bfset`` command."""
    cli(obj={})
