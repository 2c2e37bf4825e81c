"""
aecli.cli.chain: Chain query subcommands.

Implements:
  - aecli chain top    Current top key block
  - aecli chain ttl    Absolute height for a relative TTL
"""

from __future__ import annotations

import typer

from ..inspection import ChainCommands
from .context import get_context
from .printing import finish, print_json, present_record

app = typer.Typer(help="Chain queries (top, ttl)")


def _commands(ctx: typer.Context) -> ChainCommands:
    return ChainCommands(get_context(ctx).config)


@app.command()
def top(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print result as JSON"),
) -> None:
    """Display the current top key block."""
    json_mode = get_context(ctx).json_mode(json_output)
    finish(_commands(ctx).top(), lambda block: present_record(block, json_mode))


@app.command()
def ttl(
    ctx: typer.Context,
    relative_ttl: str = typer.Argument(..., help="Number of blocks from the current height"),
    json_output: bool = typer.Option(False, "--json", help="Print result as JSON"),
) -> None:
    """Print the absolute height `relative_ttl` blocks past the current top."""
    json_mode = get_context(ctx).json_mode(json_output)

    def render(absolute) -> None:
        if json_mode:
            print_json({"absoluteTtl": absolute.value})
        else:
            typer.echo(f"Absolute TTL: {absolute.value}")

    finish(_commands(ctx).absolute_ttl(relative_ttl), render)
