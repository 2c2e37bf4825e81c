"""aecli inspect: look up a chain object by hash, id, height or name."""

from __future__ import annotations

import typer

from ..inspection import ChainCommands
from .context import get_context
from .printing import finish, present_oracle, present_record

__all__ = ["inspect_command"]


def inspect_command(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="ak_/th_/kh_/mh_/ok_ id, key block height or NAME.chain"),
    json_output: bool = typer.Option(False, "--json", help="Print result as JSON"),
) -> None:
    """Inspect an account, transaction, block, oracle or AENS name."""
    json_mode = get_context(ctx).json_mode(json_output)
    result = ChainCommands(get_context(ctx).config).inspect(target)

    def render(found) -> None:
        if found.kind == "oracle" and not json_mode:
            present_oracle(found.data)
            return
        present_record(found.data, json_mode)

    finish(result, render)
