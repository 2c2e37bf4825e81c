"""
aecli.cli.contract: Sophia compiler helpers.

Implements:
  - aecli contract compile            Compile a contract source file to bytecode
  - aecli contract encode-data        Encode call data for a function call
  - aecli contract decode-data        Decode contract return data for a type
  - aecli contract decode-call-data   Decode call data by source or by bytecode
"""

from __future__ import annotations

from typing import List, Optional

import typer

from ..contract import ContractCommands
from ..sdk.compiler import decoded_arguments
from .context import get_context
from .printing import finish, print_fields, print_json

app = typer.Typer(help="Compile contracts and encode/decode contract data")

JSON = typer.Option(False, "--json", help="Print result as JSON")


def _commands(ctx: typer.Context) -> ContractCommands:
    return ContractCommands(get_context(ctx).config)


def _render(ctx: typer.Context, json_output: bool, label: str, key: str):
    json_mode = get_context(ctx).json_mode(json_output)

    def render(value) -> None:
        if json_mode:
            print_json(value)
        else:
            print_fields([(label, value[key])])

    return render


@app.command("compile")
def compile_(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Path to the contract source (.aes)"),
    json_output: bool = JSON,
) -> None:
    """Compile a contract source file and print its bytecode."""
    finish(_commands(ctx).compile(file), _render(ctx, json_output, "Contract bytecode", "bytecode"))


@app.command("encode-data")
def encode_data(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Path to the contract source (.aes)"),
    fn: str = typer.Argument(..., help="Function name"),
    args: Optional[List[str]] = typer.Argument(None, help="Function arguments as Sophia literals"),
    json_output: bool = JSON,
) -> None:
    """Encode call data for calling `fn` with `args`."""
    result = _commands(ctx).encode_data(file, fn, args or [])
    finish(result, _render(ctx, json_output, "Contract encoded call data", "calldata"))


@app.command("decode-data")
def decode_data(
    ctx: typer.Context,
    data: str = typer.Argument(..., help="Data to decode (cb_...)"),
    sophia_type: str = typer.Argument(..., help="Sophia type of the data, e.g. int or string"),
    json_output: bool = JSON,
) -> None:
    """Decode contract data of a given Sophia type."""
    result = _commands(ctx).decode_data(data, sophia_type)
    finish(result, _render(ctx, json_output, "Decoded data", "decoded"))


@app.command("decode-call-data")
def decode_call_data(
    ctx: typer.Context,
    data: str = typer.Argument(..., help="Call data to decode (cb_...)"),
    source_path: Optional[str] = typer.Option(
        None, "--sourcePath", "--source-path", help="Path to the contract source"
    ),
    code: Optional[str] = typer.Option(None, "--code", help="Contract bytecode (cb_...)"),
    fn: Optional[str] = typer.Option(None, "--fn", help="Function name, required with --sourcePath"),
    json_output: bool = JSON,
) -> None:
    """Decode call data using the contract source or its bytecode."""
    json_mode = get_context(ctx).json_mode(json_output)
    result = _commands(ctx).decode_call_data(data, source_path=source_path, code=code, fn=fn)

    def render(decoded) -> None:
        if json_mode:
            print_json(decoded)
            return
        print_fields(
            [
                ("Function", decoded.get("function")),
                ("Arguments", decoded_arguments(decoded)),
            ]
        )

    finish(result, render)
