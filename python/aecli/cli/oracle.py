"""
aecli.cli.oracle: Oracle lifecycle subcommands.

Implements:
  - aecli oracle create         Register the wallet account as an oracle
  - aecli oracle extend         Extend an oracle's lifetime
  - aecli oracle create-query   Post a query to an oracle
  - aecli oracle respond        Respond to a query
  - aecli oracle query          Show an oracle and its queries

Transaction commands wait for the transaction to be mined unless
--no-waitMined is given, in which case only the hash is printed.
"""

from __future__ import annotations

from typing import Optional

import typer

from ..models import OracleOptions, WalletRef
from ..oracle import OracleCommands
from .context import get_context
from .printing import finish, present_oracle_view, present_transaction

app = typer.Typer(help="Register, extend, query and respond to oracles")

# options shared by every transaction command
PASSWORD = typer.Option(None, "--password", "-P", help="Wallet password (prompted when omitted)")
TTL = typer.Option(None, "--ttl", help="Number of blocks the transaction stays valid for (0: no limit)")
FEE = typer.Option(None, "--fee", help="Transaction fee in aettos")
NONCE = typer.Option(None, "--nonce", help="Override the account nonce")
WAIT_MINED = typer.Option(
    True,
    "--waitMined/--no-waitMined",
    "--wait-mined/--no-wait-mined",
    help="Wait until the transaction is mined",
)
JSON = typer.Option(False, "--json", help="Print result as JSON")


def _commands(ctx: typer.Context) -> OracleCommands:
    return OracleCommands(get_context(ctx).config)


def _prompt_password() -> str:
    return typer.prompt("Enter your password", hide_input=True)


def _wallet(wallet_path: str, password: Optional[str]) -> WalletRef:
    # prompted only once the command arguments are valid
    return WalletRef(path=wallet_path, password=password, password_provider=_prompt_password)


def _render(ctx: typer.Context, json_output: bool):
    json_mode = get_context(ctx).json_mode(json_output)
    return lambda result: present_transaction(result, json_mode)


@app.command("create")
def create(
    ctx: typer.Context,
    wallet_path: str = typer.Argument(..., help="Path to the wallet keystore"),
    query_format: str = typer.Argument(..., help="Format of queries the oracle accepts"),
    response_format: str = typer.Argument(..., help="Format of the oracle's responses"),
    password: Optional[str] = PASSWORD,
    ttl: Optional[int] = TTL,
    fee: Optional[int] = FEE,
    nonce: Optional[int] = NONCE,
    wait_mined: bool = WAIT_MINED,
    json_output: bool = JSON,
    oracle_ttl: Optional[str] = typer.Option(
        None, "--oracleTtl", "--oracle-ttl", help="Oracle lifetime in blocks, or delta:<n> / block:<height>"
    ),
    query_fee: Optional[int] = typer.Option(
        None, "--queryFee", "--query-fee", help="Fee the oracle charges per query"
    ),
) -> None:
    """Register the wallet account as an oracle."""
    wallet = _wallet(wallet_path, password)
    options = OracleOptions.from_cli(
        oracle_ttl=oracle_ttl,
        ttl=ttl,
        fee=fee,
        nonce=nonce,
        wait_mined=wait_mined,
        json=json_output,
        query_fee=query_fee,
    )
    result = _commands(ctx).create(wallet, query_format, response_format, options)
    finish(result, _render(ctx, json_output))


@app.command("extend")
def extend(
    ctx: typer.Context,
    wallet_path: str = typer.Argument(..., help="Path to the wallet keystore"),
    oracle_id: str = typer.Argument(..., help="Oracle id (ok_...)"),
    oracle_ttl: str = typer.Argument(..., help="Number of blocks to extend the oracle by"),
    password: Optional[str] = PASSWORD,
    ttl: Optional[int] = TTL,
    fee: Optional[int] = FEE,
    nonce: Optional[int] = NONCE,
    wait_mined: bool = WAIT_MINED,
    json_output: bool = JSON,
) -> None:
    """Extend an oracle's lifetime by a number of blocks."""
    wallet = _wallet(wallet_path, password)
    options = OracleOptions.from_cli(ttl=ttl, fee=fee, nonce=nonce, wait_mined=wait_mined, json=json_output)
    result = _commands(ctx).extend(wallet, oracle_id, oracle_ttl, options)
    finish(result, _render(ctx, json_output))


@app.command("create-query")
def create_query(
    ctx: typer.Context,
    wallet_path: str = typer.Argument(..., help="Path to the wallet keystore"),
    oracle_id: str = typer.Argument(..., help="Oracle id (ok_...)"),
    query: str = typer.Argument(..., help="Query text"),
    password: Optional[str] = PASSWORD,
    ttl: Optional[int] = TTL,
    fee: Optional[int] = FEE,
    nonce: Optional[int] = NONCE,
    wait_mined: bool = WAIT_MINED,
    json_output: bool = JSON,
    query_ttl: Optional[str] = typer.Option(
        None, "--queryTtl", "--query-ttl", help="How long the query waits for a response"
    ),
    query_fee: Optional[int] = typer.Option(
        None, "--queryFee", "--query-fee", help="Fee offered to the oracle"
    ),
    response_ttl: Optional[str] = typer.Option(
        None, "--responseTtl", "--response-ttl", help="How long the response stays on chain"
    ),
) -> None:
    """Post a query to an oracle."""
    wallet = _wallet(wallet_path, password)
    options = OracleOptions.from_cli(
        query_ttl=query_ttl,
        response_ttl=response_ttl,
        ttl=ttl,
        fee=fee,
        nonce=nonce,
        wait_mined=wait_mined,
        json=json_output,
        query_fee=query_fee,
    )
    result = _commands(ctx).create_query(wallet, oracle_id, query, options)
    finish(result, _render(ctx, json_output))


@app.command("respond")
def respond(
    ctx: typer.Context,
    wallet_path: str = typer.Argument(..., help="Path to the wallet keystore"),
    oracle_id: str = typer.Argument(..., help="Oracle id (ok_...)"),
    query_id: str = typer.Argument(..., help="Query id (oq_...)"),
    response: str = typer.Argument(..., help="Response text"),
    password: Optional[str] = PASSWORD,
    ttl: Optional[int] = TTL,
    fee: Optional[int] = FEE,
    nonce: Optional[int] = NONCE,
    wait_mined: bool = WAIT_MINED,
    json_output: bool = JSON,
    response_ttl: Optional[str] = typer.Option(
        None, "--responseTtl", "--response-ttl", help="How long the response stays on chain"
    ),
) -> None:
    """Respond to a query posted to the wallet's oracle."""
    wallet = _wallet(wallet_path, password)
    options = OracleOptions.from_cli(
        response_ttl=response_ttl,
        ttl=ttl,
        fee=fee,
        nonce=nonce,
        wait_mined=wait_mined,
        json=json_output,
    )
    result = _commands(ctx).respond(wallet, oracle_id, query_id, response, options)
    finish(result, _render(ctx, json_output))


@app.command("query")
def query(
    ctx: typer.Context,
    oracle_id: str = typer.Argument(..., help="Oracle id (ok_...)"),
    json_output: bool = JSON,
) -> None:
    """Show an oracle and the queries posted to it."""
    json_mode = get_context(ctx).json_mode(json_output)
    result = _commands(ctx).query(oracle_id)
    finish(result, lambda view: present_oracle_view(view, json_mode))
