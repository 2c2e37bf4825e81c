"""
aecli - command-line interface for æternity nodes.

Command groups:
  - oracle     register, extend, query and respond to oracles
  - chain      current top and TTL arithmetic
  - contract   compile and encode/decode data through the Sophia compiler
  - inspect    look up an account, transaction, block, oracle or name

Global options:
  --url, -u TEXT         Node URL
  --internalUrl TEXT     Node internal URL (debug endpoints)
  --compilerUrl TEXT     Sophia compiler URL
  --networkId TEXT       Network id used for signing
  --timeout FLOAT        HTTP timeout in seconds
  --json                 Output JSON instead of human-readable text
  --verbose / -v         Debug logging on stderr

Examples:
  aecli chain top
  aecli oracle create ./wallet.json string string --oracleTtl 500
  aecli oracle query ok_2a1j2Mk9YSmC1gioUq4PWRm3bsv887MbuRVwyv4KaUGoR1eiKi
  aecli inspect th_... --json
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import typer

from ..config import load_network_config
from ..version import __version__
from . import chain, contract, oracle
from .context import CliContext
from .inspect import inspect_command

log = logging.getLogger(__name__)

app = typer.Typer(
    name="aecli",
    help="æternity command-line interface",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "CliContext"]


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.environ.get("AECLI_LOG_LEVEL", "WARNING")
    # basicConfig writes to stderr, stdout stays reserved for results
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"aecli {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Node URL", envvar="AECLI_URL"),
    internal_url: Optional[str] = typer.Option(
        None, "--internalUrl", "--internal-url", help="Node internal URL", envvar="AECLI_INTERNAL_URL"
    ),
    compiler_url: Optional[str] = typer.Option(
        None, "--compilerUrl", "--compiler-url", help="Sophia compiler URL", envvar="AECLI_COMPILER_URL"
    ),
    network_id: Optional[str] = typer.Option(
        None, "--networkId", "--network-id", help="Network id", envvar="AECLI_NETWORK_ID"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="HTTP timeout in seconds", envvar="AECLI_TIMEOUT"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output JSON instead of human-readable text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """
    æternity CLI: oracles, chain queries and contract helpers.

    Configuration is resolved in this order (highest to lowest priority):
      1. Command-line flags (--url, --networkId, ...)
      2. Environment variables (AECLI_URL, AECLI_NETWORK_ID, ...)
      3. Built-in defaults (mainnet)
    """
    _configure_logging(verbose)
    try:
        config = load_network_config().with_overrides(
            url=url,
            internal_url=internal_url,
            compiler_url=compiler_url,
            network_id=network_id,
            timeout=timeout,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    log.debug("network config: %s", config.to_dict())
    ctx.obj = CliContext(config=config, json_output=json_output, verbose=verbose)


app.add_typer(oracle.app, name="oracle")
app.add_typer(chain.app, name="chain")
app.add_typer(contract.app, name="contract")
app.command("inspect")(inspect_command)


def main() -> None:
    """Entry point for the aecli CLI."""
    app()


if __name__ == "__main__":
    main()
