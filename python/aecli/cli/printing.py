"""
aecli.cli.printing
==================

Rendering of command results, either as `<label>: <value>` lines or as a
single JSON document on stdout. Errors always go to stderr as
``Error: <message>`` regardless of the output mode.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

import typer

from ..encoding import EncodingError, decode_text
from ..errors import AecliError, PresentationError
from ..models import MinedTx, OracleView, SubmittedTx, TransactionResult
from ..result import Err, Result

log = logging.getLogger(__name__)

__all__ = [
    "render_json",
    "print_json",
    "print_fields",
    "print_error",
    "present_transaction",
    "present_oracle",
    "present_queries",
    "present_oracle_view",
    "present_record",
    "finish",
    "fail",
    "SUBMITTED_PREFIX",
]

SUBMITTED_PREFIX = "Transaction send to the chain. Tx hash:"

_ORACLE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Oracle ID", "id"),
    ("Query format", "query_format"),
    ("Response format", "response_format"),
    ("Query fee", "query_fee"),
    ("TTL", "ttl"),
    ("ABI version", "abi_version"),
)

_QUERY_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Query ID", "id"),
    ("Oracle ID", "oracle_id"),
    ("Sender", "sender_id"),
    ("Sender nonce", "sender_nonce"),
    ("Fee", "fee"),
    ("TTL", "ttl"),
    ("Response TTL", "response_ttl"),
)


def render_json(obj: Any) -> str:
    try:
        return json.dumps(obj, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise PresentationError(f"Cannot render result as JSON: {e}") from e


def print_json(obj: Any) -> None:
    typer.echo(render_json(obj))


def _value(record: Mapping[str, Any], key: str) -> Any:
    # node records are snake_case, SDK records may be camelCase
    if key in record:
        return record[key]
    head, *rest = key.split("_")
    return record.get(head + "".join(part.title() for part in rest))


def _format(value: Any) -> str:
    if value is None:
        return "N/A"
    if isinstance(value, Mapping):
        if set(value) == {"type", "value"}:
            return f"{value['value']} ({value['type']})"
        return render_json(dict(value))
    if isinstance(value, (list, tuple)):
        return ", ".join(_format(v) for v in value) if value else "N/A"
    return str(value)


def print_fields(rows: Iterable[Tuple[str, Any]]) -> None:
    for label, value in rows:
        typer.echo(f"{label}: {_format(value)}")


def print_error(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)


def _payload_text(value: Any) -> Optional[str]:
    if not value:
        return None
    try:
        return decode_text(str(value))
    except EncodingError:
        log.debug("payload %r is not base64check encoded", value)
        return str(value)


# --- transactions -----------------------------------------------------------


def present_transaction(result: TransactionResult, json_mode: bool = False) -> None:
    if isinstance(result, SubmittedTx):
        if json_mode:
            print_json({"hash": result.hash})
        else:
            typer.echo(f"{SUBMITTED_PREFIX} {result.hash}")
        return
    if not isinstance(result, MinedTx):
        raise PresentationError(f"Unexpected transaction result: {result!r}")
    if json_mode:
        print_json(result.record or {"hash": result.hash})
        return
    record = result.record
    tx = _value(record, "tx") or {}
    rows: List[Tuple[str, Any]] = [
        ("Transaction hash", result.hash),
        ("Block hash", result.block_hash),
        ("Block height", result.block_height),
        ("Signatures", _value(record, "signatures")),
        ("Tx Type", _value(tx, "type") if isinstance(tx, Mapping) else None),
    ]
    if isinstance(tx, Mapping):
        rows.extend((key, value) for key, value in tx.items() if key != "type")
    print_fields(rows)


# --- oracles ----------------------------------------------------------------


def present_oracle(oracle: Mapping[str, Any]) -> None:
    print_fields((label, _value(oracle, key)) for label, key in _ORACLE_FIELDS)


def present_queries(queries: List[Mapping[str, Any]]) -> None:
    typer.echo(f"Queries: {len(queries)}")
    for query in queries:
        typer.echo("")
        print_fields((label, _value(query, key)) for label, key in _QUERY_FIELDS)
        print_fields(
            [
                ("Query", _payload_text(_value(query, "query"))),
                ("Response", _payload_text(_value(query, "response"))),
            ]
        )


def present_oracle_view(view: OracleView, json_mode: bool = False) -> None:
    if json_mode:
        print_json(view.merged())
        return
    present_oracle(view.oracle)
    typer.echo("")
    present_queries(view.queries)


def present_record(record: Mapping[str, Any], json_mode: bool = False) -> None:
    """Generic rendering for node records: JSON document or one line per top-level key."""
    if json_mode:
        print_json(dict(record))
        return
    print_fields((key.replace("_", " ").capitalize(), value) for key, value in record.items())


# --- command boundary -------------------------------------------------------


def finish(result: Result[Any], render: Callable[[Any], None]) -> None:
    """
    Render an `Ok` value, or print an `Err` to stderr and exit 1.

    A failure while rendering is reported the same way.
    """
    if isinstance(result, Err):
        log.debug("failed while %s: %r", result.stage.value, result.error)
        print_error(result.message)
        raise typer.Exit(1)
    try:
        render(result.value)
    except AecliError as e:
        print_error(str(e))
        raise typer.Exit(1)


def fail(message: str) -> None:
    print_error(message)
    raise typer.Exit(1)
