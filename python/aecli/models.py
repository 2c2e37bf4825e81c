"""
Value types passed between the CLI, the orchestrators and the presenter.

None of these are persisted; each is created for a single invocation and
consumed by the presenter right after.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .errors import InvalidInput
from .ttl import TtlSpec, normalize_oracle_ttl

__all__ = [
    "OracleOptions",
    "WalletRef",
    "SubmittedTx",
    "MinedTx",
    "TransactionResult",
    "OracleView",
]


@dataclass(frozen=True)
class OracleOptions:
    """
    Options for oracle lifecycle transactions.

    A field left as None is not forwarded, so the SDK applies its own default.

    Fields:
      - ttl: number of blocks the transaction stays valid for (0: no limit)
      - fee: transaction fee in aettos
      - nonce: account nonce to sign with, overriding the next free one
      - wait_mined: block until the transaction is included in a block
      - json: render the result as a JSON document
      - oracle_ttl: lifetime of the registered oracle
      - query_fee: fee the oracle charges per query (create) or the fee offered (create-query)
      - query_ttl: how long a posted query waits for a response
      - response_ttl: how long a response stays on chain
    """

    ttl: Optional[int] = None
    fee: Optional[int] = None
    nonce: Optional[int] = None
    wait_mined: bool = True
    json: bool = False
    oracle_ttl: Optional[TtlSpec] = None
    query_fee: Optional[int] = None
    query_ttl: Optional[TtlSpec] = None
    response_ttl: Optional[TtlSpec] = None

    @classmethod
    def from_cli(
        cls,
        *,
        oracle_ttl: Any = None,
        query_ttl: Any = None,
        response_ttl: Any = None,
        **kwargs: Any,
    ) -> "OracleOptions":
        """Build options from raw command-line values, normalizing TTL fields once."""
        return cls(
            oracle_ttl=normalize_oracle_ttl(oracle_ttl),
            query_ttl=normalize_oracle_ttl(query_ttl),
            response_ttl=normalize_oracle_ttl(response_ttl),
            **kwargs,
        )

    def tx_params(self) -> Dict[str, Any]:
        """Common transaction parameters that were explicitly set."""
        params: Dict[str, Any] = {"wait_mined": self.wait_mined}
        for name in ("ttl", "fee", "nonce"):
            value = getattr(self, name)
            if value is not None:
                params[name] = value
        return params


@dataclass(frozen=True)
class WalletRef:
    """
    A keystore path and how to unlock it.

    With no `password`, `password_provider` is asked for one when the client
    is acquired, which is after the command arguments have been validated.
    """

    path: str
    password: Optional[str] = field(default=None, repr=False)
    password_provider: Optional[Callable[[], str]] = field(default=None, repr=False, compare=False)

    def resolve_password(self) -> str:
        if self.password is not None:
            return self.password
        if self.password_provider is None:
            raise InvalidInput("Wallet password required")
        return self.password_provider()


@dataclass(frozen=True)
class SubmittedTx:
    """A broadcast transaction whose inclusion was not awaited."""

    hash: str


@dataclass(frozen=True)
class MinedTx:
    """A transaction confirmed in a block."""

    hash: str
    block_height: Optional[int]
    block_hash: Optional[str]
    record: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "MinedTx":
        data = dict(record)
        height = data.get("block_height", data.get("blockHeight"))
        return cls(
            hash=str(data.get("hash")),
            block_height=int(height) if height is not None else None,
            block_hash=data.get("block_hash", data.get("blockHash")),
            record=data,
        )


TransactionResult = Union[SubmittedTx, MinedTx]


@dataclass(frozen=True)
class OracleView:
    oracle: Dict[str, Any]
    queries: List[Dict[str, Any]]

    def merged(self) -> Dict[str, Any]:
        return {**self.oracle, "queries": self.queries}
