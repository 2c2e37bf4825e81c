"""
Minimal SDK capability protocols.

The orchestrators depend only on these shapes, never on a concrete SDK, so a
signing backend or a test double can be swapped in freely.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Protocol, Union

from ..config import NetworkConfig

# A transaction result as handed back by a backend: either the bare hash of a
# broadcast transaction or the mined record (hash, block_height, block_hash, tx, ...).
RawTxResult = Union[str, Mapping[str, Any]]


class OracleHandle(Protocol):
    """Operations bound to one registered oracle."""

    def extend_oracle(self, oracle_ttl: Dict[str, Any], **opts: Any) -> RawTxResult: ...

    def post_query(self, query: str, **opts: Any) -> RawTxResult: ...

    def respond_to_query(self, query_id: str, response: str, **opts: Any) -> RawTxResult: ...


class OracleClient(Protocol):
    """Authenticated client able to sign and submit oracle transactions."""

    def register_oracle(self, query_format: str, response_format: str, **opts: Any) -> RawTxResult: ...

    def get_oracle_object(self, oracle_id: str) -> OracleHandle: ...


class ChainReader(Protocol):
    """Read-only chain API; no wallet needed."""

    def get_oracle_by_pubkey(self, oracle_id: str) -> Dict[str, Any]: ...

    def get_oracle_queries_by_pubkey(self, oracle_id: str) -> List[Dict[str, Any]]: ...

    def get_current_key_block(self) -> Dict[str, Any]: ...

    def get_current_height(self) -> int: ...

    def get_account(self, account_id: str) -> Dict[str, Any]: ...

    def get_transaction(self, tx_hash: str) -> Dict[str, Any]: ...

    def get_key_block(self, block_hash: str) -> Dict[str, Any]: ...

    def get_micro_block_header(self, block_hash: str) -> Dict[str, Any]: ...

    def get_key_block_by_height(self, height: int) -> Dict[str, Any]: ...

    def get_name(self, name: str) -> Dict[str, Any]: ...

    def close(self) -> None: ...


class WalletLoader(Protocol):
    def __call__(self, wallet_path: str, password: str, config: NetworkConfig) -> OracleClient: ...


class ChainFactory(Protocol):
    def __call__(self, config: NetworkConfig) -> ChainReader: ...


__all__ = [
    "RawTxResult",
    "OracleHandle",
    "OracleClient",
    "ChainReader",
    "WalletLoader",
    "ChainFactory",
]
