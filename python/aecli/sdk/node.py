"""
Read-only client for the æternity node REST API (v3).

Example:
    from aecli.sdk.node import NodeApi
    with NodeApi("https://testnet.aeternity.io") as node:
        print(node.get_current_height())
"""

from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import quote

from ..config import NetworkConfig
from ..errors import SdkError
from .http import JsonHttpApi

API_PREFIX = "/v3"


class NodeApi(JsonHttpApi):
    """ChainReader implementation over the node's public HTTP API."""

    @classmethod
    def from_config(cls, config: NetworkConfig) -> "NodeApi":
        return cls(config.url, timeout=config.timeout)

    def _get(self, path: str, **params: Any) -> Any:
        return self.get(API_PREFIX + path, params=params or None)

    # --- oracles ---------------------------------------------------------

    def get_oracle_by_pubkey(self, oracle_id: str) -> Dict[str, Any]:
        return self._get(f"/oracles/{quote(oracle_id)}")

    def get_oracle_queries_by_pubkey(self, oracle_id: str) -> List[Dict[str, Any]]:
        body = self._get(f"/oracles/{quote(oracle_id)}/queries")
        queries = body.get("oracle_queries", body.get("oracleQueries"))
        if not isinstance(queries, list):
            raise SdkError("Malformed oracle queries response", endpoint="/oracles/queries")
        return queries

    # --- chain -----------------------------------------------------------

    def get_current_key_block(self) -> Dict[str, Any]:
        return self._get("/key-blocks/current")

    def get_current_height(self) -> int:
        return int(self._get("/key-blocks/current/height")["height"])

    def get_key_block(self, block_hash: str) -> Dict[str, Any]:
        return self._get(f"/key-blocks/hash/{quote(block_hash)}")

    def get_key_block_by_height(self, height: int) -> Dict[str, Any]:
        return self._get(f"/key-blocks/height/{int(height)}")

    def get_micro_block_header(self, block_hash: str) -> Dict[str, Any]:
        return self._get(f"/micro-blocks/hash/{quote(block_hash)}/header")

    def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        return self._get(f"/transactions/{quote(tx_hash)}")

    def get_account(self, account_id: str) -> Dict[str, Any]:
        return self._get(f"/accounts/{quote(account_id)}")

    def get_name(self, name: str) -> Dict[str, Any]:
        return self._get(f"/names/{quote(name)}")


__all__ = ["NodeApi", "API_PREFIX"]
