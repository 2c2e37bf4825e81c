"""
Signing backend built on the `aepp-sdk` package (import name `aeternity`).

Install with ``pip install 'aecli[aepp]'``. The package is imported lazily so
read-only commands work without it.

The adapter maps the protocol keyword options onto the SDK's argument names:

    ttl            -> tx_ttl
    fee            -> fee
    oracle_ttl     -> ttl_type / ttl_value
    query_ttl      -> query_ttl_type / query_ttl_value
    response_ttl   -> response_ttl_type / response_ttl_value
    query_fee      -> query_fee
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from ..config import NetworkConfig
from ..errors import SdkError, SdkUnavailable
from .protocols import RawTxResult

log = logging.getLogger(__name__)


def _as_dict(obj: Any) -> Any:
    """Recursively turn SDK response objects into plain JSON-able data."""
    if isinstance(obj, Mapping):
        return {str(k): _as_dict(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)) and not hasattr(obj, "_asdict"):
        return [_as_dict(v) for v in obj]
    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj
    for attr in ("_asdict", "to_dict"):
        fn = getattr(obj, attr, None)
        if callable(fn):
            return _as_dict(fn())
    if hasattr(obj, "__dict__"):
        return _as_dict({k: v for k, v in vars(obj).items() if not k.startswith("_")})
    return str(obj)


def _ttl_kwargs(prefix: str, descriptor: Any) -> Dict[str, Any]:
    if descriptor is None:
        return {}
    return {f"{prefix}_type": descriptor["type"], f"{prefix}_value": descriptor["value"]}


class _Backend:
    def __init__(self, node: Any, account: Any, oracles: Any) -> None:
        self._node = node
        self._account = account
        self._oracles = oracles

    def _tx_kwargs(self, opts: Mapping[str, Any]) -> Dict[str, Any]:
        if opts.get("nonce") is not None:
            raise SdkError("Nonce override is not supported by the aepp-sdk backend")
        kwargs: Dict[str, Any] = {}
        if opts.get("fee") is not None:
            kwargs["fee"] = opts["fee"]
        if opts.get("ttl") is not None:
            kwargs["tx_ttl"] = opts["ttl"]
        return kwargs

    def _finish(self, tx: Any, wait_mined: bool) -> RawTxResult:
        tx_hash = getattr(tx, "hash", None) or str(tx)
        if not wait_mined:
            return tx_hash
        log.debug("waiting for %s to be mined", tx_hash)
        self._node.wait_for_transaction(tx)
        record = _as_dict(self._node.get_transaction_by_hash(hash=tx_hash))
        record.setdefault("hash", tx_hash)
        return record


class AeppOracleHandle(_Backend):
    def __init__(self, node: Any, account: Any, oracles: Any, oracle_id: str) -> None:
        super().__init__(node, account, oracles)
        self.oracle_id = oracle_id

    def extend_oracle(self, oracle_ttl: Dict[str, Any], **opts: Any) -> RawTxResult:
        kwargs = self._tx_kwargs(opts)
        kwargs.update(_ttl_kwargs("ttl", oracle_ttl))
        oracle = self._oracles.Oracle(self._node, oracle_id=self.oracle_id)
        # query_id and response are required positionally but unused by extend
        tx = oracle.extend(self._account, None, None, **kwargs)
        return self._finish(tx, opts.get("wait_mined", True))

    def post_query(self, query: str, **opts: Any) -> RawTxResult:
        kwargs = self._tx_kwargs(opts)
        kwargs.update(_ttl_kwargs("query_ttl", opts.get("query_ttl")))
        kwargs.update(_ttl_kwargs("response_ttl", opts.get("response_ttl")))
        if opts.get("query_fee") is not None:
            kwargs["query_fee"] = opts["query_fee"]
        oracle_query = self._oracles.OracleQuery(self._node, self.oracle_id)
        tx = oracle_query.execute(self._account, query, **kwargs)
        return self._finish(tx, opts.get("wait_mined", True))

    def respond_to_query(self, query_id: str, response: str, **opts: Any) -> RawTxResult:
        kwargs = self._tx_kwargs(opts)
        kwargs.update(_ttl_kwargs("response_ttl", opts.get("response_ttl")))
        oracle = self._oracles.Oracle(self._node, oracle_id=self.oracle_id)
        tx = oracle.respond(self._account, query_id, response, **kwargs)
        return self._finish(tx, opts.get("wait_mined", True))


class AeppOracleClient(_Backend):
    def register_oracle(self, query_format: str, response_format: str, **opts: Any) -> RawTxResult:
        kwargs = self._tx_kwargs(opts)
        kwargs.update(_ttl_kwargs("ttl", opts.get("oracle_ttl")))
        if opts.get("query_fee") is not None:
            kwargs["query_fee"] = opts["query_fee"]
        oracle = self._oracles.Oracle(self._node)
        tx = oracle.register(self._account, query_format, response_format, **kwargs)
        return self._finish(tx, opts.get("wait_mined", True))

    def get_oracle_object(self, oracle_id: str) -> AeppOracleHandle:
        return AeppOracleHandle(self._node, self._account, self._oracles, oracle_id)


def load_client(wallet_path: str, password: str, config: NetworkConfig) -> AeppOracleClient:
    """Open a keystore file and return a client bound to the configured node."""
    try:
        from aeternity import oracles
        from aeternity.node import Config, NodeClient
        from aeternity.signing import Account
    except ImportError as e:
        raise SdkUnavailable(
            "Signing requires the 'aepp-sdk' package. Install it with: pip install 'aecli[aepp]'"
        ) from e

    account = Account.from_keystore(wallet_path, password)
    node = NodeClient(
        Config(
            external_url=config.url,
            internal_url=config.internal_url,
            network_id=config.network_id,
            blocking_mode=False,
        )
    )
    log.debug("loaded wallet %s for %s", wallet_path, config.network_id)
    return AeppOracleClient(node, account, oracles)


__all__ = ["AeppOracleClient", "AeppOracleHandle", "load_client"]
