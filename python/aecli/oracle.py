"""
aecli.oracle
============

Oracle lifecycle orchestration: register → extend → post query → respond,
plus read-only inspection.

Every operation runs the same pipeline and returns a `Result`:

    VALIDATING → ACQUIRING → NORMALIZING → INVOKING → DISPATCHING → DONE

Identifiers are checked before anything touches the wallet or the network.
Any failure stops the pipeline and is reported as `Err(error, stage)`; nothing
is retried.
"""

from __future__ import annotations

from contextlib import closing
from typing import Any, Dict, Mapping, Optional

from .config import NetworkConfig
from .encoding import assert_tagged
from .errors import InvalidTtl, PresentationError
from .models import MinedTx, OracleOptions, OracleView, SubmittedTx, TransactionResult, WalletRef
from .pipeline import Pipeline, invoke, run_pipeline
from .result import Result, Stage
from .sdk.protocols import ChainFactory, OracleClient, RawTxResult, WalletLoader
from .ttl import RelativeTtl, normalize_oracle_ttl, resolve_ttl

__all__ = ["OracleCommands", "dispatch_result", "default_wallet_loader", "default_chain_factory"]


def default_wallet_loader(wallet_path: str, password: str, config: NetworkConfig) -> OracleClient:
    from .sdk.aepp import load_client

    return load_client(wallet_path, password, config)


def default_chain_factory(config: NetworkConfig):
    from .sdk.node import NodeApi

    return NodeApi.from_config(config)


def _put(opts: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        opts[key] = value


def dispatch_result(raw: RawTxResult, wait_mined: bool) -> TransactionResult:
    """
    Turn a backend result into SubmittedTx or MinedTx.

    The backend may or may not have blocked until inclusion, so the shape of
    `raw` is checked rather than assumed from the flag alone.
    """
    if wait_mined and isinstance(raw, Mapping):
        if not raw.get("hash"):
            raise PresentationError("Transaction record has no hash")
        return MinedTx.from_record(raw)
    if isinstance(raw, str):
        tx_hash: Optional[str] = raw
    elif isinstance(raw, Mapping):
        tx_hash = raw.get("hash")
    else:
        tx_hash = None
    if not tx_hash:
        raise PresentationError(f"Unexpected transaction result: {raw!r}")
    return SubmittedTx(str(tx_hash))


class OracleCommands:
    """One method per oracle lifecycle action; all of them return a Result."""

    def __init__(
        self,
        config: NetworkConfig,
        *,
        wallet_loader: Optional[WalletLoader] = None,
        chain_factory: Optional[ChainFactory] = None,
    ) -> None:
        self.config = config
        self._wallet_loader = wallet_loader or default_wallet_loader
        self._chain_factory = chain_factory or default_chain_factory

    def _client(self, wallet: WalletRef) -> OracleClient:
        password = wallet.resolve_password()
        return invoke(self._wallet_loader, wallet.path, password, self.config)

    # --- operations ------------------------------------------------------

    def create(
        self,
        wallet: WalletRef,
        query_format: str,
        response_format: str,
        options: OracleOptions,
    ) -> Result[TransactionResult]:
        """Register the wallet's account as an oracle."""

        def body(p: Pipeline) -> TransactionResult:
            p.enter(Stage.ACQUIRING)
            client = self._client(wallet)
            p.enter(Stage.NORMALIZING)
            oracle_ttl = resolve_ttl(options.oracle_ttl, "Oracle Ttl")
            p.enter(Stage.INVOKING)
            opts = options.tx_params()
            _put(opts, "oracle_ttl", oracle_ttl.descriptor() if oracle_ttl else None)
            _put(opts, "query_fee", options.query_fee)
            raw = invoke(client.register_oracle, query_format, response_format, **opts)
            p.enter(Stage.DISPATCHING)
            return dispatch_result(raw, options.wait_mined)

        return run_pipeline("create", body)

    def extend(
        self,
        wallet: WalletRef,
        oracle_id: str,
        oracle_ttl: Any,
        options: OracleOptions,
    ) -> Result[TransactionResult]:
        """Extend an oracle's lifetime by a relative number of blocks."""

        def body(p: Pipeline) -> TransactionResult:
            ttl = normalize_oracle_ttl(oracle_ttl)
            if not isinstance(ttl, RelativeTtl):
                raise InvalidTtl("Oracle Ttl should be a number", field="oracleTtl", value=oracle_ttl)
            if ttl.value < 0:
                raise InvalidTtl("Oracle Ttl should be a non-negative number", field="oracleTtl", value=ttl.value)
            assert_tagged(oracle_id, "ok", "oracleId")
            p.enter(Stage.ACQUIRING)
            client = self._client(wallet)
            p.enter(Stage.NORMALIZING)
            resolved = resolve_ttl(ttl, "Oracle Ttl")
            p.enter(Stage.INVOKING)
            oracle = invoke(client.get_oracle_object, oracle_id)
            raw = invoke(oracle.extend_oracle, resolved.descriptor(), **options.tx_params())
            p.enter(Stage.DISPATCHING)
            return dispatch_result(raw, options.wait_mined)

        return run_pipeline("extend", body)

    def create_query(
        self,
        wallet: WalletRef,
        oracle_id: str,
        query: str,
        options: OracleOptions,
    ) -> Result[TransactionResult]:
        """Post a query to an oracle."""

        def body(p: Pipeline) -> TransactionResult:
            assert_tagged(oracle_id, "ok", "oracleId")
            p.enter(Stage.ACQUIRING)
            client = self._client(wallet)
            p.enter(Stage.NORMALIZING)
            query_ttl = resolve_ttl(options.query_ttl, "Query Ttl")
            response_ttl = resolve_ttl(options.response_ttl, "Response Ttl")
            p.enter(Stage.INVOKING)
            opts = options.tx_params()
            _put(opts, "query_ttl", query_ttl.descriptor() if query_ttl else None)
            _put(opts, "response_ttl", response_ttl.descriptor() if response_ttl else None)
            _put(opts, "query_fee", options.query_fee)
            oracle = invoke(client.get_oracle_object, oracle_id)
            raw = invoke(oracle.post_query, query, **opts)
            p.enter(Stage.DISPATCHING)
            return dispatch_result(raw, options.wait_mined)

        return run_pipeline("create-query", body)

    def respond(
        self,
        wallet: WalletRef,
        oracle_id: str,
        query_id: str,
        response: str,
        options: OracleOptions,
    ) -> Result[TransactionResult]:
        """Answer a query posted to the wallet's oracle."""

        def body(p: Pipeline) -> TransactionResult:
            assert_tagged(oracle_id, "ok", "oracleId")
            assert_tagged(query_id, "oq", "queryId")
            p.enter(Stage.ACQUIRING)
            client = self._client(wallet)
            p.enter(Stage.NORMALIZING)
            response_ttl = resolve_ttl(options.response_ttl, "Response Ttl")
            p.enter(Stage.INVOKING)
            opts = options.tx_params()
            _put(opts, "response_ttl", response_ttl.descriptor() if response_ttl else None)
            oracle = invoke(client.get_oracle_object, oracle_id)
            raw = invoke(oracle.respond_to_query, query_id, response, **opts)
            p.enter(Stage.DISPATCHING)
            return dispatch_result(raw, options.wait_mined)

        return run_pipeline("respond", body)

    def query(self, oracle_id: str) -> Result[OracleView]:
        """Fetch an oracle and its queries; no wallet involved."""

        def body(p: Pipeline) -> OracleView:
            assert_tagged(oracle_id, "ok", "oracleId")
            p.enter(Stage.ACQUIRING)
            chain = invoke(self._chain_factory, self.config)
            with closing(chain):
                p.enter(Stage.INVOKING)
                oracle = invoke(chain.get_oracle_by_pubkey, oracle_id)
                queries = invoke(chain.get_oracle_queries_by_pubkey, oracle_id)
            p.enter(Stage.DISPATCHING)
            return OracleView(oracle=dict(oracle), queries=[dict(q) for q in queries])

        return run_pipeline("query", body)
