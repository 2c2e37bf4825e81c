"""
Shared pytest fixtures: an in-memory chain standing in for the node and the
signing SDK, so oracle flows run end to end without a network.
"""

from __future__ import annotations

import hashlib
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

PYTHON_ROOT = Path(__file__).resolve().parent
if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from aecli.config import NetworkConfig  # noqa: E402
from aecli.encoding import encode  # noqa: E402
from aecli.errors import SdkError  # noqa: E402
from aecli.models import WalletRef  # noqa: E402
from aecli.oracle import OracleCommands  # noqa: E402


def _digest(*parts: Any) -> bytes:
    return hashlib.sha256("|".join(str(p) for p in parts).encode()).digest()


def _expiry(height: int, descriptor: Optional[Dict[str, Any]], default: int) -> int:
    if descriptor is None:
        return height + default
    if descriptor["type"] == "delta":
        return height + int(descriptor["value"])
    return int(descriptor["value"])


class FakeChain:
    """Oracles, queries and transactions kept in dicts; every transaction mines one block."""

    def __init__(self, height: int = 100) -> None:
        self.height = height
        self.oracles: Dict[str, Dict[str, Any]] = {}
        self.queries: Dict[str, List[Dict[str, Any]]] = {}
        self.transactions: Dict[str, Dict[str, Any]] = {}
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.names: Dict[str, Dict[str, Any]] = {}
        self.calls: Counter = Counter()
        self.sdk_calls: List[Dict[str, Any]] = []
        self.closed = 0

    # --- writes ----------------------------------------------------------

    def submit(self, tx: Dict[str, Any], wait_mined: bool) -> Any:
        self.height += 1
        tx_hash = encode("th", _digest("tx", len(self.transactions), tx))
        record = {
            "hash": tx_hash,
            "block_height": self.height,
            "block_hash": encode("mh", _digest("block", self.height)),
            "signatures": ["sg_fake"],
            "tx": tx,
        }
        self.transactions[tx_hash] = record
        return record if wait_mined else tx_hash

    # --- ChainReader -----------------------------------------------------

    def get_oracle_by_pubkey(self, oracle_id: str) -> Dict[str, Any]:
        self.calls["get_oracle_by_pubkey"] += 1
        return dict(self.oracles[oracle_id])

    def get_oracle_queries_by_pubkey(self, oracle_id: str) -> List[Dict[str, Any]]:
        self.calls["get_oracle_queries_by_pubkey"] += 1
        return [dict(q) for q in self.queries.get(oracle_id, [])]

    def get_current_key_block(self) -> Dict[str, Any]:
        self.calls["get_current_key_block"] += 1
        return {"hash": encode("kh", _digest("key", self.height)), "height": self.height}

    def get_current_height(self) -> int:
        self.calls["get_current_height"] += 1
        return self.height

    def get_account(self, account_id: str) -> Dict[str, Any]:
        return dict(self.accounts[account_id])

    def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        return dict(self.transactions[tx_hash])

    def get_key_block(self, block_hash: str) -> Dict[str, Any]:
        return {"hash": block_hash, "height": self.height}

    def get_key_block_by_height(self, height: int) -> Dict[str, Any]:
        return {"hash": encode("kh", _digest("key", height)), "height": height}

    def get_micro_block_header(self, block_hash: str) -> Dict[str, Any]:
        return {"hash": block_hash, "height": self.height}

    def get_name(self, name: str) -> Dict[str, Any]:
        if name not in self.names:
            raise SdkError("Name not found", status=404, endpoint=f"/names/{name}")
        return dict(self.names[name])

    def close(self) -> None:
        self.closed += 1


class FakeOracle:
    """OracleHandle over FakeChain."""

    def __init__(self, chain: FakeChain, account: str, oracle_id: str) -> None:
        self.chain = chain
        self.account = account
        self.oracle_id = oracle_id

    def _record(self) -> Dict[str, Any]:
        # unknown oracles fail with a non-aecli exception, like a real SDK would
        return self.chain.oracles[self.oracle_id]

    def extend_oracle(self, oracle_ttl: Dict[str, Any], *, wait_mined: bool = True, **tx: Any) -> Any:
        self.chain.sdk_calls.append({"op": "extend", "oracle_ttl": oracle_ttl, "wait_mined": wait_mined, **tx})
        record = self._record()
        record["ttl"] += int(oracle_ttl["value"])
        return self.chain.submit({"type": "OracleExtendTx", "oracle_id": self.oracle_id, "oracle_ttl": oracle_ttl}, wait_mined)

    def post_query(
        self,
        query: str,
        *,
        wait_mined: bool = True,
        query_ttl: Optional[Dict[str, Any]] = None,
        response_ttl: Optional[Dict[str, Any]] = None,
        query_fee: Optional[int] = None,
        **tx: Any,
    ) -> Any:
        self.chain.sdk_calls.append(
            {
                "op": "post_query",
                "query": query,
                "query_ttl": query_ttl,
                "response_ttl": response_ttl,
                "query_fee": query_fee,
                "wait_mined": wait_mined,
                **tx,
            }
        )
        oracle = self._record()
        queries = self.chain.queries.setdefault(self.oracle_id, [])
        query_id = encode("oq", _digest("query", self.account, len(queries)))
        queries.append(
            {
                "id": query_id,
                "oracle_id": self.oracle_id,
                "sender_id": self.account,
                "sender_nonce": len(queries) + 1,
                "query": encode("ov", query.encode()),
                "response": encode("or", b""),
                "ttl": _expiry(self.chain.height, query_ttl, 10),
                "response_ttl": response_ttl or {"type": "delta", "value": 10},
                "fee": query_fee if query_fee is not None else oracle["query_fee"],
            }
        )
        return self.chain.submit({"type": "OracleQueryTx", "oracle_id": self.oracle_id, "query": query}, wait_mined)

    def respond_to_query(
        self,
        query_id: str,
        response: str,
        *,
        wait_mined: bool = True,
        response_ttl: Optional[Dict[str, Any]] = None,
        **tx: Any,
    ) -> Any:
        self.chain.sdk_calls.append(
            {"op": "respond", "query_id": query_id, "response": response, "response_ttl": response_ttl, "wait_mined": wait_mined, **tx}
        )
        for q in self.chain.queries.get(self.oracle_id, []):
            if q["id"] == query_id:
                q["response"] = encode("or", response.encode())
                break
        else:
            raise LookupError(f"query {query_id} not found")
        return self.chain.submit({"type": "OracleResponseTx", "query_id": query_id}, wait_mined)


class FakeClient:
    """OracleClient for one wallet account."""

    def __init__(self, chain: FakeChain, account: str) -> None:
        self.chain = chain
        self.account = account

    @property
    def oracle_id(self) -> str:
        return "ok_" + self.account[3:]

    def register_oracle(
        self,
        query_format: str,
        response_format: str,
        *,
        wait_mined: bool = True,
        oracle_ttl: Optional[Dict[str, Any]] = None,
        query_fee: Optional[int] = None,
        **tx: Any,
    ) -> Any:
        self.chain.sdk_calls.append(
            {
                "op": "register",
                "query_format": query_format,
                "response_format": response_format,
                "oracle_ttl": oracle_ttl,
                "query_fee": query_fee,
                "wait_mined": wait_mined,
                **tx,
            }
        )
        self.chain.oracles[self.oracle_id] = {
            "id": self.oracle_id,
            "query_format": query_format,
            "response_format": response_format,
            "query_fee": query_fee or 0,
            "ttl": _expiry(self.chain.height, oracle_ttl, 500),
            "abi_version": 0,
        }
        return self.chain.submit({"type": "OracleRegisterTx", "account_id": self.account}, wait_mined)

    def get_oracle_object(self, oracle_id: str) -> FakeOracle:
        return FakeOracle(self.chain, self.account, oracle_id)


class FakeWalletLoader:
    """WalletLoader that counts loads; the password "wrong" fails like a bad keystore."""

    def __init__(self, chain: FakeChain) -> None:
        self.chain = chain
        self.loads = 0

    def __call__(self, wallet_path: str, password: str, config: NetworkConfig) -> FakeClient:
        self.loads += 1
        if password == "wrong":
            raise ValueError("Invalid password")
        account = encode("ak", _digest("account", wallet_path))
        self.chain.accounts.setdefault(account, {"id": account, "balance": 10**18, "nonce": 0})
        return FakeClient(self.chain, account)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "AECLI_URL",
        "AECLI_INTERNAL_URL",
        "AECLI_COMPILER_URL",
        "AECLI_NETWORK_ID",
        "AECLI_TIMEOUT",
        "AECLI_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> NetworkConfig:
    return NetworkConfig(
        url="http://node.test",
        internal_url="http://node.test",
        compiler_url="http://compiler.test",
        network_id="ae_devnet",
        timeout=5.0,
    )


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def wallet_loader(chain: FakeChain) -> FakeWalletLoader:
    return FakeWalletLoader(chain)


@pytest.fixture
def wallet() -> WalletRef:
    return WalletRef(path="wallet.json", password="secret")


@pytest.fixture
def commands(config: NetworkConfig, chain: FakeChain, wallet_loader: FakeWalletLoader) -> OracleCommands:
    return OracleCommands(config, wallet_loader=wallet_loader, chain_factory=lambda cfg: chain)


@pytest.fixture
def fake_sdk(monkeypatch: pytest.MonkeyPatch, chain: FakeChain, wallet_loader: FakeWalletLoader) -> FakeChain:
    """Route the CLI's default SDK and chain factories to the in-memory chain."""
    monkeypatch.setattr("aecli.oracle.default_wallet_loader", wallet_loader)
    monkeypatch.setattr("aecli.oracle.default_chain_factory", lambda cfg: chain)
    monkeypatch.setattr("aecli.inspection.default_chain_factory", lambda cfg: chain)
    return chain
