"""
Read-only chain commands: current top, TTL arithmetic and `inspect`.

`inspect` picks what to look up from the shape of its argument:

    ak_...      account
    th_...      transaction
    kh_...      key block
    mh_...      micro block header
    ok_...      oracle
    <digits>    key block at that height
    *.chain     AENS name (AVAILABLE when the node does not know it)
"""

from __future__ import annotations

from contextlib import closing
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import NetworkConfig
from .encoding import EncodingError, assert_tagged, split
from .errors import InvalidInput, InvalidTtl, SdkError
from .oracle import default_chain_factory
from .pipeline import Pipeline, invoke, run_pipeline
from .result import Result, Stage
from .sdk.protocols import ChainFactory, ChainReader
from .ttl import AbsoluteTtl, RelativeTtl, normalize_oracle_ttl

__all__ = ["Inspection", "ChainCommands", "NAME_SUFFIX"]

NAME_SUFFIX = ".chain"

_LOOKUPS = {
    "ak": ("account", "accountId", "get_account"),
    "th": ("transaction", "transactionHash", "get_transaction"),
    "kh": ("key-block", "blockHash", "get_key_block"),
    "mh": ("micro-block", "blockHash", "get_micro_block_header"),
    "ok": ("oracle", "oracleId", "get_oracle_by_pubkey"),
}


@dataclass(frozen=True)
class Inspection:
    kind: str
    data: Dict[str, Any]


def _tag_of(target: str) -> Optional[str]:
    try:
        prefix, _ = split(target)
    except EncodingError:
        return None
    return prefix if prefix in _LOOKUPS else None


class ChainCommands:
    def __init__(self, config: NetworkConfig, *, chain_factory: Optional[ChainFactory] = None) -> None:
        self.config = config
        self._chain_factory = chain_factory or default_chain_factory

    def _chain(self, p: Pipeline) -> ChainReader:
        p.enter(Stage.ACQUIRING)
        return invoke(self._chain_factory, self.config)

    def top(self) -> Result[Dict[str, Any]]:
        """Current top key block."""

        def body(p: Pipeline) -> Dict[str, Any]:
            with closing(self._chain(p)) as chain:
                p.enter(Stage.INVOKING)
                block = invoke(chain.get_current_key_block)
            p.enter(Stage.DISPATCHING)
            return dict(block)

        return run_pipeline("chain top", body)

    def absolute_ttl(self, relative: Any) -> Result[AbsoluteTtl]:
        """Absolute height `relative` blocks past the current top."""

        def body(p: Pipeline) -> AbsoluteTtl:
            ttl = normalize_oracle_ttl(relative)
            if not isinstance(ttl, RelativeTtl) or ttl.value < 0:
                raise InvalidTtl("Ttl should be a non-negative number", field="ttl", value=relative)
            with closing(self._chain(p)) as chain:
                p.enter(Stage.INVOKING)
                height = invoke(chain.get_current_height)
            p.enter(Stage.DISPATCHING)
            return ttl.to_absolute(int(height))

        return run_pipeline("chain ttl", body)

    def inspect(self, target: str) -> Result[Inspection]:
        def body(p: Pipeline) -> Inspection:
            target_ = target.strip()
            tag = _tag_of(target_)
            if tag is not None:
                kind, label, method = _LOOKUPS[tag]
                assert_tagged(target_, tag, label)
                with closing(self._chain(p)) as chain:
                    p.enter(Stage.INVOKING)
                    data = invoke(getattr(chain, method), target_)
                p.enter(Stage.DISPATCHING)
                return Inspection(kind, dict(data))

            if target_.isdigit():
                with closing(self._chain(p)) as chain:
                    p.enter(Stage.INVOKING)
                    data = invoke(chain.get_key_block_by_height, int(target_))
                p.enter(Stage.DISPATCHING)
                return Inspection("key-block", dict(data))

            if not target_.endswith(NAME_SUFFIX) or len(target_) <= len(NAME_SUFFIX):
                raise InvalidInput(f"Name should end with {NAME_SUFFIX}")
            with closing(self._chain(p)) as chain:
                p.enter(Stage.INVOKING)
                try:
                    data = dict(invoke(chain.get_name, target_))
                except SdkError as e:
                    if e.status != 404:
                        raise
                    data = {"name": target_, "status": "AVAILABLE"}
                else:
                    data.setdefault("name", target_)
                    data.setdefault("status", "CLAIMED")
            p.enter(Stage.DISPATCHING)
            return Inspection("name", data)

        return run_pipeline("inspect", body)
