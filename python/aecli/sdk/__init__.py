"""
aecli.sdk
=========

Everything that talks to the outside world:

- protocols  narrow capability interfaces the orchestrators depend on
- node       read-only node REST client (httpx)
- compiler   Sophia compiler HTTP client (httpx)
- aepp       signing backend over the optional `aepp-sdk` package
"""

from __future__ import annotations

from .compiler import CompilerApi
from .node import NodeApi
from .protocols import ChainFactory, ChainReader, OracleClient, OracleHandle, WalletLoader

__all__ = [
    "ChainFactory",
    "ChainReader",
    "CompilerApi",
    "NodeApi",
    "OracleClient",
    "OracleHandle",
    "WalletLoader",
]
