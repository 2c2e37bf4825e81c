"""
Client for the Sophia compiler HTTP service.

Compilation itself happens in the remote service; this only ships source and
data back and forth.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..config import NetworkConfig
from ..errors import SdkError
from .http import JsonHttpApi


def _field(body: Any, key: str, endpoint: str) -> Any:
    if not isinstance(body, dict) or key not in body:
        raise SdkError(f"Malformed compiler response: missing {key!r}", endpoint=endpoint)
    return body[key]


class CompilerApi(JsonHttpApi):
    @classmethod
    def from_config(cls, config: NetworkConfig) -> "CompilerApi":
        return cls(config.compiler_url, timeout=config.timeout)

    def compile(self, source: str) -> str:
        """Return the `cb_` bytecode for a contract source."""
        body = self.post("/compile", {"code": source, "options": {}})
        return _field(body, "bytecode", "/compile")

    def encode_calldata(self, source: str, function: str, arguments: Sequence[str]) -> str:
        body = self.post(
            "/encode-calldata",
            {"source": source, "function": function, "arguments": list(arguments), "options": {}},
        )
        return _field(body, "calldata", "/encode-calldata")

    def decode_data(self, data: str, sophia_type: str) -> Any:
        body = self.post("/decode-data", {"data": data, "sophia-type": sophia_type})
        return _field(body, "data", "/decode-data")

    def decode_calldata_bytecode(self, calldata: str, bytecode: str) -> Dict[str, Any]:
        return self.post("/decode-calldata/bytecode", {"calldata": calldata, "bytecode": bytecode})

    def decode_calldata_source(
        self, calldata: str, source: str, function: Optional[str] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"calldata": calldata, "source": source}
        if function:
            payload["function"] = function
        return self.post("/decode-calldata/source", payload)


def decoded_arguments(result: Dict[str, Any]) -> List[Any]:
    args = result.get("arguments")
    return list(args) if isinstance(args, list) else []


__all__ = ["CompilerApi", "decoded_arguments"]
