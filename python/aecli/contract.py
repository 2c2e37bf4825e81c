"""
Contract helpers backed by the Sophia compiler service: compile a source
file, encode call data, and decode returned data or call data.
"""

from __future__ import annotations

from contextlib import closing
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence

from .config import NetworkConfig
from .encoding import is_valid
from .errors import InvalidInput
from .pipeline import Pipeline, invoke, run_pipeline
from .result import Result, Stage
from .sdk.compiler import CompilerApi

__all__ = ["ContractCommands", "read_source"]


def read_source(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidInput(f"Cannot read contract source {path}: {e.strerror or e}") from e


def _check_bytearray(value: str, label: str) -> None:
    if not is_valid(value, "cb"):
        raise InvalidInput(f"Invalid {label}: expected a cb_ encoded bytearray")


class ContractCommands:
    def __init__(
        self,
        config: NetworkConfig,
        *,
        compiler_factory: Optional[Callable[[NetworkConfig], CompilerApi]] = None,
    ) -> None:
        self.config = config
        self._compiler_factory = compiler_factory or CompilerApi.from_config

    def _compiler(self, p: Pipeline) -> CompilerApi:
        p.enter(Stage.ACQUIRING)
        return invoke(self._compiler_factory, self.config)

    def compile(self, path: str) -> Result[Dict[str, Any]]:
        def body(p: Pipeline) -> Dict[str, Any]:
            source = read_source(path)
            with closing(self._compiler(p)) as compiler:
                p.enter(Stage.INVOKING)
                bytecode = invoke(compiler.compile, source)
            p.enter(Stage.DISPATCHING)
            return {"bytecode": bytecode}

        return run_pipeline("contract compile", body)

    def encode_data(self, path: str, fn: str, args: Sequence[str]) -> Result[Dict[str, Any]]:
        def body(p: Pipeline) -> Dict[str, Any]:
            source = read_source(path)
            with closing(self._compiler(p)) as compiler:
                p.enter(Stage.INVOKING)
                calldata = invoke(compiler.encode_calldata, source, fn, list(args))
            p.enter(Stage.DISPATCHING)
            return {"calldata": calldata}

        return run_pipeline("contract encode-data", body)

    def decode_data(self, data: str, sophia_type: str) -> Result[Dict[str, Any]]:
        def body(p: Pipeline) -> Dict[str, Any]:
            _check_bytearray(data, "data")
            with closing(self._compiler(p)) as compiler:
                p.enter(Stage.INVOKING)
                decoded = invoke(compiler.decode_data, data, sophia_type)
            p.enter(Stage.DISPATCHING)
            return {"decoded": decoded}

        return run_pipeline("contract decode-data", body)

    def decode_call_data(
        self,
        data: str,
        *,
        source_path: Optional[str] = None,
        code: Optional[str] = None,
        fn: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """Decode call data against either a contract source (needs `fn`) or its bytecode."""

        def body(p: Pipeline) -> Dict[str, Any]:
            _check_bytearray(data, "call data")
            if not source_path and not code:
                raise InvalidInput("Contract source (--sourcePath) or contract code (--code) required")
            if source_path and not fn:
                raise InvalidInput("Function name (--fn) required when decoding by source")
            source = read_source(source_path) if source_path else None
            if code:
                _check_bytearray(code, "contract code")
            with closing(self._compiler(p)) as compiler:
                p.enter(Stage.INVOKING)
                if source is not None:
                    decoded = invoke(compiler.decode_calldata_source, data, source, fn)
                else:
                    decoded = invoke(compiler.decode_calldata_bytecode, data, code)
            p.enter(Stage.DISPATCHING)
            return dict(decoded)

        return run_pipeline("contract decode-call-data", body)
