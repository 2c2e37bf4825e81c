from __future__ import annotations

import json
from pathlib import Path

import respx
from typer.testing import CliRunner

from aecli.cli.main import app
from aecli.encoding import encode

runner = CliRunner()

COMPILER = "http://compiler.test"
CALLDATA = encode("cb", b"\x2b\x11\x00")


def run_contract(args: list[str]):
    return runner.invoke(app, ["--compilerUrl", COMPILER, "contract", *args])


@respx.mock
def test_compile(tmp_path: Path) -> None:
    source = tmp_path / "identity.aes"
    source.write_text("contract Identity =\n  entrypoint main(x : int) = x\n")
    respx.post(f"{COMPILER}/compile").respond(json={"bytecode": "cb_+GkfAQ"})

    result = run_contract(["compile", str(source)])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "Contract bytecode: cb_+GkfAQ"

    result = run_contract(["compile", str(source), "--json"])
    assert json.loads(result.stdout) == {"bytecode": "cb_+GkfAQ"}


def test_compile_missing_file(tmp_path: Path) -> None:
    result = run_contract(["compile", str(tmp_path / "nope.aes")])
    assert result.exit_code == 1
    assert "Error: Cannot read contract source" in result.output


@respx.mock
def test_encode_data(tmp_path: Path) -> None:
    source = tmp_path / "identity.aes"
    source.write_text("contract Identity =\n  entrypoint main(x : int) = x\n")
    route = respx.post(f"{COMPILER}/encode-calldata").respond(json={"calldata": CALLDATA})

    result = run_contract(["encode-data", str(source), "main", "42"])
    assert result.exit_code == 0, result.output
    assert f"Contract encoded call data: {CALLDATA}" in result.stdout
    assert json.loads(route.calls.last.request.content)["arguments"] == ["42"]


@respx.mock
def test_decode_data() -> None:
    respx.post(f"{COMPILER}/decode-data").respond(json={"data": {"type": "word", "value": 42}})
    result = run_contract(["decode-data", CALLDATA, "int", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"decoded": {"type": "word", "value": 42}}


@respx.mock
def test_decode_call_data_by_bytecode() -> None:
    respx.post(f"{COMPILER}/decode-calldata/bytecode").respond(
        json={"function": "main", "arguments": [{"type": "int", "value": 42}]}
    )
    code = encode("cb", b"\xfe" * 8)
    result = run_contract(["decode-call-data", CALLDATA, "--code", code])
    assert result.exit_code == 0, result.output
    assert "Function: main" in result.stdout
    assert "Arguments: 42 (int)" in result.stdout


def test_decode_call_data_requires_source_or_code() -> None:
    result = run_contract(["decode-call-data", CALLDATA])
    assert result.exit_code == 1
    assert "Error: Contract source (--sourcePath) or contract code (--code) required" in result.output


@respx.mock
def test_compiler_error_is_reported(tmp_path: Path) -> None:
    source = tmp_path / "broken.aes"
    source.write_text("contract")
    respx.post(f"{COMPILER}/compile").respond(400, json={"reason": "Parse error at line 1"})
    result = run_contract(["compile", str(source)])
    assert result.exit_code == 1
    assert "Error: Parse error at line 1" in result.output
