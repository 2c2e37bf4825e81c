from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from aecli.cli.main import app
from aecli.encoding import decode_text, encode

runner = CliRunner()

UNKNOWN_ORACLE = encode("ok", bytes(range(32)))


def run_cli(args: list[str], **kwargs) -> str:
    result = runner.invoke(app, args, **kwargs)
    assert result.exit_code == 0, result.output
    return result.stdout


def run_failing(args: list[str]) -> str:
    result = runner.invoke(app, args)
    assert result.exit_code == 1, result.output
    return result.output


def create_oracle(*extra: str) -> str:
    out = run_cli(["oracle", "create", "wallet.json", "string", "string", "-P", "secret", "--json", *extra])
    record = json.loads(out)
    return "ok_" + record["tx"]["account_id"][3:]


@pytest.fixture(autouse=True)
def _sdk(fake_sdk):
    return fake_sdk


def test_create_prints_mined_record(chain) -> None:
    out = run_cli(
        ["oracle", "create", "wallet.json", "{city: string}", "{tmp: int}", "--password", "secret", "--oracleTtl", "50"]
    )
    assert "Transaction hash: th_" in out
    assert "Block height: 101" in out
    assert "Tx Type: OracleRegisterTx" in out
    assert chain.sdk_calls[-1]["oracle_ttl"] == {"type": "delta", "value": 50}


def test_create_json(chain) -> None:
    oracle_id = create_oracle("--queryFee", "7")
    assert chain.oracles[oracle_id]["query_fee"] == 7


def test_create_without_waiting() -> None:
    out = run_cli(["oracle", "create", "wallet.json", "string", "string", "-P", "secret", "--no-waitMined"])
    assert out.startswith("Transaction send to the chain. Tx hash: th_")


def test_kebab_case_aliases(chain) -> None:
    out = run_cli(
        [
            "oracle",
            "create",
            "wallet.json",
            "string",
            "string",
            "-P",
            "secret",
            "--oracle-ttl",
            "block:900",
            "--query-fee",
            "2",
            "--no-wait-mined",
            "--json",
        ]
    )
    assert json.loads(out)["hash"].startswith("th_")
    call = chain.sdk_calls[-1]
    assert call["oracle_ttl"] == {"type": "block", "value": 900}
    assert call["query_fee"] == 2
    assert call["wait_mined"] is False


def test_password_is_prompted(wallet_loader) -> None:
    result = runner.invoke(app, ["oracle", "create", "wallet.json", "string", "string"], input="secret\n")
    assert result.exit_code == 0, result.output
    assert wallet_loader.loads == 1


def test_invalid_id_fails_before_password_prompt(wallet_loader) -> None:
    result = runner.invoke(app, ["oracle", "extend", "wallet.json", "ok_bad", "10"])
    assert result.exit_code == 1, result.output
    assert "Error: Invalid oracleId" in result.output
    assert "Enter your password" not in result.output
    assert wallet_loader.loads == 0


def test_wrong_password() -> None:
    out = run_failing(["oracle", "create", "wallet.json", "string", "string", "-P", "wrong"])
    assert "Error: Invalid password" in out


def test_extend(chain) -> None:
    oracle_id = create_oracle("--oracleTtl", "500")
    before = chain.oracles[oracle_id]["ttl"]
    run_cli(["oracle", "extend", "wallet.json", oracle_id, "100", "-P", "secret"])
    assert chain.oracles[oracle_id]["ttl"] == before + 100


@pytest.mark.parametrize(
    "args, message",
    [
        (["ok_bad", "abc"], "Error: Oracle Ttl should be a number"),
        (["ok_bad", "10"], "Error: Invalid oracleId"),
        ([UNKNOWN_ORACLE, "delta:10"], "Error: Oracle Ttl should be a number"),
    ],
)
def test_extend_errors(wallet_loader, args, message) -> None:
    out = run_failing(["oracle", "extend", "wallet.json", *args, "-P", "secret"])
    assert message in out
    assert wallet_loader.loads == 0


def test_create_query_bad_ttl(chain) -> None:
    oracle_id = create_oracle()
    out = run_failing(
        ["oracle", "create-query", "wallet.json", oracle_id, "q", "-P", "secret", "--queryTtl", "soon"]
    )
    assert "Error: Query Ttl should be a number" in out


def test_respond_bad_query_id() -> None:
    out = run_failing(["oracle", "respond", "wallet.json", UNKNOWN_ORACLE, "oq_1", "r", "-P", "secret"])
    assert "Error: Invalid queryId" in out


def test_full_lifecycle(chain) -> None:
    oracle_id = create_oracle("--oracleTtl", "500", "--queryFee", "1")
    run_cli(
        [
            "oracle",
            "create-query",
            "wallet.json",
            oracle_id,
            "{city: 'Berlin'}",
            "-P",
            "secret",
            "--queryTtl",
            "20",
            "--responseTtl",
            "10",
        ]
    )
    query_id = chain.queries[oracle_id][0]["id"]
    run_cli(["oracle", "respond", "wallet.json", oracle_id, query_id, "{tmp: 10}", "-P", "secret"])

    merged = json.loads(run_cli(["oracle", "query", oracle_id, "--json"]))
    assert merged["id"] == oracle_id
    assert merged["ttl"] == 600
    [query] = merged["queries"]
    assert decode_text(query["response"]) == "{tmp: 10}"

    text = run_cli(["oracle", "query", oracle_id])
    assert f"Oracle ID: {oracle_id}" in text
    assert "Queries: 1" in text
    assert "Query: {city: 'Berlin'}" in text
    assert "Response: {tmp: 10}" in text
    assert "Response TTL: 10 (delta)" in text


def test_query_root_json_flag() -> None:
    oracle_id = create_oracle()
    merged = json.loads(run_cli(["--json", "oracle", "query", oracle_id]))
    assert merged["queries"] == []


def test_query_invalid_id() -> None:
    assert "Error: Invalid oracleId" in run_failing(["oracle", "query", "ok_nope"])


def test_query_unknown_oracle() -> None:
    assert "Error:" in run_failing(["oracle", "query", UNKNOWN_ORACLE])


def test_ttl_option_is_a_block_count() -> None:
    from aecli.cli.oracle import TTL

    assert TTL.help.startswith("Number of blocks")
