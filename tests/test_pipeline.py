from __future__ import annotations

import json

import pytest

from conftest import OWN_IBAN, SAMPLE_JSON
from fio_import.pipeline import build_payload, main
from fio_import.statement import load_statement


def test_main_writes_payload(tmp_path):
    out = tmp_path / "out" / "result.json"

    assert main([str(SAMPLE_JSON), "--tenant", "acme", "--out", str(out)]) == 0

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert set(payload) == {"transactions", "accounts"}
    assert len(payload["transactions"]) == 3
    assert payload["transactions"][0]["transfers"][0]["credit"] == {"tenant": "acme", "name": OWN_IBAN}
    assert {a["name"] for a in payload["accounts"]} >= {OWN_IBAN}
    assert all(a["isBalanceCheck"] is False for a in payload["accounts"])


def test_main_prints_to_stdout_with_tenant_from_env(monkeypatch, capsys):
    monkeypatch.setenv("FIO_BCO_TENANT", "from-env")

    assert main([str(SAMPLE_JSON), "--only", "transactions"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert list(payload) == ["transactions"]
    assert payload["transactions"][0]["transfers"][0]["tenant"] == "from-env"


def test_accounts_only_does_not_need_tenant(capsys):
    assert main([str(SAMPLE_JSON), "--only", "accounts"]) == 0
    assert list(json.loads(capsys.readouterr().out)) == ["accounts"]


def test_missing_tenant_exits():
    with pytest.raises(SystemExit):
        main([str(SAMPLE_JSON)])


def test_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path / "nope.json"), "--tenant", "acme"])
    assert "No existe" in str(exc_info.value.code)


def test_invalid_statement_exits(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"accountStatement": {}}', encoding="utf-8")

    with pytest.raises(SystemExit):
        main([str(bad), "--tenant", "acme"])


def test_build_payload_only_accounts():
    payload = build_payload(load_statement(SAMPLE_JSON), "acme", only="accounts")
    assert list(payload) == ["accounts"]
