import json
import sys

import pytest

from kql_spl_translator.translator import cli


def run_cli(monkeypatch, capsys, *args):
    monkeypatch.setattr(sys, "argv", ["kql-spl-translator", *args])
    cli.main()
    return capsys.readouterr().out


def test_translate(monkeypatch, capsys):
    out = run_cli(monkeypatch, capsys, "translate", "--from", "spl", "--to", "kql", "index=main | head 5")
    assert "| take 5" in out
    assert "Confidence: 100%" in out


def test_translate_json(monkeypatch, capsys):
    out = run_cli(monkeypatch, capsys, "kql2spl", "SecurityEvent | take 5", "--json")
    data = json.loads(out)
    assert data["target_language"] == "spl"
    assert data["translated_query"].endswith("| head 5")


def test_unsupported_pair_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, capsys, "translate", "-f", "spl", "-t", "sql", "x")
    assert exc.value.code == 1


def test_explain(monkeypatch, capsys):
    out = run_cli(monkeypatch, capsys, "explain", "--language", "spl", "index=main error")
    assert out.startswith("This SPL query:")


def test_discover(monkeypatch, capsys):
    out = run_cli(monkeypatch, capsys, "discover", "SecurityEvent", "--json")
    assert "find_SecurityEvent" in json.loads(out)


def test_mappings(monkeypatch, capsys):
    out = run_cli(monkeypatch, capsys, "mappings")
    assert "SecurityEvent" in out


def test_unknown_command(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, capsys, "frobnicate")
