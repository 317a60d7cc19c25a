"""Tests for the command-line entry point (cli.py)."""

import sys

import pytest
from ekushey import cli


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["ekushey", *args])
    cli.main()


@pytest.fixture(autouse=True)
def _no_config(tmp_path, monkeypatch):
    # Keep the project's ekushey.toml out of auto-detection
    monkeypatch.chdir(tmp_path)


def test_type_avro(monkeypatch, capsys):
    _run(monkeypatch, "--layout", "avro", "--type", "Ami banglay gan gai")
    assert capsys.readouterr().out.strip() == "Avro: আমি বাংলায় গান গাই"


def test_type_fixed_layout(monkeypatch, capsys):
    _run(monkeypatch, "--layout", "jatiyo", "--type", "j")
    assert capsys.readouterr().out.strip() == "Jatiyo: ক"


def test_list_layouts(monkeypatch, capsys):
    _run(monkeypatch, "--list-layouts")
    out = capsys.readouterr().out
    assert "Arabic Phonetic" in out
    assert "phonetic" in out


def test_table(monkeypatch, capsys):
    _run(monkeypatch, "--table", "avro")
    out = capsys.readouterr().out
    assert "kkh" in out
    assert "ক্ষ" in out


def test_summary_without_action(monkeypatch, capsys):
    _run(monkeypatch)
    assert "Keyboard" in capsys.readouterr().out


def test_config_flag(monkeypatch, capsys, write_config):
    path = write_config('[keyboard]\ndefault_layout = "Arabic Phonetic"\n')
    _run(monkeypatch, "--config", str(path), "--type", "ktb")
    assert capsys.readouterr().out.strip() == "Arabic Phonetic: كتب"


def test_unknown_layout_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        _run(monkeypatch, "--layout", "klingon")
    assert "klingon" in capsys.readouterr().err


def test_missing_config_exits(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit):
        _run(monkeypatch, "--config", str(tmp_path / "missing.toml"))
    assert "Config not found" in capsys.readouterr().err
