import json

import pytest

from public_suffix_resolver import main as cli
from public_suffix_resolver import storage


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    # Keep structlog on the capturing configuration from conftest
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)


def _lines(text):
    return [json.loads(line) for line in text.splitlines() if line]


def test_resolves_each_domain(psl_path, capsys):
    assert cli.main(["-p", str(psl_path), "www.bbc.co.uk", "foo.blogspot.co.uk"]) == 0
    first, second = _lines(capsys.readouterr().out)
    assert first["registrable_domain"] == "bbc.co.uk"
    assert first["suffix"]["section"] == "ICANN_DOMAINS"
    assert second["suffix"]["value"] == "blogspot.co.uk"
    assert second["suffix"]["section"] == "PRIVATE_DOMAINS"


def test_section_option(psl_path, capsys):
    assert cli.main(["-p", str(psl_path), "-s", "icann", "foo.blogspot.co.uk"]) == 0
    (result,) = _lines(capsys.readouterr().out)
    assert result["suffix"]["value"] == "co.uk"
    assert result["sub_domain"] == "foo"


def test_unresolvable_domain_sets_exit_status(psl_path, capsys):
    assert cli.main(["-p", str(psl_path), "com", "example.com"]) == 1
    captured = capsys.readouterr()
    assert len(_lines(captured.out)) == 1
    assert "com:" in captured.err


def test_unreadable_list(tmp_path, capsys):
    assert cli.main(["-p", str(tmp_path / "missing.dat"), "example.com"]) == 2
    assert "Cannot load public suffix list" in capsys.readouterr().err


def test_falls_back_to_configured_list(psl_path, monkeypatch, capsys):
    storage.default_rules.cache_clear()
    monkeypatch.setattr(storage.settings, "psl_path", str(psl_path))
    try:
        assert cli.main(["my.app.github.io"]) == 0
    finally:
        storage.default_rules.cache_clear()
    (result,) = _lines(capsys.readouterr().out)
    assert result["registrable_domain"] == "app.github.io"
    assert result["sub_domain"] == "my"


def test_invalid_default_section_is_a_config_error(psl_path, monkeypatch, capsys):
    monkeypatch.setattr(cli.settings, "default_section", "effective")
    assert cli.main(["-p", str(psl_path), "www.bbc.co.uk", "example.com"]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.count("PSL_RESOLVER_DEFAULT_SECTION") == 1


def test_configured_default_section(psl_path, monkeypatch, capsys):
    monkeypatch.setattr(cli.settings, "default_section", "ICANN_DOMAINS")
    assert cli.main(["-p", str(psl_path), "foo.blogspot.co.uk"]) == 0
    (result,) = _lines(capsys.readouterr().out)
    assert result["suffix"]["value"] == "co.uk"
