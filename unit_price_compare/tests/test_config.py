import pytest

from unit_price_compare.config import Config


def test_defaults_when_env_empty():
    cfg = Config.load_from_env({})
    assert cfg == Config()
    assert cfg.currency == "R$"


def test_reads_env(monkeypatch):
    monkeypatch.setenv("UNIT_PRICE_CURRENCY", "€")
    monkeypatch.setenv("UNIT_PRICE_DECIMAL_SEP", ".")
    monkeypatch.setenv("UNIT_PRICE_THOUSANDS_SEP", " ")
    monkeypatch.setenv("UNIT_PRICE_REPORT_PATH", "out/r.json")
    cfg = Config.load_from_env()
    assert cfg.currency == "€"
    assert cfg.decimal_sep == "."
    assert cfg.thousands_sep == " "
    assert cfg.report_path == "out/r.json"


def test_empty_currency_rejected():
    with pytest.raises(RuntimeError, match="UNIT_PRICE_CURRENCY"):
        Config.load_from_env({"UNIT_PRICE_CURRENCY": "  "})


def test_same_separators_rejected():
    with pytest.raises(RuntimeError, match="must differ"):
        Config.load_from_env({"UNIT_PRICE_DECIMAL_SEP": ",", "UNIT_PRICE_THOUSANDS_SEP": ","})
