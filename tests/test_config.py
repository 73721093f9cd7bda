# tests/test_config.py
import pytest
from pydantic import ValidationError

from stockwatch.config import Settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)  # no stray .env
    for name in ("STOCK_SYMBOL", "DEMO_PRICES", "DISPATCH_TIMEOUT_SECONDS", "THREAD_SAFE"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.stock_symbol == "ACME"
    assert s.demo_prices == [5.0, 1.0]
    assert s.dispatch_timeout_seconds is None
    assert s.thread_safe is False


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STOCK_SYMBOL", "XYZ")
    monkeypatch.setenv("DEMO_PRICES", " 1.5, 2 ,,3 ")
    monkeypatch.setenv("DISPATCH_TIMEOUT_SECONDS", "0.25")
    monkeypatch.setenv("THREAD_SAFE", "true")
    s = Settings()
    assert s.stock_symbol == "XYZ"
    assert s.demo_prices == [1.5, 2.0, 3.0]
    assert s.dispatch_timeout_seconds == 0.25
    assert s.thread_safe is True


def test_negative_dispatch_timeout_is_rejected(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DISPATCH_TIMEOUT_SECONDS", "-1")
    with pytest.raises(ValidationError):
        Settings()


def test_zero_dispatch_timeout_is_allowed(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DISPATCH_TIMEOUT_SECONDS", "0")
    assert Settings().dispatch_timeout_seconds == 0.0
