"""Unit tests for core/config.py -- SECRET_KEY policy and defaults."""

import pytest
from pydantic import ValidationError

from core.config import Settings


def test_debug_mode_generates_key(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    settings = Settings(debug=True, secret_key="", _env_file=None)
    assert len(settings.secret_key) >= 32


def test_production_requires_key(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(debug=False, secret_key="", _env_file=None)


def test_short_key_rejected():
    with pytest.raises(ValidationError):
        Settings(debug=True, secret_key="too-short", _env_file=None)


def test_negative_raise_hint_rejected():
    with pytest.raises(ValidationError):
        Settings(debug=True, bid_raise_hint_pct=-1, _env_file=None)


def test_defaults():
    settings = Settings(debug=True, secret_key="k" * 32, _env_file=None)
    assert settings.token_expire_seconds == 3600
    assert settings.bid_raise_hint_pct == 5
    assert settings.login_rate_limit == "10/minute"
