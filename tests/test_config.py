"""Tests for environment-driven configuration."""

from __future__ import annotations

from datetime import datetime

import pytest

from goaltracker import create_app
from goaltracker.config import CONFIG_MAP, BaseConfig, DevConfig, TestConfig, _env_bool


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("true", True), (" YES ", True), ("on", True), ("0", False), ("no", False), ("", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("GOALTRACKER_FLAG", raw)
    assert _env_bool("GOALTRACKER_FLAG") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("GOALTRACKER_FLAG", raising=False)
    assert _env_bool("GOALTRACKER_FLAG", default=True) is True


def test_defaults(isolated_env):
    config = BaseConfig()

    assert config.DATA_DIR == isolated_env.resolve()
    assert config.DATABASE_URL == f"sqlite:///{isolated_env.resolve() / 'goaltracker.db'}"
    assert config.STORAGE == "sql"
    assert config.ACCESS_TOKEN_DAYS == 7
    assert config.REFRESH_TOKEN_DAYS == 30
    assert config.PING_MESSAGE == "ping"
    assert config.reference_timezone() is None
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_secret_required_outside_dev_mode(monkeypatch):
    monkeypatch.setenv("GOALTRACKER_DEV_MODE", "false")
    with pytest.raises(ValueError, match="GOALTRACKER_SECRET_KEY"):
        BaseConfig()

    monkeypatch.setenv("GOALTRACKER_SECRET_KEY", "a-real-secret")
    assert BaseConfig().SECRET_KEY == "a-real-secret"


def test_invalid_storage_rejected(monkeypatch):
    monkeypatch.setenv("GOALTRACKER_STORAGE", "redis")
    with pytest.raises(ValueError, match="GOALTRACKER_STORAGE"):
        BaseConfig()


def test_invalid_token_lifetime_rejected(monkeypatch):
    monkeypatch.setenv("GOALTRACKER_ACCESS_TOKEN_DAYS", "a week")
    with pytest.raises(ValueError, match="GOALTRACKER_ACCESS_TOKEN_DAYS"):
        BaseConfig()


def test_reference_timezone(monkeypatch):
    monkeypatch.setenv("GOALTRACKER_TIMEZONE", "America/New_York")
    tz = BaseConfig().reference_timezone()

    assert tz is not None
    assert datetime(2024, 8, 24, 12, tzinfo=tz).utcoffset().total_seconds() == -4 * 3600


def test_unknown_timezone_rejected(monkeypatch):
    monkeypatch.setenv("GOALTRACKER_TIMEZONE", "Mars/Olympus_Mons")
    with pytest.raises(ValueError, match="GOALTRACKER_TIMEZONE"):
        BaseConfig().reference_timezone()


def test_test_config_replaces_placeholder_secret():
    assert TestConfig().SECRET_KEY != "replace-me"


def test_config_map_and_factory():
    assert CONFIG_MAP["development"] is DevConfig
    assert CONFIG_MAP["testing"] is TestConfig

    app = create_app("testing")
    assert app.config["TESTING"] is True
    assert isinstance(app.config["GOALTRACKER_CONFIG"], TestConfig)
    assert {"system", "auth", "goals", "analytics"} <= set(app.blueprints)
