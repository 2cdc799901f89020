"""Environment-driven configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from habitflow.config import BaseConfig


def test_defaults(tmp_path):
    config = BaseConfig()

    assert config.DEV_MODE is True
    assert config.TIMEZONE_NAME == "UTC"
    assert config.FIRST_WEEKDAY == 0
    assert config.STORAGE == "memory"
    assert not config.uses_database
    assert Path(config.DATA_DIR) == (tmp_path / "data").resolve()
    assert Path(config.DATA_DIR).is_dir()
    assert config.DATABASE_URL.endswith("habitflow.db")
    assert config.DEMO_SEED == 0


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("HABITFLOW_TIMEZONE", "Europe/Moscow")
    monkeypatch.setenv("HABITFLOW_FIRST_WEEKDAY", "6")
    monkeypatch.setenv("HABITFLOW_STORAGE", "SQLite")
    monkeypatch.setenv("HABITFLOW_DATABASE_URL", f"sqlite:///{tmp_path / 'x.db'}")
    monkeypatch.setenv("HABITFLOW_DEMO_SEED", "42")
    monkeypatch.setenv("HABITFLOW_DEV_MODE", "off")

    config = BaseConfig()

    assert str(config.TIMEZONE) == "Europe/Moscow"
    assert config.FIRST_WEEKDAY == 6
    assert config.uses_database
    assert config.DATABASE_URL.endswith("x.db")
    assert config.DEMO_SEED == 42
    assert config.DEV_MODE is False
    assert config.sqlalchemy_engine_options()["connect_args"] == {"check_same_thread": False}


@pytest.mark.parametrize(
    "name, value",
    [
        ("HABITFLOW_TIMEZONE", "Mars/Olympus_Mons"),
        ("HABITFLOW_FIRST_WEEKDAY", "7"),
        ("HABITFLOW_FIRST_WEEKDAY", "monday"),
        ("HABITFLOW_STORAGE", "redis"),
        ("HABITFLOW_DEMO_SEED", "abc"),
    ],
)
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        BaseConfig()
