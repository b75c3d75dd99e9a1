"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest
import yaml

from weatherdash.config.schema import AppConfig, CoordinatorConfig
from weatherdash.storage.database import connect, run_migrations

FIXTURE_DIR = Path(__file__).parent / "fixtures"


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def current_lagos() -> dict:
    with open(FIXTURE_DIR / "openweather_current_lagos.json") as f:
        return json.load(f)


@pytest.fixture
def forecast_lagos() -> dict:
    with open(FIXTURE_DIR / "openweather_forecast_lagos.json") as f:
        return json.load(f)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def coordinator_config() -> CoordinatorConfig:
    """Short debounce so timer-driven tests stay fast."""
    return CoordinatorConfig(debounce_ms=30, min_interval_ms=700, reference_hour=12)


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """Migrated temporary SQLite database."""
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": {
            "base_url": "https://test-owm.example.com/data/2.5",
            "api_key": "test-key-1234",
        },
        "coordinator": {"debounce_ms": 200, "min_interval_ms": 700},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
