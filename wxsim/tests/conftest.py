"""Shared test fixtures."""

import random
import sqlite3
from pathlib import Path

import pytest
import yaml

from wxsim.config.defaults import DEFAULT_CONDITIONS
from wxsim.config.schema import SimulatorConfig
from wxsim.storage.database import connect, run_migrations


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """A migrated temporary SQLite database."""
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def default_config() -> SimulatorConfig:
    """Return default SimulatorConfig with the default catalog."""
    return SimulatorConfig(conditions=DEFAULT_CONDITIONS)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "simulation": {"min_temp": -5, "max_temp": 30, "outlook_days": 5},
        "playback": {"tick_interval_seconds": 1.0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
