"""Tests for config loading, snapshot persistence, and get/set."""

import sqlite3
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from wxsim.config.defaults import DEFAULT_CONDITIONS
from wxsim.config.loader import (
    config_hash,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
    snapshot_config,
)
from wxsim.config.schema import SimulatorConfig


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.simulation.max_temp == 30
        assert config.playback.tick_interval_seconds == 1.0

    def test_default_conditions_injected(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert len(config.conditions) == len(DEFAULT_CONDITIONS)
        assert config.conditions[0].name == "Sunny"

    def test_explicit_conditions_not_overridden(self, fixtures_dir: Path):
        config = load_config(fixtures_dir / "config_default.yaml")
        assert [c.name for c in config.conditions] == [
            "Clear", "Partly Cloudy", "Cloudy", "Rain", "Thunderstorms",
        ]
        assert config.conditions[-1].severe is True
        assert config.simulation.seed == 42

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.simulation.outlook_days == 5
        assert len(config.conditions) == len(DEFAULT_CONDITIONS)

    def test_invalid_catalog_fails_fast(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        with open(path, "w") as f:
            yaml.dump(
                {"conditions": [{"name": "Broken", "min_temp": 20, "max_temp": 5}]}, f
            )
        with pytest.raises(ValidationError):
            load_config(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")


class TestConfigHash:
    def test_deterministic(self):
        c1 = SimulatorConfig(conditions=DEFAULT_CONDITIONS)
        c2 = SimulatorConfig(conditions=DEFAULT_CONDITIONS)
        assert config_hash(c1) == config_hash(c2)

    def test_different_config_different_hash(self):
        c1 = SimulatorConfig(conditions=DEFAULT_CONDITIONS)
        c2 = SimulatorConfig(conditions=DEFAULT_CONDITIONS[:4])
        assert config_hash(c1) != config_hash(c2)


class TestSnapshotConfig:
    def test_persists_to_db(self, default_config: SimulatorConfig, tmp_db: sqlite3.Connection):
        h = snapshot_config(default_config, tmp_db)
        row = tmp_db.execute(
            "SELECT config_json FROM config_snapshots WHERE config_hash = ?", (h,)
        ).fetchone()
        assert row is not None

    def test_idempotent(self, default_config: SimulatorConfig, tmp_db: sqlite3.Connection):
        h1 = snapshot_config(default_config, tmp_db)
        h2 = snapshot_config(default_config, tmp_db)
        assert h1 == h2
        count = tmp_db.execute("SELECT COUNT(*) FROM config_snapshots").fetchone()[0]
        assert count == 1


class TestGetConfigValue:
    def test_dotted_key(self, default_config: SimulatorConfig):
        assert get_config_value(default_config, "simulation.max_temp") == 30

    def test_list_index(self, default_config: SimulatorConfig):
        assert get_config_value(default_config, "conditions.0.name") == "Sunny"

    def test_invalid_key(self, default_config: SimulatorConfig):
        with pytest.raises(KeyError):
            get_config_value(default_config, "nonexistent.key")


class TestSetConfigValue:
    def test_set_and_revalidate(self, default_config: SimulatorConfig):
        new_config = set_config_value(default_config, "simulation.outlook_days", 7)
        assert new_config.simulation.outlook_days == 7
        assert default_config.simulation.outlook_days == 5

    def test_string_coercion(self, default_config: SimulatorConfig):
        new_config = set_config_value(default_config, "simulation.max_temp", "35")
        assert new_config.simulation.max_temp == 35
        new_config = set_config_value(
            default_config, "simulation.cold_front_probability", "0.5"
        )
        assert new_config.simulation.cold_front_probability == 0.5

    def test_bool_coercion(self, default_config: SimulatorConfig):
        new_config = set_config_value(default_config, "conditions.0.severe", "true")
        assert new_config.conditions[0].severe is True

    def test_optional_seed(self, default_config: SimulatorConfig):
        new_config = set_config_value(default_config, "simulation.seed", "7")
        assert new_config.simulation.seed == 7

    def test_invalid_value_raises(self, default_config: SimulatorConfig):
        with pytest.raises(ValidationError):
            set_config_value(default_config, "simulation.outlook_days", 0)

    def test_unknown_key_raises(self, default_config: SimulatorConfig):
        with pytest.raises(KeyError):
            set_config_value(default_config, "simulation.nope", 1)


class TestSaveConfig:
    def test_round_trip(self, default_config: SimulatorConfig, tmp_path: Path):
        path = tmp_path / "saved.yaml"
        save_config(default_config, path)
        assert load_config(path) == default_config
