"""YAML config loader with snapshot persistence and runtime get/set."""

import hashlib
import json
import sqlite3
from pathlib import Path
from typing import Any

import yaml

from wxsim.config.defaults import DEFAULT_CONDITIONS
from wxsim.config.schema import SimulatorConfig


def load_config(path: str | Path) -> SimulatorConfig:
    """Load and validate config from a YAML file.

    If no conditions are specified in the YAML, injects DEFAULT_CONDITIONS.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if "conditions" not in raw or not raw["conditions"]:
        raw["conditions"] = [c.model_dump() for c in DEFAULT_CONDITIONS]

    return SimulatorConfig(**raw)


def config_hash(config: SimulatorConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def snapshot_config(config: SimulatorConfig, conn: sqlite3.Connection) -> str:
    """Persist a config snapshot to the database if it changed. Returns the hash."""
    h = config_hash(config)
    cursor = conn.execute(
        "SELECT 1 FROM config_snapshots WHERE config_hash = ?", (h,)
    )
    if cursor.fetchone() is None:
        conn.execute(
            "INSERT INTO config_snapshots (config_hash, config_json, created_at) "
            "VALUES (?, ?, CURRENT_TIMESTAMP)",
            (h, config.model_dump_json()),
        )
        conn.commit()
    return h


def get_config_value(config: SimulatorConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'simulation.max_temp'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(
    config: SimulatorConfig, dotted_key: str, value: Any
) -> SimulatorConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new SimulatorConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target: Any = data
    for part in parts[:-1]:
        target = target[int(part)] if isinstance(target, list) else target[part]
    if not isinstance(target, dict) or parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")

    old_value = target[parts[-1]]
    if isinstance(value, str):
        if isinstance(old_value, bool):
            value = value.lower() in ("1", "true", "yes", "on")
        elif isinstance(old_value, int):
            value = int(value)
        elif isinstance(old_value, float):
            value = float(value)
        elif old_value is None and value.lstrip("-").isdigit():
            value = int(value)
    target[parts[-1]] = value
    return SimulatorConfig(**data)


def save_config(config: SimulatorConfig, path: str | Path) -> None:
    """Write a config back to YAML."""
    with open(path, "w") as f:
        yaml.safe_dump(
            config.model_dump(mode="json"),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
