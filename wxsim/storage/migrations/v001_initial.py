"""Initial schema: key/value blobs, generation history, config snapshots."""

import sqlite3

DDL = [
    # Opaque persisted values (the current forecast lives here)
    """
    CREATE TABLE IF NOT EXISTS blobs (
        key TEXT PRIMARY KEY,
        value BLOB NOT NULL,
        updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,

    # One row per regeneration
    """
    CREATE TABLE IF NOT EXISTS generation_runs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        run_id TEXT UNIQUE NOT NULL,
        version INTEGER NOT NULL,
        reason TEXT NOT NULL,
        forecast_date TEXT NOT NULL,
        front TEXT NOT NULL,
        min_temp INTEGER NOT NULL,
        max_temp INTEGER NOT NULL,
        warning_count INTEGER NOT NULL DEFAULT 0,
        config_hash TEXT,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    (
        "CREATE INDEX IF NOT EXISTS idx_generation_runs_date "
        "ON generation_runs(forecast_date)"
    ),

    # Config snapshots
    """
    CREATE TABLE IF NOT EXISTS config_snapshots (
        config_hash TEXT PRIMARY KEY,
        config_json TEXT NOT NULL,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
