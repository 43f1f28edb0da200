"""Repository for the regeneration history."""

import sqlite3

from wxsim.models.playback import SimulationState


def record_generation(
    conn: sqlite3.Connection,
    run_id: str,
    state: SimulationState,
    config_hash: str | None = None,
) -> int:
    """Log one regeneration. Returns the row id."""
    cursor = conn.execute(
        "INSERT INTO generation_runs "
        "(run_id, version, reason, forecast_date, front, min_temp, max_temp, "
        "warning_count, config_hash) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
        (
            run_id,
            state.version,
            state.reason.value,
            state.forecast_date.isoformat(),
            state.front.value,
            state.forecast.min_temp,
            state.forecast.max_temp,
            len(state.warnings),
            config_hash,
        ),
    )
    conn.commit()
    assert cursor.lastrowid is not None
    return cursor.lastrowid


def get_recent_generations(conn: sqlite3.Connection, limit: int = 20) -> list[dict]:
    """Most recent regenerations first."""
    rows = conn.execute(
        "SELECT * FROM generation_runs ORDER BY id DESC LIMIT ?", (limit,)
    ).fetchall()
    return [dict(r) for r in rows]


def get_latest_generation(conn: sqlite3.Connection) -> dict | None:
    row = conn.execute(
        "SELECT * FROM generation_runs ORDER BY id DESC LIMIT 1"
    ).fetchone()
    if row is None:
        return None
    return dict(row)
