"""Wires a PlaybackLoop to its sqlite store and generation history."""

import random
import sqlite3
import uuid

from wxsim.config.loader import snapshot_config
from wxsim.config.schema import SimulatorConfig
from wxsim.models.playback import SimulationState
from wxsim.playback.loop import PlaybackLoop
from wxsim.sim.pipeline import SimulationPipeline
from wxsim.storage import generation_repo
from wxsim.storage.database import run_migrations
from wxsim.storage.forecast_store import SqliteBlobStore

def build_loop(
    config: SimulatorConfig,
    conn: sqlite3.Connection,
    rng: random.Random | None = None,
) -> PlaybackLoop:
    """Create a loop that persists forecasts and logs regenerations to ``conn``.

    Versions continue from the newest recorded regeneration.
    """
    run_migrations(conn)
    c_hash = snapshot_config(config, conn)
    latest = generation_repo.get_latest_generation(conn)

    def _record(state: SimulationState) -> None:
        generation_repo.record_generation(conn, str(uuid.uuid4()), state, c_hash)

    return PlaybackLoop(
        SimulationPipeline(config, rng),
        SqliteBlobStore(conn),
        forecast_key=config.playback.forecast_key,
        on_regenerate=_record,
        initial_version=latest["version"] if latest else 0,
    )
