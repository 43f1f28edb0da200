"""Tests for wiring a loop to sqlite."""

import random
import sqlite3
from datetime import datetime

from wxsim.config.schema import SimulatorConfig
from wxsim.models.playback import RegenerationReason
from wxsim.playback.builder import build_loop
from wxsim.storage import blob_repo, generation_repo


class TestBuildLoop:
    def test_start_records_generation(
        self, tmp_db: sqlite3.Connection, default_config: SimulatorConfig
    ):
        loop = build_loop(default_config, tmp_db, rng=random.Random(3))
        state = loop.start(datetime(2026, 3, 14, 8, 0, 0))

        runs = generation_repo.get_recent_generations(tmp_db)
        assert len(runs) == 1
        assert runs[0]["reason"] == "startup"
        assert runs[0]["version"] == state.version
        assert runs[0]["forecast_date"] == "2026-03-14"
        assert runs[0]["config_hash"] is not None
        assert blob_repo.load_blob(tmp_db, "daily_forecast") is not None

        snapshots = tmp_db.execute("SELECT COUNT(*) FROM config_snapshots").fetchone()[0]
        assert snapshots == 1

    def test_second_loop_restores(
        self, tmp_db: sqlite3.Connection, default_config: SimulatorConfig
    ):
        first = build_loop(default_config, tmp_db, rng=random.Random(3))
        original = first.start(datetime(2026, 3, 14, 8, 0, 0))

        second = build_loop(default_config, tmp_db, rng=random.Random(4))
        restored = second.start(datetime(2026, 3, 14, 8, 5, 0))

        assert restored.reason == RegenerationReason.RESTORED
        assert restored.forecast == original.forecast
        latest = generation_repo.get_latest_generation(tmp_db)
        assert latest["reason"] == "restored"

    def test_versions_continue_across_loops(
        self, tmp_db: sqlite3.Connection, default_config: SimulatorConfig
    ):
        first = build_loop(default_config, tmp_db)
        first.start(datetime(2026, 3, 14, 8, 0, 0))
        first.regenerate(datetime(2026, 3, 14, 8, 1, 0))

        second = build_loop(default_config, tmp_db)
        assert second.start(datetime(2026, 3, 14, 8, 5, 0)).version == 3
        assert second.regenerate(datetime(2026, 3, 14, 8, 6, 0)).version == 4

        versions = [r["version"] for r in generation_repo.get_recent_generations(tmp_db)]
        assert versions == [4, 3, 2, 1]
