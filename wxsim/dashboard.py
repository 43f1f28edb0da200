"""Weather Playback Dashboard: FastAPI backend exposing snapshots + controls.

Routes are async so every request runs on the event loop thread, which also
owns the sqlite connection and the playback loop.
"""

from collections.abc import Callable
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from wxsim.config.loader import load_config
from wxsim.config.schema import SimulatorConfig
from wxsim.models.common import local_now, utc_now_iso
from wxsim.models.playback import SimulationState
from wxsim.playback.builder import build_loop
from wxsim.playback.loop import PlaybackLoop
from wxsim.reporting.formatters import snapshot_to_dict
from wxsim.storage import generation_repo
from wxsim.storage.database import connect

DB_PATH = Path("data") / "wxsim.db"
CONFIG_PATH = Path("ops") / "configs" / "default.yaml"


def create_app(
    config: SimulatorConfig,
    db_path: str | Path = DB_PATH,
    clock: Callable[[], datetime] = local_now,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        conn = connect(db_path)
        loop = build_loop(config, conn)
        loop.start(clock())
        app.state.conn = conn
        app.state.loop = loop
        try:
            yield
        finally:
            conn.close()

    app = FastAPI(title="Weather Playback Dashboard", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _state() -> SimulationState:
        loop: PlaybackLoop = app.state.loop
        if loop.state is None:
            raise HTTPException(503, "No forecast loaded")
        return loop.state

    # ── Data endpoints ──────────────────────────────────────────

    @app.get("/api/snapshot")
    async def get_snapshot():
        """Interpolated current values plus hourly strip, outlook and warnings."""
        snapshot = app.state.loop.tick(clock())
        if snapshot is None:
            raise HTTPException(503, "No forecast data for the current hour")
        return snapshot_to_dict(snapshot)

    @app.get("/api/forecast")
    async def get_forecast():
        """Today's 24 hourly samples, hour 0 first."""
        state = _state()
        return {
            "version": state.version,
            "forecast_date": state.forecast_date.isoformat(),
            "front": state.front.value,
            "generated_at": state.generated_at,
            "samples": [asdict(s) for s in state.forecast.samples],
        }

    @app.get("/api/outlook")
    async def get_outlook():
        return [asdict(d) for d in _state().outlook]

    @app.get("/api/warnings")
    async def get_warnings():
        return [asdict(w) for w in _state().warnings]

    @app.get("/api/generations")
    async def get_generations(limit: int = Query(20, ge=1, le=500)):
        """Recent regenerations, newest first."""
        return generation_repo.get_recent_generations(app.state.conn, limit)

    @app.get("/api/health")
    async def get_health():
        loop: PlaybackLoop = app.state.loop
        state = loop.state
        return {
            "playback": loop.status.value,
            "forecast_version": state.version if state else None,
            "forecast_date": state.forecast_date.isoformat() if state else None,
            "complete_forecast": state.forecast.is_complete if state else False,
            "timestamp": utc_now_iso(),
        }

    # ── Control endpoints ───────────────────────────────────────

    @app.post("/api/regenerate")
    async def regenerate():
        """Manual trigger: same pipeline as the midnight rollover."""
        state = app.state.loop.regenerate(clock())
        return {
            "status": "regenerated",
            "version": state.version,
            "front": state.front.value,
            "warnings": len(state.warnings),
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(load_config(CONFIG_PATH)), host="127.0.0.1", port=8777)
