"""Playback loop: turns hourly samples into continuously changing values.

The loop is driven from outside by calling ``tick(now)`` with a wall-clock
reading, so tests can feed synthetic timestamps. All state derived from one
generation run lives in a single immutable SimulationState that is swapped
wholesale on regeneration.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta

from wxsim.models.common import HOURS_PER_DAY
from wxsim.models.playback import (
    PlaybackState,
    RegenerationReason,
    SimulationState,
    Snapshot,
)
from wxsim.sim.interpolation import hour_fraction, lerp
from wxsim.sim.pipeline import SimulationPipeline
from wxsim.storage.forecast_store import BlobStore, persist_forecast, restore_forecast

logger = logging.getLogger(__name__)

DAY_BOUNDARY = (23, 59, 59)


class PlaybackLoop:
    def __init__(
        self,
        pipeline: SimulationPipeline,
        store: BlobStore,
        forecast_key: str = "daily_forecast",
        on_regenerate: Callable[[SimulationState], None] | None = None,
        initial_version: int = 0,
    ):
        self.pipeline = pipeline
        self.store = store
        self.forecast_key = forecast_key
        self.on_regenerate = on_regenerate
        self._state: SimulationState | None = None
        self._snapshot: Snapshot | None = None
        self._version = initial_version

    @property
    def status(self) -> PlaybackState:
        return PlaybackState.IDLE if self._state is None else PlaybackState.PLAYING

    @property
    def state(self) -> SimulationState | None:
        return self._state

    @property
    def snapshot(self) -> Snapshot | None:
        return self._snapshot

    def start(self, now: datetime) -> SimulationState:
        """Cold start: resume a stored forecast, or generate one."""
        if self._state is not None:
            return self._state

        sim = self.pipeline.config.simulation
        forecast = restore_forecast(
            self.store, self.forecast_key, sim.min_temp, sim.max_temp
        )
        if forecast is not None:
            state = self.pipeline.restore(forecast, now.date(), self._next_version())
            self._install(state, now)
        else:
            self.regenerate(now, RegenerationReason.STARTUP)

        assert self._state is not None
        return self._state

    def regenerate(
        self,
        now: datetime,
        reason: RegenerationReason = RegenerationReason.MANUAL,
        forecast_date: date | None = None,
    ) -> SimulationState:
        """Run the full generation pipeline and replace the current state."""
        state = self.pipeline.run(
            forecast_date or now.date(), reason, self._next_version()
        )
        persist_forecast(self.store, self.forecast_key, state.forecast)
        self._install(state, now)
        return state

    def tick(self, now: datetime) -> Snapshot | None:
        """Advance playback to ``now`` and return the current snapshot.

        Idle loops and hours missing from the forecast leave the previous
        snapshot in place.
        """
        if self._state is None:
            return self._snapshot

        if now.date() > self._state.forecast_date:
            logger.info(
                "Missed day boundary (forecast for %s, now %s), regenerating",
                self._state.forecast_date.isoformat(),
                now.date().isoformat(),
            )
            self.regenerate(now, RegenerationReason.ROLLOVER)

        self._refresh(now)

        if (now.hour, now.minute, now.second) == DAY_BOUNDARY:
            tomorrow = now.date() + timedelta(days=1)
            if self._state.forecast_date < tomorrow:
                logger.info("Day boundary reached, generating forecast for %s", tomorrow)
                self.regenerate(now, RegenerationReason.ROLLOVER, forecast_date=tomorrow)

        return self._snapshot

    def _next_version(self) -> int:
        self._version += 1
        return self._version

    def _install(self, state: SimulationState, now: datetime) -> None:
        self._state = state
        if self.on_regenerate is not None:
            self.on_regenerate(state)
        self._refresh(now)

    def _refresh(self, now: datetime) -> None:
        assert self._state is not None
        snapshot = interpolate_snapshot(self._state, now)
        if snapshot is None:
            logger.debug("No samples bracketing %s, keeping previous values", now.time())
            return
        self._snapshot = snapshot


def interpolate_snapshot(state: SimulationState, now: datetime) -> Snapshot | None:
    """Blend the samples either side of ``now``; None if one is missing."""
    current = state.forecast.sample_for_hour(now.hour)
    upcoming = state.forecast.sample_for_hour((now.hour + 1) % HOURS_PER_DAY)
    if current is None or upcoming is None:
        return None

    t = hour_fraction(now.minute, now.second)
    return Snapshot(
        taken_at=now.isoformat(),
        state_version=state.version,
        temperature=lerp(current.temperature, upcoming.temperature, t),
        humidity=lerp(current.humidity, upcoming.humidity, t),
        wind_speed=lerp(current.wind_speed, upcoming.wind_speed, t),
        wind_direction=current.wind_direction,
        condition=current.condition,
        icon=current.icon,
        hourly=state.forecast.starting_at(now.hour),
        outlook=state.outlook,
        warnings=state.warnings,
    )
