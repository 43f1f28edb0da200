"""Regeneration pipeline: generator → outlook → warnings."""

import logging
import random
from datetime import date

from wxsim.config.schema import SimulatorConfig
from wxsim.models.common import utc_now_iso
from wxsim.models.forecast import DailyForecast, FrontType
from wxsim.models.playback import RegenerationReason, SimulationState
from wxsim.sim.generator import draw_front, generate_daily_forecast, validate_catalog
from wxsim.sim.outlook import extrapolate
from wxsim.sim.warnings import evaluate_warnings

logger = logging.getLogger(__name__)


class SimulationPipeline:
    """Builds complete SimulationState values from a validated config."""

    def __init__(self, config: SimulatorConfig, rng: random.Random | None = None):
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.simulation.seed)
        validate_catalog(
            config.conditions, config.simulation.min_temp, config.simulation.max_temp
        )

    def run(
        self, forecast_date: date, reason: RegenerationReason, version: int
    ) -> SimulationState:
        """Generate a fresh day and everything derived from it."""
        sim = self.config.simulation
        forecast, front = generate_daily_forecast(
            self.config.conditions,
            sim.min_temp,
            sim.max_temp,
            sim.cold_front_probability,
            self.rng,
            wind_shift_probability=sim.wind_shift_probability,
            warm_front_center=sim.warm_front_center,
        )
        return self.derive(forecast, front, forecast_date, reason, version)

    def restore(
        self, forecast: DailyForecast, forecast_date: date, version: int
    ) -> SimulationState:
        """Rebuild derived state around a forecast loaded from storage.

        The front type is not stored with the forecast. It is redrawn from a
        random source seeded by the samples, so one stored day always gets
        the same front, outlook and warnings.
        """
        rng = random.Random(repr(forecast.samples))
        front = draw_front(rng, self.config.simulation.cold_front_probability)
        return self.derive(
            forecast, front, forecast_date, RegenerationReason.RESTORED, version, rng=rng
        )

    def derive(
        self,
        forecast: DailyForecast,
        front: FrontType,
        forecast_date: date,
        reason: RegenerationReason,
        version: int,
        rng: random.Random | None = None,
    ) -> SimulationState:
        sim = self.config.simulation
        outlook = extrapolate(
            forecast,
            sim.outlook_days,
            forecast_date,
            rng if rng is not None else self.rng,
            sim.min_temp,
            sim.max_temp,
        )
        warnings = evaluate_warnings(
            outlook,
            forecast,
            front,
            self.config.conditions,
            sim.min_temp,
            sim.max_temp,
            heat_margin=self.config.warnings.heat_margin,
            cold_margin=self.config.warnings.cold_margin,
        )

        state = SimulationState(
            version=version,
            forecast_date=forecast_date,
            front=front,
            forecast=forecast,
            outlook=tuple(outlook),
            warnings=tuple(warnings),
            reason=reason,
            generated_at=utc_now_iso(),
        )
        logger.info(
            "Forecast v%d ready (%s) for %s: %s front, %d..%d°C, %d warnings",
            version,
            reason.value,
            forecast_date.isoformat(),
            front.value,
            forecast.min_temp,
            forecast.max_temp,
            len(warnings),
        )
        return state
