"""Tests for the daily forecast generator."""

import random

import pytest

from wxsim.config.defaults import DEFAULT_CONDITIONS
from wxsim.config.schema import ConditionConfig
from wxsim.models.common import COMPASS_POINTS
from wxsim.models.forecast import FrontType
from wxsim.sim.generator import (
    draw_front,
    generate_daily_forecast,
    hourly_temperature,
    next_condition_index,
    time_factor,
    validate_catalog,
)

NAMES = [c.name for c in DEFAULT_CONDITIONS]


def _generate(seed: int, catalog=DEFAULT_CONDITIONS, **kwargs):
    params = {"min_temp": -5, "max_temp": 30, "cold_front_probability": 0.65}
    params.update(kwargs)
    return generate_daily_forecast(catalog, rng=random.Random(seed), **params)


def _with(catalog, **update) -> list[ConditionConfig]:
    return [c.model_copy(update=update) for c in catalog]


class TestTimeFactor:
    def test_zero_at_dawn(self):
        assert time_factor(6) == pytest.approx(0.0)

    def test_mid_afternoon(self):
        assert time_factor(14) == pytest.approx(1.5)

    def test_peak_twelve_hours_after_dawn(self):
        assert time_factor(18) == pytest.approx(2.0)

    def test_range(self):
        for hour in range(24):
            assert 0.0 <= time_factor(hour) <= 2.0


class TestHourlyTemperature:
    archetype = ConditionConfig(name="Flat", min_temp=10, max_temp=20, variance=0)

    def test_dawn_is_archetype_minimum(self):
        """timeFactor = 1 - cos(0) = 0 -> 10."""
        assert hourly_temperature(self.archetype, 6, random.Random(0), -10, 30) == 10

    def test_hour_14(self):
        """timeFactor = 1.5 -> round(10 + 10 * 0.75) = 18."""
        assert hourly_temperature(self.archetype, 14, random.Random(0), -10, 30) == 18

    def test_clamped_to_envelope(self):
        hot = ConditionConfig(name="Hot", min_temp=25, max_temp=45, variance=0)
        assert hourly_temperature(hot, 18, random.Random(0), -10, 30) == 30
        cold = ConditionConfig(name="Cold", min_temp=-30, max_temp=-20, variance=0)
        assert hourly_temperature(cold, 6, random.Random(0), -10, 30) == -10

    def test_variance_is_bounded(self):
        noisy = ConditionConfig(name="Noisy", min_temp=10, max_temp=20, variance=4)
        rng = random.Random(3)
        for _ in range(200):
            t = hourly_temperature(noisy, 6, rng, -10, 30)
            assert 8 <= t <= 12


class TestDrawFront:
    def test_certain_cold(self):
        rng = random.Random(1)
        assert all(draw_front(rng, 1.0) == FrontType.COLD for _ in range(50))

    def test_certain_warm(self):
        rng = random.Random(1)
        assert all(draw_front(rng, 0.0) == FrontType.WARM for _ in range(50))

    def test_bias(self):
        rng = random.Random(99)
        draws = [draw_front(rng, 0.65) for _ in range(5000)]
        share = draws.count(FrontType.COLD) / len(draws)
        assert 0.6 < share < 0.7


class TestNextConditionIndex:
    def test_cold_front_moves_toward_severe(self):
        rng = random.Random(5)
        for index in range(8):
            for _ in range(50):
                new = next_condition_index(index, 8, FrontType.COLD, rng, 3)
                assert index <= new <= min(7, index + 2)

    def test_warm_front_stays_near_center(self):
        rng = random.Random(5)
        for index in range(8):
            for _ in range(50):
                new = next_condition_index(index, 8, FrontType.WARM, rng, 3)
                assert 2 <= new <= 4

    def test_warm_front_center_clamped(self):
        rng = random.Random(5)
        for _ in range(50):
            assert 0 <= next_condition_index(0, 3, FrontType.WARM, rng, 0) <= 1


class TestGenerateDailyForecast:
    def test_exactly_24_unique_hours(self):
        forecast, _ = _generate(1)
        assert [s.hour for s in forecast.samples] == list(range(24))
        assert forecast.is_complete

    @pytest.mark.parametrize("seed", range(100))
    def test_invariants(self, seed: int):
        forecast, front = _generate(seed)
        assert front in (FrontType.COLD, FrontType.WARM)
        for s in forecast.samples:
            assert -5 <= s.temperature <= 30
            assert 0 <= s.humidity <= 100
            assert s.wind_speed >= 0
            assert s.wind_direction in COMPASS_POINTS
            assert s.condition in NAMES

    def test_reproducible_with_seed(self):
        assert _generate(7) == _generate(7)

    def test_starts_dry_without_transitions(self):
        catalog = _with(DEFAULT_CONDITIONS, transition_probability=0.0)
        for seed in range(20):
            forecast, _ = _generate(seed, catalog)
            conditions = {s.condition for s in forecast.samples}
            assert len(conditions) == 1
            assert conditions < {"Sunny", "Partly Cloudy", "Cloudy"}

    def test_cold_front_never_eases(self):
        catalog = _with(DEFAULT_CONDITIONS, transition_probability=1.0)
        forecast, front = _generate(11, catalog, cold_front_probability=1.0)
        assert front == FrontType.COLD
        indexes = [NAMES.index(s.condition) for s in forecast.samples]
        assert indexes == sorted(indexes)

    def test_warm_front_settles_in_wet_band(self):
        catalog = _with(DEFAULT_CONDITIONS, transition_probability=1.0)
        forecast, front = _generate(
            11, catalog, cold_front_probability=0.0, warm_front_center=3
        )
        assert front == FrontType.WARM
        assert {s.condition for s in forecast.samples} <= {"Cloudy", "Rain", "Sleet"}

    def test_steady_wind_without_shifts(self):
        forecast, _ = _generate(4, wind_shift_probability=0.0)
        assert len({s.wind_direction for s in forecast.samples}) == 1

    def test_wind_shifts_one_point_at_a_time(self):
        forecast, _ = _generate(4, wind_shift_probability=1.0)
        points = [COMPASS_POINTS.index(s.wind_direction) for s in forecast.samples]
        for a, b in zip(points, points[1:]):
            assert (b - a) % 8 in (1, 7)

    def test_icons_follow_conditions(self):
        icons = {c.name: c.icon for c in DEFAULT_CONDITIONS}
        forecast, _ = _generate(2)
        for s in forecast.samples:
            assert s.icon == icons[s.condition]


class TestValidateCatalog:
    def test_default_catalog_ok(self):
        validate_catalog(DEFAULT_CONDITIONS, -5, 30)

    def test_empty_catalog(self):
        with pytest.raises(ValueError, match="empty"):
            validate_catalog([], -5, 30)

    def test_inverted_envelope(self):
        with pytest.raises(ValueError, match="envelope"):
            validate_catalog(DEFAULT_CONDITIONS, 30, -5)

    def test_inverted_archetype(self):
        broken = ConditionConfig.model_construct(
            name="Broken", icon="", min_temp=20, max_temp=10, variance=1,
            min_humidity=10, max_humidity=20, max_wind=10,
            transition_probability=0.1, precipitation=False, severe=False,
        )
        with pytest.raises(ValueError, match="Broken"):
            validate_catalog([broken], -5, 30)

    def test_needs_a_dry_condition(self):
        wet = _with(DEFAULT_CONDITIONS, precipitation=True)
        with pytest.raises(ValueError, match="dry"):
            validate_catalog(wet, -5, 30)
