"""Daily forecast generator: a 24-step condition chain over the catalog.

Each hour gets a temperature from a cosine diurnal curve scaled into the
current condition's range, then the chain may step to a neighbouring
condition. The front type drawn at the start of the run biases those steps
for the whole day.
"""

import logging
import math
import random
from collections.abc import Sequence

from wxsim.config.schema import ConditionConfig
from wxsim.models.common import COMPASS_POINTS, HOURS_PER_DAY
from wxsim.models.forecast import DailyForecast, FrontType, HourlySample

logger = logging.getLogger(__name__)

DAWN_HOUR = 6
MIN_WIND = 5
HUMIDITY_JITTER = 5


def validate_catalog(
    catalog: Sequence[ConditionConfig], min_temp: int, max_temp: int
) -> None:
    """Raise ValueError if the catalog or envelope cannot drive a generation run."""
    if not catalog:
        raise ValueError("Condition catalog is empty")
    if min_temp >= max_temp:
        raise ValueError(f"Invalid temperature envelope [{min_temp}, {max_temp}]")
    for c in catalog:
        if c.min_temp > c.max_temp:
            raise ValueError(f"{c.name}: min_temp {c.min_temp} > max_temp {c.max_temp}")
        if c.min_humidity > c.max_humidity:
            raise ValueError(
                f"{c.name}: min_humidity {c.min_humidity} > max_humidity {c.max_humidity}"
            )
        if c.max_wind < MIN_WIND:
            raise ValueError(f"{c.name}: max_wind {c.max_wind} below {MIN_WIND}")
    if all(c.precipitation for c in catalog):
        raise ValueError("Catalog needs at least one dry condition to start from")


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def time_factor(hour: int) -> float:
    """Diurnal factor in [0, 2]: 0 at dawn (06:00), 2 twelve hours later."""
    return 1 - math.cos((hour - DAWN_HOUR) / HOURS_PER_DAY * 2 * math.pi)


def hourly_temperature(
    condition: ConditionConfig,
    hour: int,
    rng: random.Random,
    min_temp: int,
    max_temp: int,
) -> int:
    """Temperature for one hour, clamped into the global envelope."""
    base = condition.min_temp + (condition.max_temp - condition.min_temp) * time_factor(hour) / 2
    jitter = (rng.random() - 0.5) * condition.variance
    return clamp(round_half_up(base + jitter), min_temp, max_temp)


def draw_front(rng: random.Random, cold_front_probability: float) -> FrontType:
    return FrontType.COLD if rng.random() < cold_front_probability else FrontType.WARM


def next_condition_index(
    index: int,
    catalog_size: int,
    front: FrontType,
    rng: random.Random,
    warm_front_center: int,
) -> int:
    """Pick the condition to move to once a transition fires.

    A cold front pushes toward the severe end of the catalog; a warm front
    pulls toward the wet middle band around ``warm_front_center``.
    """
    if front == FrontType.COLD:
        return min(catalog_size - 1, index + rng.randint(0, 2))
    return clamp(warm_front_center + rng.randint(-1, 1), 0, catalog_size - 1)


def generate_daily_forecast(
    catalog: Sequence[ConditionConfig],
    min_temp: int,
    max_temp: int,
    cold_front_probability: float,
    rng: random.Random,
    wind_shift_probability: float = 0.1,
    warm_front_center: int = 3,
) -> tuple[DailyForecast, FrontType]:
    """Generate one day of hourly samples.

    Args:
        catalog: Condition archetypes ordered from calm to severe.
        min_temp: Lower bound of the global temperature envelope.
        max_temp: Upper bound of the global temperature envelope.
        cold_front_probability: Chance the day is driven by a cold front.
        rng: Random source; pass a seeded instance for reproducible runs.
        wind_shift_probability: Per-hour chance the wind veers or backs one point.
        warm_front_center: Catalog index a warm front gravitates to.

    Returns:
        The forecast (exactly 24 samples, hours 0-23) and the front type.
    """
    front = draw_front(rng, cold_front_probability)

    dry = [i for i, c in enumerate(catalog) if not c.precipitation]
    index = rng.choice(dry)
    wind_index = rng.randrange(len(COMPASS_POINTS))

    samples: list[HourlySample] = []
    for hour in range(HOURS_PER_DAY):
        condition = catalog[index]

        temperature = hourly_temperature(condition, hour, rng, min_temp, max_temp)
        humidity = clamp(
            rng.randint(condition.min_humidity, condition.max_humidity)
            + rng.randint(-HUMIDITY_JITTER, HUMIDITY_JITTER),
            0,
            100,
        )
        wind_speed = rng.randint(MIN_WIND, condition.max_wind)

        if rng.random() < wind_shift_probability:
            wind_index = (wind_index + rng.choice((-1, 1))) % len(COMPASS_POINTS)

        if rng.random() < condition.transition_probability:
            index = next_condition_index(
                index, len(catalog), front, rng, warm_front_center
            )
            condition = catalog[index]

        samples.append(
            HourlySample(
                hour=hour,
                condition=condition.name,
                icon=condition.icon,
                temperature=temperature,
                humidity=humidity,
                wind_speed=wind_speed,
                wind_direction=COMPASS_POINTS[wind_index],
            )
        )

    forecast = DailyForecast(samples=tuple(samples))
    logger.debug(
        "Generated %s-front day: %d..%d, conditions %s",
        front.value,
        forecast.min_temp,
        forecast.max_temp,
        sorted({s.condition for s in samples}),
    )
    return forecast, front
