"""Multi-day outlook extrapolated from today's hourly samples."""

import random
from collections import Counter
from datetime import date, timedelta

from wxsim.models.forecast import DailyForecast, OutlookDay
from wxsim.sim.generator import clamp, round_half_up

JITTER_PER_DAY = 2
TOP_CONDITIONS = 3


def day_label(day_offset: int, day: date) -> str:
    return "Today" if day_offset == 0 else day.strftime("%a")


def condition_ranking(today: DailyForecast) -> list[tuple[str, str]]:
    """(condition, icon) pairs ordered by how many hours they cover today."""
    counts = Counter((s.condition, s.icon) for s in today.samples)
    return [pair for pair, _ in counts.most_common()]


def extrapolate(
    today: DailyForecast,
    day_count: int,
    start_date: date,
    rng: random.Random,
    min_temp: int,
    max_temp: int,
) -> list[OutlookDay]:
    """Build a ``day_count``-day outlook starting with today.

    Day 0 is today's actual max/min and dominant condition. Each later day
    perturbs today's hourly temperatures by up to ``±2·offset`` degrees, so
    the spread widens the further out the day is, and picks its condition
    from today's three most frequent ones.
    """
    if not today.samples:
        raise ValueError("Cannot extrapolate from an empty forecast")

    ranking = condition_ranking(today)
    days: list[OutlookDay] = []

    for offset in range(day_count):
        day = start_date + timedelta(days=offset)
        if offset == 0:
            high, low = today.max_temp, today.min_temp
            condition, icon = ranking[0]
        else:
            spread = JITTER_PER_DAY * offset
            series = [t + rng.uniform(-spread, spread) for t in today.temperatures]
            high = clamp(round_half_up(max(series)), min_temp, max_temp)
            low = clamp(round_half_up(min(series)), min_temp, max_temp)
            condition, icon = rng.choice(ranking[:TOP_CONDITIONS])

        days.append(
            OutlookDay(
                day_offset=offset,
                date=day.isoformat(),
                label=day_label(offset, day),
                max_temp=high,
                min_temp=low,
                condition=condition,
                icon=icon,
            )
        )

    return days
