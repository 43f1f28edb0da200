"""Threshold-based advisories derived from the outlook and today's samples."""

from collections.abc import Sequence

from wxsim.config.schema import ConditionConfig
from wxsim.models.forecast import (
    DailyForecast,
    FrontType,
    OutlookDay,
    WarningKind,
    WeatherWarning,
)

FRONT_MESSAGES = {
    FrontType.COLD: "Cold front moving through: conditions may turn severe later in the day",
    FrontType.WARM: "Warm front approaching: expect cloud and spells of rain",
}


def evaluate_warnings(
    outlook: Sequence[OutlookDay],
    today: DailyForecast,
    front: FrontType,
    catalog: Sequence[ConditionConfig],
    min_temp: int,
    max_temp: int,
    heat_margin: int = 1,
    cold_margin: int = 1,
) -> list[WeatherWarning]:
    """Evaluate advisories for one generation cycle.

    The front summary is always first. Heat and cold warnings follow per
    outlook day in day order, then at most one severe-weather warning for
    today if any of today's hours uses a severe condition.
    """
    warnings: list[WeatherWarning] = []

    for day in outlook:
        if day.max_temp >= max_temp - heat_margin:
            warnings.append(
                WeatherWarning(
                    day_offset=day.day_offset,
                    kind=WarningKind.HEAT,
                    message=f"Heat advisory for {day.label}: highs near {day.max_temp}°C",
                )
            )
        if day.min_temp <= min_temp + cold_margin:
            warnings.append(
                WeatherWarning(
                    day_offset=day.day_offset,
                    kind=WarningKind.COLD,
                    message=f"Freeze warning for {day.label}: lows near {day.min_temp}°C",
                )
            )

    severe = {c.name for c in catalog if c.severe}
    first_severe = next((s for s in today.samples if s.condition in severe), None)
    if first_severe is not None:
        warnings.append(
            WeatherWarning(
                day_offset=0,
                kind=WarningKind.SEVERE,
                message=(
                    f"Severe weather today: {first_severe.condition} "
                    f"from {first_severe.hour:02d}:00"
                ),
            )
        )

    front_summary = WeatherWarning(
        day_offset=0, kind=WarningKind.FRONT, message=FRONT_MESSAGES[front]
    )
    return [front_summary, *warnings]
