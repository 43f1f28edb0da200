"""JSON codec for persisted forecasts: an ordered list of flat hour records."""

import json
from dataclasses import asdict

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from wxsim.models.common import COMPASS_POINTS, HOURS_PER_DAY
from wxsim.models.forecast import DailyForecast, HourlySample


class ForecastDecodeError(ValueError):
    """Stored bytes do not describe a usable forecast."""


class SampleRecord(BaseModel):
    model_config = {"extra": "forbid"}

    hour: int = Field(ge=0, lt=HOURS_PER_DAY)
    condition: str = Field(min_length=1)
    icon: str = ""
    temperature: int
    humidity: int = Field(ge=0, le=100)
    wind_speed: int = Field(ge=0)
    wind_direction: str

    @field_validator("wind_direction")
    @classmethod
    def _known_direction(cls, v: str) -> str:
        if v not in COMPASS_POINTS:
            raise ValueError(f"Unknown wind direction: {v!r}")
        return v


_RECORDS = TypeAdapter(list[SampleRecord])


def encode_forecast(forecast: DailyForecast) -> bytes:
    return json.dumps(
        [asdict(s) for s in forecast.samples], ensure_ascii=False
    ).encode("utf-8")


def decode_forecast(
    blob: bytes | str,
    min_temp: int | None = None,
    max_temp: int | None = None,
) -> DailyForecast:
    """Parse a stored forecast.

    When an envelope is given, every sample's temperature must lie inside it.

    Raises:
        ForecastDecodeError: the blob is not JSON, not a list of valid
            records, is empty, repeats an hour, or leaves the envelope.
    """
    try:
        records = _RECORDS.validate_json(blob)
    except ValidationError as e:
        raise ForecastDecodeError(f"Invalid forecast blob: {e.error_count()} errors") from e

    if not records:
        raise ForecastDecodeError("Forecast blob holds no samples")

    hours = [r.hour for r in records]
    if len(set(hours)) != len(hours):
        raise ForecastDecodeError(f"Forecast blob repeats hours: {sorted(hours)}")

    outside = [
        r.hour
        for r in records
        if (min_temp is not None and r.temperature < min_temp)
        or (max_temp is not None and r.temperature > max_temp)
    ]
    if outside:
        raise ForecastDecodeError(
            f"Temperatures outside [{min_temp}, {max_temp}] at hours {sorted(outside)}"
        )

    samples = sorted(
        (HourlySample(**r.model_dump()) for r in records), key=lambda s: s.hour
    )
    return DailyForecast(samples=tuple(samples))
