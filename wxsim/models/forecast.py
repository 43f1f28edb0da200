"""Simulated forecast data models."""

from dataclasses import dataclass
from enum import StrEnum

from wxsim.models.common import HOURS_PER_DAY


class FrontType(StrEnum):
    COLD = "cold"
    WARM = "warm"


class WarningKind(StrEnum):
    FRONT = "FRONT"
    HEAT = "HEAT"
    COLD = "COLD"
    SEVERE = "SEVERE"


@dataclass(frozen=True)
class HourlySample:
    hour: int  # 0-23
    condition: str
    icon: str
    temperature: int
    humidity: int  # 0-100
    wind_speed: int
    wind_direction: str  # one of COMPASS_POINTS


@dataclass(frozen=True)
class DailyForecast:
    """One simulated day: at most one sample per hour, ordered by hour."""

    samples: tuple[HourlySample, ...]

    def sample_for_hour(self, hour: int) -> HourlySample | None:
        for sample in self.samples:
            if sample.hour == hour:
                return sample
        return None

    @property
    def temperatures(self) -> list[int]:
        return [s.temperature for s in self.samples]

    @property
    def max_temp(self) -> int:
        return max(self.temperatures)

    @property
    def min_temp(self) -> int:
        return min(self.temperatures)

    @property
    def is_complete(self) -> bool:
        return sorted(s.hour for s in self.samples) == list(range(HOURS_PER_DAY))

    def starting_at(self, hour: int) -> tuple[HourlySample, ...]:
        """Samples rotated so the one for ``hour`` comes first."""
        ordered = sorted(self.samples, key=lambda s: (s.hour - hour) % HOURS_PER_DAY)
        return tuple(ordered)


@dataclass(frozen=True)
class OutlookDay:
    day_offset: int
    date: str  # YYYY-MM-DD
    label: str  # "Today" or short weekday name
    max_temp: int
    min_temp: int
    condition: str
    icon: str


@dataclass(frozen=True)
class WeatherWarning:
    day_offset: int
    kind: WarningKind
    message: str
