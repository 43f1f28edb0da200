"""Playback state and rendering snapshot models."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from wxsim.models.forecast import (
    DailyForecast,
    FrontType,
    HourlySample,
    OutlookDay,
    WeatherWarning,
)


class PlaybackState(StrEnum):
    IDLE = "idle"
    PLAYING = "playing"


class RegenerationReason(StrEnum):
    STARTUP = "startup"
    RESTORED = "restored"
    ROLLOVER = "rollover"
    MANUAL = "manual"


@dataclass(frozen=True)
class SimulationState:
    """Everything derived from one generation run, replaced as a whole."""

    version: int
    forecast_date: date
    front: FrontType
    forecast: DailyForecast
    outlook: tuple[OutlookDay, ...]
    warnings: tuple[WeatherWarning, ...]
    reason: RegenerationReason
    generated_at: str


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the rendering side after a tick."""

    taken_at: str
    state_version: int
    temperature: float
    humidity: float
    wind_speed: float
    wind_direction: str
    condition: str
    icon: str
    hourly: tuple[HourlySample, ...]
    outlook: tuple[OutlookDay, ...]
    warnings: tuple[WeatherWarning, ...]
