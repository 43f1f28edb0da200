"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, model_validator


class ConditionConfig(BaseModel):
    """One weather-condition archetype in the catalog."""

    model_config = {"extra": "forbid", "frozen": True}

    name: str
    icon: str = ""
    min_temp: int
    max_temp: int
    variance: float = Field(default=3.0, ge=0.0)
    min_humidity: int = Field(default=40, ge=0, le=100)
    max_humidity: int = Field(default=70, ge=0, le=100)
    max_wind: int = Field(default=15, ge=5)
    transition_probability: float = Field(default=0.2, ge=0.0, le=1.0)
    precipitation: bool = False
    severe: bool = False

    @model_validator(mode="after")
    def _check_ranges(self) -> "ConditionConfig":
        if self.min_temp > self.max_temp:
            raise ValueError(
                f"{self.name}: min_temp {self.min_temp} > max_temp {self.max_temp}"
            )
        if self.min_humidity > self.max_humidity:
            raise ValueError(
                f"{self.name}: min_humidity {self.min_humidity} > "
                f"max_humidity {self.max_humidity}"
            )
        return self


class SimulationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    min_temp: int = -5
    max_temp: int = 30
    cold_front_probability: float = Field(default=0.65, ge=0.0, le=1.0)
    wind_shift_probability: float = Field(default=0.1, ge=0.0, le=1.0)
    warm_front_center: int = Field(default=3, ge=0)
    outlook_days: int = Field(default=5, ge=1, le=14)
    seed: int | None = None

    @model_validator(mode="after")
    def _check_envelope(self) -> "SimulationConfig":
        if self.min_temp >= self.max_temp:
            raise ValueError(
                f"min_temp {self.min_temp} must be below max_temp {self.max_temp}"
            )
        return self


class WarningConfig(BaseModel):
    model_config = {"extra": "forbid"}

    heat_margin: int = Field(default=1, ge=0)
    cold_margin: int = Field(default=1, ge=0)


class PlaybackConfig(BaseModel):
    model_config = {"extra": "forbid"}

    tick_interval_seconds: float = Field(default=1.0, gt=0.0, le=60.0)
    forecast_key: str = Field(default="daily_forecast", min_length=1)


class SimulatorConfig(BaseModel):
    model_config = {"extra": "forbid"}

    simulation: SimulationConfig = SimulationConfig()
    warnings: WarningConfig = WarningConfig()
    playback: PlaybackConfig = PlaybackConfig()
    conditions: list[ConditionConfig] = []

    @model_validator(mode="after")
    def _check_catalog(self) -> "SimulatorConfig":
        if not self.conditions:
            return self
        names = [c.name for c in self.conditions]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate condition names in catalog: {names}")
        if self.simulation.warm_front_center >= len(self.conditions):
            raise ValueError(
                f"warm_front_center {self.simulation.warm_front_center} is outside "
                f"a catalog of {len(self.conditions)} conditions"
            )
        return self
