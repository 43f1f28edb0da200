"""Linear interpolation between hourly samples."""

SECONDS_PER_HOUR = 3600


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def hour_fraction(minute: int, second: int) -> float:
    """How far through the current hour a wall-clock reading is, in [0, 1)."""
    return (minute * 60 + second) / SECONDS_PER_HOUR
