"""Common types and helpers shared across models."""

from datetime import UTC, datetime

COMPASS_POINTS: tuple[str, ...] = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
HOURS_PER_DAY = 24


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def local_now() -> datetime:
    """Wall-clock time in the host's local timezone, as the display shows it."""
    return datetime.now().astimezone()
