"""Output formatters for playback snapshots."""

import json
from dataclasses import asdict

from wxsim.models.forecast import HourlySample
from wxsim.models.playback import Snapshot


def hour_label(hour: int) -> str:
    """12-hour clock label, e.g. 0 -> '12 AM', 15 -> '3 PM'."""
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12} {suffix}"


def hourly_labels(hourly: tuple[HourlySample, ...]) -> list[str]:
    return ["Now" if i == 0 else hour_label(s.hour) for i, s in enumerate(hourly)]


def snapshot_to_dict(s: Snapshot) -> dict:
    """Plain-data view of a snapshot for JSON consumers."""
    data = asdict(s)
    data["temperature"] = round(s.temperature, 1)
    data["humidity"] = round(s.humidity, 1)
    data["wind_speed"] = round(s.wind_speed, 1)
    for entry, label in zip(data["hourly"], hourly_labels(s.hourly)):
        entry["label"] = label
    return data


def format_snapshot_json(s: Snapshot) -> str:
    return json.dumps(snapshot_to_dict(s), indent=2, ensure_ascii=False)


def format_snapshot_line(s: Snapshot) -> str:
    """One-line status for the foreground player."""
    return (
        f"{s.taken_at[11:19]} {s.icon} {s.condition} {s.temperature:.1f}°C "
        f"| humidity {s.humidity:.0f}% | wind {s.wind_speed:.0f} km/h {s.wind_direction}"
    )


def format_snapshot_text(s: Snapshot) -> str:
    """Multi-line summary for logging and the CLI."""
    lines = [
        f"=== Now: {s.icon} {s.condition} {s.temperature:.1f}°C "
        f"(forecast v{s.state_version}) ===",
        f"Humidity: {s.humidity:.0f}% | Wind: {s.wind_speed:.0f} km/h {s.wind_direction}",
        "",
        "Next 24 hours:",
    ]
    for label, sample in zip(hourly_labels(s.hourly), s.hourly):
        lines.append(
            f"  {label:>5}  {sample.icon} {sample.temperature:>3}°C  {sample.condition}"
        )
    lines.append("")
    lines.append("Outlook:")
    for day in s.outlook:
        lines.append(
            f"  {day.label:>5}  {day.icon} {day.max_temp:>3}°/{day.min_temp}°C  {day.condition}"
        )
    if s.warnings:
        lines.append("")
        lines.append("Warnings:")
        for w in s.warnings:
            lines.append(f"  [{w.kind.value}] day +{w.day_offset}: {w.message}")
    return "\n".join(lines)
