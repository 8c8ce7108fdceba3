"""Formatting utilities for pace, speed and duration."""


def format_pace(seconds_per_km: float) -> str:
    """Convert a pace in seconds per km to min:sec/km format (e.g., '5:45')."""
    if seconds_per_km <= 0:
        return "N/A"
    seconds = int(round(seconds_per_km))
    return f"{seconds // 60}:{seconds % 60:02d}"


def parse_pace(pace_str: str) -> int:
    """Convert a pace in mm:ss format to seconds per km."""
    minutes, _, seconds = pace_str.strip().partition(":")
    try:
        return int(minutes) * 60 + int(seconds or 0)
    except ValueError as err:
        raise ValueError(f"Invalid pace format: {pace_str}. Expected format: MM:SS") from err


def format_speed(speed_kmh: float) -> str:
    """Format a speed in km/h with one decimal (e.g., '8.4 km/h')."""
    if speed_kmh < 0:
        return "N/A"
    return f"{speed_kmh:.1f} km/h"


def format_duration(minutes: int) -> str:
    """Convert a duration in minutes to H:MM h or M min format."""
    if minutes < 0:
        return "N/A"
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}:{mins:02d} h"
    return f"{mins} min"


def format_distance(meters: float) -> str:
    """Format a distance in meters as kilometers (e.g., '10.25 km')."""
    if meters < 0:
        return "N/A"
    return f"{meters / 1000:.2f} km"
