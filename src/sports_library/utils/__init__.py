"""Utility functions for the sports library."""

from sports_library.utils.formatting import (
    format_distance,
    format_duration,
    format_pace,
    format_speed,
    parse_pace,
)
from sports_library.utils.dates import (
    age_in_years,
    datetime_to_timestamp,
    next_monday,
    plan_date,
    timestamp_now,
    timestamp_to_datetime,
    today,
)

__all__ = [
    "format_pace",
    "parse_pace",
    "format_speed",
    "format_duration",
    "format_distance",
    "today",
    "timestamp_now",
    "timestamp_to_datetime",
    "datetime_to_timestamp",
    "next_monday",
    "plan_date",
    "age_in_years",
]
