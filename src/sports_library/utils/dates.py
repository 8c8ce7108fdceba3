"""Date utility functions for the sports library."""

from datetime import date, datetime, timedelta, timezone


def today() -> date:
    """Return the current local date."""
    return date.today()


def timestamp_now() -> int:
    """Return the current UTC time in milliseconds since the epoch."""
    return datetime_to_timestamp(datetime.now(timezone.utc))


def timestamp_to_datetime(timestamp: int) -> datetime:
    """
    Convert a timestamp in epoch milliseconds to an aware UTC datetime.

    Args:
        timestamp: Milliseconds since the epoch

    Returns:
        Datetime in UTC
    """
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)


def datetime_to_timestamp(dt: datetime) -> int:
    """
    Convert a datetime to epoch milliseconds.

    Naive datetimes are interpreted as UTC.

    Args:
        dt: Datetime object

    Returns:
        Milliseconds since the epoch
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def next_monday(day: date) -> date:
    """Return the given day if it is a Monday, otherwise the following Monday."""
    weekday = day.weekday()
    if weekday == 0:
        return day
    return day + timedelta(days=7 - weekday)


def plan_date(start_date: date, week: int, day: int) -> date:
    """Get the calendar date of a plan day (week and day start with 1)."""
    return start_date + timedelta(weeks=week - 1, days=day - 1)


def age_in_years(birthday: date, reference: date | None = None) -> int:
    """Get the age in completed years at the reference date (default today)."""
    reference = reference or today()
    years = reference.year - birthday.year
    if (reference.month, reference.day) < (birthday.month, birthday.day):
        years -= 1
    return years
