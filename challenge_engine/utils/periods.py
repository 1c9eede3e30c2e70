from datetime import date, datetime, timedelta
from typing import Optional, Union

DateLike = Union[date, datetime, str]


def parse_date(value: DateLike) -> date:
    """Coerce a YYYY-MM-DD string, date or datetime to a calendar date.

    Full ISO timestamps are accepted and cut to their date part. Raises
    ValueError for anything else, including trailing text after the date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if len(text) <= 10:
        return date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date()


def format_date_ymd(value: DateLike) -> str:
    return parse_date(value).isoformat()


def add_days(value: DateLike, days: int) -> date:
    return parse_date(value) + timedelta(days=days)


def last_day_of_month(value: DateLike) -> date:
    d = parse_date(value)
    first_of_next = first_of_next_month(d)
    return first_of_next - timedelta(days=1)


def first_of_next_month(today: Optional[date] = None) -> date:
    today = today or date.today()
    if today.month == 12:
        return date(today.year + 1, 1, 1)
    return date(today.year, today.month + 1, 1)


def next_weekday(weekday: int, today: Optional[date] = None) -> date:
    """Return the next given weekday (Monday=0) strictly after today."""
    today = today or date.today()
    days_ahead = (weekday - today.weekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


def calculate_days_between(start: DateLike, end: DateLike) -> int:
    """Inclusive number of calendar days from start to end."""
    return (parse_date(end) - parse_date(start)).days + 1


def _month_day(d: date) -> str:
    return f"{d:%b} {d.day}"


def format_custom_period_label(start: DateLike, end: DateLike) -> str:
    """Human label for a date range.

    "Jan 15", "Jan 15-22", "Jan 15 - Feb 10" or, across years,
    "Dec 28, 2025 - Jan 5, 2026".
    """
    start_date = parse_date(start)
    end_date = parse_date(end)

    if start_date == end_date:
        return _month_day(start_date)
    if start_date.year != end_date.year:
        return f"{_month_day(start_date)}, {start_date.year} - {_month_day(end_date)}, {end_date.year}"
    if start_date.month == end_date.month:
        return f"{_month_day(start_date)}-{end_date.day}"
    return f"{_month_day(start_date)} - {_month_day(end_date)}"
