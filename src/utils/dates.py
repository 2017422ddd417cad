"""
Calendar date parsing shared by the models and the cycle engine.
"""
from datetime import date, datetime

from src.services.exceptions import InvalidDate

def normalize_date(value) -> date:
    """
    Reduce a date value to day granularity.

    Args:
        value: A date, a datetime (its time of day is dropped) or an ISO-8601
            string such as "2024-01-01", "2024-01-01T08:30:00+02:00" or
            "2024-01-01T08:30:00Z"

    Returns:
        The calendar date

    Raises:
        InvalidDate: If the value is missing, empty or cannot be parsed

    Example:
        >>> normalize_date("2024-01-01T23:59:00")
        datetime.date(2024, 1, 1)
    """
    if value is None:
        raise InvalidDate("A date is required")

    # datetime is a subclass of date, so it has to be checked first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        raise InvalidDate(f"Unsupported date value of type {type(value).__name__}")

    text = value.strip()
    if not text:
        raise InvalidDate("A date is required")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    # fromisoformat only understands a trailing Z from Python 3.11
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise InvalidDate(f"Unparseable date: {value!r}") from e
