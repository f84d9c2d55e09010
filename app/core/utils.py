# app\core\utils.py
import datetime
from collections.abc import Iterable

from app.core.constants import DAYS_PER_WEEK
from app.core.models import LaborEntry


def get_week_start(day: datetime.date) -> datetime.date:
    """Monday of the week containing day."""
    return day - datetime.timedelta(days=day.weekday())


def get_week_end(day: datetime.date) -> datetime.date:
    """Sunday of the week containing day."""
    return get_week_start(day) + datetime.timedelta(days=DAYS_PER_WEEK - 1)


def weekly_regular_hours_before(day: datetime.date, entries: Iterable[LaborEntry]) -> float:
    """
    Sum regular hours recorded earlier in the same week.

    Counts entries from Monday of day's week up to, but not including, day.
    This is the weekly total the weekend rule compares against.
    """
    week_start = get_week_start(day)
    return sum(
        (entry.regular_hours for entry in entries if week_start <= entry.date < day),
        0.0,
    )
