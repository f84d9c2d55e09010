"""Statutory holiday dates (British Columbia / Canada)."""

import datetime
import logging
from collections.abc import Callable, Iterable

from app.core.constants import DAYS_PER_WEEK, DEFAULT_STAT_HOLIDAYS, MONDAY
from app.core.models import DEFAULT_RULES, HolidayDate, OvertimeRules

logger = logging.getLogger(__name__)


def easter_sunday(year: int) -> datetime.date:
    """Anonymous Gregorian algorithm."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return datetime.date(year, month, day)


def good_friday(year: int) -> datetime.date:
    """Good Friday: Friday before Easter Sunday."""
    return easter_sunday(year) - datetime.timedelta(days=2)


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> datetime.date:
    """
    Return the n:th occurrence of a weekday in a month.

    Args:
        year: Calendar year
        month: Month, 1-12
        weekday: datetime.weekday() index (0 = Monday)
        n: Which occurrence, 1 = first

    Returns:
        The matching date
    """
    first = datetime.date(year, month, 1)
    days_until = (weekday - first.weekday()) % DAYS_PER_WEEK
    return first + datetime.timedelta(days=days_until + (n - 1) * DAYS_PER_WEEK)


def victoria_day(year: int) -> datetime.date:
    """Monday on or before May 25."""
    d = datetime.date(year, 5, 25)
    while d.weekday() != MONDAY:
        d -= datetime.timedelta(days=1)
    return d


def new_years_day(year: int) -> datetime.date:
    """January 1st."""
    return datetime.date(year, 1, 1)


def bc_family_day(year: int) -> datetime.date:
    """Third Monday of February."""
    return nth_weekday_of_month(year, 2, MONDAY, 3)


def canada_day(year: int) -> datetime.date:
    """July 1st."""
    return datetime.date(year, 7, 1)


def bc_day(year: int) -> datetime.date:
    """First Monday of August."""
    return nth_weekday_of_month(year, 8, MONDAY, 1)


def labour_day(year: int) -> datetime.date:
    """First Monday of September."""
    return nth_weekday_of_month(year, 9, MONDAY, 1)


def truth_and_reconciliation_day(year: int) -> datetime.date:
    """National Day for Truth and Reconciliation, September 30th."""
    return datetime.date(year, 9, 30)


def thanksgiving(year: int) -> datetime.date:
    """Second Monday of October."""
    return nth_weekday_of_month(year, 10, MONDAY, 2)


def remembrance_day(year: int) -> datetime.date:
    """November 11th."""
    return datetime.date(year, 11, 11)


def christmas_day(year: int) -> datetime.date:
    """December 25th."""
    return datetime.date(year, 12, 25)


#: Recognised holidays keyed by lower-cased name. Client workbooks pick from this table.
HOLIDAY_RULES: dict[str, Callable[[int], datetime.date]] = {
    "new years day": new_years_day,
    "new year's day": new_years_day,
    "bc family day": bc_family_day,
    "family day": bc_family_day,
    "good friday": good_friday,
    "victoria day": victoria_day,
    "canada day": canada_day,
    "b.c day": bc_day,
    "b.c. day": bc_day,
    "bc day": bc_day,
    "labour day": labour_day,
    "labor day": labour_day,
    "national day for truth and reconciliation": truth_and_reconciliation_day,
    "thanksgiving day": thanksgiving,
    "thanksgiving": thanksgiving,
    "remembrance day": remembrance_day,
    "christmas day": christmas_day,
}


def get_stat_holiday_dates(
    year: int,
    holiday_names: Iterable[str] | None = None,
) -> dict[str, datetime.date]:
    """
    Resolve holiday names to dates for a year.

    Names are matched case-insensitively after trimming. Names without a
    rule are left out of the result; client workbooks may list holidays
    this system does not compute.

    Args:
        year: Gregorian calendar year
        holiday_names: Names to resolve, defaults to DEFAULT_STAT_HOLIDAYS

    Returns:
        Dict keyed by the name as given, in input order
    """
    names = DEFAULT_STAT_HOLIDAYS if holiday_names is None else holiday_names

    holidays: dict[str, datetime.date] = {}
    for name in names:
        rule = HOLIDAY_RULES.get(name.strip().lower())
        if rule is None:
            logger.debug("No date rule for holiday %r, skipping", name)
            continue
        holidays[name] = rule(year)
    return holidays


def list_stat_holidays(year: int, holiday_names: Iterable[str] | None = None) -> list[HolidayDate]:
    """Resolved holidays for a year, sorted by date."""
    holidays = get_stat_holiday_dates(year, holiday_names)
    return sorted(
        (HolidayDate(name=name, date=date) for name, date in holidays.items()),
        key=lambda h: h.date,
    )


def is_stat_holiday(day: datetime.date, rules: OvertimeRules = DEFAULT_RULES) -> bool:
    """Check whether a date is one of the rules' stat holidays (date part only)."""
    if isinstance(day, datetime.datetime):
        day = day.date()
    holidays = get_stat_holiday_dates(day.year, rules.stat_holidays)
    return day in holidays.values()
