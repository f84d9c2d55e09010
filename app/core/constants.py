# app/core/constants.py
from typing import Final

# ==========================
# Daily thresholds
# ==========================

#: Hours per day paid as Regular before Overtime begins.
DEFAULT_REGULAR_HOURS_MAX: Final[float] = 8

#: Hours per day before Doubletime begins.
DEFAULT_OVERTIME_HOURS_MAX: Final[float] = 12

#: Weekly Regular hours after which weekend work becomes Overtime.
DEFAULT_WEEKEND_OVERTIME_AFTER_WEEKLY_HOURS: Final[float] = 40


# ==========================
# Stat holidays
# ==========================

#: Holidays recognised when a client has no rules workbook (BC, Canada).
#: Spellings match the client workbooks, which is why "B.C Day" has no second period.
DEFAULT_STAT_HOLIDAYS: Final[tuple[str, ...]] = (
    "New Years Day",
    "BC Family Day",
    "Good Friday",
    "Victoria Day",
    "Canada Day",
    "B.C Day",
    "Labour Day",
    "National Day for Truth and Reconciliation",
    "Thanksgiving Day",
    "Remembrance Day",
    "Christmas Day",
)


# ==========================
# Week structure
# ==========================

#: Number of days in a week.
DAYS_PER_WEEK: Final[int] = 7

#: datetime.weekday() indices (0 = Monday).
MONDAY: Final[int] = 0
SATURDAY: Final[int] = 5
SUNDAY: Final[int] = 6

#: Weekdays that use the weekend classification.
WEEKEND_WEEKDAYS: Final[frozenset[int]] = frozenset({SATURDAY, SUNDAY})

#: English weekday names indexed like datetime.weekday().
WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

