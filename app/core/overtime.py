"""
Regular/Overtime/Doubletime classification of a day's hours.

Three paths, first match wins:

- Stat holiday: everything is OT up to overtime_hours_max, DT after that.
- Weekend: DT after overtime_hours_max; the rest is RG while the employee
  still has weekly regular allowance left, OT once it is used up.
- Weekday: RG up to regular_hours_max, OT up to overtime_hours_max, DT after.
"""

import datetime
import logging

from app.core.constants import WEEKEND_WEEKDAYS
from app.core.models import DEFAULT_RULES, CalculationContext, HoursBreakdown, OvertimeRules

logger = logging.getLogger(__name__)


def is_weekend(day: datetime.date) -> bool:
    """Saturday or Sunday."""
    return day.weekday() in WEEKEND_WEEKDAYS


def _weekday_hours(total_hours: float, rules: OvertimeRules) -> HoursBreakdown:
    regular_max = rules.regular_hours_max
    overtime_max = rules.overtime_hours_max

    if total_hours <= regular_max:
        return HoursBreakdown(regular_hours=total_hours, total_hours=total_hours)

    if total_hours <= overtime_max:
        return HoursBreakdown(
            regular_hours=regular_max,
            overtime_hours=total_hours - regular_max,
            total_hours=total_hours,
        )

    return HoursBreakdown(
        regular_hours=regular_max,
        overtime_hours=overtime_max - regular_max,
        double_time_hours=total_hours - overtime_max,
        total_hours=total_hours,
    )


def _stat_holiday_hours(total_hours: float, rules: OvertimeRules) -> HoursBreakdown:
    overtime_max = rules.overtime_hours_max

    if total_hours <= overtime_max:
        return HoursBreakdown(overtime_hours=total_hours, total_hours=total_hours)

    return HoursBreakdown(
        overtime_hours=overtime_max,
        double_time_hours=total_hours - overtime_max,
        total_hours=total_hours,
    )


def _weekend_hours(total_hours: float, weekly_regular_hours: float, rules: OvertimeRules) -> HoursBreakdown:
    overtime_max = rules.overtime_hours_max

    # DT depends only on this day's hours
    double_time = max(0.0, total_hours - overtime_max)
    hours_before_dt = min(total_hours, overtime_max)

    remaining_allowance = max(0.0, rules.weekend_overtime_after_weekly_hours - weekly_regular_hours)

    if remaining_allowance >= hours_before_dt:
        regular = hours_before_dt
    else:
        regular = remaining_allowance

    return HoursBreakdown(
        regular_hours=regular,
        overtime_hours=hours_before_dt - regular,
        double_time_hours=double_time,
        total_hours=total_hours,
    )


def calculate_hours_breakdown(
    context: CalculationContext,
    rules: OvertimeRules = DEFAULT_RULES,
) -> HoursBreakdown:
    """
    Split a day's total hours into RG/OT/DT.

    Args:
        context: Hours, date, weekly regular hours so far and stat holiday flag
        rules: Client overtime rules

    Returns:
        HoursBreakdown whose buckets sum to context.total_hours
    """
    total_hours = context.total_hours

    if context.is_stat_holiday:
        logger.debug("Stat holiday calculation for %s hours on %s", total_hours, context.date)
        return _stat_holiday_hours(total_hours, rules)

    if is_weekend(context.date):
        logger.debug(
            "Weekend calculation for %s hours on %s, weekly RG so far: %s",
            total_hours,
            context.date,
            context.employee_weekly_regular_hours,
        )
        return _weekend_hours(total_hours, context.employee_weekly_regular_hours, rules)

    logger.debug("Weekday calculation for %s hours on %s", total_hours, context.date)
    return _weekday_hours(total_hours, rules)
