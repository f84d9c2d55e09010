import datetime
import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.constants import (
    DEFAULT_OVERTIME_HOURS_MAX,
    DEFAULT_REGULAR_HOURS_MAX,
    DEFAULT_STAT_HOLIDAYS,
    DEFAULT_WEEKEND_OVERTIME_AFTER_WEEKLY_HOURS,
)


class OvertimeRules(BaseModel):
    """Client overtime configuration. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    regular_hours_max: float = Field(DEFAULT_REGULAR_HOURS_MAX, gt=0, allow_inf_nan=False)
    overtime_hours_max: float = Field(DEFAULT_OVERTIME_HOURS_MAX, gt=0, allow_inf_nan=False)
    stat_holidays: tuple[str, ...] = DEFAULT_STAT_HOLIDAYS
    weekend_overtime_after_weekly_hours: float = Field(
        DEFAULT_WEEKEND_OVERTIME_AFTER_WEEKLY_HOURS, gt=0, allow_inf_nan=False
    )

    @model_validator(mode="after")
    def check_daily_thresholds(self) -> "OvertimeRules":
        if self.regular_hours_max > self.overtime_hours_max:
            raise ValueError(
                f"regular_hours_max ({self.regular_hours_max}) must not exceed "
                f"overtime_hours_max ({self.overtime_hours_max})"
            )
        return self


class CalculationContext(BaseModel):
    """One day of work for one employee, as handed to the classifier."""

    total_hours: float = Field(ge=0, allow_inf_nan=False)
    date: datetime.date
    employee_weekly_regular_hours: float = Field(0, ge=0, allow_inf_nan=False)
    is_stat_holiday: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def strip_time(cls, value):
        # Only the calendar day matters
        if isinstance(value, datetime.datetime):
            return value.date()
        return value


class HoursBreakdown(BaseModel):
    """Regular/Overtime/Doubletime split of a day's hours."""

    regular_hours: float = 0
    overtime_hours: float = 0
    double_time_hours: float = 0
    total_hours: float = 0

    def is_balanced(self) -> bool:
        return math.isclose(
            self.regular_hours + self.overtime_hours + self.double_time_hours,
            self.total_hours,
            abs_tol=1e-9,
        )


class HolidayDate(BaseModel):
    """A named stat holiday resolved to a calendar date."""

    name: str
    date: datetime.date


class LaborEntry(BaseModel):
    """Regular hours already recorded for an employee on a given day."""

    date: datetime.date
    regular_hours: float = Field(0, ge=0, allow_inf_nan=False)


DEFAULT_RULES = OvertimeRules()
