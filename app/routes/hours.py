# app/routes/hours.py
"""
Hours breakdown and stat holiday endpoints used by the daily report form.
"""

import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.config import DATE_FORMAT_ISO
from app.core.constants import WEEKDAY_NAMES
from app.core.holidays import is_stat_holiday, list_stat_holidays
from app.core.logging_config import get_logger
from app.core.models import CalculationContext, LaborEntry
from app.core.overtime import calculate_hours_breakdown, is_weekend
from app.core.rules_provider import ClientRulesProvider
from app.core.types import ConfigLoader
from app.core.utils import weekly_regular_hours_before
from app.core.validators import normalize_client_name, validate_year
from app.routes.shared import get_config_loader, get_rules_provider

logger = get_logger(__name__)

router = APIRouter(prefix="/api/config", tags=["hours"])


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriorLaborLine(CamelModel):
    date: datetime.date
    regular_hours: float = Field(0, ge=0, allow_inf_nan=False)


class CalculateHoursRequest(CamelModel):
    total_hours: float = Field(ge=0, allow_inf_nan=False)
    date: datetime.date
    client_name: str | None = None
    employee_weekly_regular_hours: float = Field(0, ge=0, allow_inf_nan=False)
    prior_labor_lines: list[PriorLaborLine] | None = None


@router.post("/calculate-hours")
async def calculate_hours(
    body: CalculateHoursRequest,
    provider: ClientRulesProvider = Depends(get_rules_provider),
    loader: ConfigLoader = Depends(get_config_loader),
):
    """
    Calculate the RG/OT/DT breakdown for one employee's day.

    Weekly regular hours come from priorLaborLines when given (summed over
    the week before the date), otherwise from employeeWeeklyRegularHours.
    """
    client_name = normalize_client_name(body.client_name)
    resolved = await provider.resolve_client_rules(client_name, loader)
    rules = resolved.rules

    if body.prior_labor_lines is not None:
        entries = [LaborEntry(date=line.date, regular_hours=line.regular_hours) for line in body.prior_labor_lines]
        weekly_regular_hours = weekly_regular_hours_before(body.date, entries)
    else:
        weekly_regular_hours = body.employee_weekly_regular_hours

    stat_holiday = is_stat_holiday(body.date, rules)
    breakdown = calculate_hours_breakdown(
        CalculationContext(
            total_hours=body.total_hours,
            date=body.date,
            employee_weekly_regular_hours=weekly_regular_hours,
            is_stat_holiday=stat_holiday,
        ),
        rules,
    )

    logger.info(
        "Calculated hours breakdown",
        extra={
            "extra_fields": {
                "client_name": client_name,
                "date": body.date.isoformat(),
                "rules_source": resolved.source,
                **breakdown.model_dump(),
            }
        },
    )

    return {
        "regularHours": breakdown.regular_hours,
        "overtimeHours": breakdown.overtime_hours,
        "doubleTimeHours": breakdown.double_time_hours,
        "totalHours": breakdown.total_hours,
        "isStatHoliday": stat_holiday,
        "isWeekend": is_weekend(body.date),
        "weeklyRegularHoursSoFar": weekly_regular_hours,
        "dayOfWeek": WEEKDAY_NAMES[body.date.weekday()],
        "rulesSource": resolved.source,
    }


@router.get("/stat-holidays/{year}")
async def get_stat_holidays(
    year: int,
    client_name: str | None = Query(None, alias="clientName"),
    provider: ClientRulesProvider = Depends(get_rules_provider),
    loader: ConfigLoader = Depends(get_config_loader),
):
    """List the stat holidays for a year, for a client's rules or the defaults."""
    year = validate_year(year)
    rules = await provider.get_client_rules(normalize_client_name(client_name), loader)

    return [
        {"name": holiday.name, "date": holiday.date.strftime(DATE_FORMAT_ISO)}
        for holiday in list_stat_holidays(year, rules.stat_holidays)
    ]


@router.post("/rules-cache/clear")
async def clear_rules_cache(
    client_name: str | None = Query(None, alias="clientName"),
    provider: ClientRulesProvider = Depends(get_rules_provider),
):
    """Forget cached rules after a client's ot_rules.xlsx has been edited."""
    client_name = normalize_client_name(client_name)
    provider.clear_client_rules_cache(client_name)
    return {"cleared": client_name or "all"}
