# app/core/rules_parser.py
"""
Parse client overtime rules from an ot_rules.xlsx workbook.

The workbook is maintained by hand, so parsing is best effort: every field
is parsed on its own and anything blank or malformed keeps its default.
Only a workbook that cannot be opened at all raises (RulesParseError).
"""

import logging
import math
import re
from io import BytesIO
from typing import Any

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from app.core.config import (
    DOUBLETIME_CELL,
    HOLIDAY_BOILERPLATE_MARKER,
    HOLIDAY_COLUMN,
    HOLIDAY_FIRST_ROW,
    HOLIDAY_LAST_ROW,
    OVERTIME_RANGE_CELL,
    REGULAR_HOURS_CELL,
    WEEKEND_RULE_COLUMN,
    WEEKEND_RULE_FIRST_ROW,
    WEEKEND_RULE_LAST_ROW,
)
from app.core.models import DEFAULT_RULES, OvertimeRules
from app.core.types import SKIP, FieldResult, Parsed

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?)")
_OVERTIME_RANGE = re.compile(r"(\d+(?:\.\d+)?)\s*to\s*(\d+(?:\.\d+)?)", re.IGNORECASE)
_AFTER_THRESHOLD = re.compile(r"after\s*(\d+(?:\.\d+)?)", re.IGNORECASE)


class RulesParseError(Exception):
    """The rules document could not be opened as a workbook."""

    pass


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _positive_hours(value: Any) -> FieldResult[float]:
    try:
        hours = float(value)
    except OverflowError:
        return SKIP
    return Parsed(hours) if math.isfinite(hours) and hours > 0 else SKIP


def parse_hours_cell(value: Any) -> FieldResult[float]:
    """Parse a plain hours cell: 8, 8.0 or text starting with a number ("8 hrs")."""
    if isinstance(value, bool):
        return SKIP
    if isinstance(value, (int, float)):
        return _positive_hours(value)

    text = _text(value)
    if text is None:
        return SKIP
    match = _LEADING_NUMBER.match(text)
    if not match:
        return SKIP
    return _positive_hours(match.group(1))


def parse_overtime_range(value: Any) -> FieldResult[float]:
    """Parse "8 to 12" and return the upper bound (where DT starts)."""
    text = _text(value)
    if text is None:
        return SKIP
    match = _OVERTIME_RANGE.search(text)
    if not match:
        return SKIP
    return _positive_hours(match.group(2))


def parse_after_threshold(value: Any) -> FieldResult[float]:
    """Parse "After 12" and return 12."""
    text = _text(value)
    if text is None:
        return SKIP
    match = _AFTER_THRESHOLD.search(text)
    if not match:
        return SKIP
    return _positive_hours(match.group(1))


def parse_holiday_name(value: Any) -> FieldResult[str]:
    """Accept a holiday name cell, skipping blanks and the block heading."""
    text = _text(value)
    if text is None or HOLIDAY_BOILERPLATE_MARKER in text.lower():
        return SKIP
    return Parsed(text)


def parse_overtime_rules(worksheet: Worksheet) -> OvertimeRules:
    """
    Build OvertimeRules from the fixed cell layout of the rules sheet.

    Layout:
        A4: regular hours per day (e.g. 8)
        B4: overtime range (e.g. "8 to 12")
        C4: doubletime threshold (e.g. "After 12"), wins over B4
        A11-A21: stat holiday names
        C26-C27: weekend rule (e.g. "After 40"), first match wins

    Args:
        worksheet: First sheet of the client's ot_rules.xlsx

    Returns:
        Parsed rules, with defaults for every field that did not parse
    """
    values: dict[str, Any] = DEFAULT_RULES.model_dump()

    regular = parse_hours_cell(worksheet[REGULAR_HOURS_CELL].value)
    if isinstance(regular, Parsed):
        values["regular_hours_max"] = regular.value

    overtime_range = parse_overtime_range(worksheet[OVERTIME_RANGE_CELL].value)
    if isinstance(overtime_range, Parsed):
        values["overtime_hours_max"] = overtime_range.value

    doubletime = parse_after_threshold(worksheet[DOUBLETIME_CELL].value)
    if isinstance(doubletime, Parsed):
        values["overtime_hours_max"] = doubletime.value

    holidays: list[str] = []
    for row in range(HOLIDAY_FIRST_ROW, HOLIDAY_LAST_ROW + 1):
        name = parse_holiday_name(worksheet[f"{HOLIDAY_COLUMN}{row}"].value)
        if isinstance(name, Parsed):
            holidays.append(name.value)
    if holidays:
        values["stat_holidays"] = tuple(holidays)

    for row in range(WEEKEND_RULE_FIRST_ROW, WEEKEND_RULE_LAST_ROW + 1):
        weekend = parse_after_threshold(worksheet[f"{WEEKEND_RULE_COLUMN}{row}"].value)
        if isinstance(weekend, Parsed):
            values["weekend_overtime_after_weekly_hours"] = weekend.value
            break

    if values["regular_hours_max"] > values["overtime_hours_max"]:
        logger.warning(
            "Regular hours max %s exceeds overtime hours max %s, using default daily thresholds",
            values["regular_hours_max"],
            values["overtime_hours_max"],
        )
        values["regular_hours_max"] = DEFAULT_RULES.regular_hours_max
        values["overtime_hours_max"] = DEFAULT_RULES.overtime_hours_max

    rules = OvertimeRules(**values)
    logger.info(
        "Parsed OT rules from workbook",
        extra={"extra_fields": {"rules": rules.model_dump(mode="json")}},
    )
    return rules


def parse_overtime_rules_from_bytes(data: bytes) -> OvertimeRules:
    """
    Open an .xlsx document and parse its first sheet.

    Raises:
        RulesParseError: If the bytes are not a readable workbook
    """
    try:
        workbook = load_workbook(BytesIO(data), data_only=True)
    except Exception as e:
        raise RulesParseError(f"Could not open rules workbook: {e}") from e

    try:
        if not workbook.worksheets:
            raise RulesParseError("Rules workbook has no sheets")
        return parse_overtime_rules(workbook.worksheets[0])
    finally:
        workbook.close()
