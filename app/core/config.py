# app/core/config.py

import os
from pathlib import Path
from typing import Final


# ==========================
# Environment
# ==========================

#: True when running in production. Drives log format, CORS and Sentry.
IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

#: Root directory of the document store holding client configuration.
#: Mirrors the document library where "Umbrella Report Config" lives.
CONFIG_ROOT: Final[Path] = Path(os.getenv("CONFIG_ROOT", "data"))

#: Directory for rotating log files.
LOG_DIR: Final[Path] = Path(os.getenv("LOG_DIR", "logs"))


# ==========================
# Client overtime rules
# ==========================

#: How long loaded client rules stay in the cache, in seconds.
#: 300 = five minutes.
RULES_CACHE_TTL_SECONDS: Final[float] = float(os.getenv("RULES_CACHE_TTL_SECONDS", "300"))

#: Path (relative to the document store) of a client's rules workbook.
OT_RULES_PATH_TEMPLATE: Final[str] = "Umbrella Report Config/{client_name}/ot_rules.xlsx"

#: Source reported when the built-in rules are used.
RULES_SOURCE_DEFAULT: Final[str] = "default"

#: Source reported when rules were served from the cache.
RULES_SOURCE_CACHE: Final[str] = "cache"


# ==========================
# Rules workbook layout
# ==========================

#: Cell holding the daily regular-hours maximum (e.g. 8).
REGULAR_HOURS_CELL: Final[str] = "A4"

#: Cell holding the overtime range, e.g. "8 to 12".
OVERTIME_RANGE_CELL: Final[str] = "B4"

#: Cell holding the doubletime threshold, e.g. "After 12". Wins over the range.
DOUBLETIME_CELL: Final[str] = "C4"

#: Column and (inclusive) rows listing stat holidays by name.
HOLIDAY_COLUMN: Final[str] = "A"
HOLIDAY_FIRST_ROW: Final[int] = 11
HOLIDAY_LAST_ROW: Final[int] = 21

#: Heading text that may appear inside the holiday block and is skipped.
HOLIDAY_BOILERPLATE_MARKER: Final[str] = "stat rules"

#: Column and rows holding the weekend rule, e.g. "After 40".
WEEKEND_RULE_COLUMN: Final[str] = "C"
WEEKEND_RULE_FIRST_ROW: Final[int] = 26
WEEKEND_RULE_LAST_ROW: Final[int] = 27


# ==========================
# Dates
# ==========================

#: ISO format for date strings in the API.
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"

#: Year range accepted by the holiday endpoints.
#: The Easter computation is only defined for the Gregorian calendar (1583+).
MIN_SUPPORTED_YEAR: Final[int] = 1583
MAX_SUPPORTED_YEAR: Final[int] = 9999


# ==========================
# HTTP
# ==========================

#: Allowed CORS origins in production, comma separated.
CORS_ORIGINS: Final[list[str]] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()
]

#: Service name and version reported by /health and Sentry.
SERVICE_NAME: Final[str] = "umbrella-hours"
SERVICE_VERSION: Final[str] = "0.3.0"
