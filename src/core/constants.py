"""Core constants used across SLCSP modules.

This module centralizes file names, column names, and money formatting.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_PLANS_FILE_NAME = "plans.csv"
DEFAULT_ZIPS_FILE_NAME = "zips.csv"
DEFAULT_TARGETS_FILE_NAME = "slcsp.csv"
TABLE_DELIMITER = ","
TABLE_LINE_TERMINATOR = "\n"
TABLE_ENCODING = "utf-8"
SILVER_METAL_LEVEL = "Silver"
RATE_DECIMAL_PLACES = 2
PLAN_STATE_COLUMN = "state"
PLAN_RATE_AREA_COLUMN = "rate_area"
PLAN_METAL_LEVEL_COLUMN = "metal_level"
PLAN_RATE_COLUMN = "rate"
ZIP_ZIPCODE_COLUMN = "zipcode"
ZIP_STATE_COLUMN = "state"
ZIP_RATE_AREA_COLUMN = "rate_area"
TARGET_ZIPCODE_COLUMN = "zipcode"
TARGET_RATE_COLUMN = "rate"
PLAN_REQUIRED_COLUMNS = (
    PLAN_STATE_COLUMN,
    PLAN_RATE_AREA_COLUMN,
    PLAN_METAL_LEVEL_COLUMN,
    PLAN_RATE_COLUMN,
)
ZIP_REQUIRED_COLUMNS = (ZIP_ZIPCODE_COLUMN, ZIP_STATE_COLUMN, ZIP_RATE_AREA_COLUMN)
TARGET_REQUIRED_COLUMNS = (TARGET_ZIPCODE_COLUMN, TARGET_RATE_COLUMN)
RUN_SPEC_VERSION = 1
