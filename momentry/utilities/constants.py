from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Grid layout: 7 honeycomb rows alternating 7 and 8 circles -> 52 slots
SLOTS_PER_YEAR: Final[int] = 52
GRID_ROWS: Final[int] = 7
ROW_WIDTHS: Final[tuple[int, int]] = (7, 8)

# Persisted state layout
YEAR_KEY_PREFIX: Final[str] = "momentryData_"
LEGACY_DATA_KEY: Final[str] = "momentryData"
BIRTH_DATE_KEY: Final[str] = "userBirthDate"
SCHEMA_VERSION: Final[int] = 2

DAYS_PER_YEAR: Final[float] = 365.25
GOAL_LOOKAHEAD_YEARS: Final[int] = 5
MAX_GOALS: Final[int] = 5
