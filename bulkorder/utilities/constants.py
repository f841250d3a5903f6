from typing import Final

# Intake sampling
MAX_HOUSEHOLD_SIZE: Final[int] = 4
MAX_AGE_DAYS: Final[int] = 21
MIN_NUM_ITEMS: Final[int] = 5

# The number of households we are bulk purchasing for
NUM_HOUSEHOLDS: Final[int] = 40
# How much extra to order just in case
BUFFER_RATIO: Final[float] = 0.1

MILLIS_IN_DAY: Final[int] = 1000 * 60 * 60 * 24
MISSING_UNIT: Final[str] = "?"

# Table names in the record store
INTAKE_TABLE: Final[str] = "Intake"
ITEMS_BY_HOUSEHOLD_SIZE_TABLE: Final[str] = "Items by Household Size"
BULK_ORDER_TABLE: Final[str] = "Bulk Order"

RECORD_STORE_BACKENDS: Final[tuple[str, ...]] = ("json", "airtable")
AIRTABLE_API_URL: Final[str] = "https://api.airtable.com/v0"
AIRTABLE_PAGE_SIZE: Final[int] = 100
