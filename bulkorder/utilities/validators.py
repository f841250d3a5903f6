"""
Input validation schemas using Pydantic for record store fields and run settings.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bulkorder.utilities import constants


class IntakeFieldsInput(BaseModel):
    """Schema for the fields of one intake record as stored."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    date_created: datetime = Field(..., alias="dateCreated")
    household_size: int = Field(..., alias="householdSize", ge=1)
    food_options: Optional[List[str]] = Field(None, alias="foodOptions")
    items: Optional[Any] = None

    @field_validator('date_created')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator('food_options', mode='before')
    @classmethod
    def normalize_food_options(cls, v):
        """Empty selections are stored as missing fields, so map them to None."""
        if v is None:
            return None
        if isinstance(v, str):
            return [v]
        if isinstance(v, (list, tuple)):
            return list(v) or None
        # Anything else is left for the List[str] check to reject
        return v

    @field_validator('items', mode='before')
    @classmethod
    def normalize_items(cls, v):
        if v in ("", [], ()):
            return None
        return v


class ItemProfileInput(BaseModel):
    """Schema for a row of the items-by-household-size table.

    Columns named after a household size ("1", "2", ...) hold the number of
    units one request of the item stands for at that size.
    """
    model_config = ConfigDict(extra="ignore")

    item: str = Field(..., min_length=1)
    unit: str = ""
    quantities: Dict[int, int] = Field(default_factory=dict)

    @model_validator(mode='before')
    @classmethod
    def collect_size_columns(cls, data):
        if not isinstance(data, dict):
            return data
        d = dict(data)
        quantities = dict(d.get('quantities') or {})
        for key, value in data.items():
            if isinstance(key, str) and key.strip().isdigit() and value not in (None, ""):
                quantities[int(key.strip())] = value
        d['quantities'] = quantities
        return d

    @field_validator('item', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('quantities')
    @classmethod
    def validate_quantities(cls, v):
        """Ensure per-size quantities are not negative."""
        for size, qty in v.items():
            if qty < 0:
                raise ValueError(f'Quantity for household size {size} cannot be negative')
        return v


class OrderSheetConfig(BaseModel):
    """Run parameters for one order sheet estimation."""
    model_config = ConfigDict(frozen=True)

    max_household_size: int = Field(constants.MAX_HOUSEHOLD_SIZE, ge=1)
    max_age_days: float = Field(constants.MAX_AGE_DAYS, ge=0)
    min_num_items: int = Field(constants.MIN_NUM_ITEMS, ge=0)
    num_households: int = Field(constants.NUM_HOUSEHOLDS, ge=0)
    buffer_ratio: float = Field(constants.BUFFER_RATIO, ge=0)
    intake_table: str = Field(constants.INTAKE_TABLE, min_length=1)
    items_by_household_size_table: str = Field(constants.ITEMS_BY_HOUSEHOLD_SIZE_TABLE, min_length=1)
    bulk_order_table: str = Field(constants.BULK_ORDER_TABLE, min_length=1)


class GenerateRequest(BaseModel):
    """Body of POST /api/bulk-order/generate."""
    dry_run: bool = False
