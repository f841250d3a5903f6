"""IntakeRecord domain entity: one household's request for assistance as read from the store."""
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from bulkorder.utilities.constants import MILLIS_IN_DAY
from bulkorder.utilities.validators import IntakeFieldsInput


class IntakeRecord:
    __slots__ = ("id", "date_created", "household_size", "food_options", "items")

    def __init__(self, record_id: str, date_created: datetime, household_size: int,
                 food_options: Optional[Sequence[str]] = None, items: Any = None):
        object.__setattr__(self, "id", record_id)
        object.__setattr__(self, "date_created", date_created)
        object.__setattr__(self, "household_size", household_size)
        # Stored as a tuple so a fetched record cannot be changed afterwards
        object.__setattr__(self, "food_options", tuple(food_options) if food_options is not None else None)
        object.__setattr__(self, "items", items)

    def __setattr__(self, name, value):
        raise AttributeError(f"IntakeRecord is read-only (cannot set {name!r})")

    def age_days(self, now: datetime) -> float:
        '''Age in days, measured in milliseconds like the intake form timestamps.'''
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        millis = (now - self.date_created).total_seconds() * 1000
        return millis / MILLIS_IN_DAY

    @property
    def has_order(self) -> bool:
        return self.items is not None

    def __str__(self) -> str:
        options = ", ".join(self.food_options) if self.food_options else "-"
        return f"{self.id} - household of {self.household_size} - {self.date_created.isoformat()} - Options: {options}"

    __repr__ = __str__

    @staticmethod
    def from_record(record_id: str, fields: Mapping[str, Any]) -> "IntakeRecord":
        '''Creates an IntakeRecord from raw store fields. Raises pydantic.ValidationError on bad data.'''
        parsed = IntakeFieldsInput.model_validate(dict(fields))
        return IntakeRecord(
            record_id,
            parsed.date_created,
            parsed.household_size,
            parsed.food_options,
            parsed.items,
        )

    def to_dict(self):
        '''Converts the record back to store fields.'''
        return {
            "dateCreated": self.date_created.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
            "householdSize": self.household_size,
            "foodOptions": list(self.food_options) if self.food_options is not None else None,
            "items": self.items,
        }
