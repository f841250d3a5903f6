"""Eligibility filter: which intake records are usable for estimating the bulk order."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from bulkorder.domain.IntakeRecord import IntakeRecord
from bulkorder.utilities.validators import OrderSheetConfig

__all__ = ["is_eligible", "filter_eligible_records"]


def is_eligible(record: IntakeRecord, config: OrderSheetConfig, now: datetime) -> bool:
    """A record qualifies iff it has enough food options, a small enough household,
    no order generated yet, and is recent enough."""
    return (
        record.food_options is not None
        and len(record.food_options) >= config.min_num_items
        and record.household_size <= config.max_household_size
        and record.items is None
        and record.age_days(now) <= config.max_age_days
    )


def filter_eligible_records(records: Iterable[IntakeRecord], config: OrderSheetConfig,
                            now: Optional[datetime] = None) -> List[IntakeRecord]:
    """Return eligible records in input order. `now` defaults to the current UTC time."""
    now = now or datetime.now(timezone.utc)
    return [r for r in records if is_eligible(r, config, now)]
