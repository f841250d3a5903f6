"""Sample aggregation: household statistics and per-item request totals."""
from __future__ import annotations
import logging
from typing import Dict, Mapping, Optional, Sequence

from bulkorder.domain.IntakeRecord import IntakeRecord
from bulkorder.domain.ItemProfile import ItemProfile
from bulkorder.utilities.exceptions import NoEligibleSamplesError

logger = logging.getLogger(__name__)

__all__ = ["SampleSummary", "summarize_sample", "compute_item_demand"]


class SampleSummary:
    def __init__(self, sample_count: int, sampled_num_people: int):
        self.sample_count = sample_count
        self.sampled_num_people = sampled_num_people

    @property
    def avg_household_size(self) -> float:
        return self.sampled_num_people / self.sample_count

    def to_dict(self):
        return {
            "sample_count": self.sample_count,
            "sampled_num_people": self.sampled_num_people,
            "avg_household_size": self.avg_household_size,
        }

    def __repr__(self) -> str:
        return f"SampleSummary(sample_count={self.sample_count}, sampled_num_people={self.sampled_num_people})"


def summarize_sample(records: Sequence[IntakeRecord]) -> SampleSummary:
    """Count the sample and its people. Raises NoEligibleSamplesError for an empty sample."""
    if not records:
        raise NoEligibleSamplesError()
    return SampleSummary(len(records), sum(r.household_size for r in records))


def compute_item_demand(records: Sequence[IntakeRecord],
                        profiles: Optional[Mapping[str, ItemProfile]] = None) -> Dict[str, int]:
    """Total requested units per item across the sample.

    Each occurrence of an item in a record's food options counts once, unless the
    item's profile has a quantity for that record's household size, in which case
    that quantity is counted. Items keep the order in which they first appear.
    """
    profiles = profiles or {}
    demand: Dict[str, int] = {}
    for record in records:
        for raw in record.food_options or ():
            item = (raw or '').strip()
            if not item:
                continue
            profile = profiles.get(item)
            per_request = profile.quantity_for(record.household_size) if profile else None
            demand[item] = demand.get(item, 0) + (1 if per_request is None else per_request)
    logger.debug(f"Aggregated {len(demand)} distinct items from {len(records)} records")
    return demand
