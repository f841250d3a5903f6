"""Order sheet run: intake sample -> item demand -> scaled order lines -> bulk order table.

Provides generate_order_sheet(store, config, now=None, bus=None, dry_run=False).
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional

from bulkorder.domain.OrderLine import OrderLine
from bulkorder.events.Event_Bus import EventBus
from bulkorder.infra.Order_Repository import reading_intake_records, reading_item_profiles
from bulkorder.infra.Record_Store import RecordStore
from bulkorder.logic.ordering.publisher import PublishResult, publish_order_sheet
from bulkorder.logic.ordering.scaling import round_half_away_from_zero, scale_item_demand
from bulkorder.logic.ordering.sheet_builder import build_order_sheet
from bulkorder.logic.sampling.aggregation import SampleSummary, compute_item_demand, summarize_sample
from bulkorder.logic.sampling.eligibility import filter_eligible_records
from bulkorder.utilities.validators import OrderSheetConfig

logger = logging.getLogger(__name__)

__all__ = ["OrderSheetResult", "generate_order_sheet"]


class OrderSheetResult:
    def __init__(self, summary: SampleSummary, lines: List[OrderLine], missing_units: List[str],
                 published: Optional[PublishResult] = None):
        self.summary = summary
        self.lines = lines
        self.missing_units = missing_units
        self.published = published

    def to_dict(self):
        return {
            "summary": self.summary.to_dict(),
            "lines": [line.to_dict() for line in self.lines],
            "missing_units": list(self.missing_units),
            "published": self.published.to_dict() if self.published else None,
        }


def generate_order_sheet(store: RecordStore, config: OrderSheetConfig, *,
                         now: Optional[datetime] = None, bus: Optional[EventBus] = None,
                         dry_run: bool = False) -> OrderSheetResult:
    """Estimate the bulk order from recent intake records and write it to the bulk order table.

    Args:
        store: record store holding the intake, item profile and bulk order tables.
        config: run parameters.
        now: reference time for record age (defaults to current UTC time).
        bus: event bus for missing-unit / published events (defaults to the global bus).
        dry_run: compute the lines but leave the bulk order table untouched.

    Raises:
        NoEligibleSamplesError: no intake record qualifies; nothing is written.
        RecordStoreError / PublishError: the store failed; see the error details.
    """
    logger.info("Generating the order sheet...")
    intake = reading_intake_records(store, config.intake_table)
    sample = filter_eligible_records(intake, config, now)
    logger.info(f"Found {len(sample)} records to use for estimating orders.")

    summary = summarize_sample(sample)
    avg = summary.avg_household_size
    logger.info(f"The average household size is {round_half_away_from_zero(avg)}")
    logger.info(
        f"Generating an order for {config.num_households} households "
        f"(with approximately {round_half_away_from_zero(config.num_households * avg)} people)"
    )

    profiles = reading_item_profiles(store, config.items_by_household_size_table)
    demand = compute_item_demand(sample, profiles)
    item_quantities = scale_item_demand(demand, summary.sample_count, config)
    lines = build_order_sheet(item_quantities, profiles, bus)
    missing_units = [item for item, _ in item_quantities if item not in profiles]

    result = OrderSheetResult(summary, lines, missing_units)
    if dry_run:
        logger.info(f"Dry run: {len(lines)} order lines computed, {config.bulk_order_table!r} left unchanged")
        return result

    # Clear out the old bulk order and add in the new one
    result.published = publish_order_sheet(store, config.bulk_order_table, lines, bus)
    logger.info(f"Wrote {len(lines)} order lines to {config.bulk_order_table!r}")
    return result
