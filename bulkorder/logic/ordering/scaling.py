"""Order scaler: project sample demand onto the households we buy for, plus a buffer."""
from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Mapping, Tuple

from bulkorder.utilities.exceptions import NoEligibleSamplesError
from bulkorder.utilities.validators import OrderSheetConfig

__all__ = ["round_half_away_from_zero", "adjust_order_size", "scale_item_demand"]


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, .5 going away from zero (2.5 -> 3, -2.5 -> -3)."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value: {value}")
    # Go through the shortest repr so the value is rounded as it prints
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def adjust_order_size(num_requested: float, sample_count: int, config: OrderSheetConfig) -> int:
    if sample_count <= 0:
        raise NoEligibleSamplesError(details={'sample_count': sample_count})
    # - Adjust the samples requested with the number of households we are purchasing for
    scaled = num_requested * (config.num_households / sample_count)
    # - Add a buffer so we don't under order
    buffered = scaled * (1 + config.buffer_ratio)
    # - Round once, at the end
    return round_half_away_from_zero(buffered)


def scale_item_demand(demand: Mapping[str, float], sample_count: int,
                      config: OrderSheetConfig) -> List[Tuple[str, int]]:
    """(item, order quantity) pairs in demand order."""
    if sample_count <= 0:
        raise NoEligibleSamplesError(details={'sample_count': sample_count})
    return [(item, adjust_order_size(n, sample_count, config)) for item, n in demand.items()]
