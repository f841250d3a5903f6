"""Order sheet builder: attach packaging units to the scaled quantities."""
from __future__ import annotations
import logging
from typing import Iterable, List, Mapping, Optional, Tuple

from bulkorder.domain.ItemProfile import ItemProfile
from bulkorder.domain.OrderLine import OrderLine
from bulkorder.events.Event_Bus import EventBus
from bulkorder.events.event_helpers import publish_missing_unit
from bulkorder.utilities.constants import MISSING_UNIT

logger = logging.getLogger(__name__)

__all__ = ["build_order_sheet"]


def build_order_sheet(item_quantities: Iterable[Tuple[str, int]],
                      profiles: Mapping[str, ItemProfile],
                      bus: Optional[EventBus] = None) -> List[OrderLine]:
    """One OrderLine per (item, quantity); items without a profile get the unit '?'."""
    lines: List[OrderLine] = []
    for item, quantity in item_quantities:
        profile = profiles.get(item)
        if profile is None:
            logger.warning(f"No unit found for {item!r}; using {MISSING_UNIT!r}")
            publish_missing_unit(item, quantity, bus)
            unit = MISSING_UNIT
        else:
            unit = profile.unit
        lines.append(OrderLine(item, unit, quantity))
    return lines
