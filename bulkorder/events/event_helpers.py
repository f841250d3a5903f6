"""Event helper utilities.

Helpers for publishing order sheet events, by default on the global event bus.

Quick import:
    from bulkorder.events.event_helpers import publish_missing_unit, publish_order_published
"""
from __future__ import annotations
from typing import Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    ORDER_SHEET_MISSING_UNIT, ORDER_SHEET_PUBLISHED
)

__all__ = [
    'publish_missing_unit', 'publish_order_published',
    'ORDER_SHEET_MISSING_UNIT', 'ORDER_SHEET_PUBLISHED'
]


def publish_missing_unit(item: str, quantity: int, bus: Optional[EventBus] = None):
    """Publish an order_sheet.missing_unit event."""
    (bus or GLOBAL_EVENT_BUS).publish(ORDER_SHEET_MISSING_UNIT, {
        'item': item,
        'quantity': quantity
    })


def publish_order_published(table: str, created: int, deleted: int, kept: int,
                            bus: Optional[EventBus] = None):
    """Publish an order_sheet.published event once the bulk order table matches the new lines."""
    (bus or GLOBAL_EVENT_BUS).publish(ORDER_SHEET_PUBLISHED, {
        'table': table,
        'created': created,
        'deleted': deleted,
        'kept': kept
    })
