"""Order sheet publisher: make the bulk order table hold exactly the new lines.

Instead of clearing the table and re-adding everything, existing rows are
matched to the new lines by (item, unit, quantity). Matching rows are kept,
missing lines are created, and leftover rows are deleted. Publishing the same
lines twice therefore writes nothing the second time.

There is no rollback: if the store fails part way, PublishError reports how
many rows were already created and deleted.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from bulkorder.domain.OrderLine import OrderLine
from bulkorder.events.Event_Bus import EventBus
from bulkorder.events.event_helpers import publish_order_published
from bulkorder.infra.Record_Store import RecordStore
from bulkorder.utilities.exceptions import PublishError, RecordStoreError

logger = logging.getLogger(__name__)

__all__ = ["PublishResult", "plan_reconcile", "publish_order_sheet"]


class PublishResult:
    def __init__(self, created: int = 0, deleted: int = 0, kept: int = 0):
        self.created = created
        self.deleted = deleted
        self.kept = kept

    def to_dict(self):
        return {"created": self.created, "deleted": self.deleted, "kept": self.kept}

    def __repr__(self) -> str:
        return f"PublishResult(created={self.created}, deleted={self.deleted}, kept={self.kept})"


def _record_key(fields: dict) -> Optional[Tuple[str, str, int]]:
    """Match key of an existing row, or None when the row does not hold a clean line.

    Values are compared as stored: a quantity of 2.7 or "2" never matches a line of 2.
    """
    item = fields.get("item")
    unit = fields.get("unit")
    # The store omits empty fields, so a missing unit reads as ""
    unit = "" if unit is None else unit
    quantity = fields.get("quantity")
    if not isinstance(item, str) or not isinstance(unit, str) or isinstance(quantity, bool):
        return None
    if isinstance(quantity, float) and quantity.is_integer():
        quantity = int(quantity)
    if not isinstance(quantity, int):
        return None
    return item, unit, quantity


def plan_reconcile(existing: Sequence[Tuple[str, dict]],
                   lines: Sequence[OrderLine]) -> Tuple[List[OrderLine], List[str], int]:
    """Return (lines to create, record ids to delete, number of rows kept)."""
    pool: Dict[Tuple[str, str, int], List[str]] = defaultdict(list)
    for record_id, fields in existing:
        key = _record_key(fields or {})
        if key is not None:
            pool[key].append(record_id)

    to_create: List[OrderLine] = []
    kept_ids = set()
    for line in lines:
        ids = pool.get(line.key())
        if ids:
            kept_ids.add(ids.pop(0))
        else:
            to_create.append(line)

    to_delete = [record_id for record_id, _ in existing if record_id not in kept_ids]
    return to_create, to_delete, len(kept_ids)


def publish_order_sheet(store: RecordStore, table: str, lines: Sequence[OrderLine],
                        bus: Optional[EventBus] = None) -> PublishResult:
    existing = store.get_all_records(table)
    to_create, to_delete, kept = plan_reconcile(existing, lines)
    logger.info(f"Updating {table!r}: {len(to_create)} to create, {len(to_delete)} to delete, {kept} unchanged")

    result = PublishResult(kept=kept)
    try:
        for line in to_create:
            store.create_record(table, line.to_dict())
            result.created += 1
        for record_id in to_delete:
            store.delete_record(table, record_id)
            result.deleted += 1
    except RecordStoreError as e:
        logger.error(f"Bulk order left partially updated: {result.created} created, {result.deleted} deleted")
        raise PublishError(
            f"Publishing to {table!r} stopped part way: {e}",
            details={'table': table, **result.to_dict(),
                     'pending_create': len(to_create) - result.created,
                     'pending_delete': len(to_delete) - result.deleted},
        ) from e

    publish_order_published(table, result.created, result.deleted, result.kept, bus)
    return result
