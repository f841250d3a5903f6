import unittest
from collections import Counter

from bulkorder.domain.OrderLine import OrderLine
from bulkorder.events.Event_Bus import EventBus, ORDER_SHEET_PUBLISHED
from bulkorder.infra.Record_Store import MemoryRecordStore
from bulkorder.logic.ordering.publisher import plan_reconcile, publish_order_sheet
from bulkorder.utilities.exceptions import PublishError, RecordStoreError

TABLE = "Bulk Order"


class FailingCreateStore(MemoryRecordStore):
    """Fails on the n-th create call."""

    def __init__(self, fail_on: int, tables=None):
        super().__init__(tables)
        self.fail_on = fail_on
        self.calls = 0

    def create_record(self, table, fields):
        self.calls += 1
        if self.calls == self.fail_on:
            raise RecordStoreError("connection reset")
        return super().create_record(table, fields)


def _contents(store):
    return Counter(OrderLine.from_fields(fields).key() for _, fields in store.get_all_records(TABLE))


class TestPublishOrderSheet(unittest.TestCase):

    def setUp(self):
        self.lines = [OrderLine("rice", "lb", 220), OrderLine("oil", "bottle", 22)]
        self.bus = EventBus()
        self.events = []
        self.bus.subscribe(ORDER_SHEET_PUBLISHED, lambda name, payload: self.events.append(payload))

    def test_empty_table_gets_all_lines(self):
        store = MemoryRecordStore()
        result = publish_order_sheet(store, TABLE, self.lines, self.bus)
        self.assertEqual(result.to_dict(), {"created": 2, "deleted": 0, "kept": 0})
        self.assertEqual(_contents(store), Counter(line.key() for line in self.lines))

    def test_stale_rows_replaced(self):
        store = MemoryRecordStore({TABLE: [
            {"item": "rice", "unit": "lb", "quantity": 200},
            {"item": "flour", "unit": "bag", "quantity": 5},
            {"item": "oil", "unit": "bottle", "quantity": 22},
        ]})
        result = publish_order_sheet(store, TABLE, self.lines, self.bus)
        self.assertEqual(result.to_dict(), {"created": 1, "deleted": 2, "kept": 1})
        self.assertEqual(_contents(store), Counter(line.key() for line in self.lines))

    def test_publishing_twice_is_idempotent(self):
        store = MemoryRecordStore({TABLE: [{"item": "beans", "unit": "can", "quantity": 4}]})
        publish_order_sheet(store, TABLE, self.lines, self.bus)
        first = _contents(store)
        store.operations.clear()
        result = publish_order_sheet(store, TABLE, self.lines, self.bus)
        self.assertEqual(_contents(store), first)
        self.assertEqual(result.to_dict(), {"created": 0, "deleted": 0, "kept": 2})
        self.assertEqual(store.operations, [])

    def test_duplicate_lines_are_matched_as_multiset(self):
        store = MemoryRecordStore({TABLE: [{"item": "rice", "unit": "lb", "quantity": 1}]})
        lines = [OrderLine("rice", "lb", 1), OrderLine("rice", "lb", 1)]
        result = publish_order_sheet(store, TABLE, lines, self.bus)
        self.assertEqual(result.to_dict(), {"created": 1, "deleted": 0, "kept": 1})
        self.assertEqual(_contents(store)[("rice", "lb", 1)], 2)

    def test_empty_lines_clear_the_table(self):
        store = MemoryRecordStore({TABLE: [{"item": "rice", "unit": "lb", "quantity": 1}]})
        result = publish_order_sheet(store, TABLE, [], self.bus)
        self.assertEqual(result.deleted, 1)
        self.assertEqual(store.get_all_records(TABLE), [])

    def test_published_event(self):
        publish_order_sheet(MemoryRecordStore(), TABLE, self.lines, self.bus)
        self.assertEqual(self.events, [{"table": TABLE, "created": 2, "deleted": 0, "kept": 0}])

    def test_fractional_quantity_row_is_replaced(self):
        store = MemoryRecordStore({TABLE: [{"item": "rice", "unit": "lb", "quantity": 2.7}]})
        result = publish_order_sheet(store, TABLE, [OrderLine("rice", "lb", 2)], self.bus)
        self.assertEqual(result.to_dict(), {"created": 1, "deleted": 1, "kept": 0})
        self.assertEqual([fields for _, fields in store.get_all_records(TABLE)],
                         [{"item": "rice", "unit": "lb", "quantity": 2}])

    def test_failure_part_way_reports_progress(self):
        store = FailingCreateStore(fail_on=2, tables={TABLE: [{"item": "flour", "unit": "bag", "quantity": 5}]})
        with self.assertRaises(PublishError) as ctx:
            publish_order_sheet(store, TABLE, self.lines, self.bus)
        details = ctx.exception.details
        self.assertEqual(details["created"], 1)
        self.assertEqual(details["deleted"], 0)
        self.assertEqual(details["pending_create"], 1)
        self.assertEqual(details["pending_delete"], 1)
        self.assertIsInstance(ctx.exception, RecordStoreError)
        # The old row is still there; nothing was deleted before the failure
        self.assertIn(("flour", "bag", 5), _contents(store))
        self.assertEqual(self.events, [])


class TestPlanReconcile(unittest.TestCase):

    def test_plan(self):
        existing = [
            ("rec1", {"item": "rice", "unit": "lb", "quantity": 220}),
            ("rec2", {"item": "rice", "unit": "lb", "quantity": 200}),
        ]
        to_create, to_delete, kept = plan_reconcile(existing, [OrderLine("rice", "lb", 220), OrderLine("oil", "?", 3)])
        self.assertEqual(to_create, [OrderLine("oil", "?", 3)])
        self.assertEqual(to_delete, ["rec2"])
        self.assertEqual(kept, 1)

    def test_whole_float_quantity_matches(self):
        existing = [("rec1", {"item": "rice", "unit": "lb", "quantity": 220.0})]
        to_create, to_delete, kept = plan_reconcile(existing, [OrderLine("rice", "lb", 220)])
        self.assertEqual((to_create, to_delete, kept), ([], [], 1))

    def test_missing_unit_field_matches_empty_unit(self):
        existing = [("rec1", {"item": "rice", "quantity": 3})]
        to_create, to_delete, kept = plan_reconcile(existing, [OrderLine("rice", "", 3)])
        self.assertEqual((to_create, to_delete, kept), ([], [], 1))

    def test_rows_that_only_match_after_coercion_are_stale(self):
        existing = [
            ("rec1", {"item": "rice", "unit": "lb", "quantity": 2.7}),
            ("rec2", {"item": "rice", "unit": "lb", "quantity": "2"}),
            ("rec3", {"item": "rice", "unit": "lb", "quantity": "abc"}),
            ("rec4", {"unit": "lb", "quantity": 2}),
        ]
        to_create, to_delete, kept = plan_reconcile(existing, [OrderLine("rice", "lb", 2)])
        self.assertEqual(to_create, [OrderLine("rice", "lb", 2)])
        self.assertEqual(to_delete, ["rec1", "rec2", "rec3", "rec4"])
        self.assertEqual(kept, 0)
