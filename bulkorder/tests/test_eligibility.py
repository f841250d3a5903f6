import unittest
from datetime import datetime, timedelta, timezone

from bulkorder.domain.IntakeRecord import IntakeRecord
from bulkorder.logic.sampling.eligibility import filter_eligible_records, is_eligible
from bulkorder.utilities.validators import OrderSheetConfig

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
FIVE_ITEMS = ["rice", "beans", "oil", "milk", "eggs"]


def _record(record_id="rec1", age=timedelta(days=1), household_size=2, food_options=FIVE_ITEMS, items=None):
    return IntakeRecord(record_id, NOW - age, household_size, food_options, items)


class TestEligibility(unittest.TestCase):

    def setUp(self):
        self.config = OrderSheetConfig()

    def test_record_meeting_all_conditions_is_included(self):
        self.assertTrue(is_eligible(_record(), self.config, NOW))

    def test_household_size_boundary(self):
        self.assertTrue(is_eligible(_record(household_size=4), self.config, NOW))
        self.assertFalse(is_eligible(_record(household_size=5), self.config, NOW))

    def test_age_boundary(self):
        self.assertTrue(is_eligible(_record(age=timedelta(days=21)), self.config, NOW))
        self.assertFalse(is_eligible(_record(age=timedelta(days=21, seconds=1)), self.config, NOW))

    def test_food_options_boundary(self):
        self.assertTrue(is_eligible(_record(food_options=FIVE_ITEMS), self.config, NOW))
        self.assertFalse(is_eligible(_record(food_options=FIVE_ITEMS[:4]), self.config, NOW))

    def test_missing_food_options_excluded(self):
        self.assertFalse(is_eligible(_record(food_options=None), self.config, NOW))

    def test_record_with_generated_order_excluded(self):
        self.assertFalse(is_eligible(_record(items=["recOrder1"]), self.config, NOW))

    def test_custom_config_thresholds(self):
        config = OrderSheetConfig(max_household_size=6, max_age_days=7, min_num_items=2)
        self.assertTrue(is_eligible(_record(household_size=6, food_options=["rice", "oil"]), config, NOW))
        self.assertFalse(is_eligible(_record(age=timedelta(days=8)), config, NOW))

    def test_filter_keeps_input_order(self):
        records = [
            _record("a"),
            _record("b", household_size=9),
            _record("c", age=timedelta(days=2)),
            _record("d", items="recOrder"),
        ]
        eligible = filter_eligible_records(records, self.config, NOW)
        self.assertEqual([r.id for r in eligible], ["a", "c"])

    def test_filter_defaults_to_current_time(self):
        fresh = IntakeRecord("x", datetime.now(timezone.utc) - timedelta(hours=1), 3, FIVE_ITEMS)
        stale = IntakeRecord("y", datetime.now(timezone.utc) - timedelta(days=30), 3, FIVE_ITEMS)
        eligible = filter_eligible_records([fresh, stale], self.config)
        self.assertEqual([r.id for r in eligible], ["x"])

    def test_empty_input(self):
        self.assertEqual(filter_eligible_records([], self.config, NOW), [])

    def test_naive_now_is_treated_as_utc(self):
        naive_now = NOW.replace(tzinfo=None)
        self.assertTrue(is_eligible(_record(age=timedelta(days=21)), self.config, naive_now))
        self.assertFalse(is_eligible(_record(age=timedelta(days=22)), self.config, naive_now))
        self.assertEqual(len(filter_eligible_records([_record()], self.config, naive_now)), 1)
