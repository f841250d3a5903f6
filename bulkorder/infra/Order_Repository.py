"""Typed reads over the record store tables (intake, item profiles, bulk order)."""
import logging
from typing import Dict, List

from pydantic import ValidationError

from bulkorder.domain.IntakeRecord import IntakeRecord
from bulkorder.domain.ItemProfile import ItemProfile
from bulkorder.domain.OrderLine import OrderLine
from bulkorder.infra.Record_Store import JsonRecordStore, RecordStore
from bulkorder.utilities.config import get_airtable_settings, get_data_dir, get_record_store_backend

logger = logging.getLogger(__name__)


def _describe(e: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())


def reading_intake_records(store: RecordStore, table: str) -> List[IntakeRecord]:
    """Load intake records, skipping rows that fail validation (they can never be sampled)."""
    records: List[IntakeRecord] = []
    for record_id, fields in store.get_all_records(table):
        try:
            records.append(IntakeRecord.from_record(record_id, fields))
        except ValidationError as e:
            logger.warning(f"Skipping intake record {record_id}: {_describe(e)}")
    return records


def reading_item_profiles(store: RecordStore, table: str) -> Dict[str, ItemProfile]:
    """Load item profiles keyed by item; a later row for the same item replaces an earlier one."""
    profiles: Dict[str, ItemProfile] = {}
    for record_id, fields in store.get_all_records(table):
        try:
            profile = ItemProfile.from_fields(fields)
        except ValidationError as e:
            logger.warning(f"Skipping item profile {record_id}: {_describe(e)}")
            continue
        profiles[profile.item] = profile
    return profiles


def reading_order_lines(store: RecordStore, table: str) -> List[OrderLine]:
    lines = [OrderLine.from_fields(fields) for _, fields in store.get_all_records(table)]
    lines.sort(key=lambda line: line.item.lower())
    return lines


def build_record_store() -> RecordStore:
    """Create the record store selected by RECORD_STORE (json or airtable)."""
    backend = get_record_store_backend()
    if backend == 'airtable':
        from bulkorder.infra.Airtable_Store import AirtableRecordStore
        api_key, base_id, api_url = get_airtable_settings()
        return AirtableRecordStore(api_key, base_id, api_url)
    return JsonRecordStore(get_data_dir())


__all__ = ['reading_intake_records', 'reading_item_profiles', 'reading_order_lines', 'build_record_store']
