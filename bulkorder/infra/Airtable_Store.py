"""Record store backed by the Airtable REST API."""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from bulkorder.infra.Record_Store import Record, RecordStore
from bulkorder.utilities.constants import AIRTABLE_API_URL, AIRTABLE_PAGE_SIZE
from bulkorder.utilities.exceptions import RecordStoreError

logger = logging.getLogger(__name__)


class AirtableRecordStore(RecordStore):
    def __init__(self, api_key: str, base_id: str, api_url: str = AIRTABLE_API_URL,
                 timeout: float = 30.0, transport: Optional[httpx.BaseTransport] = None):
        self.base_id = base_id
        self._client = httpx.Client(
            base_url=f"{api_url.rstrip('/')}/{base_id}",
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    @staticmethod
    def _table_url(table: str, record_id: str = None) -> str:
        url = "/" + quote(table, safe="")
        if record_id:
            url += "/" + quote(record_id, safe="")
        return url

    def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RecordStoreError(
                f"Airtable {method} {url} failed with status {e.response.status_code}",
                details={'status': e.response.status_code, 'body': e.response.text[:500]},
            ) from e
        except httpx.HTTPError as e:
            raise RecordStoreError(f"Airtable {method} {url} failed: {e}") from e
        try:
            return response.json() if response.content else {}
        except ValueError as e:
            raise RecordStoreError(f"Airtable {method} {url} returned invalid JSON") from e

    def get_all_records(self, table: str) -> List[Record]:
        records: List[Record] = []
        params: Dict[str, Any] = {"pageSize": AIRTABLE_PAGE_SIZE}
        while True:
            page = self._request("GET", self._table_url(table), params=params)
            for rec in page.get("records", []):
                records.append((rec["id"], dict(rec.get("fields") or {})))
            offset = page.get("offset")
            if not offset:
                break
            params = {"pageSize": AIRTABLE_PAGE_SIZE, "offset": offset}
        logger.debug(f"Fetched {len(records)} records from {table!r}")
        return records

    def create_record(self, table: str, fields: Dict[str, Any]) -> Record:
        created = self._request("POST", self._table_url(table), json={"fields": fields})
        return created["id"], dict(created.get("fields") or {})

    def delete_record(self, table: str, record_id: str) -> None:
        self._request("DELETE", self._table_url(table, record_id))
