"""Record store contract and the in-memory / JSON file implementations.

A record is an (id, fields) pair; fields is a plain dict of column -> value.
Tables are addressed by name.
"""
import json
import logging
import os
import shutil
import tempfile
from collections import defaultdict
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Tuple
from uuid import uuid4

from bulkorder.infra.paths import table_file_name
from bulkorder.utilities.exceptions import RecordStoreError

logger = logging.getLogger(__name__)

Record = Tuple[str, Dict[str, Any]]


class RecordStore:
    """Generic key-value record store accessed by table name."""

    def get_all_records(self, table: str) -> List[Record]:
        raise NotImplementedError

    def create_record(self, table: str, fields: Dict[str, Any]) -> Record:
        raise NotImplementedError

    def delete_record(self, table: str, record_id: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release connections held by the store; nothing to do for local stores."""


class MemoryRecordStore(RecordStore):
    """Keeps tables in process memory. Every write is appended to `operations`."""

    def __init__(self, tables: Dict[str, List[Dict[str, Any]]] = None):
        self._tables: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self._next_id = 1
        self.operations: List[Tuple[str, str, str]] = []
        for table, rows in (tables or {}).items():
            for fields in rows:
                self._insert(table, fields)
        self.operations.clear()

    def _insert(self, table: str, fields: Dict[str, Any]) -> Record:
        record_id = f"rec{self._next_id:08d}"
        self._next_id += 1
        self._tables[table][record_id] = deepcopy(dict(fields))
        return record_id, deepcopy(self._tables[table][record_id])

    def get_all_records(self, table: str) -> List[Record]:
        return [(rid, deepcopy(fields)) for rid, fields in self._tables.get(table, {}).items()]

    def create_record(self, table: str, fields: Dict[str, Any]) -> Record:
        record = self._insert(table, fields)
        self.operations.append(("create", table, record[0]))
        return record

    def delete_record(self, table: str, record_id: str) -> None:
        try:
            del self._tables[table][record_id]
        except KeyError:
            raise RecordStoreError(
                f"Record {record_id} not found in table {table!r}",
                details={'table': table, 'id': record_id},
            ) from None
        self.operations.append(("delete", table, record_id))


class JsonRecordStore(RecordStore):
    """One JSON file per table under data_dir: a list of {"id", "fields"} objects.

    Missing files read as empty tables. Writes go through a temp file and a move
    so a table file is never left half-written.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _path(self, table: str) -> Path:
        return self.data_dir / table_file_name(table)

    def _load(self, table: str) -> List[Dict[str, Any]]:
        path = self._path(table)
        if not path.exists():
            return []
        try:
            with open(path, 'r', encoding='utf-8') as f:
                rows = json.load(f) or []
        except (OSError, json.JSONDecodeError) as e:
            raise RecordStoreError(f"Cannot read table {table!r}: {e}", details={'path': str(path)}) from e
        if not isinstance(rows, list):
            raise RecordStoreError(f"Table file for {table!r} is not a list", details={'path': str(path)})
        return rows

    def _atomic_write(self, table: str, rows: List[Dict[str, Any]]) -> None:
        path = self._path(table)
        tmp_path = None
        try:
            os.makedirs(path.parent, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(rows, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, path)
        except OSError as e:
            raise RecordStoreError(f"Cannot write table {table!r}: {e}", details={'path': str(path)}) from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get_all_records(self, table: str) -> List[Record]:
        records = []
        for row in self._load(table):
            if not isinstance(row, dict) or 'id' not in row:
                logger.warning(f"Skipping malformed row in {table!r}: {row!r}")
                continue
            records.append((str(row['id']), dict(row.get('fields') or {})))
        return records

    def create_record(self, table: str, fields: Dict[str, Any]) -> Record:
        rows = self._load(table)
        record_id = f"rec{uuid4().hex[:14]}"
        rows.append({'id': record_id, 'fields': dict(fields)})
        self._atomic_write(table, rows)
        return record_id, dict(fields)

    def delete_record(self, table: str, record_id: str) -> None:
        rows = self._load(table)
        kept = [row for row in rows if not (isinstance(row, dict) and row.get('id') == record_id)]
        if len(kept) == len(rows):
            raise RecordStoreError(
                f"Record {record_id} not found in table {table!r}",
                details={'table': table, 'id': record_id},
            )
        self._atomic_write(table, kept)


__all__ = ['Record', 'RecordStore', 'MemoryRecordStore', 'JsonRecordStore']
