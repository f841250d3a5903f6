import re

_UNSAFE = re.compile(r'[^a-z0-9]+')


def table_file_name(table: str) -> str:
    """'Items by Household Size' -> 'items_by_household_size.json'."""
    stem = _UNSAFE.sub('_', (table or '').strip().lower()).strip('_')
    if not stem:
        raise ValueError(f"Table name has no usable characters: {table!r}")
    return f"{stem}.json"


__all__ = ['table_file_name']
