"""Mapping between optional API fields and nullable columns.

An optional field is either absent or present. On the way into storage an
absent field is bound as NULL; on the way out a NULL column is dropped from
the row so the field is absent again. All three entities go through these
helpers for every nullable column.
"""
from typing import Any, Iterable, Mapping, Optional


def encode(payload: Mapping[str, Any], fields: Iterable[str]) -> list[Any]:
    """Positional bind arguments for ``fields``; absent or None becomes NULL."""
    return [payload.get(field) for field in fields]


def decode(record: Optional[Mapping[str, Any]], nullable: Iterable[str]) -> Optional[dict]:
    """Row to dict, with NULL values of nullable columns removed."""
    if record is None:
        return None
    row = dict(record)
    for column in nullable:
        if row.get(column) is None:
            row.pop(column, None)
    return row
