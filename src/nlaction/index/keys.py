"""Stable record keys.

Value index entries point at records through these keys instead of list
positions, so inserts and deletes in a collection never make an entry
resolve to a different record.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Callable

from nlaction.core.types import Record

RecordKeyFunc = Callable[[str, Record], str]


def identifier_fields(collection: str) -> list[str]:
    """Field names treated as a record's own identifier, in priority order."""
    return ["id", f"{collection}_id", "_id"]


def find_identifier_field(collection: str, record: Record) -> str | None:
    """Return the first identifier field present on the record."""
    for name in identifier_fields(collection):
        if name in record:
            return name
    return None


def default_record_key(collection: str, record: Record) -> str:
    """Key a record by its identifier field, else by a hash of its content."""
    id_field = find_identifier_field(collection, record)
    if id_field is not None:
        return f"{id_field}:{record[id_field]}"
    canonical = json.dumps(record, sort_keys=True, default=str)
    return "sha1:" + hashlib.sha1(canonical.encode("utf-8")).hexdigest()


def build_record_lookup(
    collection: str,
    records: list[Record],
    key_func: RecordKeyFunc = default_record_key,
) -> tuple[list[str], dict[str, Record]]:
    """Key every record of a collection.

    Duplicate keys get a ``#n`` suffix so that every record stays
    addressable.

    Returns:
        (keys aligned with ``records``, key -> record lookup)
    """
    keys: list[str] = []
    lookup: dict[str, Record] = {}
    for record in records:
        key = key_func(collection, record)
        if key in lookup:
            n = 2
            while f"{key}#{n}" in lookup:
                n += 1
            key = f"{key}#{n}"
        keys.append(key)
        lookup[key] = record
    return keys, lookup
