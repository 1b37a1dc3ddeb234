"""Example and value indices built from a dataset."""

from nlaction.index.examples import collect_field_names, generate_examples
from nlaction.index.keys import RecordKeyFunc, default_record_key, find_identifier_field
from nlaction.index.snapshot import IndexSnapshot, build_snapshot
from nlaction.index.values import indexable_text

__all__ = [
    "IndexSnapshot",
    "RecordKeyFunc",
    "build_snapshot",
    "collect_field_names",
    "default_record_key",
    "find_identifier_field",
    "generate_examples",
    "indexable_text",
]
