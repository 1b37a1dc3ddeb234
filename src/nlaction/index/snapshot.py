"""Immutable index snapshots.

A snapshot is built completely off to the side and then published with a
single attribute assignment, so readers see either the previous complete
index or the new one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from nlaction.core.config import EngineConfig
from nlaction.core.types import (
    CollectionIndexStatus,
    Dataset,
    ExampleEntry,
    Record,
    ValueIndexEntry,
)
from nlaction.embeddings.provider import EmbeddingProvider
from nlaction.index.examples import build_example_entries, collect_field_names
from nlaction.index.keys import RecordKeyFunc, build_record_lookup, default_record_key
from nlaction.index.values import build_value_entries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexSnapshot:
    """Example index, value index and record lookup of one build."""

    generation: int
    examples: tuple[ExampleEntry, ...] = ()
    values: tuple[ValueIndexEntry, ...] = ()
    records: Mapping[str, Mapping[str, Record]] = field(default_factory=dict)
    fields: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def resolve(self, collection: str, record_key: str) -> Record | None:
        """Look up the record a value entry points at."""
        return self.records.get(collection, {}).get(record_key)

    def field_names(self, collection: str) -> tuple[str, ...]:
        """All field names seen in the collection at build time."""
        return self.fields.get(collection, ())

    def collection_status(self) -> list[CollectionIndexStatus]:
        """Per-collection counts of records, examples and values."""
        examples: dict[str, int] = {}
        values: dict[str, int] = {}
        for example in self.examples:
            examples[example.collection] = examples.get(example.collection, 0) + 1
        for value in self.values:
            values[value.collection] = values.get(value.collection, 0) + 1
        return [
            CollectionIndexStatus(
                collection=name,
                records=len(lookup),
                examples=examples.get(name, 0),
                values=values.get(name, 0),
            )
            for name, lookup in self.records.items()
        ]


async def build_snapshot(
    dataset: Dataset,
    provider: EmbeddingProvider,
    generation: int,
    config: EngineConfig | None = None,
    key_func: RecordKeyFunc = default_record_key,
) -> IndexSnapshot:
    """Build a complete snapshot from the current dataset.

    Collections are processed sequentially in dataset order; each one costs
    two batched embedding calls (examples, then values).
    """
    config = config or EngineConfig()
    examples: list[ExampleEntry] = []
    values: list[ValueIndexEntry] = []
    records: dict[str, Mapping[str, Record]] = {}
    fields: dict[str, tuple[str, ...]] = {}

    for collection, rows in list(dataset.items()):
        # copy so a concurrent insert cannot shift records under the build
        rows = list(rows or [])
        keys, lookup = build_record_lookup(collection, rows, key_func)
        records[collection] = MappingProxyType(lookup)
        fields[collection] = tuple(collect_field_names(rows))

        collection_examples = await build_example_entries(
            collection,
            rows,
            provider,
            sample_size=config.example_sample_size,
            record_limit=config.record_example_limit,
        )
        collection_values = await build_value_entries(
            collection,
            rows,
            keys,
            provider,
            max_length=config.max_value_length,
            max_number_length=config.max_number_length,
        )
        examples.extend(collection_examples)
        values.extend(collection_values)
        logger.debug(
            f"Indexed {collection}: {len(rows)} records, "
            f"{len(collection_examples)} examples, {len(collection_values)} values"
        )

    logger.info(
        f"Built index generation {generation}: {len(records)} collections, "
        f"{len(examples)} examples, {len(values)} values"
    )
    return IndexSnapshot(
        generation=generation,
        examples=tuple(examples),
        values=tuple(values),
        records=MappingProxyType(records),
        fields=MappingProxyType(fields),
    )
