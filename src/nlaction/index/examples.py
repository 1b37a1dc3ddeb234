"""Synthetic intent examples per collection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from nlaction.core.types import ActionType, ExampleEntry, Record
from nlaction.embeddings.provider import EmbeddingProvider


@dataclass
class ExamplePhrase:
    """An example phrase before embedding."""

    intent: ActionType
    text: str
    metadata: dict[str, Any] | None = None


def collect_field_names(records: list[Record], limit: int | None = None) -> list[str]:
    """Union of field names across records, in first-seen order."""
    names: dict[str, None] = {}
    for record in records if limit is None else records[:limit]:
        for name in record:
            names.setdefault(name, None)
    return list(names)


def generate_examples(
    collection: str,
    records: list[Record],
    sample_size: int = 20,
    record_limit: int = 10,
) -> list[ExamplePhrase]:
    """Generate template phrases for each CRUD intent on a collection.

    Five generic templates built from the first two field names, then one
    "Show {collection} for {field} {value}" read example per leading record.
    """
    fields = collect_field_names(records, sample_size)
    first = fields[0] if fields else None
    second = fields[1] if len(fields) > 1 else None

    examples = [
        ExamplePhrase(ActionType.READ, f"Show me all {collection}"),
        ExamplePhrase(ActionType.READ, f"List {collection} where {first or 'id'} equals 1"),
        ExamplePhrase(ActionType.CREATE, f"Add a new {collection} with {first or 'name'} 'test'"),
        ExamplePhrase(
            ActionType.UPDATE,
            f"Update {collection} where {first or 'id'} is 1 and set {second or 'name'} to 'X'",
        ),
        ExamplePhrase(ActionType.DELETE, f"Delete {collection} with {first or 'id'} = 1"),
    ]

    for record in records[:record_limit]:
        if not record:
            continue
        id_key = next(iter(record))
        id_val = record[id_key]
        examples.append(
            ExamplePhrase(
                ActionType.READ,
                f"Show {collection} for {id_key} {id_val}",
                metadata={"id_key": id_key, "id_val": id_val},
            )
        )

    return examples


async def build_example_entries(
    collection: str,
    records: list[Record],
    provider: EmbeddingProvider,
    sample_size: int = 20,
    record_limit: int = 10,
) -> list[ExampleEntry]:
    """Generate and embed the examples of one collection in a single batch."""
    examples = generate_examples(collection, records, sample_size, record_limit)
    embeddings = await provider.aembed_batch([e.text for e in examples])
    return [
        ExampleEntry(
            collection=collection,
            intent=example.intent,
            text=example.text,
            embedding=list(embedding),
            metadata=example.metadata,
        )
        for example, embedding in zip(examples, embeddings, strict=True)
    ]
