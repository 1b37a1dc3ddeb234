"""Embedded scalar field values for entity resolution."""

from __future__ import annotations

import math
from typing import Any

from nlaction.core.types import Record, ValueIndexEntry
from nlaction.embeddings.provider import EmbeddingProvider


def indexable_text(value: Any, max_length: int = 120, max_number_length: int = 12) -> str | None:
    """Text to embed for a field value, or None if the value is skipped.

    Only short non-blank strings and short finite numbers are useful match
    targets. Booleans, nulls, nested values and long text are skipped.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        if value.strip() and len(value) < max_length:
            return value
        return None
    if isinstance(value, int | float):
        if isinstance(value, float):
            if not math.isfinite(value):
                return None
            text = str(int(value)) if value.is_integer() else str(value)
        else:
            text = str(value)
        return text if len(text) <= max_number_length else None
    return None


async def build_value_entries(
    collection: str,
    records: list[Record],
    keys: list[str],
    provider: EmbeddingProvider,
    max_length: int = 120,
    max_number_length: int = 12,
) -> list[ValueIndexEntry]:
    """Embed every indexable value of a collection in a single batch.

    Args:
        collection: Collection name
        records: Records of the collection
        keys: Stable record keys aligned with ``records``
        provider: Embedding provider

    Returns:
        One entry per indexable value, in record then field order.
    """
    texts: list[str] = []
    meta: list[tuple[str, str]] = []
    for record, key in zip(records, keys, strict=True):
        for field, value in record.items():
            text = indexable_text(value, max_length, max_number_length)
            if text is None:
                continue
            texts.append(text)
            meta.append((key, field))

    if not texts:
        return []

    embeddings = await provider.aembed_batch(texts)
    return [
        ValueIndexEntry(
            collection=collection,
            record_key=key,
            field=field,
            value_text=text,
            embedding=list(embedding),
        )
        for (key, field), text, embedding in zip(meta, texts, embeddings, strict=True)
    ]
