"""Core types for nlaction.

All types are designed to be JSON-serializable for agent consumption.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

# A record is a flat mapping of field name -> scalar (nested values are opaque).
Record = dict[str, Any]

# A dataset maps collection name -> ordered list of records.
Dataset = dict[str, list[Record]]


class ActionType(StrEnum):
    """CRUD intents an action candidate can carry."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid action type values."""
        return [t.value for t in cls]


class ResolvedFrom(BaseModel):
    """Where the filter value of a candidate was found."""

    collection: str = Field(..., description="Collection holding the matched value")
    field: str = Field(..., description="Field holding the matched value")
    value: Any = Field(..., description="Matched value text")


class ActionCandidate(BaseModel):
    """A proposed CRUD operation with its confidence and provenance.

    Candidates are value objects. Agents may also build them by hand and
    pass them to ``execute_action``.
    """

    type: ActionType = Field(..., description="CRUD intent")
    collection: str = Field(..., description="Target collection")
    filter: dict[str, Any] | None = Field(
        default=None, description="Equality conjunction selecting records (read/update/delete)"
    )
    patch: dict[str, Any] | None = Field(
        default=None, description="Field values to write (create/update)"
    )
    score: float = Field(default=0.0, description="Confidence score, higher is better")
    human_readable: str | None = Field(default=None, description="Justification for display")
    resolved_from: ResolvedFrom | None = Field(
        default=None, description="Value match that produced the filter"
    )

    model_config = {"use_enum_values": True}

    def dedup_key(self) -> str:
        """Identity used to collapse duplicate candidates."""
        filter_json = json.dumps(self.filter or {}, sort_keys=True, default=str)
        return f"{self.type}|{self.collection}|{filter_json}"

    def describe(self) -> str:
        """Human readable text, falling back to a generated one."""
        if self.human_readable:
            return self.human_readable
        text = f"{str(self.type).upper()} {self.collection}"
        if self.filter:
            conditions = " and ".join(f"{k} = {v}" for k, v in self.filter.items())
            text += f" where {conditions}"
        return text


@dataclass
class ExampleEntry:
    """An embedded synthetic phrase used to classify intent and collection."""

    collection: str
    intent: ActionType
    text: str
    embedding: list[float]
    metadata: dict[str, Any] | None = None


@dataclass
class ValueIndexEntry:
    """An embedded scalar field value.

    ``record_key`` is a stable identifier resolved through the snapshot's
    record lookup, not a position in the collection list.
    """

    collection: str
    record_key: str
    field: str
    value_text: str
    embedding: list[float]


@dataclass
class ValueMatch:
    """A value index entry scored against a query."""

    entry: ValueIndexEntry
    score: float
    adjusted_score: float
    exact: bool = False


@dataclass
class CollectionIndexStatus:
    """Index counts for one collection."""

    collection: str
    records: int
    examples: int
    values: int


@dataclass
class IndexStatus:
    """Status of the current index snapshot."""

    generation: int
    stale: bool
    collections: list[CollectionIndexStatus] = field(default_factory=list)

    @property
    def total_examples(self) -> int:
        return sum(c.examples for c in self.collections)

    @property
    def total_values(self) -> int:
        return sum(c.values for c in self.collections)

    def to_dict(self) -> dict[str, Any]:
        """Return status as JSON-serializable dict."""
        return {
            "generation": self.generation,
            "stale": self.stale,
            "total_examples": self.total_examples,
            "total_values": self.total_values,
            "collections": [
                {
                    "collection": c.collection,
                    "records": c.records,
                    "examples": c.examples,
                    "values": c.values,
                }
                for c in self.collections
            ],
        }
