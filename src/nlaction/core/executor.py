"""Apply action candidates to an in-memory dataset."""

from __future__ import annotations

import logging
import math
from typing import Any

from nlaction.core.types import ActionCandidate, ActionType, Dataset, Record
from nlaction.exceptions import MissingFilterError, UnknownCollectionError, UnsupportedActionError

logger = logging.getLogger(__name__)


def record_matches(record: Record, filter: dict[str, Any]) -> bool:
    """Loose equality on every filter field.

    Values are compared as strings because storage may hold numbers where
    filters hold their text form. A missing field compares as ``None``.
    """
    return all(str(record.get(key)) == str(expected) for key, expected in filter.items())


def _numeric_id(value: Any) -> int:
    """Integer form of an id; non-numeric and non-finite ids count as 0."""
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
        try:
            value = float(value)
        except ValueError:
            return 0
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return 0


def next_id(records: list[Record]) -> int:
    """One past the largest numeric ``id``.

    Integer ids are compared exactly, so ids above 2**53 stay distinct.
    """
    return max((_numeric_id(record.get("id")) for record in records), default=0) + 1


class ActionExecutor:
    """Executes candidates against a dataset, mutating it in place.

    There is no rollback: each call is applied immediately and is visible
    through the same dataset reference.
    """

    def execute(self, dataset: Dataset, action: ActionCandidate) -> Any:
        """Execute one action.

        Returns:
            read: matching records (the live list itself when unfiltered)
            create: the new record
            update: the updated records
            delete: ``{"deleted": count}``

        Raises:
            UnknownCollectionError: If the collection is not in the dataset
            MissingFilterError: If update/delete has no filter
            UnsupportedActionError: If the action type is not CRUD
        """
        collection = action.collection
        records = dataset.get(collection)
        if records is None:
            raise UnknownCollectionError(collection, list(dataset))

        action_type = str(action.type)
        if action_type == ActionType.READ:
            return self._read(records, action.filter)
        if action_type == ActionType.CREATE:
            return self._create(collection, records, action.patch)
        if action_type == ActionType.UPDATE:
            if not action.filter:
                raise MissingFilterError(action_type, collection)
            return self._update(collection, records, action.filter, action.patch)
        if action_type == ActionType.DELETE:
            if not action.filter:
                raise MissingFilterError(action_type, collection)
            return self._delete(dataset, collection, action.filter)
        raise UnsupportedActionError(action_type)

    def _read(self, records: list[Record], filter: dict[str, Any] | None) -> list[Record]:
        if not filter:
            return records
        return [r for r in records if record_matches(r, filter)]

    def _create(
        self, collection: str, records: list[Record], patch: dict[str, Any] | None
    ) -> Record:
        record = dict(patch or {})
        if "id" not in record and (not records or any("id" in r for r in records)):
            record["id"] = next_id(records)
        records.append(record)
        logger.info(f"Created record in {collection}: {record}")
        return record

    def _update(
        self,
        collection: str,
        records: list[Record],
        filter: dict[str, Any],
        patch: dict[str, Any] | None,
    ) -> list[Record]:
        targets = [r for r in records if record_matches(r, filter)]
        for record in targets:
            record.update(patch or {})
        logger.info(f"Updated {len(targets)} record(s) in {collection} where {filter}")
        return targets

    def _delete(self, dataset: Dataset, collection: str, filter: dict[str, Any]) -> dict[str, int]:
        records = dataset[collection]
        kept = [r for r in records if not record_matches(r, filter)]
        dataset[collection] = kept
        deleted = len(records) - len(kept)
        logger.info(f"Deleted {deleted} record(s) from {collection} where {filter}")
        return {"deleted": deleted}
