"""Tests for executing actions against a dataset."""

from typing import Any

import pytest

from nlaction import ActionCandidate, ActionExecutor
from nlaction.core.executor import next_id, record_matches
from nlaction.exceptions import MissingFilterError, UnknownCollectionError


@pytest.fixture
def executor() -> ActionExecutor:
    return ActionExecutor()


@pytest.fixture
def goals() -> dict[str, list[dict[str, Any]]]:
    return {
        "goals": [
            {"id": 1, "name": "Car", "active": True},
            {"id": 5, "name": "House", "active": False},
            {"id": 3, "name": "Car", "active": True},
            {"id": 2, "name": "Trip"},
            {"id": 4, "name": "Bike"},
        ]
    }


class TestRead:
    """Test read actions."""

    def test_unfiltered_read_returns_live_list(self, executor, goals) -> None:
        result = executor.execute(goals, ActionCandidate(type="read", collection="goals"))
        assert result is goals["goals"]

    def test_filter_uses_string_equality(self, executor, goals) -> None:
        result = executor.execute(
            goals, ActionCandidate(type="read", collection="goals", filter={"id": "3"})
        )
        assert result == [{"id": 3, "name": "Car", "active": True}]

    def test_boolean_filter_compares_as_text(self, executor, goals) -> None:
        result = executor.execute(
            goals, ActionCandidate(type="read", collection="goals", filter={"active": "True"})
        )
        assert [r["id"] for r in result] == [1, 3]

    def test_missing_field_compares_as_none(self, executor, goals) -> None:
        result = executor.execute(
            goals, ActionCandidate(type="read", collection="goals", filter={"active": None})
        )
        assert [r["id"] for r in result] == [2, 4]

    def test_unknown_collection(self, executor, goals) -> None:
        with pytest.raises(UnknownCollectionError) as exc_info:
            executor.execute(goals, ActionCandidate(type="read", collection="nope"))
        assert exc_info.value.available_collections == ["goals"]
        assert "Unknown collection: 'nope'" in str(exc_info.value)


class TestCreate:
    """Test create actions."""

    def test_assigns_next_id(self, executor, goals) -> None:
        created = executor.execute(
            goals, ActionCandidate(type="create", collection="goals", patch={"name": "Boat"})
        )
        assert created == {"name": "Boat", "id": 6}
        assert goals["goals"][-1] is created

    def test_keeps_explicit_id(self, executor, goals) -> None:
        created = executor.execute(
            goals,
            ActionCandidate(type="create", collection="goals", patch={"id": 99, "name": "Boat"}),
        )
        assert created["id"] == 99

    def test_empty_collection_starts_at_one(self, executor) -> None:
        dataset: dict[str, list[dict[str, Any]]] = {"tags": []}
        created = executor.execute(
            dataset, ActionCandidate(type="create", collection="tags", patch={"label": "x"})
        )
        assert created == {"label": "x", "id": 1}

    def test_no_id_when_collection_has_none(self, executor) -> None:
        dataset = {"notes": [{"text": "hello"}]}
        created = executor.execute(
            dataset, ActionCandidate(type="create", collection="notes", patch={"text": "bye"})
        )
        assert created == {"text": "bye"}

    def test_patch_is_copied(self, executor, goals) -> None:
        patch = {"name": "Boat"}
        executor.execute(goals, ActionCandidate(type="create", collection="goals", patch=patch))
        assert patch == {"name": "Boat"}


class TestUpdate:
    """Test update actions."""

    def test_updates_matching_records_in_place(self, executor, goals) -> None:
        first = goals["goals"][0]
        updated = executor.execute(
            goals,
            ActionCandidate(
                type="update", collection="goals", filter={"name": "Car"}, patch={"name": "Van"}
            ),
        )
        assert [r["id"] for r in updated] == [1, 3]
        assert first["name"] == "Van"
        assert [r["name"] for r in goals["goals"]] == ["Van", "House", "Van", "Trip", "Bike"]

    @pytest.mark.parametrize("filter", [None, {}])
    def test_requires_filter(self, executor, goals, filter) -> None:
        before = [dict(r) for r in goals["goals"]]
        with pytest.raises(MissingFilterError):
            executor.execute(
                goals,
                ActionCandidate(type="update", collection="goals", filter=filter, patch={"x": 1}),
            )
        assert goals["goals"] == before


class TestDelete:
    """Test delete actions."""

    def test_deletes_matching_records(self, executor, goals) -> None:
        result = executor.execute(
            goals, ActionCandidate(type="delete", collection="goals", filter={"name": "Car"})
        )
        assert result == {"deleted": 2}
        assert [r["id"] for r in goals["goals"]] == [5, 2, 4]

    def test_no_match_deletes_nothing(self, executor, goals) -> None:
        result = executor.execute(
            goals, ActionCandidate(type="delete", collection="goals", filter={"id": 42})
        )
        assert result == {"deleted": 0}
        assert len(goals["goals"]) == 5

    def test_requires_filter(self, executor, goals) -> None:
        with pytest.raises(MissingFilterError) as exc_info:
            executor.execute(goals, ActionCandidate(type="delete", collection="goals"))
        assert exc_info.value.to_dict()["context"] == {"type": "delete", "collection": "goals"}
        assert len(goals["goals"]) == 5


class TestHelpers:
    """Test matching and id helpers."""

    def test_record_matches_all_fields(self) -> None:
        record = {"id": 1, "name": "Car"}
        assert record_matches(record, {"id": 1, "name": "Car"})
        assert not record_matches(record, {"id": 1, "name": "House"})
        assert record_matches(record, {})

    def test_next_id_ignores_non_numeric(self) -> None:
        assert next_id([{"id": "abc"}, {"id": "7"}, {"name": "x"}]) == 8
        assert next_id([{"id": float("nan")}, {"id": 2.5}]) == 3
        assert next_id([]) == 1

    def test_next_id_keeps_large_integers_exact(self) -> None:
        big = 2**53 + 1
        assert next_id([{"id": big}]) == big + 1
        assert next_id([{"id": str(big)}]) == big + 1

    def test_create_after_large_id_does_not_collide(self, executor) -> None:
        big = 2**53 + 1
        dataset = {"events": [{"id": big, "name": "launch"}]}
        created = executor.execute(
            dataset, ActionCandidate(type="create", collection="events", patch={"name": "next"})
        )
        assert created["id"] == big + 1
        assert len({r["id"] for r in dataset["events"]}) == 2
