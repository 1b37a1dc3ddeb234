"""Tests for core types."""

from nlaction import ActionCandidate, ActionType, ResolvedFrom
from nlaction.core.types import CollectionIndexStatus, IndexStatus


class TestActionType:
    """Test ActionType enum."""

    def test_values(self) -> None:
        assert ActionType.values() == ["create", "read", "update", "delete"]

    def test_string_comparison(self) -> None:
        assert ActionType.READ == "read"


class TestActionCandidate:
    """Test ActionCandidate model."""

    def test_type_stored_as_string(self) -> None:
        candidate = ActionCandidate(type=ActionType.DELETE, collection="goals")
        assert candidate.type == "delete"
        assert candidate.model_dump()["type"] == "delete"

    def test_dedup_key_ignores_filter_order(self) -> None:
        a = ActionCandidate(type="read", collection="accounts", filter={"a": 1, "b": "x"})
        b = ActionCandidate(type="read", collection="accounts", filter={"b": "x", "a": 1})
        assert a.dedup_key() == b.dedup_key()
        assert a.dedup_key() == 'read|accounts|{"a": 1, "b": "x"}'

    def test_dedup_key_distinguishes_value_types(self) -> None:
        number = ActionCandidate(type="read", collection="accounts", filter={"holders_id": 1})
        text = ActionCandidate(type="read", collection="accounts", filter={"holders_id": "1"})
        assert number.dedup_key() != text.dedup_key()

    def test_dedup_key_ignores_score_and_provenance(self) -> None:
        a = ActionCandidate(type="read", collection="holders", score=0.1)
        b = ActionCandidate(
            type="read",
            collection="holders",
            score=0.9,
            resolved_from=ResolvedFrom(collection="holders", field="name", value="Priya"),
        )
        assert a.dedup_key() == b.dedup_key() == "read|holders|{}"

    def test_describe_prefers_human_readable(self) -> None:
        candidate = ActionCandidate(type="read", collection="goals", human_readable="custom")
        assert candidate.describe() == "custom"

    def test_describe_generated(self) -> None:
        candidate = ActionCandidate(
            type="update", collection="goals", filter={"id": 1, "name": "Car"}
        )
        assert candidate.describe() == "UPDATE goals where id = 1 and name = Car"
        assert ActionCandidate(type="read", collection="goals").describe() == "READ goals"

    def test_json_round_trip(self) -> None:
        candidate = ActionCandidate(
            type="read",
            collection="accounts",
            filter={"holders_id": 1},
            score=0.7,
            resolved_from=ResolvedFrom(collection="holders", field="name", value="Swapnil"),
        )
        restored = ActionCandidate.model_validate_json(candidate.model_dump_json())
        assert restored == candidate


class TestIndexStatus:
    """Test IndexStatus totals and serialization."""

    def test_to_dict(self) -> None:
        status = IndexStatus(
            generation=2,
            stale=True,
            collections=[
                CollectionIndexStatus("holders", records=2, examples=7, values=4),
                CollectionIndexStatus("goals", records=2, examples=7, values=6),
            ],
        )
        data = status.to_dict()
        assert data["total_examples"] == 14
        assert data["total_values"] == 10
        assert data["collections"][1] == {
            "collection": "goals",
            "records": 2,
            "examples": 7,
            "values": 6,
        }
