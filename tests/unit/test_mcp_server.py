"""Unit tests for the nlaction MCP server integration.

Note: FastMCP tools take typed Python objects directly (not JSON strings).
The MCP framework handles JSON serialization at the transport layer.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Generator

import pytest

# Skip entire module if mcp is not installed (optional dependency)
pytest.importorskip("mcp", reason="mcp not installed (install with: pip install nlaction[mcp])")

from nlaction import NLActionEngine  # noqa: E402
from nlaction.data import load_json_dataset  # noqa: E402
from nlaction.integrations.mcp import server as mcp_server  # noqa: E402


@pytest.fixture(autouse=True)
def set_mcp_engine(engine: NLActionEngine, finance_dataset) -> Generator[None, None, None]:
    """Inject an indexed engine into the MCP server global before each test."""
    asyncio.run(engine.load_schema(finance_dataset))
    mcp_server._engine = engine
    yield
    mcp_server._engine = None
    mcp_server._dataset_source = None


def _ok(result: str):
    data = json.loads(result)
    if isinstance(data, dict):
        assert "error" not in data, f"Unexpected error: {data}"
    return data


def _err(result: str) -> dict:
    data = json.loads(result)
    assert "error" in data, f"Expected error, got: {data}"
    return data


class TestReadTools:
    """Test tools that do not mutate the dataset."""

    def test_list_collections(self) -> None:
        data = _ok(mcp_server.nlaction_list_collections())
        assert data == {"holders": 2, "accounts": 3, "goals": 2}

    def test_index_status(self) -> None:
        data = _ok(mcp_server.nlaction_index_status())
        assert data["generation"] == 1
        assert data["stale"] is False

    def test_propose_actions(self) -> None:
        data = _ok(asyncio.run(mcp_server.nlaction_propose_actions("Show accounts for Swapnil")))
        assert isinstance(data, list)
        assert any(
            c["collection"] == "accounts"
            and c["filter"] == {"holders_id": 1}
            and c["resolved_from"]["value"] == "Swapnil"
            for c in data
        )

    def test_propose_limit(self) -> None:
        data = _ok(asyncio.run(mcp_server.nlaction_propose_actions("Show me all goals", limit=1)))
        assert len(data) == 1


class TestExecuteTool:
    """Test executing actions and retraining."""

    def test_read(self) -> None:
        data = _ok(
            mcp_server.nlaction_execute_action(
                {"type": "read", "collection": "accounts", "filter": {"holders_id": "1"}}
            )
        )
        assert [a["bank"] for a in data["result"]] == ["HDFC", "SBI"]

    def test_delete_then_retrain(self) -> None:
        data = _ok(
            mcp_server.nlaction_execute_action(
                {"type": "delete", "collection": "goals", "filter": {"name": "Car"}}
            )
        )
        assert data["result"] == {"deleted": 1}
        assert _ok(mcp_server.nlaction_index_status())["stale"] is True

        status = _ok(asyncio.run(mcp_server.nlaction_retrain()))
        assert status["generation"] == 2
        assert status["stale"] is False
        goals = next(c for c in status["collections"] if c["collection"] == "goals")
        assert goals["records"] == 1

    def test_unknown_collection(self) -> None:
        data = _err(mcp_server.nlaction_execute_action({"type": "read", "collection": "loans"}))
        assert data["error"] == "UnknownCollectionError"

    def test_missing_filter(self) -> None:
        data = _err(
            mcp_server.nlaction_execute_action({"type": "delete", "collection": "goals"})
        )
        assert data["error"] == "MissingFilterError"

    def test_unsupported_type(self) -> None:
        data = _err(
            mcp_server.nlaction_execute_action({"type": "merge", "collection": "goals"})
        )
        assert data["error"] == "UnsupportedActionError"


class TestSaveDatasetTool:
    """Test persisting executed actions."""

    def test_saves_to_loaded_file(self, tmp_path) -> None:
        path = tmp_path / "dataset.json"
        mcp_server._dataset_source = str(path)
        _ok(
            mcp_server.nlaction_execute_action(
                {"type": "create", "collection": "goals", "patch": {"name": "Boat"}}
            )
        )

        data = _ok(mcp_server.nlaction_save_dataset())
        assert data["path"] == str(path)
        assert data["collections"]["goals"] == 3
        saved = load_json_dataset(path)
        assert saved["goals"][-1] == {"name": "Boat", "id": 3}

    def test_saves_to_explicit_path(self, tmp_path) -> None:
        path = tmp_path / "copy.json"
        _ok(mcp_server.nlaction_save_dataset(str(path)))
        assert set(load_json_dataset(path)) == {"holders", "accounts", "goals"}

    def test_database_source_cannot_be_saved(self) -> None:
        mcp_server._dataset_source = "sqlite:///app.db"
        data = _err(mcp_server.nlaction_save_dataset())
        assert "only JSON file datasets" in data["error"]

    def test_requires_a_target(self) -> None:
        data = _err(mcp_server.nlaction_save_dataset())
        assert "Pass a path" in data["error"]


class TestUninitialized:
    """Test behavior before the server has an engine."""

    def test_propose_without_engine(self) -> None:
        mcp_server._engine = None
        data = _err(asyncio.run(mcp_server.nlaction_propose_actions("anything")))
        assert "not initialized" in data["error"]
