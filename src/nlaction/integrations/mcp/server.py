"""MCP server for nlaction.

Exposes proposing and executing natural-language actions as MCP tools for
AI agents.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP  # type: ignore[import-not-found]

from nlaction import NLActionEngine
from nlaction.data import dump_json_dataset, load_dataset

# Configure logging to stderr (important for stdio transport)
logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)

# Create MCP server
mcp = FastMCP("nlaction")

# Global engine instance (set during server startup)
_engine: NLActionEngine | None = None

# Where the dataset was loaded from (None when injected directly)
_dataset_source: str | None = None


def get_engine() -> NLActionEngine:
    """Get the engine instance."""
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call create_server() first.")
    return _engine


def _error(e: Exception) -> str:
    to_dict = getattr(e, "to_dict", None)
    if callable(to_dict):
        payload: dict[str, Any] = to_dict()
        return json.dumps(payload, default=str)
    return json.dumps({"error": str(e)})


@mcp.tool()
def nlaction_list_collections() -> str:
    """List collections in the dataset with their record counts.

    Use this first to understand what data is available.

    Returns:
        JSON object of collection name -> record count.
    """
    dataset = get_engine().current_schema
    return json.dumps({name: len(records) for name, records in dataset.items()})


@mcp.tool()
async def nlaction_propose_actions(query: str, top_k: int = 6, limit: int = 10) -> str:
    """Propose CRUD actions for a natural-language request.

    Args:
        query: What the user asked for, e.g. "show accounts for Swapnil"
        top_k: Number of intent matches to expand (default: 6)
        limit: Maximum candidates to return (default: 10)

    Returns:
        JSON array of candidates, best first. Each has type, collection,
        filter, patch, score, human_readable and resolved_from. Pass one
        (optionally with a patch added) to nlaction_execute_action.
    """
    try:
        candidates = await get_engine().propose_actions(query, top_k=top_k)
        return json.dumps([c.model_dump() for c in candidates[:limit]], default=str)
    except Exception as e:
        return _error(e)


@mcp.tool()
def nlaction_execute_action(action: dict[str, Any]) -> str:
    """Execute a CRUD action against the dataset.

    Args:
        action: Candidate with:
            - type: create, read, update or delete
            - collection: Target collection
            - filter: Field equality map (required for update/delete)
            - patch: Field values to write (create/update)

    Returns:
        JSON with the result: records for read/update, the new record for
        create, {"deleted": n} for delete. Call nlaction_retrain afterwards
        so new proposals see the change, and nlaction_save_dataset to keep it.
    """
    try:
        result = get_engine().execute_action(action)
        return json.dumps({"result": result}, default=str)
    except Exception as e:
        return _error(e)


@mcp.tool()
async def nlaction_retrain() -> str:
    """Rebuild the example and value indices from the current dataset.

    Returns:
        JSON index status after the rebuild.
    """
    try:
        engine = get_engine()
        await engine.retrain()
        return json.dumps(engine.index_status().to_dict())
    except Exception as e:
        return _error(e)


@mcp.tool()
def nlaction_save_dataset(path: str | None = None) -> str:
    """Write the current dataset to a JSON file.

    Executed actions only change the in-memory dataset; call this to keep
    them after the server stops.

    Args:
        path: Target JSON file (default: the file the dataset was loaded from)

    Returns:
        JSON with the saved path and record counts per collection.
    """
    try:
        target = path or _dataset_source
        if target is None:
            raise ValueError("No dataset file to save to. Pass a path.")
        if "://" in target:
            raise ValueError(
                f"Cannot save to {target}: only JSON file datasets can be saved. Pass a path."
            )
        dataset = get_engine().current_schema
        dump_json_dataset(dataset, target)
        return json.dumps(
            {"path": target, "collections": {name: len(rows) for name, rows in dataset.items()}}
        )
    except Exception as e:
        return _error(e)


@mcp.tool()
def nlaction_index_status() -> str:
    """Get index counts per collection and whether the index is stale.

    Returns:
        JSON with generation, stale flag and per-collection counts.
    """
    return json.dumps(get_engine().index_status().to_dict())


def create_server(dataset: str, provider: str = "fastembed") -> FastMCP:
    """Create and configure the MCP server with an indexed dataset.

    Args:
        dataset: Dataset JSON file or database URL
        provider: Embedding provider name

    Returns:
        Configured FastMCP server instance
    """
    global _engine, _dataset_source
    engine = NLActionEngine(provider)
    asyncio.run(engine.load_schema(load_dataset(dataset)))
    _engine = engine
    _dataset_source = dataset
    logger.info(f"nlaction initialized with {dataset}")
    return mcp


def main() -> None:
    """Entry point for running the MCP server."""
    parser = argparse.ArgumentParser(description="nlaction MCP Server")
    parser.add_argument(
        "--dataset",
        "-d",
        default="./dataset.json",
        help="Dataset JSON file or database URL (default: ./dataset.json)",
    )
    parser.add_argument(
        "--provider",
        "-p",
        default="fastembed",
        help="Embedding provider: fastembed or openai (default: fastembed)",
    )
    args = parser.parse_args()

    create_server(args.dataset, provider=args.provider)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
