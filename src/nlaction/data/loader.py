"""Dataset import and export.

A dataset is a JSON object mapping collection names to arrays of flat
objects, the shape produced by exporting every table of an application.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import uuid
from decimal import Decimal
from pathlib import Path
from typing import Any

from sqlalchemy import MetaData, create_engine, select
from sqlalchemy.exc import SQLAlchemyError

from nlaction.core.engine import validate_dataset
from nlaction.core.types import Dataset
from nlaction.exceptions import DatasetError

logger = logging.getLogger(__name__)


def load_json_dataset(path: str | Path) -> Dataset:
    """Read a dataset from a JSON file.

    Raises:
        DatasetError: If the file is missing, not JSON, or has the wrong shape
    """
    file_path = Path(path)
    if not file_path.exists():
        raise DatasetError(f"Dataset file not found: {path}", {"path": str(path)})

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DatasetError(
            f"Invalid JSON in {path} on line {e.lineno}: {e.msg}", {"path": str(path)}
        ) from e

    dataset = validate_dataset(data)
    logger.info(f"Loaded {len(dataset)} collections from {path}")
    return dataset


def dump_json_dataset(dataset: Dataset, path: str | Path) -> None:
    """Write a dataset to a JSON file (overwrites)."""
    file_path = Path(path)
    with file_path.open("w", encoding="utf-8") as f:
        json.dump(dataset, f, indent=2, default=str, ensure_ascii=False)
    logger.info(f"Saved {len(dataset)} collections to {path}")


def _to_json_value(value: Any) -> Any:
    """Convert SQL column values to JSON-friendly scalars."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dt.datetime | dt.date | dt.time):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, bytes | bytearray | memoryview):
        return None
    return value


def load_sql_dataset(url: str, tables: list[str] | None = None) -> Dataset:
    """Export tables of a SQL database as a dataset.

    Args:
        url: SQLAlchemy database URL (e.g. "sqlite:///app.db")
        tables: Table names to export (default: all reflected tables)

    Raises:
        DatasetError: If the database cannot be read or a table is missing
    """
    engine = create_engine(url)
    try:
        metadata = MetaData()
        metadata.reflect(bind=engine, only=tables)
        dataset: Dataset = {}
        with engine.connect() as conn:
            for name, table in metadata.tables.items():
                rows = conn.execute(select(table)).mappings().all()
                dataset[name] = [
                    {key: _to_json_value(value) for key, value in row.items()} for row in rows
                ]
    except SQLAlchemyError as e:
        raise DatasetError(f"Could not read dataset from {url}: {e}", {"url": url}) from e
    finally:
        engine.dispose()

    if tables:
        # keep the caller's collection order
        dataset = {name: dataset[name] for name in tables if name in dataset}
    logger.info(f"Exported {len(dataset)} tables from {url}")
    return dataset


def load_dataset(source: str | Path) -> Dataset:
    """Load a dataset from a JSON file path or a database URL."""
    if isinstance(source, str) and "://" in source:
        return load_sql_dataset(source)
    return load_json_dataset(source)
