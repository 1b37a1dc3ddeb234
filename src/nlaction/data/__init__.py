"""Dataset loading and saving."""

from nlaction.data.loader import (
    dump_json_dataset,
    load_dataset,
    load_json_dataset,
    load_sql_dataset,
)

__all__ = ["dump_json_dataset", "load_dataset", "load_json_dataset", "load_sql_dataset"]
