"""Canonical pandas table views of a built manycore system.

Analysis layers (routing studies, heatmaps, notebooks) consume the model as
flat tables. This module is the single source of truth for:

- table names, columns and canonical column order
- pragmatic dtype normalization (nullable extension dtypes)
- deterministic sorting

Tables are derived from a *built* system (see `manycore.core.build`), since
they expose derived fields (coordinates, edge flags, border-facing channels).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd

    from manycore.core.model import System


TABLE_SCHEMAS: dict[str, dict[str, str]] = {
    "cores": {
        "core_id": "Int64",
        "row": "Int64",
        "column": "Int64",
        "is_top": "boolean",
        "is_bottom": "boolean",
        "is_left": "boolean",
        "is_right": "boolean",
        "allocated_task": "Int64",
    },
    "channels": {
        "core_id": "Int64",
        "direction": "string",
        "bandwidth": "Int64",
        "actual_com_cost": "Int64",
        "source": "Int64",
        "status": "string",
        "is_border": "boolean",
    },
    "tasks": {
        "task_id": "Int64",
        "computation_cost": "Int64",
        "core_id": "Int64",
    },
    "edges": {
        "source": "Int64",
        "destination": "Int64",
        "communication_cost": "Int64",
    },
}

# Deterministic key columns used for sorting.
TABLE_KEYS: dict[str, list[str]] = {
    "cores": ["core_id"],
    "channels": ["core_id", "direction"],
    "tasks": ["task_id"],
    "edges": ["source", "destination"],
}

TABLE_COLUMN_ORDER: dict[str, list[str]] = {
    name: list(schema.keys()) for name, schema in TABLE_SCHEMAS.items()
}


def _cast_to_schema(df: "pd.DataFrame", *, schema: dict[str, str]) -> "pd.DataFrame":
    for col, dtype in schema.items():
        if dtype == "string":
            df[col] = df[col].astype("string").str.strip()
        else:
            df[col] = df[col].astype(dtype)
    return df


def _sort_canonical(df: "pd.DataFrame", *, keys: list[str]) -> "pd.DataFrame":
    # stable sort ensures deterministic ordering if keys tie
    return df.sort_values(keys, kind="mergesort", na_position="last").reset_index(drop=True)


def _make_table(rows: list[dict[str, Any]], *, table: str) -> "pd.DataFrame":
    import pandas as pd

    columns = TABLE_COLUMN_ORDER[table]
    df = pd.DataFrame(rows, columns=columns)
    df = _cast_to_schema(df, schema=TABLE_SCHEMAS[table])
    df = df.loc[:, columns]
    return _sort_canonical(df, keys=TABLE_KEYS[table])


def _core_rows(system: "System") -> list[dict[str, Any]]:
    rows = []
    for core in system.cores:
        row, column = core.coordinates if core.coordinates is not None else (None, None)
        rows.append(
            {
                "core_id": core.id,
                "row": row,
                "column": column,
                "is_top": core.is_top,
                "is_bottom": core.is_bottom,
                "is_left": core.is_left,
                "is_right": core.is_right,
                "allocated_task": core.allocated_task,
            }
        )
    return rows


def _channel_rows(system: "System") -> list[dict[str, Any]]:
    rows = []
    for core in system.cores:
        for channel in core.channels:
            rows.append(
                {
                    "core_id": core.id,
                    "direction": channel.direction.value,
                    "bandwidth": channel.bandwidth,
                    "actual_com_cost": channel.actual_com_cost,
                    "source": channel.source,
                    "status": channel.status,
                    "is_border": channel.is_border,
                }
            )
    return rows


def _task_rows(system: "System") -> list[dict[str, Any]]:
    return [
        {
            "task_id": task.id,
            "computation_cost": task.computation_cost,
            "core_id": system.task_core_map.get(task.id),
        }
        for task in system.task_graph.tasks
    ]


def _edge_rows(system: "System") -> list[dict[str, Any]]:
    return [
        {
            "source": edge.source,
            "destination": edge.destination,
            "communication_cost": edge.communication_cost,
        }
        for edge in system.task_graph.edges
    ]


def system_tables(system: "System") -> dict[str, "pd.DataFrame"]:
    """Return canonical `cores`, `channels`, `tasks` and `edges` DataFrames.

    Post-conditions:
    - columns follow `TABLE_COLUMN_ORDER`
    - integer columns are nullable `Int64`, flags are `boolean`, text is `string`
    - rows are sorted by `TABLE_KEYS`, index reset to RangeIndex
    """
    return {
        "cores": _make_table(_core_rows(system), table="cores"),
        "channels": _make_table(_channel_rows(system), table="channels"),
        "tasks": _make_table(_task_rows(system), table="tasks"),
        "edges": _make_table(_edge_rows(system), table="edges"),
    }
