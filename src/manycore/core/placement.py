"""Placement Indexer: task id -> index of the core hosting it."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from manycore.core.errors import DuplicateTaskAllocation

if TYPE_CHECKING:  # pragma: no cover
    from manycore.core.model import System


def index_placement(system: "System", *, strict: bool = False) -> Mapping[int, int]:
    """Build the read-only task->core map from the sorted core list.

    By default a task allocated to several cores maps to the last one
    (highest id). With `strict=True` this raises `DuplicateTaskAllocation`.
    """
    task_core_map: dict[int, int] = {}
    for i, core in enumerate(system.cores):
        task_id = core.allocated_task
        if task_id is None:
            continue
        if strict and task_id in task_core_map:
            raise DuplicateTaskAllocation(task_id=task_id, first_core=task_core_map[task_id], second_core=i)
        task_core_map[task_id] = i
    return MappingProxyType(task_core_map)
