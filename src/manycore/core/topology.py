"""Topology Deriver.

For a validated system (cores sorted, ids contiguous):

- computes each core's row-major position and matrix-edge flags;
- overwrites every router id with its owning core's id;
- associates border points with the edge core they attach to and marks the
  matching channel as border-facing.

A border point attaches to core `core_id` iff that core exists and lies on
the grid edge facing the point's direction. Unmatched points have no effect
unless `strict` is set.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from manycore.core.errors import UnmatchedBorder

if TYPE_CHECKING:  # pragma: no cover
    from manycore.core.model import BorderPoint, Borders, Core, System

logger = logging.getLogger(__name__)


def populate_matrix_edges(system: "System") -> None:
    for core in system.cores:
        core.populate_matrix_edge(system.rows, system.columns)


def assign_router_ids(system: "System") -> None:
    for core in system.cores:
        core.router.id = core.id


def _unmatched_reason(point: "BorderPoint", cores: list["Core"]) -> str | None:
    if not 0 <= point.core_id < len(cores):
        return f"core {point.core_id} is outside the grid"
    if not cores[point.core_id].faces(point.direction):
        return f"core {point.core_id} is not on the {point.direction.value} edge"
    return None


def compute_core_border_map(borders: "Borders", cores: list["Core"], *, strict: bool = False) -> None:
    """Populate `borders.core_border_map` and flag border-facing channels."""
    border_map: dict = {}
    for point in borders.points():
        reason = _unmatched_reason(point, cores)
        if reason is not None:
            if strict:
                raise UnmatchedBorder(
                    kind_label=point.kind.value,
                    core_id=point.core_id,
                    direction=point.direction.value,
                    reason=reason,
                )
            logger.debug("ignoring %s border: %s", point.kind.value, reason)
            continue

        border_map.setdefault(point.core_id, {})[point.direction] = point
        channel = cores[point.core_id].channels.get(point.direction)
        if channel is not None:
            channel.is_border = True

    borders.core_border_map = border_map


def derive_topology(system: "System", *, strict_borders: bool = False) -> None:
    """Run every topology derivation step on a validated `system`."""
    populate_matrix_edges(system)
    assign_router_ids(system)
    if system.borders is not None:
        compute_core_border_map(system.borders, system.cores, strict=strict_borders)
