"""Model construction pipeline.

validate -> derive topology -> index placement -> infer attribute schema.

Each stage runs once per model, immediately after decode. Derivation and
inference cannot fail once validation has passed (strict options aside).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from manycore.core.attributes import SUPPORTED_ALGORITHMS, infer_attribute_schema
from manycore.core.options import ParseOptions
from manycore.core.placement import index_placement
from manycore.core.topology import derive_topology
from manycore.core.validate import validate_structure

if TYPE_CHECKING:  # pragma: no cover
    from manycore.core.model import System

logger = logging.getLogger(__name__)


def build_system(
    system: "System",
    *,
    options: ParseOptions | None = None,
    algorithms: Iterable[str] = SUPPORTED_ALGORITHMS,
) -> "System":
    """Populate every derived field of a freshly decoded `system` in place.

    Returns the same instance for chaining.

    Raises:
        StructuralMismatch, IdentifierSequenceError: structural validation failed.
        DuplicateTaskAllocation: with `options.strict_task_allocation`.
        UnmatchedBorder: with `options.strict_borders`.
    """
    opts = options if options is not None else ParseOptions()

    validate_structure(system)
    derive_topology(system, strict_borders=opts.strict_borders)
    system.task_core_map = index_placement(system, strict=opts.strict_task_allocation)
    system.attribute_schema = infer_attribute_schema(system, algorithms=algorithms)

    logger.debug(
        "built %dx%d system: %d allocated tasks, observed algorithm %s",
        system.rows,
        system.columns,
        len(system.task_core_map),
        system.routing_algo,
    )
    return system
