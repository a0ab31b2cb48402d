"""Structural Validator.

Cross-checks the decoded core collection against the declared grid:

- `len(cores) == rows * columns` (else `StructuralMismatch`);
- once sorted ascending by id, core ids are exactly `0..N-1`
  (else `IdentifierSequenceError` for the first offending core).

Validation is fail-fast. Its only side effect is sorting `system.cores` by id,
which every later pipeline stage relies on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from manycore.core.errors import IdentifierSequenceError, StructuralMismatch

if TYPE_CHECKING:  # pragma: no cover
    from manycore.core.model import System

logger = logging.getLogger(__name__)


def validate_structure(system: "System") -> None:
    """Validate core count and id sequencing, sorting cores by id in place.

    Raises:
        StructuralMismatch: core count differs from rows * columns.
        IdentifierSequenceError: sorted ids are not contiguous from 0.
    """
    expected = system.rows * system.columns
    actual = len(system.cores)
    if actual != expected:
        raise StructuralMismatch(expected=expected, actual=actual, rows=system.rows, columns=system.columns)

    # Input order is not guaranteed.
    system.cores.sort(key=lambda c: c.id)

    previous: int | None = None
    for expected_id, core in enumerate(system.cores):
        if core.id != expected_id:
            raise IdentifierSequenceError(expected=expected_id, encountered=core.id, previous=previous)
        previous = core.id

    logger.debug("validated %dx%d grid (%d cores)", system.rows, system.columns, actual)
