"""Runtime options for the model construction pipeline.

Defaults reproduce the baseline behaviour (silent duplicate task overwrite,
silently ignored unmatched borders). Strict flags turn those tolerated
conditions into errors.

Environment overrides (via `ParseOptions.from_env()`):
- MANYCORE_STRICT_TASK_ALLOCATION
- MANYCORE_STRICT_BORDERS
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}

_ENV_FIELDS = {
    "MANYCORE_STRICT_TASK_ALLOCATION": "strict_task_allocation",
    "MANYCORE_STRICT_BORDERS": "strict_borders",
}


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in _TRUTHY
    return False


@dataclass(frozen=True)
class ParseOptions:
    """Options consumed by `manycore.core.build.build_system`.

    Attributes:
        strict_task_allocation: raise `DuplicateTaskAllocation` when two cores
            declare the same allocated task instead of letting the later core win.
        strict_borders: raise `UnmatchedBorder` when a border point does not
            attach to an edge core instead of ignoring it.
    """

    strict_task_allocation: bool = False
    strict_borders: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, base: ParseOptions | None = None) -> ParseOptions:
        """Return options with environment overrides applied over `base` (or defaults)."""
        env = os.environ if environ is None else environ
        s = base if base is not None else cls()
        for var, field_name in _ENV_FIELDS.items():
            if var in env:
                s = replace(s, **{field_name: _bool(env[var])})
        return s
