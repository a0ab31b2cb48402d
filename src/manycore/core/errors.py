"""Error taxonomy for manycore model construction.

Every failure surfaced by the pipeline is a subclass of `ManycoreError` and
describes exactly one violated contract. Each class carries a stable `kind`
tag plus the structured fields needed for diagnostics, so callers can either
match on the class or on `err.kind`.

Notes:
    - Errors are never retried internally and no partial model is returned.
    - Underlying causes (lxml syntax errors, OSError) are chained via
      `raise ... from`.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ManycoreError",
    "DecodeError",
    "StructuralMismatch",
    "IdentifierSequenceError",
    "IoError",
    "DuplicateTaskAllocation",
    "UnmatchedBorder",
]


class ManycoreError(Exception):
    """Base class for all manycore model errors."""

    kind: str = "manycore"


class DecodeError(ManycoreError):
    """The document could not be decoded into the typed record tree."""

    kind = "decode"

    def __init__(self, cause: str):
        super().__init__(f"could not decode manycore document: {cause}")
        self.cause = cause


class StructuralMismatch(ManycoreError):
    """Core count does not equal rows * columns."""

    kind = "structural_mismatch"

    def __init__(self, *, expected: int, actual: int, rows: int, columns: int):
        super().__init__(
            f"Expected {expected} cores, found {actual}. "
            f"Hint: make sure you provided the correct number of rows ({rows}) and columns ({columns})."
        )
        self.expected = expected
        self.actual = actual
        self.rows = rows
        self.columns = columns


class IdentifierSequenceError(ManycoreError):
    """Sorted core ids are not the contiguous sequence 0..N-1."""

    kind = "identifier_sequence"

    def __init__(self, *, expected: int, encountered: int, previous: int | None):
        prev = "none" if previous is None else str(previous)
        super().__init__(
            "Core IDs must be incremental starting from 0. "
            f"Was expecting ID {expected}, got {encountered}. Previously inspected core had ID {prev}."
        )
        self.expected = expected
        self.encountered = encountered
        self.previous = previous


class IoError(ManycoreError):
    """The source document could not be read."""

    kind = "io"

    def __init__(self, path: Any, cause: str):
        super().__init__(f"could not read {path}: {cause}")
        self.path = path
        self.cause = cause


class DuplicateTaskAllocation(ManycoreError):
    """Two cores declare the same allocated task (strict mode only)."""

    kind = "duplicate_task_allocation"

    def __init__(self, *, task_id: int, first_core: int, second_core: int):
        super().__init__(
            f"task {task_id} is allocated to both core {first_core} and core {second_core}"
        )
        self.task_id = task_id
        self.first_core = first_core
        self.second_core = second_core


class UnmatchedBorder(ManycoreError):
    """A border point does not attach to any edge core (strict mode only)."""

    kind = "unmatched_border"

    def __init__(self, *, kind_label: str, core_id: int, direction: str, reason: str):
        super().__init__(f"{kind_label} border at core {core_id} ({direction}) is unmatched: {reason}")
        self.border_kind = kind_label
        self.core_id = core_id
        self.direction = direction
        self.reason = reason
