"""manycore core: schema model and the model construction pipeline.

This package is intentionally standalone and must not import CLI/codecs
to avoid circular dependencies.
"""

from __future__ import annotations

from .attributes import (
    BORDER_ROUTERS_KEY,
    COORDINATES_KEY,
    ID_KEY,
    ROUTING_KEY,
    SUPPORTED_ALGORITHMS,
    AttributeKind,
    AttributeSchema,
    ProcessedAttribute,
    infer_attribute_schema,
)
from .build import build_system
from .errors import (
    DecodeError,
    DuplicateTaskAllocation,
    IdentifierSequenceError,
    IoError,
    ManycoreError,
    StructuralMismatch,
    UnmatchedBorder,
)
from .model import (
    BorderKind,
    BorderPoint,
    Borders,
    Channel,
    Channels,
    Core,
    Direction,
    Edge,
    Router,
    System,
    Task,
    TaskGraph,
)
from .options import ParseOptions
from .placement import index_placement
from .topology import derive_topology
from .validate import validate_structure

__all__ = [
    "AttributeKind",
    "AttributeSchema",
    "ProcessedAttribute",
    "SUPPORTED_ALGORITHMS",
    "ID_KEY",
    "COORDINATES_KEY",
    "ROUTING_KEY",
    "BORDER_ROUTERS_KEY",
    "infer_attribute_schema",
    "build_system",
    "ManycoreError",
    "DecodeError",
    "StructuralMismatch",
    "IdentifierSequenceError",
    "IoError",
    "DuplicateTaskAllocation",
    "UnmatchedBorder",
    "BorderKind",
    "BorderPoint",
    "Borders",
    "Channel",
    "Channels",
    "Core",
    "Direction",
    "Edge",
    "Router",
    "System",
    "Task",
    "TaskGraph",
    "ParseOptions",
    "index_placement",
    "derive_topology",
    "validate_structure",
]
