"""Schema Model for a manycore system.

The dataclasses in this module mirror the XML record tree one-to-one for wire
fields. Fields populated by the construction pipeline (router ids, matrix-edge
flags, border associations, the task->core map and the attribute schema) are
declared with `compare=False`: two models are equal iff their wire-represented
content is equal.

Ownership is strictly hierarchical: a `System` owns its `Core` list, each
`Core` owns its `Router` and `Channels`.

This module must not import codecs/cli.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from manycore.core.attributes import AttributeSchema

# Ordered free-form attribute bag; keys carry the "@" prefix (eg "@age").
Attributes = dict[str, str]


class Direction(str, Enum):
    NORTH = "North"
    EAST = "East"
    SOUTH = "South"
    WEST = "West"
    LOCAL = "Local"


class BorderKind(str, Enum):
    SOURCE = "Source"
    SINK = "Sink"


@dataclass
class Router:
    """A core's router. `id` is always the owning core's id once built."""

    other_attributes: Attributes = field(default_factory=dict)
    id: int | None = field(default=None, compare=False)


@dataclass
class Channel:
    direction: Direction
    bandwidth: int | None = None
    actual_com_cost: int | None = None
    source: int | None = None
    status: str | None = None
    other_attributes: Attributes = field(default_factory=dict)
    # Derived: the channel faces a border point.
    is_border: bool = field(default=False, compare=False)

    def measurements(self) -> Attributes:
        """Typed wire fields that are present, rendered as `@`-keyed text."""
        out: Attributes = {}
        if self.bandwidth is not None:
            out["@bandwidth"] = str(self.bandwidth)
        if self.actual_com_cost is not None:
            out["@actualComCost"] = str(self.actual_com_cost)
        if self.source is not None:
            out["@source"] = str(self.source)
        if self.status is not None:
            out["@status"] = self.status
        return out


@dataclass
class Channels:
    """Per-core channel set, ordered by document order."""

    channel: dict[Direction, Channel] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Channel]:
        return iter(self.channel.values())

    def __len__(self) -> int:
        return len(self.channel)

    def get(self, direction: Direction) -> Channel | None:
        return self.channel.get(direction)


@dataclass
class Core:
    id: int
    router: Router = field(default_factory=Router)
    allocated_task: int | None = None
    channels: Channels = field(default_factory=Channels)
    other_attributes: Attributes = field(default_factory=dict)

    # Derived matrix position (row-major).
    coordinates: tuple[int, int] | None = field(default=None, compare=False)
    is_top: bool = field(default=False, compare=False)
    is_bottom: bool = field(default=False, compare=False)
    is_left: bool = field(default=False, compare=False)
    is_right: bool = field(default=False, compare=False)

    def populate_matrix_edge(self, rows: int, columns: int) -> None:
        row, column = divmod(self.id, columns)
        self.coordinates = (row, column)
        self.is_top = row == 0
        self.is_bottom = row == rows - 1
        self.is_left = column == 0
        self.is_right = column == columns - 1

    def faces(self, direction: Direction) -> bool:
        """True if this core sits on the grid edge facing `direction`."""
        return {
            Direction.NORTH: self.is_top,
            Direction.SOUTH: self.is_bottom,
            Direction.WEST: self.is_left,
            Direction.EAST: self.is_right,
        }.get(direction, False)


@dataclass
class Task:
    id: int
    computation_cost: int


@dataclass
class Edge:
    source: int
    destination: int
    communication_cost: int


@dataclass
class TaskGraph:
    tasks: list[Task] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)


@dataclass
class BorderPoint:
    """A sink or source attached to the outside of the grid."""

    kind: BorderKind
    core_id: int
    direction: Direction
    task_id: int | None = None
    other_attributes: Attributes = field(default_factory=dict)


@dataclass
class Borders:
    sources: list[BorderPoint] = field(default_factory=list)
    sinks: list[BorderPoint] = field(default_factory=list)
    # Derived: core id -> {direction: border point}.
    core_border_map: dict[int, dict[Direction, BorderPoint]] = field(default_factory=dict, compare=False)

    def points(self) -> Iterator[BorderPoint]:
        yield from self.sources
        yield from self.sinks

    def border_for_core(self, core_id: int) -> Mapping[Direction, BorderPoint]:
        return MappingProxyType(self.core_border_map.get(core_id, {}))


@dataclass
class System:
    """Root aggregate decoded from a `<ManycoreSystem>` document.

    Build with `manycore.core.build.build_system` (the codecs do this for you)
    before reading any derived field.
    """

    rows: int
    columns: int
    task_graph: TaskGraph = field(default_factory=TaskGraph)
    cores: list[Core] = field(default_factory=list)
    borders: Borders | None = None
    routing_algo: str | None = None
    xmlns: str | None = None
    xmlns_xsi: str | None = None
    xsi_schema_location: str | None = None

    # Derived, never serialized.
    task_core_map: Mapping[int, int] = field(default_factory=dict, compare=False, repr=False)
    attribute_schema: AttributeSchema = field(default_factory=AttributeSchema, compare=False, repr=False)

    def core(self, core_id: int) -> Core:
        """Return the core with `core_id` (cores are sorted by id once built)."""
        return self.cores[core_id]

    def task_core(self, task_id: int) -> Core | None:
        idx = self.task_core_map.get(task_id)
        return None if idx is None else self.cores[idx]
