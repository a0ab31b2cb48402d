"""Attribute Schema Inferencer.

Scans the free-form attribute bags of cores, routers and channels and builds
a typed registry of every attribute key observed, merged with a fixed set of
pinned keys. Downstream renderers use the registry to offer selectable
attributes without hardcoding the document vocabulary.

Rules:
- pinned keys are inserted first and their kinds are never overridden;
- a free key is classified the first time it is seen (Number if the text is a
  finite int/float, Text otherwise); later occurrences never reclassify it;
- scan order is cores ascending by id; per core: core bag, router bag, then
  each channel in channel-set order.

Inference never fails.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Mapping

if TYPE_CHECKING:  # pragma: no cover
    from manycore.core.model import System

logger = logging.getLogger(__name__)

ID_KEY = "@id"
COORDINATES_KEY = "@coordinates"
BORDER_ROUTERS_KEY = "@borderRouters"
ROUTING_KEY = "@routingAlgorithm"

# Routing algorithms a downstream router/renderer knows how to interpret.
SUPPORTED_ALGORITHMS: tuple[str, ...] = ("RowFirst", "ColumnFirst")

_CAMEL_RE = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class AttributeKind(str, Enum):
    TEXT = "Text"
    NUMBER = "Number"
    COORDINATES = "Coordinates"
    BOOLEAN = "Boolean"
    ROUTING = "Routing"


@dataclass(frozen=True)
class ProcessedAttribute:
    kind: AttributeKind
    display: str


AttributeRegistry = dict[str, ProcessedAttribute]


@dataclass
class AttributeSchema:
    """Inferred attribute catalogue ("configurable attributes").

    Registries are ordered by key.
    """

    core: AttributeRegistry = field(default_factory=dict)
    router: AttributeRegistry = field(default_factory=dict)
    channel: AttributeRegistry = field(default_factory=dict)
    algorithms: tuple[str, ...] = ()
    observed_algorithm: str | None = None

    def kinds(self, registry: str) -> dict[str, AttributeKind]:
        """Return `{key: kind}` for one of "core", "router", "channel"."""
        reg: AttributeRegistry = getattr(self, registry)
        return {k: v.kind for k, v in reg.items()}

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""

        def _reg(reg: AttributeRegistry) -> dict[str, dict[str, str]]:
            return {k: {"type": v.kind.value, "display": v.display} for k, v in reg.items()}

        return {
            "core": _reg(self.core),
            "router": _reg(self.router),
            "channel": _reg(self.channel),
            "algorithms": list(self.algorithms),
            "observed_algorithm": self.observed_algorithm,
        }


def display_name(key: str) -> str:
    """Human-readable label for an attribute key: "@actualComCost" -> "Actual Com Cost"."""
    words = _CAMEL_RE.findall(key.lstrip("@"))
    if not words:
        return key.lstrip("@")
    return " ".join(w[:1].upper() + w[1:] for w in words)


def classify_value(value: str) -> AttributeKind:
    s = value.strip()
    if not _NUMBER_RE.fullmatch(s):
        return AttributeKind.TEXT
    # Overflowing exponents parse to inf.
    return AttributeKind.NUMBER if math.isfinite(float(s)) else AttributeKind.TEXT


def _insert_manual(reg: AttributeRegistry, key: str, kind: AttributeKind, display: str) -> None:
    reg[key] = ProcessedAttribute(kind, display)


def _extend_from(reg: AttributeRegistry, attrs: Mapping[str, str]) -> None:
    for key, value in attrs.items():
        if key in reg:
            continue
        reg[key] = ProcessedAttribute(classify_value(value), display_name(key))


def _sorted(reg: AttributeRegistry) -> AttributeRegistry:
    return dict(sorted(reg.items()))


def infer_attribute_schema(system: "System", *, algorithms: Iterable[str] = SUPPORTED_ALGORITHMS) -> AttributeSchema:
    """Build the attribute schema for a validated `system`.

    `system.cores` must already be sorted by id.
    """
    core_attributes: AttributeRegistry = {}
    router_attributes: AttributeRegistry = {}
    channel_attributes: AttributeRegistry = {}

    _insert_manual(core_attributes, ID_KEY, AttributeKind.TEXT, "ID")
    _insert_manual(core_attributes, COORDINATES_KEY, AttributeKind.COORDINATES, "Coordinates")
    _insert_manual(channel_attributes, ROUTING_KEY, AttributeKind.ROUTING, "Routing Algorithm")
    if system.borders is not None:
        _insert_manual(channel_attributes, BORDER_ROUTERS_KEY, AttributeKind.BOOLEAN, "Border Routers")

    for core in system.cores:
        _extend_from(core_attributes, core.other_attributes)
        _extend_from(router_attributes, core.router.other_attributes)
        for channel in core.channels:
            _extend_from(channel_attributes, channel.measurements())
            _extend_from(channel_attributes, channel.other_attributes)

    logger.debug(
        "inferred %d core, %d router, %d channel attributes",
        len(core_attributes),
        len(router_attributes),
        len(channel_attributes),
    )

    return AttributeSchema(
        core=_sorted(core_attributes),
        router=_sorted(router_attributes),
        channel=_sorted(channel_attributes),
        algorithms=tuple(algorithms),
        observed_algorithm=system.routing_algo,
    )
