"""Internal decoding helpers for the manycore XML codec.

Private module: lxml element tree -> Schema Model (no derivation). Public API
is in `manycore_xml.py`.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterator

from lxml import etree

from manycore.core.errors import DecodeError
from manycore.core.model import (
    Attributes,
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

logger = logging.getLogger(__name__)

XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

_MAX_GRID_SIDE = 255

# Typed wire attributes per element; everything else lands in `other_attributes`.
_CORE_FIELDS = {"id", "allocatedTask"}
_ROUTER_FIELDS = {"id"}
_CHANNEL_FIELDS = {"direction", "bandwidth", "actualComCost", "source", "status"}
_BORDER_FIELDS = {"coreID", "direction", "taskid"}

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)

# The text is already decoded; a declared charset must not be applied again.
_DECL_ENCODING_RE = re.compile(r"""^(\s*<\?xml\b[^>]*?)\s+encoding\s*=\s*(["'])[^"']*\2""")


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)


def _local(name: Any) -> str:
    return etree.QName(name).localname


def _children(el: Any) -> Iterator[Any]:
    """Element children only (comments and processing instructions are skipped)."""
    for child in el:
        if isinstance(child.tag, str):
            yield child


def _child(el: Any, name: str, *, where: str, required: bool) -> Any | None:
    found = [c for c in _children(el) if _local(c.tag) == name]
    if len(found) > 1:
        raise DecodeError(f"{where}: expected at most one <{name}>, found {len(found)}")
    if not found:
        if required:
            raise DecodeError(f"{where}: missing required element <{name}>")
        return None
    return found[0]


def _attr(el: Any, name: str) -> str | None:
    # Typed fields are never namespace-qualified.
    return el.get(name)


def _to_int(raw: str, *, where: str) -> int:
    s = raw.strip()
    if not _INT_RE.fullmatch(s):
        raise DecodeError(f"{where}: expected a non-negative integer, got {raw!r}")
    value = int(s)
    if value < 0:
        raise DecodeError(f"{where}: expected a non-negative integer, got {raw!r}")
    return value


def _require_int(el: Any, name: str, *, where: str) -> int:
    raw = _attr(el, name)
    if raw is None:
        raise DecodeError(f"{where}: missing required attribute '{name}'")
    return _to_int(raw, where=f"{where}@{name}")


def _optional_int(el: Any, name: str, *, where: str) -> int | None:
    raw = _attr(el, name)
    if raw is None:
        return None
    return _to_int(raw, where=f"{where}@{name}")


def _direction(el: Any, name: str, *, where: str) -> Direction:
    raw = _attr(el, name)
    if raw is None:
        raise DecodeError(f"{where}: missing required attribute '{name}'")
    try:
        return Direction(raw.strip())
    except ValueError as e:
        allowed = [d.value for d in Direction]
        raise DecodeError(f"{where}@{name}: expected one of {allowed}, got {raw!r}") from e


def _other_attributes(el: Any, *, exclude: set[str]) -> Attributes:
    out: Attributes = {}
    for key, value in el.attrib.items():
        if etree.QName(key).namespace is not None:
            logger.debug("ignoring namespaced attribute %s on <%s>", key, _local(el.tag))
            continue
        if key in exclude:
            continue
        out[f"@{key}"] = value
    return out


# ----------------------------
# Element decoders
# ----------------------------


def _decode_task_graph(el: Any) -> TaskGraph:
    graph = TaskGraph()
    for i, child in enumerate(_children(el)):
        tag = _local(child.tag)
        where = f"TaskGraph[{i}]"
        if tag == "Task":
            graph.tasks.append(
                Task(
                    id=_require_int(child, "id", where=where),
                    computation_cost=_require_int(child, "computationCost", where=where),
                )
            )
        elif tag == "Edge":
            graph.edges.append(
                Edge(
                    source=_require_int(child, "from", where=where),
                    destination=_require_int(child, "to", where=where),
                    communication_cost=_require_int(child, "communicationCost", where=where),
                )
            )
        else:
            logger.debug("ignoring unknown <%s> in <TaskGraph>", tag)
    return graph


def _decode_channels(el: Any, *, where: str) -> Channels:
    channels = Channels()
    channel_els = []
    for child in _children(el):
        if _local(child.tag) == "Channel":
            channel_els.append(child)
        else:
            logger.debug("ignoring unknown <%s> in <Channels>", _local(child.tag))
    for i, child in enumerate(channel_els):
        w = f"{where}.Channel[{i}]"
        direction = _direction(child, "direction", where=w)
        if direction in channels.channel:
            raise DecodeError(f"{w}: duplicate channel direction '{direction.value}'")
        channels.channel[direction] = Channel(
            direction=direction,
            bandwidth=_optional_int(child, "bandwidth", where=w),
            actual_com_cost=_optional_int(child, "actualComCost", where=w),
            source=_optional_int(child, "source", where=w),
            status=_attr(child, "status"),
            other_attributes=_other_attributes(child, exclude=_CHANNEL_FIELDS),
        )
    return channels


def _decode_core(el: Any, *, index: int) -> Core:
    where = f"Cores.Core[{index}]"
    router_el = _child(el, "Router", where=where, required=True)
    channels_el = _child(el, "Channels", where=where, required=False)
    return Core(
        id=_require_int(el, "id", where=where),
        # Router ids are derived from the owning core, never read.
        router=Router(other_attributes=_other_attributes(router_el, exclude=_ROUTER_FIELDS)),
        allocated_task=_optional_int(el, "allocatedTask", where=where),
        channels=_decode_channels(channels_el, where=where) if channels_el is not None else Channels(),
        other_attributes=_other_attributes(el, exclude=_CORE_FIELDS),
    )


def _decode_cores(el: Any) -> list[Core]:
    cores_els = [c for c in _children(el) if _local(c.tag) == "Core"]
    return [_decode_core(c, index=i) for i, c in enumerate(cores_els)]


def _decode_borders(el: Any) -> Borders:
    borders = Borders()
    for i, child in enumerate(_children(el)):
        tag = _local(child.tag)
        if tag not in {"Source", "Sink"}:
            logger.debug("ignoring unknown <%s> in <Borders>", tag)
            continue
        where = f"Borders.{tag}[{i}]"
        point = BorderPoint(
            kind=BorderKind(tag),
            core_id=_require_int(child, "coreID", where=where),
            direction=_direction(child, "direction", where=where),
            task_id=_optional_int(child, "taskid", where=where),
            other_attributes=_other_attributes(child, exclude=_BORDER_FIELDS),
        )
        if point.kind is BorderKind.SOURCE:
            borders.sources.append(point)
        else:
            borders.sinks.append(point)
    return borders


def _grid_side(root: Any, name: str) -> int:
    value = _require_int(root, name, where="ManycoreSystem")
    if not 1 <= value <= _MAX_GRID_SIDE:
        raise DecodeError(f"ManycoreSystem@{name}: expected 1..{_MAX_GRID_SIDE}, got {value}")
    return value


def decode_root(root: Any) -> System:
    """Decode a `<ManycoreSystem>` element into an un-built `System`."""
    if _local(root.tag) != "ManycoreSystem":
        raise DecodeError(f"expected root element <ManycoreSystem>, got <{_local(root.tag)}>")

    task_graph_el = _child(root, "TaskGraph", where="ManycoreSystem", required=True)
    cores_el = _child(root, "Cores", where="ManycoreSystem", required=True)
    borders_el = _child(root, "Borders", where="ManycoreSystem", required=False)

    return System(
        rows=_grid_side(root, "rows"),
        columns=_grid_side(root, "columns"),
        task_graph=_decode_task_graph(task_graph_el),
        cores=_decode_cores(cores_el),
        borders=_decode_borders(borders_el) if borders_el is not None else None,
        routing_algo=_attr(root, "routingAlgo"),
        xmlns=root.nsmap.get(None),
        xmlns_xsi=root.nsmap.get("xsi"),
        xsi_schema_location=root.get(f"{{{XSI_NS}}}schemaLocation"),
    )


def decode_text(text: str) -> System:
    """Parse XML text and decode it; syntax errors become `DecodeError`."""
    if not text.strip():
        raise DecodeError("document is empty")
    try:
        root = etree.fromstring(_DECL_ENCODING_RE.sub(r"\1", text, count=1).encode("utf-8"), _parser())
    except etree.XMLSyntaxError as e:
        raise DecodeError(str(e)) from e
    return decode_root(root)
