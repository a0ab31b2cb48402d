"""Internal encoding helpers for the manycore XML codec.

Private module: Schema Model -> lxml element tree -> text. Only wire fields are
written; derived fields (router ids, edge flags, border map, task->core map,
attribute schema) are never serialized.
"""

from __future__ import annotations

from typing import Any, Mapping

from lxml import etree

from manycore.codecs._xml_decoder import XSI_NS
from manycore.core.model import BorderPoint, Channel, Core, System, TaskGraph

INDENT = " " * 4


class _Builder:
    """Creates elements in the document's default namespace (if any)."""

    def __init__(self, system: System):
        self.ns = system.xmlns
        nsmap: dict[str | None, str] = {}
        if system.xmlns is not None:
            nsmap[None] = system.xmlns
        if system.xmlns_xsi is not None or system.xsi_schema_location is not None:
            nsmap["xsi"] = system.xmlns_xsi or XSI_NS
        self.nsmap = nsmap

    def tag(self, name: str) -> str:
        return f"{{{self.ns}}}{name}" if self.ns else name

    def root(self, name: str) -> Any:
        return etree.Element(self.tag(name), nsmap=self.nsmap or None)

    def sub(self, parent: Any, name: str) -> Any:
        return etree.SubElement(parent, self.tag(name))


def _set(el: Any, name: str, value: Any) -> None:
    if value is not None:
        el.set(name, str(value))


def _set_other(el: Any, attrs: Mapping[str, str]) -> None:
    for key, value in attrs.items():
        el.set(key[1:] if key.startswith("@") else key, value)


def _encode_task_graph(b: _Builder, parent: Any, graph: TaskGraph) -> None:
    el = b.sub(parent, "TaskGraph")
    for task in graph.tasks:
        t = b.sub(el, "Task")
        _set(t, "id", task.id)
        _set(t, "computationCost", task.computation_cost)
    for edge in graph.edges:
        e = b.sub(el, "Edge")
        _set(e, "from", edge.source)
        _set(e, "to", edge.destination)
        _set(e, "communicationCost", edge.communication_cost)


def _encode_channel(b: _Builder, parent: Any, channel: Channel) -> None:
    el = b.sub(parent, "Channel")
    _set(el, "direction", channel.direction.value)
    _set(el, "bandwidth", channel.bandwidth)
    _set(el, "actualComCost", channel.actual_com_cost)
    _set(el, "source", channel.source)
    _set(el, "status", channel.status)
    _set_other(el, channel.other_attributes)


def _encode_core(b: _Builder, parent: Any, core: Core) -> None:
    el = b.sub(parent, "Core")
    _set(el, "id", core.id)
    _set(el, "allocatedTask", core.allocated_task)
    _set_other(el, core.other_attributes)

    router = b.sub(el, "Router")
    _set_other(router, core.router.other_attributes)

    if len(core.channels):
        channels = b.sub(el, "Channels")
        for channel in core.channels:
            _encode_channel(b, channels, channel)


def _encode_border_point(b: _Builder, parent: Any, point: BorderPoint) -> None:
    el = b.sub(parent, point.kind.value)
    _set(el, "coreID", point.core_id)
    _set(el, "direction", point.direction.value)
    _set(el, "taskid", point.task_id)
    _set_other(el, point.other_attributes)


def encode_system(system: System) -> Any:
    """Build the `<ManycoreSystem>` element tree for `system`."""
    b = _Builder(system)
    root = b.root("ManycoreSystem")
    _set(root, f"{{{XSI_NS}}}schemaLocation", system.xsi_schema_location)
    _set(root, "rows", system.rows)
    _set(root, "columns", system.columns)
    _set(root, "routingAlgo", system.routing_algo)

    _encode_task_graph(b, root, system.task_graph)

    cores = b.sub(root, "Cores")
    for core in system.cores:
        _encode_core(b, cores, core)

    if system.borders is not None:
        borders = b.sub(root, "Borders")
        for point in system.borders.points():
            _encode_border_point(b, borders, point)

    return root


def encode_text(system: System) -> str:
    root = encode_system(system)
    etree.indent(root, space=INDENT)
    return etree.tostring(root, encoding="unicode") + "\n"
