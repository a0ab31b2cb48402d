"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import manycore` to fail.

We ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared document builders
# =============================================================================

NS = "https://www.york.ac.uk/physics-engineering-technology/ManycoreSystems"
XSI = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = f"{NS} manycore_schema.xsd"


def _attrs(values: dict[str, Any] | None) -> str:
    if not values:
        return ""
    return "".join(f' {k}="{v}"' for k, v in values.items())


def channel_xml(direction: str, **attrs: Any) -> str:
    return f'<Channel direction="{direction}"{_attrs(attrs)}/>'


def core_xml(
    core_id: int,
    *,
    task: int | None = None,
    attrs: dict[str, Any] | None = None,
    router_attrs: dict[str, Any] | None = None,
    channels: list[str] | None = None,
) -> str:
    task_attr = f' allocatedTask="{task}"' if task is not None else ""
    body = f"<Router{_attrs(router_attrs)}/>"
    if channels:
        body += "<Channels>" + "".join(channels) + "</Channels>"
    return f'<Core id="{core_id}"{task_attr}{_attrs(attrs)}>{body}</Core>'


def system_xml(
    rows: int,
    columns: int,
    cores: list[str],
    *,
    routing_algo: str | None = None,
    task_graph: str = "",
    borders: list[str] | None = None,
) -> str:
    algo = f' routingAlgo="{routing_algo}"' if routing_algo is not None else ""
    borders_xml = "<Borders>" + "".join(borders) + "</Borders>" if borders is not None else ""
    return (
        f'<ManycoreSystem xmlns="{NS}" xmlns:xsi="{XSI}" xsi:schemaLocation="{SCHEMA_LOCATION}"'
        f' rows="{rows}" columns="{columns}"{algo}>'
        f"<TaskGraph>{task_graph}</TaskGraph>"
        f"<Cores>{''.join(cores)}</Cores>"
        f"{borders_xml}"
        "</ManycoreSystem>"
    )


def grid_xml(rows: int, columns: int, **kwargs: Any) -> str:
    """Plain `rows x columns` grid with ids 0..N-1 and no attributes."""
    return system_xml(rows, columns, [core_xml(i) for i in range(rows * columns)], **kwargs)


END_TO_END_TASKS = {1: 3, 4: 1, 6: 0, 7: 2}

END_TO_END_TASK_GRAPH = (
    '<Task id="0" computationCost="40"/>'
    '<Task id="1" computationCost="80"/>'
    '<Task id="2" computationCost="60"/>'
    '<Task id="3" computationCost="40"/>'
    '<Edge from="0" to="1" communicationCost="30"/>'
    '<Edge from="0" to="2" communicationCost="20"/>'
    '<Edge from="1" to="3" communicationCost="50"/>'
    '<Edge from="2" to="3" communicationCost="10"/>'
)


@pytest.fixture
def end_to_end_xml() -> str:
    """3x3 grid, routed with RowFirst, tasks 3,1,0,2 on cores 1,4,6,7."""
    cores = []
    for i in range(9):
        channels = [
            channel_xml("North", bandwidth=400, actualComCost=30 + i, status="Normal", age=10),
            channel_xml("East", bandwidth=400, actualComCost=0, status="Normal", age=12),
        ]
        cores.append(
            core_xml(
                i,
                task=END_TO_END_TASKS.get(i),
                attrs={"age": 200 + i, "status": "High", "temperature": 40},
                router_attrs={"age": 30 + i, "temperature": 45, "status": "Normal"},
                channels=channels,
            )
        )
    return system_xml(
        3,
        3,
        cores,
        routing_algo="RowFirst",
        task_graph=END_TO_END_TASK_GRAPH,
        borders=[
            '<Source coreID="0" direction="North" taskid="0"/>',
            '<Sink coreID="8" direction="East" taskid="3"/>',
        ],
    )
