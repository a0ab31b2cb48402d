from __future__ import annotations

import pytest

from conftest import channel_xml, core_xml, grid_xml, system_xml
from manycore.codecs.manycore_xml import decode_manycore_text, parse_manycore_text
from manycore.core.errors import UnmatchedBorder
from manycore.core.model import Direction
from manycore.core.options import ParseOptions
from manycore.core.topology import compute_core_border_map


def _flags(core) -> tuple[bool, bool, bool, bool]:
    return (core.is_top, core.is_bottom, core.is_left, core.is_right)


def test_edge_flags_on_3x3_grid() -> None:
    system = parse_manycore_text(grid_xml(3, 3))

    assert _flags(system.cores[0]) == (True, False, True, False)
    assert _flags(system.cores[4]) == (False, False, False, False)
    assert _flags(system.cores[8]) == (False, True, False, True)
    assert _flags(system.cores[2]) == (True, False, False, True)
    assert _flags(system.cores[6]) == (False, True, True, False)
    assert system.cores[5].coordinates == (1, 2)
    assert system.core(4).coordinates == (1, 1)


def test_edge_flags_on_single_row_grid() -> None:
    system = parse_manycore_text(grid_xml(1, 3))

    assert all(c.is_top and c.is_bottom for c in system.cores)
    assert [c.is_left for c in system.cores] == [True, False, False]
    assert [c.is_right for c in system.cores] == [False, False, True]


def test_edge_flags_are_recomputed_not_read() -> None:
    cores = [core_xml(i, attrs={"is_top": "true"}) for i in range(4)]
    system = parse_manycore_text(system_xml(2, 2, cores))

    assert [c.is_top for c in system.cores] == [True, True, False, False]


def test_router_ids_mirror_core_ids_for_unordered_input() -> None:
    cores = [core_xml(i, router_attrs={"id": 0}) for i in (2, 0, 3, 1)]
    system = parse_manycore_text(system_xml(2, 2, cores))

    for core in system.cores:
        assert core.router.id == core.id


def _bordered_grid(borders: list[str]) -> str:
    cores = [
        core_xml(i, channels=[channel_xml(d) for d in ("North", "East", "South", "West")])
        for i in range(4)
    ]
    return system_xml(2, 2, cores, borders=borders)


def test_border_association_is_bidirectional() -> None:
    system = parse_manycore_text(
        _bordered_grid(
            [
                '<Source coreID="0" direction="North" taskid="0"/>',
                '<Sink coreID="3" direction="East" taskid="1"/>',
            ]
        )
    )
    borders = system.borders
    assert borders is not None

    assert set(borders.core_border_map) == {0, 3}
    assert borders.border_for_core(0)[Direction.NORTH].task_id == 0
    assert borders.border_for_core(3)[Direction.EAST].task_id == 1
    assert dict(borders.border_for_core(1)) == {}

    flagged = {(c.id, ch.direction) for c in system.cores for ch in c.channels if ch.is_border}
    assert flagged == {(0, Direction.NORTH), (3, Direction.EAST)}


@pytest.mark.parametrize(
    "border",
    [
        '<Source coreID="3" direction="North"/>',  # bottom-right core does not face north
        '<Sink coreID="9" direction="South"/>',  # outside the grid
        '<Sink coreID="0" direction="Local"/>',  # local never faces a grid edge
    ],
)
def test_unmatched_border_is_ignored_by_default(border: str) -> None:
    system = parse_manycore_text(_bordered_grid([border]))

    assert system.borders is not None
    assert system.borders.core_border_map == {}
    assert not any(ch.is_border for c in system.cores for ch in c.channels)


def test_unmatched_border_raises_in_strict_mode() -> None:
    text = _bordered_grid(['<Sink coreID="9" direction="South" taskid="2"/>'])

    with pytest.raises(UnmatchedBorder, match="outside the grid") as excinfo:
        parse_manycore_text(text, options=ParseOptions(strict_borders=True))
    assert (excinfo.value.border_kind, excinfo.value.core_id, excinfo.value.direction) == ("Sink", 9, "South")


def test_border_on_core_without_matching_channel_still_associates() -> None:
    system = parse_manycore_text(system_xml(1, 1, [core_xml(0)], borders=['<Source coreID="0" direction="West"/>']))

    assert system.borders is not None
    assert Direction.WEST in system.borders.border_for_core(0)


def test_compute_core_border_map_requires_matrix_edges() -> None:
    # Without derived edge flags no core faces any direction.
    system = decode_manycore_text(_bordered_grid(['<Source coreID="0" direction="North"/>']))
    assert system.borders is not None

    compute_core_border_map(system.borders, system.cores)

    assert system.borders.core_border_map == {}
