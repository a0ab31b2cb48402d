from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from conftest import core_xml, system_xml
from manycore import __version__
from manycore.cli.main import app
from manycore.codecs.manycore_xml import read_manycore_xml


def _write(tmp_path: Path, text: str, name: str = "system.xml") -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_version() -> None:
    res = CliRunner().invoke(app, ["version"])
    assert res.exit_code == 0
    assert res.output.strip() == __version__


def test_validate_ok(tmp_path: Path, end_to_end_xml: str) -> None:
    path = _write(tmp_path, end_to_end_xml)

    res = CliRunner().invoke(app, ["validate", str(path)])

    assert res.exit_code == 0
    assert res.output.strip() == "OK"


def test_validate_reports_single_error_and_exits_1(tmp_path: Path) -> None:
    path = _write(tmp_path, system_xml(1, 3, [core_xml(0), core_xml(1), core_xml(3)]))

    res = CliRunner().invoke(app, ["validate", str(path)])

    assert res.exit_code == 1
    assert "identifier_sequence" in res.output
    assert "Was expecting ID 2, got 3" in res.output


def test_validate_missing_file_is_io_error(tmp_path: Path) -> None:
    res = CliRunner().invoke(app, ["validate", str(tmp_path / "nope.xml")])

    assert res.exit_code == 1
    assert "error [io]" in res.output


def test_validate_strict_tasks_flag(tmp_path: Path) -> None:
    path = _write(tmp_path, system_xml(1, 2, [core_xml(0, task=1), core_xml(1, task=1)]))
    runner = CliRunner()

    assert runner.invoke(app, ["validate", str(path)]).exit_code == 0

    res = runner.invoke(app, ["validate", "--strict-tasks", str(path)])
    assert res.exit_code == 1
    assert "duplicate_task_allocation" in res.output


def test_inspect_prints_derived_metadata(tmp_path: Path, end_to_end_xml: str) -> None:
    path = _write(tmp_path, end_to_end_xml)

    res = CliRunner().invoke(app, ["inspect", str(path)])

    assert res.exit_code == 0
    report = json.loads(res.output)
    assert report["task_core_map"] == {"0": 6, "1": 4, "2": 7, "3": 1}
    assert report["routing_algo"] == "RowFirst"
    assert report["attributes"]["router"]["@status"]["type"] == "Text"


def test_reencode_writes_equal_model(tmp_path: Path, end_to_end_xml: str) -> None:
    path = _write(tmp_path, end_to_end_xml)
    out = tmp_path / "out" / "reencoded.xml"

    res = CliRunner().invoke(app, ["reencode", str(path), "--out", str(out)])

    assert res.exit_code == 0
    assert read_manycore_xml(out) == read_manycore_xml(path)


def test_tables_writes_csv_per_table(tmp_path: Path, end_to_end_xml: str) -> None:
    path = _write(tmp_path, end_to_end_xml)
    out_dir = tmp_path / "tables"

    res = CliRunner().invoke(app, ["tables", str(path), "--out-dir", str(out_dir)])

    assert res.exit_code == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["channels.csv", "cores.csv", "edges.csv", "tasks.csv"]
    header = (out_dir / "tasks.csv").read_text(encoding="utf-8").splitlines()[0]
    assert header == "task_id,computation_cost,core_id"
