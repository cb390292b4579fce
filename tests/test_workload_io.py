import json
from pathlib import Path

import pytest

from schedule_viz.errors import MalformedProcess
from schedule_viz.models import Process
from schedule_viz.simulator import simulate
from schedule_viz.workload_io import dump_result, load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].priority is None
    assert procs[1].arrival_time == 1


def test_load_json_camel_case_keys(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"id":"P1","arrivalTime":2,"burstTime":4,"priority":1}]')
    procs = load_workload(p)
    assert procs == [Process("P1", arrival_time=2, burst_time=4, priority=1)]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].priority is None


def test_missing_field_is_malformed(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0}]')
    with pytest.raises(MalformedProcess):
        load_workload(p)


def test_non_numeric_burst_is_malformed(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,lots\n")
    with pytest.raises(MalformedProcess):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("A 0 3")
    with pytest.raises(ValueError):
        load_workload(p)


def test_dump_result(tmp_path: Path):
    result = simulate([Process("P1", 3, 2)], "fcfs")
    out = dump_result(result, tmp_path / "result.json")
    data = json.loads(out.read_text())
    assert data["policy"] == "fcfs"
    assert data["timeline"] == [
        {"processId": "IDLE", "startTime": 0, "endTime": 3, "isIdle": True},
        {"processId": "P1", "startTime": 3, "endTime": 5, "isIdle": False},
    ]
    assert data["metrics"]["processes"][0]["waitingTime"] == 0


@pytest.mark.parametrize(
    "entry",
    [
        '{"pid":"A","arrival_time":0,"burst_time":3.9}',
        '{"pid":"A","arrival_time":2.7,"burst_time":3}',
        '{"pid":"B","arrival_time":true,"burst_time":1}',
        '{"pid":null,"arrival_time":0,"burst_time":1}',
        '{"pid":7,"arrival_time":0,"burst_time":1}',
        '{"pid":"C","arrival_time":0,"burst_time":1,"priority":1.5}',
    ],
)
def test_json_fields_are_not_coerced(tmp_path: Path, entry):
    p = tmp_path / "w.json"
    p.write_text(f"[{entry}]")
    with pytest.raises(MalformedProcess):
        load_workload(p)


def test_csv_fractional_arrival_is_malformed(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,2.7,3\n")
    with pytest.raises(MalformedProcess):
        load_workload(p)
