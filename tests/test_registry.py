import pytest

from schedule_viz.errors import InvalidConfiguration, MalformedProcess
from schedule_viz.models import Process
from schedule_viz.registry import ProcessRegistry, validate_processes


def test_add_assigns_sequential_ids():
    reg = ProcessRegistry()
    p1 = reg.add()
    p2 = reg.add(arrival_time=2, burst_time=4)
    assert (p1.pid, p1.arrival_time, p1.burst_time, p1.priority) == ("P1", 0, 1, 1)
    assert p2.pid == "P2"
    assert [p.pid for p in reg] == ["P1", "P2"]


def test_add_skips_ids_in_use():
    reg = ProcessRegistry()
    reg.add()
    reg.add()
    reg.remove("P1")
    assert reg.add().pid == "P3"


def test_update_keeps_position():
    reg = ProcessRegistry([Process("A", 0, 1), Process("B", 1, 1)])
    reg.update("A", burst_time=6)
    assert reg.processes == (Process("A", 0, 6), Process("B", 1, 1))


def test_update_rejects_bad_values():
    reg = ProcessRegistry([Process("A", 0, 1)])
    with pytest.raises(MalformedProcess):
        reg.update("A", burst_time=0)
    assert reg.get("A").burst_time == 1


def test_duplicate_id_rejected():
    reg = ProcessRegistry([Process("A", 0, 1)])
    with pytest.raises(MalformedProcess):
        reg.add(pid="A")


@pytest.mark.parametrize(
    "proc",
    [
        Process("A", -1, 2),
        Process("A", 0, 0),
        Process("A", 0, -3),
        Process("IDLE", 0, 1),
        Process("", 0, 1),
        Process("A", 0, 2.5),
    ],
)
def test_malformed_processes(proc):
    with pytest.raises(MalformedProcess):
        validate_processes([proc])


def test_validate_duplicates():
    with pytest.raises(MalformedProcess) as exc_info:
        validate_processes([Process("A", 0, 1), Process("A", 2, 1)])
    assert exc_info.value.pid == "A"


def test_validate_empty():
    with pytest.raises(InvalidConfiguration):
        ProcessRegistry().validate()
