import pytest

from schedule_viz.config import DEFAULT_QUANTUM, Policy, PolicyConfig
from schedule_viz.errors import InvalidConfiguration, MalformedProcess
from schedule_viz.models import Process
from schedule_viz.simulator import simulate


def _procs():
    return [
        Process("P1", arrival_time=0, burst_time=8),
        Process("P2", arrival_time=1, burst_time=4),
        Process("P3", arrival_time=2, burst_time=9),
    ]


def test_simulate_by_name():
    res = simulate(_procs(), "sjf")
    assert [(s.pid, s.start_time, s.end_time) for s in res.timeline] == [
        ("P1", 0, 8),
        ("P2", 8, 12),
        ("P3", 12, 21),
    ]
    assert res.algorithm == "SJF (non-preemptive)"
    assert res.quantum is None


def test_simulate_accepts_policy_and_config():
    a = simulate(_procs(), Policy.RR, quantum=3)
    b = simulate(_procs(), PolicyConfig(Policy.RR, 3))
    assert a == b
    assert a.quantum == 3


def test_rr_default_quantum():
    assert simulate(_procs(), "RR").quantum == DEFAULT_QUANTUM


@pytest.mark.parametrize("policy", ["fcfs", "sjf", "rr"])
def test_runs_are_idempotent(policy):
    first = simulate(_procs(), policy)
    second = simulate(_procs(), policy)
    assert first == second
    assert first.to_dict() == second.to_dict()


@pytest.mark.parametrize("policy", ["fcfs", "sjf", "rr"])
def test_single_process_has_zero_wait(policy):
    res = simulate([Process("solo", 4, 2)], policy)
    assert [s.pid for s in res.timeline] == ["IDLE", "solo"]
    assert res.metrics.processes[0].waiting_time == 0


def test_empty_process_set():
    with pytest.raises(InvalidConfiguration):
        simulate([], "fcfs")


def test_unknown_policy():
    with pytest.raises(InvalidConfiguration):
        simulate(_procs(), "lottery")


@pytest.mark.parametrize("quantum", [0, -2])
def test_non_positive_quantum(quantum):
    with pytest.raises(InvalidConfiguration, match="quantum"):
        simulate(_procs(), "rr", quantum=quantum)


def test_quantum_ignored_for_non_preemptive():
    assert simulate(_procs(), "fcfs", quantum=0).quantum is None


def test_malformed_input_rejected_before_run():
    procs = _procs() + [Process("P4", 3, 0)]
    with pytest.raises(MalformedProcess):
        simulate(procs, "fcfs")


def test_generator_input():
    res = simulate((p for p in _procs()), "fcfs")
    assert len(res.metrics.processes) == 3


def test_config_with_conflicting_quantum():
    with pytest.raises(InvalidConfiguration, match="conflicts"):
        simulate(_procs(), PolicyConfig(Policy.RR, 3), quantum=4)
    assert simulate(_procs(), PolicyConfig(Policy.RR, 3), quantum=3).quantum == 3
    with pytest.raises(InvalidConfiguration):
        simulate(_procs(), PolicyConfig(Policy.FCFS), quantum=2)
