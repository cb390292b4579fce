from __future__ import annotations

from typing import List, Sequence

from .errors import InvalidConfiguration
from .models import Metrics, Process, ProcessMetric, SystemMetrics
from .timeline import Timeline


def compute_process_metric(timeline: Timeline, process: Process) -> ProcessMetric:
    completion_time = timeline.completion_time(process.pid)
    start_time = timeline.first_start(process.pid)
    if completion_time is None or start_time is None:
        raise ValueError(f"Process {process.pid} never ran in the timeline")

    turnaround_time = completion_time - process.arrival_time
    waiting_time = turnaround_time - process.burst_time

    return ProcessMetric(
        pid=process.pid,
        arrival_time=process.arrival_time,
        burst_time=process.burst_time,
        start_time=start_time,
        completion_time=completion_time,
        waiting_time=waiting_time,
        turnaround_time=turnaround_time,
        response_time=start_time - process.arrival_time,
        priority=process.priority,
    )


def compute_system_metrics(timeline: Timeline, process_count: int) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the timeline's busy and idle
    segments.
    """
    makespan = timeline.makespan
    cpu_busy_time = timeline.busy_time

    throughput = process_count / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=timeline.idle_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )


def compute_metrics(timeline: Timeline, processes: Sequence[Process]) -> Metrics:
    """
    Derive per-process and average waiting/turnaround times from a finished
    timeline.

    Completion time is the end of a process's last segment, so Round Robin's
    multiple slices per process are handled the same way as FCFS/SJF.
    """
    if not processes:
        raise InvalidConfiguration("Cannot compute metrics for an empty process set")

    per_process: List[ProcessMetric] = [compute_process_metric(timeline, p) for p in processes]

    n = len(per_process)
    return Metrics(
        average_waiting_time=sum(m.waiting_time for m in per_process) / n,
        average_turnaround_time=sum(m.turnaround_time for m in per_process) / n,
        average_response_time=sum(m.response_time for m in per_process) / n,
        processes=per_process,
        system=compute_system_metrics(timeline, n),
    )
