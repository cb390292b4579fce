from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .config import PolicyConfig
from .timeline import Timeline


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None


@dataclass(frozen=True)
class ProcessMetric:
    pid: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: Optional[int] = None


@dataclass(frozen=True)
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass(frozen=True)
class Metrics:
    average_waiting_time: float
    average_turnaround_time: float
    average_response_time: float
    processes: List[ProcessMetric] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    def for_pid(self, pid: str) -> ProcessMetric:
        for m in self.processes:
            if m.pid == pid:
                return m
        raise KeyError(pid)


@dataclass(frozen=True)
class SimulationResult:
    config: PolicyConfig
    timeline: Timeline
    metrics: Metrics

    @property
    def algorithm(self) -> str:
        return self.config.label

    @property
    def quantum(self) -> Optional[int]:
        return self.config.quantum

    def to_dict(self) -> dict:
        data = {
            "policy": self.config.policy.value,
            "quantum": self.config.quantum,
            "timeline": self.timeline.to_list(),
            "metrics": {
                "averageWaitingTime": self.metrics.average_waiting_time,
                "averageTurnaroundTime": self.metrics.average_turnaround_time,
                "averageResponseTime": self.metrics.average_response_time,
                "processes": [
                    {
                        "processId": m.pid,
                        "arrivalTime": m.arrival_time,
                        "burstTime": m.burst_time,
                        "startTime": m.start_time,
                        "completionTime": m.completion_time,
                        "waitingTime": m.waiting_time,
                        "turnaroundTime": m.turnaround_time,
                        "responseTime": m.response_time,
                        "priority": m.priority,
                    }
                    for m in self.metrics.processes
                ],
            },
        }
        if self.metrics.system is not None:
            sys = self.metrics.system
            data["metrics"]["system"] = {
                "cpuBusyTime": sys.cpu_busy_time,
                "idleTime": sys.idle_time,
                "makespan": sys.makespan,
                "throughput": sys.throughput,
                "cpuUtilization": sys.cpu_utilization,
            }
        return data
