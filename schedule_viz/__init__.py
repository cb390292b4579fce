"""
Schedule visualizer package.

Simulates FCFS, SJF and Round Robin CPU scheduling over a fixed process set,
producing a gap-free execution timeline plus waiting/turnaround metrics, and
renders the results in the terminal.
"""

from .config import Policy, PolicyConfig
from .errors import InvalidConfiguration, MalformedProcess, SchedulerError
from .models import Metrics, Process, ProcessMetric, SimulationResult
from .registry import ProcessRegistry
from .simulator import simulate
from .timeline import IDLE, Segment, Timeline

__all__ = [
    "IDLE",
    "InvalidConfiguration",
    "MalformedProcess",
    "Metrics",
    "Policy",
    "PolicyConfig",
    "Process",
    "ProcessMetric",
    "ProcessRegistry",
    "SchedulerError",
    "Segment",
    "SimulationResult",
    "Timeline",
    "simulate",
]
