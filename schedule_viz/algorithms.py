from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Sequence

from .config import Policy, PolicyConfig
from .errors import InvalidConfiguration
from .models import Process
from .timeline import Timeline, TimelineBuilder

logger = logging.getLogger(__name__)


@dataclass
class _WorkingProcess:
    """
    Mutable copy of a Process used while an engine runs.
    """

    pid: str
    arrival_time: int
    burst_time: int
    order: int
    remaining_time: int

    @classmethod
    def from_process(cls, process: Process, order: int) -> "_WorkingProcess":
        return cls(
            pid=process.pid,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            order=order,
            remaining_time=process.burst_time,
        )


def _working_copies(processes: Sequence[Process]) -> List[_WorkingProcess]:
    return [_WorkingProcess.from_process(p, idx) for idx, p in enumerate(processes)]


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> Timeline:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run in arrival order; equal arrivals keep declaration order.
    """
    # sorted() is stable, which gives the declaration-order tie-break.
    processes_sorted = sorted(processes, key=lambda p: p.arrival_time)
    builder = TimelineBuilder()

    for p in processes_sorted:
        if builder.current_time < p.arrival_time:
            logger.debug("FCFS: CPU idle %d-%d", builder.current_time, p.arrival_time)
            builder.idle_until(p.arrival_time)

        builder.run(p.pid, p.burst_time)
        logger.debug("FCFS: %s runs until %d", p.pid, builder.current_time)

    return builder.build()


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> Timeline:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Ties go to the
    earlier arrival, then to the process declared first.
    """
    pending = _working_copies(processes)
    builder = TimelineBuilder()

    while pending:
        # Ready set: processes that have arrived and are not completed.
        ready = [p for p in pending if p.arrival_time <= builder.current_time]

        if not ready:
            next_arrival = min(p.arrival_time for p in pending)
            logger.debug("SJF: CPU idle %d-%d", builder.current_time, next_arrival)
            builder.idle_until(next_arrival)
            continue

        p = min(ready, key=lambda x: (x.burst_time, x.arrival_time, x.order))

        builder.run(p.pid, p.burst_time)
        logger.debug(
            "SJF: picked %s (burst %d) from %d ready, runs until %d",
            p.pid,
            p.burst_time,
            len(ready),
            builder.current_time,
        )
        pending.remove(p)

    return builder.build()


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> Timeline:
    """
    Round Robin scheduling with a fixed time quantum.

    The ready queue is seeded in declaration order: the first declared process
    always runs first, and later processes join the queue (in declaration
    order) once their arrival time has passed. A process whose quantum expires
    goes to the tail behind anything that arrived during its slice.
    """
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidConfiguration("Round Robin requires a positive time quantum")

    procs = _working_copies(processes)
    builder = TimelineBuilder()
    ready: Deque[_WorkingProcess] = deque()

    if not procs:
        return builder.build()

    if any(a.arrival_time > b.arrival_time for a, b in zip(procs, procs[1:])):
        logger.warning("Round Robin input is not in arrival order; the ready queue follows declaration order")

    # Bootstrap: the first declared process goes first regardless of arrivals.
    first = procs[0]
    builder.idle_until(first.arrival_time)
    ready.append(first)
    i = 1

    while ready:
        current = ready.popleft()
        execute_time = min(current.remaining_time, quantum)

        builder.run(current.pid, execute_time)
        current.remaining_time -= execute_time
        logger.debug(
            "RR: %s ran %d, %d remaining at t=%d",
            current.pid,
            execute_time,
            current.remaining_time,
            builder.current_time,
        )

        # Arrivals during the slice are queued before the preempted process.
        while i < len(procs) and procs[i].arrival_time <= builder.current_time:
            ready.append(procs[i])
            i += 1

        if current.remaining_time > 0:
            ready.append(current)

        if not ready and i < len(procs):
            nxt = procs[i]
            logger.debug("RR: CPU idle %d-%d", builder.current_time, nxt.arrival_time)
            builder.idle_until(nxt.arrival_time)
            ready.append(nxt)
            i += 1

    return builder.build()


ALGORITHMS: Dict[Policy, Callable[..., Timeline]] = {
    Policy.FCFS: schedule_fcfs,
    Policy.SJF: schedule_sjf,
    Policy.RR: schedule_rr,
}


def run_policy(config: PolicyConfig, processes: Sequence[Process]) -> Timeline:
    """
    Dispatch to the engine for an already resolved policy configuration.
    """
    func = ALGORITHMS[config.policy]
    return func(processes, quantum=config.quantum)
