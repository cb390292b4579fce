from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidConfiguration, MalformedProcess
from .models import Process
from .timeline import IDLE

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_process(process: Process) -> None:
    pid = process.pid
    if not isinstance(pid, str) or not pid.strip():
        raise MalformedProcess(f"Process id must be a non-empty string, got {pid!r}", pid=None)
    if pid == IDLE:
        raise MalformedProcess(f"Process id {IDLE!r} is reserved for idle time", pid=pid)
    if not _is_int(process.arrival_time) or process.arrival_time < 0:
        raise MalformedProcess(
            f"{pid}: arrival time must be a non-negative integer, got {process.arrival_time!r}", pid=pid
        )
    if not _is_int(process.burst_time) or process.burst_time < 1:
        raise MalformedProcess(f"{pid}: burst time must be a positive integer, got {process.burst_time!r}", pid=pid)
    if process.priority is not None and not _is_int(process.priority):
        raise MalformedProcess(f"{pid}: priority must be an integer, got {process.priority!r}", pid=pid)


def validate_processes(processes: Iterable[Process]) -> Tuple[Process, ...]:
    """
    Check a process set before a run and return it as an immutable tuple.

    Raises InvalidConfiguration for an empty set and MalformedProcess for the
    first bad record (including a duplicate id).
    """
    snapshot = tuple(processes)
    if not snapshot:
        raise InvalidConfiguration("At least one process is required to run a simulation")

    seen = set()
    for p in snapshot:
        validate_process(p)
        if p.pid in seen:
            raise MalformedProcess(f"Duplicate process id {p.pid!r}", pid=p.pid)
        seen.add(p.pid)

    return snapshot


class ProcessRegistry:
    """
    Ordered, editable process set that feeds a simulation run.

    Records are immutable; edits replace them in place so declaration order
    (which drives tie-breaks and the Round Robin bootstrap) is preserved.
    """

    def __init__(self, processes: Iterable[Process] = ()) -> None:
        self._processes: List[Process] = []
        for p in processes:
            self._append(p)

    def __len__(self) -> int:
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(tuple(self._processes))

    def __contains__(self, pid: object) -> bool:
        return any(p.pid == pid for p in self._processes)

    @property
    def processes(self) -> Tuple[Process, ...]:
        return tuple(self._processes)

    def get(self, pid: str) -> Process:
        return self._processes[self._index_of(pid)]

    def _index_of(self, pid: str) -> int:
        for idx, p in enumerate(self._processes):
            if p.pid == pid:
                return idx
        raise KeyError(pid)

    def _next_pid(self) -> str:
        n = len(self._processes) + 1
        while f"P{n}" in self:
            n += 1
        return f"P{n}"

    def _append(self, process: Process) -> Process:
        validate_process(process)
        if process.pid in self:
            raise MalformedProcess(f"Duplicate process id {process.pid!r}", pid=process.pid)
        self._processes.append(process)
        return process

    def add(
        self,
        arrival_time: int = 0,
        burst_time: int = 1,
        priority: Optional[int] = 1,
        pid: Optional[str] = None,
    ) -> Process:
        process = Process(
            pid=pid if pid is not None else self._next_pid(),
            arrival_time=arrival_time,
            burst_time=burst_time,
            priority=priority,
        )
        logger.debug("Registering %s", process)
        return self._append(process)

    def update(self, pid: str, **changes) -> Process:
        idx = self._index_of(pid)
        if "pid" in changes and changes["pid"] != pid and changes["pid"] in self:
            raise MalformedProcess(f"Duplicate process id {changes['pid']!r}", pid=changes["pid"])
        try:
            updated = dataclasses.replace(self._processes[idx], **changes)
        except TypeError as exc:
            raise MalformedProcess(f"{pid}: {exc}", pid=pid) from exc
        validate_process(updated)
        self._processes[idx] = updated
        return updated

    def remove(self, pid: str) -> Process:
        return self._processes.pop(self._index_of(pid))

    def clear(self) -> None:
        self._processes.clear()

    def validate(self) -> Tuple[Process, ...]:
        return validate_processes(self._processes)
