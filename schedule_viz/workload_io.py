from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, List, Mapping

from .errors import MalformedProcess
from .models import Process, SimulationResult

# Accepted spellings for each field; the camelCase ones match the web form export.
_FIELD_ALIASES = {
    "pid": ("pid", "id"),
    "arrival_time": ("arrival_time", "arrivalTime"),
    "burst_time": ("burst_time", "burstTime"),
    "priority": ("priority",),
}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _lookup(mapping: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_ALIASES[field]:
        if key in mapping:
            return mapping[key]
    raise KeyError(field)


def _as_int(value: Any) -> int:
    # JSON numbers arrive typed; CSV cells arrive as text.
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"expected an integer, got {value!r}")


def _process_from_mapping(mapping) -> Process:
    if not isinstance(mapping, Mapping):
        raise MalformedProcess(f"Invalid process entry: {mapping!r}")
    try:
        raw_pid = _lookup(mapping, "pid")
        if not isinstance(raw_pid, str):
            raise TypeError(f"process id must be a string, got {raw_pid!r}")
        pid = raw_pid.strip()
        arrival_time = _as_int(_lookup(mapping, "arrival_time"))
        burst_time = _as_int(_lookup(mapping, "burst_time"))
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedProcess(f"Invalid process entry: {mapping!r}") from exc

    try:
        priority_val = _lookup(mapping, "priority")
    except KeyError:
        priority_val = None
    try:
        priority = _as_int(priority_val) if priority_val not in (None, "") else None
    except (TypeError, ValueError) as exc:
        raise MalformedProcess(f"Invalid priority for {pid}: {priority_val!r}", pid=pid) from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def dump_result(result: SimulationResult, path: str | Path) -> Path:
    """
    Write a simulation result (timeline and metrics) as JSON.
    """
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2)
        f.write("\n")
    return path
