from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from .algorithms import run_policy
from .config import Policy, PolicyConfig
from .errors import InvalidConfiguration, SchedulerError
from .metrics import compute_metrics
from .models import Process, SimulationResult
from .registry import validate_processes

logger = logging.getLogger(__name__)


def simulate(
    processes: Iterable[Process],
    policy: Union[str, Policy, PolicyConfig],
    quantum: Optional[int] = None,
) -> SimulationResult:
    """
    Validate the inputs, run one scheduling policy and derive its metrics.

    ``policy`` may be a name ("fcfs", "sjf", "rr"), a Policy member or a full
    PolicyConfig. A PolicyConfig already carries its quantum, so passing a
    different ``quantum`` alongside one is rejected. Every problem with the
    inputs is raised before any scheduling happens, so a partial timeline is
    never returned.
    """
    try:
        if isinstance(policy, PolicyConfig):
            if quantum is not None and quantum != policy.quantum:
                raise InvalidConfiguration(
                    f"Quantum {quantum} conflicts with the configured quantum {policy.quantum}"
                )
            config = policy
        elif isinstance(policy, Policy):
            config = PolicyConfig.from_name(policy.value, quantum)
        else:
            config = PolicyConfig.from_name(policy, quantum)
        snapshot = validate_processes(processes)
    except SchedulerError as exc:
        logger.warning("Rejected simulation request: %s", exc)
        raise

    logger.info("Running %s on %d processes (quantum=%s)", config.label, len(snapshot), config.quantum)
    timeline = run_policy(config, snapshot)
    metrics = compute_metrics(timeline, snapshot)
    logger.info(
        "%s finished at t=%d: avg waiting %.2f, avg turnaround %.2f",
        config.label,
        timeline.makespan,
        metrics.average_waiting_time,
        metrics.average_turnaround_time,
    )
    return SimulationResult(config=config, timeline=timeline, metrics=metrics)
