from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import InvalidConfiguration

DEFAULT_QUANTUM = 2


class Policy(Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    RR = "rr"


POLICY_LABELS = {
    Policy.FCFS: "FCFS",
    Policy.SJF: "SJF (non-preemptive)",
    Policy.RR: "Round Robin",
}


@dataclass(frozen=True)
class PolicyConfig:
    """
    A scheduling policy together with its parameters.

    Only Round Robin carries a quantum; it is None for FCFS and SJF.
    """

    policy: Policy
    quantum: Optional[int] = None

    def __post_init__(self) -> None:
        if self.policy is Policy.RR:
            if isinstance(self.quantum, bool) or not isinstance(self.quantum, int):
                raise InvalidConfiguration("Round Robin requires an integer time quantum")
            if self.quantum <= 0:
                raise InvalidConfiguration("time quantum must be positive")
        elif self.quantum is not None:
            object.__setattr__(self, "quantum", None)

    @property
    def label(self) -> str:
        return POLICY_LABELS[self.policy]

    @classmethod
    def from_name(cls, name: str, quantum: Optional[int] = None) -> "PolicyConfig":
        try:
            policy = Policy(name.strip().lower())
        except (AttributeError, ValueError):
            choices = ", ".join(p.value for p in Policy)
            raise InvalidConfiguration(f"Unknown policy {name!r} (choose from {choices})") from None

        if policy is Policy.RR and quantum is None:
            quantum = DEFAULT_QUANTUM
        return cls(policy=policy, quantum=quantum)
