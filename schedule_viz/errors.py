from __future__ import annotations


class SchedulerError(ValueError):
    """
    Base class for input problems detected before a simulation starts.
    """


class InvalidConfiguration(SchedulerError):
    """
    The run itself is misconfigured: empty process set, unknown policy,
    or a non-positive time quantum.
    """


class MalformedProcess(SchedulerError):
    """
    A process record is unusable: bad arrival/burst values or a duplicate id.
    """

    def __init__(self, message: str, pid: str | None = None) -> None:
        super().__init__(message)
        self.pid = pid
