from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

IDLE = "IDLE"


@dataclass(frozen=True)
class Segment:
    """
    One contiguous slice of the timeline: a process running, or the CPU idle.
    """

    pid: str
    start_time: int
    end_time: int

    def __post_init__(self) -> None:
        if self.end_time <= self.start_time:
            raise ValueError(
                f"Segment {self.pid} must end after it starts ({self.start_time}-{self.end_time})"
            )

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def to_dict(self) -> dict:
        return {
            "processId": self.pid,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "isIdle": self.is_idle,
        }


@dataclass(frozen=True)
class Timeline:
    """
    Ordered, gap-free sequence of segments produced by one scheduling run.
    """

    segments: Tuple[Segment, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        segments = tuple(self.segments)
        object.__setattr__(self, "segments", segments)
        for prev, nxt in zip(segments, segments[1:]):
            if prev.end_time != nxt.start_time:
                raise ValueError(
                    f"Timeline is not contiguous: {prev.pid} ends at {prev.end_time}, "
                    f"{nxt.pid} starts at {nxt.start_time}"
                )

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]

    @property
    def start_time(self) -> int:
        return self.segments[0].start_time if self.segments else 0

    @property
    def makespan(self) -> int:
        return self.segments[-1].end_time if self.segments else 0

    @property
    def busy_time(self) -> int:
        return sum(s.duration for s in self.segments if not s.is_idle)

    @property
    def idle_time(self) -> int:
        return sum(s.duration for s in self.segments if s.is_idle)

    def segments_for(self, pid: str) -> List[Segment]:
        return [s for s in self.segments if s.pid == pid]

    def first_start(self, pid: str) -> Optional[int]:
        own = self.segments_for(pid)
        return min(s.start_time for s in own) if own else None

    def completion_time(self, pid: str) -> Optional[int]:
        """
        End of the last slice the process ran in, or None if it never ran.
        """
        own = self.segments_for(pid)
        return max(s.end_time for s in own) if own else None

    def to_list(self) -> List[dict]:
        return [s.to_dict() for s in self.segments]


class TimelineBuilder:
    """
    Accumulates segments while an engine advances its clock.
    """

    def __init__(self, start_time: int = 0) -> None:
        self.current_time = start_time
        self._segments: List[Segment] = []

    def run(self, pid: str, duration: int) -> Segment:
        segment = Segment(pid=pid, start_time=self.current_time, end_time=self.current_time + duration)
        self._segments.append(segment)
        self.current_time = segment.end_time
        return segment

    def idle_until(self, time: int) -> Optional[Segment]:
        # Nothing to emit when the clock is already there.
        if time <= self.current_time:
            return None
        segment = Segment(pid=IDLE, start_time=self.current_time, end_time=time)
        self._segments.append(segment)
        self.current_time = time
        return segment

    def build(self) -> Timeline:
        return Timeline(tuple(self._segments))
