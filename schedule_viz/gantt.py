from __future__ import annotations

from typing import Dict

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .timeline import Segment, Timeline


def _cell_width(seg: Segment) -> int:
    # Wide enough for the label and the end-time mark; longer segments get one
    # column per time unit.
    return max(4, seg.duration, len(str(seg.end_time)) + 1)


def _time_marks(timeline: Timeline) -> str:
    marks = str(timeline.start_time)
    for seg in timeline:
        marks += f"{seg.end_time:>{_cell_width(seg)}}"
    return marks


def render_gantt(timeline: Timeline) -> str:
    """
    Plain-text Gantt chart with idle time drawn as dots.
    """
    if not len(timeline):
        return "(no execution)"

    line = "|"
    labels = ""

    for seg in timeline:
        width = _cell_width(seg)
        line += ("." if seg.is_idle else "=") * width
        labels += seg.pid[:width].ljust(width)

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            " " + labels,
            _time_marks(timeline),
        ]
    )


def build_rich_gantt(timeline: Timeline) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not len(timeline):
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    bars = Text()
    labels = Text()

    for seg in timeline:
        width = _cell_width(seg)
        if seg.is_idle:
            bars.append("░" * width, style="dim")
            labels.append(seg.pid[:width].ljust(width), style="dim")
        else:
            bars.append(" " * width, style=f"on {pid_color(seg.pid)}")
            labels.append(seg.pid[:width].ljust(width), style="bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, _time_marks(timeline)
