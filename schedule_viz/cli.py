from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import DEFAULT_QUANTUM, Policy
from .errors import SchedulerError
from .gantt import build_rich_gantt
from .models import SimulationResult
from .simulator import simulate
from .workload_io import dump_result, load_workload

POLICY_CHOICES = [p.value for p in Policy]


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedule-viz",
        description="CPU scheduling simulator (FCFS, SJF, Round Robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every scheduling decision.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling policy on a workload file.")
    run_parser.add_argument(
        "--policy",
        "-a",
        required=True,
        type=str.lower,
        choices=POLICY_CHOICES,
        help="Policy to use (fcfs, sjf, rr).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}; ignored by FCFS and SJF).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Play the timeline back one time unit at a time before the summary.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the timeline and metrics as JSON instead of tables.",
    )
    run_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Also write the result as JSON to this path.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several policies on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--policies",
        "-a",
        nargs="+",
        type=str.lower,
        choices=POLICY_CHOICES,
        default=POLICY_CHOICES,
        help="Policies to compare (default: fcfs sjf rr).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    segment_table = Table(title="Timeline", box=box.SIMPLE_HEAVY)
    segment_table.add_column("Process", justify="center")
    segment_table.add_column("Start", justify="right")
    segment_table.add_column("End", justify="right")
    segment_table.add_column("Duration", justify="right")
    for seg in result.timeline:
        style = "dim" if seg.is_idle else None
        segment_table.add_row(
            seg.pid, str(seg.start_time), str(seg.end_time), str(seg.duration), style=style
        )

    console.print(segment_table)
    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
        "Priority",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.metrics.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
            "" if p.priority is None else str(p.priority),
        )

    console.print(proc_table)
    console.print()

    metrics = result.metrics
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{metrics.average_waiting_time:.2f}")
    sys_table.add_row("Avg turnaround", f"{metrics.average_turnaround_time:.2f}")
    sys_table.add_row("Avg response", f"{metrics.average_response_time:.2f}")
    if metrics.system:
        sys = metrics.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _animate_result(result: SimulationResult, delay: float, console: Console) -> None:
    """
    Simple time-stepped textual playback of the computed timeline.
    """
    timeline = result.timeline
    if not len(timeline):
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {timeline.makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(timeline.start_time, timeline.makespan):
        seg = next(s for s in timeline if s.start_time <= t < s.end_time)
        if seg.is_idle:
            console.print(f"t={t:2d}: [dim]idle[/dim]")
        else:
            bar = f"[green]{'█' * (t - seg.start_time + 1)}[/green]"
            console.print(f"t={t:2d}: {seg.pid} {bar}")
        time.sleep(delay)


def _run_compare(workload_path: Path, policies: list[str], quantum: int, console: Console) -> None:
    """
    Run each requested policy on a workload and print the summary table.
    """
    processes = load_workload(workload_path)

    summary_table = Table(title=f"Policy comparison: {workload_path}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Makespan", justify="right")

    for name in policies:
        result = simulate(processes, name, quantum=quantum if name == Policy.RR.value else None)
        metrics = result.metrics
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{metrics.average_waiting_time:.2f}",
            f"{metrics.average_turnaround_time:.2f}",
            f"{metrics.average_response_time:.2f}",
            str(result.timeline.makespan),
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = simulate(processes, args.policy, quantum=args.quantum)
            if args.output:
                dump_result(result, args.output)
            if args.json:
                console.print_json(data=result.to_dict())
                return 0
            if args.step:
                try:
                    _animate_result(result, delay=args.step_delay, console=console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(result, console)
            return 0

        if args.command == "compare":
            _run_compare(Path(args.workload), args.policies, args.quantum, console)
            return 0
    except SchedulerError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2
    except (OSError, ValueError) as exc:
        console.print(f"[red]Could not read workload: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
