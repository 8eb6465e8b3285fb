from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .errors import SchedulingError
from .gantt import build_rich_gantt
from .metrics import summarize
from .models import Job, Policy, ScheduleReport
from .workload_io import load_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2

MENU_CHOICES = {
    "1": Policy.FCFS,
    "2": Policy.SJF,
    "3": Policy.PRIORITY,
    "4": Policy.ROUND_ROBIN,
    "5": Policy.EXIT,
}

MENU_LABELS = {
    Policy.FCFS: "FCFS",
    Policy.SJF: "SJF",
    Policy.PRIORITY: "Priority Scheduling",
    Policy.ROUND_ROBIN: "Round Robin",
    Policy.EXIT: "Exit",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobsched",
        description="Job scheduling simulator (FCFS, SJF, Priority, Round Robin).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (default: WARNING). DEBUG traces every dispatch.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Algorithm to use (fcfs, sjf, priority, rr).",
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
        help="Time quantum for round-robin (ignored by FCFS, SJF, Priority).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run every algorithm on the same workload and compare average times.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for round-robin (default: {DEFAULT_QUANTUM}).",
    )

    menu_parser = subparsers.add_parser(
        "menu",
        help="Enter jobs interactively (or load them) and pick algorithms from a menu.",
    )
    menu_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Load jobs from this file instead of prompting for them.",
    )

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _print_report(report: ScheduleReport, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {report.algorithm}")
    if report.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {report.quantum}")

    console.print()

    console.print(build_rich_gantt(report.timeline))

    console.print()

    job_table = Table(title="Per-job times", box=box.SIMPLE_HEAVY)
    job_table.add_column("Process", justify="center")
    for h in ("Burst Time", "Waiting Time", "Turnaround Time"):
        job_table.add_column(h, justify="right")

    for e in report.entries:
        job_table.add_row(e.name, str(e.burst_time), str(e.waiting_time), str(e.turnaround_time))

    console.print(job_table)

    if report.entries and report.system:
        summary = summarize(report.entries)
        sys_table = Table(title="Summary", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
        sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
        sys_table.add_row("Makespan", str(report.system.makespan))
        sys_table.add_row("Throughput (jobs/time)", f"{report.system.throughput:.3f}")

        console.print(sys_table)


def _print_comparison(jobs: List[Job], quantum: int, console: Console, title: str) -> None:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    for policy in ALGORITHMS:
        q = quantum if policy.needs_quantum else None
        report = run_algorithm(policy, jobs, quantum=q)
        summary = summarize(report.entries)
        summary_table.add_row(
            report.algorithm,
            "" if report.quantum is None else str(report.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
        )

    console.print(summary_table)


def _ask_int(console: Console, prompt: str, minimum: Optional[int] = None) -> int:
    while True:
        raw = input(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            console.print(f"[red]'{raw}' is not a whole number.[/red]")
            continue
        if minimum is not None and value < minimum:
            console.print(f"[red]Value must be at least {minimum}.[/red]")
            continue
        return value


def prompt_jobs(console: Console) -> List[Job]:
    """
    Ask for the number of jobs, then each job's name, burst, arrival and priority.
    """
    count = _ask_int(console, "Enter the number of jobs: ", minimum=0)

    jobs: List[Job] = []
    for n in range(1, count + 1):
        console.print(f"[bold]Job {n}[/bold]")
        name = input("Enter Process Name: ").strip() or f"P{n}"
        burst_time = _ask_int(console, "Enter Burst Time: ", minimum=1)
        arrival_time = _ask_int(console, "Enter Arrival Time: ", minimum=0)
        priority = _ask_int(console, "Enter Priority (lower value = higher priority): ")
        jobs.append(Job(name=name, burst_time=burst_time, arrival_time=arrival_time, priority=priority))

    logger.info("Entered %d job(s)", len(jobs))
    return jobs


def _interactive_menu(jobs: List[Job], console: Console) -> None:
    while True:
        console.print()
        for key, policy in MENU_CHOICES.items():
            console.print(f"  [yellow]{key}[/yellow]. {MENU_LABELS[policy]}")

        choice = input("Enter your choice: ").strip()
        policy = MENU_CHOICES.get(choice)
        if policy is None:
            console.print("[red]Invalid choice, please try again.[/red]")
            continue

        if policy is Policy.EXIT:
            console.print("Exiting...")
            return

        quantum = None
        if policy.needs_quantum:
            quantum = _ask_int(console, "Enter Time Quantum for Round Robin: ")

        try:
            report = run_algorithm(policy, jobs, quantum=quantum)
        except SchedulingError as exc:
            console.print(f"[red]Error: {escape(str(exc))}[/red]")
            continue

        console.print()
        _print_report(report, console)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    console = Console()

    try:
        if args.command == "run":
            jobs = load_workload(Path(args.workload))
            report = run_algorithm(args.algorithm, jobs, quantum=args.quantum)
            _print_report(report, console)
            return 0

        if args.command == "compare":
            jobs = load_workload(Path(args.workload))
            _print_comparison(jobs, args.quantum, console, title=f"Algorithm comparison: {args.workload}")
            return 0

        if args.command == "menu":
            try:
                jobs = load_workload(Path(args.workload)) if args.workload else prompt_jobs(console)
                _interactive_menu(jobs, console)
            except (EOFError, KeyboardInterrupt):
                console.print("\nExiting...")
            return 0
    except SchedulingError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
