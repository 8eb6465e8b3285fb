from __future__ import annotations

from typing import Dict, Iterable

from .models import Job, ScheduledJob, ScheduleReport, ScheduleResult, SystemMetrics


def derive_result(job: Job, waiting_time: int) -> ScheduleResult:
    """
    Pair a waiting time with the turnaround it implies (burst + waiting).
    """
    return ScheduleResult(waiting_time=waiting_time, turnaround_time=job.burst_time + waiting_time)


def compute_system_metrics(report: ScheduleReport) -> SystemMetrics:
    """
    Compute makespan and throughput from a populated report and attach them to it.
    """
    cpu_busy_time = sum(sl.end_time - sl.start_time for sl in report.timeline)
    makespan = max((sl.end_time for sl in report.timeline), default=0)
    throughput = len(report.entries) / makespan if makespan > 0 else 0.0

    system = SystemMetrics(cpu_busy_time=cpu_busy_time, makespan=makespan, throughput=throughput)
    report.system = system
    return system


def summarize(entries: Iterable[ScheduledJob]) -> Dict[str, float]:
    """
    Return average waiting and turnaround times for quick comparison.
    """
    entries = list(entries)
    if not entries:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0}

    n = len(entries)
    return {
        "avg_waiting": sum(e.waiting_time for e in entries) / n,
        "avg_turnaround": sum(e.turnaround_time for e in entries) / n,
    }
