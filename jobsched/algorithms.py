from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .errors import InvalidParameter
from .metrics import compute_system_metrics, derive_result
from .models import Job, Policy, RunSlice, ScheduledJob, ScheduleReport

logger = logging.getLogger(__name__)


@dataclass
class Timeline:
    """
    Logical clock for a single scheduling run.

    Built fresh by every run and dropped once the report is assembled.
    """

    current_time: int = 0
    slices: List[RunSlice] = field(default_factory=list)
    dispatches: int = 0

    def run(self, index: int, job: Job, duration: int) -> int:
        start_time = self.current_time
        self.current_time += duration
        self.slices.append(RunSlice(index=index, name=job.name, start_time=start_time, end_time=self.current_time))
        self.dispatches += 1
        logger.debug("t=%d..%d: %s (#%d)", start_time, self.current_time, job.name, index)
        return self.current_time


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_jobs(jobs: Sequence[Job]) -> None:
    for i, job in enumerate(jobs):
        if not _is_int(job.burst_time) or job.burst_time <= 0:
            raise InvalidParameter(f"Job '{job.name}' (#{i}) needs a positive integer burst time, got {job.burst_time!r}")
        if not _is_int(job.arrival_time) or job.arrival_time < 0:
            raise InvalidParameter(f"Job '{job.name}' (#{i}) needs a non-negative integer arrival time, got {job.arrival_time!r}")
        if not _is_int(job.priority):
            raise InvalidParameter(f"Job '{job.name}' (#{i}) needs an integer priority, got {job.priority!r}")


def _finish(report: ScheduleReport) -> ScheduleReport:
    compute_system_metrics(report)
    logger.info(
        "%s finished %d job(s) in %d time unit(s) over %d dispatch(es)",
        report.algorithm,
        len(report.entries),
        report.system.makespan,
        report.dispatches,
    )
    return report


def run_non_preemptive(
    jobs: Sequence[Job],
    order_key: Callable[[Job], Any],
    algorithm: str = "Non-preemptive",
) -> ScheduleReport:
    """
    Run jobs back to back in ``order_key`` order.

    The sort is stable, so jobs with equal keys keep their input order. Every
    job is treated as ready at time 0: a job waits for the combined burst of
    everything scheduled ahead of it, and arrival times never open idle gaps.
    The report lists jobs in the order they ran.
    """
    jobs = list(jobs)
    _validate_jobs(jobs)

    ordered = sorted(enumerate(jobs), key=lambda item: order_key(item[1]))

    timeline = Timeline()
    entries: List[ScheduledJob] = []
    for index, job in ordered:
        waiting_time = timeline.current_time
        timeline.run(index, job, job.burst_time)
        entries.append(ScheduledJob(index=index, job=job, result=derive_result(job, waiting_time)))

    report = ScheduleReport(
        algorithm=algorithm,
        quantum=None,
        entries=entries,
        timeline=timeline.slices,
        dispatches=timeline.dispatches,
    )
    return _finish(report)


def schedule_fcfs(jobs: Sequence[Job], quantum: Optional[int] = None) -> ScheduleReport:
    """
    First-Come First-Served: order by arrival time.
    """
    return run_non_preemptive(jobs, lambda j: j.arrival_time, algorithm="FCFS")


def schedule_sjf(jobs: Sequence[Job], quantum: Optional[int] = None) -> ScheduleReport:
    """
    Shortest Job First (non-preemptive): order by burst time.
    """
    return run_non_preemptive(jobs, lambda j: j.burst_time, algorithm="SJF")


def schedule_priority(jobs: Sequence[Job], quantum: Optional[int] = None) -> ScheduleReport:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority.
    """
    return run_non_preemptive(jobs, lambda j: j.priority, algorithm="Priority")


def schedule_rr(jobs: Sequence[Job], quantum: Optional[int] = None) -> ScheduleReport:
    """
    Round Robin with a fixed time quantum.

    All jobs start in the ready queue in input order. The head job runs for
    at most one quantum; if it still has work left it goes to the back of the
    queue. A finished job's waiting time is its completion time minus its
    burst. The report lists jobs in input order, not completion order.
    """
    if not _is_int(quantum) or quantum <= 0:
        raise InvalidParameter(f"Round Robin requires a positive integer quantum, got {quantum!r}")

    jobs = list(jobs)
    _validate_jobs(jobs)

    timeline = Timeline()
    remaining = [job.burst_time for job in jobs]
    waiting = [0] * len(jobs)
    ready = deque(range(len(jobs)))

    while ready:
        i = ready.popleft()
        job = jobs[i]

        if remaining[i] > quantum:
            timeline.run(i, job, quantum)
            remaining[i] -= quantum
            ready.append(i)
        else:
            timeline.run(i, job, remaining[i])
            waiting[i] = timeline.current_time - job.burst_time
            remaining[i] = 0

    entries = [ScheduledJob(index=i, job=job, result=derive_result(job, waiting[i])) for i, job in enumerate(jobs)]

    report = ScheduleReport(
        algorithm="Round Robin",
        quantum=quantum,
        entries=entries,
        timeline=timeline.slices,
        dispatches=timeline.dispatches,
    )
    return _finish(report)


ALGORITHMS: Dict[Policy, Callable[..., ScheduleReport]] = {
    Policy.FCFS: schedule_fcfs,
    Policy.SJF: schedule_sjf,
    Policy.PRIORITY: schedule_priority,
    Policy.ROUND_ROBIN: schedule_rr,
}


def run_algorithm(policy: Policy | str, jobs: Sequence[Job], quantum: Optional[int] = None) -> ScheduleReport:
    """
    Dispatch to the requested policy. Quantum is only used by Round Robin.
    """
    policy = Policy.parse(policy)
    if policy not in ALGORITHMS:
        raise InvalidParameter(f"'{policy.value}' is not a scheduling policy")

    func = ALGORITHMS[policy]
    return func(jobs, quantum=quantum)
