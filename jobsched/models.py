from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import InvalidParameter


@dataclass(frozen=True)
class Job:
    name: str
    burst_time: int
    arrival_time: int = 0
    priority: int = 0  # lower value runs first


@dataclass(frozen=True)
class ScheduleResult:
    waiting_time: int
    turnaround_time: int


@dataclass(frozen=True)
class ScheduledJob:
    """
    A job paired with its computed times.

    ``index`` is the job's position in the caller's input, which keeps jobs
    with duplicate names apart.
    """

    index: int
    job: Job
    result: ScheduleResult

    @property
    def name(self) -> str:
        return self.job.name

    @property
    def burst_time(self) -> int:
        return self.job.burst_time

    @property
    def waiting_time(self) -> int:
        return self.result.waiting_time

    @property
    def turnaround_time(self) -> int:
        return self.result.turnaround_time


@dataclass(frozen=True)
class RunSlice:
    """
    One contiguous stretch of CPU time given to a job.
    """

    index: int
    name: str
    start_time: int
    end_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float


@dataclass
class ScheduleReport:
    algorithm: str
    quantum: Optional[int]
    entries: List[ScheduledJob] = field(default_factory=list)
    timeline: List[RunSlice] = field(default_factory=list)
    dispatches: int = 0
    system: Optional[SystemMetrics] = None

    @property
    def waiting_times(self) -> List[int]:
        return [e.waiting_time for e in self.entries]

    @property
    def turnaround_times(self) -> List[int]:
        return [e.turnaround_time for e in self.entries]

    @property
    def order(self) -> List[str]:
        return [e.name for e in self.entries]


class Policy(str, enum.Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    PRIORITY = "priority"
    ROUND_ROBIN = "rr"
    EXIT = "exit"

    @classmethod
    def parse(cls, value: "Policy | str") -> "Policy":
        """
        Resolve a policy from an enum member, its value or a common alias.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        key = _POLICY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidParameter(f"Unknown scheduling policy '{value}'") from None

    @property
    def needs_quantum(self) -> bool:
        return self is Policy.ROUND_ROBIN


_POLICY_ALIASES = {
    "round_robin": "rr",
    "roundrobin": "rr",
    "priority_scheduling": "priority",
    "prio": "priority",
    "quit": "exit",
}
