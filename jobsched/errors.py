from __future__ import annotations


class SchedulingError(Exception):
    """Base class for every error raised by the simulator."""


class InvalidParameter(SchedulingError, ValueError):
    """A job, quantum or policy selector the engine refuses to simulate."""


class WorkloadError(SchedulingError, ValueError):
    """A workload file or interactive entry that cannot be turned into jobs."""
