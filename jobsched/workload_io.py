from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List

from .errors import WorkloadError
from .models import Job

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Job]:
    """
    Load a workload from a JSON or CSV file into a list of Job objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        jobs = _load_json(path)
    elif suffix == ".csv":
        jobs = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.info("Loaded %d job(s) from %s", len(jobs), path)
    return jobs


def _open(path: Path):
    try:
        return path.open("r", encoding="utf-8", newline="")
    except OSError as exc:
        raise WorkloadError(f"Cannot read workload {path}: {exc.strerror or exc}") from exc


def _load_json(path: Path) -> List[Job]:
    with _open(path) as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"Invalid JSON in {path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"Workload is not valid UTF-8 ({path}): {exc.reason}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of job objects")

    return [job_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Job]:
    with _open(path) as f:
        try:
            rows = list(csv.DictReader(f))
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"Workload is not valid UTF-8 ({path}): {exc.reason}") from exc
        except csv.Error as exc:
            raise WorkloadError(f"Invalid CSV in {path}: {exc}") from exc

    return [job_from_mapping(row) for row in rows]


def _to_int(value) -> int:
    # JSON gives real numbers, CSV gives strings.
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    if isinstance(value, (int, str)):
        return int(value)
    raise TypeError(f"expected an integer, got {value!r}")


def _optional_int(mapping, key: str) -> int:
    value = mapping.get(key)
    if value is None or value == "":
        return 0
    return _to_int(value)


def job_from_mapping(mapping) -> Job:
    """
    Build a Job from a dict-like entry; arrival_time and priority default to 0.
    """
    try:
        name = str(mapping["name"])
        burst_time = _to_int(mapping["burst_time"])
        arrival_time = _optional_int(mapping, "arrival_time")
        priority = _optional_int(mapping, "priority")
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise WorkloadError(f"Invalid job entry: {mapping!r}") from exc

    return Job(
        name=name,
        burst_time=burst_time,
        arrival_time=arrival_time,
        priority=priority,
    )
