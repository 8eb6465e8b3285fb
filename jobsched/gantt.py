from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import RunSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _segment_widths(slices: List[RunSlice]) -> List[int]:
    """
    Column width of each slice: its duration, widened so the end-time mark
    fits under it with a space before it. The first slice also leaves room
    for the leading "0".
    """
    widths = []
    for n, sl in enumerate(slices):
        needed = len(str(sl.end_time)) + (2 if n == 0 else 1)
        widths.append(max(1, sl.end_time - sl.start_time, needed))
    return widths


def render_time_marks(slices: List[RunSlice]) -> str:
    """
    Time marks line aligned with the bars drawn by build_rich_gantt.

    Each slice's end time is right-aligned under the end of its bar.
    """
    if not slices:
        return ""

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))
    marks = ""
    for sl, width in zip(slices, _segment_widths(slices)):
        marks += str(sl.end_time).rjust(width)
    return "0" + marks[1:]


def build_rich_gantt(slices: List[RunSlice]) -> Panel:
    """
    Build a Rich Panel containing a colored Gantt chart with time marks.

    Colors follow the job's input index, so two jobs sharing a name still
    get separate colors.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart")

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    index_to_color: Dict[int, str] = {}

    def job_color(index: int) -> str:
        if index not in index_to_color:
            index_to_color[index] = COLORS[len(index_to_color) % len(COLORS)]
        return index_to_color[index]

    bars = Text()
    labels = Text()

    for sl, width in zip(slices, _segment_widths(slices)):
        bars.append(" " * width, style=f"on {job_color(sl.index)}")
        labels.append(sl.name[:width].ljust(width), style="bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)
    table.add_row(Text(render_time_marks(slices)))

    return Panel.fit(table, title="Gantt Chart")
