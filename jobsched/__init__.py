"""
Job scheduling simulator.

Computes waiting and turnaround times for a small set of jobs under FCFS,
SJF, Priority and Round Robin scheduling, and prints the results from the
command line.
"""

__all__ = ["cli"]
