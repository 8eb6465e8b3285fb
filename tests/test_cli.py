import json
from pathlib import Path

import pytest

from jobsched import cli
from jobsched.models import Job


def _write_workload(tmp_path: Path) -> Path:
    p = tmp_path / "jobs.json"
    p.write_text(
        json.dumps(
            [
                {"name": "P1", "burst_time": 5, "arrival_time": 0, "priority": 2},
                {"name": "P2", "burst_time": 3, "arrival_time": 1, "priority": 1},
                {"name": "P3", "burst_time": 8, "arrival_time": 2, "priority": 3},
            ]
        )
    )
    return p


def _feed(monkeypatch, answers):
    it = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_run_prints_table(tmp_path, capsys):
    rc = cli.main(["run", "-a", "sjf", "-w", str(_write_workload(tmp_path))])
    out = capsys.readouterr().out
    assert rc == 0
    assert "SJF" in out
    assert "P2" in out
    assert "16" in out


def test_run_round_robin(tmp_path, capsys):
    rc = cli.main(["run", "-a", "rr", "-q", "4", "-w", str(_write_workload(tmp_path))])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Round Robin" in out
    assert "Quantum: 4" in out


def test_run_rejects_zero_quantum(tmp_path, capsys):
    rc = cli.main(["run", "-a", "rr", "-q", "0", "-w", str(_write_workload(tmp_path))])
    out = capsys.readouterr().out
    assert rc == 2
    assert "positive integer quantum" in out


def test_run_missing_workload(tmp_path, capsys):
    rc = cli.main(["run", "-a", "fcfs", "-w", str(tmp_path / "missing.json")])
    assert rc == 2
    assert "Cannot read workload" in capsys.readouterr().out


def test_run_unknown_algorithm(tmp_path, capsys):
    rc = cli.main(["run", "-a", "lottery", "-w", str(_write_workload(tmp_path))])
    assert rc == 2
    assert "Unknown scheduling policy" in capsys.readouterr().out


def test_compare_lists_every_algorithm(tmp_path, capsys):
    rc = cli.main(["compare", "-w", str(_write_workload(tmp_path)), "-q", "3"])
    out = capsys.readouterr().out
    assert rc == 0
    for label in ("FCFS", "SJF", "Priority", "Round Robin"):
        assert label in out


def test_prompt_jobs(monkeypatch):
    _feed(monkeypatch, ["2", "A", "5", "0", "1", "", "x", "0", "3", "2", "0"])
    jobs = cli.prompt_jobs(cli.Console())
    assert jobs == [
        Job("A", burst_time=5, arrival_time=0, priority=1),
        Job("P2", burst_time=3, arrival_time=2, priority=0),
    ]


def test_menu_with_entered_jobs(monkeypatch, capsys):
    _feed(
        monkeypatch,
        [
            "1", "P1", "10", "0", "0",  # one job
            "9",                        # invalid choice
            "4", "4",                   # round robin, quantum 4
            "5",                        # exit
        ],
    )
    rc = cli.main(["menu"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Invalid choice, please try again." in out
    assert "Round Robin" in out
    assert "Exiting..." in out


def test_menu_reports_bad_quantum_and_continues(tmp_path, monkeypatch, capsys):
    _feed(monkeypatch, ["4", "0", "1", "5"])
    rc = cli.main(["menu", "-w", str(_write_workload(tmp_path))])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Error:" in out
    assert "FCFS" in out
    assert "Exiting..." in out


def test_menu_exits_on_eof(tmp_path, monkeypatch, capsys):
    _feed(monkeypatch, [])
    rc = cli.main(["menu", "-w", str(_write_workload(tmp_path))])
    assert rc == 0
    assert "Exiting..." in capsys.readouterr().out


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_run_non_utf8_workload(tmp_path, capsys):
    p = tmp_path / "jobs.csv"
    p.write_bytes(b"name,burst_time\n\xff\xfe,3\n")
    rc = cli.main(["run", "-a", "fcfs", "-w", str(p)])
    assert rc == 2
    assert "not valid UTF-8" in capsys.readouterr().out
