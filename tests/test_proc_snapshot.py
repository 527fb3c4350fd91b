import io
from types import SimpleNamespace

import psutil
import pytest

from cmdtimer import proc_snapshot
from cmdtimer.proc_snapshot import (
    SNAPSHOT_HEADER,
    ProcessEntry,
    format_entry,
    list_processes,
    match_processes,
    print_snapshot,
)


def test_match_is_case_insensitive(fabricated_processes):
    matched = match_processes(fabricated_processes)
    assert [e.name for e in matched] == ["RiotClientServices", "LeagueClient"]


def test_match_keeps_enumeration_order():
    entries = [
        ProcessEntry(pid=9, name="league of legends"),
        ProcessEntry(pid=1, name="RIOT vanguard"),
    ]
    assert [e.pid for e in match_processes(entries)] == [9, 1]


def test_format_entry():
    line = format_entry(ProcessEntry(pid=42, name="LeagueClient", cpu_percent=3.14159, memory_kib=2048))
    assert line == (
        "PID: 42       Name: LeagueClient              CPU:   3.1%  Mem:     2048 KiB"
    )


def test_format_entry_placeholders():
    line = format_entry(ProcessEntry(pid=7, name="RiotClient"))
    assert "CPU:   n/a%" in line
    assert "Mem:      n/a KiB" in line


def test_print_snapshot(fabricated_processes):
    out = io.StringIO()

    count = print_snapshot(lister=lambda: fabricated_processes, out=out)

    lines = out.getvalue().splitlines()
    assert count == 2
    assert lines[0] == ""
    assert lines[1] == SNAPSHOT_HEADER
    assert len(lines) == 4
    assert "RiotClientServices" in lines[2]
    assert "LeagueClient" in lines[3]
    assert "notepad" not in out.getvalue()


def test_print_snapshot_tolerates_lister_failure(capsys):
    def lister():
        raise psutil.AccessDenied()

    out = io.StringIO()
    assert print_snapshot(lister=lister, out=out) == 0
    assert SNAPSHOT_HEADER in out.getvalue()
    assert "WARNING" in capsys.readouterr().err


def test_list_processes_handles_missing_attrs(monkeypatch):
    procs = [
        SimpleNamespace(info={
            "pid": 1, "name": "LeagueClient", "cpu_percent": 2.5,
            "memory_info": SimpleNamespace(rss=4096 * 1024),
        }),
        SimpleNamespace(info={"pid": 2, "name": None, "cpu_percent": None, "memory_info": None}),
    ]
    monkeypatch.setattr(proc_snapshot.psutil, "process_iter", lambda *a, **kw: iter(procs))

    entries = list_processes()

    assert entries == [
        ProcessEntry(pid=1, name="LeagueClient", cpu_percent=2.5, memory_kib=4096),
        ProcessEntry(pid=2, name="", cpu_percent=None, memory_kib=None),
    ]


def test_list_processes_real_snapshot():
    entries = list_processes()
    assert entries
    assert all(isinstance(e.pid, int) for e in entries)
