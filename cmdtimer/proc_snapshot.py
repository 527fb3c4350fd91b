"""
Single snapshot of running processes, filtered to Riot / League clients.

The process list comes from an injectable lister (default: psutil), so the
filter and the formatting can be exercised with a fabricated list.
"""

import sys
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, TextIO

import psutil


PROCESS_KEYWORDS = ("riot", "league")
SNAPSHOT_HEADER = "Top Riot / League processes running:"


class Colors:
    """ANSI color codes"""
    YELLOW = "\033[93m"
    END = "\033[0m"


@dataclass
class ProcessEntry:
    pid: int
    name: str
    cpu_percent: Optional[float] = None
    memory_kib: Optional[int] = None


def list_processes() -> List[ProcessEntry]:
    """
    One pass over the OS process table.

    Attributes the OS refuses to expose come back as None; processes that
    disappear mid-iteration are skipped by process_iter itself.
    """
    entries = []
    for proc in psutil.process_iter(
        ["pid", "name", "cpu_percent", "memory_info"], ad_value=None
    ):
        info = proc.info
        mem = info.get("memory_info")
        entries.append(ProcessEntry(
            pid=info["pid"],
            name=info.get("name") or "",
            cpu_percent=info.get("cpu_percent"),
            memory_kib=mem.rss // 1024 if mem is not None else None,
        ))
    return entries


def match_processes(
    entries: Iterable[ProcessEntry],
    keywords: Sequence[str] = PROCESS_KEYWORDS,
) -> List[ProcessEntry]:
    """Case-insensitive substring match on the name; keeps enumeration order."""
    matched = []
    for entry in entries:
        name_lc = entry.name.lower()
        if any(k in name_lc for k in keywords):
            matched.append(entry)
    return matched


def format_entry(entry: ProcessEntry) -> str:
    cpu = f"{entry.cpu_percent:>5.1f}" if entry.cpu_percent is not None else f"{'n/a':>5}"
    mem = f"{entry.memory_kib:>8}" if entry.memory_kib is not None else f"{'n/a':>8}"
    return f"PID: {entry.pid:<8} Name: {entry.name:<25} CPU: {cpu}%  Mem: {mem} KiB"


def print_snapshot(
    lister: Callable[[], Iterable[ProcessEntry]] = list_processes,
    out: Optional[TextIO] = None,
    keywords: Sequence[str] = PROCESS_KEYWORDS,
) -> int:
    """
    Print the header and one line per matching process.

    Returns the number of matches. A failing lister is reported on stderr
    and treated as an empty snapshot.
    """
    if out is None:
        out = sys.stdout

    print(f"\n{SNAPSHOT_HEADER}", file=out)
    try:
        entries = list(lister())
    except (psutil.Error, OSError) as e:
        print(f"{Colors.YELLOW}WARNING: process snapshot unavailable: {e}{Colors.END}", file=sys.stderr)
        return 0

    matched = match_processes(entries, keywords)
    for entry in matched:
        print(format_entry(entry), file=out)
    return len(matched)
