"""
Command spawning and the timed run loop.

Each run is one spawn-and-wait cycle of the target command. On Windows the
command goes through cmd.exe so that builtins like `echo` work; everywhere
else the executable is invoked directly, without a shell.
"""

import os
import subprocess
import sys
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TextIO


@dataclass
class RunOutcome:
    """Result of one run"""
    exit_code: Optional[int]
    elapsed_s: float


def build_argv(cmd: Sequence[str], platform: str = os.name) -> List[str]:
    if platform == "nt":
        return ["cmd", "/C", *cmd]
    return list(cmd)


def run_once(cmd: Sequence[str]) -> RunOutcome:
    """
    Spawn the command once and block until it exits.

    Returns:
        RunOutcome with the exit code (None if the child was killed by a
        signal) and the wall-clock time in seconds.

    Raises:
        OSError: the command could not be launched.
    """
    argv = build_argv(cmd)
    start = time.perf_counter()
    proc = subprocess.run(argv)
    elapsed = time.perf_counter() - start

    # negative returncode == terminated by signal, no exit code
    code = proc.returncode if proc.returncode >= 0 else None
    return RunOutcome(exit_code=code, elapsed_s=elapsed)


def run_timed(
    cmd: Sequence[str],
    runs: int,
    runner: Callable[[Sequence[str]], RunOutcome] = run_once,
    out: Optional[TextIO] = None,
) -> List[RunOutcome]:
    """Run `cmd` `runs` times in order, printing each outcome as it lands."""
    if out is None:
        out = sys.stdout
    outcomes = []

    for _ in range(runs):
        outcome = runner(cmd)
        print(f"Command exited with: {outcome.exit_code}", file=out, flush=True)
        print(f"Elapsed time: {outcome.elapsed_s:.3f} seconds", file=out, flush=True)
        outcomes.append(outcome)

    return outcomes
