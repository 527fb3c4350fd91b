"""
Command timing tool

Purpose:
- Run an arbitrary command one or more times and measure wall-clock time per run
- Report the exit code and timing stats (human-readable or JSON)
- Then list any Riot / League processes currently running (single snapshot)

Usage:
  cmdtimer -n 5 -- LeagueClient.exe --headless
  cmdtimer --json --wait -- python -c "print('hi')"

Output:
  stdout - per-run lines, summary (or JSON document), process snapshot
"""

import argparse
import os
import sys
from typing import Callable, Iterable, List, Optional, Sequence, TextIO

from cmdtimer.proc_snapshot import ProcessEntry, list_processes, print_snapshot
from cmdtimer.report import RunResult
from cmdtimer.runner import RunOutcome, run_once, run_timed


WAIT_PROMPT = "Click what you need in the client, then press ENTER here to start"


class Colors:
    """ANSI color codes"""
    RED = "\033[91m"
    END = "\033[0m"


def positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid run count: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"run count must be >= 1, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="cmdtimer",
        description="Run a command N times and report exit code and timing stats",
    )
    ap.add_argument("-n", "--runs", type=positive_int, default=1,
                    help="How many times to run the command (default: 1)")
    ap.add_argument("--json", action="store_true",
                    help="Emit results in JSON")
    ap.add_argument("--wait", action="store_true",
                    help="Wait for ENTER before starting timing")
    ap.add_argument("cmd", nargs="*",
                    help="Command to run (everything after --)")
    return ap


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    """
    Parse options; everything after the first `--` belongs to the command.

    Exits with status 2 (argparse usage error) if no command is given.
    """
    ap = build_parser()
    argv = list(argv)
    if "--" in argv:
        idx = argv.index("--")
        args = ap.parse_args(argv[:idx])
        args.cmd = args.cmd + argv[idx + 1:]
    else:
        args = ap.parse_args(argv)

    if not args.cmd:
        ap.error("a command to run is required (pass it after --)")
    return args


def wait_for_enter(wait: bool, stdin: TextIO, stdout: TextIO) -> None:
    if not wait:
        return
    stdout.write(WAIT_PROMPT)
    stdout.flush()
    # one byte from the raw stream when there is one
    reader = getattr(stdin, "buffer", stdin)
    reader.read(1)  # blocks until ENTER


def main(
    argv: Optional[Sequence[str]] = None,
    runner: Callable[[Sequence[str]], RunOutcome] = run_once,
    lister: Callable[[], Iterable[ProcessEntry]] = list_processes,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    try:
        wait_for_enter(args.wait, stdin, stdout)
        outcomes: List[RunOutcome] = run_timed(args.cmd, args.runs, runner=runner, out=stdout)
    except OSError as e:
        print(f"{Colors.RED}ERROR: {e}{Colors.END}", file=sys.stderr)
        return 1

    result = RunResult.from_outcomes(outcomes)
    if args.json:
        print(result.render_json(), file=stdout)
    else:
        print(result.render_human(), file=stdout)

    print_snapshot(lister=lister, out=stdout)
    return 0


def _silence_stdout() -> None:
    # stdout reader went away; keep the interpreter from failing on exit flush
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def cli() -> None:
    try:
        status = main()
    except BrokenPipeError:
        _silence_stdout()
        status = 1
    sys.exit(status)


if __name__ == "__main__":
    cli()
