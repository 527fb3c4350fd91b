import pytest

from cmdtimer.proc_snapshot import ProcessEntry
from cmdtimer.runner import RunOutcome


class FakeRunner:
    """Stands in for run_once; hands out canned outcomes in order."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def __call__(self, cmd):
        self.calls.append(list(cmd))
        return self.outcomes[len(self.calls) - 1]


@pytest.fixture
def fake_runner():
    def _make(*outcomes):
        return FakeRunner(outcomes)
    return _make


@pytest.fixture
def fabricated_processes():
    return [
        ProcessEntry(pid=101, name="RiotClientServices", cpu_percent=1.25, memory_kib=20480),
        ProcessEntry(pid=202, name="LeagueClient", cpu_percent=12.0, memory_kib=512000),
        ProcessEntry(pid=303, name="notepad", cpu_percent=0.0, memory_kib=4096),
    ]
