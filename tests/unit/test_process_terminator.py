import psutil
import pytest

from lifeline import process_terminator
from lifeline.process_terminator import find_termination_targets, terminate_lifelines
from tests.helpers.snapshot_test_helper import canned_provider, make_snapshot

LIFELINE_ROWS = [
    (100, "/usr/bin/python3 /venv/bin/lifeline invoke jobs:registry reports:lifeline"),
    (101, "/usr/bin/python3 /venv/bin/lifeline invoke jobs:registry reports:terminate"),
    (102, "tail -f reports:lifeline.log"),
    (103, "/usr/bin/python3 /venv/bin/lifeline invoke jobs:registry reports:lifeline"),
    (104, "/usr/bin/python3 /venv/bin/lifeline invoke jobs:registry mail:lifeline"),
]


class FakeProcess:
    def __init__(self, pid, error=None):
        self.pid = pid
        self.error = error
        self.kill_called = False

    def kill(self):
        if self.error is not None:
            raise self.error
        self.kill_called = True


@pytest.fixture
def fake_processes(monkeypatch):
    processes = {}

    def process_factory(pid):
        return processes.setdefault(pid, FakeProcess(pid))

    monkeypatch.setattr(process_terminator.psutil, "Process", process_factory)
    return processes


def test_find_termination_targets_requires_label_and_marker():
    targets = find_termination_targets(
        "reports:lifeline",
        marker="python",
        snapshot=make_snapshot(LIFELINE_ROWS),
        exclude_pid=101,
    )

    assert [entry.pid for entry in targets] == [100, 103]


def test_find_termination_targets_excludes_caller():
    targets = find_termination_targets(
        "reports:lifeline",
        marker="python",
        snapshot=make_snapshot(LIFELINE_ROWS),
        exclude_pid=100,
    )

    assert [entry.pid for entry in targets] == [103]


def test_terminate_lifelines_kills_every_target(fake_processes, capsys):
    killed = terminate_lifelines("reports:lifeline", snapshot_provider=canned_provider(LIFELINE_ROWS), pid=101)

    assert killed == [100, 103]
    assert fake_processes[100].kill_called
    assert fake_processes[103].kill_called
    assert 104 not in fake_processes
    output = capsys.readouterr().out
    assert "Killed reports:lifeline process (PID 100)" in output
    assert "Killed reports:lifeline process (PID 103)" in output


def test_terminate_lifelines_uses_configured_marker(monkeypatch, fake_processes):
    monkeypatch.setenv("LIFELINE_TERMINATE_MARKER", "tail")

    killed = terminate_lifelines("reports:lifeline", snapshot_provider=canned_provider(LIFELINE_ROWS), pid=101)

    assert killed == [102]


def test_terminate_lifelines_reports_when_nothing_matches(fake_processes, capsys):
    killed = terminate_lifelines("billing:lifeline", snapshot_provider=canned_provider(LIFELINE_ROWS), pid=101)

    assert killed == []
    assert fake_processes == {}
    assert "No billing:lifeline processes found" in capsys.readouterr().out


def test_terminate_lifelines_quiet_suppresses_console(monkeypatch, fake_processes, capsys):
    monkeypatch.setenv("LIFELINE_QUIET", "1")

    terminate_lifelines("reports:lifeline", snapshot_provider=canned_provider(LIFELINE_ROWS), pid=101)

    assert capsys.readouterr().out == ""


def test_terminate_lifelines_without_process_data(fake_processes):
    assert terminate_lifelines("reports:lifeline", snapshot_provider=canned_provider(None), pid=101) == []


def test_terminate_lifelines_skips_vanished_process(fake_processes):
    fake_processes[100] = FakeProcess(100, error=psutil.NoSuchProcess(100))

    killed = terminate_lifelines("reports:lifeline", snapshot_provider=canned_provider(LIFELINE_ROWS), pid=101)

    assert killed == [103]


def test_terminate_lifelines_raises_on_access_denied(fake_processes):
    fake_processes[100] = FakeProcess(100, error=psutil.AccessDenied(100))

    with pytest.raises(RuntimeError, match="Access denied"):
        terminate_lifelines("reports:lifeline", snapshot_provider=canned_provider(LIFELINE_ROWS), pid=101)
