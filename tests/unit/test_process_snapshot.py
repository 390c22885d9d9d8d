import os
import shutil
from types import SimpleNamespace

import pytest

from lifeline.config import LifelineSettings, load_settings
from lifeline.process_snapshot import ProcessEntry, resolve_listing_source, take_snapshot
from lifeline.process_snapshot_helpers import PsListingSource, PsutilListingSource


def test_resolve_listing_source_defaults_to_ps():
    source = resolve_listing_source()

    assert isinstance(source, PsListingSource)
    assert source.command == ("ps", "ax", "-o", "pid,command")


def test_resolve_listing_source_honours_psutil_setting(monkeypatch):
    monkeypatch.setenv("LIFELINE_PROCESS_SOURCE", "psutil")

    assert isinstance(resolve_listing_source(), PsutilListingSource)
    assert isinstance(resolve_listing_source(load_settings()), PsutilListingSource)


def test_resolve_listing_source_uses_configured_ps_command():
    settings = LifelineSettings(ps_command=("ps", "-eo", "pid,args"))

    assert resolve_listing_source(settings).command == ("ps", "-eo", "pid,args")


def test_take_snapshot_reads_from_given_source():
    source = SimpleNamespace(snapshot=lambda: [ProcessEntry(pid=3, command="job")])

    assert take_snapshot(source) == [ProcessEntry(pid=3, command="job")]


def test_take_snapshot_returns_none_when_source_has_no_output():
    source = SimpleNamespace(snapshot=lambda: None)

    assert take_snapshot(source) is None


def test_take_snapshot_is_not_cached():
    calls = []

    def snapshot():
        calls.append(1)
        return [ProcessEntry(pid=len(calls), command="job")]

    source = SimpleNamespace(snapshot=snapshot)

    assert take_snapshot(source) != take_snapshot(source)
    assert len(calls) == 2


@pytest.mark.skipif(shutil.which("ps") is None, reason="ps command not available")
def test_live_ps_snapshot_contains_current_process():
    entries = take_snapshot()

    assert isinstance(entries, list)
    assert all(isinstance(entry.pid, int) and entry.pid > 0 for entry in entries)
    assert all(isinstance(entry.command, str) and entry.command for entry in entries)
    assert any(entry.pid == os.getpid() for entry in entries)
