"""
Terminate running lifelines.

Finds processes whose command line contains a task label (for example
``reports:lifeline``) together with a runtime marker (``python`` by default)
and force kills them with SIGKILL.

Usage:
    from lifeline.process_terminator import terminate_lifelines

    terminate_lifelines("reports:lifeline")
"""

from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional, Sequence

import psutil

from .config import load_settings
from .process_snapshot import ProcessEntry, ProcessSnapshot, take_snapshot

logger = logging.getLogger(__name__)


def _console(message: str, *, suppress_output: bool) -> None:
    """Emit console output unless suppressed."""
    if not suppress_output:
        print(message)


def find_termination_targets(
    label: str,
    *,
    marker: str,
    snapshot: Sequence[ProcessEntry],
    exclude_pid: Optional[int],
) -> List[ProcessEntry]:
    """Return entries whose command contains both *label* and *marker*."""
    return [
        entry
        for entry in snapshot
        if label in entry.command and marker in entry.command and entry.pid != exclude_pid
    ]


def _kill_process(entry: ProcessEntry, *, label: str, suppress_output: bool) -> bool:
    """Send SIGKILL to *entry*; returns ``False`` when the process already exited."""
    try:
        process = psutil.Process(entry.pid)
        process.kill()
    except psutil.NoSuchProcess:
        _console(f"✅ Process {entry.pid} ({label}) no longer exists", suppress_output=suppress_output)
        logger.debug("%s process %s exited before it could be killed", label, entry.pid)
        return False
    except psutil.AccessDenied as access_exc:
        raise RuntimeError(f"Access denied while terminating {label} process {entry.pid}") from access_exc

    _console(f"🔪 Killed {label} process (PID {entry.pid}): {entry.command[:100]}", suppress_output=suppress_output)
    logger.info("Sent SIGKILL to %s process %s", label, entry.pid)
    return True


def terminate_lifelines(
    label: str,
    *,
    marker: Optional[str] = None,
    snapshot_provider: Optional[Callable[[], ProcessSnapshot]] = None,
    pid: Optional[int] = None,
) -> List[int]:
    """
    Force kill every process running *label*.

    Args:
        label: Text that identifies the processes, usually ``<namespace>:lifeline``
        marker: Runtime marker that must also appear in the command; defaults to settings
        snapshot_provider: Callable returning the process snapshot; defaults to ``take_snapshot``
        pid: PID of the caller, never targeted; defaults to ``os.getpid()``

    Returns:
        PIDs that were killed

    Raises:
        RuntimeError: If access is denied while killing a process
    """
    settings = load_settings()
    marker = settings.terminate_marker if marker is None else marker
    suppress_output = settings.quiet
    my_pid = os.getpid() if pid is None else pid

    snapshot = (snapshot_provider or take_snapshot)()
    if not snapshot:
        _console(f"No process data available; cannot terminate {label}", suppress_output=suppress_output)
        logger.warning("No process data available while terminating %s", label)
        return []

    targets = find_termination_targets(label, marker=marker, snapshot=snapshot, exclude_pid=my_pid)
    if not targets:
        _console(f"No {label} processes found", suppress_output=suppress_output)
        return []

    killed: List[int] = []
    for entry in targets:
        if _kill_process(entry, label=label, suppress_output=suppress_output):
            killed.append(entry.pid)
    return killed


__all__ = ["find_termination_targets", "terminate_lifelines"]
