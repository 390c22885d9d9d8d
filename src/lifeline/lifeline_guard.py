"""
Lifeline guard.

Runs a block of work only when no other process on the host has the same
command string as the current process. Recurring jobs launched by cron can wrap
their body in ``guard`` so that a new invocation exits quietly while the
previous one is still running.

The process name comes from the process listing, so jobs must be launched with
a distinctive command line. Two projects that both run ``lifeline invoke
tasks:registry reports:lifeline`` WILL interfere with each other; prefix the
namespace with the project name.

Usage:
    from lifeline.lifeline_guard import guard

    guard(run_nightly_import)
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from .errors import MissingWorkError, ProcessDataUnavailableError, SelfNotFoundError
from .process_snapshot import ProcessEntry, ProcessSnapshot, take_snapshot

logger = logging.getLogger(__name__)

SnapshotProvider = Callable[[], ProcessSnapshot]


class GuardOutcome(Enum):
    EXECUTED = "executed"
    SKIPPED_DUPLICATE = "skipped-duplicate"


def find_self(snapshot: Sequence[ProcessEntry], pid: int) -> Optional[ProcessEntry]:
    """Return the first entry whose pid is *pid*."""
    return next((entry for entry in snapshot if entry.pid == pid), None)


def is_sole_instance(snapshot: ProcessSnapshot, pid: int) -> bool:
    """
    Decide whether *pid* is the only process running its command.

    Args:
        snapshot: Process entries to inspect
        pid: PID of the calling process

    Returns:
        ``True`` when no entry with a different pid shares the caller's command

    Raises:
        ProcessDataUnavailableError: If the snapshot is ``None`` or empty
        SelfNotFoundError: If no entry has the caller's pid
    """
    if not snapshot:
        raise ProcessDataUnavailableError()

    myself = find_self(snapshot, pid)
    if myself is None:
        raise SelfNotFoundError.for_pid(pid, snapshot)

    return not any(entry.pid != pid and entry.command == myself.command for entry in snapshot)


def guard(
    work: Optional[Callable[[], Any]] = None,
    *,
    pid: Optional[int] = None,
    snapshot_provider: Optional[SnapshotProvider] = None,
) -> GuardOutcome:
    """
    Execute *work* unless another process with the same command is running.

    Exceptions raised by *work* propagate unchanged.

    Args:
        work: Zero-argument callable to run
        pid: PID to treat as the current process; defaults to ``os.getpid()``
        snapshot_provider: Callable returning the process snapshot; defaults to ``take_snapshot``

    Returns:
        ``GuardOutcome.EXECUTED`` or ``GuardOutcome.SKIPPED_DUPLICATE``

    Raises:
        MissingWorkError: If no callable work is supplied
        ProcessDataUnavailableError: If no process data could be obtained
        SelfNotFoundError: If the current process is missing from the snapshot
    """
    if work is None or not callable(work):
        raise MissingWorkError("You must pass in a callable to be the body of the lifeline")

    my_pid = os.getpid() if pid is None else pid
    provider = snapshot_provider or take_snapshot
    snapshot = provider()
    logger.debug("Lifeline snapshot for PID %s has %d entries", my_pid, len(snapshot or ()))

    if not is_sole_instance(snapshot, my_pid):
        logger.info("Another process is already running the command of PID %s; skipping", my_pid)
        return GuardOutcome.SKIPPED_DUPLICATE

    logger.debug("PID %s is the only instance; executing work", my_pid)
    work()
    return GuardOutcome.EXECUTED


__all__ = ["GuardOutcome", "SnapshotProvider", "find_self", "guard", "is_sole_instance"]
