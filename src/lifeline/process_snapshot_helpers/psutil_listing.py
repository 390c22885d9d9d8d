"""Process listing backed by ``psutil.process_iter``."""

from __future__ import annotations

import logging
from typing import Any, List

import psutil

from .process_models import ProcessEntry, ProcessSnapshot

logger = logging.getLogger(__name__)


def _command_for(info: dict[str, Any]) -> str:
    """Join argv into a command string, falling back to the process name."""
    cmdline = info.get("cmdline")
    if isinstance(cmdline, list) and cmdline:
        return " ".join(str(arg) for arg in cmdline).strip()
    name = info.get("name")
    if name is None:
        return ""
    return str(name).strip()


class PsutilListingSource:
    """Builds snapshots directly from psutil without shelling out."""

    def snapshot(self) -> ProcessSnapshot:
        entries: List[ProcessEntry] = []
        try:
            for proc in psutil.process_iter(["pid", "name", "cmdline"]):
                try:
                    pid = proc.info["pid"]
                    command = _command_for(proc.info)
                except (psutil.NoSuchProcess, psutil.AccessDenied):
                    continue
                if not pid or pid <= 0 or not command:
                    continue
                entries.append(ProcessEntry(pid=int(pid), command=command))
        except (psutil.Error, OSError):
            logger.exception("Unable to enumerate processes with psutil")
            return None

        logger.debug("psutil listed %d processes", len(entries))
        return entries
