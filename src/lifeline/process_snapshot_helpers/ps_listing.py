"""Process listing backed by the ``ps`` command."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional, Sequence

from .listing_parser import parse_process_listing
from .process_models import ProcessSnapshot

logger = logging.getLogger(__name__)


class PsListingSource:
    """Runs a ``ps``-style command and parses its output."""

    def __init__(self, command: Sequence[str]):
        self.command = tuple(command)

    def read_listing(self) -> Optional[str]:
        """Return raw listing text, or ``None`` when the command cannot be run."""
        try:
            completed = subprocess.run(
                self.command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.warning("Process listing command %r unavailable: %s", " ".join(self.command), exc)
            return None

        if completed.returncode != 0:
            logger.warning(
                "Process listing command %r exited with status %s: %s",
                " ".join(self.command),
                completed.returncode,
                completed.stderr.strip(),
            )
        return completed.stdout

    def snapshot(self) -> ProcessSnapshot:
        return parse_process_listing(self.read_listing())
