"""Parse textual ``ps``-style output into process entries."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .process_models import ProcessEntry

logger = logging.getLogger(__name__)

# <optional leading whitespace><pid digits><one whitespace><command>
_LISTING_LINE = re.compile(r"^\s*(\d+)\s(.+)$")


def parse_listing_line(line: str) -> Optional[ProcessEntry]:
    """Return the entry described by *line*, or ``None`` when it does not match."""
    match = _LISTING_LINE.match(line)
    if match is None:
        return None
    pid = int(match.group(1))
    command = match.group(2).strip()
    if pid <= 0 or not command:
        return None
    return ProcessEntry(pid=pid, command=command)


def parse_process_listing(text: Optional[str]) -> Optional[List[ProcessEntry]]:
    """
    Convert process listing output into entries, preserving listing order.

    Args:
        text: Raw listing output, or ``None`` when the listing facility was unavailable

    Returns:
        Parsed entries, or ``None`` when *text* is ``None``. Lines that do not
        match the listing format (headers, blanks) are dropped.
    """
    if text is None:
        return None

    entries: List[ProcessEntry] = []
    dropped = 0
    for line in text.splitlines():
        entry = parse_listing_line(line)
        if entry is None:
            dropped += 1
            continue
        entries.append(entry)

    logger.debug("Parsed %d process entries (%d lines dropped)", len(entries), dropped)
    return entries
