"""
Process snapshots.

Takes a point-in-time view of the operating-system process table as a list of
``ProcessEntry`` values (pid + command string). Snapshots are produced fresh on
every call; nothing is cached.

Usage:
    from lifeline.process_snapshot import take_snapshot

    entries = take_snapshot()
    if entries is None:
        ...  # listing facility unavailable
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import PROCESS_SOURCE_PSUTIL, LifelineSettings, load_settings
from .process_snapshot_helpers import (
    ListingSource,
    ProcessEntry,
    ProcessSnapshot,
    PsListingSource,
    PsutilListingSource,
    parse_process_listing,
)

logger = logging.getLogger(__name__)


def resolve_listing_source(settings: Optional[LifelineSettings] = None) -> ListingSource:
    """Return the listing source selected by *settings* (``ps`` by default)."""
    settings = settings or load_settings()
    if settings.process_source == PROCESS_SOURCE_PSUTIL:
        return PsutilListingSource()
    return PsListingSource(settings.ps_command)


def take_snapshot(source: Optional[ListingSource] = None) -> ProcessSnapshot:
    """
    Capture the current process table.

    Args:
        source: Listing source to read from; resolved from settings when omitted

    Returns:
        Entries in listing order, or ``None`` when no listing output was obtained
    """
    source = source or resolve_listing_source()
    entries = source.snapshot()
    if entries is None:
        logger.warning("Process listing returned no output")
    return entries


__all__ = [
    "ProcessEntry",
    "ProcessSnapshot",
    "parse_process_listing",
    "resolve_listing_source",
    "take_snapshot",
]
