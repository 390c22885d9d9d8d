from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class ProcessEntry:
    """One row of the live process table at snapshot time."""

    pid: int
    command: str


ProcessSnapshot = Optional[List[ProcessEntry]]


class ListingSource(Protocol):
    """Anything that can produce a fresh process snapshot."""

    def snapshot(self) -> ProcessSnapshot: ...
