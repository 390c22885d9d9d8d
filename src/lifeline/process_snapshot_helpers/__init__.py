"""Helpers for producing process snapshots."""

from .listing_parser import parse_listing_line, parse_process_listing
from .process_models import ListingSource, ProcessEntry, ProcessSnapshot
from .ps_listing import PsListingSource
from .psutil_listing import PsutilListingSource

__all__ = [
    "ListingSource",
    "ProcessEntry",
    "ProcessSnapshot",
    "PsListingSource",
    "PsutilListingSource",
    "parse_listing_line",
    "parse_process_listing",
]
