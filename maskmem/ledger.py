"""Overlap ledger: signed region entries that sum to the written memory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .region import Region, intersect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerEntry:
    """A region weighted by a signed coefficient.

    ``multiplier`` is not a memory value. Summed over every entry whose
    region contains an address, the multipliers give the value of the most
    recent write to that address (or 0 if nothing wrote it).
    """

    region: Region
    multiplier: int

    def weight(self) -> int:
        return self.multiplier * self.region.cardinality()


class OverlapLedger:
    """Accumulates floating writes without expanding their addresses.

    Each submit first cancels every existing entry on its overlap with the
    new region, then adds the new region. Entries fully covered by the new
    region are dropped instead of cancelled.
    """

    def __init__(self) -> None:
        self._entries: List[LedgerEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> Tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    def submit(self, region: Region, value: int) -> None:
        kept: List[LedgerEntry] = []
        corrections: List[LedgerEntry] = []

        # Only entries present before this call are scanned.
        for entry in self._entries:
            overlap = intersect(entry.region, region)
            if overlap is None:
                kept.append(entry)
            elif overlap == entry.region:
                continue
            else:
                kept.append(entry)
                corrections.append(LedgerEntry(overlap, -entry.multiplier))

        dropped = len(self._entries) - len(kept)
        kept.extend(corrections)
        kept.append(LedgerEntry(region, value))
        self._entries = kept

        logger.debug(
            "submit %s value=%d dropped=%d corrections=%d size=%d",
            region,
            value,
            dropped,
            len(corrections),
            len(self._entries),
        )

    def total(self) -> int:
        return sum(entry.weight() for entry in self._entries)


__all__ = ["LedgerEntry", "OverlapLedger"]
