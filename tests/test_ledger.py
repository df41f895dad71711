from __future__ import annotations

import os
from typing import Dict, List, Tuple

from hypothesis import given, settings, strategies as st

from maskmem.ledger import LedgerEntry, OverlapLedger
from maskmem.region import Region

from .strategies import regions

MAX_EXAMPLES = int(os.getenv("MASKMEM_PROP_EXAMPLES", "200"))


def _last_write_wins(writes: List[Tuple[Region, int]]) -> int:
    cells: Dict[int, int] = {}
    for region, value in writes:
        for address in region.addresses():
            cells[address] = value
    return sum(cells.values())


def test_empty_ledger_totals_zero() -> None:
    ledger = OverlapLedger()
    assert ledger.total() == 0
    assert len(ledger) == 0


def test_contained_entry_is_removed() -> None:
    ledger = OverlapLedger()
    concrete = Region(fixed=26)
    covering = Region(fixed=16, floating=0b1011)

    ledger.submit(concrete, 7)
    ledger.submit(covering, 3)

    assert ledger.entries() == (LedgerEntry(covering, 3),)
    assert ledger.total() == 3 * 8


def test_disjoint_regions_accumulate() -> None:
    ledger = OverlapLedger()
    a = Region(fixed=0b0000, floating=0b0011)
    b = Region(fixed=0b1000, floating=0b0011)

    ledger.submit(a, 5)
    ledger.submit(b, 9)

    assert ledger.entries() == (LedgerEntry(a, 5), LedgerEntry(b, 9))
    assert ledger.total() == 5 * 4 + 9 * 4


def test_identical_rewrite_keeps_total() -> None:
    region = Region(fixed=0b100, floating=0b011)
    once = OverlapLedger()
    once.submit(region, 12)

    twice = OverlapLedger()
    twice.submit(region, 12)
    twice.submit(region, 12)

    assert twice.total() == once.total() == 48
    assert twice.entries() == (LedgerEntry(region, 12),)


def test_partial_overlap_adds_correction() -> None:
    ledger = OverlapLedger()
    first = Region(fixed=26, floating=0b100001)
    second = Region(fixed=16, floating=0b001011)

    ledger.submit(first, 100)
    ledger.submit(second, 1)

    assert ledger.entries() == (
        LedgerEntry(first, 100),
        LedgerEntry(Region(fixed=26, floating=0b1), -100),
        LedgerEntry(second, 1),
    )
    assert ledger.total() == 208


def test_corrections_are_themselves_corrected() -> None:
    # Addresses 0-6 end up as 30, 30, 20, 10, 30, 30, 20.
    writes = [
        (Region(fixed=0, floating=0b011), 10),
        (Region(fixed=0, floating=0b110), 20),
        (Region(fixed=0, floating=0b101), 30),
    ]
    ledger = OverlapLedger()
    for region, value in writes:
        ledger.submit(region, value)

    assert ledger.total() == _last_write_wins(writes) == 170
    # The third write cancels the second write's correction on address 0.
    assert LedgerEntry(Region(fixed=0), 10) in ledger.entries()
    assert len(ledger) == 7


def test_overlap_on_high_address_bits() -> None:
    top = 1 << 35
    writes = [
        (Region(fixed=top, floating=(1 << 34) | 1), 50),
        (Region(fixed=top | 1, floating=1 << 33), 7),
    ]
    ledger = OverlapLedger()
    for region, value in writes:
        ledger.submit(region, value)

    assert LedgerEntry(Region(fixed=top | 1), -50) in ledger.entries()
    assert ledger.total() == _last_write_wins(writes) == 3 * 50 + 2 * 7


def test_entries_added_during_submit_are_not_rescanned() -> None:
    ledger = OverlapLedger()
    ledger.submit(Region(fixed=0, floating=0b01), 4)
    ledger.submit(Region(fixed=0, floating=0b10), 6)

    # One correction for the single pre-existing entry, nothing more.
    assert len(ledger) == 3
    assert ledger.total() == 4 + 6 * 2


@given(writes=st.lists(st.tuples(regions(), st.integers(0, 1000)), max_size=20))
@settings(max_examples=MAX_EXAMPLES, deadline=None)
def test_total_matches_brute_force(writes: List[Tuple[Region, int]]) -> None:
    ledger = OverlapLedger()
    for region, value in writes:
        ledger.submit(region, value)
    assert ledger.total() == _last_write_wins(writes)
