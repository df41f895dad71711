"""Sum memory written through floating address masks without expanding them."""

from .constants import ADDRESS_MASK, ADDRESS_WIDTH
from .decoder import (
    FloatingAddressMemory,
    ReferenceFloatingMemory,
    ValueMaskMemory,
    floating_address_sum,
    reference_floating_sum,
    value_mask_sum,
)
from .ledger import LedgerEntry, OverlapLedger
from .ops import Operation, SetMask, Write
from .parser import ProgramError, ProgramParser
from .region import Region, cardinality, intersect

__all__ = [
    "ADDRESS_MASK",
    "ADDRESS_WIDTH",
    "FloatingAddressMemory",
    "LedgerEntry",
    "Operation",
    "OverlapLedger",
    "ProgramError",
    "ProgramParser",
    "ReferenceFloatingMemory",
    "Region",
    "SetMask",
    "ValueMaskMemory",
    "Write",
    "cardinality",
    "floating_address_sum",
    "intersect",
    "reference_floating_sum",
    "value_mask_sum",
]
