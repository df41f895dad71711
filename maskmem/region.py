"""Masked address regions over the fixed-width address space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .constants import ADDRESS_MASK, ADDRESS_WIDTH, MASK_FLOATING, MASK_ONE, MASK_ZERO


@dataclass(frozen=True)
class Region:
    """A set of concrete addresses described by fixed and floating bits.

    ``fixed`` holds the value of every non-floating bit and is always 0 at
    floating positions. ``floating`` marks the wildcard positions; each one
    doubles the number of addresses in the region.
    """

    fixed: int
    floating: int = 0

    def __post_init__(self) -> None:
        if self.fixed & self.floating:
            raise ValueError(
                f"fixed bits 0x{self.fixed:09X} overlap floating bits 0x{self.floating:09X}"
            )
        if (self.fixed | self.floating) & ~ADDRESS_MASK:
            raise ValueError(f"region exceeds {ADDRESS_WIDTH}-bit address space")

    @classmethod
    def from_address(cls, address: int, or_mask: int, floating_mask: int) -> "Region":
        """Apply a mask to a raw address, clearing the floating positions."""
        return cls(fixed=(address | or_mask) & ~floating_mask, floating=floating_mask)

    @property
    def floating_count(self) -> int:
        return bin(self.floating).count("1")

    def cardinality(self) -> int:
        return 1 << self.floating_count

    def contains(self, address: int) -> bool:
        if address & ~ADDRESS_MASK:
            return False
        return address & ~self.floating == self.fixed

    def addresses(self) -> Iterator[int]:
        """Yield every concrete address in the region.

        Walks the subsets of ``floating`` in increasing order, so only use
        this on regions with a handful of floating bits.
        """
        subset = 0
        while True:
            yield self.fixed | subset
            if subset == self.floating:
                return
            subset = (subset - self.floating) & self.floating

    def pattern(self) -> str:
        chars = []
        for bit in reversed(range(ADDRESS_WIDTH)):
            if (self.floating >> bit) & 1:
                chars.append(MASK_FLOATING)
            elif (self.fixed >> bit) & 1:
                chars.append(MASK_ONE)
            else:
                chars.append(MASK_ZERO)
        return "".join(chars)

    def __str__(self) -> str:
        return self.pattern()


def intersect(a: Region, b: Region) -> Optional[Region]:
    """Return the region of addresses common to ``a`` and ``b``, if any."""
    both_fixed = ~a.floating & ~b.floating
    if a.fixed & both_fixed != b.fixed & both_fixed:
        return None
    return Region(fixed=a.fixed | b.fixed, floating=a.floating & b.floating)


def cardinality(region: Region) -> int:
    return region.cardinality()


__all__ = ["Region", "intersect", "cardinality"]
