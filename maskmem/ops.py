"""Operations produced by the program parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .constants import ADDRESS_MASK, ADDRESS_WIDTH, MASK_FLOATING, MASK_ONE, MASK_ZERO
from .region import Region


@dataclass(frozen=True)
class SetMask:
    """Ambient masks applied to every following write.

    ``or_mask`` has the ``1`` positions, ``and_mask`` clears the ``0``
    positions and ``floating_mask`` has the ``X`` positions.
    """

    or_mask: int = 0
    and_mask: int = ADDRESS_MASK
    floating_mask: int = 0

    @classmethod
    def from_pattern(cls, pattern: str) -> "SetMask":
        """Build masks from a pattern over ``0``/``1``/``X``, MSB first."""
        if len(pattern) != ADDRESS_WIDTH:
            raise ValueError(
                f"mask must have {ADDRESS_WIDTH} characters, got {len(pattern)}"
            )
        or_mask = 0
        and_mask = ADDRESS_MASK
        floating_mask = 0
        for index, char in enumerate(pattern):
            bit = 1 << (ADDRESS_WIDTH - 1 - index)
            if char == MASK_ZERO:
                and_mask &= ~bit
            elif char == MASK_ONE:
                or_mask |= bit
            elif char == MASK_FLOATING:
                floating_mask |= bit
            else:
                raise ValueError(f"invalid mask character {char!r}")
        return cls(or_mask=or_mask, and_mask=and_mask, floating_mask=floating_mask)

    def region_for(self, address: int) -> Region:
        """Region of addresses a write to ``address`` touches under this mask."""
        return Region.from_address(
            address & ADDRESS_MASK, self.or_mask, self.floating_mask
        )

    def pattern(self) -> str:
        chars = []
        for bit in reversed(range(ADDRESS_WIDTH)):
            if (self.floating_mask >> bit) & 1:
                chars.append(MASK_FLOATING)
            elif (self.or_mask >> bit) & 1:
                chars.append(MASK_ONE)
            else:
                chars.append(MASK_ZERO)
        return "".join(chars)


@dataclass(frozen=True)
class Write:
    address: int
    value: int

    def __post_init__(self) -> None:
        for name, field_value in (("address", self.address), ("value", self.value)):
            if field_value < 0 or field_value > ADDRESS_MASK:
                raise ValueError(
                    f"{name} {field_value} does not fit in {ADDRESS_WIDTH} bits"
                )


Operation = Union[SetMask, Write]


__all__ = ["SetMask", "Write", "Operation"]
