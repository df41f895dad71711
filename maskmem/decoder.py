"""Decoders replaying mask and write operations against memory models."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional, Tuple, TypeVar

from .ledger import LedgerEntry, OverlapLedger
from .ops import Operation, SetMask, Write

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_MAX_FLOATING = 12

_MemoryT = TypeVar("_MemoryT", bound="MaskedMemory")


class MaskedMemory(ABC):
    """Common replay loop; subclasses decide what a write means."""

    def __init__(self) -> None:
        self.mask = SetMask()

    def set_mask(self, mask: SetMask) -> None:
        self.mask = mask

    @abstractmethod
    def write(self, address: int, value: int) -> None:
        """Store ``value`` at ``address`` under the current mask."""
        pass

    @abstractmethod
    def total(self) -> int:
        """Sum of every value currently in memory."""
        pass

    def apply(self, op: Operation) -> None:
        if isinstance(op, SetMask):
            self.set_mask(op)
        elif isinstance(op, Write):
            self.write(op.address, op.value)
        else:
            raise TypeError(f"unknown operation {op!r}")

    def replay(self: _MemoryT, ops: Iterable[Operation]) -> _MemoryT:
        count = 0
        for op in ops:
            self.apply(op)
            count += 1
        logger.debug("%s replayed %d operations", type(self).__name__, count)
        return self


class ValueMaskMemory(MaskedMemory):
    """The mask rewrites the stored value; addresses are used as given."""

    def __init__(self) -> None:
        super().__init__()
        self._cells: Dict[int, int] = {}

    def write(self, address: int, value: int) -> None:
        masked = (value & self.mask.and_mask) | self.mask.or_mask
        if masked == 0:
            self._cells.pop(address, None)
        else:
            self._cells[address] = masked

    def read(self, address: int) -> int:
        return self._cells.get(address, 0)

    def total(self) -> int:
        return sum(self._cells.values())


class FloatingAddressMemory(MaskedMemory):
    """The mask expands the address into a region tracked by a ledger."""

    def __init__(self) -> None:
        super().__init__()
        self.ledger = OverlapLedger()

    def write(self, address: int, value: int) -> None:
        self.ledger.submit(self.mask.region_for(address), value)

    def entries(self) -> Tuple[LedgerEntry, ...]:
        return self.ledger.entries()

    def total(self) -> int:
        return self.ledger.total()


class ReferenceFloatingMemory(MaskedMemory):
    """Expands every write into concrete addresses; last write wins.

    Only suitable for masks with few floating bits. Used to cross-check
    the ledger.
    """

    def __init__(self, max_floating: Optional[int] = None) -> None:
        super().__init__()
        self.max_floating = (
            DEFAULT_REFERENCE_MAX_FLOATING if max_floating is None else max_floating
        )
        self._cells: Dict[int, int] = {}

    def write(self, address: int, value: int) -> None:
        region = self.mask.region_for(address)
        if region.floating_count > self.max_floating:
            raise ValueError(
                f"region {region} has {region.floating_count} floating bits, "
                f"limit is {self.max_floating}"
            )
        for concrete in region.addresses():
            self._cells[concrete] = value

    def read(self, address: int) -> int:
        return self._cells.get(address, 0)

    def total(self) -> int:
        return sum(self._cells.values())


def value_mask_sum(ops: Iterable[Operation]) -> int:
    return ValueMaskMemory().replay(ops).total()


def floating_address_sum(ops: Iterable[Operation]) -> int:
    return FloatingAddressMemory().replay(ops).total()


def reference_floating_sum(
    ops: Iterable[Operation], max_floating: Optional[int] = None
) -> int:
    return ReferenceFloatingMemory(max_floating).replay(ops).total()


__all__ = [
    "MaskedMemory",
    "ValueMaskMemory",
    "FloatingAddressMemory",
    "ReferenceFloatingMemory",
    "value_mask_sum",
    "floating_address_sum",
    "reference_floating_sum",
    "DEFAULT_REFERENCE_MAX_FLOATING",
]
