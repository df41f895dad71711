"""Shared constants for the masked memory decoders.

Addresses, values and masks all live in the same fixed-width space.
"""

# Width of every address, value and mask, in bits.
ADDRESS_WIDTH = 36

# All-ones mask covering the address space.
ADDRESS_MASK = (1 << ADDRESS_WIDTH) - 1

# Characters accepted in a mask pattern, most significant bit first.
MASK_ZERO = "0"
MASK_ONE = "1"
MASK_FLOATING = "X"
