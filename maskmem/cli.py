#!/usr/bin/env python3
import logging
import sys
from typing import List

from plumbum import cli  # type: ignore[import-untyped]

from .config import load_config
from .decoder import floating_address_sum, reference_floating_sum, value_mask_sum
from .ops import Operation, SetMask, Write
from .parser import ProgramError, ProgramParser

logger = logging.getLogger(__name__)


def _max_floating(ops: List[Operation]) -> int:
    """Widest floating mask in effect for any write."""
    mask = SetMask()
    widest = 0
    for op in ops:
        if isinstance(op, SetMask):
            mask = op
        elif isinstance(op, Write):
            widest = max(widest, bin(mask.floating_mask).count("1"))
    return widest


class MaskmemCLI(cli.Application):
    """Replays a mask/mem program and prints the sum of memory for both decoders."""

    PROGNAME = "maskmem"
    VERSION = "1.0.0"

    verify = cli.Flag(
        ["--verify"],
        help="Cross-check the floating sum against a brute-force expansion",
    )
    verbose = cli.Flag(["-v", "--verbose"], help="Enable debug logging")

    def main(self, input_file: cli.ExistingFile = None) -> None:
        config = load_config()
        if self.verbose or config.trace:
            logging.basicConfig(
                level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
            )

        if input_file:
            with open(input_file, "r") as f:
                source_text = f.read()
        else:
            source_text = sys.stdin.read()

        try:
            ops = ProgramParser().parse(source_text)
        except ProgramError as e:
            print(f"Parse Error: {e}", file=sys.stderr)
            sys.exit(1)

        logger.debug("parsed %d operations", len(ops))
        print(f"Part1 mem sum: {value_mask_sum(ops)}")
        floating_sum = floating_address_sum(ops)
        print(f"Part2 mem sum: {floating_sum}")

        if not self.verify:
            return

        widest = _max_floating(ops)
        if widest > config.verify_max_floating:
            print(
                f"Skipping verification: masks float {widest} bits, "
                f"limit is {config.verify_max_floating}",
                file=sys.stderr,
            )
            return

        expected = reference_floating_sum(ops, config.verify_max_floating)
        if expected != floating_sum:
            print(
                f"Verification failed: brute force sum is {expected}",
                file=sys.stderr,
            )
            sys.exit(1)
        print("Verification passed.")


if __name__ == "__main__":
    MaskmemCLI.run()
