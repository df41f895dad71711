"""Parser turning program text into mask and write operations."""

from __future__ import annotations

import os
from typing import Iterable, List, Optional

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, VisitError

from .ops import Operation, SetMask, Write

GRAMMAR_PATH = os.path.join(os.path.dirname(__file__), "program.lark")


class ProgramError(Exception):
    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class ProgramTransformer(Transformer):
    def mask_stmt(self, items: List[Token]) -> SetMask:
        return SetMask.from_pattern(str(items[0]))

    def mem_stmt(self, items: List[Token]) -> Write:
        return Write(address=int(items[0]), value=int(items[1]))


class ProgramParser:
    """Compiled program grammar.

    Build one parser and reuse it for every program; compiling the grammar
    is the expensive part.
    """

    def __init__(self, grammar_path: str = GRAMMAR_PATH) -> None:
        with open(grammar_path, "r") as f:
            grammar = f.read()
        self._parser = Lark(grammar, parser="earley", maybe_placeholders=False)
        self._transformer = ProgramTransformer()

    def parse_line(self, line: str, line_number: Optional[int] = None) -> Operation:
        try:
            tree = self._parser.parse(line.strip())
            return self._transformer.transform(tree)
        except VisitError as e:
            raise ProgramError(str(e.orig_exc), line_number) from e
        except LarkError as e:
            raise ProgramError(f"invalid line {line.strip()!r}", line_number) from e

    def parse_lines(self, lines: Iterable[str]) -> List[Operation]:
        ops: List[Operation] = []
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            ops.append(self.parse_line(line, line_number))
        return ops

    def parse(self, source_text: str) -> List[Operation]:
        return self.parse_lines(source_text.splitlines())


__all__ = ["ProgramError", "ProgramParser", "ProgramTransformer"]
