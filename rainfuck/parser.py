from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple

from .lexer import Token


# === Operations ===


class Operation:
    pass


@dataclass(frozen=True)
class MoveRight(Operation):
    pass


@dataclass(frozen=True)
class MoveLeft(Operation):
    pass


@dataclass(frozen=True)
class Increment(Operation):
    pass


@dataclass(frozen=True)
class Decrement(Operation):
    pass


@dataclass(frozen=True)
class Output(Operation):
    pass


@dataclass(frozen=True)
class Input(Operation):
    pass


@dataclass
class Loop(Operation):
    body: List[Operation] = field(default_factory=list)


_LEAF_OPERATIONS = {
    Token.MOVE_RIGHT: MoveRight(),
    Token.MOVE_LEFT: MoveLeft(),
    Token.INCREMENT: Increment(),
    Token.DECREMENT: Decrement(),
    Token.OUTPUT: Output(),
    Token.INPUT: Input(),
}


# === Diagnostics ===


class DiagnosticKind(str, Enum):
    UNMATCHED_OPEN = "unmatched_open"
    UNMATCHED_CLOSE = "unmatched_close"


@dataclass(frozen=True)
class ParseDiagnostic:
    kind: DiagnosticKind
    position: int

    @property
    def message(self) -> str:
        if self.kind is DiagnosticKind.UNMATCHED_OPEN:
            return f"loop starting at #{self.position} has no end"
        return f"loop ending at #{self.position} has no start"


@dataclass
class ParseResult:
    operations: List[Operation]
    diagnostics: List[ParseDiagnostic]

    @property
    def ok(self) -> bool:
        return not self.diagnostics


# === Parser ===


def parse(tokens: Sequence[Token]) -> ParseResult:
    """Resolve bracket pairs in ``tokens`` into nested :class:`Loop` operations.

    Unbalanced brackets do not stop parsing. Each one is recorded as a
    :class:`ParseDiagnostic` (positions are token indices); an unterminated
    loop body is dropped. Open loops are kept on an explicit stack, so nesting
    depth is not limited by the interpreter's recursion limit.
    """
    operations: List[Operation] = []
    diagnostics: List[ParseDiagnostic] = []
    # (position of the "[", body collected so far) for every open loop
    open_loops: List[Tuple[int, List[Operation]]] = []

    for index, token in enumerate(tokens):
        current = open_loops[-1][1] if open_loops else operations
        if token is Token.LOOP_OPEN:
            open_loops.append((index, []))
        elif token is Token.LOOP_CLOSE:
            if not open_loops:
                diagnostics.append(ParseDiagnostic(DiagnosticKind.UNMATCHED_CLOSE, index))
                continue
            _, body = open_loops.pop()
            parent = open_loops[-1][1] if open_loops else operations
            parent.append(Loop(body))
        else:
            current.append(_LEAF_OPERATIONS[token])

    if open_loops:
        # the outermost unclosed loop swallows everything after it
        diagnostics.append(ParseDiagnostic(DiagnosticKind.UNMATCHED_OPEN, open_loops[0][0]))

    return ParseResult(operations=operations, diagnostics=diagnostics)


__all__ = [
    "Operation",
    "MoveRight",
    "MoveLeft",
    "Increment",
    "Decrement",
    "Output",
    "Input",
    "Loop",
    "DiagnosticKind",
    "ParseDiagnostic",
    "ParseResult",
    "parse",
]
