from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, BinaryIO, List, Optional, Sequence, TextIO

from .errors import InputError, MemoryOverflow, PointerOverflow, StepLimitExceeded
from .parser import (
    Decrement,
    Increment,
    Input,
    Loop,
    MoveLeft,
    MoveRight,
    Operation,
    Output,
)

TAPE_SIZE = 30000


@dataclass
class MachineState:
    tape_length: int = TAPE_SIZE
    cell_max: int = 255
    cell_min: int = 0
    input_stream: Optional[BinaryIO] = None

    tape: List[int] = field(init=False, repr=False)
    pointer: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.tape_length <= 0:
            raise ValueError("tape_length must be positive")
        self.tape = [self.cell_min] * self.tape_length
        self.pointer = 0

    @property
    def cell(self) -> int:
        return self.tape[self.pointer]

    def move(self, delta: int) -> None:
        target = self.pointer + delta
        if target < 0 or target >= self.tape_length:
            raise PointerOverflow(target)
        self.pointer = target

    def add(self, delta: int) -> None:
        value = self.tape[self.pointer] + delta
        if value < self.cell_min or value > self.cell_max:
            raise MemoryOverflow(self.pointer, value)
        self.tape[self.pointer] = value

    def read_byte(self) -> None:
        """Store the next input byte in the current cell; 0 at end of input."""
        stream = self.input_stream if self.input_stream is not None else sys.stdin.buffer
        try:
            data = stream.read(1)
        except (OSError, ValueError) as exc:
            raise InputError(exc) from exc
        self.tape[self.pointer] = data[0] if data else 0

    def window(self, radius: int = 10) -> tuple[int, List[int]]:
        start = max(0, self.pointer - radius)
        end = min(self.tape_length, self.pointer + radius + 1)
        return start, self.tape[start:end].copy()


class Executor:
    """Runs an operation tree against a :class:`MachineState`.

    The first failing operation raises, which unwinds every enclosing loop.
    """

    def __init__(
        self,
        state: MachineState,
        output: Optional[TextIO] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        self.state = state
        self.output = output
        self.max_steps = max_steps
        self.steps = 0

    def execute(self, operations: Sequence[Operation]) -> None:
        """Run ``operations`` to completion.

        Loop bodies are tracked as ``[operations, index]`` frames on an explicit
        stack, so nesting depth is not limited by the recursion limit. A frame
        whose index reaches the end of its body re-checks the guard of the
        loop that owns it.
        """
        state = self.state
        frames: List[List[Any]] = [[operations, 0]]

        while frames:
            frame = frames[-1]
            ops, index = frame
            if index == len(ops):
                frames.pop()
                if frames:
                    self._count_step()
                    if state.cell != 0:
                        frames.append([ops, 0])
                    else:
                        frames[-1][1] += 1
                continue

            op = ops[index]
            self._count_step()
            if isinstance(op, Loop):
                if state.cell != 0:
                    frames.append([op.body, 0])
                else:
                    frame[1] += 1
                continue

            if isinstance(op, MoveRight):
                state.move(1)
            elif isinstance(op, MoveLeft):
                state.move(-1)
            elif isinstance(op, Increment):
                state.add(1)
            elif isinstance(op, Decrement):
                state.add(-1)
            elif isinstance(op, Output):
                self._write(chr(state.cell))
            elif isinstance(op, Input):
                state.read_byte()
            else:
                raise TypeError(f"Unsupported operation: {type(op).__name__}")
            frame[1] += 1

    def _count_step(self) -> None:
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise StepLimitExceeded(self.max_steps)

    def _write(self, char: str) -> None:
        stream = self.output if self.output is not None else sys.stdout
        stream.write(char)
        stream.flush()


__all__ = ["TAPE_SIZE", "MachineState", "Executor"]
